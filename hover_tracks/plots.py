"""Optional plotting utilities for debugging.

Provides simple matplotlib helpers to compare raw positions with their smoothed
paths and to preview the hover heat surface before handing it to the map.
"""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def plot_smoothed_paths(raw: pd.DataFrame, smoothed: pd.DataFrame, output_path: Path) -> None:
    """Plot raw reports as dots and the smoothed curve per aircraft."""

    if smoothed.empty:
        return

    fig, ax = plt.subplots(figsize=(6, 6))
    for aircraft_id, path in smoothed.groupby("aircraft_id", sort=False):
        line = ax.plot(path["longitude"], path["latitude"], "-", label=str(aircraft_id))[0]
        reports = raw[raw["aircraft_id"] == aircraft_id]
        ax.plot(reports["longitude"], reports["latitude"], "o", markersize=3, color=line.get_color())
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title("Smoothed tracks")
    ax.legend(loc="best", fontsize=8)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)


def plot_heat_points(points: pd.DataFrame, output_path: Path, gridsize: int = 50) -> None:
    """Plot heat point density as a hexbin map."""

    if points.empty:
        return

    fig, ax = plt.subplots(figsize=(6, 5))
    hb = ax.hexbin(points["longitude"], points["latitude"], C=points["weight"], reduce_C_function=sum, gridsize=gridsize, mincnt=1)
    fig.colorbar(hb, ax=ax, label="Hover points")
    ax.set_xlabel("Longitude")
    ax.set_ylabel("Latitude")
    ax.set_title(f"Hover heat surface ({len(points)} points)")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150)
    plt.close(fig)
