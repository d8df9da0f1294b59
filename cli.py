"""CLI entry point for the hover tracks pipeline.

Orchestrates loading exported positions and hover events, smoothing tracks,
aggregating hover profiles, building the heat surface, and optional plotting.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

from hover_tracks.aggregation import aggregate, events_since, profiles_frame, total_hover_duration
from hover_tracks.config import get_nested, load_config
from hover_tracks.heat import build_heat_points, heat_points_frame
from hover_tracks.io import load_hover_events, load_positions, save_dataframe
from hover_tracks.models import HoverEvent
from hover_tracks.smoothing import SmoothingOptions, smooth_tracks


def configure_logging(log_cfg: Dict[str, object]) -> None:
    """Configure root logger with both file and console handlers."""

    log_dir = Path(log_cfg.get("dir", "logs"))
    log_dir.mkdir(parents=True, exist_ok=True)
    filename = log_cfg.get("filename", "hover_tracks.log")
    log_path = log_dir / filename
    level_name = str(log_cfg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s - %(levelname)s - %(message)s"
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)

    file_handler = logging.FileHandler(log_path, mode="w", encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(fmt))
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(fmt))

    root.addHandler(file_handler)
    root.addHandler(stream_handler)
    root.info("Logging to %s (level=%s)", log_path, level_name)


def _reference_time(value: Any) -> datetime:
    """Resolve the look-back anchor: a configured timestamp or now (UTC)."""

    if value is None:
        return datetime.now(timezone.utc)
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        stamp = stamp.tz_localize("UTC")
    return stamp.to_pydatetime()


def _window(events: List[HoverEvent], window_days: Any, reference: datetime) -> List[HoverEvent]:
    if not window_days:
        return events
    start = reference - timedelta(days=float(window_days))
    selected = events_since(events, start)
    logging.info("Selected %d of %d hover events since %s", len(selected), len(events), start.isoformat())
    return selected


def main(config_path: str = "config/hover_tracks.yaml") -> None:
    cfg = load_config(config_path)

    configure_logging(get_nested(cfg, ["logging"], {}) or {})

    # Validate options before touching any input.
    options = SmoothingOptions.from_config(get_nested(cfg, ["smoothing"], {}))
    rank_by = str(get_nested(cfg, ["hover", "rank_by"], "episode_count"))

    output_dir = Path(get_nested(cfg, ["output", "dir"], "output"))
    csv_dir = output_dir / "csv"
    plots_dir = output_dir / "figures"
    save_plots = bool(get_nested(cfg, ["output", "save_plots"], False))
    logging.info("Writing outputs to %s", output_dir)

    positions_csv = get_nested(cfg, ["input", "positions_csv"], None)
    if positions_csv:
        positions = load_positions(positions_csv)
        smoothed = smooth_tracks(positions, options)
        save_dataframe(smoothed, csv_dir / "smoothed_paths.csv")
        if save_plots:
            from hover_tracks.plots import plot_smoothed_paths

            plot_smoothed_paths(positions, smoothed, plots_dir / "smoothed_paths.png")

    events_path = get_nested(cfg, ["input", "hover_events"], None)
    if not events_path:
        logging.info("No hover events configured; skipping hover summary and heat surface.")
        return

    events = load_hover_events(events_path)
    reference = _reference_time(get_nested(cfg, ["hover", "reference_time"], None))

    recent = _window(events, get_nested(cfg, ["hover", "window_days"], 7), reference)
    summary = aggregate(recent, rank_by=rank_by)
    logging.info(
        "Aircraft hovered for %.0f s across %d episodes",
        total_hover_duration(recent),
        len(recent),
    )
    top_n = int(get_nested(cfg, ["hover", "top_n"], 5))
    if summary.ranking:
        logging.info("Top offenders: %s", ", ".join(summary.top(top_n)))
    else:
        logging.info("Nothing has hovered in the area during the window.")
    save_dataframe(profiles_frame(summary), csv_dir / "hover_profiles.csv")

    history = _window(events, get_nested(cfg, ["heatmap", "window_days"], 30), reference)
    surface = build_heat_points(history)
    points = heat_points_frame(surface.points)
    save_dataframe(points, csv_dir / "heat_points.csv")
    if surface.dropped:
        dropped = pd.DataFrame([vars(d) for d in surface.dropped])
        save_dataframe(dropped, csv_dir / "dropped_events.csv")

    if save_plots:
        from hover_tracks.plots import plot_heat_points

        gridsize = int(get_nested(cfg, ["heatmap", "gridsize"], 50))
        plot_heat_points(points, plots_dir / "heat_surface.png", gridsize=gridsize)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Hover tracks smoothing and aggregation pipeline.")
    parser.add_argument(
        "-c",
        "--config",
        default="config/hover_tracks.yaml",
        help="Path to YAML config file.",
    )
    args = parser.parse_args()
    main(args.config)
