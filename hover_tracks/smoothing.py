"""Bezier smoothing of raw aircraft tracks for rendering.

Fits a piecewise cubic Bezier spline through every reported position and
samples it at a fixed number of parameters, so the output length depends on
the configured resolution rather than on how many reports the track holds.
A batch helper applies the same smoothing per aircraft over a positions table.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Tuple

import numpy as np
import pandas as pd

from .config import InvalidConfiguration
from .models import Position, SmoothedPath

DEFAULT_SHARPNESS = 0.95
DEFAULT_RESOLUTION = 500


@dataclass(frozen=True)
class SmoothingOptions:
    """Spline parameters.

    ``sharpness`` in (0, 1] scales how far each control handle is pulled from
    the vertex toward the neighbouring segment midpoints. Lower values keep the
    handles near the vertices, so the curve hugs the straight segments between
    reports; higher values round the corners off. ``resolution`` is the
    number of sampled intervals along the whole curve; the path holds
    ``resolution + 1`` points.
    """

    sharpness: float = DEFAULT_SHARPNESS
    resolution: int = DEFAULT_RESOLUTION

    def __post_init__(self) -> None:
        sharpness = self.sharpness
        if isinstance(sharpness, bool) or not isinstance(sharpness, numbers.Real) or not 0.0 < sharpness <= 1.0:
            raise InvalidConfiguration(f"sharpness must be in (0, 1], got {sharpness!r}")
        resolution = self.resolution
        if isinstance(resolution, bool) or not isinstance(resolution, (int, np.integer)) or resolution <= 0:
            raise InvalidConfiguration(f"resolution must be a positive integer, got {resolution!r}")

    @classmethod
    def from_config(cls, cfg: Mapping[str, Any] | None) -> "SmoothingOptions":
        """Build options from the ``smoothing`` config block."""

        cfg = cfg or {}
        return cls(
            sharpness=cfg.get("sharpness", DEFAULT_SHARPNESS),
            resolution=cfg.get("resolution", DEFAULT_RESOLUTION),
        )


def _resolve_options(options: SmoothingOptions | Mapping[str, Any] | None) -> SmoothingOptions:
    if options is None:
        return SmoothingOptions()
    if isinstance(options, SmoothingOptions):
        return options
    if isinstance(options, Mapping):
        return SmoothingOptions.from_config(options)
    raise InvalidConfiguration(f"Unsupported smoothing options: {options!r}")


def _as_coordinates(track: Sequence[Any]) -> np.ndarray:
    """Return an (N, 2) lat/lon array from Positions or (lat, lon) pairs."""

    coords: List[Tuple[float, float]] = []
    for item in track:
        if isinstance(item, Position):
            coords.append((float(item.latitude), float(item.longitude)))
        else:
            coords.append((float(item[0]), float(item[1])))
    if not coords:
        return np.empty((0, 2), dtype=float)
    return np.asarray(coords, dtype=float)


def _distinct_points(coords: np.ndarray) -> np.ndarray:
    """Drop non-finite rows and consecutive duplicates (zero-length segments)."""

    finite = coords[np.isfinite(coords).all(axis=1)]
    if len(finite) < len(coords):
        logging.debug("Dropped %d non-finite positions before smoothing", len(coords) - len(finite))
    if len(finite) < 2:
        return finite
    keep = np.ones(len(finite), dtype=bool)
    keep[1:] = np.any(np.diff(finite, axis=0) != 0.0, axis=1)
    return finite[keep]


def _control_handles(points: np.ndarray, sharpness: float) -> Tuple[np.ndarray, np.ndarray]:
    """Return (incoming, outgoing) control handles for every vertex."""

    incoming = points.copy()
    outgoing = points.copy()
    if len(points) > 2:
        centers = (points[:-1] + points[1:]) / 2.0
        inner = points[1:-1]
        # Shift the pair of adjacent midpoints so their mean lands on the vertex.
        offset = inner - (centers[:-1] + centers[1:]) / 2.0
        incoming[1:-1] = (1.0 - sharpness) * inner + sharpness * (centers[:-1] + offset)
        outgoing[1:-1] = (1.0 - sharpness) * inner + sharpness * (centers[1:] + offset)
    return incoming, outgoing


def smooth(
    track: Sequence[Any],
    options: SmoothingOptions | Mapping[str, Any] | None = None,
) -> SmoothedPath:
    """Fit a Bezier spline through ``track`` and sample it.

    Returns an empty path when fewer than two distinct positions remain; a
    stationary or single-report aircraft has no curve to draw.
    """

    opts = _resolve_options(options)
    points = _distinct_points(_as_coordinates(track))
    if len(points) < 2:
        return []

    incoming, outgoing = _control_handles(points, opts.sharpness)
    n_segments = len(points) - 1

    t = np.linspace(0.0, 1.0, opts.resolution + 1) * n_segments
    segment = np.minimum(np.floor(t).astype(int), n_segments - 1)
    local = (t - segment)[:, None]
    inv = 1.0 - local

    curve = (
        points[segment + 1] * local**3
        + incoming[segment + 1] * (3.0 * local**2 * inv)
        + outgoing[segment] * (3.0 * local * inv**2)
        + points[segment] * inv**3
    )
    return [(float(lat), float(lon)) for lat, lon in curve]


def smooth_tracks(
    df: pd.DataFrame,
    options: SmoothingOptions | Mapping[str, Any] | None = None,
) -> pd.DataFrame:
    """
    For each aircraft (first-seen order), order positions by timestamp and smooth them.
    Returns rows of aircraft_id, step, latitude, longitude.
    """

    opts = _resolve_options(options)
    columns = ["aircraft_id", "step", "latitude", "longitude"]
    if df.empty:
        return pd.DataFrame(columns=columns)

    outputs: List[pd.DataFrame] = []
    for aircraft_id, track in df.groupby("aircraft_id", sort=False):
        track_sorted = track.sort_values("timestamp", kind="mergesort")
        path = smooth(list(zip(track_sorted["latitude"], track_sorted["longitude"])), opts)
        if not path:
            logging.info("Skipping aircraft %s: fewer than 2 distinct positions", aircraft_id)
            continue
        lats, lons = zip(*path)
        resampled: Dict[str, Any] = {
            "aircraft_id": aircraft_id,
            "step": np.arange(len(path), dtype=int),
            "latitude": lats,
            "longitude": lons,
        }
        outputs.append(pd.DataFrame(resampled))

    if not outputs:
        return pd.DataFrame(columns=columns)

    result = pd.concat(outputs, ignore_index=True)
    logging.info("Smoothed %d tracks into %d path points", len(outputs), len(result))
    return result
