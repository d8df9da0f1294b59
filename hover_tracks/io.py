"""Input/output helpers for the hover tracks pipeline.

Covers loading exported position histories and hover-event records (renaming
data-API field names to the engine's columns), required-column checks,
timestamp parsing and CSV saving.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

import pandas as pd

from .models import HoverEvent, Position

COLUMN_ALIASES: Dict[str, str] = {
    "icao24": "aircraft_id",
    "routePolyline": "encoded_path",
    "hoverTime": "hover_duration",
    "time": "timestamp",
    "baro_altitude": "altitude",
    "true_track": "heading",
}

POSITION_COLUMNS: List[str] = ["aircraft_id", "timestamp", "latitude", "longitude"]
EVENT_COLUMNS: List[str] = ["aircraft_id", "encoded_path", "hover_duration", "occurred_at"]
NUMERIC_POSITION_COLUMNS: List[str] = ["altitude", "speed", "heading", "vertical_rate"]
OPTIONAL_POSITION_COLUMNS: List[str] = [*NUMERIC_POSITION_COLUMNS, "callsign"]


def _apply_aliases(df: pd.DataFrame) -> pd.DataFrame:
    renames = {src: dst for src, dst in COLUMN_ALIASES.items() if src in df.columns and dst not in df.columns}
    return df.rename(columns=renames) if renames else df


def ensure_required_columns(df: pd.DataFrame, required: List[str]) -> pd.DataFrame:
    """Validate that the DataFrame contains the required columns."""

    missing = [col for col in required if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    return df


def parse_timestamps(values: pd.Series) -> pd.Series:
    """Parse unix seconds or ISO strings into UTC timestamps."""

    numeric = pd.to_numeric(values, errors="coerce")
    if len(values) and numeric.notna().all():
        return pd.to_datetime(numeric, unit="s", utc=True)
    # Exports mix second, sub-second and date-only stamps.
    return pd.to_datetime(values, utc=True, format="ISO8601")


def load_positions(path: str | Path) -> pd.DataFrame:
    """Load a positions CSV with one row per report."""

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Positions file not found: {path}")

    # Read as text so ICAO addresses such as "000001" keep their leading zeros.
    df = _apply_aliases(pd.read_csv(path, dtype=str))
    df = ensure_required_columns(df, POSITION_COLUMNS)
    df["latitude"] = pd.to_numeric(df["latitude"], errors="raise")
    df["longitude"] = pd.to_numeric(df["longitude"], errors="raise")
    for col in NUMERIC_POSITION_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce")
    df["timestamp"] = parse_timestamps(df["timestamp"])
    logging.info("Loaded %d positions for %d aircraft from %s", len(df), df["aircraft_id"].nunique(), path)
    return df


def _optional(value):
    return None if pd.isna(value) else value


def positions_to_track(df: pd.DataFrame) -> List[Position]:
    """Convert position rows into Position records, keeping row order."""

    track: List[Position] = []
    for row in df.to_dict("records"):
        extras = {col: _optional(row[col]) for col in OPTIONAL_POSITION_COLUMNS if col in row}
        track.append(
            Position(
                latitude=float(row["latitude"]),
                longitude=float(row["longitude"]),
                timestamp=pd.Timestamp(row["timestamp"]).to_pydatetime(),
                **extras,
            )
        )
    return track


def events_from_frame(df: pd.DataFrame) -> List[HoverEvent]:
    """Build HoverEvent records from a table of hover events."""

    df = ensure_required_columns(_apply_aliases(df), EVENT_COLUMNS)
    if df.empty:
        return []
    durations = pd.to_numeric(df["hover_duration"], errors="raise").astype(float)
    occurred = parse_timestamps(df["occurred_at"])
    return [
        HoverEvent(
            aircraft_id=str(aircraft_id),
            encoded_path=encoded_path,
            hover_duration=float(duration),
            occurred_at=stamp.to_pydatetime(),
        )
        for aircraft_id, encoded_path, duration, stamp in zip(
            df["aircraft_id"], df["encoded_path"], durations, occurred
        )
    ]


def load_hover_events(path: str | Path) -> List[HoverEvent]:
    """Load hover events from CSV, JSON or JSON lines.

    Encoded paths are read verbatim as text: polyline strings can look like
    numbers or NA markers to a type-sniffing reader.
    """

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Hover events file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".jsonl":
        df = pd.read_json(path, lines=True, dtype=False, convert_dates=False)
    elif suffix == ".json":
        df = pd.read_json(path, dtype=False, convert_dates=False)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)

    events = events_from_frame(df)
    logging.info("Loaded %d hover events from %s", len(events), path)
    return events


def save_dataframe(df: pd.DataFrame, path: str | Path) -> None:
    """Persist a DataFrame to CSV."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    logging.info("Saved %d rows to %s", len(df), path)
