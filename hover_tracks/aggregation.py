"""Hover aggregation per aircraft.

Groups hover events by aircraft, folds each group into a profile with its
total hover duration and episode count, and ranks aircraft for the "top
offenders" list. Durations are summed with ``math.fsum`` so long look-back
windows do not accumulate rounding error.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Iterable, List, Optional

import pandas as pd

from .config import InvalidConfiguration
from .models import AircraftHoverProfile, HoverEvent, HoverSummary

RANK_CRITERIA = ("episode_count", "total_hover_duration")


def _events_frame(events: Iterable[HoverEvent]) -> pd.DataFrame:
    rows = [{"aircraft_id": e.aircraft_id, "hover_duration": float(e.hover_duration)} for e in events]
    return pd.DataFrame(rows, columns=["aircraft_id", "hover_duration"])


def aggregate(events: Optional[Iterable[HoverEvent]], rank_by: str = "episode_count") -> HoverSummary:
    """
    Group events by aircraft_id and rank aircraft by ``rank_by`` descending.
    Ties go to the lexicographically lower aircraft_id; profiles keep first-seen order.
    """

    if rank_by not in RANK_CRITERIA:
        raise InvalidConfiguration(f"Unsupported ranking criterion: {rank_by}")

    frame = _events_frame(events or [])
    if frame.empty:
        return HoverSummary()

    grouped = frame.groupby("aircraft_id", sort=False, dropna=False)["hover_duration"]
    stats = pd.DataFrame(
        {
            "total_hover_duration": grouped.agg(math.fsum),
            "episode_count": grouped.size(),
        }
    ).reset_index()

    profiles = {
        row.aircraft_id: AircraftHoverProfile(
            aircraft_id=row.aircraft_id,
            total_hover_duration=float(row.total_hover_duration),
            episode_count=int(row.episode_count),
        )
        for row in stats.itertuples(index=False)
    }

    ranked = stats.sort_values([rank_by, "aircraft_id"], ascending=[False, True])
    ranking: List[str] = ranked["aircraft_id"].tolist()
    logging.debug("Aggregated %d hover events into %d profiles", len(frame), len(profiles))
    return HoverSummary(profiles=profiles, ranking=ranking)


def total_hover_duration(events: Optional[Iterable[HoverEvent]]) -> float:
    """Sum hover_duration over every event, regardless of aircraft."""

    return math.fsum(float(e.hover_duration) for e in (events or []))


def _utc(value: datetime) -> pd.Timestamp:
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is None:
        return stamp.tz_localize("UTC")
    return stamp.tz_convert("UTC")


def events_since(events: Optional[Iterable[HoverEvent]], start: datetime) -> List[HoverEvent]:
    """Keep events that occurred at or after ``start`` (naive datetimes are UTC)."""

    start_utc = _utc(start)
    return [e for e in (events or []) if _utc(e.occurred_at) >= start_utc]


def profiles_frame(summary: HoverSummary) -> pd.DataFrame:
    """Flatten a summary into a ranked table for export."""

    rows = []
    for rank, aircraft_id in enumerate(summary.ranking, start=1):
        profile = summary.profiles[aircraft_id]
        rows.append(
            {
                "rank": rank,
                "aircraft_id": aircraft_id,
                "episode_count": profile.episode_count,
                "total_hover_duration": profile.total_hover_duration,
            }
        )
    return pd.DataFrame(rows, columns=["rank", "aircraft_id", "episode_count", "total_hover_duration"])
