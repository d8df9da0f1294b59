"""Heat surface input from historical hover events.

Decodes each event's compact polyline into points and flattens them into one
unit-weight point cloud. Every occurrence is kept; density binning is left to
the renderer.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

import pandas as pd

from .models import DroppedEvent, HeatPoint, HeatSurface, HoverEvent
from .polyline import DecodeError, decode


def build_heat_points(events: Optional[Iterable[HoverEvent]]) -> HeatSurface:
    """Decode and flatten event paths, isolating events whose path is malformed."""

    surface = HeatSurface()
    for index, event in enumerate(events or []):
        try:
            decoded = decode(event.encoded_path)
        except DecodeError as exc:
            logging.warning("Dropping hover event %d (aircraft %s): %s", index, event.aircraft_id, exc)
            surface.dropped.append(DroppedEvent(index=index, aircraft_id=event.aircraft_id, reason=str(exc)))
            continue
        surface.points.extend(HeatPoint(lat, lon) for lat, lon in decoded)

    if surface.dropped:
        logging.warning("Dropped %d hover events with undecodable paths", len(surface.dropped))
    logging.info("Built %d heat points", len(surface.points))
    return surface


def heat_layer_input(points: Iterable[HeatPoint]) -> List[List[float]]:
    """Return ``[lat, lon, weight]`` triples as heat-layer renderers expect them."""

    return [[point.lat, point.lon, 1.0] for point in points]


def heat_points_frame(points: Iterable[HeatPoint]) -> pd.DataFrame:
    return pd.DataFrame(heat_layer_input(points), columns=["latitude", "longitude", "weight"])
