"""Track smoothing, hover aggregation and heat surfaces for aircraft maps.

The package turns raw position reports and hover-event records into the
geometry and statistics a map client draws: smoothed flight paths, per-aircraft
hover profiles with a "top offenders" ranking, and heatmap point clouds decoded
from compact polylines.
"""

from .aggregation import aggregate, events_since, total_hover_duration
from .config import InvalidConfiguration
from .heat import build_heat_points
from .models import AircraftHoverProfile, HeatPoint, HoverEvent, HoverSummary, Position
from .polyline import DecodeError, decode, encode
from .smoothing import SmoothingOptions, smooth

__all__ = [
    "AircraftHoverProfile",
    "DecodeError",
    "HeatPoint",
    "HoverEvent",
    "HoverSummary",
    "InvalidConfiguration",
    "Position",
    "SmoothingOptions",
    "aggregate",
    "build_heat_points",
    "decode",
    "encode",
    "events_since",
    "smooth",
    "total_hover_duration",
]
