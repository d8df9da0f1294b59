"""Record types exchanged between the data source, the engine and the renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

LatLon = Tuple[float, float]
SmoothedPath = List[LatLon]


@dataclass(frozen=True)
class Position:
    """A single position report as delivered by the upstream data source."""

    latitude: float
    longitude: float
    timestamp: datetime
    altitude: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None
    vertical_rate: Optional[float] = None
    callsign: Optional[str] = None


Track = Sequence[Position]


@dataclass(frozen=True)
class HoverEvent:
    """One contiguous loitering episode of an aircraft."""

    aircraft_id: str
    encoded_path: str
    hover_duration: float
    occurred_at: datetime


@dataclass(frozen=True)
class AircraftHoverProfile:
    aircraft_id: str
    total_hover_duration: float
    episode_count: int


@dataclass(frozen=True)
class HoverSummary:
    """Per-aircraft profiles in first-seen order plus the ranked aircraft ids."""

    profiles: Dict[str, AircraftHoverProfile] = field(default_factory=dict)
    ranking: List[str] = field(default_factory=list)

    def top(self, n: int) -> List[str]:
        """Return the ``n`` highest ranked aircraft ids."""

        if n <= 0:
            return []
        return self.ranking[:n]


@dataclass(frozen=True)
class HeatPoint:
    lat: float
    lon: float


@dataclass(frozen=True)
class DroppedEvent:
    """A hover event left out of the heat surface because its path failed to decode."""

    index: int
    aircraft_id: str
    reason: str


@dataclass
class HeatSurface:
    """Decoded heat points plus the events that had to be dropped.

    Iterating or indexing the surface walks its points, so callers that only
    want the point sequence can use it directly.
    """

    points: List[HeatPoint] = field(default_factory=list)
    dropped: List[DroppedEvent] = field(default_factory=list)

    def __iter__(self) -> Iterator[HeatPoint]:
        return iter(self.points)

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, index: int) -> HeatPoint:
        return self.points[index]
