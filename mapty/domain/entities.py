from __future__ import annotations

"""Domain value objects shared across adapters, use-cases, and view models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TravelMode(Enum):
    """Mode of travel with its fixed display label."""

    WALK = "🚶‍♂️Walk"
    CYCLE = "🚴‍♀️Cycle"
    BIKE = "🛵Bike"
    CAR = "🚖Car"
    BUS = "🚍Bus"
    TRAIN = "🚅Train"
    FLIGHT = "🛫Flight"

    @property
    def label(self) -> str:
        return self.value

    @property
    def title(self) -> str:
        """Canonical name as shown in the mode selector, e.g. ``Walk``."""
        return self.name.capitalize()

    @classmethod
    def parse(cls, raw: object) -> Optional["TravelMode"]:
        """Resolve a canonical name (any case) or an exact label; ``None`` if unknown."""
        if isinstance(raw, cls):
            return raw
        text = str(raw or "").strip()
        if not text:
            return None
        for mode in cls:
            if text == mode.value or text.upper() == mode.name:
                return mode
        return None


@dataclass(frozen=True)
class Position:
    """Geographic coordinate pair in decimal degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not -90.0 <= self.lat <= 90.0:
            raise ValueError("Latitude must be within [-90, 90].")
        if not -180.0 <= self.lng <= 180.0:
            raise ValueError("Longitude must be within [-180, 180].")

    def label(self) -> str:
        return f"{self.lat:.4f}, {self.lng:.4f}"


@dataclass(frozen=True)
class PlaceName:
    """Result of a reverse lookup, reduced to the parts the app consumes."""

    display_name: str
    """Full human-readable name, used as marker popup content."""
    short_name: str
    """Compact ``"first,second"`` address form used to pre-fill the destination."""


@dataclass(frozen=True)
class TravelLog:
    """One recorded trip. Built by ``TravelLogFactory``; never mutated."""

    id: int
    from_place: str
    to_place: str
    distance: float
    """Kilometers, strictly positive."""
    duration: float
    """Hours, strictly positive."""
    mode: TravelMode
    lat: float
    lng: float
    created_at: datetime
    description: str

    @property
    def position(self) -> Position:
        return Position(self.lat, self.lng)

    @property
    def marker_key(self) -> str:
        return marker_key_for(self.id)


def marker_key_for(log_id: int) -> str:
    """Map-surface key of the marker that belongs to ``log_id``."""
    return f"log-{log_id}"


__all__ = [
    "PlaceName",
    "Position",
    "TravelLog",
    "TravelMode",
    "marker_key_for",
]
