"""Domain package exports for value objects and aggregates."""

from .collection import LogCollection
from .entities import PlaceName, Position, TravelLog, TravelMode, marker_key_for
from .factory import IdSource, TravelLogFactory, describe

__all__ = [
    "IdSource",
    "LogCollection",
    "PlaceName",
    "Position",
    "TravelLog",
    "TravelLogFactory",
    "TravelMode",
    "describe",
    "marker_key_for",
]
