from __future__ import annotations

from typing import Callable, List, Protocol, Sequence

from .entities import PlaceName, Position, TravelLog
from .errors import UseCaseError

LocationClickHandler = Callable[[float, float], None]


# ---- Ports (Hexagonal boundaries) ----
class MapSurface(Protocol):
    """Interactive map widget. Markers are addressed by string keys."""

    def initialize(self, center: Position, zoom: int) -> None: ...
    def add_marker(self, key: str, position: Position) -> None: ...
    def set_popup(self, key: str, content: str) -> None: ...  # no-op for unknown keys
    def remove_marker(self, key: str) -> None: ...  # no-op for unknown keys
    def marker_keys(self) -> List[str]: ...
    def add_circle(self, center: Position, radius_m: float) -> None: ...
    def set_view(self, center: Position, zoom: int) -> None: ...
    def on_location_clicked(self, handler: LocationClickHandler) -> None: ...


class NameResolver(Protocol):
    """Coordinate -> place name lookup (reverse geocoding)."""

    async def resolve(self, position: Position) -> PlaceName: ...


class PositionProvider(Protocol):
    """One-shot current position; raises ``PositionUnavailable`` on denial."""

    async def current_position(self) -> Position: ...


class LogStore(Protocol):
    """Durable record holding the whole travel log collection."""

    def save(self, logs: Sequence[TravelLog]) -> None: ...
    def load(self) -> List[TravelLog]: ...  # [] when absent or malformed
    def clear(self) -> None: ...


class Notifier(Protocol):
    """User-facing notices (toasts)."""

    def notify(self, message: str, level: str = "info") -> None: ...  # info|positive|warning|negative


__all__ = [
    "LocationClickHandler",
    "LogStore",
    "MapSurface",
    "NameResolver",
    "Notifier",
    "PositionProvider",
    "UseCaseError",
]
