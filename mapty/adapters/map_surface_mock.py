from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from mapty.domain.entities import Position
from mapty.domain.ports import LocationClickHandler, MapSurface


@dataclass
class MapSurfaceMock(MapSurface):
    """In-memory map surface recording markers, popups, and view changes."""

    center: Optional[Position] = None
    zoom: Optional[int] = None
    markers: Dict[str, Position] = field(default_factory=dict)
    popups: Dict[str, str] = field(default_factory=dict)
    circles: List[Tuple[Position, float]] = field(default_factory=list)
    views: List[Tuple[Position, int]] = field(default_factory=list)
    handlers: List[LocationClickHandler] = field(default_factory=list)

    def initialize(self, center: Position, zoom: int) -> None:
        self.center = center
        self.zoom = zoom

    def add_marker(self, key: str, position: Position) -> None:
        self.markers[key] = position

    def set_popup(self, key: str, content: str) -> None:
        if key in self.markers:
            self.popups[key] = content

    def remove_marker(self, key: str) -> None:
        self.markers.pop(key, None)
        self.popups.pop(key, None)

    def marker_keys(self) -> List[str]:
        return list(self.markers)

    def add_circle(self, center: Position, radius_m: float) -> None:
        self.circles.append((center, radius_m))

    def set_view(self, center: Position, zoom: int) -> None:
        self.center = center
        self.zoom = zoom
        self.views.append((center, zoom))

    def on_location_clicked(self, handler: LocationClickHandler) -> None:
        self.handlers.append(handler)

    def click(self, lat: float, lng: float) -> None:
        """Simulate a user click on the map."""
        for handler in list(self.handlers):
            handler(lat, lng)


__all__ = ["MapSurfaceMock"]
