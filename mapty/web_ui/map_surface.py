"""Leaflet-backed ``MapSurface`` for the NiceGUI runtime.

Wraps a ``ui.leaflet`` element created hidden at page build time; the map is
shown once the controller initializes it at the user's position.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from nicegui import events, ui

from mapty.domain.entities import Position
from mapty.domain.ports import LocationClickHandler, MapSurface

POPUP_OPTIONS: Dict[str, Any] = {
    "maxWidth": 250,
    "minWidth": 100,
    "autoClose": False,
    "closeOnClick": False,
    "className": "travel-popup",
}


class LeafletMapSurface(MapSurface):
    """Keep Leaflet markers addressable by the controller's marker keys."""

    def __init__(self, leaflet: ui.leaflet) -> None:
        self._log = logging.getLogger(__name__)
        self.leaflet = leaflet
        self._markers: Dict[str, Any] = {}
        self._handlers: List[LocationClickHandler] = []
        self.leaflet.on("map-click", self._on_map_click)

    def initialize(self, center: Position, zoom: int) -> None:
        self.leaflet.set_center((center.lat, center.lng))
        self.leaflet.set_zoom(zoom)
        self.leaflet.set_visibility(True)
        # tiles were laid out while hidden
        self.leaflet.run_map_method("invalidateSize")

    def add_marker(self, key: str, position: Position) -> None:
        self.remove_marker(key)
        self._markers[key] = self.leaflet.marker(latlng=(position.lat, position.lng))

    def set_popup(self, key: str, content: str) -> None:
        marker = self._markers.get(key)
        if marker is None:
            return
        marker.run_method("bindPopup", content, POPUP_OPTIONS)
        marker.run_method("openPopup")

    def remove_marker(self, key: str) -> None:
        marker = self._markers.pop(key, None)
        if marker is not None:
            self.leaflet.remove_layer(marker)

    def marker_keys(self) -> List[str]:
        return list(self._markers)

    def add_circle(self, center: Position, radius_m: float) -> None:
        self.leaflet.generic_layer(
            name="circle",
            args=[[center.lat, center.lng], {"color": "red", "radius": radius_m, "fillOpacity": 0}],
        )

    def set_view(self, center: Position, zoom: int) -> None:
        self.leaflet.set_center((center.lat, center.lng))
        self.leaflet.set_zoom(zoom)

    def on_location_clicked(self, handler: LocationClickHandler) -> None:
        self._handlers.append(handler)

    def _on_map_click(self, e: events.GenericEventArguments) -> None:
        latlng = (e.args or {}).get("latlng") or {}
        try:
            lat, lng = float(latlng["lat"]), float(latlng["lng"])
        except (KeyError, TypeError, ValueError):
            self._log.debug("Ignoring map click without coordinates: %r", e.args)
            return
        # Leaflet reports unwrapped longitudes after panning across the antimeridian
        lng = ((lng + 180.0) % 360.0) - 180.0
        for handler in list(self._handlers):
            handler(lat, lng)


__all__ = ["LeafletMapSurface"]
