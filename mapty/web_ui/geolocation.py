"""Browser geolocation as a ``PositionProvider`` for the NiceGUI runtime."""

from __future__ import annotations

import logging
from typing import Any

from nicegui import ui

from mapty.domain.entities import Position
from mapty.domain.errors import PositionUnavailable
from mapty.domain.ports import PositionProvider

_GEOLOCATION_JS = """
return await new Promise((resolve) => {
  if (!navigator.geolocation) {
    resolve({error: 'Geolocation is not supported'});
    return;
  }
  navigator.geolocation.getCurrentPosition(
    (p) => resolve({latitude: p.coords.latitude, longitude: p.coords.longitude}),
    (err) => resolve({error: err.message || String(err.code)}),
    {timeout: %d},
  );
});
"""


def position_from_payload(payload: Any) -> Position:
    """Convert the browser's ``{latitude, longitude}`` answer to a position.

    Raises:
        PositionUnavailable: For denials, errors, and malformed answers.
    """
    if not isinstance(payload, dict) or payload.get("error"):
        detail = payload.get("error") if isinstance(payload, dict) else None
        logging.getLogger(__name__).info("Geolocation refused: %s", detail)
        raise PositionUnavailable()
    try:
        return Position(float(payload["latitude"]), float(payload["longitude"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise PositionUnavailable() from exc


class BrowserGeolocation(PositionProvider):
    """Ask the connected browser for ``navigator.geolocation`` once."""

    def __init__(self, timeout_s: float = 20.0) -> None:
        self.timeout_s = timeout_s

    async def current_position(self) -> Position:
        code = _GEOLOCATION_JS % int(self.timeout_s * 1000)
        try:
            payload = await ui.run_javascript(code, timeout=self.timeout_s + 5)
        except TimeoutError as exc:
            raise PositionUnavailable() from exc
        return position_from_payload(payload)


__all__ = ["BrowserGeolocation", "position_from_payload"]
