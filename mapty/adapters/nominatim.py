"""Reverse geocoding adapter backed by the OpenStreetMap Nominatim API.

Implements ``NameResolver`` with ``requests``. The blocking HTTP call runs in
a worker thread so the UI event loop keeps dispatching while a lookup is in
flight; each ``resolve`` call is independent of every other.

Call context:
    - Invoked by ``mapty.usecases.resolve_place_name.ResolvePlaceName``.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Mapping, Optional

from mapty.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    describe_failure,
    read_payload,
)
from mapty.adapters.http_client import HttpConfig, RetryingSession
from mapty.domain.entities import PlaceName, Position
from mapty.domain.ports import NameResolver

DEFAULT_BASE_URL = "https://nominatim.openstreetmap.org"
_DROP_SUFFIX = "Tehsil"


def _address_parts(address: Any) -> List[str]:
    if not isinstance(address, Mapping):
        return []
    parts: List[str] = []
    for value in address.values():
        if isinstance(value, (str, int, float)) and not isinstance(value, bool):
            text = str(value).strip()
            if text:
                parts.append(text)
    return parts


def place_name_from_payload(payload: Any, position: Position) -> PlaceName:
    """Reduce a reverse-lookup payload to a :class:`PlaceName`.

    The short name joins the first two address components with a comma and
    drops a trailing ``Tehsil`` (Indian sub-district suffix). Missing pieces
    fall back to the display name, then to the raw coordinates.
    """
    data = payload if isinstance(payload, Mapping) else {}
    display = data.get("display_name")
    display_name = display.strip() if isinstance(display, str) else ""

    short_name = ",".join(_address_parts(data.get("address"))[:2])
    if short_name.endswith(_DROP_SUFFIX):
        short_name = short_name[: -len(_DROP_SUFFIX)].rstrip(" ,")

    fallback = position.label()
    return PlaceName(
        display_name=display_name or short_name or fallback,
        short_name=short_name or display_name or fallback,
    )


class NominatimResolver(NameResolver):
    """Resolve coordinates via ``GET /reverse?lat=..&lon=..&format=json``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        cfg: Optional[HttpConfig] = None,
        session: Optional[RetryingSession] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.http = session or RetryingSession(cfg or HttpConfig())
        self._log = logging.getLogger(__name__)

    async def resolve(self, position: Position) -> PlaceName:
        return await asyncio.to_thread(self.lookup, position)

    def lookup(self, position: Position) -> PlaceName:
        """Blocking lookup.

        Raises:
            ApiTimeoutError: Every attempt timed out or could not connect.
            ApiClientError: The service answered 4xx or reported an error body.
            ApiServerError: The service answered 5xx.
        """
        url = f"{self.base_url}/reverse"
        resp = self.http.get(
            url,
            params={"lat": position.lat, "lon": position.lng, "format": "json"},
        )
        ctx = f"Reverse lookup {position.label()}"
        status = int(getattr(resp, "status_code", 0) or 0)
        if status >= 500:
            payload = read_payload(resp)
            raise ApiServerError(describe_failure(ctx, status, payload), status=status, payload=payload, url=url)
        if status >= 400:
            payload = read_payload(resp)
            raise ApiClientError(describe_failure(ctx, status, payload), status=status, payload=payload, url=url)
        try:
            payload = resp.json()
        except ValueError as exc:
            raise ApiError(f"{ctx}: response is not JSON", status=status, url=url) from exc
        if isinstance(payload, Mapping) and payload.get("error") and not payload.get("display_name"):
            raise ApiClientError(describe_failure(ctx, status, payload), status=status, payload=payload, url=url)
        self._log.debug("%s resolved", ctx)
        return place_name_from_payload(payload, position)


__all__ = ["DEFAULT_BASE_URL", "NominatimResolver", "place_name_from_payload"]
