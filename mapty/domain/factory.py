from __future__ import annotations

"""Validation and construction of travel logs from raw form input."""

import math
import time
from datetime import datetime
from typing import Any, Callable, Container, List, Optional

from .entities import TravelLog, TravelMode
from .errors import ValidationError

_MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def describe(to_place: str, created_at: datetime) -> str:
    """Return the list heading for a log, e.g. ``For Park on 19 October``."""
    return f"For {to_place} on {created_at.day} {_MONTHS[created_at.month - 1]}"


def _now() -> datetime:
    return datetime.now().astimezone()


class IdSource:
    """Millisecond-timestamp ids that never repeat within a process.

    Two creations inside the same millisecond get consecutive ids instead of
    the same wall-clock value.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def next_id(self, taken: Container[int] = ()) -> int:
        candidate = max(int(self._clock() * 1000), self._last + 1)
        while candidate in taken:
            candidate += 1
        self._last = candidate
        return candidate


def _positive_number(value: Any) -> Optional[float]:
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def _coordinate(value: Any, limit: float) -> Optional[float]:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or abs(number) > limit:
        return None
    return number


class TravelLogFactory:
    """Validate raw entry input and build immutable :class:`TravelLog` values."""

    def __init__(
        self,
        *,
        ids: Optional[IdSource] = None,
        now: Callable[[], datetime] = _now,
    ) -> None:
        self._ids = ids or IdSource()
        self._now = now

    def create(
        self,
        from_place: Any,
        to_place: Any,
        distance: Any,
        duration: Any,
        mode: Any,
        lat: Any,
        lng: Any,
        *,
        taken: Container[int] = (),
    ) -> TravelLog:
        """Build a travel log or raise :class:`ValidationError`.

        Args:
            from_place: Origin name; must be non-empty after trimming.
            to_place: Destination name; must be non-empty after trimming.
            distance: Kilometers, number or numeric text, strictly positive.
            duration: Hours, number or numeric text, strictly positive.
            mode: Canonical mode name (any case) or its display label.
            lat: Latitude in [-90, 90].
            lng: Longitude in [-180, 180].
            taken: Ids already used by the target collection.

        Raises:
            ValidationError: Naming every failing field, in argument order.
        """
        failed: List[str] = []
        origin = str(from_place or "").strip()
        if not origin:
            failed.append("from")
        destination = str(to_place or "").strip()
        if not destination:
            failed.append("to")
        km = _positive_number(distance)
        if km is None:
            failed.append("distance")
        hours = _positive_number(duration)
        if hours is None:
            failed.append("duration")
        resolved = TravelMode.parse(mode)
        if resolved is None:
            failed.append("type")
        latitude = _coordinate(lat, 90.0)
        if latitude is None:
            failed.append("lat")
        longitude = _coordinate(lng, 180.0)
        if longitude is None:
            failed.append("lng")

        if failed:
            if failed in (["distance"], ["duration"], ["distance", "duration"]):
                raise ValidationError(failed, "Please enter a positive distance and duration.")
            raise ValidationError(failed)

        created_at = self._now()
        return TravelLog(
            id=self._ids.next_id(taken),
            from_place=origin,
            to_place=destination,
            distance=km,
            duration=hours,
            mode=resolved,
            lat=latitude,
            lng=longitude,
            created_at=created_at,
            description=describe(destination, created_at),
        )


__all__ = ["IdSource", "TravelLogFactory", "describe"]
