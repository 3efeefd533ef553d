"""JSON record shape for persisted travel logs.

The durable record is a JSON array of objects with the keys
``id, from, to, distance, duration, type, lat, lng, date, description``.
``description`` is stored as written at creation time and never recomputed.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping

from .entities import TravelLog, TravelMode
from .factory import _coordinate, _positive_number

_log = logging.getLogger(__name__)


def log_to_dict(log: TravelLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "from": log.from_place,
        "to": log.to_place,
        "distance": log.distance,
        "duration": log.duration,
        "type": log.mode.label,
        "lat": log.lat,
        "lng": log.lng,
        "date": log.created_at.isoformat(),
        "description": log.description,
    }


def log_from_dict(payload: Mapping[str, Any]) -> TravelLog:
    """Rebuild a log from one record entry.

    Applies the same rules as new entries: non-empty places, positive
    finite distance and duration, coordinates within range.

    Raises:
        ValueError: If a key is missing or a value has the wrong shape.
    """
    try:
        mode = TravelMode.parse(payload["type"])
        if mode is None:
            raise ValueError(f"unknown travel type {payload['type']!r}")
        log_id = payload["id"]
        if isinstance(log_id, bool) or not isinstance(log_id, int):
            raise ValueError("id must be an integer")
        origin = str(payload["from"] or "").strip()
        destination = str(payload["to"] or "").strip()
        if not origin or not destination:
            raise ValueError("from and to must not be empty")
        distance = _positive_number(payload["distance"])
        duration = _positive_number(payload["duration"])
        if distance is None or duration is None:
            raise ValueError("distance and duration must be positive numbers")
        lat = _coordinate(payload["lat"], 90.0)
        lng = _coordinate(payload["lng"], 180.0)
        if lat is None or lng is None:
            raise ValueError("coordinates out of range")
        return TravelLog(
            id=log_id,
            from_place=origin,
            to_place=destination,
            distance=distance,
            duration=duration,
            mode=mode,
            lat=lat,
            lng=lng,
            created_at=_parse_date(payload["date"]),
            description=str(payload["description"]),
        )
    except (KeyError, TypeError) as exc:
        raise ValueError(f"malformed travel log entry: {exc}") from exc


def _parse_date(value: Any) -> datetime:
    text = str(value).strip()
    # browsers write UTC as a trailing Z (Date.toJSON)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


def dumps(logs: Iterable[TravelLog]) -> str:
    return json.dumps([log_to_dict(log) for log in logs], ensure_ascii=False)


def loads(text: str | None) -> List[TravelLog]:
    """Decode a record; absent or malformed records decode to ``[]``.

    Entries that cannot be decoded are skipped, duplicates of an earlier id
    included, so the result can always seed a collection.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except ValueError:
        _log.warning("Ignoring travel log record that is not valid JSON")
        return []
    if not isinstance(data, list):
        _log.warning("Ignoring travel log record that is not a JSON array")
        return []

    logs: List[TravelLog] = []
    seen: set[int] = set()
    skipped = 0
    for payload in data:
        if not isinstance(payload, Mapping):
            skipped += 1
            continue
        try:
            log = log_from_dict(payload)
        except ValueError:
            skipped += 1
            continue
        if log.id in seen:
            skipped += 1
            continue
        seen.add(log.id)
        logs.append(log)
    if skipped:
        _log.warning("Skipped %d malformed travel log entries", skipped)
    return logs


__all__ = ["dumps", "loads", "log_from_dict", "log_to_dict"]
