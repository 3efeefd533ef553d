"""Key-value storage for the travel log record.

Works against any mutable mapping. The web runtime passes NiceGUI's
``app.storage.user`` so each browser keeps its own history under one key.
"""

from __future__ import annotations

from typing import List, MutableMapping, Sequence

from mapty.domain import codec
from mapty.domain.entities import TravelLog
from mapty.domain.ports import LogStore

DEFAULT_KEY = "travelLogs"


class StorageKeyValue(LogStore):
    """Store the whole collection as JSON text under a single key."""

    def __init__(self, mapping: MutableMapping[str, object], key: str = DEFAULT_KEY) -> None:
        self.mapping = mapping
        self.key = key

    def save(self, logs: Sequence[TravelLog]) -> None:
        text = codec.dumps(logs)
        self.mapping[self.key] = text

    def load(self) -> List[TravelLog]:
        raw = self.mapping.get(self.key)
        if not isinstance(raw, str):
            return []
        return codec.loads(raw)

    def clear(self) -> None:
        self.mapping.pop(self.key, None)


__all__ = ["DEFAULT_KEY", "StorageKeyValue"]
