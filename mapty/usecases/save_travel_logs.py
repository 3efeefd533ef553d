from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence
from ..domain.entities import TravelLog
from ..domain.errors import StorageUnavailable
from ..domain.ports import LogStore


@dataclass
class SaveTravelLogs:
    storage: LogStore

    def __call__(self, logs: Sequence[TravelLog]) -> None:
        try:
            self.storage.save(list(logs))
        except Exception as e:
            raise StorageUnavailable(f"Travel logs were not saved: {e}") from e


@dataclass
class ClearTravelLogs:
    storage: LogStore

    def __call__(self) -> None:
        try:
            self.storage.clear()
        except Exception as e:
            raise StorageUnavailable(f"Stored travel logs were not cleared: {e}") from e
