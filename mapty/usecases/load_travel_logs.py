from __future__ import annotations
from dataclasses import dataclass
from typing import List
from ..domain.entities import TravelLog
from ..domain.errors import StorageUnavailable
from ..domain.ports import LogStore


@dataclass
class LoadTravelLogs:
    storage: LogStore

    def __call__(self) -> List[TravelLog]:
        try:
            return list(self.storage.load())
        except Exception as e:
            raise StorageUnavailable(f"Stored travel logs could not be read: {e}") from e
