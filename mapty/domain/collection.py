"""Ordered in-memory collection of travel logs."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Tuple

from .entities import TravelLog
from .errors import DuplicateIdError, NotFoundError


class LogCollection:
    """Travel logs in creation order with unique ids.

    Only the app controller writes to a collection; everyone else reads
    through :meth:`all`, which always returns a fresh snapshot.
    """

    def __init__(self, logs: Iterable[TravelLog] = ()) -> None:
        self._logs: List[TravelLog] = []
        for log in logs:
            self.add(log)

    def add(self, log: TravelLog) -> None:
        if log.id in self:
            raise DuplicateIdError(log.id)
        self._logs.append(log)

    def find_by_id(self, log_id: int) -> TravelLog:
        for log in self._logs:
            if log.id == log_id:
                return log
        raise NotFoundError(log_id)

    def remove_by_id(self, log_id: int) -> TravelLog:
        for index, log in enumerate(self._logs):
            if log.id == log_id:
                del self._logs[index]
                return log
        raise NotFoundError(log_id)

    def clear(self) -> None:
        self._logs.clear()

    def all(self) -> Tuple[TravelLog, ...]:
        return tuple(self._logs)

    def ids(self) -> set[int]:
        return {log.id for log in self._logs}

    def __len__(self) -> int:
        return len(self._logs)

    def __contains__(self, log_id: object) -> bool:
        return any(log.id == log_id for log in self._logs)

    def __iter__(self) -> Iterator[TravelLog]:
        return iter(self.all())


__all__ = ["LogCollection"]
