"""Travel log list projection from ``LogCollection`` for the log list view.

Call context:
    ``AppController`` notifies the view whenever the collection changes; the
    view then asks this view model for fresh rows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from mapty.domain.collection import LogCollection
from mapty.domain.entities import TravelLog


@dataclass(frozen=True)
class LogRow:
    """Display row consumed by the log list widget.

    ``log_id`` is bound to the row's own Locate/Delete buttons so an action
    always targets the entry that was clicked.
    """
    log_id: int
    title: str
    from_place: str
    to_place: str
    mode: str
    distance: str
    duration: str


class LogListVM:
    """Read-only projection of the collection in creation order."""

    def __init__(self, collection: LogCollection) -> None:
        self._collection = collection

    def rows(self) -> List[LogRow]:
        return [self._to_row(log) for log in self._collection.all()]

    def is_empty(self) -> bool:
        return len(self._collection) == 0

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _to_row(self, log: TravelLog) -> LogRow:
        return LogRow(
            log_id=log.id,
            title=log.description,
            from_place=log.from_place,
            to_place=log.to_place,
            mode=log.mode.label,
            distance=f"{log.distance:g} km",
            duration=f"{log.duration:g} hr",
        )


__all__ = ["LogListVM", "LogRow"]
