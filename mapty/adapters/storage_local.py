from __future__ import annotations

import logging
import os
import tempfile
from typing import List, Optional, Sequence

from mapty.domain import codec
from mapty.domain.entities import TravelLog
from mapty.domain.ports import LogStore

DEFAULT_FILENAME = "travel_logs.json"


class StorageLocal(LogStore):
    """Local filesystem storage for the travel log record (one JSON file)."""

    def __init__(self, root_dir: str = ".", filename: str = DEFAULT_FILENAME) -> None:
        self.root = root_dir
        self.filename = filename
        self._log = logging.getLogger(__name__)

    @property
    def path(self) -> str:
        return os.path.join(self.root, self.filename)

    def save(self, logs: Sequence[TravelLog]) -> None:
        # serialize first so an encoding failure never touches the record
        text = codec.dumps(logs)
        os.makedirs(self.root, exist_ok=True)
        tmp_fd: Optional[int] = None
        tmp_path = ""
        try:
            tmp_fd, tmp_path = tempfile.mkstemp(
                dir=self.root, prefix=".travel_logs_", suffix=".tmp"
            )
            with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
                tmp_fd = None
                f.write(text)
            os.replace(tmp_path, self.path)
            tmp_path = ""
        finally:
            if tmp_fd is not None:
                try:
                    os.close(tmp_fd)
                except OSError:
                    pass
            if tmp_path and os.path.exists(tmp_path):
                try:
                    os.remove(tmp_path)
                except OSError:
                    pass
        self._log.debug("Saved %d travel logs to %s", len(logs), self.path)

    def load(self) -> List[TravelLog]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                text = f.read()
        except UnicodeDecodeError:
            self._log.warning("Travel log record %s is not UTF-8 text", self.path)
            return []
        return codec.loads(text)

    def clear(self) -> None:
        try:
            os.remove(self.path)
        except FileNotFoundError:
            pass
