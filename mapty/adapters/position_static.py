from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from mapty.domain.entities import Position
from mapty.domain.errors import PositionUnavailable
from mapty.domain.ports import PositionProvider


@dataclass
class StaticPosition(PositionProvider):
    """Fixed position source; ``None`` behaves like a denied permission."""

    position: Optional[Position] = None

    async def current_position(self) -> Position:
        if self.position is None:
            raise PositionUnavailable()
        return self.position


__all__ = ["StaticPosition"]
