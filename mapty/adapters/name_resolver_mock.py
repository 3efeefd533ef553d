from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from mapty.adapters.api_errors import ApiTimeoutError
from mapty.domain.entities import PlaceName, Position
from mapty.domain.ports import NameResolver

_Key = Tuple[float, float]


@dataclass
class NameResolverMock(NameResolver):
    """Offline substitute for ``NominatimResolver`` with deterministic names.

    With ``manual=True`` every lookup waits until :meth:`release` is called for
    its coordinates, so callers can complete lookups in any order.
    """

    names: Dict[_Key, str] = field(default_factory=dict)
    fail: bool = False
    manual: bool = False

    def __post_init__(self) -> None:
        self.calls: List[Position] = []
        self._waiting: Dict[_Key, List[asyncio.Future]] = {}

    async def resolve(self, position: Position) -> PlaceName:
        self.calls.append(position)
        key = (position.lat, position.lng)
        if self.manual:
            future = asyncio.get_running_loop().create_future()
            self._waiting.setdefault(key, []).append(future)
            await future
        if self.fail:
            raise ApiTimeoutError(f"Timeout resolving {position.label()}")
        name = self.names.get(key) or f"Place {position.label()}"
        return PlaceName(display_name=f"{name}, Earth", short_name=name)

    def pending(self) -> List[_Key]:
        return [key for key, futures in self._waiting.items() if futures]

    def release(self, lat: float, lng: float) -> None:
        """Let every lookup waiting on ``(lat, lng)`` complete."""
        for future in self._waiting.pop((lat, lng), []):
            if not future.done():
                future.set_result(None)


__all__ = ["NameResolverMock"]
