from __future__ import annotations
from dataclasses import dataclass
from ..domain.entities import PlaceName, Position
from ..domain.ports import NameResolver
from .error_mapping import map_api_error


@dataclass
class ResolvePlaceName:
    resolver: NameResolver

    async def __call__(self, position: Position) -> PlaceName:
        try:
            return await self.resolver.resolve(position)
        except Exception as e:
            raise map_api_error(e) from e
