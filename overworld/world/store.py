"""Read-through zone cache. Entries are written once and then only mutated."""
from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional, Tuple, TypeVar

from .coords import ZoneCoordinate
from .zone import Zone

T = TypeVar("T")


class ZoneStore:
    def __init__(self):
        self._zones: Dict[ZoneCoordinate, Zone] = {}

    def get(self, coord: ZoneCoordinate) -> Optional[Zone]:
        return self._zones.get(coord)

    def set(self, coord: ZoneCoordinate, zone: Zone) -> None:
        self._zones[coord] = zone

    def mutate(self, coord: ZoneCoordinate, fn: Callable[[Zone], T]) -> T:
        """Apply ``fn`` to the stored zone in place and return its result.

        Raises KeyError when ``coord`` has not been generated yet.
        """
        zone = self._zones.get(coord)
        if zone is None:
            raise KeyError(coord.key())
        return fn(zone)

    def __contains__(self, coord) -> bool:
        return coord in self._zones

    def __len__(self) -> int:
        return len(self._zones)

    def items(self) -> Iterator[Tuple[ZoneCoordinate, Zone]]:
        return iter(self._zones.items())

    def clear(self) -> None:
        self._zones.clear()


__all__ = ["ZoneStore"]
