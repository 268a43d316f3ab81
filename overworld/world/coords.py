"""Zone lattice coordinates, sides and difficulty tiers."""
from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Tuple

from .tiles import SURFACE


class Side(Enum):
    NORTH = "north"
    SOUTH = "south"
    EAST = "east"
    WEST = "west"

    @property
    def opposite(self) -> "Side":
        return _OPPOSITE[self]

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTA[self]


_OPPOSITE = {Side.NORTH: Side.SOUTH, Side.SOUTH: Side.NORTH, Side.EAST: Side.WEST, Side.WEST: Side.EAST}
_DELTA = {Side.NORTH: (0, -1), Side.SOUTH: (0, 1), Side.EAST: (1, 0), Side.WEST: (-1, 0)}

# Fixed ordering used wherever a side is picked by index.
SIDES = (Side.NORTH, Side.SOUTH, Side.WEST, Side.EAST)


class ZoneCoordinate(NamedTuple):
    x: int
    y: int
    dimension: int = SURFACE

    def key(self) -> str:
        return f"{self.x},{self.y}:{self.dimension}"

    def neighbor(self, side: Side) -> "ZoneCoordinate":
        dx, dy = side.delta
        return ZoneCoordinate(self.x + dx, self.y + dy, self.dimension)

    def chebyshev(self) -> int:
        return max(abs(self.x), abs(self.y))

    @classmethod
    def parse(cls, key: str) -> "ZoneCoordinate":
        """Inverse of :meth:`key`; raises ValueError on anything malformed."""
        try:
            xy, dim = key.split(":")
            x, y = xy.split(",")
            return cls(int(x), int(y), int(dim))
        except (AttributeError, ValueError):
            raise ValueError(f"malformed zone key: {key!r}") from None


class Tier(Enum):
    HOME = "home"
    WOODS = "woods"
    WILDS = "wilds"
    FRONTIER = "frontier"


TIER_BOUNDS = ((2, Tier.HOME), (8, Tier.WOODS), (16, Tier.WILDS))


def tier_for(coord: ZoneCoordinate) -> Tier:
    dist = coord.chebyshev()
    for limit, tier in TIER_BOUNDS:
        if dist <= limit:
            return tier
    return Tier.FRONTIER


ORIGIN = ZoneCoordinate(0, 0, SURFACE)

__all__ = ["Side", "SIDES", "ZoneCoordinate", "Tier", "TIER_BOUNDS", "tier_for", "ORIGIN"]
