"""Coordinate-only exit oracle.

Both zones that share a border evaluate that border through the same edge
key, so the two sides of a seam always agree without consulting any cache.
"""
from __future__ import annotations

from typing import Optional, Tuple

from .coords import SIDES, Side, ZoneCoordinate
from .hashing import mix

_EDGE_SALT = 0x45444745  # "EDGE"
_REPAIR_SALT = 0x52455052  # "REPR"
_VERTICAL = 0  # border crossed by moving north/south
_HORIZONTAL = 1  # border crossed by moving east/west


def edge_key(coord: ZoneCoordinate, side: Side) -> Tuple[int, int, int, int]:
    """Canonical (axis, x, y, dimension) of the border on ``side`` of ``coord``."""
    x, y, dim = coord
    if side is Side.NORTH:
        return (_VERTICAL, x, y - 1, dim)
    if side is Side.SOUTH:
        return (_VERTICAL, x, y, dim)
    if side is Side.WEST:
        return (_HORIZONTAL, x - 1, y, dim)
    return (_HORIZONTAL, x, y, dim)


def offset_range(grid_size: int) -> Tuple[int, int]:
    """Inclusive range of legal exit offsets (corners and corner-adjacent cells excluded)."""
    return 2, grid_size - 3


def _offset(h: int, grid_size: int) -> int:
    return (h % (grid_size - 4)) + 2


def exit_candidate(coord: ZoneCoordinate, side: Side, grid_size: int = 9,
                   exit_probability: float = 0.7) -> Optional[int]:
    """Board-local exit offset on ``side`` of ``coord``, or None for no exit."""
    h = mix(_EDGE_SALT, *edge_key(coord, side))
    if (h % 1000) >= int(round(exit_probability * 1000)):
        return None
    return _offset(h >> 16, grid_size)


def forced_exit(coord: ZoneCoordinate, grid_size: int = 9) -> Tuple[Side, int]:
    """Secondary hash choosing the side and offset for minimum-connectivity repair."""
    h = mix(_REPAIR_SALT, coord.x, coord.y, coord.dimension)
    return SIDES[h % 4], _offset(h >> 8, grid_size)


__all__ = ["exit_candidate", "forced_exit", "edge_key", "offset_range"]
