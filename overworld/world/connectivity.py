"""Exit carving and the reachability corridor pass.

Every exit gets its inward tile cleared, then a greedy walk (x axis first,
then y) toward the grid center converts blocking terrain to floor until it is
within one tile of center. Cells the walk touches are returned as reserved so
later scatter phases leave the corridor alone.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Set, Tuple

from .cells import Coord2D, Grid, Tile, floor_grid
from .connections import ConnectionRecord
from .coords import Side
from .tiles import CLEARABLE, EXIT, FLOOR, WALL


def init_grid(size: int) -> Grid:
    grid = floor_grid(size)
    last = size - 1
    for i in range(size):
        grid[i][0] = Tile(WALL)
        grid[i][last] = Tile(WALL)
        grid[0][i] = Tile(WALL)
        grid[last][i] = Tile(WALL)
    return grid


def exit_position(side: Side, offset: int, size: int) -> Coord2D:
    last = size - 1
    if side is Side.NORTH:
        return (offset, 0)
    if side is Side.SOUTH:
        return (offset, last)
    if side is Side.WEST:
        return (0, offset)
    return (last, offset)


def carve_exits(grid: Grid, record: Optional[ConnectionRecord]) -> List[Tuple[Side, Coord2D]]:
    size = len(grid)
    carved = []
    if record is None:
        return carved
    for side, offset in record.exits():
        x, y = exit_position(side, offset, size)
        grid[x][y] = Tile(EXIT)
        carved.append((side, (x, y)))
    return carved


def clear_path_to_center(grid: Grid, start: Coord2D, reserved: Set[Coord2D]) -> int:
    """Walk from ``start`` toward center clearing blockers. Returns tiles converted."""
    size = len(grid)
    c = size // 2
    x, y = start
    cleared = 0
    # each axis needs fewer than size steps
    for _ in range(size * 2):
        if max(abs(x - c), abs(y - c)) <= 1:
            break
        if x != c:
            x += 1 if c > x else -1
        elif y != c:
            y += 1 if c > y else -1
        if grid[x][y].kind in CLEARABLE:
            grid[x][y] = Tile(FLOOR)
            cleared += 1
        reserved.add((x, y))
    return cleared


def ensure_exit_access(grid: Grid, exits: Iterable[Tuple[Side, Coord2D]]) -> Tuple[Set[Coord2D], int]:
    """Clear inward tiles and corridors for every carved exit.

    Returns (reserved cells, number of tiles converted to floor).
    """
    reserved: Set[Coord2D] = set()
    cleared = 0
    for side, (ex, ey) in exits:
        dx, dy = side.delta
        ix, iy = ex - dx, ey - dy
        if grid[ix][iy].kind != FLOOR:
            grid[ix][iy] = Tile(FLOOR)
            cleared += 1
        reserved.add((ex, ey))
        reserved.add((ix, iy))
        cleared += clear_path_to_center(grid, (ix, iy), reserved)
    return reserved, cleared


__all__ = [
    "init_grid", "exit_position", "carve_exits", "clear_path_to_center",
    "ensure_exit_access",
]
