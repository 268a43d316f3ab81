from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .tiles import (
    ALL_KINDS, BISHOP_SPEAR, BLOCKING, BOMB, FLOOR, FOOD, MULTI_TILE, NOTE, SIGN,
)


@dataclass
class Tile:
    """One grid cell: a kind tag plus an optional payload.

    Value tags (floor, wall, axe ...) have an empty ``data`` dict. Stateful tags
    keep mutable fields there, e.g. ``Tile(BOMB, {"action_timer": 0})``.
    """
    kind: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def walkable(self) -> bool:
        return self.kind not in BLOCKING

    def to_dict(self) -> Dict[str, Any]:
        if not self.data:
            return {"kind": self.kind}
        return {"kind": self.kind, "data": dict(self.data)}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Tile":
        kind = raw.get("kind") if isinstance(raw, dict) else None
        if kind not in ALL_KINDS:
            raise ValueError(f"unknown tile kind: {kind!r}")
        data = raw.get("data") or {}
        if not isinstance(data, dict):
            raise ValueError(f"tile payload must be an object: {data!r}")
        return cls(kind, dict(data))


Grid = List[List[Tile]]  # column-major: grid[x][y]
Coord2D = Tuple[int, int]


def food(variant: str) -> Tile:
    return Tile(FOOD, {"variant": variant})


def note(message_id: str) -> Tile:
    return Tile(NOTE, {"message_id": message_id})


def sign(message_id: str) -> Tile:
    return Tile(SIGN, {"message_id": message_id})


def bomb(action_timer: int = 0) -> Tile:
    return Tile(BOMB, {"action_timer": action_timer})


def bishop_spear(uses: int = 3) -> Tile:
    return Tile(BISHOP_SPEAR, {"uses": uses})


def multi_tile(feature: str, anchor: Coord2D) -> Tile:
    # anchor kept as a list so the tile survives a JSON round-trip unchanged
    return Tile(MULTI_TILE, {"feature": feature, "anchor": [anchor[0], anchor[1]]})


def floor_grid(size: int) -> Grid:
    return [[Tile(FLOOR) for _ in range(size)] for _ in range(size)]


def grid_to_list(grid: Grid) -> List[List[Dict[str, Any]]]:
    return [[cell.to_dict() for cell in column] for column in grid]


def grid_from_list(raw: Any, size: int) -> Grid:
    if not isinstance(raw, list) or len(raw) != size:
        raise ValueError(f"grid must have {size} columns")
    grid: Grid = []
    for column in raw:
        if not isinstance(column, list) or len(column) != size:
            raise ValueError(f"grid columns must have {size} cells")
        grid.append([Tile.from_dict(cell) for cell in column])
    return grid


__all__ = [
    "Tile", "Grid", "Coord2D", "food", "note", "sign", "bomb", "bishop_spear",
    "multi_tile", "floor_grid", "grid_to_list", "grid_from_list",
]
