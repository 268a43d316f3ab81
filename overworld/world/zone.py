from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from .cells import Grid, Tile, grid_from_list, grid_to_list
from .coords import ZoneCoordinate
from .tiles import CLEARABLE, FLOOR


@dataclass
class EnemySpawnSeed:
    """Placement record; the live enemy is built from it by the combat layer."""
    id: int
    enemy_kind: str
    x: int
    y: int

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "enemyKind": self.enemy_kind, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "EnemySpawnSeed":
        if not isinstance(raw, dict):
            raise ValueError(f"enemy seed must be an object: {raw!r}")
        try:
            return cls(int(raw["id"]), str(raw["enemyKind"]), int(raw["x"]), int(raw["y"]))
        except (KeyError, TypeError) as exc:
            raise ValueError(f"incomplete enemy seed: {raw!r}") from exc


def defeat_key(coord: ZoneCoordinate, enemy_id: int) -> str:
    return f"{coord.key()}#{enemy_id}"


@dataclass
class Zone:
    grid: Grid
    enemy_seeds: List[EnemySpawnSeed] = field(default_factory=list)
    is_special: bool = False

    @property
    def size(self) -> int:
        return len(self.grid)

    def tile_at(self, x: int, y: int) -> Tile:
        return self.grid[x][y]

    def is_border(self, x: int, y: int) -> bool:
        last = self.size - 1
        return x in (0, last) or y in (0, last)

    def clear_obstacle(self, x: int, y: int) -> bool:
        """Turn an interior wall/rock/shrubbery into floor. Returns True if changed."""
        if self.is_border(x, y):
            raise ValueError(f"border cell ({x}, {y}) cannot be cleared")
        if self.grid[x][y].kind not in CLEARABLE:
            return False
        self.grid[x][y] = Tile(FLOOR)
        return True

    def remove_enemy_seed(self, enemy_id: int) -> bool:
        before = len(self.enemy_seeds)
        self.enemy_seeds = [s for s in self.enemy_seeds if s.id != enemy_id]
        return len(self.enemy_seeds) != before

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": grid_to_list(self.grid),
            "enemySeeds": [s.to_dict() for s in self.enemy_seeds],
            "isSpecial": self.is_special,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], grid_size: int) -> "Zone":
        if not isinstance(raw, dict):
            raise ValueError("zone must be an object")
        seeds = raw.get("enemySeeds", [])
        if not isinstance(seeds, list):
            raise ValueError("enemySeeds must be a list")
        return cls(
            grid=grid_from_list(raw.get("grid"), grid_size),
            enemy_seeds=[EnemySpawnSeed.from_dict(s) for s in seeds],
            is_special=bool(raw.get("isSpecial", False)),
        )


__all__ = ["Zone", "EnemySpawnSeed", "defeat_key"]
