from __future__ import annotations

import os
import random
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from .coords import Tier

# Tier-scaled placement counts (inclusive ranges fed to rng.randint).
OBSTACLE_RANGES: Dict[Tier, Tuple[int, int]] = {
    Tier.HOME: (4, 8),
    Tier.WOODS: (8, 14),
    Tier.WILDS: (10, 16),
    Tier.FRONTIER: (12, 18),
}
ENEMY_COUNT_RANGES: Dict[Tier, Tuple[int, int]] = {
    Tier.HOME: (0, 1),
    Tier.WOODS: (0, 2),
    Tier.WILDS: (1, 3),
    Tier.FRONTIER: (1, 4),
}
# (rock, shrubbery) cumulative thresholds; the remainder becomes walkable grass.
OBSTACLE_MIX: Dict[Tier, Tuple[float, float]] = {
    Tier.HOME: (0.25, 0.55),
    Tier.WOODS: (0.35, 0.75),
    Tier.WILDS: (0.35, 0.75),
    Tier.FRONTIER: (0.40, 0.85),
}
UNDERGROUND_ROCK_SHARE = 0.8  # rest of underground obstacles are wall
FOOD_WATER_CHANCE: Dict[Tier, float] = {
    Tier.HOME: 0.40,
    Tier.WOODS: 0.25,
    Tier.WILDS: 0.15,
    Tier.FRONTIER: 0.05,
}
BOMB_CHANCE = 0.04
PLACEMENT_ATTEMPTS = 50
# Interiors: shacks always stock two items, then each chained roll adds one more.
INTERIOR_BASE_ITEMS = 2
INTERIOR_EXTRA_ITEM_CHANCES: Tuple[float, ...] = (0.25, 0.20, 0.15, 0.10, 0.05)
HOME_INTERIOR_ITEMS = (1, 2)


@dataclass
class WorldConfig:
    seed: Optional[int] = None
    grid_size: int = 9
    exit_probability: float = 0.7
    enable_metrics: bool = True

    def __post_init__(self):
        # 0 is a valid deterministic seed; None => random
        if self.seed is None:
            self.seed = random.randint(1, 1_000_000)
        if self.grid_size < 7 or self.grid_size % 2 == 0:
            raise ValueError(f"grid_size must be odd and >= 7, got {self.grid_size}")
        if not 0.0 <= self.exit_probability <= 1.0:
            raise ValueError(f"exit_probability must be within [0, 1], got {self.exit_probability}")

    @property
    def center(self) -> int:
        return self.grid_size // 2

    @classmethod
    def from_env(cls, **overrides) -> "WorldConfig":
        """Build a config from OVERWORLD_* environment variables.

        Explicit keyword overrides win over the environment.
        """
        values = {}
        if os.getenv("OVERWORLD_SEED"):
            values["seed"] = int(os.environ["OVERWORLD_SEED"])
        if os.getenv("OVERWORLD_GRID_SIZE"):
            values["grid_size"] = int(os.environ["OVERWORLD_GRID_SIZE"])
        if os.getenv("OVERWORLD_EXIT_PROBABILITY"):
            values["exit_probability"] = float(os.environ["OVERWORLD_EXIT_PROBABILITY"])
        if "OVERWORLD_ENABLE_METRICS" in os.environ:
            val = os.environ.get("OVERWORLD_ENABLE_METRICS", "").lower()
            values["enable_metrics"] = val not in {"0", "false", "no", ""}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = [
    "WorldConfig", "OBSTACLE_RANGES", "ENEMY_COUNT_RANGES", "OBSTACLE_MIX",
    "UNDERGROUND_ROCK_SHARE", "FOOD_WATER_CHANCE", "BOMB_CHANCE", "PLACEMENT_ATTEMPTS",
    "INTERIOR_BASE_ITEMS", "INTERIOR_EXTRA_ITEM_CHANCES", "HOME_INTERIOR_ITEMS",
]
