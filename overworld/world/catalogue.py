"""Content pools supplied by the asset loader: food art and enemy tables."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, Tuple

from .coords import Tier

DEFAULT_ENEMY_TABLES: Dict[Tier, Dict[str, float]] = {
    Tier.HOME: {"lizardy": 0.80, "lizardo": 0.15, "lizardeaux": 0.05},
    Tier.WOODS: {"lizardy": 0.50, "lizardo": 0.25, "lizardeaux": 0.10, "zard": 0.10, "lizord": 0.05},
    Tier.WILDS: {
        "lizardy": 0.20, "lizardo": 0.20, "lizardeaux": 0.20, "zard": 0.20, "lizord": 0.10, "lazerd": 0.10,
    },
    Tier.FRONTIER: {"lizardeaux": 0.25, "lizardy": 0.25, "lizord": 0.25, "lazerd": 0.15, "zard": 0.10},
}
DEFAULT_FOOD_ASSETS = ("food1", "food2", "food3", "food4", "food5")


@dataclass
class ContentCatalogue:
    food_assets: Tuple[str, ...] = DEFAULT_FOOD_ASSETS
    enemy_tables: Dict[Tier, Dict[str, float]] = field(
        default_factory=lambda: {t: dict(table) for t, table in DEFAULT_ENEMY_TABLES.items()}
    )

    def enemy_table(self, tier: Tier) -> Dict[str, float]:
        return self.enemy_tables.get(tier, {})

    @classmethod
    def from_dict(cls, raw: dict) -> "ContentCatalogue":
        """Build from ``{"food_assets": [...], "enemy_tables": {"woods": {...}}}``.

        Tier names are matched case-insensitively; missing tiers keep defaults.
        """
        cat = cls()
        if "food_assets" in raw:
            cat.food_assets = tuple(str(a) for a in raw["food_assets"])
        for name, table in (raw.get("enemy_tables") or {}).items():
            cat.enemy_tables[Tier(name.lower())] = {str(k): float(v) for k, v in table.items()}
        return cat


def default_catalogue() -> ContentCatalogue:
    return ContentCatalogue()


def choose_enemy_kind(table: Dict[str, float], rng: random.Random) -> str:
    """Weighted pick: walk cumulative weights until the pivot is covered."""
    pool = [(kind, w) for kind, w in table.items() if w > 0]
    if not pool:
        raise ValueError("enemy table is empty")
    total = sum(w for _, w in pool)
    pivot = rng.random() * total
    acc = 0.0
    chosen = pool[-1][0]
    for kind, w in pool:
        acc += w
        if pivot <= acc:
            chosen = kind
            break
    return chosen


__all__ = ["ContentCatalogue", "default_catalogue", "choose_enemy_kind", "DEFAULT_ENEMY_TABLES", "DEFAULT_FOOD_ASSETS"]
