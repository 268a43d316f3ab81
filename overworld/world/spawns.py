"""Enemy spawn seeds for freshly generated zones."""
from __future__ import annotations

import random
from typing import AbstractSet, List, Set, Tuple

from .catalogue import ContentCatalogue, choose_enemy_kind
from .cells import Coord2D, Grid
from .config import ENEMY_COUNT_RANGES
from .coords import Tier, ZoneCoordinate
from .features import free_cells
from .zone import EnemySpawnSeed, defeat_key


def place_enemies(grid: Grid, rng: random.Random, tier: Tier, coord: ZoneCoordinate,
                  catalogue: ContentCatalogue, defeated: AbstractSet[str],
                  reserved: Set[Coord2D]) -> Tuple[List[EnemySpawnSeed], int]:
    """Return (seeds, suppressed count).

    Ids are placement indexes. A defeated seed still consumes its id and its
    rng draws, so the survivors keep the ids and cells they would have had.
    """
    lo, hi = ENEMY_COUNT_RANGES[tier]
    count = rng.randint(lo, hi)
    table = catalogue.enemy_table(tier)
    if count == 0 or not table:
        return [], 0
    cells = free_cells(grid, reserved)
    picks = rng.sample(cells, min(count, len(cells)))
    seeds: List[EnemySpawnSeed] = []
    suppressed = 0
    for enemy_id, (x, y) in enumerate(picks):
        kind = choose_enemy_kind(table, rng)
        if defeat_key(coord, enemy_id) in defeated:
            suppressed += 1
            continue
        seeds.append(EnemySpawnSeed(enemy_id, kind, x, y))
    return seeds, suppressed


__all__ = ["place_enemies"]
