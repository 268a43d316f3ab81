"""Obstacle scatter and feature placement for generated zones.

All placement goes through the zone's private rng and skips reserved cells
(exit corridors, the player start tile) and anything that is not plain floor,
so a feature placed earlier in the pipeline always wins its slot.
"""
from __future__ import annotations

import random
from typing import Callable, Dict, List, Optional, Set, Tuple

from ..logging_utils import get_logger
from .catalogue import ContentCatalogue
from .cells import Coord2D, Grid, Tile, bishop_spear, bomb, food, multi_tile, note, sign
from .config import (
    BOMB_CHANCE, FOOD_WATER_CHANCE, HOME_INTERIOR_ITEMS, INTERIOR_BASE_ITEMS,
    INTERIOR_EXTRA_ITEM_CHANCES, OBSTACLE_MIX, OBSTACLE_RANGES, PLACEMENT_ATTEMPTS,
    UNDERGROUND_ROCK_SHARE,
)
from .coords import Tier, ZoneCoordinate
from .flags import UNIQUE_FEATURES, GlobalSpawnFlags, spawn_weight
from .hashing import stable_index
from .tiles import (
    AXE, FLOOR, GRASS, HAMMER, LION, PORT, ROCK, SHRUBBERY, SIGN_FIND_THE_HAMMER,
    SIGN_TURN_BACK, SIGN_WOODCUTTERS_CLUB, SQUIG, WALL, WATER,
)

log = get_logger("overworld.features")

HOUSE_SIZE = 3
FOOD_WATER_ROOM_TILES = 4
NOTE_MESSAGE = "woodcutter_note"


def is_free(grid: Grid, x: int, y: int, reserved: Set[Coord2D]) -> bool:
    return grid[x][y].kind == FLOOR and (x, y) not in reserved


def free_cells(grid: Grid, reserved: Set[Coord2D]) -> List[Coord2D]:
    size = len(grid)
    return [
        (x, y) for x in range(1, size - 1) for y in range(1, size - 1) if is_free(grid, x, y, reserved)
    ]


def place_random(grid: Grid, rng: random.Random, reserved: Set[Coord2D], tile: Tile,
                 attempts: int = PLACEMENT_ATTEMPTS) -> Optional[Coord2D]:
    """Try up to ``attempts`` random interior cells; None when every try was taken."""
    size = len(grid)
    for _ in range(attempts):
        x = rng.randint(1, size - 2)
        y = rng.randint(1, size - 2)
        if is_free(grid, x, y, reserved):
            grid[x][y] = tile
            return (x, y)
    return None


def scatter_obstacles(grid: Grid, rng: random.Random, tier: Tier, reserved: Set[Coord2D],
                      underground: bool = False) -> int:
    lo, hi = OBSTACLE_RANGES[tier]
    target = rng.randint(lo, hi)
    rock_cut, shrub_cut = OBSTACLE_MIX[tier]
    size = len(grid)
    placed = 0
    for _ in range(target * 4):
        if placed >= target:
            break
        x = rng.randint(1, size - 2)
        y = rng.randint(1, size - 2)
        if not is_free(grid, x, y, reserved):
            continue
        roll = rng.random()
        if underground:
            kind = ROCK if roll < UNDERGROUND_ROCK_SHARE else WALL
        elif roll < rock_cut:
            kind = ROCK
        elif roll < shrub_cut:
            kind = SHRUBBERY
        else:
            kind = GRASS
        grid[x][y] = Tile(kind)
        placed += 1
    return placed


def place_house(grid: Grid, rng: random.Random, reserved: Set[Coord2D]) -> Optional[Coord2D]:
    """Stamp the 3x3 home house; its footprint avoids corridors and the grid center."""
    size = len(grid)
    c = size // 2
    anchors = [(ax, ay) for ax in range(1, size - HOUSE_SIZE) for ay in range(1, size - HOUSE_SIZE)]
    rng.shuffle(anchors)
    for ax, ay in anchors:
        footprint = [(ax + i, ay + j) for i in range(HOUSE_SIZE) for j in range(HOUSE_SIZE)]
        if (c, c) in footprint:
            continue
        if all(is_free(grid, x, y, reserved) for x, y in footprint):
            for x, y in footprint:
                grid[x][y] = multi_tile("house", (ax, ay))
            _place_sign_near(grid, rng, reserved, (ax, ay), SIGN_WOODCUTTERS_CLUB)
            return (ax, ay)
    log.debug(event="house_skipped", reason="no_room")
    return None


def _place_sign_near(grid: Grid, rng: random.Random, reserved: Set[Coord2D], anchor: Coord2D,
                     message_id: str) -> Optional[Coord2D]:
    size = len(grid)
    ax, ay = anchor
    ring = [(ax + i, ay + j) for i in range(-1, HOUSE_SIZE + 1) for j in range(-1, HOUSE_SIZE + 1)]
    for x, y in ring:
        if 1 <= x <= size - 2 and 1 <= y <= size - 2 and is_free(grid, x, y, reserved):
            grid[x][y] = sign(message_id)
            return (x, y)
    return place_random(grid, rng, reserved, sign(message_id))


def place_tier_signs(grid: Grid, rng: random.Random, tier: Tier, flags: GlobalSpawnFlags,
                     reserved: Set[Coord2D]) -> Optional[str]:
    """First Woods zone warns about the hammer; first Frontier zone says turn back."""
    if tier is Tier.WOODS and not flags.hammer_warning_sign:
        flag, message_id = "hammer_warning_sign", SIGN_FIND_THE_HAMMER
    elif tier is Tier.FRONTIER and not flags.frontier_sign:
        flag, message_id = "frontier_sign", SIGN_TURN_BACK
    else:
        return None
    if place_random(grid, rng, reserved, sign(message_id)) is None:
        return None
    flags.mark(flag)
    return message_id


def place_level_items(grid: Grid, rng: random.Random, tier: Tier, coord: ZoneCoordinate,
                      catalogue: ContentCatalogue, reserved: Set[Coord2D]) -> int:
    placed = 0
    if rng.random() < FOOD_WATER_CHANCE[tier]:
        if catalogue.food_assets:
            variant = catalogue.food_assets[stable_index(coord.key(), len(catalogue.food_assets))]
            item = food(variant)
        else:
            item = Tile(WATER)
        if place_random(grid, rng, reserved, item):
            placed += 1
    if tier is not Tier.HOME and rng.random() < BOMB_CHANCE:
        if place_random(grid, rng, reserved, bomb()):
            placed += 1
    return placed


# --- world-unique features -------------------------------------------------

def _single(factory: Callable[[], Tile]):
    def _place(grid, rng, reserved, catalogue) -> bool:
        return place_random(grid, rng, reserved, factory()) is not None
    return _place


def _food_or_water(rng: random.Random, catalogue: ContentCatalogue) -> Tile:
    if catalogue.food_assets and rng.random() < 0.5:
        return food(rng.choice(catalogue.food_assets))
    return Tile(WATER)


def _food_water_room(grid, rng, reserved, catalogue) -> bool:
    placed = 0
    for _ in range(FOOD_WATER_ROOM_TILES):
        if place_random(grid, rng, reserved, _food_or_water(rng, catalogue)):
            placed += 1
    return placed > 0


_PLACERS: Dict[str, Callable[..., bool]] = {
    "axe": _single(lambda: Tile(AXE)),
    "hammer": _single(lambda: Tile(HAMMER)),
    "note": _single(lambda: note(NOTE_MESSAGE)),
    "bishop_spear": _single(bishop_spear),
    "lion": _single(lambda: Tile(LION)),
    "squig": _single(lambda: Tile(SQUIG)),
    "food_water_room": _food_water_room,
}
SPECIAL_FEATURES = frozenset({"note", "food_water_room"})


def place_unique_feature(grid: Grid, rng: random.Random, tier: Tier, coord: ZoneCoordinate,
                         flags: GlobalSpawnFlags, catalogue: ContentCatalogue,
                         reserved: Set[Coord2D]) -> Tuple[Optional[str], bool]:
    """Let at most one still-unplaced feature attempt placement in this zone.

    Returns (feature placed or None, whether the zone becomes special). The
    flag is flipped only on success so a crowded zone defers the feature.
    """
    for name in UNIQUE_FEATURES:
        if flags.is_set(name):
            continue
        weight = spawn_weight(name, tier)
        if weight <= 0 or rng.random() >= weight:
            continue
        if not _PLACERS[name](grid, rng, reserved, catalogue):
            log.debug(event="unique_feature_failed", feature=name, zone=coord.key())
            return None, False
        flags.mark(name)
        log.info(event="unique_feature_placed", feature=name, zone=coord.key(), tier=tier.value)
        return name, name in SPECIAL_FEATURES
    return None, False


# --- interiors ---------------------------------------------------------------

def port_position(size: int) -> Coord2D:
    return (size // 2, size - 1)


def stamp_port(grid: Grid) -> Set[Coord2D]:
    """Open the bottom-edge doorway; returns the cells item placement must skip."""
    size = len(grid)
    px, py = port_position(size)
    grid[px][py] = Tile(PORT)
    return {(px, py), (px, py - 1), (1, 1)}


def _home_table_spots(size: int) -> List[Coord2D]:
    return [(size - 3, size - 3), (size - 4, size - 2), (size - 3, size - 2)]


def furnish_interior(grid: Grid, rng: random.Random, coord: ZoneCoordinate,
                     catalogue: ContentCatalogue, reserved: Set[Coord2D]) -> int:
    """Stock an interior with food and water only.

    The home interior puts one or two items on its table spots. Every other
    interior is a shack: two items plus a chain of shrinking extra rolls,
    dropped on free floor away from the top and bottom walls.
    """
    size = len(grid)
    if (coord.x, coord.y) == (0, 0):
        spots = [c for c in _home_table_spots(size) if is_free(grid, c[0], c[1], reserved)]
        count = min(rng.randint(*HOME_INTERIOR_ITEMS), len(spots))
    else:
        count = INTERIOR_BASE_ITEMS
        for chance in INTERIOR_EXTRA_ITEM_CHANCES:
            if rng.random() >= chance:
                break
            count += 1
        spots = [
            (x, y) for x in range(1, size - 1) for y in range(2, size - 2)
            if is_free(grid, x, y, reserved)
        ]
    placed = 0
    for _ in range(count):
        if not spots:
            break
        x, y = spots.pop(rng.randrange(len(spots)))
        grid[x][y] = _food_or_water(rng, catalogue)
        placed += 1
    return placed


__all__ = [
    "is_free", "free_cells", "place_random", "scatter_obstacles", "place_house",
    "place_tier_signs", "place_level_items", "place_unique_feature", "SPECIAL_FEATURES",
    "port_position", "stamp_port", "furnish_interior",
]
