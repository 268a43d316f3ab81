"""Tile kind constants shared by the zone generator and its consumers.

Kinds are plain strings so grids serialize without a lookup table. Stateful
kinds (bomb, bishop_spear) carry their payload in ``Tile.data``.
"""

FLOOR = "floor"
WALL = "wall"
GRASS = "grass"
SHRUBBERY = "shrubbery"  # grass with blocking semantics
ROCK = "rock"
EXIT = "exit"
WATER = "water"
FOOD = "food"
NOTE = "note"
AXE = "axe"
HAMMER = "hammer"
BOMB = "bomb"
BISHOP_SPEAR = "bishop_spear"
SIGN = "sign"
LION = "lion"
SQUIG = "squig"
MULTI_TILE = "multi_tile"
PORT = "port"  # interior doorway back to the surface

ALL_KINDS = frozenset({
    FLOOR, WALL, GRASS, SHRUBBERY, ROCK, EXIT, WATER, FOOD, NOTE, AXE, HAMMER,
    BOMB, BISHOP_SPEAR, SIGN, LION, SQUIG, MULTI_TILE, PORT,
})

# Movement legality: everything else (pickups included) can be stepped on.
BLOCKING = frozenset({WALL, ROCK, SHRUBBERY, WATER, SIGN, LION, SQUIG, MULTI_TILE})

# Tiles the reachability pass and explosions are allowed to turn into floor.
CLEARABLE = frozenset({WALL, ROCK, SHRUBBERY})

# Dimension tags sharing the same (x, y) lattice.
SURFACE = 0
INTERIOR = 1
UNDERGROUND = 2

# Sign message ids
SIGN_WOODCUTTERS_CLUB = "woodcutters_club"
SIGN_FIND_THE_HAMMER = "find_the_hammer"
SIGN_TURN_BACK = "turn_back"

__all__ = [
    "FLOOR", "WALL", "GRASS", "SHRUBBERY", "ROCK", "EXIT", "WATER", "FOOD", "NOTE",
    "AXE", "HAMMER", "BOMB", "BISHOP_SPEAR", "SIGN", "LION", "SQUIG", "MULTI_TILE", "PORT",
    "ALL_KINDS", "BLOCKING", "CLEARABLE", "SURFACE", "INTERIOR", "UNDERGROUND",
    "SIGN_WOODCUTTERS_CLUB", "SIGN_FIND_THE_HAMMER", "SIGN_TURN_BACK",
]
