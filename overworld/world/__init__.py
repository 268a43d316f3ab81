"""Zone and connectivity generation for an unbounded tile overworld.

Public surface re-exported here so callers can ``from overworld.world import
WorldState, ZoneCoordinate`` without knowing the module split.
"""
from .catalogue import ContentCatalogue, default_catalogue
from .cells import Tile
from .config import WorldConfig
from .connections import ConnectionManager, ConnectionRecord, validate_seams
from .coords import ORIGIN, Side, Tier, ZoneCoordinate, tier_for
from .errors import WorldLoadError
from .flags import UNIQUE_FEATURES, GlobalSpawnFlags
from .generator import ZoneGenerator
from .oracle import exit_candidate
from .state import WorldState
from .store import ZoneStore
from .zone import EnemySpawnSeed, Zone, defeat_key

__all__ = [
    "ContentCatalogue", "default_catalogue", "Tile", "WorldConfig", "ConnectionManager",
    "ConnectionRecord", "validate_seams", "ORIGIN", "Side", "Tier", "ZoneCoordinate", "tier_for",
    "WorldLoadError", "UNIQUE_FEATURES", "GlobalSpawnFlags", "ZoneGenerator", "exit_candidate",
    "WorldState", "ZoneStore", "EnemySpawnSeed", "Zone", "defeat_key",
]
