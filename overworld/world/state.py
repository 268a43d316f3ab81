"""
project: Overworld
module: state.py
License: MIT

Explicit world state passed to every generation call.

WorldState bundles the connection cache, spawn flags, zone store and
defeated-enemy keys so a whole session can be saved, reloaded and resumed
with bit-identical grids for zones that were already generated.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Optional, Set

from ..logging_utils import get_logger
from .catalogue import ContentCatalogue, default_catalogue
from .config import WorldConfig
from .connections import ConnectionManager
from .coords import ZoneCoordinate
from .errors import WorldLoadError
from .flags import GlobalSpawnFlags
from .generator import ZoneGenerator
from .store import ZoneStore
from .tiles import INTERIOR
from .zone import Zone, defeat_key

log = get_logger("overworld.state")

FORMAT_VERSION = 1


class WorldState:
    def __init__(self, config: Optional[WorldConfig] = None, catalogue: Optional[ContentCatalogue] = None):
        self.config = config or WorldConfig()
        self.catalogue = catalogue or default_catalogue()
        self.connections = ConnectionManager(self.config.grid_size, self.config.exit_probability)
        self.flags = GlobalSpawnFlags()
        self.store = ZoneStore()
        self.defeated_keys: Set[str] = set()
        self.generator = ZoneGenerator(self.config)

    def generate_zone(self, coord: ZoneCoordinate) -> Zone:
        return self.generator.generate_zone(
            coord, self.store, self.connections, self.catalogue, self.flags, self.defeated_keys
        )

    def record_defeat(self, coord: ZoneCoordinate, enemy_id: int) -> bool:
        """Remember a permanent kill and drop the seed from the stored zone."""
        self.defeated_keys.add(defeat_key(coord, enemy_id))
        if coord not in self.store:
            return False
        return self.store.mutate(coord, lambda zone: zone.remove_enemy_seed(enemy_id))

    def clear_obstacle(self, coord: ZoneCoordinate, x: int, y: int) -> bool:
        return self.store.mutate(coord, lambda zone: zone.clear_obstacle(x, y))

    def new_game(self) -> None:
        self.flags.reset()
        self.store.clear()
        self.connections.clear()
        self.defeated_keys.clear()
        self.generator.reset_metrics()
        log.info(event="new_game", seed=self.config.seed)

    # --- persistence -------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": FORMAT_VERSION,
            "seed": self.config.seed,
            "gridSize": self.config.grid_size,
            "zones": {coord.key(): zone.to_dict() for coord, zone in self.store.items()},
            "connections": self.connections.to_dict(),
            "flags": self.flags.to_dict(),
            "defeatedEnemies": sorted(self.defeated_keys),
        }

    @classmethod
    def from_dict(cls, data: Any, catalogue: Optional[ContentCatalogue] = None,
                  config: Optional[WorldConfig] = None) -> "WorldState":
        """Rebuild a world from :meth:`to_dict` output.

        Any malformed part raises WorldLoadError; nothing is repaired.
        """
        if not isinstance(data, dict):
            raise WorldLoadError("world state must be an object")
        if data.get("version") != FORMAT_VERSION:
            raise WorldLoadError(f"unsupported world state version: {data.get('version')!r}")
        seed = data.get("seed")
        grid_size = data.get("gridSize")
        if not isinstance(seed, int) or not isinstance(grid_size, int):
            raise WorldLoadError("seed and gridSize must be integers")
        if config is None:
            try:
                config = WorldConfig(seed=seed, grid_size=grid_size)
            except ValueError as exc:
                raise WorldLoadError(str(exc)) from exc
        elif config.seed != seed or config.grid_size != grid_size:
            raise WorldLoadError("persisted seed/gridSize do not match the configured world")

        world = cls(config, catalogue)
        world.connections.load(data.get("connections", {}))
        try:
            world.flags = GlobalSpawnFlags.from_dict(data.get("flags", {}))
        except ValueError as exc:
            raise WorldLoadError(str(exc)) from exc

        defeated = data.get("defeatedEnemies", [])
        if not isinstance(defeated, list) or not all(isinstance(k, str) for k in defeated):
            raise WorldLoadError("defeatedEnemies must be a list of strings")
        world.defeated_keys = set(defeated)

        zones = data.get("zones", {})
        if not isinstance(zones, dict):
            raise WorldLoadError("zones must be an object keyed by zone")
        for key, raw in zones.items():
            try:
                coord = ZoneCoordinate.parse(key)
                zone = Zone.from_dict(raw, config.grid_size)
            except ValueError as exc:
                raise WorldLoadError(f"bad zone {key!r}: {exc}") from exc
            rec = world.connections.get(coord)
            if coord.dimension != INTERIOR and (rec is None or not rec.resolved):
                raise WorldLoadError(f"zone {key} has no resolved connection record")
            world.store.set(coord, zone)
        log.info(event="world_loaded", zones=len(world.store), connections=len(world.connections))
        return world

    def save(self, path) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, separators=(",", ":"))

    @classmethod
    def load(cls, path, catalogue: Optional[ContentCatalogue] = None) -> "WorldState":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as exc:
            log.error(event="world_load_failed", path=str(path), error=str(exc))
            raise WorldLoadError(f"invalid JSON in {path}: {exc}") from exc
        return cls.from_dict(data, catalogue)


__all__ = ["WorldState", "WorldLoadError", "FORMAT_VERSION"]
