"""Zone synthesis pipeline.

``ZoneGenerator.generate_zone`` turns a resolved connection record into a
zone grid: border walls, carved exits, reachability corridors, tiered
obstacles, at most one world-unique feature, level items and enemy seeds.
Interior zones skip the lattice: a bottom-edge port and food/water only.
Randomness comes from a per-zone ``random.Random`` seeded from the world
seed and the coordinate, so the layout depends only on those plus the
flags and defeated keys passed in.
"""
from __future__ import annotations

import random
import time
from typing import AbstractSet, Any, Dict

from ..logging_utils import get_logger
from .catalogue import ContentCatalogue
from .config import WorldConfig
from .connections import ConnectionManager
from .connectivity import carve_exits, ensure_exit_access, init_grid
from .coords import ORIGIN, ZoneCoordinate, tier_for
from .features import (
    furnish_interior, place_house, place_level_items, place_tier_signs, place_unique_feature,
    scatter_obstacles, stamp_port,
)
from .flags import GlobalSpawnFlags
from .hashing import zone_seed
from .metrics import init_metrics
from .spawns import place_enemies
from .store import ZoneStore
from .tiles import INTERIOR, SURFACE, UNDERGROUND
from .zone import Zone

log = get_logger("overworld.generator")

START_POSITION = (1, 1)


class ZoneGenerator:
    def __init__(self, config: WorldConfig):
        self.config = config
        self.metrics: Dict[str, Any] = init_metrics() if config.enable_metrics else {}

    def reset_metrics(self) -> None:
        self.metrics = init_metrics() if self.config.enable_metrics else {}

    def _count(self, key: str, amount: int = 1) -> None:
        if self.metrics:
            self.metrics[key] += amount

    def generate_zone(self, coord: ZoneCoordinate, store: ZoneStore, connections: ConnectionManager,
                      catalogue: ContentCatalogue, flags: GlobalSpawnFlags,
                      defeated: AbstractSet[str]) -> Zone:
        existing = store.get(coord)
        if existing is not None:
            self._count('cache_hits')
            return existing

        if self.metrics:
            start = time.perf_counter()
            phase_times = self.metrics['phase_ms']

            def _phase(label, fn, *a, **k):
                ps = time.perf_counter(); r = fn(*a, **k); pe = time.perf_counter()
                phase_times[label] = phase_times.get(label, 0.0) + (pe - ps) * 1000
                return r
        else:
            def _phase(label, fn, *a, **k):
                return fn(*a, **k)

        rng = random.Random(zone_seed(self.config.seed, coord))
        grid = init_grid(self.config.grid_size)

        if coord.dimension == INTERIOR:
            # interiors sit off the exit lattice and never host enemies
            reserved = stamp_port(grid)
            items = _phase('interior_items', furnish_interior, grid, rng, coord, catalogue, reserved)
            zone = Zone(grid=grid)
            store.set(coord, zone)
            if self.metrics:
                self._count('zones_generated')
                self.metrics['runtime_ms'] += (time.perf_counter() - start) * 1000
            log.debug(event="zone_generated", zone=coord.key(), interior=True, items=items)
            return zone

        _phase('ensure_chunk', connections.ensure_chunk, coord)
        record = connections.get(coord)
        exits = _phase('carve_exits', carve_exits, grid, record)
        reserved, cleared = _phase('exit_access', ensure_exit_access, grid, exits)
        reserved.add(START_POSITION)
        tier = tier_for(coord)

        if coord == ORIGIN:
            _phase('house', place_house, grid, rng, reserved)
        obstacles = _phase('obstacles', scatter_obstacles, grid, rng, tier, reserved,
                           underground=coord.dimension == UNDERGROUND)
        feature, is_special = _phase('unique_feature', place_unique_feature,
                                     grid, rng, tier, coord, flags, catalogue, reserved)
        if coord.dimension == SURFACE:
            _phase('signs', place_tier_signs, grid, rng, tier, flags, reserved)
        _phase('level_items', place_level_items, grid, rng, tier, coord, catalogue, reserved)
        seeds, suppressed = _phase('enemies', place_enemies,
                                   grid, rng, tier, coord, catalogue, defeated, reserved)

        zone = Zone(grid=grid, enemy_seeds=seeds, is_special=is_special)
        store.set(coord, zone)

        if self.metrics:
            self._count('zones_generated')
            self._count('exits_carved', len(exits))
            self._count('corridor_tiles_cleared', cleared)
            self._count('obstacles_placed', obstacles)
            self._count('unique_features_placed', 1 if feature else 0)
            self._count('enemies_placed', len(seeds))
            self._count('enemies_suppressed', suppressed)
            self.metrics['runtime_ms'] += (time.perf_counter() - start) * 1000
        log.debug(event="zone_generated", zone=coord.key(), tier=tier.value, exits=len(exits),
                  obstacles=obstacles, feature=feature, enemies=len(seeds))
        return zone


__all__ = ["ZoneGenerator", "START_POSITION"]
