from typing import Dict


def init_metrics() -> Dict[str, int | float | dict]:
    return {
        'zones_generated': 0,
        'cache_hits': 0,
        'exits_carved': 0,
        'corridor_tiles_cleared': 0,
        'obstacles_placed': 0,
        'unique_features_placed': 0,
        'enemies_placed': 0,
        'enemies_suppressed': 0,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }
