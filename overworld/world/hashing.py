"""64-bit integer mixing used for every coordinate-derived decision.

A splitmix64 finaliser folded over the inputs. Negative coordinates are
masked to their two's complement form so the lattice has no special cases.
"""
from __future__ import annotations

from .coords import ZoneCoordinate

MASK64 = (1 << 64) - 1
_GOLDEN = 0x9E3779B97F4A7C15


def mix(*values: int) -> int:
    h = _GOLDEN
    for v in values:
        h = (h ^ (v & MASK64)) & MASK64
        h = (h + _GOLDEN) & MASK64
        h = ((h ^ (h >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
        h = ((h ^ (h >> 27)) * 0x94D049BB133111EB) & MASK64
        h ^= h >> 31
    return h


def zone_seed(world_seed: int, coord: ZoneCoordinate) -> int:
    """Seed for the per-zone ``random.Random`` instance."""
    return mix(world_seed, coord.x, coord.y, coord.dimension)


def stable_index(text: str, modulo: int) -> int:
    """Process-independent string hash (``hash()`` is salted per interpreter)."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    return h % modulo


__all__ = ["mix", "zone_seed", "stable_index", "MASK64"]
