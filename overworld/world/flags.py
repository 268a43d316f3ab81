"""World-unique feature flags and their spawn weights."""
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Dict, Tuple

from .coords import Tier


@dataclass
class GlobalSpawnFlags:
    axe: bool = False
    hammer: bool = False
    note: bool = False
    bishop_spear: bool = False
    lion: bool = False
    squig: bool = False
    food_water_room: bool = False
    # once-per-world signs
    hammer_warning_sign: bool = False
    frontier_sign: bool = False

    def reset(self) -> None:
        for f in fields(self):
            setattr(self, f.name, False)

    def is_set(self, name: str) -> bool:
        return bool(getattr(self, name))

    def mark(self, name: str) -> None:
        if name not in _FIELD_NAMES:
            raise KeyError(name)
        setattr(self, name, True)

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)

    @classmethod
    def from_dict(cls, raw) -> "GlobalSpawnFlags":
        if not isinstance(raw, dict):
            raise ValueError("flags must be an object")
        unknown = set(raw) - _FIELD_NAMES
        if unknown:
            raise ValueError(f"unknown spawn flags: {sorted(unknown)}")
        for name, value in raw.items():
            if not isinstance(value, bool):
                raise ValueError(f"flag {name} must be a boolean, got {value!r}")
        return cls(**raw)


_FIELD_NAMES = {f.name for f in fields(GlobalSpawnFlags)}

# (home, woods, wilds, frontier) chance that the feature attempts placement.
_W = Tuple[float, float, float, float]
_WEIGHTS: Dict[str, _W] = {
    "axe": (0.50, 0.15, 0.0, 0.0),
    "hammer": (0.0, 0.02, 0.06, 0.12),
    "note": (0.35, 0.04, 0.04, 0.04),
    "bishop_spear": (0.0, 0.04, 0.04, 0.04),
    "lion": (0.0, 0.02, 0.02, 0.02),
    "squig": (0.0, 0.02, 0.02, 0.02),
    "food_water_room": (0.0, 0.03, 0.05, 0.05),
}
_TIER_INDEX = {Tier.HOME: 0, Tier.WOODS: 1, Tier.WILDS: 2, Tier.FRONTIER: 3}

# Priority order: earlier features get the single attempt when several roll.
UNIQUE_FEATURES = tuple(_WEIGHTS)


def spawn_weight(feature: str, tier: Tier) -> float:
    return _WEIGHTS[feature][_TIER_INDEX[tier]]


__all__ = ["GlobalSpawnFlags", "UNIQUE_FEATURES", "spawn_weight"]
