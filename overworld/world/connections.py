"""Connection records and the 3x3 chunk resolver.

A record only stores sides that have been decided. A missing side is
*unresolved*; a side present with ``None`` is *no exit*. Neighbors receive
mirrored values eagerly while their remaining sides stay unresolved until
their own chunk is ensured.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional, Tuple

from ..logging_utils import get_logger
from .coords import ORIGIN, SIDES, Side, ZoneCoordinate
from .errors import WorldLoadError
from .oracle import exit_candidate, forced_exit, offset_range

log = get_logger("overworld.connections")


class ConnectionRecord:
    __slots__ = ("sides",)

    def __init__(self, sides: Optional[Dict[Side, Optional[int]]] = None):
        self.sides: Dict[Side, Optional[int]] = dict(sides or {})

    @property
    def resolved(self) -> bool:
        return len(self.sides) == 4

    def is_set(self, side: Side) -> bool:
        return side in self.sides

    def get(self, side: Side) -> Optional[int]:
        return self.sides.get(side)

    def exits(self) -> Iterator[Tuple[Side, int]]:
        for side in SIDES:
            offset = self.sides.get(side)
            if offset is not None:
                yield side, offset

    def exit_count(self) -> int:
        return sum(1 for _ in self.exits())

    def to_dict(self) -> Dict[str, Optional[int]]:
        return {side.value: self.sides[side] for side in SIDES if side in self.sides}

    @classmethod
    def from_dict(cls, raw) -> "ConnectionRecord":
        if not isinstance(raw, dict):
            raise ValueError(f"connection record must be an object: {raw!r}")
        sides: Dict[Side, Optional[int]] = {}
        for name, offset in raw.items():
            side = Side(name)
            if offset is not None and (isinstance(offset, bool) or not isinstance(offset, int)):
                raise ValueError(f"exit offset must be an int or null: {offset!r}")
            sides[side] = offset
        return cls(sides)

    def __eq__(self, other):
        return isinstance(other, ConnectionRecord) and self.sides == other.sides

    def __repr__(self):
        return f"ConnectionRecord({self.to_dict()!r})"


class ConnectionManager:
    """Owns the connection cache and resolves it one 3x3 chunk at a time."""

    def __init__(self, grid_size: int = 9, exit_probability: float = 0.7):
        self.grid_size = grid_size
        self.exit_probability = exit_probability
        self.records: Dict[ZoneCoordinate, ConnectionRecord] = {}

    def get(self, coord: ZoneCoordinate) -> Optional[ConnectionRecord]:
        return self.records.get(coord)

    def __contains__(self, coord) -> bool:
        return coord in self.records

    def __len__(self) -> int:
        return len(self.records)

    def clear(self) -> None:
        self.records.clear()

    def ensure_chunk(self, center: ZoneCoordinate) -> None:
        """Resolve every record in the 3x3 neighborhood around ``center``.

        Already resolved records are left alone, so repeated calls are no-ops.
        """
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                coord = ZoneCoordinate(center.x + dx, center.y + dy, center.dimension)
                rec = self.records.get(coord)
                if rec is not None and rec.resolved:
                    continue
                if rec is None:
                    rec = self.records[coord] = ConnectionRecord()
                self._resolve(coord, rec)
                self._merge_into_neighbors(coord, rec)

    def _resolve(self, coord: ZoneCoordinate, rec: ConnectionRecord) -> None:
        for side in SIDES:
            # mirrored values written by an already resolved neighbor stay as they are
            if not rec.is_set(side):
                rec.sides[side] = exit_candidate(coord, side, self.grid_size, self.exit_probability)
        if rec.exit_count() == 0:
            side, offset = forced_exit(coord, self.grid_size)
            rec.sides[side] = offset
            log.debug(event="connectivity_forced", zone=coord.key(), side=side.value, offset=offset)
        if coord == ORIGIN:
            centered = self.grid_size // 2
            for side in (Side.EAST, Side.SOUTH):
                if rec.exit_count() >= 2:
                    break
                if rec.get(side) is None:
                    rec.sides[side] = centered
                    log.debug(event="connectivity_forced", zone=coord.key(), side=side.value, offset=centered)

    def _merge_into_neighbors(self, coord: ZoneCoordinate, rec: ConnectionRecord) -> None:
        for side, offset in rec.exits():
            neighbor = coord.neighbor(side)
            other = self.records.get(neighbor)
            if other is None:
                other = self.records[neighbor] = ConnectionRecord()
            if other.get(side.opposite) is None:
                other.sides[side.opposite] = offset

    def to_dict(self) -> Dict[str, Dict[str, Optional[int]]]:
        return {coord.key(): rec.to_dict() for coord, rec in self.records.items()}

    def load(self, raw) -> None:
        """Replace the cache from its persisted form; raises WorldLoadError."""
        if not isinstance(raw, dict):
            raise WorldLoadError("connections must be an object keyed by zone")
        records: Dict[ZoneCoordinate, ConnectionRecord] = {}
        for key, value in raw.items():
            try:
                records[ZoneCoordinate.parse(key)] = ConnectionRecord.from_dict(value)
            except ValueError as exc:
                raise WorldLoadError(f"bad connection record {key!r}: {exc}") from exc
        validate_seams(records.items(), self.grid_size)
        self.records = records


def validate_seams(items: Iterable[Tuple[ZoneCoordinate, ConnectionRecord]], grid_size: int) -> None:
    """Raise WorldLoadError unless every recorded exit is legal and mirrored."""
    records = dict(items)
    lo, hi = offset_range(grid_size)
    for coord, rec in records.items():
        for side in SIDES:
            if not rec.is_set(side):
                continue
            offset = rec.get(side)
            if offset is not None and not lo <= offset <= hi:
                raise WorldLoadError(f"exit offset {offset} out of range at {coord.key()} {side.value}")
            other = records.get(coord.neighbor(side))
            mirrored = other.get(side.opposite) if other is not None else None
            if offset is None:
                if mirrored is not None:
                    raise WorldLoadError(f"seam mismatch at {coord.key()} {side.value}: none vs {mirrored}")
            elif other is None or not other.is_set(side.opposite) or mirrored != offset:
                raise WorldLoadError(f"seam mismatch at {coord.key()} {side.value}: {offset} vs {mirrored}")


__all__ = ["ConnectionRecord", "ConnectionManager", "validate_seams"]
