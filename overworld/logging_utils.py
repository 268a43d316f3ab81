"""Structured key=value logging for the world engine.

Emits one line per event with a level, timestamp and logger name so zone
generation traces can be grepped or piped into a JSON log shipper.

Usage:
    from overworld.logging_utils import get_logger
    log = get_logger("overworld.generator")
    log.debug(event="zone_generated", zone="0,0:0", exits=2)

Environment:
    OVERWORLD_LOG_LEVEL   debug | info | warn | error (default info)
    OVERWORLD_LOG_JSON    1/true/yes/on to emit compact JSON instead
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
_TRUTHY = ("1", "true", "TRUE", "yes", "on")


def current_level() -> int:
    return LEVELS.get(os.getenv("OVERWORLD_LOG_LEVEL", "info").lower(), 20)


def json_mode() -> bool:
    return os.getenv("OVERWORLD_LOG_JSON", "0") in _TRUTHY


def _format(level: str, **fields) -> str:
    if json_mode():
        rec = {k: v for k, v in fields.items() if v is not None}
        rec["level"] = level
        rec["ts"] = int(time.time())
        return json.dumps(rec, separators=(",", ":"), default=str)
    parts = [f"level={level}", f"ts={int(time.time())}"]
    for k, v in fields.items():
        if v is None:
            continue
        if isinstance(v, (int, float)):
            parts.append(f"{k}={v}")
        else:
            parts.append(f"{k}={str(v).replace(' ', '_')}")
    return " ".join(parts)


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "overworld"

    def _log(self, lvl: str, **fields):
        # level is read per call so tests and the CLI can flip it at runtime
        if LEVELS[lvl] < current_level():
            return
        fields.setdefault("logger", self.name)
        print(_format(lvl, **fields), file=sys.stderr if lvl == "error" else sys.stdout)

    def debug(self, **fields):
        self._log("debug", **fields)

    def info(self, **fields):
        self._log("info", **fields)

    def warn(self, **fields):
        self._log("warn", **fields)

    def error(self, **fields):
        self._log("error", **fields)


_LOGGER_CACHE: dict[str, _Logger] = {}


def get_logger(name: str) -> _Logger:
    if name not in _LOGGER_CACHE:
        _LOGGER_CACHE[name] = _Logger(name)
    return _LOGGER_CACHE[name]


log = get_logger("overworld")
