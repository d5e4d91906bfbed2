"""Minimal structured logging helper.

Emits one line per event as ``key=value`` pairs (or a JSON object) with a
timestamp, level and logger name, so generation runs and API rejections can
be grepped or shipped to a log parser without configuring stdlib logging.

Usage:
    from mazelevel.logging_utils import get_logger
    log = get_logger("mazelevel.pipeline")
    log.info(event="maze_generated", seed=42, width=15, height=15)

Environment:
    MAZELEVEL_LOG_LEVEL  debug | info | warn | error (default: info)
    MAZELEVEL_LOG_JSON   1/true/yes/on for JSON lines

Coordinates render compactly in key=value mode (``start=0,5``); booleans as
``1``/``0``. Reserved keys: level, ts, logger. ``None`` values are dropped.
"""

from __future__ import annotations

import json
import os
import sys
import time

LEVELS = {"debug": 10, "info": 20, "warn": 30, "error": 40}
CURRENT_LEVEL = LEVELS.get(os.getenv("MAZELEVEL_LOG_LEVEL", "info").lower(), 20)
JSON_MODE = os.getenv("MAZELEVEL_LOG_JSON", "0") in ("1", "true", "TRUE", "yes", "on")


def _kv_value(v) -> str:
    if isinstance(v, bool):
        return "1" if v else "0"
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, (tuple, list)):
        return ",".join(_kv_value(item) for item in v)
    return str(v).replace(" ", "_")


def _format(level: str, **fields) -> str:
    fields = {k: v for k, v in fields.items() if v is not None}
    ts = int(time.time())
    if JSON_MODE:
        return json.dumps({**fields, "level": level, "ts": ts}, separators=(",", ":"), default=str)
    head = [f"level={level}", f"ts={ts}"]
    return " ".join(head + [f"{k}={_kv_value(v)}" for k, v in fields.items()])


class _Logger:
    def __init__(self, name: str | None = None):
        self.name = name or "mazelevel"

    def enabled(self, lvl: str) -> bool:
        return LEVELS[lvl] >= CURRENT_LEVEL

    def _log(self, lvl: str, **fields):
        if not self.enabled(lvl):
            return
        fields.setdefault("logger", self.name)
        stream = sys.stderr if lvl == "error" else sys.stdout
        print(_format(lvl, **fields), file=stream)

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


log = get_logger("mazelevel")
