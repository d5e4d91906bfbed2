"""
project: mazelevel
module: level_api.py
License: MIT

Level generation API routes.

Thin JSON/text surface over :func:`mazelevel.maze.generate_level` for a
client-side renderer: it parses query parameters into a ``MazeConfig``,
maps generator errors onto HTTP status codes and caches seeded levels.
"""

import threading

from flask import Blueprint, Response, current_app, jsonify, request

from mazelevel.logging_utils import get_logger
from mazelevel.maze import (
    InvalidConfiguration,
    MazeConfig,
    MazeError,
    MazeGenerator,
    NoFloorAvailable,
    coerce_seed,
)

log = get_logger("mazelevel.api")

bp_level = Blueprint("level", __name__)

# (seed, width, height, ensure_reachable) -> (Level, metrics). Levels are immutable,
# so cached instances can be shared between requests.
_level_cache = {}
_level_cache_lock = threading.Lock()
_LEVEL_CACHE_MAX = 8


def get_cached_level(seed: int, width: int, height: int, ensure_reachable: bool = True):
    """Return ``(level, metrics)`` for a seeded config, generating on a cache miss."""
    config = MazeConfig(width=width, height=height, ensure_reachable=ensure_reachable, seed=seed)
    if current_app.config.get("MAZE_DISABLE_CACHE"):
        gen = MazeGenerator(config)
        return gen.generate(), gen.metrics
    key = (seed, width, height, ensure_reachable)
    with _level_cache_lock:
        hit = _level_cache.get(key)
    if hit is not None:
        return hit
    gen = MazeGenerator(config)
    entry = (gen.generate(), gen.metrics)
    with _level_cache_lock:
        _level_cache[key] = entry
        if len(_level_cache) > _LEVEL_CACHE_MAX:
            first_key = next(iter(_level_cache.keys()))
            if first_key != key:
                _level_cache.pop(first_key, None)
    return entry


def clear_cache():
    with _level_cache_lock:
        _level_cache.clear()


def _int_arg(name: str, default: int) -> int:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {raw!r}") from None


def _bool_arg(name: str, default: bool) -> bool:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    lowered = raw.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    raise InvalidConfiguration(f"{name} must be a boolean, got {raw!r}")


def _config_from_request() -> MazeConfig:
    cfg = current_app.config
    width = _int_arg("width", cfg["MAZE_DEFAULT_WIDTH"])
    height = _int_arg("height", cfg["MAZE_DEFAULT_HEIGHT"])
    limit = cfg["MAZE_MAX_DIMENSION"]
    if width > limit or height > limit:
        raise InvalidConfiguration(f"width and height must not exceed {limit}")
    seed_raw = request.args.get("seed")
    return MazeConfig(
        width=width,
        height=height,
        ensure_reachable=_bool_arg("ensure_reachable", cfg["MAZE_ENSURE_REACHABLE"]),
        seed=coerce_seed(seed_raw) if seed_raw else None,
    ).validate()


def _generate(config: MazeConfig):
    if config.seed is not None:
        return get_cached_level(config.seed, config.width, config.height, config.ensure_reachable)
    gen = MazeGenerator(config)
    return gen.generate(), gen.metrics


@bp_level.errorhandler(MazeError)
def _maze_error(e):
    if isinstance(e, InvalidConfiguration):
        status = 400
    elif isinstance(e, NoFloorAvailable):
        status = 422
    else:
        status = 500
    log.warn(event="level_request_rejected", path=request.path, status=status, error=str(e))
    return jsonify({"error": str(e)}), status


@bp_level.route("/api/level")
def level():
    """
    Generate a level.
    Query: width, height, ensure_reachable, seed (int or any string)
    Response: { 'seed': int, 'level': {...}, 'metrics': {...} }
    """
    config = _config_from_request()
    lvl, metrics = _generate(config)
    return jsonify({"seed": lvl.seed, "level": lvl.to_dict(), "metrics": metrics})


@bp_level.route("/api/level/ascii")
def level_ascii():
    config = _config_from_request()
    lvl, _metrics = _generate(config)
    return Response(lvl.to_ascii() + "\n", mimetype="text/plain", headers={"X-Maze-Seed": str(lvl.seed)})


@bp_level.route("/api/levels/<int:number>")
def numbered_level(number: int):
    """Return level ``number`` of the campaign; the same number always yields the same level."""
    if number < 1:
        raise InvalidConfiguration(f"level number must be 1 or greater, got {number}")
    cfg = current_app.config
    seed = coerce_seed(cfg["MAZE_CAMPAIGN_SEED"] + number)
    lvl, metrics = get_cached_level(
        seed, cfg["MAZE_DEFAULT_WIDTH"], cfg["MAZE_DEFAULT_HEIGHT"], cfg["MAZE_ENSURE_REACHABLE"]
    )
    return jsonify({"number": number, "seed": lvl.seed, "level": lvl.to_dict(), "metrics": metrics})
