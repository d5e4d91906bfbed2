"""
project: mazelevel
module: __init__.py
License: MIT

Flask application factory for the maze level service.

The generator itself lives in :mod:`mazelevel.maze` and has no web
dependencies of its own; this module only wires the HTTP blueprint around it.
Configuration is sourced from environment variables (optionally from a
``.env`` file) with defaults suited to a single-screen level. Generation
defaults are parsed by :meth:`MazeConfig.from_env`, the same reader the CLI
uses, so both surfaces agree on MAZE_* values.
"""

import os

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so MAZE_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def _load_version() -> str:
    try:
        with open(os.path.join(os.path.dirname(os.path.abspath(__file__)), "VERSION"), "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.0.0"


__version__ = _load_version()


def create_app(overrides: dict | None = None) -> Flask:
    """Build a Flask app serving generated levels.

    ``overrides`` is applied last, after environment defaults, which is how
    tests pin sizes or disable the level cache. Malformed MAZE_* values raise
    :class:`~mazelevel.maze.InvalidConfiguration`.
    """
    from mazelevel.maze import MazeConfig
    from mazelevel.maze.config import env_flag, env_int

    defaults = MazeConfig.from_env()
    app = Flask(__name__, instance_relative_config=True)
    app.config.update(
        MAZE_DEFAULT_WIDTH=defaults.width,
        MAZE_DEFAULT_HEIGHT=defaults.height,
        MAZE_ENSURE_REACHABLE=defaults.ensure_reachable,
        MAZE_MAX_DIMENSION=env_int("MAZE_MAX_DIMENSION", 100),
        MAZE_CAMPAIGN_SEED=env_int("MAZE_CAMPAIGN_SEED", 1000),
        MAZE_DISABLE_CACHE=env_flag("MAZE_DISABLE_CACHE", False),
    )
    if overrides:
        app.config.update(overrides)

    from mazelevel.routes.level_api import bp_level

    app.register_blueprint(bp_level)

    @app.route("/healthz")
    def healthz():
        return jsonify({"status": "ok", "version": __version__})

    return app
