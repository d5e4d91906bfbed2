import os
import random
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from mazelevel import create_app  # noqa: E402
from mazelevel.routes.level_api import clear_cache  # noqa: E402


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture()
def test_app():
    app = create_app(
        {
            "TESTING": True,
            "MAZE_DEFAULT_WIDTH": 15,
            "MAZE_DEFAULT_HEIGHT": 15,
            "MAZE_ENSURE_REACHABLE": True,
            "MAZE_MAX_DIMENSION": 100,
            "MAZE_CAMPAIGN_SEED": 1000,
            "MAZE_DISABLE_CACHE": False,
        }
    )
    return app


@pytest.fixture()
def client(test_app):
    clear_cache()
    yield test_app.test_client()
    clear_cache()


@pytest.fixture(autouse=True)
def _isolate_maze_env(monkeypatch):
    """Keep developer MAZE_* variables from leaking into generation defaults."""
    for key in ("MAZE_WIDTH", "MAZE_HEIGHT", "MAZE_ENSURE_REACHABLE", "MAZE_SEED", "MAZELEVEL_ENABLE_METRICS"):
        monkeypatch.delenv(key, raising=False)
