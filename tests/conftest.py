import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from overworld import create_app  # noqa: E402
from overworld.world import WorldConfig, WorldState  # noqa: E402

TEST_SEED = 424242


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep developer shells / .env files from leaking world settings into tests."""
    for key in (
        "OVERWORLD_SEED", "OVERWORLD_GRID_SIZE", "OVERWORLD_EXIT_PROBABILITY", "OVERWORLD_ENABLE_METRICS",
        "WORLD_SEED", "WORLD_GRID_SIZE", "WORLD_FOOD_ASSETS", "WORLD_SAVE_PATH", "OVERWORLD_LOG_JSON",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("OVERWORLD_LOG_LEVEL", "warn")


@pytest.fixture()
def world():
    return WorldState(WorldConfig(seed=TEST_SEED))


@pytest.fixture()
def fresh_world():
    """Factory for independent worlds sharing a seed."""
    def _make(seed=TEST_SEED, **kwargs):
        return WorldState(WorldConfig(seed=seed, **kwargs))
    return _make


@pytest.fixture()
def test_app():
    app = create_app({"TESTING": True, "WORLD_SEED": TEST_SEED})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()
