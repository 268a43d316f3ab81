"""
project: Overworld
module: __init__.py
License: MIT

Flask application factory.

Configuration is sourced from environment variables (optionally from a
``.env`` file) with development defaults. Each app owns one WorldState
stored under ``app.extensions["overworld"]``.
"""

import os

from dotenv import load_dotenv
from flask import Flask

from overworld.logging_utils import log
from overworld.world import ContentCatalogue, WorldConfig, WorldLoadError, WorldState

# Load .env if present so WORLD_SEED etc. can be supplied without exporting
# shell variables during development.
load_dotenv()


def _env_int(name: str):
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


def build_world(config) -> WorldState:
    """Create the WorldState for an app config mapping.

    When WORLD_SAVE_PATH points at an existing file the session resumes from
    it; a corrupt save raises WorldLoadError instead of starting over.
    """
    catalogue = ContentCatalogue()
    if config.get("WORLD_FOOD_ASSETS") is not None:
        catalogue.food_assets = tuple(config["WORLD_FOOD_ASSETS"])
    save_path = config.get("WORLD_SAVE_PATH")
    if save_path and os.path.exists(save_path):
        return WorldState.load(save_path, catalogue)
    world_config = WorldConfig.from_env(
        seed=config.get("WORLD_SEED"),
        grid_size=config.get("WORLD_GRID_SIZE"),
        enable_metrics=config.get("WORLD_ENABLE_METRICS"),
    )
    return WorldState(world_config, catalogue)


def create_app(config_overrides=None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)
    food_assets = os.getenv("WORLD_FOOD_ASSETS")
    app.config.update(
        SECRET_KEY=os.getenv("SECRET_KEY", "dev-secret-change-me"),
        WORLD_SEED=_env_int("WORLD_SEED"),
        WORLD_GRID_SIZE=_env_int("WORLD_GRID_SIZE"),
        WORLD_FOOD_ASSETS=[a.strip() for a in food_assets.split(",") if a.strip()] if food_assets else None,
        WORLD_SAVE_PATH=os.getenv("WORLD_SAVE_PATH"),
        WORLD_ENABLE_METRICS=None,
    )
    if config_overrides:
        app.config.update(config_overrides)

    try:
        world = build_world(app.config)
    except WorldLoadError as exc:
        log.error(event="world_load_failed", path=app.config.get("WORLD_SAVE_PATH"), error=str(exc))
        raise
    app.extensions["overworld"] = world

    from overworld.routes.world_api import bp_world

    app.register_blueprint(bp_world)
    log.info(event="app_created", seed=world.config.seed, grid_size=world.config.grid_size)
    return app
