"""
project: Overworld
module: world_api.py
License: MIT

JSON endpoints over the zone engine: read-through zone fetch, state
export/import, new game, and the two field mutations external collaborators
perform (permanent enemy kills and obstacle clearing by explosions).
"""

import logging
import threading
import uuid

from flask import Blueprint, current_app, jsonify, request

from overworld.world import WorldLoadError, WorldState, ZoneCoordinate, tier_for

bp_world = Blueprint("world", __name__)

# Generation mutates shared caches; the dev server may serve requests on threads.
_world_lock = threading.Lock()


def _world() -> WorldState:
    return current_app.extensions["overworld"]


def _coord_from(values, x_key="x", y_key="y", dim_key="dim") -> ZoneCoordinate:
    try:
        return ZoneCoordinate(int(values[x_key]), int(values[y_key]), int(values.get(dim_key, 0)))
    except KeyError as exc:
        raise ValueError(f"missing field: {exc.args[0]}") from None
    except (TypeError, ValueError):
        raise ValueError("coordinates must be integers") from None


@bp_world.errorhandler(ValueError)
def _bad_request(exc):
    return jsonify({"error": str(exc)}), 400


@bp_world.errorhandler(500)
def _server_error(exc):  # pragma: no cover - only reached on unexpected failures
    error_id = uuid.uuid4().hex[:8]
    logging.getLogger(__name__).exception("world api failure %s", error_id)
    return jsonify({"error": "internal error", "error_id": error_id}), 500


@bp_world.route("/api/world/zone")
def get_zone():
    """
    Return the zone at ?x=&y=&dim= generating it on first request.
    Response: { 'key', 'tier', 'zone': {grid, enemySeeds, isSpecial}, 'connections' }
    """
    coord = _coord_from(request.args)
    world = _world()
    with _world_lock:
        zone = world.generate_zone(coord)
        record = world.connections.get(coord)
        payload = {
            "key": coord.key(),
            "tier": tier_for(coord).value,
            "zone": zone.to_dict(),
            "connections": record.to_dict() if record is not None else {},
        }
    return jsonify(payload)


@bp_world.route("/api/world/state", methods=["GET"])
def export_state():
    with _world_lock:
        return jsonify(_world().to_dict())


@bp_world.route("/api/world/state", methods=["PUT"])
def import_state():
    data = request.get_json(silent=True)
    try:
        world = WorldState.from_dict(data, catalogue=_world().catalogue)
    except WorldLoadError as exc:
        return jsonify({"error": str(exc), "type": "world_load_error"}), 400
    with _world_lock:
        current_app.extensions["overworld"] = world
    return jsonify({"status": "loaded", "zones": len(world.store)})


@bp_world.route("/api/world/new-game", methods=["POST"])
def new_game():
    with _world_lock:
        _world().new_game()
    return jsonify({"status": "reset"})


@bp_world.route("/api/world/defeat", methods=["POST"])
def record_defeat():
    data = request.get_json(silent=True) or {}
    coord = _coord_from(data)
    try:
        enemy_id = int(data["id"])
    except (KeyError, TypeError, ValueError):
        raise ValueError("id must be an integer") from None
    with _world_lock:
        removed = _world().record_defeat(coord, enemy_id)
    return jsonify({"status": "recorded", "removed": removed})


@bp_world.route("/api/world/explode", methods=["POST"])
def explode():
    data = request.get_json(silent=True) or {}
    coord = _coord_from(data)
    try:
        tx, ty = int(data["tx"]), int(data["ty"])
    except (KeyError, TypeError, ValueError):
        raise ValueError("tx and ty must be integers") from None
    world = _world()
    if not (0 <= tx < world.config.grid_size and 0 <= ty < world.config.grid_size):
        raise ValueError("target outside zone")
    with _world_lock:
        if coord not in world.store:
            return jsonify({"error": "zone not generated"}), 404
        cleared = world.clear_obstacle(coord, tx, ty)
    return jsonify({"status": "ok", "cleared": cleared})
