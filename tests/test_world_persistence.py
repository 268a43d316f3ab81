import json

import pytest

from overworld.world import WorldConfig, WorldLoadError, WorldState, ZoneCoordinate
from world_test_utils import kind_grid, region, spiral


def _played_world(seed=2024):
    world = WorldState(WorldConfig(seed=seed))
    for coord in spiral(40):
        world.generate_zone(coord)
    zone = world.generate_zone(ZoneCoordinate(20, 0))
    world.record_defeat(ZoneCoordinate(20, 0), zone.enemy_seeds[0].id)
    return world


def _reload(world):
    return WorldState.from_dict(json.loads(json.dumps(world.to_dict())))


def test_round_trip_reproduces_grids():
    world = _played_world()
    loaded = _reload(world)
    assert len(loaded.store) == len(world.store)
    for coord, zone in world.store.items():
        assert loaded.store.get(coord) == zone
    assert loaded.connections.records == world.connections.records
    assert loaded.flags == world.flags
    assert loaded.defeated_keys == world.defeated_keys
    assert loaded.config.seed == world.config.seed


def test_loaded_zone_returned_unchanged_without_flag_changes():
    loaded = _reload(_played_world())
    coord = ZoneCoordinate(1, -1)
    stored = loaded.store.get(coord)
    before = kind_grid(stored)
    flags = loaded.flags.to_dict()
    assert loaded.generate_zone(coord) is stored
    assert kind_grid(stored) == before
    assert loaded.flags.to_dict() == flags


def test_resumed_world_continues_identically():
    world = _played_world()
    loaded = _reload(world)
    for coord in region(6, -5, 1):
        assert loaded.generate_zone(coord) == world.generate_zone(coord)
    assert loaded.flags == world.flags


def test_interior_zones_round_trip_without_connection_records():
    world = _played_world()
    home = ZoneCoordinate(0, 0, 1)
    shack = ZoneCoordinate(3, -2, 1)
    world.generate_zone(home)
    world.generate_zone(shack)
    loaded = _reload(world)
    assert loaded.connections.get(shack) is None
    assert loaded.store.get(home) == world.store.get(home)
    assert loaded.generate_zone(shack) == world.store.get(shack)


def test_save_and_load_file(tmp_path):
    world = _played_world()
    path = tmp_path / "world.json"
    world.save(path)
    loaded = WorldState.load(path)
    assert loaded.to_dict() == world.to_dict()


def test_invalid_json_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(WorldLoadError):
        WorldState.load(path)


def test_corrupt_seam_is_a_load_error():
    data = _played_world().to_dict()
    key = next(k for k, rec in data["connections"].items() if rec.get("east") is not None and len(rec) == 4)
    old = data["connections"][key]["east"]
    data["connections"][key]["east"] = 2 if old != 2 else 3
    with pytest.raises(WorldLoadError):
        WorldState.from_dict(data)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.update(version=99),
        lambda d: d.update(seed="abc"),
        lambda d: d["zones"].update({"nonsense": d["zones"]["0,0:0"]}),
        lambda d: d["zones"]["0,0:0"]["grid"][3].__setitem__(3, {"kind": "dragon"}),
        lambda d: d["zones"]["0,0:0"]["grid"].pop(),
        lambda d: d["flags"].update(axe="yes"),
        lambda d: d.update(defeatedEnemies=[1, 2]),
        lambda d: d["zones"].update({"500,500:0": d["zones"]["0,0:0"]}),
        lambda d: d["connections"].update({"0,0:0": {"north": "x"}}),
    ],
)
def test_malformed_state_rejected(mutate):
    data = json.loads(json.dumps(_played_world().to_dict()))
    mutate(data)
    with pytest.raises(WorldLoadError):
        WorldState.from_dict(data)


def test_not_an_object():
    with pytest.raises(WorldLoadError):
        WorldState.from_dict(["zones"])


def test_config_mismatch_rejected():
    data = _played_world().to_dict()
    with pytest.raises(WorldLoadError):
        WorldState.from_dict(data, config=WorldConfig(seed=1))
