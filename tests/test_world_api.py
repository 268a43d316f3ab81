from overworld import create_app


def _zone(client, x, y, dim=0):
    r = client.get(f"/api/world/zone?x={x}&y={y}&dim={dim}")
    assert r.status_code == 200
    return r.get_json()


def test_zone_endpoint_shape(client):
    data = _zone(client, 0, 0)
    assert data["key"] == "0,0:0"
    assert data["tier"] == "home"
    grid = data["zone"]["grid"]
    assert len(grid) == 9 and all(len(col) == 9 for col in grid)
    assert grid[1][1] == {"kind": "floor"}
    assert sum(1 for v in data["connections"].values() if v is not None) >= 2
    assert isinstance(data["zone"]["enemySeeds"], list)


def test_interior_zone_endpoint(client):
    data = _zone(client, 0, 0, dim=1)
    assert data["key"] == "0,0:1"
    assert data["connections"] == {}
    assert data["zone"]["enemySeeds"] == []
    assert data["zone"]["grid"][4][8] == {"kind": "port"}


def test_zone_endpoint_is_idempotent(client):
    first = _zone(client, 12, -4)
    second = _zone(client, 12, -4)
    assert first == second
    assert first["tier"] == "wilds"


def test_zone_endpoint_validates_params(client):
    assert client.get("/api/world/zone?x=1").status_code == 400
    r = client.get("/api/world/zone?x=a&y=2")
    assert r.status_code == 400
    assert "error" in r.get_json()


def test_state_export_and_import(client):
    _zone(client, 0, 0)
    _zone(client, 1, 0)
    state = client.get("/api/world/state").get_json()
    assert set(state["zones"]) == {"0,0:0", "1,0:0"}
    client.post("/api/world/new-game")
    assert client.get("/api/world/state").get_json()["zones"] == {}
    r = client.put("/api/world/state", json=state)
    assert r.status_code == 200
    assert r.get_json()["zones"] == 2
    assert _zone(client, 1, 0)["zone"] == state["zones"]["1,0:0"]


def test_import_rejects_corrupt_state(client):
    _zone(client, 0, 0)
    before = client.get("/api/world/state").get_json()
    r = client.put("/api/world/state", json={"version": 1, "seed": "x"})
    assert r.status_code == 400
    assert r.get_json()["type"] == "world_load_error"
    assert client.get("/api/world/state").get_json() == before


def test_defeat_removes_seed(client):
    data = _zone(client, 40, 3)
    seeds = data["zone"]["enemySeeds"]
    assert seeds
    target = seeds[0]["id"]
    r = client.post("/api/world/defeat", json={"x": 40, "y": 3, "dim": 0, "id": target})
    assert r.status_code == 200 and r.get_json()["removed"] is True
    after = _zone(client, 40, 3)["zone"]["enemySeeds"]
    assert target not in [s["id"] for s in after]
    assert f"40,3:0#{target}" in client.get("/api/world/state").get_json()["defeatedEnemies"]
    assert client.post("/api/world/defeat", json={"x": 40, "y": 3}).status_code == 400


def test_defeat_rejects_non_integer_id(client):
    _zone(client, 40, 3)
    for bad in (None, "abc", [1]):
        r = client.post("/api/world/defeat", json={"x": 40, "y": 3, "dim": 0, "id": bad})
        assert r.status_code == 400, bad
        assert "error" in r.get_json()


def test_explode_clears_rock(client):
    found = None
    for i in range(10):
        grid = _zone(client, 30 + i, 0)["zone"]["grid"]
        rocks = [(x, y) for x in range(1, 8) for y in range(1, 8) if grid[x][y]["kind"] == "rock"]
        if rocks:
            found = (30 + i, rocks[0])
            break
    assert found is not None
    zx, (tx, ty) = found
    r = client.post("/api/world/explode", json={"x": zx, "y": 0, "tx": tx, "ty": ty})
    assert r.status_code == 200 and r.get_json()["cleared"] is True
    assert _zone(client, zx, 0)["zone"]["grid"][tx][ty]["kind"] == "floor"


def test_explode_errors(client):
    assert client.post("/api/world/explode", json={"x": 77, "y": 77, "tx": 2, "ty": 2}).status_code == 404
    _zone(client, 0, 0)
    assert client.post("/api/world/explode", json={"x": 0, "y": 0, "tx": 0, "ty": 4}).status_code == 400
    assert client.post("/api/world/explode", json={"x": 0, "y": 0, "tx": 20, "ty": 4}).status_code == 400


def test_apps_do_not_share_worlds():
    a = create_app({"TESTING": True, "WORLD_SEED": 1}).test_client()
    b = create_app({"TESTING": True, "WORLD_SEED": 1}).test_client()
    _zone(a, 0, 0)
    assert b.get("/api/world/state").get_json()["zones"] == {}
