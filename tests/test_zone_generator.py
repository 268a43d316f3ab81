from overworld.world import ORIGIN, Tier, WorldConfig, WorldState, ZoneCoordinate, tier_for
from overworld.world.config import ENEMY_COUNT_RANGES, OBSTACLE_RANGES
from overworld.world.zone import defeat_key
from world_test_utils import bfs_reachable, inward_of, iter_exits, kind_grid, near_center, spiral

OBSTACLES = {"rock", "shrubbery", "grass"}


def test_origin_zone_layout(world):
    zone = world.generate_zone(ZoneCoordinate(0, 0, 0))
    grid = kind_grid(zone)
    size = len(grid)
    assert size == 9 and all(len(col) == 9 for col in grid)
    exits = 0
    for x in range(size):
        for y in range(size):
            if x in (0, size - 1) or y in (0, size - 1):
                assert grid[x][y] in ("wall", "exit")
                exits += grid[x][y] == "exit"
    assert exits >= 2
    for corner in ((0, 0), (0, 8), (8, 0), (8, 8)):
        assert grid[corner[0]][corner[1]] == "wall"
    assert grid[1][1] == "floor"
    assert zone.tile_at(1, 1).walkable
    assert not zone.tile_at(0, 0).walkable


def test_home_house_avoids_center(world):
    zone = world.generate_zone(ORIGIN)
    grid = kind_grid(zone)
    house = sum(col.count("multi_tile") for col in grid)
    assert house in (0, 9)
    assert grid[4][4] != "multi_tile"
    if house:
        signs = [cell.data["message_id"] for col in zone.grid for cell in col if cell.kind == "sign"]
        assert "woodcutters_club" in signs


def test_tier_boundaries():
    assert tier_for(ZoneCoordinate(2, -2)) is Tier.HOME
    assert tier_for(ZoneCoordinate(3, 0)) is Tier.WOODS
    assert tier_for(ZoneCoordinate(-8, 8)) is Tier.WOODS
    assert tier_for(ZoneCoordinate(9, 0)) is Tier.WILDS
    assert tier_for(ZoneCoordinate(4, 16)) is Tier.WILDS
    assert tier_for(ZoneCoordinate(0, -17)) is Tier.FRONTIER
    assert tier_for(ZoneCoordinate(50, 50)) is Tier.FRONTIER


def test_frontier_zone_density(world):
    coord = ZoneCoordinate(50, 50, 0)
    assert tier_for(coord) is Tier.FRONTIER
    zone = world.generate_zone(coord)
    obstacles = sum(1 for col in kind_grid(zone) for k in col if k in OBSTACLES)
    assert 0 < obstacles <= OBSTACLE_RANGES[Tier.FRONTIER][1]
    lo, hi = ENEMY_COUNT_RANGES[Tier.FRONTIER]
    assert lo <= len(zone.enemy_seeds) <= hi


def test_frontier_enemy_counts_exceed_woods(world):
    frontier = [world.generate_zone(ZoneCoordinate(40 + i, -30)) for i in range(20)]
    woods = [world.generate_zone(ZoneCoordinate(5, -6 + i)) for i in range(12)]
    assert all(1 <= len(z.enemy_seeds) <= 4 for z in frontier)
    assert all(len(z.enemy_seeds) <= 2 for z in woods)
    assert sum(len(z.enemy_seeds) for z in frontier) / 20 > sum(len(z.enemy_seeds) for z in woods) / 12
    assert ENEMY_COUNT_RANGES[Tier.FRONTIER][1] > ENEMY_COUNT_RANGES[Tier.WOODS][1]


def test_enemy_seeds_sit_on_free_floor(world):
    for coord in spiral(40):
        zone = world.generate_zone(coord)
        cells = [(s.x, s.y) for s in zone.enemy_seeds]
        assert len(cells) == len(set(cells))
        for s in zone.enemy_seeds:
            assert zone.grid[s.x][s.y].kind == "floor"
            assert (s.x, s.y) != (1, 1)
            assert s.enemy_kind in world.catalogue.enemy_table(tier_for(coord))


def test_generation_is_deterministic(fresh_world):
    a, b = fresh_world(), fresh_world()
    for coord in (ZoneCoordinate(7, -3), ZoneCoordinate(-20, 11), ZoneCoordinate(0, 1, 2)):
        za, zb = a.generate_zone(coord), b.generate_zone(coord)
        assert kind_grid(za) == kind_grid(zb)
        assert za == zb


def test_different_seeds_change_layout(fresh_world):
    coords = [ZoneCoordinate(9 + i, 2) for i in range(6)]
    a, b = fresh_world(seed=1), fresh_world(seed=2)
    assert [kind_grid(a.generate_zone(c)) for c in coords] != [kind_grid(b.generate_zone(c)) for c in coords]


def test_regenerate_returns_stored_zone(world):
    coord = ZoneCoordinate(3, 3)
    first = world.generate_zone(coord)
    flags = world.flags.to_dict()
    second = world.generate_zone(coord)
    assert second is first
    assert world.flags.to_dict() == flags
    assert world.generator.metrics["cache_hits"] == 1


def test_exits_reach_center():
    world = WorldState(WorldConfig(seed=99))
    for dim in (0, 2):
        for coord in spiral(80, dim=dim):
            grid = kind_grid(world.generate_zone(coord))
            size = len(grid)
            for ex, ey in iter_exits(grid):
                start = inward_of(ex, ey, size)
                assert grid[start[0]][start[1]] == "floor", (coord, ex, ey)
                assert near_center(bfs_reachable(grid, start), size), (coord, ex, ey)


def test_exits_match_connection_record(world):
    for coord in spiral(25):
        grid = kind_grid(world.generate_zone(coord))
        rec = world.connections.get(coord)
        assert rec.resolved
        assert len(list(iter_exits(grid))) == rec.exit_count()


def test_underground_palette(world):
    for coord in spiral(30, dim=2):
        kinds = {k for col in kind_grid(world.generate_zone(coord)) for k in col}
        assert not kinds & {"grass", "shrubbery", "multi_tile"}


def test_defeated_enemies_do_not_respawn(fresh_world):
    coord = ZoneCoordinate(30, 2)
    original = fresh_world().generate_zone(coord)
    assert original.enemy_seeds
    killed = original.enemy_seeds[0]
    again = fresh_world()
    again.defeated_keys.add(defeat_key(coord, killed.id))
    regenerated = again.generate_zone(coord)
    assert killed.id not in {s.id for s in regenerated.enemy_seeds}
    assert regenerated.enemy_seeds == original.enemy_seeds[1:]
    assert again.generator.metrics["enemies_suppressed"] == 1


def test_metrics_accumulate(world):
    for coord in spiral(9):
        world.generate_zone(coord)
    m = world.generator.metrics
    assert m["zones_generated"] == 9
    assert m["exits_carved"] >= 9
    assert "ensure_chunk" in m["phase_ms"] and "enemies" in m["phase_ms"]


def test_metrics_can_be_disabled():
    world = WorldState(WorldConfig(seed=5, enable_metrics=False))
    world.generate_zone(ORIGIN)
    assert world.generator.metrics == {}


INTERIOR_KINDS = {"floor", "wall", "port", "food", "water"}


def test_interiors_hold_no_enemies_or_unique_features(world):
    for coord in spiral(121, dim=1):
        zone = world.generate_zone(coord)
        grid = kind_grid(zone)
        assert zone.enemy_seeds == [], coord
        assert not zone.is_special
        assert {k for col in grid for k in col} <= INTERIOR_KINDS, coord
        ports = [(x, y) for x in range(9) for y in range(9) if grid[x][y] == "port"]
        assert ports == [(4, 8)], coord
        assert near_center(bfs_reachable(grid, (4, 7)), 9), coord
    assert not any(world.flags.to_dict().values())
    assert len(world.connections) == 0


def test_home_interior_items_sit_on_table_spots(world):
    grid = kind_grid(world.generate_zone(ZoneCoordinate(0, 0, 1)))
    items = [(x, y) for x in range(9) for y in range(9) if grid[x][y] in ("food", "water")]
    assert 1 <= len(items) <= 2
    assert set(items) <= {(6, 6), (5, 7), (6, 7)}


def test_shack_interiors_stock_two_to_seven_items(world):
    counts = []
    for coord in spiral(121, dim=1)[1:]:
        grid = kind_grid(world.generate_zone(coord))
        items = [(x, y) for x in range(9) for y in range(9) if grid[x][y] in ("food", "water")]
        assert all(2 <= y <= 6 for _, y in items), coord
        counts.append(len(items))
    assert min(counts) >= 2 and max(counts) <= 7
    assert any(c > 2 for c in counts)


def test_interior_does_not_disturb_surface(fresh_world):
    plain = fresh_world()
    mixed = fresh_world()
    for coord in spiral(20, dim=1):
        mixed.generate_zone(coord)
    for coord in spiral(25):
        assert mixed.generate_zone(coord) == plain.generate_zone(coord)
    assert mixed.flags == plain.flags
