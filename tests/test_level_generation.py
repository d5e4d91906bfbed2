import dataclasses
import json
import random

import pytest

from mazelevel.maze import (
    GenerationInvariantError,
    InvalidConfiguration,
    Level,
    MazeConfig,
    MazeGenerator,
    NoFloorAvailable,
    TileType,
    generate_level,
)
from mazelevel.maze import pipeline
from mazelevel.maze.cells import init_cells
from maze_test_utils import bfs_reachable


def _gen(w, h, seed, **kw):
    gen = MazeGenerator(MazeConfig(width=w, height=h, seed=seed, **kw), enable_metrics=True)
    return gen, gen.generate()


def test_ten_by_ten_level():
    gen, level = _gen(10, 10, seed=4242)
    assert level.width == 21 and level.height == 21
    assert len(level.enemies) == 5
    positions = [e.pos for e in level.occupants()]
    assert len(positions) == 7
    assert len(set(positions)) == len(positions)
    floors = set(level.floor_tiles())
    assert len(floors) == 100
    for x, y in positions:
        assert (x, y) in floors
        assert level.tile_at(x, y).type is TileType.FLOOR
    reach = bfs_reachable(level.tile_grid, level.entrance)
    assert level.exit in reach
    assert level.player.pos in reach and level.door.pos in reach
    assert level.seed == 4242


def test_single_cell_maze_raises_no_floor():
    with pytest.raises(NoFloorAvailable):
        generate_level(MazeConfig(width=1, height=1, seed=1))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"width": 0, "height": 5},
        {"width": 5, "height": -3},
        {"width": True, "height": 5},
        {"width": 5.0, "height": 5},
        {"width": "5", "height": 5},
        {"ensure_reachable": "yes"},
        {"seed": "abc"},
    ],
)
def test_invalid_configuration_fails_before_carving(monkeypatch, kwargs):
    calls = []
    monkeypatch.setattr(pipeline, "carve_cells", lambda *a: calls.append(a))
    with pytest.raises(InvalidConfiguration):
        generate_level(MazeConfig(**kwargs))
    assert calls == []


def test_invalid_configuration_is_a_value_error():
    with pytest.raises(ValueError):
        MazeConfig(width=0).validate()


@pytest.mark.parametrize("seed", range(12))
def test_generated_levels_hold_invariants(seed):
    rng = random.Random(seed)
    w, h = rng.randint(3, 14), rng.randint(1, 14)
    gen, level = _gen(w, h, seed)
    assert len(level.tile_grid) == 2 * w + 1
    assert all(len(col) == 2 * h + 1 for col in level.tile_grid)
    assert gen.metrics["walls_removed"] == w * h - 1
    assert gen.metrics["repairs_performed"] == 0
    assert gen.metrics["reachable_before_repair"] is True
    assert level.exit in bfs_reachable(level.tile_grid, level.entrance)
    assert len(level.enemies) == max(1, w * h // 20)


def test_same_seed_same_level():
    cfg = MazeConfig(width=12, height=9, seed=99)
    assert generate_level(cfg) == generate_level(cfg)


def test_injected_rng_is_reproducible_without_a_seed():
    cfg = MazeConfig(width=8, height=8)
    a = generate_level(cfg, random.Random(5))
    b = generate_level(cfg, random.Random(5))
    assert a == b
    assert a.seed is None


def test_injected_rng_overrides_config_seed_and_records_none():
    cfg = MazeConfig(width=6, height=6, seed=1)
    level = generate_level(cfg, random.Random(99))
    assert level.seed is None
    assert level == generate_level(MazeConfig(width=6, height=6), random.Random(99))


def test_recorded_seed_reproduces_level():
    for seed in (0, 1, 77):
        level = generate_level(MazeConfig(width=6, height=6, seed=seed))
        assert level.seed == seed
        assert generate_level(MazeConfig(width=6, height=6, seed=level.seed)) == level


def test_unseeded_runs_record_their_seed():
    level = generate_level(MazeConfig(width=6, height=6))
    assert isinstance(level.seed, int)
    again = generate_level(MazeConfig(width=6, height=6, seed=level.seed))
    assert again == level


def test_seed_zero_is_deterministic():
    assert generate_level(MazeConfig(width=5, height=5, seed=0)).seed == 0
    assert generate_level(MazeConfig(width=5, height=5, seed=0)) == generate_level(
        MazeConfig(width=5, height=5, seed=0)
    )


def test_skipping_reachability_still_generates():
    gen, level = _gen(7, 7, seed=3, ensure_reachable=False)
    assert "verify_repair" not in gen.metrics["phase_ms"]
    # a carved spanning tree connects everything anyway
    assert level.exit in bfs_reachable(level.tile_grid, level.entrance)


def test_level_is_immutable():
    level = generate_level(MazeConfig(width=4, height=4, seed=8))
    assert isinstance(level, Level)
    with pytest.raises(dataclasses.FrozenInstanceError):
        level.seed = 1
    with pytest.raises(dataclasses.FrozenInstanceError):
        level.player.x = 3
    assert level.spikes == () and level.bursts == ()


def test_to_dict_is_json_serializable():
    level = generate_level(MazeConfig(width=5, height=4, seed=21))
    data = json.loads(json.dumps(level.to_dict()))
    assert data["width"] == 11 and data["height"] == 9
    assert data["tile_grid"][1][1] == {"src": 1, "type": "FLOOR"}
    assert data["tile_grid"][0][0] == {"src": 16, "type": "WALL_LEFT_TOP"}
    assert data["tile_grid"][data["entrance"][0]][data["entrance"][1]] == {"src": None, "type": None}
    assert data["player"]["type"] == "PLAYER"
    assert data["door"]["type"] == "DOOR"
    assert {e["type"] for e in data["enemies"]} == {"SKELETON_WOODEN"}
    assert data["spikes"] == [] and data["bursts"] == []


def test_to_ascii_marks_entities():
    level = generate_level(MazeConfig(width=6, height=5, seed=13))
    rows = level.to_ascii().splitlines()
    assert len(rows) == 11 and all(len(r) == 13 for r in rows)
    px, py = level.player.pos
    dx, dy = level.door.pos
    assert rows[py][px] == "P"
    assert rows[dy][dx] == "D"
    assert sum(r.count("E") for r in rows) == len(level.enemies)
    ex, ey = level.entrance
    assert rows[ey][ex] == "."
    assert rows[0][0] == "#"


def test_metrics_cover_every_phase():
    gen, _ = _gen(9, 9, seed=1)
    m = gen.metrics
    for key in (
        "walls_removed",
        "reachable_before_repair",
        "repairs_performed",
        "repair_path_length",
        "floor_tiles",
        "enemies_placed",
        "placement_retries",
        "runtime_ms",
    ):
        assert key in m
    assert set(m["phase_ms"]) == {"carve", "open_borders", "verify_repair", "expand", "verify_tiles", "assemble"}
    assert m["floor_tiles"] == 81
    assert m["enemies_placed"] == 4


def test_metrics_can_be_disabled(monkeypatch):
    monkeypatch.setenv("MAZELEVEL_ENABLE_METRICS", "0")
    gen = MazeGenerator(MazeConfig(width=4, height=4, seed=2))
    gen.generate()
    assert gen.metrics == {}


def test_walled_in_carve_is_repaired(monkeypatch):
    def _closed(width, height, rng):
        grid = init_cells(width, height)
        for column in grid:
            for cell in column:
                cell.visited = True
        return grid

    monkeypatch.setattr(pipeline, "carve_cells", _closed)
    gen, level = _gen(6, 5, seed=7)
    assert gen.metrics["reachable_before_repair"] is False
    assert gen.metrics["repairs_performed"] == 1
    # entrance (0, 2) to exit (5, 2) is a straight run
    assert gen.metrics["repair_path_length"] == 5
    assert level.exit in bfs_reachable(level.tile_grid, level.entrance)


def test_unreachable_tiles_raise_invariant_error(monkeypatch):
    monkeypatch.setattr(pipeline, "tile_path_exists", lambda *a: False)
    with pytest.raises(GenerationInvariantError):
        generate_level(MazeConfig(width=5, height=5, seed=1))
