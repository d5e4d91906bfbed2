import random

import pytest

from mazelevel.maze.assembler import assemble_level, enemy_count
from mazelevel.maze.carver import carve_cells
from mazelevel.maze.entities import Direction, EntityKind, EntityState
from mazelevel.maze.errors import NoFloorAvailable
from mazelevel.maze.expander import choose_openings, expand_tiles
from mazelevel.maze.tiles import Tile, TileType


class ScriptedRng:
    """Returns scripted positions from choice() first, then defers to a seeded Random."""

    def __init__(self, picks, seed=0):
        self._rng = random.Random(seed)
        self.picks = list(picks)

    def random(self):
        return self._rng.random()

    def choice(self, seq):
        if self.picks and self.picks[0] in seq:
            return self.picks.pop(0)
        return self._rng.choice(seq)


def _tiles(w, h, seed=0):
    openings = choose_openings(w, h)
    return expand_tiles(carve_cells(w, h, random.Random(seed)), openings), openings


@pytest.mark.parametrize(
    "w,h,expected",
    [(1, 1, 1), (4, 5, 1), (3, 7, 1), (5, 8, 2), (10, 10, 5), (20, 20, 20)],
)
def test_enemy_count_formula(w, h, expected):
    assert enemy_count(w, h) == expected


def test_player_and_door_at_openings():
    tiles, o = _tiles(10, 10, seed=2)
    level = assemble_level(tiles, o, 10, 10, random.Random(2))
    assert level.player.pos == (1, 11)
    assert level.player.direction is Direction.RIGHT
    assert level.player.type is EntityKind.PLAYER
    assert level.door.pos == (19, 11)
    assert level.door.direction is Direction.LEFT
    assert level.door.type is EntityKind.DOOR
    assert level.player.state is EntityState.IDLE and level.door.state is EntityState.IDLE


def test_vertical_layout_facing():
    tiles, o = _tiles(1, 3)
    level = assemble_level(tiles, o, 1, 3, random.Random(0))
    assert level.player.pos == (1, 1) and level.player.direction is Direction.BOTTOM
    assert level.door.pos == (1, 5) and level.door.direction is Direction.TOP
    assert [e.pos for e in level.enemies] == [(1, 3)]


def test_three_cell_corridor_fills_every_floor_tile():
    tiles, o = _tiles(3, 1)
    level = assemble_level(tiles, o, 3, 1, random.Random(5))
    assert {level.player.pos, level.door.pos, level.enemies[0].pos} == {(1, 1), (3, 1), (5, 1)}


def test_enemies_are_skeletons_on_distinct_floor_tiles():
    tiles, o = _tiles(12, 9, seed=8)
    level = assemble_level(tiles, o, 12, 9, random.Random(8))
    assert len(level.enemies) == enemy_count(12, 9)
    positions = [level.player.pos, level.door.pos] + [e.pos for e in level.enemies]
    assert len(set(positions)) == len(positions)
    for e in level.enemies:
        assert tiles[e.x][e.y].type is TileType.FLOOR
        assert e.type is EntityKind.SKELETON_WOODEN
        assert e.state is EntityState.IDLE
        assert isinstance(e.direction, Direction)


def test_collisions_are_redrawn():
    tiles, o = _tiles(3, 1)
    metrics = {}
    rng = ScriptedRng([(1, 1), (5, 1), (1, 1), (3, 1)])
    level = assemble_level(tiles, o, 3, 1, rng, metrics=metrics)
    assert level.enemies[0].pos == (3, 1)
    assert metrics["placement_retries"] == 3
    assert metrics["floor_tiles"] == 3
    assert metrics["enemies_placed"] == 1


def test_single_cell_cannot_hold_player_and_door():
    tiles, o = _tiles(1, 1)
    with pytest.raises(NoFloorAvailable):
        assemble_level(tiles, o, 1, 1, random.Random(0))


@pytest.mark.parametrize("w,h", [(2, 1), (1, 2)])
def test_two_cells_leave_no_room_for_an_enemy(w, h):
    tiles, o = _tiles(w, h)
    with pytest.raises(NoFloorAvailable, match="enemies required"):
        assemble_level(tiles, o, w, h, random.Random(0))


def test_grid_without_floor_fails_fast():
    wall = Tile.of(TileType.WALL_ROW)
    tiles = tuple(tuple(wall for _ in range(3)) for _ in range(3))
    with pytest.raises(NoFloorAvailable, match="no floor"):
        assemble_level(tiles, choose_openings(1, 1), 1, 1, random.Random(0))


def test_reserved_entity_lists_are_empty():
    tiles, o = _tiles(5, 5)
    level = assemble_level(tiles, o, 5, 5, random.Random(1), seed=77)
    assert level.spikes == () and level.bursts == ()
    assert level.seed == 77
