"""Entity placement on a finished tile grid."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional, Set

from .entities import Direction, Entity, EntityKind, EntityState
from .errors import NoFloorAvailable
from .expander import Openings
from .level import Level
from .tiles import Coord, TileGrid, TileType

CELLS_PER_ENEMY = 20


def enemy_count(width: int, height: int) -> int:
    return max(1, (width * height) // CELLS_PER_ENEMY)


def floor_positions(tile_grid: TileGrid) -> List[Coord]:
    return [
        (x, y)
        for x, column in enumerate(tile_grid)
        for y, tile in enumerate(column)
        if tile.type is TileType.FLOOR
    ]


def assemble_level(
    tile_grid: TileGrid,
    openings: Openings,
    width: int,
    height: int,
    rng: random.Random,
    *,
    seed: Optional[int] = None,
    metrics: Optional[Dict[str, Any]] = None,
) -> Level:
    """Place player, door and enemies; raise NoFloorAvailable rather than overlap them.

    The player stands on the floor tile inside the entrance facing into the
    maze and the door on the tile inside the exit facing back toward the
    entrance. Enemies are drawn uniformly from the floor tiles, redrawn on
    any collision, with a random facing and the idle state.
    """
    floors = floor_positions(tile_grid)
    if not floors:
        raise NoFloorAvailable("Tile grid has no floor tiles to place entities on")
    floor_set = set(floors)

    player_pos = openings.start_tile
    door_pos = openings.end_tile
    if player_pos not in floor_set or door_pos not in floor_set:
        raise NoFloorAvailable(f"Entrance/exit tiles {player_pos}/{door_pos} are not floor")
    if player_pos == door_pos:
        raise NoFloorAvailable(f"Maze {width}x{height} has no room for distinct player and door cells")

    player = Entity(*player_pos, openings.entrance_side.opposite, EntityState.IDLE, EntityKind.PLAYER)
    door = Entity(*door_pos, openings.exit_side.opposite, EntityState.IDLE, EntityKind.DOOR)

    wanted = enemy_count(width, height)
    occupied: Set[Coord] = {player_pos, door_pos}
    if len(floor_set - occupied) < wanted:
        raise NoFloorAvailable(
            f"Maze {width}x{height} has {len(floor_set - occupied)} free floor tiles, {wanted} enemies required"
        )

    directions = list(Direction)
    enemies: List[Entity] = []
    retries = 0
    while len(enemies) < wanted:
        pos = rng.choice(floors)
        if pos in occupied:
            retries += 1
            continue
        occupied.add(pos)
        enemies.append(
            Entity(*pos, rng.choice(directions), EntityState.IDLE, EntityKind.SKELETON_WOODEN)
        )

    if metrics is not None:
        metrics["floor_tiles"] = len(floors)
        metrics["enemies_placed"] = len(enemies)
        metrics["placement_retries"] = retries

    return Level(
        tile_grid=tuple(tuple(column) for column in tile_grid),
        player=player,
        door=door,
        enemies=tuple(enemies),
        entrance=openings.entrance_tile,
        exit=openings.exit_tile,
        seed=seed,
    )


__all__ = ["enemy_count", "floor_positions", "assemble_level", "CELLS_PER_ENEMY"]
