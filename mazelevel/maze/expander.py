"""Cell grid -> render tile grid expansion.

A ``width x height`` cell grid becomes a ``(2*width+1) x (2*height+1)`` tile
grid. Cell ``(x, y)`` lands on tile ``(2x+1, 2y+1)``; the tiles between two
cells hold either a wall or nothing (an opening), and every (even, even)
lattice point is a solid pillar. The outer ring is wall except for the
entrance and exit openings.

Expansion is deterministic: the same cells and openings always yield the
same tiles, so randomness stays confined to the carve and entity placement.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .cells import CellGrid, Coord, grid_size
from .entities import Direction
from .tiles import FLOOR_TILE, OPENING, MutableTileGrid, Tile, TileType


@dataclass(frozen=True)
class Openings:
    entrance_cell: Coord
    exit_cell: Coord
    entrance_side: Direction
    exit_side: Direction

    @property
    def entrance_tile(self) -> Coord:
        return _border_tile(self.entrance_cell, self.entrance_side)

    @property
    def exit_tile(self) -> Coord:
        return _border_tile(self.exit_cell, self.exit_side)

    @property
    def start_tile(self) -> Coord:
        """Floor tile just inside the entrance."""
        return cell_to_tile(self.entrance_cell)

    @property
    def end_tile(self) -> Coord:
        """Floor tile just inside the exit."""
        return cell_to_tile(self.exit_cell)


def cell_to_tile(cell: Coord) -> Coord:
    return (2 * cell[0] + 1, 2 * cell[1] + 1)


def _border_tile(cell: Coord, side: Direction) -> Coord:
    tx, ty = cell_to_tile(cell)
    dx, dy = side.delta
    return (tx + dx, ty + dy)


def choose_openings(width: int, height: int) -> Openings:
    """Entrance on the left border, exit on the right, both at mid height.

    A single-column maze (``width == 1``, ``height > 1``) runs top to bottom
    instead so the two openings lead to different cells.
    """
    if width == 1 and height > 1:
        return Openings((0, 0), (0, height - 1), Direction.TOP, Direction.BOTTOM)
    mid = height // 2
    return Openings((0, mid), (width - 1, mid), Direction.LEFT, Direction.RIGHT)


def wall_tile(x: int, y: int, tiles_w: int, tiles_h: int) -> Tile:
    """Pick the wall variant for tile (x, y) in a grid of the given tile size."""
    right, bottom = tiles_w - 1, tiles_h - 1
    if x == 0 and y == 0:
        return Tile.of(TileType.WALL_LEFT_TOP)
    if x == right and y == 0:
        return Tile.of(TileType.WALL_RIGHT_TOP)
    if x == 0 and y == bottom:
        return Tile.of(TileType.WALL_LEFT_BOTTOM)
    if x == right and y == bottom:
        return Tile.of(TileType.WALL_RIGHT_BOTTOM)
    if x in (0, right):
        return Tile.of(TileType.WALL_COLUMN)
    if y in (0, bottom):
        return Tile.of(TileType.WALL_ROW)
    # Interior: odd x sits between two vertically stacked cells
    if x % 2 == 1:
        return Tile.of(TileType.WALL_ROW)
    return Tile.of(TileType.WALL_COLUMN)


def expand_tiles(grid: CellGrid, openings: Openings) -> Tuple[Tuple[Tile, ...], ...]:
    width, height = grid_size(grid)
    tw, th = 2 * width + 1, 2 * height + 1
    tiles: MutableTileGrid = [[OPENING for _ in range(th)] for _ in range(tw)]

    for x in range(tw):
        for y in (0, th - 1):
            tiles[x][y] = wall_tile(x, y, tw, th)
    for y in range(th):
        for x in (0, tw - 1):
            tiles[x][y] = wall_tile(x, y, tw, th)

    for column in grid:
        for cell in column:
            cx, cy = cell_to_tile((cell.x, cell.y))
            tiles[cx][cy] = FLOOR_TILE
            for direction in Direction:
                if cell.has_wall(direction):
                    dx, dy = direction.delta
                    tiles[cx + dx][cy + dy] = wall_tile(cx + dx, cy + dy, tw, th)

    for x in range(2, tw - 1, 2):
        for y in range(2, th - 1, 2):
            tiles[x][y] = wall_tile(x, y, tw, th)

    for ox, oy in (openings.entrance_tile, openings.exit_tile):
        tiles[ox][oy] = OPENING

    return tuple(tuple(column) for column in tiles)


__all__ = ["Openings", "cell_to_tile", "choose_openings", "wall_tile", "expand_tiles"]
