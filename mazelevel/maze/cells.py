"""Logical maze cells: four wall flags per cell, grid indexed ``grid[x][y]``."""

from __future__ import annotations

from typing import Dict, Iterator, List, Tuple

from .entities import Direction

Coord = Tuple[int, int]

# Wall flag order within Cell.walls
TOP, RIGHT, BOTTOM, LEFT = 0, 1, 2, 3

WALL_INDEX: Dict[Direction, int] = {
    Direction.TOP: TOP,
    Direction.RIGHT: RIGHT,
    Direction.BOTTOM: BOTTOM,
    Direction.LEFT: LEFT,
}


class Cell:
    """Lightweight container for one maze cell."""

    __slots__ = ("x", "y", "visited", "walls")

    def __init__(self, x: int, y: int):
        self.x = x
        self.y = y
        self.visited = False
        self.walls = [True, True, True, True]

    def has_wall(self, direction: Direction) -> bool:
        return self.walls[WALL_INDEX[direction]]

    def __repr__(self):
        flags = "".join(d.value[0] if self.has_wall(d) else "." for d in Direction)
        return f"Cell({self.x},{self.y},{flags})"


CellGrid = List[List[Cell]]


def init_cells(width: int, height: int) -> CellGrid:
    return [[Cell(x, y) for y in range(height)] for x in range(width)]


def grid_size(grid: CellGrid) -> Tuple[int, int]:
    return len(grid), len(grid[0]) if grid else 0


def in_bounds(grid: CellGrid, x: int, y: int) -> bool:
    width, height = grid_size(grid)
    return 0 <= x < width and 0 <= y < height


def direction_between(a: Coord, b: Coord) -> Direction:
    """Direction of the step from ``a`` to the orthogonally adjacent ``b``."""
    delta = (b[0] - a[0], b[1] - a[1])
    for direction in Direction:
        if direction.delta == delta:
            return direction
    raise ValueError(f"Cells {a} and {b} are not adjacent")


def carve_between(grid: CellGrid, a: Coord, b: Coord) -> bool:
    """Clear the shared wall of two adjacent cells; True if a wall was present."""
    direction = direction_between(a, b)
    here = grid[a[0]][a[1]]
    there = grid[b[0]][b[1]]
    had_wall = here.walls[WALL_INDEX[direction]] or there.walls[WALL_INDEX[direction.opposite]]
    here.walls[WALL_INDEX[direction]] = False
    there.walls[WALL_INDEX[direction.opposite]] = False
    return had_wall


def open_border(grid: CellGrid, cell: Coord, side: Direction) -> None:
    """Clear an outer wall flag of a border cell (entrance/exit carve)."""
    x, y = cell
    dx, dy = side.delta
    if in_bounds(grid, x + dx, y + dy):
        raise ValueError(f"Cell {cell} has a neighbour on side {side.value}; not a border wall")
    grid[x][y].walls[WALL_INDEX[side]] = False


def open_neighbors(grid: CellGrid, x: int, y: int) -> Iterator[Coord]:
    """Yield in-bounds neighbours reachable through a cleared wall."""
    cell = grid[x][y]
    for direction in Direction:
        if cell.has_wall(direction):
            continue
        dx, dy = direction.delta
        nx, ny = x + dx, y + dy
        if in_bounds(grid, nx, ny):
            yield (nx, ny)


def count_open_passages(grid: CellGrid) -> int:
    """Number of cleared walls between pairs of cells (border walls excluded)."""
    width, height = grid_size(grid)
    opened = 0
    for x in range(width):
        for y in range(height):
            cell = grid[x][y]
            if x + 1 < width and not cell.walls[RIGHT]:
                opened += 1
            if y + 1 < height and not cell.walls[BOTTOM]:
                opened += 1
    return opened


__all__ = [
    "Cell",
    "CellGrid",
    "Coord",
    "TOP",
    "RIGHT",
    "BOTTOM",
    "LEFT",
    "WALL_INDEX",
    "init_cells",
    "grid_size",
    "in_bounds",
    "direction_between",
    "carve_between",
    "open_border",
    "open_neighbors",
    "count_open_passages",
]
