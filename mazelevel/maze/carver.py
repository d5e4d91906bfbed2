"""Randomized depth-first carve producing a spanning-tree maze.

The carve walks an explicit stack rather than recursing so that large grids
cannot exhaust the interpreter's call depth. Every cell is visited exactly
once and exactly ``width * height - 1`` inter-cell walls are removed.
"""

from __future__ import annotations

import random
from typing import List

from .cells import CellGrid, Coord, carve_between, init_cells
from .errors import GenerationInvariantError


def _unvisited_neighbors(grid: CellGrid, x: int, y: int) -> List[Coord]:
    width, height = len(grid), len(grid[0])
    candidates: List[Coord] = []
    # Order fixed (top, right, bottom, left) so a seeded rng is reproducible
    if y > 0 and not grid[x][y - 1].visited:
        candidates.append((x, y - 1))
    if x + 1 < width and not grid[x + 1][y].visited:
        candidates.append((x + 1, y))
    if y + 1 < height and not grid[x][y + 1].visited:
        candidates.append((x, y + 1))
    if x > 0 and not grid[x - 1][y].visited:
        candidates.append((x - 1, y))
    return candidates


def carve_cells(width: int, height: int, rng: random.Random) -> CellGrid:
    grid = init_cells(width, height)
    stack: List[Coord] = [(0, 0)]
    grid[0][0].visited = True

    while stack:
        x, y = stack[-1]
        unvisited = _unvisited_neighbors(grid, x, y)
        if not unvisited:
            stack.pop()
            continue
        nxt = rng.choice(unvisited)
        carve_between(grid, (x, y), nxt)
        grid[nxt[0]][nxt[1]].visited = True
        stack.append(nxt)

    for column in grid:
        for cell in column:
            if not cell.visited:
                raise GenerationInvariantError(f"Carve left cell ({cell.x},{cell.y}) unvisited")
    return grid


__all__ = ["carve_cells"]
