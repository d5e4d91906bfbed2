"""Reachability checks over the cell graph and the expanded tile grid.

``is_reachable`` is a BFS over wall-gated cell moves. When no path exists,
``repair_reachability`` forces one by walking monotonically from start to end
and clearing the wall crossed at each step; it never backtracks, so it
finishes in ``|dx| + |dy|`` steps and always connects the two cells. A grid
that is already connected is left untouched.
"""

from __future__ import annotations

import random
from collections import deque
from typing import List, NamedTuple, Set

from ..logging_utils import get_logger
from .cells import CellGrid, Coord, carve_between, open_neighbors
from .tiles import TileGrid

log = get_logger("mazelevel.connectivity")


class RepairResult(NamedTuple):
    path: List[Coord]
    walls_cleared: int


def flood_cells(grid: CellGrid, start: Coord) -> Set[Coord]:
    q = deque([start])
    seen = {start}
    while q:
        x, y = q.popleft()
        for nxt in open_neighbors(grid, x, y):
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return seen


def is_reachable(grid: CellGrid, start: Coord, end: Coord) -> bool:
    if start == end:
        return True
    q = deque([start])
    seen = {start}
    while q:
        x, y = q.popleft()
        for nxt in open_neighbors(grid, x, y):
            if nxt == end:
                return True
            if nxt not in seen:
                seen.add(nxt)
                q.append(nxt)
    return False


def repair_reachability(grid: CellGrid, start: Coord, end: Coord, rng: random.Random) -> RepairResult:
    """Force a path from ``start`` to ``end``; leaves an already connected grid untouched."""
    if is_reachable(grid, start, end):
        return RepairResult([start], 0)
    cx, cy = start
    ex, ey = end
    path: List[Coord] = [start]
    cleared = 0
    while (cx, cy) != (ex, ey):
        dx_left = abs(ex - cx)
        dy_left = abs(ey - cy)
        if dx_left and dy_left:
            step_x = rng.random() < dx_left / (dx_left + dy_left)
        else:
            step_x = dx_left > 0
        if step_x:
            nxt = (cx + (1 if ex > cx else -1), cy)
        else:
            nxt = (cx, cy + (1 if ey > cy else -1))
        if carve_between(grid, (cx, cy), nxt):
            cleared += 1
        cx, cy = nxt
        path.append(nxt)
    if cleared:
        log.info(event="reachability_repair", start=start, end=end, steps=len(path) - 1, walls_cleared=cleared)
    return RepairResult(path, cleared)


def flood_tiles(tile_grid: TileGrid, start: Coord) -> Set[Coord]:
    """Return the set of passable tiles reachable from ``start`` (4-connected)."""
    w = len(tile_grid)
    h = len(tile_grid[0]) if w else 0
    sx, sy = start
    if not (0 <= sx < w and 0 <= sy < h) or not tile_grid[sx][sy].passable:
        return set()
    q = deque([start])
    seen = {start}
    while q:
        x, y = q.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < w and 0 <= ny < h and (nx, ny) not in seen and tile_grid[nx][ny].passable:
                seen.add((nx, ny))
                q.append((nx, ny))
    return seen


def tile_path_exists(tile_grid: TileGrid, start: Coord, end: Coord) -> bool:
    return end in flood_tiles(tile_grid, start)


__all__ = [
    "RepairResult",
    "flood_cells",
    "is_reachable",
    "repair_reachability",
    "flood_tiles",
    "tile_path_exists",
]
