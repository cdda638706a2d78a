# gridsearch/core/mazegen.py
#!/usr/bin/env python3
"""
Maze builders feeding the search session.

- random_walls: every cell independently becomes a wall with probability `density`.
- recursive_backtracker: start all-walls, carve a perfect maze on even
  coordinates by jumping two cells and knocking out the wall in between.
"""

import random
from typing import Collection, List, Optional

from gridsearch.core.errors import ConfigError
from gridsearch.core.types import Cell, Grid, PATH, WALL


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng if rng is not None else random.Random()


def _open(grid: Grid, keep_open: Collection[Cell]) -> Grid:
    for c in keep_open:
        if grid.in_bounds(c):
            grid.set_wall(c, False)
    return grid


def random_walls(rows: int, cols: int, density: float = 0.3,
                 rng: Optional[random.Random] = None,
                 keep_open: Collection[Cell] = ()) -> Grid:
    if not 0.0 <= density <= 1.0:
        raise ConfigError(f"wall density must be in [0, 1], got {density}")
    rng = _rng(rng)
    grid = Grid.empty(rows, cols)
    for r in range(rows):
        for c in range(cols):
            if rng.random() < density:
                grid.cells[r][c] = WALL
    return _open(grid, keep_open)


def recursive_backtracker(rows: int, cols: int,
                          rng: Optional[random.Random] = None,
                          keep_open: Collection[Cell] = ()) -> Grid:
    rng = _rng(rng)
    grid = Grid(rows, cols, [[WALL] * cols for _ in range(rows)])

    stack: List[Cell] = [(0, 0)]
    grid.cells[0][0] = PATH
    while stack:
        r, c = stack[-1]
        cand: List[Cell] = []
        # check four directions, jump by 2 to find the neighbouring room
        for dr, dc in ((-2, 0), (2, 0), (0, -2), (0, 2)):
            n = (r + dr, c + dc)
            if grid.in_bounds(n) and grid.is_wall(n):
                cand.append(n)
        if cand:
            nr, nc = rng.choice(cand)
            grid.cells[(r + nr) // 2][(c + nc) // 2] = PATH
            grid.cells[nr][nc] = PATH
            stack.append((nr, nc))
        else:
            stack.pop()
    return _open(grid, keep_open)
