# gridsearch/core/neighbors.py
#!/usr/bin/env python3
from typing import Collection, List, Tuple

from gridsearch.core.types import Cell, Grid

# up, down, left, right; order decides ties between equal-cost expansions
DIRECTIONS: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def neighbors(grid: Grid, c: Cell, open_cells: Collection[Cell] = ()) -> List[Cell]:
    """Return in-bounds 4-connected neighbors of c that are not walls.

    Cells in open_cells (start, goals) count as passable whatever the grid says.
    """
    r, col = c
    out: List[Cell] = []
    for dr, dc in DIRECTIONS:
        n = (r + dr, col + dc)
        if not grid.in_bounds(n):
            continue
        if n in open_cells or not grid.is_wall(n):
            out.append(n)
    return out
