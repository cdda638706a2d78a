# gridsearch/core/search_base.py
#!/usr/bin/env python3
"""
Shared machinery for the grid searches — one expansion per step() for animation.

Algorithm API expected by the session and the viewer:
- init(grid, start, goals, heuristic) - reset() - step() -> StepResult

Subclasses decide two things only:
- _make_node(cell, g): which cost fields the node carries.
- _rank(node): the frontier ordering key.

Bookkeeping rules every algorithm shares:
- Closed cells are never reopened, even if a cheaper route turns up later.
- A neighbor is relaxed only when g + 1 beats its best known cost.
- A relaxed neighbor already on the frontier is rewritten in place and is
  not counted again in `discovered`.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple
from math import inf

from gridsearch.core.errors import ConfigError
from gridsearch.core.frontier import Frontier
from gridsearch.core.neighbors import neighbors
from gridsearch.core.types import Cell, Grid, SearchNode, StepResult

logger = logging.getLogger(__name__)


def reconstruct_path(parent: Dict[Cell, Cell], end: Cell) -> List[Cell]:
    """Follow predecessor links from end back to the cell that has none."""
    path: List[Cell] = [end]
    cur = end
    while cur in parent:
        cur = parent[cur]
        path.append(cur)
    path.reverse()
    return path


@dataclass
class GridSearchAlgo:
    name: str = "search"

    # Internal state
    grid: Optional[Grid] = None
    start: Optional[Cell] = None
    goals: Tuple[Cell, ...] = ()
    heuristic: str = "manhattan"
    frontier: Optional[Frontier] = None
    closed_set: set = field(default_factory=set)
    g: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    popped_count: int = 0
    discovered_count: int = 0
    done: bool = False
    no_path: bool = False
    goal_cell: Optional[Cell] = None
    path: Optional[List[Cell]] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Cell, goals, heuristic: str = "manhattan") -> None:
        """Bind to a grid, start cell and goal snapshot, then reset."""
        goals = tuple(goals)
        if not goals:
            raise ConfigError("at least one goal is required")
        for c in (start, *goals):
            if not grid.in_bounds(c):
                raise ConfigError(f"cell {c} outside {grid.rows}x{grid.cols} grid")
        self.grid = grid
        self.start = start
        self.goals = goals
        self.heuristic = heuristic
        self.reset()

    def reset(self) -> None:
        """Clear all state and seed with the start node."""
        if self.grid is None:
            return
        self.frontier = Frontier(self._rank)
        self.closed_set.clear()
        self.g.clear()
        self.parent.clear()
        self.popped_count = 0
        self.discovered_count = 0
        self.done = False
        self.no_path = False
        self.goal_cell = None
        self.path = None

        s = self.start
        self.g[s] = 0
        self.frontier.push(self._make_node(s, 0))

    # -------------------- per-algorithm hooks --------------------

    def _make_node(self, c: Cell, g: int) -> SearchNode:
        raise NotImplementedError

    def _rank(self, node: SearchNode) -> tuple:
        raise NotImplementedError

    # -------------------- helpers --------------------

    def open_cells(self) -> List[Cell]:
        return self.frontier.cells() if self.frontier is not None else []

    def _open_cells_always(self) -> Tuple[Cell, ...]:
        return (self.start, *self.goals)

    @property
    def path_len(self) -> int:
        """Edge count of the found path (0 for a start-on-goal search)."""
        return len(self.path) - 1 if self.path else 0

    # -------------------- main stepping logic --------------------

    def step(self) -> StepResult:
        """
        Run ONE expansion:
          - Pop the best-ranked node and close it.
          - If it is a goal, reconstruct and finish.
          - Else relax its neighbors with unit edge cost.
        """
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.done:
            return StepResult(status="done", path=self.path,
                              metrics=self._metrics())

        if self.no_path:
            return StepResult(status="no_path", metrics=self._metrics())

        if not self.frontier:
            self.no_path = True
            logger.info("%s: frontier empty after %d expansions, no path", self.name, self.popped_count)
            return StepResult(status="no_path", metrics=self._metrics())

        node = self.frontier.pop_best()
        u = node.cell
        self.popped_count += 1
        self.closed_set.add(u)
        logger.debug("Exploring node %s - g: %s, h: %s, f: %s", u, node.g, node.h, node.f)

        if u in self.goals:
            self.done = True
            self.goal_cell = u
            self.path = reconstruct_path(self.parent, u)
            logger.info("%s: goal reached at %s, path length %d", self.name, u, self.path_len)
            return StepResult(status="done", closed=[u], current=u, path=self.path,
                              metrics=self._metrics())

        opened_now: List[Cell] = []
        for v in neighbors(self.grid, u, self._open_cells_always()):
            if v in self.closed_set:
                continue
            alt = node.g + 1
            if alt >= self.g.get(v, inf):
                continue
            self.g[v] = alt
            self.parent[v] = u
            nv = self._make_node(v, alt)
            if v in self.frontier:
                self.frontier.replace(nv)
            else:
                self.frontier.push(nv)
                self.discovered_count += 1
                opened_now.append(v)
            logger.debug("  Neighbor: %s - g: %s, h: %s, f: %s", v, nv.g, nv.h, nv.f)

        return StepResult(status="running", opened=opened_now, closed=[u], current=u,
                          metrics=self._metrics())

    # -------------------- metrics --------------------

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "popped": self.popped_count,
            "discovered": self.discovered_count,
            "open_size": len(self.frontier) if self.frontier is not None else 0,
            "closed_count": len(self.closed_set),
            "path_len": self.path_len,
        }
