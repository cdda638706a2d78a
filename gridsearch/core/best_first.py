# gridsearch/core/best_first.py
#!/usr/bin/env python3

from dataclasses import dataclass

from gridsearch.core.heuristics import nearest_goal
from gridsearch.core.search_base import GridSearchAlgo
from gridsearch.core.types import Cell, SearchNode


@dataclass
class BestFirstAlgo(GridSearchAlgo):
    """Greedy best-first: ranks by distance to the nearest goal, ignores cost so far.

    g is still tracked for the best-known-cost table; paths are not guaranteed shortest.
    """
    name: str = "Best-First"

    def _make_node(self, c: Cell, g: int) -> SearchNode:
        return SearchNode(c, g=g, h=nearest_goal(self.heuristic, c, self.goals))

    def _rank(self, node: SearchNode) -> tuple:
        return (node.h,)
