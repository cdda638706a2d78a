# gridsearch/core/astar.py
#!/usr/bin/env python3
"""
A* over the grid — one expansion per step() for animation.

Heuristic:
- Manhattan or Euclidean to the NEAREST goal (both admissible for
  4-connected unit-cost moves, so the first goal popped is optimal).

Tie-breaking:
- (f, row + col): lower f first, then the cell closer to the top-left corner.
- Anything still equal keeps frontier order.
"""

from dataclasses import dataclass

from gridsearch.core.heuristics import nearest_goal
from gridsearch.core.search_base import GridSearchAlgo
from gridsearch.core.types import Cell, SearchNode


@dataclass
class AStarAlgo(GridSearchAlgo):
    name: str = "A*"

    def _make_node(self, c: Cell, g: int) -> SearchNode:
        h = nearest_goal(self.heuristic, c, self.goals)
        return SearchNode(c, g=g, h=h, f=g + h)

    def _rank(self, node: SearchNode) -> tuple:
        r, col = node.cell
        return (node.f, r + col)
