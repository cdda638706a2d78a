# gridsearch/core/ucs.py
#!/usr/bin/env python3

from dataclasses import dataclass

from gridsearch.core.search_base import GridSearchAlgo
from gridsearch.core.types import Cell, SearchNode


@dataclass
class UCSAlgo(GridSearchAlgo):
    """Uniform-cost search: ranks by g only, the heuristic is never consulted."""
    name: str = "UCS"

    def _make_node(self, c: Cell, g: int) -> SearchNode:
        return SearchNode(c, g=g)

    def _rank(self, node: SearchNode) -> tuple:
        return (node.g,)
