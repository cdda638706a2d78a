# gridsearch/core/frontier.py
#!/usr/bin/env python3
"""
Open list with at most one node per cell.

Selection stable-sorts the whole list by the caller's key and takes the
head, so nodes with equal keys come out in the list's current order.
Improving a node rewrites it where it sits instead of pushing a duplicate.
"""

from typing import Callable, Dict, List, Optional

from gridsearch.core.types import Cell, SearchNode

RankKey = Callable[[SearchNode], tuple]


class Frontier:
    def __init__(self, key: RankKey):
        self._key = key
        self._nodes: List[SearchNode] = []
        self._by_cell: Dict[Cell, SearchNode] = {}

    def __len__(self) -> int:
        return len(self._nodes)

    def __bool__(self) -> bool:
        return bool(self._nodes)

    def __contains__(self, cell) -> bool:
        return cell in self._by_cell

    def get(self, cell: Cell) -> Optional[SearchNode]:
        return self._by_cell.get(cell)

    def cells(self) -> List[Cell]:
        return [n.cell for n in self._nodes]

    def push(self, node: SearchNode) -> None:
        if node.cell in self._by_cell:
            raise KeyError(f"{node.cell} already on the frontier")
        self._nodes.append(node)
        self._by_cell[node.cell] = node

    def replace(self, node: SearchNode) -> None:
        """Overwrite the cost fields of the queued node for node.cell."""
        cur = self._by_cell[node.cell]
        cur.g, cur.h, cur.f = node.g, node.h, node.f

    def pop_best(self) -> SearchNode:
        self._nodes.sort(key=self._key)
        node = self._nodes.pop(0)
        del self._by_cell[node.cell]
        return node

    def clear(self) -> None:
        self._nodes.clear()
        self._by_cell.clear()
