# gridsearch/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates between two cells.

- manhattan: |drow| + |dcol|, exact on an open 4-connected grid.
- euclidean: straight-line distance, never larger than manhattan so it
  stays admissible for 4-connected unit-cost moves.
"""

import math
from typing import Iterable

from gridsearch.core.errors import ConfigError
from gridsearch.core.types import Cell


def manhattan(a: Cell, b: Cell) -> float:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


HEURISTIC_FUNCS = {
    "manhattan": manhattan,
    "euclidean": euclidean,
}


def heuristic(kind: str, a: Cell, b: Cell) -> float:
    try:
        fn = HEURISTIC_FUNCS[kind]
    except KeyError:
        raise ConfigError(f"unknown heuristic {kind!r}") from None
    return fn(a, b)


def nearest_goal(kind: str, c: Cell, goals: Iterable[Cell]) -> float:
    """Heuristic distance from c to the closest goal."""
    dists = [heuristic(kind, c, g) for g in goals]
    if not dists:
        raise ConfigError("no goals to measure against")
    return min(dists)
