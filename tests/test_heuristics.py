import math

import pytest

from gridsearch.core.errors import ConfigError
from gridsearch.core.heuristics import heuristic, manhattan, euclidean, nearest_goal
from gridsearch.core.neighbors import neighbors
from gridsearch.core.types import Grid


def test_manhattan():
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((2, 2), (2, 2)) == 0


def test_euclidean():
    assert euclidean((0, 0), (3, 4)) == 5.0
    assert math.isclose(euclidean((0, 0), (1, 1)), math.sqrt(2))


def test_euclidean_never_exceeds_manhattan():
    for a in [(0, 0), (1, 3), (4, 2)]:
        for b in [(0, 4), (3, 3), (2, 0)]:
            assert euclidean(a, b) <= manhattan(a, b)


def test_heuristic_dispatch():
    assert heuristic("manhattan", (0, 0), (1, 1)) == 2
    assert heuristic("euclidean", (0, 0), (0, 2)) == 2.0
    with pytest.raises(ConfigError):
        heuristic("octile", (0, 0), (1, 1))


def test_nearest_goal_takes_minimum():
    assert nearest_goal("manhattan", (0, 2), [(0, 0), (0, 4), (0, 3)]) == 1
    with pytest.raises(ConfigError):
        nearest_goal("manhattan", (0, 0), [])


def test_neighbors_fixed_order():
    g = Grid.empty(3, 3)
    assert neighbors(g, (1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]


def test_neighbors_skip_bounds_and_walls():
    g = Grid.from_rows([".#.", "...", "..."])
    assert neighbors(g, (0, 0)) == [(1, 0)]
    assert neighbors(g, (2, 2)) == [(1, 2), (2, 1)]


def test_neighbors_open_cells_override_walls():
    g = Grid.from_rows([".#."])
    assert neighbors(g, (0, 0)) == []
    assert neighbors(g, (0, 0), open_cells={(0, 1)}) == [(0, 1)]
