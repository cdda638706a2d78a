import pytest

from gridsearch.core.frontier import Frontier
from gridsearch.core.types import SearchNode


def by_g(node):
    return (node.g,)


def test_pop_best_ranks_by_key():
    f = Frontier(by_g)
    f.push(SearchNode((0, 0), g=3))
    f.push(SearchNode((0, 1), g=1))
    f.push(SearchNode((0, 2), g=2))
    assert [f.pop_best().cell for _ in range(3)] == [(0, 1), (0, 2), (0, 0)]
    assert not f


def test_equal_keys_keep_insertion_order():
    f = Frontier(by_g)
    for c in [(2, 2), (0, 0), (1, 1)]:
        f.push(SearchNode(c, g=1))
    assert [f.pop_best().cell for _ in range(3)] == [(2, 2), (0, 0), (1, 1)]


def test_replace_updates_in_place():
    f = Frontier(by_g)
    f.push(SearchNode((0, 0), g=5))
    f.push(SearchNode((0, 1), g=2))
    f.replace(SearchNode((0, 0), g=1))
    assert len(f) == 2
    assert f.get((0, 0)).g == 1
    assert f.pop_best().cell == (0, 0)


def test_push_duplicate_rejected():
    f = Frontier(by_g)
    f.push(SearchNode((0, 0)))
    assert (0, 0) in f
    with pytest.raises(KeyError):
        f.push(SearchNode((0, 0)))
