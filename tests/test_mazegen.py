import random
from collections import deque

import pytest

from gridsearch.core.errors import ConfigError
from gridsearch.core.mazegen import random_walls, recursive_backtracker
from gridsearch.core.types import PATH, WALL


def reachable(grid, start):
    seen = {start}
    q = deque([start])
    while q:
        r, c = q.popleft()
        for n in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if grid.is_passable(n) and n not in seen:
                seen.add(n)
                q.append(n)
    return seen


def test_random_walls_extremes():
    empty = random_walls(4, 5, density=0.0, rng=random.Random(3))
    assert list(empty.walls()) == []
    full = random_walls(4, 5, density=1.0, rng=random.Random(3), keep_open=[(0, 0), (3, 4)])
    assert len(list(full.walls())) == 4 * 5 - 2
    assert full.cells[0][0] == PATH and full.cells[3][4] == PATH


def test_random_walls_seeded_is_repeatable():
    a = random_walls(9, 9, 0.3, rng=random.Random(42))
    b = random_walls(9, 9, 0.3, rng=random.Random(42))
    assert a.cells == b.cells


def test_random_walls_bad_density():
    with pytest.raises(ConfigError):
        random_walls(3, 3, density=1.5)


def test_backtracker_connects_every_room():
    grid = recursive_backtracker(9, 9, rng=random.Random(5))
    rooms = {(r, c) for r in range(0, 9, 2) for c in range(0, 9, 2)}
    assert rooms <= reachable(grid, (0, 0))
    # odd/odd cells are pillars that are never carved
    assert all(grid.cells[r][c] == WALL for r in range(1, 9, 2) for c in range(1, 9, 2))


def test_backtracker_is_a_tree():
    grid = recursive_backtracker(7, 9, rng=random.Random(11))
    open_cells = [(r, c) for r in range(7) for c in range(9) if grid.cells[r][c] != WALL]
    edges = sum(1 for (r, c) in open_cells for n in ((r + 1, c), (r, c + 1)) if grid.is_passable(n))
    assert edges == len(open_cells) - 1


def test_backtracker_keep_open():
    grid = recursive_backtracker(5, 5, rng=random.Random(0), keep_open=[(1, 1)])
    assert grid.cells[1][1] == PATH


def test_backtracker_single_cell():
    grid = recursive_backtracker(1, 1)
    assert grid.cells == [[PATH]]
