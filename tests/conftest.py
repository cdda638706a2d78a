# tests/conftest.py
from typing import List

import pytest

from gridsearch.core.types import Grid


class EventLog:
    """Listener that records every session event in order."""

    def __init__(self):
        self.explored: List[tuple] = []
        self.paths: List[tuple] = []
        self.exhausted = 0
        self.cancelled = 0

    def on_explored(self, cell, step_index):
        self.explored.append((cell, step_index))

    def on_path_found(self, cells, step_count):
        self.paths.append((cells, step_count))

    def on_exhausted(self):
        self.exhausted += 1

    def on_cancelled(self):
        self.cancelled += 1

    @property
    def explored_cells(self):
        return [c for c, _ in self.explored]


@pytest.fixture
def log():
    return EventLog()


@pytest.fixture
def open3():
    return Grid.empty(3, 3)
