# gridsearch/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple, Optional, Dict, Any, Iterable, Iterator, Sequence, Union

from gridsearch.core.errors import ConfigError

Cell = Tuple[int, int]  # (row, col)

PATH = 0
WALL = 1
SOLUTION = 2  # a path cell painted as part of the last found route

_CHAR_STATES = {".": PATH, " ": PATH, "#": WALL, "*": SOLUTION}


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[int]]             # [row][col]

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ConfigError(f"grid must be at least 1x1, got {self.rows}x{self.cols}")
        if len(self.cells) != self.rows or any(len(r) != self.cols for r in self.cells):
            raise ConfigError("cells size mismatch")

    @classmethod
    def empty(cls, rows: int, cols: int) -> "Grid":
        if rows < 1 or cols < 1:
            raise ConfigError(f"grid must be at least 1x1, got {rows}x{cols}")
        return cls(rows, cols, [[PATH] * cols for _ in range(rows)])

    @classmethod
    def from_rows(cls, rows: Sequence[Union[str, Sequence[int]]]) -> "Grid":
        """Build a grid from strings ('#' wall, '.' path) or int rows."""
        cells: List[List[int]] = []
        for line in rows:
            if isinstance(line, str):
                try:
                    cells.append([_CHAR_STATES[ch] for ch in line])
                except KeyError as ex:
                    raise ConfigError(f"unknown cell character {ex.args[0]!r}") from None
            else:
                cells.append([int(v) for v in line])
        return cls(len(cells), len(cells[0]) if cells else 0, cells)

    def copy(self) -> "Grid":
        return Grid(self.rows, self.cols, [list(r) for r in self.cells])

    def in_bounds(self, c: Cell) -> bool:
        r, col = c
        return 0 <= r < self.rows and 0 <= col < self.cols

    def is_wall(self, c: Cell) -> bool:
        r, col = c
        return self.cells[r][col] == WALL

    def is_passable(self, c: Cell) -> bool:
        """False when out of bounds or a wall."""
        return self.in_bounds(c) and not self.is_wall(c)

    def _check(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise ConfigError(f"cell {c} outside {self.rows}x{self.cols} grid")

    def set_wall(self, c: Cell, wall: bool = True) -> None:
        self._check(c)
        r, col = c
        self.cells[r][col] = WALL if wall else PATH

    def toggle_wall(self, c: Cell) -> bool:
        """Flip wall/path; returns True if the cell is now a wall."""
        self._check(c)
        now_wall = not self.is_wall(c)
        self.set_wall(c, now_wall)
        return now_wall

    def mark_solution(self, path: Iterable[Cell]) -> None:
        for c in path:
            self._check(c)
            r, col = c
            if self.cells[r][col] != WALL:
                self.cells[r][col] = SOLUTION

    def clear_solution(self) -> int:
        """Turn SOLUTION cells back into PATH; walls are left alone."""
        cleared = 0
        for row in self.cells:
            for i, v in enumerate(row):
                if v == SOLUTION:
                    row[i] = PATH
                    cleared += 1
        return cleared

    def walls(self) -> Iterator[Cell]:
        for r, row in enumerate(self.cells):
            for col, v in enumerate(row):
                if v == WALL:
                    yield (r, col)


class GoalSet:
    """Insertion-ordered goals with FIFO eviction once capacity is reached."""

    def __init__(self, goals: Iterable[Cell] = (), capacity: int = 2):
        if capacity < 1:
            raise ConfigError("goal capacity must be >= 1")
        self.capacity = capacity
        self._goals: List[Cell] = []
        for g in goals:
            self.add(g)

    def add(self, cell: Cell) -> Optional[Cell]:
        """Append a goal; returns the evicted oldest goal, if any."""
        cell = (int(cell[0]), int(cell[1]))
        if cell in self._goals:
            return None
        evicted = None
        if len(self._goals) >= self.capacity:
            evicted = self._goals.pop(0)
        self._goals.append(cell)
        return evicted

    def remove(self, cell: Cell) -> bool:
        cell = (int(cell[0]), int(cell[1]))
        if cell in self._goals:
            self._goals.remove(cell)
            return True
        return False

    def clear(self) -> None:
        self._goals.clear()

    def __contains__(self, cell) -> bool:
        return cell in self._goals

    def __iter__(self) -> Iterator[Cell]:
        return iter(list(self._goals))

    def __len__(self) -> int:
        return len(self._goals)

    def __repr__(self) -> str:
        return f"GoalSet({self._goals!r}, capacity={self.capacity})"


@dataclass
class SearchNode:
    cell: Cell
    g: int = 0
    h: Optional[float] = None
    f: Optional[float] = None


class SearchState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted"


ALGORITHM_ALIASES = {
    "astar": "astar", "a*": "astar", "a-star": "astar",
    "ucs": "ucs", "uniform-cost": "ucs", "dijkstra": "ucs",
    "bestfirst": "bestfirst", "best-first": "bestfirst", "greedy": "bestfirst",
}
HEURISTICS = ("manhattan", "euclidean")


@dataclass
class SearchConfig:
    algorithm: str = "astar"
    heuristic: Optional[str] = "manhattan"

    def __post_init__(self):
        key = str(self.algorithm).strip().lower()
        if key not in ALGORITHM_ALIASES:
            raise ConfigError(f"unknown algorithm {self.algorithm!r}")
        self.algorithm = ALGORITHM_ALIASES[key]
        # unspecified heuristic means manhattan; misspelled names are rejected
        h = "manhattan" if self.heuristic is None else str(self.heuristic).strip().lower()
        if h not in HEURISTICS:
            raise ConfigError(f"unknown heuristic {self.heuristic!r}")
        self.heuristic = h


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "done" | "no_path"
    opened: List[Cell] = field(default_factory=list)
    closed: List[Cell] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
