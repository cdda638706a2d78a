# gridsearch/core/session.py
#!/usr/bin/env python3
"""
Search session — the grid, its start/goals and at most one running search.

Control surface:
- start_search(config) -> bool   (False when a search is already running)
- step() -> StepResult           (one expansion; the caller owns pacing)
- run(delay)                     (loop step() until a terminal state)
- cancel_search() -> bool
- reset_search_state()           (clears painted route, keeps walls)

Events go to every registered listener that defines the matching method:
    on_explored(cell, step_index)
    on_path_found(cells, step_count)
    on_exhausted()
    on_cancelled()
"""

import logging
import random
import time
from typing import Dict, Iterable, List, Optional, Type

from gridsearch.core import mazegen
from gridsearch.core.astar import AStarAlgo
from gridsearch.core.best_first import BestFirstAlgo
from gridsearch.core.errors import ConfigError, SearchBusyError
from gridsearch.core.search_base import GridSearchAlgo
from gridsearch.core.types import Cell, GoalSet, Grid, SearchConfig, SearchState, StepResult
from gridsearch.core.ucs import UCSAlgo

logger = logging.getLogger(__name__)

ALGORITHMS: Dict[str, Type[GridSearchAlgo]] = {
    "astar": AStarAlgo,
    "ucs": UCSAlgo,
    "bestfirst": BestFirstAlgo,
}

# session state -> StepResult.status
_STATUS = {
    SearchState.IDLE: "idle",
    SearchState.RUNNING: "running",
    SearchState.SUCCEEDED: "done",
    SearchState.EXHAUSTED: "no_path",
}


class SearchSession:
    def __init__(self, grid: Grid, start: Cell, goals: Iterable[Cell] = (),
                 max_goals: int = 2, listeners: Iterable[object] = ()):
        if not grid.in_bounds(start):
            raise ConfigError(f"start {start} outside {grid.rows}x{grid.cols} grid")
        self.grid = grid
        self.start: Cell = start
        self.goals = GoalSet(capacity=max_goals)
        self.listeners: List[object] = list(listeners)
        self.state = SearchState.IDLE
        self.config: Optional[SearchConfig] = None
        self.algo: Optional[GridSearchAlgo] = None
        self.path: Optional[List[Cell]] = None
        self.counters = self._zero_counters()
        self.grid.set_wall(start, False)
        for g in goals:
            self.add_goal(g)

    # -------------------- listeners --------------------

    def add_listener(self, listener: object) -> None:
        self.listeners.append(listener)

    def remove_listener(self, listener: object) -> None:
        self.listeners.remove(listener)

    def _emit(self, event: str, *args) -> None:
        for listener in list(self.listeners):
            fn = getattr(listener, event, None)
            if fn is not None:
                fn(*args)

    # -------------------- editing --------------------

    @property
    def running(self) -> bool:
        return self.state is SearchState.RUNNING

    def _require_idle(self, what: str) -> None:
        if self.running:
            raise SearchBusyError(f"cannot {what} while a search is running")

    def _check(self, c: Cell) -> Cell:
        c = (int(c[0]), int(c[1]))
        if not self.grid.in_bounds(c):
            raise ConfigError(f"cell {c} outside {self.grid.rows}x{self.grid.cols} grid")
        return c

    def toggle_wall(self, c: Cell) -> bool:
        self._require_idle("edit walls")
        return self.grid.toggle_wall(self._check(c))

    def set_wall(self, c: Cell, wall: bool = True) -> None:
        self._require_idle("edit walls")
        self.grid.set_wall(self._check(c), wall)

    def set_start(self, c: Cell) -> None:
        self._require_idle("move the start")
        c = self._check(c)
        self.grid.set_wall(c, False)
        self.start = c

    def add_goal(self, c: Cell) -> Optional[Cell]:
        """Add a goal; the oldest one is evicted (and returned) once full."""
        self._require_idle("change goals")
        c = self._check(c)
        evicted = self.goals.add(c)
        self.grid.set_wall(c, False)
        if evicted is not None:
            self.grid.set_wall(evicted, False)
            logger.debug("goal %s evicted by %s", evicted, c)
        return evicted

    def remove_goal(self, c: Cell) -> bool:
        self._require_idle("change goals")
        return self.goals.remove(c)

    def _keep_open(self) -> List[Cell]:
        return [self.start, *self.goals]

    def generate_random(self, density: float = 0.3, rng: Optional[random.Random] = None) -> None:
        self._require_idle("regenerate the maze")
        self.grid = mazegen.random_walls(self.grid.rows, self.grid.cols, density,
                                         rng=rng, keep_open=self._keep_open())
        self.reset_search_state()

    def generate_backtracker(self, rng: Optional[random.Random] = None) -> None:
        self._require_idle("regenerate the maze")
        self.grid = mazegen.recursive_backtracker(self.grid.rows, self.grid.cols,
                                                  rng=rng, keep_open=self._keep_open())
        self.reset_search_state()

    # -------------------- search control --------------------

    @staticmethod
    def _zero_counters() -> Dict[str, int]:
        return {"nodes_explored": 0, "nodes_discovered": 0, "steps_taken": 0}

    def start_search(self, config: Optional[SearchConfig] = None) -> bool:
        """Validate, then move Idle -> Running. No-op (False) if already running."""
        if self.running:
            logger.warning("search already running, start request ignored")
            return False
        config = config if config is not None else SearchConfig()
        if not isinstance(config, SearchConfig):
            raise ConfigError(f"expected SearchConfig, got {type(config).__name__}")
        if not self.goals:
            raise ConfigError("at least one goal is required")
        self._check(self.start)
        for g in self.goals:
            self._check(g)

        algo = ALGORITHMS[config.algorithm]()
        algo.init(self.grid, self.start, tuple(self.goals), config.heuristic)

        self.grid.clear_solution()
        self.config = config
        self.algo = algo
        self.path = None
        self.counters = self._zero_counters()
        self.state = SearchState.RUNNING
        logger.info("%s search started: start=%s goals=%s heuristic=%s",
                    algo.name, self.start, list(self.goals), config.heuristic)
        return True

    def step(self) -> StepResult:
        """Advance the running search by one expansion and emit its events."""
        if not self.running:
            return StepResult(status=_STATUS[self.state], path=self.path, metrics=dict(self.counters))

        algo = self.algo
        res = algo.step()
        for c in res.closed:
            self.counters["nodes_explored"] = algo.popped_count
            self._emit("on_explored", c, algo.popped_count)
        self.counters["nodes_discovered"] = algo.discovered_count

        if self.algo is not algo:
            # a listener cancelled us from inside on_explored
            return StepResult(status="idle", metrics=dict(self.counters))

        if res.status == "done":
            self._finish(SearchState.SUCCEEDED)
            self.path = list(res.path)
            self.counters["steps_taken"] = len(self.path) - 1
            self.grid.mark_solution(self.path)
            self._emit("on_path_found", list(self.path), self.counters["steps_taken"])
        elif res.status == "no_path":
            self._finish(SearchState.EXHAUSTED)
            self._emit("on_exhausted")
        return res

    def _finish(self, state: SearchState) -> None:
        self.state = state
        self.algo = None
        logger.info("search finished: %s after %d expansions", state.value, self.counters["nodes_explored"])

    def run(self, delay: float = 0.0, max_steps: Optional[int] = None) -> SearchState:
        """Step until the search ends or is cancelled; sleeps `delay` seconds between steps."""
        taken = 0
        while self.running:
            if max_steps is not None and taken >= max_steps:
                break
            self.step()
            taken += 1
            if delay > 0 and self.running:
                time.sleep(delay)
        return self.state

    def cancel_search(self) -> bool:
        if not self.running:
            return False
        self.algo = None
        self.state = SearchState.IDLE
        logger.info("search cancelled after %d expansions", self.counters["nodes_explored"])
        self._emit("on_cancelled")
        return True

    def reset_search_state(self) -> None:
        """Abort any search, wipe the painted route and counters; walls stay."""
        self.cancel_search()
        self.grid.clear_solution()
        self.path = None
        self.counters = self._zero_counters()
        self.state = SearchState.IDLE

    # -------------------- overlays --------------------

    def open_cells(self) -> List[Cell]:
        return self.algo.open_cells() if self.algo is not None else []

    def closed_cells(self) -> List[Cell]:
        return list(self.algo.closed_set) if self.algo is not None else []
