# gridsearch/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

- ENV:  GRIDSEARCH_ROWS=9, GRIDSEARCH_ALGORITHM=ucs, ...
- CLI:  --rows=9 --algorithm=ucs ...   (CLI wins over ENV)
"""

import logging
from dataclasses import dataclass, fields
from typing import Mapping, Optional, Sequence

from gridsearch.core.errors import ConfigError
from gridsearch.core.types import SearchConfig

ENV_PREFIX = "GRIDSEARCH_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class ViewerConfig:
    rows: int = 9
    cols: int = 9
    algorithm: str = "astar"
    heuristic: str = "manhattan"
    steps_per_sec: int = 2
    wall_density: float = 0.3
    seed: Optional[int] = None
    max_goals: int = 2
    log_level: str = "INFO"

    def __post_init__(self):
        if self.rows < 1 or self.cols < 1:
            raise ConfigError(f"grid must be at least 1x1, got {self.rows}x{self.cols}")
        if not 0.0 <= self.wall_density <= 1.0:
            raise ConfigError(f"wall_density must be in [0, 1], got {self.wall_density}")
        if self.max_goals < 1:
            raise ConfigError("max_goals must be >= 1")
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec)))
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"unknown log level {self.log_level!r}")
        # normalises aliases and rejects unknown names
        sc = self.search_config()
        self.algorithm, self.heuristic = sc.algorithm, sc.heuristic

    def search_config(self) -> SearchConfig:
        return SearchConfig(self.algorithm, self.heuristic)

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level)


def _convert(name: str, raw: str, default):
    try:
        if name == "seed":
            return None if raw.lower() in ("", "none") else int(raw)
        if isinstance(default, int):
            return int(raw)
        if isinstance(default, float):
            return float(raw)
    except ValueError:
        raise ConfigError(f"bad value for {name}: {raw!r}") from None
    return raw


def resolve_config(argv: Sequence[str] = (), environ: Optional[Mapping[str, str]] = None) -> ViewerConfig:
    environ = environ if environ is not None else {}
    known = {f.name: f.default for f in fields(ViewerConfig)}
    values = {}

    for name, default in known.items():
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is not None:
            values[name] = _convert(name, raw, default)

    for arg in argv:
        if not arg.startswith("--") or "=" not in arg:
            continue
        key, raw = arg[2:].split("=", 1)
        name = key.replace("-", "_").lower()
        if name not in known:
            raise ConfigError(f"unknown option --{key}")
        values[name] = _convert(name, raw, known[name])

    return ViewerConfig(**values)
