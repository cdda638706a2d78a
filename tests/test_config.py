import logging

import pytest

from gridsearch.app.config import ViewerConfig, resolve_config
from gridsearch.core.errors import ConfigError


def test_defaults():
    cfg = resolve_config([], {})
    assert (cfg.rows, cfg.cols) == (9, 9)
    assert cfg.algorithm == "astar"
    assert cfg.heuristic == "manhattan"
    assert cfg.max_goals == 2
    assert cfg.seed is None


def test_cli_overrides_env():
    env = {"GRIDSEARCH_ROWS": "7", "GRIDSEARCH_HEURISTIC": "euclidean", "GRIDSEARCH_SEED": "3"}
    cfg = resolve_config(["--rows=5", "--algorithm=dijkstra", "--steps-per-sec=100"], env)
    assert cfg.rows == 5
    assert cfg.algorithm == "ucs"
    assert cfg.heuristic == "euclidean"
    assert cfg.seed == 3
    assert cfg.steps_per_sec == 60


def test_non_option_args_ignored():
    cfg = resolve_config(["viewer", "--verbose"], {})
    assert cfg.rows == 9


@pytest.mark.parametrize("argv", [["--rows=abc"], ["--bogus=1"], ["--heuristic=octile"],
                                  ["--rows=0"], ["--wall-density=2"], ["--log-level=LOUD"],
                                  ["--seed=abc"], ["--seed=1.5"]])
def test_bad_values_rejected(argv):
    with pytest.raises(ConfigError):
        resolve_config(argv, {})


def test_seed_none_and_log_level():
    cfg = resolve_config(["--seed=none", "--log-level=debug"], {})
    assert cfg.seed is None
    assert cfg.logging_level == logging.DEBUG


def test_search_config_roundtrip():
    sc = ViewerConfig(algorithm="greedy", heuristic="euclidean").search_config()
    assert (sc.algorithm, sc.heuristic) == ("bestfirst", "euclidean")


def test_bad_seed_from_env_rejected():
    with pytest.raises(ConfigError):
        resolve_config([], {"GRIDSEARCH_SEED": "1.5"})
