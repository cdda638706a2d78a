# gridsearch/core/errors.py
#!/usr/bin/env python3


class GridSearchError(Exception):
    """Base class for everything the search core raises on purpose."""


class ConfigError(GridSearchError, ValueError):
    """Bad algorithm/heuristic name, empty goal set, out-of-bounds cell, bad grid size."""


class SearchBusyError(GridSearchError):
    """The grid was edited while a search is running."""
