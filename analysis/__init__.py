"""Pure analysis package for benchboard.

This package contains deterministic, testable computations that operate on
in-memory inputs and return DTOs. It must not import Django or perform any
database I/O.
"""

from .aggregations import chart_series, stats_by_combination
from .combinations import MAX_CATEGORY_COMBINATIONS, unique_combinations

__all__ = [
    "MAX_CATEGORY_COMBINATIONS",
    "chart_series",
    "stats_by_combination",
    "unique_combinations",
]
