"""Aggregation helpers for benchmark charts.

This module provides deterministic, reusable aggregation functions used by the
UI (charts, statistics cards) without introducing Django dependencies.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
from typing import Final

from .combinations import combination_key
from .dto import CombinationStats, DimensionField, ValueSeries

BUCKET_FORMAT: Final[str] = "%Y-%m-%d %H:%M"


def timestamp_bucket(timestamp: datetime) -> str:
    """Return the minute-resolution bucket label for a timestamp."""

    return timestamp.strftime(BUCKET_FORMAT)


def chronological(rows: Iterable[object]) -> list[object]:
    """Return rows sorted by timestamp, preserving input order for ties."""

    return sorted(rows, key=lambda row: getattr(row, "timestamp"))


def chart_series(
    rows: Iterable[object],
    *,
    value_key: str,
    fields: tuple[DimensionField, ...],
) -> ValueSeries:
    """Group rows into minute buckets with one data point per combination.

    Args:
        rows: Benchmark rows for a single project.
        value_key: Value column to chart (e.g. `value1`).
        fields: Active category fields used to build combination keys.

    Returns:
        ValueSeries whose labels are the buckets holding at least one non-null
        observation. When two rows share a bucket and combination, the later
        row wins. Rows with a null value leave a gap (None), never a zero.
    """

    buckets: dict[str, dict[str, float]] = {}
    keys: list[str] = []
    for row in chronological(rows):
        value = getattr(row, value_key, None)
        if value is None:
            continue
        key = combination_key(row, fields)
        if key not in keys:
            keys.append(key)
        label = timestamp_bucket(getattr(row, "timestamp"))
        buckets.setdefault(label, {})[key] = float(value)

    labels = tuple(buckets)
    data: dict[str, list[float | None]] = {
        key: [buckets[label].get(key) for label in labels] for key in keys
    }
    return ValueSeries(value_key=value_key, labels=labels, data=data)


def summarize_values(values: list[float]) -> CombinationStats | None:
    """Compute descriptive statistics for chronologically ordered values.

    Args:
        values: Non-null observations in time order.

    Returns:
        CombinationStats, or None when no observations exist.
    """

    if not values:
        return None
    return CombinationStats(
        latest=values[-1],
        average=sum(values) / len(values),
        minimum=min(values),
        maximum=max(values),
        count=len(values),
    )


def combination_stats(
    rows: Iterable[object],
    *,
    value_key: str,
    combination: str,
    fields: tuple[DimensionField, ...],
) -> CombinationStats | None:
    """Compute statistics for one (value dimension, combination) pair.

    Args:
        rows: Benchmark rows for a single project.
        value_key: Value column to summarize.
        combination: Combination key selecting the rows to include.
        fields: Active category fields used to build combination keys.

    Returns:
        CombinationStats over the non-null observations, or None when the
        combination has no observation for this value.
    """

    values = [
        float(getattr(row, value_key))
        for row in chronological(rows)
        if getattr(row, value_key, None) is not None and combination_key(row, fields) == combination
    ]
    return summarize_values(values)


def stats_by_combination(
    rows: Iterable[object],
    *,
    value_key: str,
    fields: tuple[DimensionField, ...],
) -> dict[str, CombinationStats]:
    """Compute statistics for every combination in a single pass.

    Combinations without any non-null observation for `value_key` are omitted.
    """

    grouped: dict[str, list[float]] = defaultdict(list)
    for row in chronological(rows):
        value = getattr(row, value_key, None)
        if value is None:
            continue
        grouped[combination_key(row, fields)].append(float(value))

    summarized: dict[str, CombinationStats] = {}
    for key, values in grouped.items():
        stats = summarize_values(values)
        if stats is not None:
            summarized[key] = stats
    return summarized
