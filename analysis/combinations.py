"""Category-combination keys, labels and the series ceiling.

A category combination is the tuple of category values a row carries across
the active category dimensions. Each distinct combination becomes one chart
series, so the number of combinations is capped to keep charts readable.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Final

from .dto import CategoryCombination, DimensionField

MAX_CATEGORY_COMBINATIONS: Final[int] = 25

MISSING_KEY_PART: Final[str] = "null"
MISSING_LABEL_PART: Final[str] = "N/A"
KEY_SEPARATOR: Final[str] = "|"


def combination_key(row: object, fields: tuple[DimensionField, ...]) -> str:
    """Return the grouping key for a row.

    Args:
        row: BenchmarkRow (or any object exposing category attributes).
        fields: Active category fields in slot order.

    Returns:
        The row's category values joined by `|`, with `null` for missing values.
        Separators and backslashes inside values are backslash-escaped so
        distinct combinations never share a key.
    """

    return KEY_SEPARATOR.join(_key_part(getattr(row, field.key, None)) for field in fields)


def _key_part(value: str | None) -> str:
    if not value:
        return MISSING_KEY_PART
    return value.replace("\\", "\\\\").replace(KEY_SEPARATOR, "\\" + KEY_SEPARATOR)


def combination_label(row: object, fields: tuple[DimensionField, ...]) -> str:
    """Return a readable label such as `region: us, os: linux`."""

    return ", ".join(
        f"{field.name}: {getattr(row, field.key, None) or MISSING_LABEL_PART}" for field in fields
    )


def unique_combinations(
    rows: Iterable[object],
    fields: tuple[DimensionField, ...],
) -> tuple[CategoryCombination, ...]:
    """Return the distinct combinations in order of first appearance.

    Args:
        rows: Benchmark rows, typically already ordered by timestamp.
        fields: Active category fields in slot order.

    Returns:
        One CategoryCombination per distinct key.
    """

    seen: dict[str, CategoryCombination] = {}
    for row in rows:
        key = combination_key(row, fields)
        if key not in seen:
            seen[key] = CategoryCombination(key=key, label=combination_label(row, fields))
    return tuple(seen.values())


def within_combination_limit(count: int, *, limit: int = MAX_CATEGORY_COMBINATIONS) -> bool:
    """Return True when `count` combinations can be rendered (count <= limit)."""

    return count <= limit


def too_many_combinations_message(count: int, *, limit: int = MAX_CATEGORY_COMBINATIONS) -> str:
    """Return the user-facing message for a rejected fetch."""

    return (
        f"Too many category combinations ({count} found). "
        f"Please select more specific filters to reduce combinations to {limit} or fewer."
    )
