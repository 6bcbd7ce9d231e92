"""Filter state mirrored in the page query string.

The filter set is a mapping of active category key -> selected value. A key
that is absent means "all". Every change is written back into the query string
so the exact filter combination can be bookmarked and restored on reload.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Final

from django.http import QueryDict

from analysis.dimensions import CATEGORY_KEYS
from analysis.dto import DimensionField

CategoryFilters = dict[str, str]

SHOW_CHARTS_PARAM: Final[str] = "show"


def filters_from_query(
    query: Mapping[str, str] | QueryDict,
    fields: tuple[DimensionField, ...],
) -> CategoryFilters:
    """Read the filter set for the active category fields.

    Keys for inactive slots and empty values are ignored.
    """

    filters: CategoryFilters = {}
    for field in fields:
        value = (query.get(field.key) or "").strip()
        if value:
            filters[field.key] = value
    return filters


def normalize_filters(filters: Mapping[str, str | None]) -> CategoryFilters:
    """Drop empty values and unknown keys, ordering keys by slot."""

    return {key: str(filters[key]) for key in CATEGORY_KEYS if filters.get(key)}


def filters_to_query(filters: Mapping[str, str], base: QueryDict | None = None) -> QueryDict:
    """Write a filter set into a query dict.

    Args:
        filters: Filter set to apply.
        base: Optional query dict whose non-category keys are preserved.

    Returns:
        A mutable QueryDict holding exactly the category keys in `filters`.
    """

    query = base.copy() if base is not None else QueryDict("", mutable=True)
    for key in CATEGORY_KEYS:
        query.pop(key, None)
    for key, value in normalize_filters(filters).items():
        query[key] = value
    return query


def apply_filter(query: QueryDict, key: str, value: str | None) -> QueryDict:
    """Select `value` for one dimension; an empty value clears it."""

    if key not in CATEGORY_KEYS:
        raise ValueError(f"Unknown category key: {key!r}")
    updated = query.copy()
    if value:
        updated[key] = value
    else:
        updated.pop(key, None)
    return updated


def clear_filter(query: QueryDict, key: str) -> QueryDict:
    """Remove one dimension from the query string."""

    return apply_filter(query, key, None)


def reset_filters(query: QueryDict) -> QueryDict:
    """Remove every category key (and the charts flag) from the query string."""

    updated = query.copy()
    for key in (*CATEGORY_KEYS, SHOW_CHARTS_PARAM):
        updated.pop(key, None)
    return updated


def charts_querystring(filters: Mapping[str, str]) -> str:
    """Return the query string that shows charts for a filter set."""

    query = filters_to_query(filters)
    query[SHOW_CHARTS_PARAM] = "1"
    return query.urlencode()


def describe_filters(filters: Mapping[str, str], fields: tuple[DimensionField, ...]) -> str:
    """Return a short `name: value` summary used for suggestion links."""

    parts = [f"{field.name}: {filters[field.key]}" for field in fields if filters.get(field.key)]
    return ", ".join(parts) or "All"
