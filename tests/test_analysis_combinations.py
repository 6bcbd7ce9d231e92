"""Unit tests for category combinations and active dimension resolution."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest

from analysis.combinations import (
    MAX_CATEGORY_COMBINATIONS,
    combination_key,
    combination_label,
    too_many_combinations_message,
    unique_combinations,
    within_combination_limit,
)
from analysis.dimensions import active_category_fields, active_value_fields
from analysis.dto import BenchmarkRow, DimensionField, ProjectMetadata

pytestmark = pytest.mark.unit

FIELDS = (
    DimensionField(key="category1", name="region"),
    DimensionField(key="category3", name="os"),
)


def _row(row_id: int, **categories: str | None) -> BenchmarkRow:
    return BenchmarkRow(
        id=row_id,
        project="API",
        timestamp=datetime(2025, 1, 1, tzinfo=UTC),
        **categories,
    )


def test_active_fields_keep_slot_order_and_skip_null_names() -> None:
    """Only named slots are active, in fixed slot order."""

    metadata = ProjectMetadata(
        id=1,
        project="API",
        category1_name="region",
        category3_name="os",
        category5_name="arch",
        value2_name="throughput",
        value4_name="latency",
    )

    assert active_category_fields(metadata) == (
        DimensionField(key="category1", name="region"),
        DimensionField(key="category3", name="os"),
        DimensionField(key="category5", name="arch"),
    )
    assert [field.key for field in active_value_fields(metadata)] == ["value2", "value4"]


def test_project_without_dimensions_has_no_active_fields() -> None:
    """A bare catalog entry renders no filters and no charts."""

    metadata = ProjectMetadata(id=1, project="Empty")

    assert active_category_fields(metadata) == ()
    assert active_value_fields(metadata) == ()


def test_combination_key_and_label_mark_missing_values() -> None:
    """Missing values become `null` in keys and `N/A` in labels."""

    row = _row(1, category1="us", category3=None)

    assert combination_key(row, FIELDS) == "us|null"
    assert combination_label(row, FIELDS) == "region: us, os: N/A"


def test_unique_combinations_keep_first_appearance_order() -> None:
    """Combinations are deduplicated and ordered by first appearance."""

    rows = [
        _row(1, category1="us", category3="linux"),
        _row(2, category1="eu", category3="linux"),
        _row(3, category1="us", category3="linux"),
    ]

    combos = unique_combinations(rows, FIELDS)
    assert [combo.key for combo in combos] == ["us|linux", "eu|linux"]
    assert [combo.label for combo in combos] == ["region: us, os: linux", "region: eu, os: linux"]


def test_combination_ceiling_accepts_up_to_limit() -> None:
    """Exactly the limit is accepted; one more is rejected."""

    assert within_combination_limit(MAX_CATEGORY_COMBINATIONS)
    assert not within_combination_limit(MAX_CATEGORY_COMBINATIONS + 1)


def test_thirty_combinations_exceed_the_ceiling() -> None:
    """Thirty distinct keys are counted and rejected."""

    rows = [_row(idx, category1=f"region-{idx}", category3="linux") for idx in range(30)]

    count = len(unique_combinations(rows, FIELDS))
    assert count == 30
    assert not within_combination_limit(count)
    assert too_many_combinations_message(count) == (
        "Too many category combinations (30 found). "
        "Please select more specific filters to reduce combinations to 25 or fewer."
    )


def test_separator_inside_values_does_not_merge_combinations() -> None:
    """Values containing `|` keep distinct keys instead of colliding."""

    rows = [
        _row(1, category1="a|b", category3="c"),
        _row(2, category1="a", category3="b|c"),
    ]

    combos = unique_combinations(rows, FIELDS)
    assert [combo.key for combo in combos] == ["a\\|b|c", "a|b\\|c"]
    assert [combo.label for combo in combos] == ["region: a|b, os: c", "region: a, os: b|c"]
