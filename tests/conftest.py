"""Pytest fixtures shared across unit and Django integration tests."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime

import pytest

from benchmarks.models import Benchmark, BenchmarkProjectMetadata


def _ts(minute: int, *, hour: int = 12, day: int = 1) -> datetime:
    """Return a UTC timestamp on 2025-01-`day` at `hour`:`minute`."""

    return datetime(2025, 1, day, hour, minute, tzinfo=UTC)


@pytest.fixture
def api_project(db) -> BenchmarkProjectMetadata:
    """Return the "API" project with a single `region` category dimension."""

    project = BenchmarkProjectMetadata.objects.create(
        project="API",
        category1_name="region",
        value1_name="latency",
    )
    Benchmark.objects.bulk_create(
        [
            Benchmark(project="API", timestamp=_ts(1), category1="us", value1=10.0, commit="a1"),
            Benchmark(project="API", timestamp=_ts(2), category1="us", value1=20.0, commit="a2"),
            Benchmark(project="API", timestamp=_ts(1), category1="eu", value1=5.0, commit="a1"),
        ]
    )
    return project


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    - `unit`: pure, fast tests with no database access.
    - `integration`: tests touching Django, database, views, commands, or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
