"""Unit tests for dashboard services using an in-memory backend."""

from __future__ import annotations

import threading
import time
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta

import pytest

from analysis.dto import BenchmarkRow, ProjectMetadata
from benchmarks.backend import BackendError, BenchmarkPage
from core.errors import (
    BenchmarkQueryError,
    CatalogLoadError,
    CategoryResolutionError,
    TooManyCombinationsError,
)
from core.services import (
    example_filter_sets,
    fetch_benchmarks,
    get_project,
    load_project_catalog,
    resolve_categories,
)

pytestmark = pytest.mark.unit

START = datetime(2025, 1, 1, tzinfo=UTC)

API = ProjectMetadata(
    id=1,
    project="API",
    category1_name="region",
    category2_name="os",
    value1_name="latency",
)


class InMemoryBackend:
    """BenchmarkBackend over a list of rows, with optional injected failures."""

    def __init__(
        self,
        rows: list[BenchmarkRow],
        *,
        projects: tuple[ProjectMetadata, ...] = (API,),
        failing_columns: frozenset[str] = frozenset(),
        fail_select: bool = False,
        fail_catalog: bool = False,
    ) -> None:
        self.rows = rows
        self.projects = projects
        self.failing_columns = failing_columns
        self.fail_select = fail_select
        self.fail_catalog = fail_catalog
        self.distinct_calls: list[str] = []
        self.select_calls: list[dict[str, str]] = []

    def list_projects(self) -> tuple[ProjectMetadata, ...]:
        if self.fail_catalog:
            raise BackendError("catalog unavailable")
        return tuple(sorted(self.projects, key=lambda project: project.project))

    def get_project(self, project: str) -> ProjectMetadata | None:
        return next((entry for entry in self.list_projects() if entry.project == project), None)

    def distinct_values(self, project: str, column: str) -> tuple[str, ...]:
        self.distinct_calls.append(column)
        if column in self.failing_columns:
            raise BackendError(f"{column} unavailable")
        return tuple(sorted({getattr(row, column) for row in self.rows if getattr(row, column)}))

    def select_benchmarks(self, project: str, *, filters: Mapping[str, str], limit: int) -> BenchmarkPage:
        self.select_calls.append(dict(filters))
        if self.fail_select:
            raise BackendError("query timeout")
        matching = [
            row
            for row in sorted(self.rows, key=lambda r: r.timestamp)
            if row.project == project and all(getattr(row, key) == value for key, value in filters.items())
        ]
        return BenchmarkPage(rows=tuple(matching[:limit]), total_count=len(matching))

    def sample_benchmarks(self, project: str, *, limit: int) -> tuple[BenchmarkRow, ...]:
        return tuple(row for row in self.rows if row.project == project)[:limit]


def _row(idx: int, *, region: str | None, os: str | None = "linux", value: float | None = 1.0) -> BenchmarkRow:
    return BenchmarkRow(
        id=idx,
        project="API",
        timestamp=START + timedelta(minutes=idx),
        category1=region,
        category2=os,
        value1=value,
    )


def test_load_project_catalog_orders_by_name() -> None:
    """Projects are returned sorted by project name."""

    web = ProjectMetadata(id=2, project="Web")
    backend = InMemoryBackend([], projects=(web, API))

    assert [project.project for project in load_project_catalog(backend=backend)] == ["API", "Web"]


def test_catalog_failures_raise_retryable_error() -> None:
    """Backend failures surface as CatalogLoadError for both catalog calls."""

    backend = InMemoryBackend([], fail_catalog=True)

    with pytest.raises(CatalogLoadError) as excinfo:
        load_project_catalog(backend=backend)
    assert excinfo.value.retryable
    assert "catalog unavailable" in excinfo.value.message

    with pytest.raises(CatalogLoadError):
        get_project("API", backend=backend)


def test_resolve_categories_queries_every_active_dimension() -> None:
    """Each active dimension resolves to its sorted distinct values."""

    backend = InMemoryBackend(
        [_row(1, region="us", os="mac"), _row(2, region="eu"), _row(3, region="us", os=None)]
    )

    resolved = resolve_categories(API, backend=backend)

    assert resolved == {"category1": ("eu", "us"), "category2": ("linux", "mac")}
    assert sorted(backend.distinct_calls) == ["category1", "category2"]


class SlowBackend(InMemoryBackend):
    """Backend whose distinct-values lookups take a while and record overlap."""

    def __init__(self, rows: list[BenchmarkRow]) -> None:
        super().__init__(rows)
        self._lock = threading.Lock()
        self.active = 0
        self.peak = 0
        self.threads: set[int] = set()

    def distinct_values(self, project: str, column: str) -> tuple[str, ...]:
        with self._lock:
            self.active += 1
            self.peak = max(self.peak, self.active)
            self.threads.add(threading.get_ident())
        try:
            time.sleep(0.2)
            return super().distinct_values(project, column)
        finally:
            with self._lock:
                self.active -= 1


def test_resolve_categories_runs_lookups_concurrently() -> None:
    """Dimension lookups overlap instead of running one after another."""

    three_dims = ProjectMetadata(
        id=4,
        project="API",
        category1_name="region",
        category2_name="os",
        category3_name="arch",
    )
    backend = SlowBackend([_row(1, region="us")])

    resolved = resolve_categories(three_dims, backend=backend)

    assert resolved["category1"] == ("us",)
    assert backend.peak > 1
    assert len(backend.threads) > 1


def test_resolve_categories_aborts_when_any_dimension_fails() -> None:
    """One failing dimension fails the whole resolution; no partial result."""

    backend = InMemoryBackend([_row(1, region="us")], failing_columns=frozenset({"category2"}))

    with pytest.raises(CategoryResolutionError) as excinfo:
        resolve_categories(API, backend=backend)
    assert "category2 unavailable" in excinfo.value.message


def test_resolve_categories_without_dimensions_skips_backend() -> None:
    """Projects without categories never query the backend."""

    backend = InMemoryBackend([])

    assert resolve_categories(ProjectMetadata(id=3, project="Bare"), backend=backend) == {}
    assert backend.distinct_calls == []


def test_fetch_applies_only_active_non_empty_filters() -> None:
    """Filters for inactive slots or blank values are not sent to the backend."""

    backend = InMemoryBackend([_row(1, region="us"), _row(2, region="eu")])

    result = fetch_benchmarks(
        API,
        {"category1": "us", "category2": "", "category4": "ignored"},
        backend=backend,
    )

    assert backend.select_calls == [{"category1": "us"}]
    assert [row.id for row in result.rows] == [1]
    assert [combo.label for combo in result.combinations] == ["region: us, os: linux"]
    assert not result.truncated
    assert result.warning is None


def test_fetch_truncation_is_a_warning_not_an_error() -> None:
    """More matches than the cap still render, with a truncation warning."""

    backend = InMemoryBackend([_row(idx, region="us") for idx in range(5)])

    result = fetch_benchmarks(API, {}, backend=backend, limit=3)

    assert len(result.rows) == 3
    assert result.total_count == 5
    assert result.truncated
    assert result.warning == (
        "Showing the first 3 of 5 matching benchmarks. Narrow the filters to see the rest."
    )


def test_fetch_rejects_more_than_25_combinations() -> None:
    """Thirty combinations abort the fetch with the narrowing message."""

    backend = InMemoryBackend([_row(idx, region=f"r{idx}") for idx in range(30)])

    with pytest.raises(TooManyCombinationsError) as excinfo:
        fetch_benchmarks(API, {}, backend=backend)

    assert excinfo.value.count == 30
    assert not excinfo.value.retryable
    assert "Too many category combinations (30 found)" in excinfo.value.message


def test_fetch_accepts_exactly_25_combinations() -> None:
    """The ceiling is inclusive."""

    backend = InMemoryBackend([_row(idx, region=f"r{idx}") for idx in range(25)])

    result = fetch_benchmarks(API, {}, backend=backend)
    assert len(result.combinations) == 25


def test_fetch_backend_failure_is_retryable_query_error() -> None:
    """Query failures surface as BenchmarkQueryError."""

    backend = InMemoryBackend([], fail_select=True)

    with pytest.raises(BenchmarkQueryError) as excinfo:
        fetch_benchmarks(API, {}, backend=backend)
    assert excinfo.value.retryable


def test_example_filter_sets_sample_distinct_combinations() -> None:
    """Examples pin category values from sampled rows, skipping duplicates."""

    backend = InMemoryBackend(
        [
            _row(1, region="us"),
            _row(2, region="us"),
            _row(3, region="eu", os=None),
            _row(4, region=None, os=None),
            _row(5, region="ap"),
            _row(6, region="sa"),
        ]
    )

    examples = example_filter_sets(API, backend=backend)

    assert examples == (
        {"category1": "us", "category2": "linux"},
        {"category1": "eu"},
        {"category1": "ap", "category2": "linux"},
    )


def test_example_filter_sets_respect_sample_size() -> None:
    """Only the first sampled rows are considered."""

    backend = InMemoryBackend([_row(1, region="us"), _row(2, region="eu")])

    assert example_filter_sets(API, backend=backend, sample_size=1) == ({"category1": "us", "category2": "linux"},)
