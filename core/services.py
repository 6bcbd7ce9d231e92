"""Service-layer functions for the core app.

Services in `core` coordinate backend queries with the pure analysis modules
and translate backend failures into the user-facing errors of `core.errors`.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final, TypeVar

from asgiref.sync import async_to_sync, sync_to_async
from django.db import connection, connections

from analysis.combinations import MAX_CATEGORY_COMBINATIONS, unique_combinations, within_combination_limit
from analysis.dimensions import active_category_fields
from analysis.dto import BenchmarkRow, CategoryCombination, DimensionField, ProjectMetadata
from benchmarks.backend import BackendError, BenchmarkBackend, DjangoBenchmarkBackend
from core.errors import (
    BenchmarkQueryError,
    CatalogLoadError,
    CategoryResolutionError,
    TooManyCombinationsError,
)
from core.filters import CategoryFilters

logger = logging.getLogger(__name__)

MAX_BENCHMARK_ROWS: Final[int] = 10_000
EXAMPLE_SAMPLE_ROWS: Final[int] = 100
EXAMPLE_FILTERS_LIMIT: Final[int] = 3

_T = TypeVar("_T")


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a successful benchmark fetch.

    Attributes:
        rows: Rows ordered by timestamp ascending (possibly truncated).
        total_count: True number of rows matching the filters.
        combinations: Distinct category combinations among `rows`.
        limit: Row cap applied to the query.
    """

    rows: tuple[BenchmarkRow, ...]
    total_count: int
    combinations: tuple[CategoryCombination, ...]
    limit: int = MAX_BENCHMARK_ROWS

    @property
    def truncated(self) -> bool:
        """Return True when more rows matched than were returned."""

        return self.total_count > len(self.rows)

    @property
    def warning(self) -> str | None:
        """Return the non-fatal truncation warning, if any."""

        if not self.truncated:
            return None
        return (
            f"Showing the first {len(self.rows):,} of {self.total_count:,} matching benchmarks. "
            "Narrow the filters to see the rest."
        )


def default_backend() -> BenchmarkBackend:
    """Return the backend used when callers do not inject one."""

    return DjangoBenchmarkBackend()


def load_project_catalog(*, backend: BenchmarkBackend | None = None) -> tuple[ProjectMetadata, ...]:
    """Return every project with its declared dimension names, ordered by name.

    Raises:
        CatalogLoadError: When the catalog query fails.
    """

    backend = backend or default_backend()
    try:
        return backend.list_projects()
    except BackendError as exc:
        logger.exception("Error fetching projects")
        raise CatalogLoadError(str(exc) or "Could not load projects.") from exc


def get_project(name: str, *, backend: BenchmarkBackend | None = None) -> ProjectMetadata | None:
    """Return one catalog entry, or None when the project is unknown.

    Raises:
        CatalogLoadError: When the catalog query fails.
    """

    backend = backend or default_backend()
    try:
        return backend.get_project(name)
    except BackendError as exc:
        logger.exception("Error fetching project %s", name)
        raise CatalogLoadError(str(exc) or "Could not load the project.") from exc


def resolve_categories(
    project: ProjectMetadata,
    *,
    fields: tuple[DimensionField, ...] | None = None,
    backend: BenchmarkBackend | None = None,
) -> dict[str, tuple[str, ...]]:
    """Fetch the distinct values of every active category dimension.

    One distinct-values request per dimension is issued concurrently and the
    results are joined before returning. A single failing dimension aborts the
    whole resolution.
    Lookups run on worker threads; inside an open transaction they stay on the
    calling thread so they read through the same connection.

    Args:
        project: Project whose categories are resolved.
        fields: Active category fields; derived from `project` when omitted.
        backend: Optional backend override.

    Returns:
        Mapping of category key -> sorted distinct values.

    Raises:
        CategoryResolutionError: When any dimension cannot be resolved.
    """

    backend = backend or default_backend()
    fields = active_category_fields(project) if fields is None else fields
    if not fields:
        return {}

    # Reads inside an open transaction must stay on its connection.
    thread_sensitive = connection.in_atomic_block
    lookup = sync_to_async(
        backend.distinct_values if thread_sensitive else _closing_connections(backend.distinct_values),
        thread_sensitive=thread_sensitive,
    )

    async def _gather() -> list[tuple[str, ...]]:
        return await asyncio.gather(*(lookup(project.project, field.key) for field in fields))

    try:
        resolved = async_to_sync(_gather)()
    except BackendError as exc:
        logger.exception("Error fetching categories for %s", project.project)
        raise CategoryResolutionError(str(exc) or "Could not load categories.") from exc

    return {field.key: tuple(values) for field, values in zip(fields, resolved)}


def _closing_connections(func: Callable[..., _T]) -> Callable[..., _T]:
    """Wrap a worker-thread call so its database connections are closed afterwards."""

    def run(*args, **kwargs) -> _T:
        try:
            return func(*args, **kwargs)
        finally:
            connections.close_all()

    return run


def fetch_benchmarks(
    project: ProjectMetadata,
    filters: Mapping[str, str],
    *,
    fields: tuple[DimensionField, ...] | None = None,
    backend: BenchmarkBackend | None = None,
    limit: int = MAX_BENCHMARK_ROWS,
    max_combinations: int = MAX_CATEGORY_COMBINATIONS,
) -> FetchResult:
    """Run the filtered, time-ordered benchmark query for a project.

    Args:
        project: Project to query.
        filters: Selected value per category key; keys of inactive
            dimensions are ignored.
        fields: Active category fields; derived from `project` when omitted.
        backend: Optional backend override.
        limit: Row cap for the query.
        max_combinations: Largest number of series a chart may show.

    Returns:
        FetchResult carrying the rows, their combinations and truncation info.

    Raises:
        BenchmarkQueryError: When the query fails.
        TooManyCombinationsError: When the rows span more than
            `max_combinations` category combinations.
    """

    backend = backend or default_backend()
    fields = active_category_fields(project) if fields is None else fields
    active_keys = {field.key for field in fields}
    applied: CategoryFilters = {key: value for key, value in filters.items() if key in active_keys and value}

    try:
        page = backend.select_benchmarks(project.project, filters=applied, limit=limit)
    except BackendError as exc:
        logger.exception("Error fetching benchmarks for %s", project.project)
        raise BenchmarkQueryError(str(exc) or "Could not load benchmarks.") from exc

    combinations = unique_combinations(page.rows, fields)
    if not within_combination_limit(len(combinations), limit=max_combinations):
        logger.warning(
            "Rejected %s fetch: %d category combinations (limit %d)",
            project.project,
            len(combinations),
            max_combinations,
        )
        raise TooManyCombinationsError(len(combinations), limit=max_combinations)

    result = FetchResult(
        rows=page.rows,
        total_count=page.total_count,
        combinations=combinations,
        limit=limit,
    )
    if result.truncated:
        logger.warning(
            "Truncated %s fetch to %d of %d rows", project.project, len(page.rows), page.total_count
        )
    return result


def example_filter_sets(
    project: ProjectMetadata,
    *,
    fields: tuple[DimensionField, ...] | None = None,
    backend: BenchmarkBackend | None = None,
    sample_size: int = EXAMPLE_SAMPLE_ROWS,
    limit: int = EXAMPLE_FILTERS_LIMIT,
) -> tuple[CategoryFilters, ...]:
    """Suggest filter sets drawn from the first rows of a project.

    Each example pins every active category dimension to the values of one
    sampled row (null values are left as "all"). Duplicates are skipped.

    Raises:
        BenchmarkQueryError: When the sample query fails.
    """

    backend = backend or default_backend()
    fields = active_category_fields(project) if fields is None else fields
    if not fields or limit < 1:
        return ()

    try:
        rows = backend.sample_benchmarks(project.project, limit=sample_size)
    except BackendError as exc:
        logger.exception("Error sampling benchmarks for %s", project.project)
        raise BenchmarkQueryError(str(exc) or "Could not load example filters.") from exc

    examples: list[CategoryFilters] = []
    for row in rows:
        candidate = {field.key: value for field in fields if (value := getattr(row, field.key))}
        if candidate and candidate not in examples:
            examples.append(candidate)
        if len(examples) >= limit:
            break
    return tuple(examples)
