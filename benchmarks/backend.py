"""Query gateway over the benchmark tables.

The dashboard talks to the relational backend through this small interface:
generic select/filter/order/limit access to the two tables plus a distinct
values aggregation. Rows leave the gateway as frozen analysis DTOs so nothing
downstream depends on the ORM.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from django.db import DatabaseError

from analysis.dimensions import CATEGORY_KEYS, VALUE_KEYS
from analysis.dto import BenchmarkRow, ProjectMetadata
from benchmarks.models import Benchmark, BenchmarkProjectMetadata

logger = logging.getLogger(__name__)

_ROW_FIELDS = ("id", "project", "timestamp", *CATEGORY_KEYS, *VALUE_KEYS, "commit")
_METADATA_FIELDS = (
    "id",
    "project",
    *(f"{key}_name" for key in CATEGORY_KEYS),
    *(f"{key}_name" for key in VALUE_KEYS),
)


class BackendError(Exception):
    """Raised when the relational backend cannot answer a query."""


@dataclass(frozen=True, slots=True)
class BenchmarkPage:
    """Rows returned by a capped select.

    Attributes:
        rows: Rows ordered by timestamp ascending, at most `limit` entries.
        total_count: True number of rows matching the query.
    """

    rows: tuple[BenchmarkRow, ...]
    total_count: int


class BenchmarkBackend(Protocol):
    """Operations the dashboard needs from the benchmark backend."""

    def list_projects(self) -> tuple[ProjectMetadata, ...]: ...

    def get_project(self, project: str) -> ProjectMetadata | None: ...

    def distinct_values(self, project: str, column: str) -> tuple[str, ...]: ...

    def select_benchmarks(
        self, project: str, *, filters: Mapping[str, str], limit: int
    ) -> BenchmarkPage: ...

    def sample_benchmarks(self, project: str, *, limit: int) -> tuple[BenchmarkRow, ...]: ...


class DjangoBenchmarkBackend:
    """BenchmarkBackend implementation backed by the Django ORM."""

    def list_projects(self) -> tuple[ProjectMetadata, ...]:
        """Return every catalog entry ordered by project name."""

        try:
            rows = list(BenchmarkProjectMetadata.objects.order_by("project").values(*_METADATA_FIELDS))
        except DatabaseError as exc:
            raise BackendError(str(exc)) from exc
        return tuple(ProjectMetadata(**row) for row in rows)

    def get_project(self, project: str) -> ProjectMetadata | None:
        """Return the catalog entry for `project`, or None when unknown."""

        try:
            row = BenchmarkProjectMetadata.objects.filter(project=project).values(*_METADATA_FIELDS).first()
        except DatabaseError as exc:
            raise BackendError(str(exc)) from exc
        return ProjectMetadata(**row) if row is not None else None

    def distinct_values(self, project: str, column: str) -> tuple[str, ...]:
        """Return the sorted, distinct, non-empty values of a category column.

        Args:
            project: Project name to scope the rows.
            column: One of `category1`..`category5`.

        Returns:
            Distinct values sorted ascending.

        Raises:
            ValueError: When `column` is not a category column.
            BackendError: When the query fails.
        """

        if column not in CATEGORY_KEYS:
            raise ValueError(f"Unknown category column: {column!r}")

        queryset = (
            Benchmark.objects.filter(project=project)
            .exclude(**{f"{column}__isnull": True})
            .exclude(**{column: ""})
            .order_by(column)
            .values_list(column, flat=True)
            .distinct()
        )
        try:
            return tuple(queryset)
        except DatabaseError as exc:
            raise BackendError(str(exc)) from exc

    def select_benchmarks(
        self,
        project: str,
        *,
        filters: Mapping[str, str],
        limit: int,
    ) -> BenchmarkPage:
        """Select rows for a project with equality filters, oldest first.

        Args:
            project: Project name to scope the rows.
            filters: Category column -> required value.
            limit: Maximum number of rows to return.

        Returns:
            BenchmarkPage with at most `limit` rows and the true match count.
        """

        unknown = sorted(set(filters) - set(CATEGORY_KEYS))
        if unknown:
            raise ValueError(f"Unknown category columns: {', '.join(unknown)}")

        queryset = Benchmark.objects.filter(project=project, **dict(filters))
        try:
            rows = tuple(
                BenchmarkRow(**row)
                for row in queryset.order_by("timestamp", "id").values(*_ROW_FIELDS)[:limit]
            )
            total_count = queryset.count() if len(rows) >= limit else len(rows)
        except DatabaseError as exc:
            raise BackendError(str(exc)) from exc

        logger.debug("Selected %d of %d benchmark rows for %s", len(rows), total_count, project)
        return BenchmarkPage(rows=rows, total_count=total_count)

    def sample_benchmarks(self, project: str, *, limit: int) -> tuple[BenchmarkRow, ...]:
        """Return the first `limit` rows of a project in insertion order."""

        try:
            return tuple(
                BenchmarkRow(**row)
                for row in Benchmark.objects.filter(project=project).order_by("id").values(*_ROW_FIELDS)[:limit]
            )
        except DatabaseError as exc:
            raise BackendError(str(exc)) from exc
