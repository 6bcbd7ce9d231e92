"""User-facing error types raised by the dashboard services.

Each error maps to one inline panel message. Catalog/category and query
failures are retryable; a combination overflow requires narrower filters.
"""

from __future__ import annotations

from analysis.combinations import MAX_CATEGORY_COMBINATIONS, too_many_combinations_message


class DashboardError(Exception):
    """Base class for errors surfaced inline on a dashboard panel."""

    retryable: bool = False

    @property
    def message(self) -> str:
        """Return the text shown to the user."""

        return str(self)


class CatalogLoadError(DashboardError):
    """The project catalog could not be loaded."""

    retryable = True


class CategoryResolutionError(DashboardError):
    """Distinct category values could not be resolved for a project."""

    retryable = True


class BenchmarkQueryError(DashboardError):
    """The filtered benchmark query failed."""

    retryable = True


class TooManyCombinationsError(DashboardError):
    """The fetched rows span more category combinations than can be charted."""

    def __init__(self, count: int, *, limit: int = MAX_CATEGORY_COMBINATIONS) -> None:
        self.count = count
        self.limit = limit
        super().__init__(too_many_combinations_message(count, limit=limit))
