"""Bounded cache of recently applied filter sets.

The cache is stored in an injected key-value store: the Django session in
production (persisted per browser) and a plain dict in tests. One list of
filter sets is kept per project, most recent first.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Final

from core.filters import CategoryFilters, normalize_filters

RECENT_FILTERS_KEY: Final[str] = "benchboard_recent_filters"
RECENT_FILTERS_LIMIT: Final[int] = 3


class RecentFilters:
    """Read and update the recent filter sets held in a key-value store."""

    def __init__(
        self,
        store: MutableMapping[str, Any],
        *,
        key: str = RECENT_FILTERS_KEY,
        limit: int = RECENT_FILTERS_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self._store = store
        self._key = key
        self._limit = limit

    def list(self, project: str) -> tuple[CategoryFilters, ...]:
        """Return the cached filter sets for `project`, most recent first."""

        entries = self._load().get(project) or []
        return tuple(normalize_filters(entry) for entry in entries if isinstance(entry, Mapping))

    def push(self, project: str, filters: Mapping[str, str]) -> tuple[CategoryFilters, ...]:
        """Record a filter set as the most recently applied one.

        Empty filter sets are not recorded. An existing value-equal entry is
        moved to the front instead of being duplicated, and the list is
        trimmed to the configured limit.

        Returns:
            The updated list for `project`.
        """

        entry = normalize_filters(filters)
        if not entry:
            return self.list(project)

        updated = [entry] + [existing for existing in self.list(project) if existing != entry]
        updated = updated[: self._limit]

        data = self._load()
        data[project] = updated
        self._store[self._key] = data
        return tuple(updated)

    def _load(self) -> dict[str, list[dict[str, str]]]:
        raw = self._store.get(self._key)
        if not isinstance(raw, dict):
            return {}
        return dict(raw)
