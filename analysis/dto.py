"""DTO types consumed and returned by the analysis package.

DTOs are plain data containers used to transport benchmark data to the UI.
They intentionally avoid any Django/ORM dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class ProjectMetadata:
    """Catalog entry describing the dimensions a project declares.

    Attributes:
        id: Identifier of the catalog row.
        project: Project name used to scope benchmark rows.
        category1_name..category5_name: Display names of the category
            dimensions, or None for inactive slots.
        value1_name..value5_name: Display names of the value dimensions, or
            None for inactive slots.
    """

    id: int
    project: str
    category1_name: str | None = None
    category2_name: str | None = None
    category3_name: str | None = None
    category4_name: str | None = None
    category5_name: str | None = None
    value1_name: str | None = None
    value2_name: str | None = None
    value3_name: str | None = None
    value4_name: str | None = None
    value5_name: str | None = None


@dataclass(frozen=True, slots=True)
class BenchmarkRow:
    """A single immutable benchmark observation.

    Attributes:
        id: Identifier of the persisted row.
        project: Owning project name.
        timestamp: When the benchmark was recorded (x-axis).
        category1..category5: Optional category values.
        value1..value5: Optional numeric measurements.
        commit: Optional commit identifier the benchmark ran against.
    """

    id: int
    project: str
    timestamp: datetime
    category1: str | None = None
    category2: str | None = None
    category3: str | None = None
    category4: str | None = None
    category5: str | None = None
    value1: float | None = None
    value2: float | None = None
    value3: float | None = None
    value4: float | None = None
    value5: float | None = None
    commit: str | None = None


@dataclass(frozen=True, slots=True)
class DimensionField:
    """An active (named) dimension slot.

    Attributes:
        key: Column key, e.g. `category2` or `value1`.
        name: Display name declared in the project metadata.
    """

    key: str
    name: str


@dataclass(frozen=True, slots=True)
class CategoryCombination:
    """A distinct tuple of category values observed in fetched rows.

    Attributes:
        key: Stable grouping key (`|`-joined values, `null` for missing).
        label: Human-friendly label (`name: value` pairs joined by `, `).
    """

    key: str
    label: str


@dataclass(frozen=True, slots=True)
class CombinationStats:
    """Descriptive statistics for one value dimension within one combination.

    Attributes:
        latest: Chronologically last non-null observation.
        average: Arithmetic mean of the observations.
        minimum: Smallest observation.
        maximum: Largest observation.
        count: Number of non-null observations.
    """

    latest: float
    average: float
    minimum: float
    maximum: float
    count: int


@dataclass(frozen=True)
class ValueSeries:
    """Chart-ready series for one value dimension.

    Attributes:
        value_key: Value column the series was built from.
        labels: Minute-resolution timestamp labels in time order.
        data: Mapping of combination key -> values aligned to `labels`
            (None marks a gap).
    """

    value_key: str
    labels: tuple[str, ...]
    data: dict[str, list[float | None]]
