"""Build Chart.js payloads and statistics panels for benchmark charts."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypedDict

from analysis.aggregations import chart_series, stats_by_combination
from analysis.combinations import unique_combinations
from analysis.dto import BenchmarkRow, CategoryCombination, CombinationStats, DimensionField

from .colors import combination_colors


class ChartDataset(TypedDict, total=False):
    """A Chart.js dataset payload for one category combination."""

    label: str
    combinationKey: str
    data: list[float | None]
    borderColor: str
    backgroundColor: str
    spanGaps: bool
    borderWidth: int
    pointRadius: int
    pointHoverRadius: int
    tension: float


class ChartData(TypedDict):
    """The full Chart.js payload (labels + datasets) for a chart panel."""

    labels: list[str]
    datasets: list[ChartDataset]


@dataclass(frozen=True, slots=True)
class LegendEntry:
    """A color-coded combination shown in the legend."""

    combination: CategoryCombination
    color: str


@dataclass(frozen=True, slots=True)
class StatCard:
    """Summary statistics for one combination of one value dimension."""

    combination: CategoryCombination
    color: str
    stats: CombinationStats

    @property
    def latest_display(self) -> str:
        return format_number(self.stats.latest)

    @property
    def average_display(self) -> str:
        return f"{self.stats.average:.2f}"

    @property
    def minimum_display(self) -> str:
        return format_number(self.stats.minimum)

    @property
    def maximum_display(self) -> str:
        return format_number(self.stats.maximum)


@dataclass(frozen=True, slots=True)
class RenderedValueChart:
    """A rendered chart panel for one value dimension."""

    field: DimensionField
    data: ChartData
    stat_cards: tuple[StatCard, ...]

    @property
    def id(self) -> str:
        return f"chart-{self.field.key}"


def format_number(value: float) -> str:
    """Format a value with thousands separators and at most 3 decimals."""

    if float(value).is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def build_legend(
    combinations: Sequence[CategoryCombination],
    colors: Sequence[str],
) -> tuple[LegendEntry, ...]:
    """Pair each combination with its chart color."""

    return tuple(LegendEntry(combination=combo, color=color) for combo, color in zip(combinations, colors))


def render_value_charts(
    rows: Sequence[BenchmarkRow],
    *,
    value_fields: tuple[DimensionField, ...],
    category_fields: tuple[DimensionField, ...],
    combinations: tuple[CategoryCombination, ...] | None = None,
) -> tuple[RenderedValueChart, ...]:
    """Render one line chart per active value dimension.

    Args:
        rows: Fetched rows ordered by timestamp.
        value_fields: Active value fields, one chart each.
        category_fields: Active category fields defining the series.
        combinations: Precomputed combinations; derived from `rows` when omitted.

    Returns:
        RenderedValueChart entries in value slot order.
    """

    combinations = unique_combinations(rows, category_fields) if combinations is None else combinations
    colors = combination_colors(len(combinations))
    return tuple(
        render_value_chart(
            rows,
            value_field=value_field,
            category_fields=category_fields,
            combinations=combinations,
            colors=colors,
        )
        for value_field in value_fields
    )


def render_value_chart(
    rows: Sequence[BenchmarkRow],
    *,
    value_field: DimensionField,
    category_fields: tuple[DimensionField, ...],
    combinations: tuple[CategoryCombination, ...],
    colors: Sequence[str],
) -> RenderedValueChart:
    """Render a single value dimension into a chart payload and stat cards."""

    series = chart_series(rows, value_key=value_field.key, fields=category_fields)
    stats = stats_by_combination(rows, value_key=value_field.key, fields=category_fields)

    datasets: list[ChartDataset] = []
    cards: list[StatCard] = []
    for combo, color in zip(combinations, colors):
        datasets.append(
            _dataset(
                label=combo.label or value_field.name,
                combination_key=combo.key,
                data=series.data.get(combo.key, [None] * len(series.labels)),
                color=color,
            )
        )
        combo_stats = stats.get(combo.key)
        if combo_stats is not None:
            cards.append(StatCard(combination=combo, color=color, stats=combo_stats))

    return RenderedValueChart(
        field=value_field,
        data={"labels": list(series.labels), "datasets": datasets},
        stat_cards=tuple(cards),
    )


def _dataset(*, label: str, combination_key: str, data: list[float | None], color: str) -> ChartDataset:
    return {
        "label": label,
        "combinationKey": combination_key,
        "data": data,
        "borderColor": color,
        "backgroundColor": color,
        "spanGaps": True,
        "borderWidth": 2,
        "pointRadius": 4,
        "pointHoverRadius": 6,
        "tension": 0.3,
    }
