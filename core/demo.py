"""Demo dataset helpers.

A fresh install has no benchmark rows until external tooling writes some. The
demo project gives the dashboard something deterministic to show locally.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Final

from django.db import transaction

from benchmarks.models import Benchmark, BenchmarkProjectMetadata

DEMO_PROJECT: Final[str] = "API"
DEMO_REGIONS: Final[tuple[str, ...]] = ("ap", "eu", "us")
DEMO_ENDPOINTS: Final[tuple[str, ...]] = ("/search", "/users")
DEMO_DAYS: Final[int] = 14
DEMO_START: Final[datetime] = datetime(2025, 1, 1, 12, 0, tzinfo=UTC)


@dataclass(frozen=True, slots=True)
class DemoSeedResult:
    """Outcome for demo dataset seeding."""

    seeded: bool
    created_rows: int


def seed_demo_project(*, write: bool) -> DemoSeedResult:
    """Create the demo project and its rows if the project does not exist.

    Seeding is idempotent and never touches an existing project.

    Args:
        write: When False, report what would be created without writing.

    Returns:
        DemoSeedResult describing whether seeding occurred.
    """

    if BenchmarkProjectMetadata.objects.filter(project=DEMO_PROJECT).exists():
        return DemoSeedResult(seeded=False, created_rows=0)

    rows = _demo_rows()
    if not write:
        return DemoSeedResult(seeded=False, created_rows=len(rows))

    with transaction.atomic():
        BenchmarkProjectMetadata.objects.create(
            project=DEMO_PROJECT,
            category1_name="region",
            category2_name="endpoint",
            value1_name="p50 latency (ms)",
            value2_name="throughput (req/s)",
        )
        Benchmark.objects.bulk_create(rows)
    return DemoSeedResult(seeded=True, created_rows=len(rows))


def _demo_rows() -> list[Benchmark]:
    """Return deterministic, unsaved demo rows."""

    rows: list[Benchmark] = []
    for day in range(DEMO_DAYS):
        timestamp = DEMO_START + timedelta(days=day)
        for region_idx, region in enumerate(DEMO_REGIONS):
            for endpoint_idx, endpoint in enumerate(DEMO_ENDPOINTS):
                base = 40 + region_idx * 15 + endpoint_idx * 25
                rows.append(
                    Benchmark(
                        project=DEMO_PROJECT,
                        timestamp=timestamp,
                        category1=region,
                        category2=endpoint,
                        value1=float(base + (day * 7 + region_idx * 3) % 11),
                        value2=float(1200 - base * 5 + (day * 13) % 50),
                        commit=f"{day:04x}demo",
                    )
                )
    return rows
