"""Integration tests for the seed_demo_benchmarks management command."""

from __future__ import annotations

from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from benchmarks.models import Benchmark, BenchmarkProjectMetadata

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def test_requires_explicit_mode() -> None:
    """The command refuses to run without --check or --write."""

    with pytest.raises(CommandError):
        call_command("seed_demo_benchmarks")
    with pytest.raises(CommandError):
        call_command("seed_demo_benchmarks", "--check", "--write")


def test_check_reports_without_writing() -> None:
    """Dry-run prints the planned row count and leaves the database empty."""

    out = StringIO()
    call_command("seed_demo_benchmarks", "--check", stdout=out)

    assert "[CHECK] would create project 'API' with 84 rows" in out.getvalue()
    assert not BenchmarkProjectMetadata.objects.exists()
    assert not Benchmark.objects.exists()


def test_write_is_idempotent() -> None:
    """Writing twice creates the demo project once."""

    out = StringIO()
    call_command("seed_demo_benchmarks", "--write", stdout=out)
    call_command("seed_demo_benchmarks", "--write", stdout=out)

    lines = out.getvalue().splitlines()
    assert lines == [
        "[WRITE] created project 'API' with 84 rows",
        "[WRITE] project 'API' already exists",
    ]
    assert Benchmark.objects.filter(project="API").count() == 84
    assert sorted(
        Benchmark.objects.filter(project="API").values_list("category1", flat=True).distinct()
    ) == ["ap", "eu", "us"]
