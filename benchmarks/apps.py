"""Django app configuration for Benchmarks."""

from __future__ import annotations

from django.apps import AppConfig


class BenchmarksConfig(AppConfig):
    """AppConfig for externally produced benchmark data."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "benchmarks"
