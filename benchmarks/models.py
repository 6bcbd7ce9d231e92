"""Database models for benchmark projects and their time-series rows.

Both tables are written by external benchmark tooling. The dashboard only reads
them, so the models mirror the shared schema (`benchmark_project_metadata` and
`benchmarks`) instead of owning it.
"""

from __future__ import annotations

from django.db import models

from analysis.dimensions import CATEGORY_KEYS, VALUE_KEYS


class BenchmarkProjectMetadata(models.Model):
    """Catalog entry declaring which dimensions a project uses.

    A slot whose display name is null is inactive: it is neither queried nor
    rendered by the dashboard.
    """

    project = models.CharField(max_length=200, unique=True)
    category1_name = models.CharField(max_length=120, null=True, blank=True)
    category2_name = models.CharField(max_length=120, null=True, blank=True)
    category3_name = models.CharField(max_length=120, null=True, blank=True)
    category4_name = models.CharField(max_length=120, null=True, blank=True)
    category5_name = models.CharField(max_length=120, null=True, blank=True)
    value1_name = models.CharField(max_length=120, null=True, blank=True)
    value2_name = models.CharField(max_length=120, null=True, blank=True)
    value3_name = models.CharField(max_length=120, null=True, blank=True)
    value4_name = models.CharField(max_length=120, null=True, blank=True)
    value5_name = models.CharField(max_length=120, null=True, blank=True)

    class Meta:
        db_table = "benchmark_project_metadata"
        ordering = ("project",)
        verbose_name = "Benchmark Project"
        verbose_name_plural = "Benchmark Projects"

    def __str__(self) -> str:
        """Return the project name."""

        return self.project

    def save(self, *args, **kwargs) -> None:
        """Persist metadata, storing blank dimension names as null."""

        for key in (*CATEGORY_KEYS, *VALUE_KEYS):
            attr = f"{key}_name"
            value = getattr(self, attr)
            if value is not None and not value.strip():
                setattr(self, attr, None)
        super().save(*args, **kwargs)


class Benchmark(models.Model):
    """A single benchmark observation for a project at a point in time."""

    project = models.CharField(max_length=200, db_index=True)
    timestamp = models.DateTimeField(db_index=True)
    category1 = models.CharField(max_length=200, null=True, blank=True)
    category2 = models.CharField(max_length=200, null=True, blank=True)
    category3 = models.CharField(max_length=200, null=True, blank=True)
    category4 = models.CharField(max_length=200, null=True, blank=True)
    category5 = models.CharField(max_length=200, null=True, blank=True)
    value1 = models.FloatField(null=True, blank=True)
    value2 = models.FloatField(null=True, blank=True)
    value3 = models.FloatField(null=True, blank=True)
    value4 = models.FloatField(null=True, blank=True)
    value5 = models.FloatField(null=True, blank=True)
    commit = models.CharField(max_length=64, null=True, blank=True)

    class Meta:
        db_table = "benchmarks"
        verbose_name = "Benchmark"
        verbose_name_plural = "Benchmarks"
        indexes = [
            models.Index(fields=["project", "timestamp"], name="benchmarks_project_ts_idx"),
        ]

    def __str__(self) -> str:
        """Return a concise display string for admin/debug usage."""

        return f"Benchmark(project={self.project}, timestamp={self.timestamp.isoformat()})"
