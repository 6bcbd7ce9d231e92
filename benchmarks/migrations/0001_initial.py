"""Create the benchmark project catalog and benchmark row tables."""

from __future__ import annotations

from django.db import migrations, models


class Migration(migrations.Migration):
    """Initial schema for the Benchmarks app."""

    initial = True

    dependencies: list[tuple[str, str]] = []

    operations = [
        migrations.CreateModel(
            name="BenchmarkProjectMetadata",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("project", models.CharField(max_length=200, unique=True)),
                ("category1_name", models.CharField(blank=True, max_length=120, null=True)),
                ("category2_name", models.CharField(blank=True, max_length=120, null=True)),
                ("category3_name", models.CharField(blank=True, max_length=120, null=True)),
                ("category4_name", models.CharField(blank=True, max_length=120, null=True)),
                ("category5_name", models.CharField(blank=True, max_length=120, null=True)),
                ("value1_name", models.CharField(blank=True, max_length=120, null=True)),
                ("value2_name", models.CharField(blank=True, max_length=120, null=True)),
                ("value3_name", models.CharField(blank=True, max_length=120, null=True)),
                ("value4_name", models.CharField(blank=True, max_length=120, null=True)),
                ("value5_name", models.CharField(blank=True, max_length=120, null=True)),
            ],
            options={
                "verbose_name": "Benchmark Project",
                "verbose_name_plural": "Benchmark Projects",
                "db_table": "benchmark_project_metadata",
                "ordering": ("project",),
            },
        ),
        migrations.CreateModel(
            name="Benchmark",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("project", models.CharField(db_index=True, max_length=200)),
                ("timestamp", models.DateTimeField(db_index=True)),
                ("category1", models.CharField(blank=True, max_length=200, null=True)),
                ("category2", models.CharField(blank=True, max_length=200, null=True)),
                ("category3", models.CharField(blank=True, max_length=200, null=True)),
                ("category4", models.CharField(blank=True, max_length=200, null=True)),
                ("category5", models.CharField(blank=True, max_length=200, null=True)),
                ("value1", models.FloatField(blank=True, null=True)),
                ("value2", models.FloatField(blank=True, null=True)),
                ("value3", models.FloatField(blank=True, null=True)),
                ("value4", models.FloatField(blank=True, null=True)),
                ("value5", models.FloatField(blank=True, null=True)),
                ("commit", models.CharField(blank=True, max_length=64, null=True)),
            ],
            options={
                "verbose_name": "Benchmark",
                "verbose_name_plural": "Benchmarks",
                "db_table": "benchmarks",
                "indexes": [models.Index(fields=["project", "timestamp"], name="benchmarks_project_ts_idx")],
            },
        ),
    ]
