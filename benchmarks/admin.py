"""Admin registrations for Benchmarks models."""

from __future__ import annotations

from django.contrib import admin

from benchmarks.models import Benchmark, BenchmarkProjectMetadata


class ReadOnlyAdmin(admin.ModelAdmin):
    """ModelAdmin that exposes externally produced rows without write access."""

    def has_add_permission(self, request) -> bool:  # type: ignore[override]
        """Rows are produced by benchmark tooling, never by the admin."""

        return False

    def has_change_permission(self, request, obj=None) -> bool:  # type: ignore[override]
        """Disallow edits to imported rows."""

        return False

    def has_delete_permission(self, request, obj=None) -> bool:  # type: ignore[override]
        """Disallow deletes of imported rows."""

        return False


@admin.register(BenchmarkProjectMetadata)
class BenchmarkProjectMetadataAdmin(ReadOnlyAdmin):
    """Admin configuration for the project catalog."""

    list_display = ("project", "category1_name", "category2_name", "value1_name", "value2_name")
    search_fields = ("project",)


@admin.register(Benchmark)
class BenchmarkAdmin(ReadOnlyAdmin):
    """Admin configuration for benchmark rows."""

    list_display = ("project", "timestamp", "category1", "category2", "value1", "commit")
    list_filter = ("project",)
    search_fields = ("project", "commit")
    date_hierarchy = "timestamp"
