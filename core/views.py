"""Views for the project catalog and the per-project benchmark charts."""

from __future__ import annotations

from typing import Any

from django.http import Http404, HttpRequest, HttpResponse, QueryDict
from django.shortcuts import redirect, render
from django.urls import reverse

from analysis.dimensions import active_category_fields, active_value_fields
from analysis.dto import DimensionField, ProjectMetadata
from core.charting.colors import combination_colors
from core.charting.render import build_legend, render_value_charts
from core.errors import (
    BenchmarkQueryError,
    CatalogLoadError,
    CategoryResolutionError,
    DashboardError,
)
from core.filters import (
    SHOW_CHARTS_PARAM,
    CategoryFilters,
    charts_querystring,
    clear_filter,
    describe_filters,
    reset_filters,
)
from core.forms import CategoryFilterForm
from core.recent_filters import RecentFilters
from core.services import (
    FetchResult,
    example_filter_sets,
    fetch_benchmarks,
    get_project,
    load_project_catalog,
    resolve_categories,
)


def project_list(request: HttpRequest) -> HttpResponse:
    """Render the project catalog.

    A `?project=<name>` link is redirected to the project page so shared URLs
    keep working; any category filters in the link are carried over.
    """

    if project_name := (request.GET.get("project") or "").strip():
        remaining = request.GET.copy()
        remaining.pop("project", None)
        return _redirect_to_project(project_name, remaining)

    catalog_error: DashboardError | None = None
    projects: tuple[ProjectMetadata, ...] = ()
    try:
        projects = load_project_catalog()
    except CatalogLoadError as exc:
        catalog_error = exc

    context = {
        "catalog_error": catalog_error,
        "project_cards": [_project_card(project) for project in projects],
        "retry_url": request.get_full_path(),
    }
    return render(request, "core/project_list.html", context)


def project_detail(request: HttpRequest, project: str) -> HttpResponse:
    """Render category filters and, when requested, the benchmark charts.

    The page is fully described by its query string: one key per selected
    category value plus `show=1` once the user asks for charts.
    """

    try:
        metadata = get_project(project)
    except CatalogLoadError as exc:
        return render(
            request,
            "core/project_detail.html",
            {"project_name": project, "load_error": exc, "retry_url": request.get_full_path()},
        )
    if metadata is None:
        raise Http404(f"Unknown project: {project}")

    category_fields = active_category_fields(metadata)
    value_fields = active_value_fields(metadata)
    recent_filters = RecentFilters(request.session)

    context: dict[str, Any] = {
        "project": metadata,
        "project_name": metadata.project,
        "category_fields": category_fields,
        "value_fields": value_fields,
        "retry_url": request.get_full_path(),
        "reset_querystring": reset_filters(request.GET).urlencode(),
        "load_error": None,
        "fetch_error": None,
        "fetch_warning": None,
        "show_charts": False,
    }

    try:
        categories = resolve_categories(metadata, fields=category_fields)
    except CategoryResolutionError as exc:
        context["load_error"] = exc
        return render(request, "core/project_detail.html", context)

    bound = any(field.key in request.GET for field in category_fields) or SHOW_CHARTS_PARAM in request.GET
    form = CategoryFilterForm(
        request.GET if bound else None,
        fields=category_fields,
        categories=categories,
    )
    context["form"] = form
    filters = form.selected_filters() if bound else {}
    wants_charts = request.GET.get(SHOW_CHARTS_PARAM) == "1" and form.is_valid()

    if wants_charts:
        try:
            result = fetch_benchmarks(metadata, filters, fields=category_fields)
        except DashboardError as exc:
            context["fetch_error"] = exc
        else:
            recent_filters.push(metadata.project, filters)
            context.update(
                _charts_context(
                    request,
                    result=result,
                    filters=filters,
                    category_fields=category_fields,
                    value_fields=value_fields,
                )
            )

    if not context["show_charts"]:
        context["suggestions"] = _suggestions(
            metadata,
            recent=recent_filters.list(metadata.project),
            category_fields=category_fields,
        )
    return render(request, "core/project_detail.html", context)


def _charts_context(
    request: HttpRequest,
    *,
    result: FetchResult,
    filters: CategoryFilters,
    category_fields: tuple[DimensionField, ...],
    value_fields: tuple[DimensionField, ...],
) -> dict[str, Any]:
    """Build the template context for the "charts shown" state."""

    charts = render_value_charts(
        result.rows,
        value_fields=value_fields,
        category_fields=category_fields,
        combinations=result.combinations,
    )
    legend = build_legend(result.combinations, combination_colors(len(result.combinations)))
    return {
        "show_charts": True,
        "fetch_warning": result.warning,
        "row_count": len(result.rows),
        "charts": charts,
        "charts_payload": [
            {"id": chart.id, "title": chart.field.name, **chart.data} for chart in charts
        ],
        "legend": legend if len(legend) > 1 else (),
        "active_filters": [
            {
                "name": field.name,
                "value": filters.get(field.key) or "All",
                "clear_querystring": (
                    clear_filter(request.GET, field.key).urlencode() if filters.get(field.key) else None
                ),
            }
            for field in category_fields
        ],
    }


def _suggestions(
    project: ProjectMetadata,
    *,
    recent: tuple[CategoryFilters, ...],
    category_fields: tuple[DimensionField, ...],
) -> dict[str, list[dict[str, str]]]:
    """Return one-click filter links: recently applied sets and data examples."""

    try:
        examples = example_filter_sets(project, fields=category_fields)
    except BenchmarkQueryError:
        examples = ()

    def _links(filter_sets: tuple[CategoryFilters, ...]) -> list[dict[str, str]]:
        return [
            {
                "label": describe_filters(filters, category_fields),
                "querystring": charts_querystring(filters),
            }
            for filters in filter_sets
        ]

    return {"recent": _links(recent), "examples": _links(examples)}


def _project_card(project: ProjectMetadata) -> dict[str, Any]:
    """Return the template data for a catalog card."""

    categories = active_category_fields(project)
    values = active_value_fields(project)
    return {
        "name": project.project,
        "url": reverse("core:project_detail", args=[project.project]),
        "category_badge": categories[0].name if categories else None,
        "value_badge": values[0].name if values else None,
    }


def _redirect_to_project(project_name: str, query: QueryDict) -> HttpResponse:
    target = reverse("core:project_detail", args=[project_name])
    qs = query.urlencode()
    return redirect(f"{target}?{qs}" if qs else target)
