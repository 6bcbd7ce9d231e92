"""Forms for core UI workflows.

The project view needs a single form: one optional choice field per active
category dimension, populated from the resolved distinct values.
"""

from __future__ import annotations

from collections.abc import Mapping

from django import forms

from analysis.dto import DimensionField
from core.filters import CategoryFilters

ALL_CHOICE_LABEL = "-- All --"


class CategoryFilterForm(forms.Form):
    """Validate the selected value (or "all") per category dimension."""

    def __init__(self, *args, **kwargs) -> None:
        """Initialize the form with one field per active category.

        Keyword Args:
            fields: Active category fields in slot order.
            categories: Mapping of category key -> resolved distinct values.
        """

        fields: tuple[DimensionField, ...] = kwargs.pop("fields", ())
        categories: Mapping[str, tuple[str, ...]] = kwargs.pop("categories", {})
        super().__init__(*args, **kwargs)
        self.category_fields = fields
        for field in fields:
            values = categories.get(field.key, ())
            self.fields[field.key] = forms.ChoiceField(
                required=False,
                label=field.name,
                choices=[("", ALL_CHOICE_LABEL), *((value, value) for value in values)],
            )

    def selected_filters(self) -> CategoryFilters:
        """Return the validated filter set, omitting "all" selections.

        Returns:
            Mapping of category key -> selected value. Empty when the form is
            invalid.
        """

        if not self.is_valid():
            return {}
        return {
            field.key: self.cleaned_data[field.key]
            for field in self.category_fields
            if self.cleaned_data.get(field.key)
        }
