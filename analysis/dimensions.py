"""Resolve which dimension slots of a project are active."""

from __future__ import annotations

from typing import Final

from .dto import DimensionField

CATEGORY_KEYS: Final[tuple[str, ...]] = ("category1", "category2", "category3", "category4", "category5")
VALUE_KEYS: Final[tuple[str, ...]] = ("value1", "value2", "value3", "value4", "value5")


def active_category_fields(metadata: object) -> tuple[DimensionField, ...]:
    """Return the named category slots of a project in slot order.

    Args:
        metadata: A ProjectMetadata DTO (or any object exposing
            `category1_name`..`category5_name`).

    Returns:
        DimensionField entries for every slot whose display name is not null.
    """

    return _active_fields(metadata, CATEGORY_KEYS)


def active_value_fields(metadata: object) -> tuple[DimensionField, ...]:
    """Return the named value slots of a project in slot order."""

    return _active_fields(metadata, VALUE_KEYS)


def _active_fields(metadata: object, keys: tuple[str, ...]) -> tuple[DimensionField, ...]:
    fields: list[DimensionField] = []
    for key in keys:
        name = getattr(metadata, f"{key}_name", None)
        if name is None:
            continue
        fields.append(DimensionField(key=key, name=name))
    return tuple(fields)
