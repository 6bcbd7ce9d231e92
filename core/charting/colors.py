"""Series colors for category combinations."""

from __future__ import annotations

from typing import Final

BASE_COLORS: Final[tuple[str, ...]] = (
    "#8884d8",
    "#82ca9d",
    "#ffc658",
    "#ff7c7c",
    "#8dd1e1",
    "#a4de6c",
    "#d0ed57",
    "#ffc0cb",
    "#dda0dd",
    "#f0e68c",
    "#87ceeb",
    "#98fb98",
    "#deb887",
    "#cd5c5c",
    "#4682b4",
)

GOLDEN_ANGLE: Final[float] = 137.508


def combination_colors(count: int) -> tuple[str, ...]:
    """Return `count` distinct colors.

    The fixed palette is used first; further colors are spread around the hue
    wheel by the golden angle so neighbouring series stay distinguishable.
    """

    colors: list[str] = []
    for idx in range(count):
        if idx < len(BASE_COLORS):
            colors.append(BASE_COLORS[idx])
        else:
            hue = (idx * GOLDEN_ANGLE) % 360
            colors.append(f"hsl({hue:g}, 70%, 60%)")
    return tuple(colors)
