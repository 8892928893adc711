"""Grid sizing from density preset and viewport width."""

from __future__ import annotations

import math

from symbol_catalog.models import Density, GridLayout, Region

# Grid beside the category list (split) vs. a full-width grid.
COLUMNS: dict[Region, dict[Density, int]] = {
    Region.SPLIT: {Density.SIMPLE: 4, Density.STANDARD: 6, Density.DENSE: 8},
    Region.FULL: {Density.SIMPLE: 6, Density.STANDARD: 8, Density.DENSE: 10},
}

MIN_ITEM_SIZE: dict[Density, int] = {
    Density.SIMPLE: 90,
    Density.STANDARD: 75,
    Density.DENSE: 60,
}

# Flex shares of the split layout: symbol grid vs. category panel.
_GRID_FLEX = 8.0
_PANEL_FLEX = 2.5


def columns_for(density: Density | str, region: Region | str = Region.SPLIT) -> int:
    return COLUMNS[Region(region)][Density(density)]


def item_width_for(
    density: Density | str,
    columns: int,
    available_width: float,
    margin: float,
    padding: float | None = None,
) -> int:
    """Width of one grid item, never below the density's legibility minimum.

    ``margin`` is the per-side margin around each item and ``padding`` the
    per-side padding of the grid container (defaults to ``margin``).
    """
    if columns <= 0:
        columns = 1
    if padding is None:
        padding = margin
    usable = available_width - 2 * padding - 2 * margin * columns
    width = math.floor(usable / columns)
    return max(MIN_ITEM_SIZE[Density(density)], width)


def split_pane_width(viewport_width: float) -> float:
    """Share of the viewport taken by the symbol grid in a split layout."""
    return viewport_width * (_GRID_FLEX / (_GRID_FLEX + _PANEL_FLEX))


def resolve_layout(
    density: Density | str,
    region: Region | str,
    viewport_width: float,
    margin: float,
) -> GridLayout:
    region = Region(region)
    columns = columns_for(density, region)
    available = split_pane_width(viewport_width) if region is Region.SPLIT else viewport_width
    return GridLayout(
        columns=columns,
        item_size=item_width_for(density, columns, available, margin),
    )
