import pytest

from symbol_catalog.catalog.layout import (
    MIN_ITEM_SIZE,
    columns_for,
    item_width_for,
    resolve_layout,
    split_pane_width,
)
from symbol_catalog.models import Density, Region


@pytest.mark.parametrize("region", list(Region))
def test_columns_strictly_increase_with_density(region):
    simple = columns_for(Density.SIMPLE, region)
    standard = columns_for(Density.STANDARD, region)
    dense = columns_for(Density.DENSE, region)
    assert simple < standard < dense


def test_columns_accept_plain_strings():
    assert columns_for("standard", "split") == 6
    assert columns_for("dense", "full") == 10


def test_item_width_formula():
    # (1000 - 2*5 - 2*5*4) / 4 = 237.5 -> 237
    assert item_width_for(Density.SIMPLE, 4, 1000, margin=5) == 237
    assert item_width_for(Density.SIMPLE, 4, 1000, margin=5, padding=0) == 240


@pytest.mark.parametrize("density", list(Density))
def test_item_width_is_non_increasing_and_respects_minimum(density):
    widths = [item_width_for(density, cols, 800, margin=2.5) for cols in range(1, 20)]
    assert all(a >= b for a, b in zip(widths, widths[1:]))
    assert min(widths) >= MIN_ITEM_SIZE[density]


def test_sparser_densities_have_larger_minimum():
    assert MIN_ITEM_SIZE[Density.SIMPLE] > MIN_ITEM_SIZE[Density.STANDARD] > MIN_ITEM_SIZE[Density.DENSE]
    assert item_width_for(Density.SIMPLE, 12, 300, margin=5) == 90


def test_degenerate_column_count_is_a_single_column():
    assert item_width_for(Density.DENSE, 0, 500, margin=5) == item_width_for(Density.DENSE, 1, 500, margin=5)
    assert item_width_for(Density.DENSE, -3, 500, margin=5) == 480


def test_resolve_layout_uses_split_pane_share():
    layout = resolve_layout(Density.STANDARD, Region.SPLIT, 1050, margin=2.5)
    assert split_pane_width(1050) == pytest.approx(800)
    assert layout.columns == 6
    assert layout.item_size == item_width_for(Density.STANDARD, 6, 800, margin=2.5)

    full = resolve_layout("standard", "full", 1050, margin=2.5)
    assert full.columns == 8
