import pytest

from symbol_catalog.catalog.contextual import (
    CONTEXT_SYMBOLS,
    ContextualSelector,
    TimeContext,
    resolve_context,
    symbols_for,
)

from fakes import fixed_clock


@pytest.mark.parametrize(
    "hour,expected",
    [
        (0, TimeContext.NIGHT),
        (4, TimeContext.NIGHT),
        (5, TimeContext.MORNING),
        (11, TimeContext.MORNING),
        (12, TimeContext.AFTERNOON),
        (16, TimeContext.AFTERNOON),
        (17, TimeContext.EVENING),
        (20, TimeContext.EVENING),
        (21, TimeContext.NIGHT),
        (23, TimeContext.NIGHT),
    ],
)
def test_bucket_boundaries_are_closed_open(hour, expected):
    assert resolve_context(hour) is expected


def test_every_hour_maps_to_exactly_one_real_bucket():
    for hour in range(24):
        assert resolve_context(hour) in {
            TimeContext.MORNING,
            TimeContext.AFTERNOON,
            TimeContext.EVENING,
            TimeContext.NIGHT,
        }


def test_out_of_range_hour_falls_back_to_default():
    assert resolve_context(24) is TimeContext.DEFAULT
    assert resolve_context(-1) is TimeContext.DEFAULT


def test_symbols_keep_curated_order_and_are_copies():
    words = symbols_for(TimeContext.MORNING)
    assert words[0] == "good morning"
    words.append("extra")
    assert "extra" not in CONTEXT_SYMBOLS[TimeContext.MORNING]


def test_selector_uses_injected_clock():
    selector = ContextualSelector(clock=fixed_clock(22))
    assert selector.current_context() is TimeContext.NIGHT
    assert selector.current_symbols()[0] == "good night"
