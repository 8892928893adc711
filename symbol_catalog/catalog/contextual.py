"""Time-of-day contextual symbols.

Maps the hour of the day onto a named bucket and each bucket onto a curated
keyword list. No I/O; the clock is injectable so callers can pin the hour.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Callable


class TimeContext(str, Enum):
    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    EVENING = "Evening"
    NIGHT = "Night"
    DEFAULT = "Default"


# Closed-open hour ranges; Night wraps around midnight.
_BUCKETS: list[tuple[int, int, TimeContext]] = [
    (5, 12, TimeContext.MORNING),
    (12, 17, TimeContext.AFTERNOON),
    (17, 21, TimeContext.EVENING),
    (21, 24, TimeContext.NIGHT),
    (0, 5, TimeContext.NIGHT),
]

CONTEXT_SYMBOLS: dict[TimeContext, tuple[str, ...]] = {
    TimeContext.MORNING: (
        "good morning", "breakfast", "eat", "drink", "milk", "cereal", "toast",
        "brush teeth", "get dressed", "school", "bus", "play", "happy", "sun",
        "wake up", "juice", "water", "bathroom", "wash hands", "clothes",
    ),
    TimeContext.AFTERNOON: (
        "good afternoon", "lunch", "eat", "drink", "water", "sandwich", "play",
        "outside", "park", "swing", "slide", "friends", "home", "nap", "snack",
        "book", "read", "car", "walk", "happy",
    ),
    TimeContext.EVENING: (
        "good evening", "dinner", "eat", "drink", "water", "family", "play",
        "bath", "pajamas", "book", "read", "tired", "bedtime", "moon", "stars",
        "television", "game", "finished", "more", "hungry",
    ),
    TimeContext.NIGHT: (
        "good night", "sleep", "bed", "tired", "dark", "moon", "stars", "dream",
        "pajamas", "book", "mom", "dad", "hug", "kiss", "quiet", "light off",
        "sleepy", "blanket", "pillow", "finished",
    ),
    TimeContext.DEFAULT: (
        "hello", "goodbye", "yes", "no", "please", "thank you", "more",
        "finished", "help", "want", "eat", "drink", "play", "bathroom", "hurt",
        "sad", "happy", "tired", "mom", "dad",
    ),
}


def resolve_context(hour: int) -> TimeContext:
    """Return the bucket for ``hour``; out-of-range hours map to DEFAULT."""
    for start, end, context in _BUCKETS:
        if start <= hour < end:
            return context
    return TimeContext.DEFAULT


def symbols_for(context: TimeContext) -> list[str]:
    """Curated keywords for a bucket, in display order."""
    return list(CONTEXT_SYMBOLS.get(context, CONTEXT_SYMBOLS[TimeContext.DEFAULT]))


class ContextualSelector:
    """Resolve the current bucket from an injectable clock."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._clock = clock or datetime.now

    def current_context(self) -> TimeContext:
        return resolve_context(self._clock().hour)

    def current_symbols(self) -> list[str]:
        return symbols_for(self.current_context())
