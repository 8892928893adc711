"""Name normalization shared by the catalog components."""

from __future__ import annotations

import re
from typing import Iterable

_WHITESPACE_RE = re.compile(r"\s+")

CONTEXTUAL = "contextual"
CUSTOM = "custom"


def name_key(name: str) -> str:
    """Case-insensitive identity of a category, keyword or symbol name."""
    return name.strip().casefold()


def sort_key(name: str) -> tuple[str, str]:
    return (name.casefold(), name)


def sorted_names(names: Iterable[str]) -> list[str]:
    return sorted(names, key=sort_key)


def unique_names(names: Iterable[str]) -> list[str]:
    """Drop case-insensitive repeats; the first spelling wins."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        key = name_key(name)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(name)
    return result


def slug(name: str) -> str:
    """Lowercase, whitespace runs replaced by underscores."""
    return _WHITESPACE_RE.sub("_", name.strip()).lower()


def display_name_for(name: str) -> str:
    key = name_key(name)
    if key == CONTEXTUAL:
        return "Contextual"
    if key == CUSTOM:
        return "Custom"
    name = name.strip()
    return name[:1].upper() + name[1:].lower()
