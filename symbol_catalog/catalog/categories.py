"""Category list: remote standard categories merged with the bundled ones.

Deduplication is case-insensitive and the first registration keeps its
spelling, so bundled names win over the remote's casing. ``contextual`` and
``custom`` are pinned to the top; everything else is alphabetical.
"""

from __future__ import annotations

import logging
from typing import Protocol

from symbol_catalog.catalog.defaults import BASE_CATEGORIES
from symbol_catalog.catalog.naming import CONTEXTUAL, CUSTOM, name_key, slug, sort_key
from symbol_catalog.errors import NetworkFetchError
from symbol_catalog.models import CategoryInfo

logger = logging.getLogger("symbol_catalog.categories")

_PINNED = {CONTEXTUAL: 0, CUSTOM: 1}


class StandardCategorySource(Protocol):
    async def fetch_standard_categories(self) -> dict[str, list[str]]: ...


def category_order(category: CategoryInfo) -> tuple[int, str, str]:
    key = name_key(category.name)
    return (_PINNED.get(key, 2), *sort_key(category.name))


def merge_categories(
    remote_names: list[str],
    base: list[CategoryInfo] | None = None,
) -> list[CategoryInfo]:
    """Union of the bundled categories and the remote names, deduplicated and ordered."""
    combined: dict[str, CategoryInfo] = {}
    for category in base if base is not None else BASE_CATEGORIES:
        combined.setdefault(name_key(category.name), category)
    for raw in remote_names:
        key = name_key(raw)
        if not key or key in combined:
            continue
        combined[key] = CategoryInfo(id=f"cat_{slug(raw)}", name=raw.strip(), is_standard=True)
    return sorted(combined.values(), key=category_order)


class CategoryStore:
    """Holds the merged category list and the remote keyword lists behind it."""

    def __init__(
        self,
        source: StandardCategorySource,
        base: list[CategoryInfo] | None = None,
    ) -> None:
        self._source = source
        self._base = list(base if base is not None else BASE_CATEGORIES)
        self._categories: list[CategoryInfo] = merge_categories([], self._base)
        self._remote_keywords: dict[str, list[str]] = {}
        self.loaded = False

    @property
    def categories(self) -> list[CategoryInfo]:
        return list(self._categories)

    @property
    def remote_keywords(self) -> dict[str, list[str]]:
        """Remote keyword lists keyed by lowercase category name."""
        return {key: list(words) for key, words in self._remote_keywords.items()}

    @property
    def standard_categories(self) -> list[CategoryInfo]:
        return [c for c in self._categories if c.is_standard]

    def find(self, name: str) -> CategoryInfo | None:
        key = name_key(name)
        for category in self._categories:
            if name_key(category.name) == key:
                return category
        return None

    async def load(self) -> list[CategoryInfo]:
        """Fetch the remote category map and rebuild the list from scratch."""
        try:
            remote = await self._source.fetch_standard_categories()
        except NetworkFetchError as exc:
            logger.warning("Standard categories unavailable, using bundled set: %s", exc)
            remote = {}

        self._remote_keywords = {}
        for name, keywords in remote.items():
            key = name_key(name)
            if key:
                self._remote_keywords.setdefault(key, []).extend(keywords)

        self._categories = merge_categories(list(remote), self._base)
        self.loaded = True
        logger.info(
            "Loaded %d categories (%d from remote)", len(self._categories), len(remote)
        )
        return self.categories
