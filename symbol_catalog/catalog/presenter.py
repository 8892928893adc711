"""Selection state and the display-ready symbol list.

The presenter is the only component the display layer talks to. Every
change that can alter the grid (selection, language, a category or custom
symbol reload) bumps a generation counter and recomputes; a recompute that
finishes after a newer one started is discarded instead of published.
"""

from __future__ import annotations

import logging
from typing import Callable

from symbol_catalog.catalog.categories import CategoryStore
from symbol_catalog.catalog.contextual import ContextualSelector
from symbol_catalog.catalog.custom import CustomSymbolStore
from symbol_catalog.catalog.naming import CONTEXTUAL, CUSTOM, display_name_for, name_key, slug, sorted_names
from symbol_catalog.catalog.symbols import SymbolCatalog
from symbol_catalog.catalog.translation import TranslationOverlay
from symbol_catalog.models import DisplayedSymbolData

logger = logging.getLogger("symbol_catalog.presenter")

Subscriber = Callable[[str, list[DisplayedSymbolData]], None]

# Reasons passed to subscribers
SELECTION_CHANGED = "selection"
LANGUAGE_CHANGED = "language"
CATEGORIES_RELOADED = "categories"
CUSTOM_SYMBOLS_CHANGED = "custom"
CATALOG_CHANGED = "catalog"
REFRESH = "refresh"


def normalize_selection(name: str | None) -> str | None:
    """None and 'contextual' both mean the contextual pseudo-category."""
    if name is None:
        return None
    key = name_key(name)
    if not key or key == CONTEXTUAL:
        return None
    return key


class CatalogPresenter:
    def __init__(
        self,
        categories: CategoryStore,
        catalog: SymbolCatalog,
        custom: CustomSymbolStore,
        overlay: TranslationOverlay,
        selector: ContextualSelector | None = None,
        language: str = "en",
        prefer_remote_contextual: bool = False,
    ) -> None:
        self._categories = categories
        self._catalog = catalog
        self._custom = custom
        self._overlay = overlay
        self._selector = selector or ContextualSelector()
        self._prefer_remote_contextual = prefer_remote_contextual
        self.language = language
        self.selection: str | None = None
        self._generation = 0
        self._displayed: list[DisplayedSymbolData] = []
        self._subscribers: list[Subscriber] = []

    # ------------------------------------------------------------------
    # Subscribers
    # ------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback(reason, symbols)``; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, reason: str) -> None:
        for callback in list(self._subscribers):
            try:
                callback(reason, list(self._displayed))
            except Exception:
                logger.exception("Presenter subscriber failed")

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def displayed(self) -> list[DisplayedSymbolData]:
        return list(self._displayed)

    @property
    def selection_label(self) -> str:
        if self.selection is None:
            return display_name_for(CONTEXTUAL)
        category = self._categories.find(self.selection)
        return display_name_for(category.name if category else self.selection)

    async def select(self, name: str | None) -> list[DisplayedSymbolData] | None:
        """Switch the selection; returns None when nothing changed or the result went stale."""
        selection = normalize_selection(name)
        if selection == self.selection:
            return None
        self.selection = selection
        return await self._recompute(SELECTION_CHANGED)

    async def set_language(self, language: str) -> list[DisplayedSymbolData] | None:
        if language == self.language:
            return None
        self.language = language
        return await self._recompute(LANGUAGE_CHANGED)

    async def on_categories_reloaded(self) -> list[DisplayedSymbolData] | None:
        return await self._recompute(CATEGORIES_RELOADED)

    async def on_custom_symbols_changed(self) -> list[DisplayedSymbolData] | None:
        return await self._recompute(CUSTOM_SYMBOLS_CHANGED)

    async def on_catalog_changed(self) -> list[DisplayedSymbolData] | None:
        return await self._recompute(CATALOG_CHANGED)

    async def refresh(self) -> list[DisplayedSymbolData] | None:
        return await self._recompute(REFRESH)

    async def _recompute(self, reason: str) -> list[DisplayedSymbolData] | None:
        self._generation += 1
        generation = self._generation
        symbols = await self.resolve_display_list()
        if generation != self._generation:
            logger.debug("Discarding stale display list (%s)", reason)
            return None
        self._displayed = symbols
        self._publish(reason)
        return self.displayed

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _source_keywords(self) -> tuple[str, list[str], dict[str, str | None], bool]:
        """Return (id prefix, keywords, image uris by keyword, is_custom)."""
        selection = self.selection
        if selection == CUSTOM:
            items = self._custom.items
            images = {item.name: item.image_uri for item in items}
            return "custom_sym", sorted_names(item.name for item in items), images, True

        if selection is None:
            remote = self._catalog.contextual_remote
            if self._prefer_remote_contextual and remote:
                return "ctx_api_sym", sorted_names(remote), {}, False
            return "ctx_sym", self._selector.current_symbols(), {}, False

        return f"cat_{slug(selection)}_sym", self._catalog.keywords_for(selection), {}, False

    async def resolve_display_list(self) -> list[DisplayedSymbolData]:
        """Build the display list for the current selection and language."""
        prefix, keywords, images, is_custom = self._source_keywords()
        display_texts = await self._overlay.localize(keywords, self.language)
        return [
            DisplayedSymbolData(
                id=f"{prefix}_{index}_{slug(keyword)}",
                keyword=keyword,
                display_text=display_texts[index] or keyword,
                image_uri=images.get(keyword),
                is_custom=is_custom,
            )
            for index, keyword in enumerate(keywords)
        ]
