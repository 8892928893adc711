"""CatalogEngine — owns every catalog component and their lifecycle.

Created once by the application root, initialized in the FastAPI lifespan
and handed to the routers through ``app.state``.
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque

from symbol_catalog.catalog.categories import CategoryStore
from symbol_catalog.catalog.contextual import ContextualSelector
from symbol_catalog.catalog.custom import CustomSymbolStore
from symbol_catalog.catalog.naming import name_key
from symbol_catalog.catalog.persistence import KeyValueStore, PersistenceGateway
from symbol_catalog.catalog.presenter import CatalogPresenter
from symbol_catalog.catalog.remote import RemoteCatalogClient
from symbol_catalog.catalog.settings import DisplaySettingsStore
from symbol_catalog.catalog.symbols import SymbolCatalog
from symbol_catalog.catalog.translation import HttpTranslator, TranslationOverlay, Translator
from symbol_catalog.config import CatalogConfig
from symbol_catalog.errors import CatalogError, NetworkFetchError
from symbol_catalog.models import Density

logger = logging.getLogger("symbol_catalog.engine")

MAX_NOTICES = 50


class CatalogEngine:
    """Process-wide catalog with an explicit initialize()/close() lifecycle."""

    def __init__(
        self,
        config: CatalogConfig,
        store: KeyValueStore,
        remote: RemoteCatalogClient | None = None,
        translator: Translator | None = None,
        selector: ContextualSelector | None = None,
        defaults: dict[str, list[str]] | None = None,
    ) -> None:
        self.config = config
        self.notices: deque[str] = deque(maxlen=MAX_NOTICES)
        self._owned: list = []

        if remote is None:
            remote = RemoteCatalogClient(config.api_base_url, timeout=config.fetch_timeout)
            self._owned.append(remote)
        if translator is None:
            translator = HttpTranslator(config.translate_base_url, timeout=config.translate_timeout)
            self._owned.append(translator)
        self._remote = remote

        self.gateway = PersistenceGateway(
            store, debounce_seconds=config.debounce_seconds, notify=self._on_error
        )
        self.categories = CategoryStore(remote)
        self.catalog = SymbolCatalog(self.gateway, defaults=defaults)
        self.custom = CustomSymbolStore(self.gateway)
        self.settings = DisplaySettingsStore(self.gateway, default_language=config.source_language)
        self.overlay = TranslationOverlay(
            translator,
            source_language=config.source_language,
            timeout=config.translate_timeout,
        )
        self.presenter = CatalogPresenter(
            self.categories,
            self.catalog,
            self.custom,
            self.overlay,
            selector=selector,
            language=config.source_language,
            prefer_remote_contextual=config.prefer_remote_contextual,
        )
        self.ready = False

    def _on_error(self, err: CatalogError) -> None:
        self.notices.append(str(err))

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load every source concurrently, then publish the first display list."""
        categories, _, settings = await asyncio.gather(
            self.categories.load(),
            self.custom.initialize(),
            self.settings.initialize(),
        )
        await self.catalog.initialize(categories, self.categories.remote_keywords)
        if self.config.prefer_remote_contextual:
            await self.refresh_contextual()

        self.presenter.language = settings.language
        await self.presenter.refresh()
        self.ready = True
        logger.info(
            "Catalog ready: %d categories, %d custom symbols, language=%s",
            len(categories), len(self.custom), settings.language,
        )

    async def close(self) -> None:
        await self.gateway.flush()
        for client in self._owned:
            await client.aclose()
        self._owned.clear()
        self.ready = False
        logger.info("Catalog engine closed")

    # ------------------------------------------------------------------
    # Reloads
    # ------------------------------------------------------------------

    async def reload_categories(self) -> None:
        categories = await self.categories.load()
        self.catalog.set_categories(categories, self.categories.remote_keywords)
        await self.presenter.on_categories_reloaded()

    async def refresh_contextual(self) -> None:
        try:
            keywords = await self._remote.fetch_time_context_symbols()
        except NetworkFetchError as exc:
            logger.warning("Contextual symbols unavailable: %s", exc)
            keywords = []
        self.catalog.set_contextual_remote(keywords)

    # ------------------------------------------------------------------
    # Mutations that change the grid
    # ------------------------------------------------------------------

    async def add_keyword(self, category_name: str, keyword: str) -> list[str]:
        keywords = self.catalog.add_keyword(category_name, keyword)
        if self.presenter.selection == name_key(category_name):
            await self.presenter.on_catalog_changed()
        return keywords

    async def custom_symbols_changed(self) -> None:
        await self.presenter.on_custom_symbols_changed()

    async def update_settings(
        self, language: str | None = None, density: Density | str | None = None
    ) -> None:
        if self.settings.update(language=language, density=density):
            await self.presenter.set_language(self.settings.language)

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------

    def counts(self) -> dict:
        return {
            "categories": len(self.categories.categories),
            "standard_categories": len(self.categories.standard_categories),
            "keywords": self.catalog.keyword_count(),
            "custom_symbols": len(self.custom),
            "custom_categories": len(self.custom.categories),
            "displayed_symbols": len(self.presenter.displayed),
            "pending_writes": len(self.gateway.pending_keys),
            "write_failures": self.gateway.write_failures,
        }

