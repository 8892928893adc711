"""User-created symbols and the user's own categories for grouping them."""

from __future__ import annotations

import logging
import uuid

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaError

from symbol_catalog.catalog.naming import name_key, sort_key
from symbol_catalog.catalog.persistence import (
    CUSTOM_CATEGORIES_KEY,
    CUSTOM_SYMBOLS_KEY,
    PersistenceGateway,
)
from symbol_catalog.errors import StorageReadError, ValidationError
from symbol_catalog.models import CustomCategory, CustomSection, CustomSymbolItem

logger = logging.getLogger("symbol_catalog.custom")

_SYMBOLS_ADAPTER = TypeAdapter(list[CustomSymbolItem])
_CATEGORIES_ADAPTER = TypeAdapter(list[CustomCategory])

UNCATEGORIZED_LABEL = "Uncategorized"

_UNSET = object()


def _by_name(item: CustomSymbolItem | CustomCategory) -> tuple[str, str]:
    return sort_key(item.name)


class CustomSymbolStore:
    """In-memory custom symbols, written behind through the gateway.

    Names are unique case-insensitively across the whole custom set,
    regardless of which category a symbol belongs to.
    """

    def __init__(self, gateway: PersistenceGateway) -> None:
        self._gateway = gateway
        self._items: list[CustomSymbolItem] = []
        self._categories: list[CustomCategory] = []
        self.loaded = False

    async def initialize(self) -> None:
        self._items = await self._load(CUSTOM_SYMBOLS_KEY, _SYMBOLS_ADAPTER)
        self._categories = await self._load(CUSTOM_CATEGORIES_KEY, _CATEGORIES_ADAPTER)
        self._items.sort(key=_by_name)
        self._categories.sort(key=_by_name)
        self.loaded = True
        logger.info(
            "Loaded %d custom symbols in %d categories",
            len(self._items), len(self._categories),
        )

    async def _load(self, key: str, adapter: TypeAdapter) -> list:
        try:
            raw = await self._gateway.load(key)
        except StorageReadError:
            return []
        if raw is None:
            return []
        try:
            return adapter.validate_python(raw)
        except SchemaError as exc:
            logger.warning("Discarding malformed %s blob: %s", key, exc.error_count())
            return []

    # ------------------------------------------------------------------
    # Symbols
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[CustomSymbolItem]:
        return [item.model_copy() for item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def get(self, symbol_id: str) -> CustomSymbolItem | None:
        for item in self._items:
            if item.id == symbol_id:
                return item.model_copy()
        return None

    def _check_name(self, name: str, exclude_id: str | None = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Symbol name must not be empty")
        key = name_key(name)
        for item in self._items:
            if item.id != exclude_id and name_key(item.name) == key:
                raise ValidationError(f"Custom symbol '{name}' already exists", duplicate=True)
        return name

    def add(
        self,
        name: str,
        image_uri: str | None = None,
        category_id: str | None = None,
    ) -> CustomSymbolItem:
        name = self._check_name(name)
        item = CustomSymbolItem(
            id=f"custom_{uuid.uuid4().hex}",
            name=name,
            image_uri=image_uri,
            category_id=category_id,
        )
        self._items.append(item)
        self._items.sort(key=_by_name)
        self._persist_symbols()
        logger.info("Added custom symbol %r", name)
        return item.model_copy()

    def update(
        self,
        symbol_id: str,
        name: str | None = None,
        image_uri=_UNSET,
        category_id=_UNSET,
    ) -> CustomSymbolItem | None:
        """Patch a symbol in place; unknown ids are ignored and return None.

        ``image_uri`` and ``category_id`` may be set to None to clear them.
        """
        index = next((i for i, s in enumerate(self._items) if s.id == symbol_id), None)
        if index is None:
            logger.debug("Update for unknown custom symbol %s ignored", symbol_id)
            return None

        changes: dict = {}
        if name is not None:
            changes["name"] = self._check_name(name, exclude_id=symbol_id)
        if image_uri is not _UNSET:
            changes["image_uri"] = image_uri
        if category_id is not _UNSET:
            changes["category_id"] = category_id

        item = self._items[index].model_copy(update=changes)
        self._items[index] = item
        self._items.sort(key=_by_name)
        self._persist_symbols()
        return item.model_copy()

    def remove(self, symbol_id: str) -> bool:
        before = len(self._items)
        self._items = [s for s in self._items if s.id != symbol_id]
        if len(self._items) == before:
            logger.debug("Remove for unknown custom symbol %s ignored", symbol_id)
            return False
        self._persist_symbols()
        return True

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    @property
    def categories(self) -> list[CustomCategory]:
        return [c.model_copy() for c in self._categories]

    def _check_category_name(self, name: str, exclude_id: str | None = None) -> str:
        name = name.strip()
        if not name:
            raise ValidationError("Category name must not be empty")
        key = name_key(name)
        for category in self._categories:
            if category.id != exclude_id and name_key(category.name) == key:
                raise ValidationError(f"Category '{name}' already exists", duplicate=True)
        return name

    def add_category(self, name: str) -> CustomCategory:
        name = self._check_category_name(name)
        category = CustomCategory(id=f"cat_{uuid.uuid4().hex[:12]}", name=name)
        self._categories.append(category)
        self._categories.sort(key=_by_name)
        self._persist_categories()
        return category.model_copy()

    def rename_category(self, category_id: str, name: str) -> CustomCategory | None:
        for index, category in enumerate(self._categories):
            if category.id == category_id:
                name = self._check_category_name(name, exclude_id=category_id)
                renamed = category.model_copy(update={"name": name})
                self._categories[index] = renamed
                self._categories.sort(key=_by_name)
                self._persist_categories()
                return renamed.model_copy()
        return None

    def remove_category(self, category_id: str) -> bool:
        before = len(self._categories)
        self._categories = [c for c in self._categories if c.id != category_id]
        if len(self._categories) == before:
            return False
        orphaned = False
        for index, item in enumerate(self._items):
            if item.category_id == category_id:
                self._items[index] = item.model_copy(update={"category_id": None})
                orphaned = True
        self._persist_categories()
        if orphaned:
            self._persist_symbols()
        return True

    def sections(self) -> list[CustomSection]:
        """Uncategorized symbols first, then one section per category."""
        known = {c.id for c in self._categories}
        grouped: dict[str | None, list[CustomSymbolItem]] = {}
        for item in self._items:
            key = item.category_id if item.category_id in known else None
            grouped.setdefault(key, []).append(item.model_copy())

        sections: list[CustomSection] = []
        uncategorized = grouped.pop(None, [])
        if uncategorized or not self._categories:
            sections.append(
                CustomSection(id=None, name=UNCATEGORIZED_LABEL, symbols=uncategorized)
            )
        for category in self._categories:
            sections.append(
                CustomSection(
                    id=category.id,
                    name=category.name,
                    symbols=grouped.get(category.id, []),
                )
            )
        return sections

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _persist_symbols(self) -> None:
        self._gateway.save(
            CUSTOM_SYMBOLS_KEY,
            [item.model_dump(by_alias=True, exclude_none=True) for item in self._items],
        )

    def _persist_categories(self) -> None:
        self._gateway.save(
            CUSTOM_CATEGORIES_KEY,
            [c.model_dump(by_alias=True) for c in self._categories],
        )
