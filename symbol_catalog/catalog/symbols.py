"""Per-category keyword lists.

Keywords for a standard category come from two places: the remote list
fetched with the categories, and the persisted map of local entries (seeded
from bundled defaults on first run, extended by ``add_keyword``). Lookups
return the case-insensitive union, sorted.
"""

from __future__ import annotations

import logging

from symbol_catalog.catalog.defaults import DEFAULT_CATEGORY_KEYWORDS
from symbol_catalog.catalog.naming import name_key, sorted_names, unique_names
from symbol_catalog.catalog.persistence import CATEGORY_KEYWORD_MAP_KEY, PersistenceGateway
from symbol_catalog.errors import StorageReadError, ValidationError
from symbol_catalog.models import CategoryInfo

logger = logging.getLogger("symbol_catalog.symbols")


def _coerce_map(raw: object) -> dict[str, list[str]]:
    """Accept only ``{name: [str, ...]}``; anything else is treated as empty."""
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.warning("Ignoring persisted keyword map of type %s", type(raw).__name__)
        return {}
    result: dict[str, list[str]] = {}
    for name, words in raw.items():
        if not isinstance(name, str) or not isinstance(words, list):
            continue
        entry = result.setdefault(name_key(name), [])
        entry.extend(w for w in words if isinstance(w, str) and w.strip())
    return {key: sorted_names(unique_names(words)) for key, words in result.items()}


class SymbolCatalog:
    """Category -> keywords map with persisted local additions."""

    def __init__(
        self,
        gateway: PersistenceGateway,
        defaults: dict[str, list[str]] | None = None,
    ) -> None:
        self._gateway = gateway
        self._defaults = {
            name_key(k): list(v)
            for k, v in (defaults if defaults is not None else DEFAULT_CATEGORY_KEYWORDS).items()
        }
        self._local: dict[str, list[str]] = {}
        self._remote: dict[str, list[str]] = {}
        self._standard: set[str] = set()
        self._contextual_remote: list[str] = []

    async def initialize(
        self,
        categories: list[CategoryInfo],
        remote_keywords: dict[str, list[str]] | None = None,
    ) -> None:
        """Load the persisted map and seed every standard category missing from it."""
        try:
            raw = await self._gateway.load(CATEGORY_KEYWORD_MAP_KEY)
        except StorageReadError:
            raw = None
        self._local = _coerce_map(raw)
        self.set_categories(categories, remote_keywords)

    def set_categories(
        self,
        categories: list[CategoryInfo],
        remote_keywords: dict[str, list[str]] | None = None,
    ) -> None:
        """Adopt a (re)loaded category list; seeds new standard categories."""
        self._standard = {name_key(c.name) for c in categories if c.is_standard}
        self._remote = {name_key(k): list(v) for k, v in (remote_keywords or {}).items()}

        seeded = []
        for key in sorted(self._standard):
            if key not in self._local:
                self._local[key] = sorted_names(unique_names(self._defaults.get(key, [])))
                seeded.append(key)
        if seeded:
            logger.info("Seeded keyword lists for %s", ", ".join(seeded))
            self._persist()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def is_standard(self, category_name: str) -> bool:
        return name_key(category_name) in self._standard

    def keywords_for(self, category_name: str) -> list[str]:
        key = name_key(category_name)
        merged = unique_names([*self._local.get(key, []), *self._remote.get(key, [])])
        return sorted_names(merged)

    def snapshot(self) -> dict[str, list[str]]:
        return {key: list(words) for key, words in self._local.items()}

    @property
    def contextual_remote(self) -> list[str]:
        return list(self._contextual_remote)

    def set_contextual_remote(self, keywords: list[str]) -> None:
        self._contextual_remote = unique_names(keywords)

    def keyword_count(self) -> int:
        return sum(len(self.keywords_for(key)) for key in self._standard)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_keyword(self, category_name: str, keyword: str) -> list[str]:
        """Add ``keyword`` to a standard category and return the new list.

        Raises ValidationError for blank input, unknown or non-standard
        categories, and case-insensitive duplicates.
        """
        keyword = keyword.strip()
        if not keyword:
            raise ValidationError("Keyword must not be empty")
        key = name_key(category_name)
        if key not in self._standard:
            raise ValidationError(f"Category '{category_name}' cannot be extended")

        existing = {name_key(w) for w in self.keywords_for(key)}
        if name_key(keyword) in existing:
            raise ValidationError(
                f"'{keyword}' already exists in '{category_name}'", duplicate=True
            )

        self._local[key] = sorted_names([*self._local.get(key, []), keyword])
        self._persist()
        logger.info("Added keyword %r to %s", keyword, key)
        return self.keywords_for(key)

    def _persist(self) -> None:
        self._gateway.save(CATEGORY_KEYWORD_MAP_KEY, self.snapshot())
