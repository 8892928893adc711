"""Persisted display settings: symbol language and grid density."""

from __future__ import annotations

import logging

from symbol_catalog.catalog.persistence import DISPLAY_SETTINGS_KEY, PersistenceGateway
from symbol_catalog.errors import StorageReadError, ValidationError
from symbol_catalog.models import Density, DisplaySettings

logger = logging.getLogger("symbol_catalog.settings")


class DisplaySettingsStore:
    def __init__(self, gateway: PersistenceGateway, default_language: str = "en") -> None:
        self._gateway = gateway
        self._default = DisplaySettings(language=default_language)
        self._settings = self._default.model_copy()

    @property
    def settings(self) -> DisplaySettings:
        return self._settings.model_copy()

    @property
    def language(self) -> str:
        return self._settings.language

    @property
    def density(self) -> Density:
        return self._settings.grid_density

    async def initialize(self) -> DisplaySettings:
        try:
            raw = await self._gateway.load(DISPLAY_SETTINGS_KEY)
        except StorageReadError:
            raw = None
        if isinstance(raw, dict):
            self._settings = DisplaySettings(
                language=self._stored_language(raw.get("language")),
                grid_density=self._stored_density(raw.get("gridDensity")),
            )
        elif raw is not None:
            logger.warning("Stored display settings are not an object, using defaults")
        return self.settings

    def _stored_language(self, value: object) -> str:
        if isinstance(value, str) and value.strip():
            return value.strip()
        if value is not None:
            logger.warning("Stored language %r invalid, using %s", value, self._default.language)
        return self._default.language

    def _stored_density(self, value: object) -> Density:
        if value is None:
            return self._default.grid_density
        try:
            return Density(value)
        except (TypeError, ValueError):
            logger.warning("Stored grid density %r invalid, using %s", value, self._default.grid_density.value)
            return self._default.grid_density

    def update(self, language: str | None = None, density: Density | str | None = None) -> bool:
        """Apply changes; returns True when the language changed."""
        changes: dict = {}
        if language is not None:
            language = language.strip()
            if not language:
                raise ValidationError("Language must not be empty")
            changes["language"] = language
        if density is not None:
            try:
                changes["grid_density"] = Density(density)
            except ValueError as exc:
                raise ValidationError(f"Unknown grid density '{density}'") from exc
        if not changes:
            return False

        language_changed = changes.get("language", self._settings.language) != self._settings.language
        self._settings = self._settings.model_copy(update=changes)
        self._gateway.save(DISPLAY_SETTINGS_KEY, self._settings.model_dump(mode="json", by_alias=True))
        return language_changed
