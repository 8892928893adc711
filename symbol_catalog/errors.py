"""Error taxonomy for the symbol catalog engine.

Only ``ValidationError`` is meant to reach a caller; every other error is
caught inside the engine and degrades the catalog to defaults.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all catalog engine errors."""


class NetworkFetchError(CatalogError):
    """Remote catalog unreachable, non-2xx, or returned an unusable body."""


class StorageReadError(CatalogError):
    """A persisted blob could not be read or decoded."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class StorageWriteError(CatalogError):
    """A persisted blob could not be written."""

    def __init__(self, key: str, message: str) -> None:
        super().__init__(f"{key}: {message}")
        self.key = key


class TranslationBatchError(CatalogError):
    """The batch translation call failed or returned a malformed payload."""


class ValidationError(CatalogError):
    """A mutating operation was rejected (empty name, duplicate, read-only category)."""

    def __init__(self, message: str, *, duplicate: bool = False) -> None:
        super().__init__(message)
        self.duplicate = duplicate
