"""Engine configuration from environment variables (SC_ prefix)."""

from __future__ import annotations

import os

_TRUTHY = ("1", "true", "yes")


class CatalogConfig:
    """Configuration from environment variables (SC_ prefix)."""

    def __init__(self) -> None:
        self.port: int = int(os.environ.get("SC_PORT", "9820"))
        self.api_base_url: str = os.environ.get("SC_API_BASE_URL", "http://localhost:8000")
        self.translate_base_url: str = os.environ.get("SC_TRANSLATE_BASE_URL", self.api_base_url)
        self.fetch_timeout: float = float(os.environ.get("SC_FETCH_TIMEOUT", "10"))
        self.translate_timeout: float = float(os.environ.get("SC_TRANSLATE_TIMEOUT", "30"))
        self.source_language: str = os.environ.get("SC_SOURCE_LANGUAGE", "en")
        self.debounce_seconds: float = float(os.environ.get("SC_DEBOUNCE_SECONDS", "0.5"))
        self.storage_backend: str = os.environ.get("SC_STORAGE_BACKEND", "postgres").lower()
        self.prefer_remote_contextual: bool = (
            os.environ.get("SC_REMOTE_CONTEXTUAL", "").lower() in _TRUTHY
        )

    def to_dict(self) -> dict:
        return {
            "api_base_url": self.api_base_url,
            "translate_base_url": self.translate_base_url,
            "fetch_timeout": self.fetch_timeout,
            "translate_timeout": self.translate_timeout,
            "source_language": self.source_language,
            "debounce_seconds": self.debounce_seconds,
            "storage_backend": self.storage_backend,
            "prefer_remote_contextual": self.prefer_remote_contextual,
        }
