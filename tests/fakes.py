"""Test doubles for the remote API, the translator and the key/value store."""

from __future__ import annotations

import asyncio
from datetime import datetime

import asyncpg

from symbol_catalog.catalog.persistence import MemoryKeyValueStore
from symbol_catalog.config import CatalogConfig
from symbol_catalog.errors import NetworkFetchError, TranslationBatchError


class FakeRemote:
    def __init__(self, categories: dict | None = None, contextual: list | None = None, fail=False):
        self.categories = categories or {}
        self.contextual = contextual or []
        self.fail = fail
        self.calls = 0
        self.closed = False

    async def fetch_standard_categories(self) -> dict[str, list[str]]:
        self.calls += 1
        if self.fail:
            raise NetworkFetchError("HTTP 503 from /api/v1/symbols/standard-categories")
        return {k: list(v) for k, v in self.categories.items()}

    async def fetch_time_context_symbols(self) -> list[str]:
        if self.fail:
            raise NetworkFetchError("HTTP 503 from /api/v1/symbols/current-time-context")
        return list(self.contextual)

    async def aclose(self) -> None:
        self.closed = True


class FakeTranslator:
    """Upper-cases words by default; can fail, shorten the result, or stall."""

    def __init__(self, mode: str = "upper", delay: float = 0.0):
        self.mode = mode
        self.delay = delay
        self.calls: list[tuple[list[str], str]] = []

    async def translate_batch(self, words: list[str], target_language: str) -> list[str]:
        self.calls.append((list(words), target_language))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.mode == "fail":
            raise TranslationBatchError("HTTP 500")
        if self.mode == "short":
            return [w.upper() for w in words][:-1]
        if self.mode == "crash":
            raise RuntimeError("translator bug")
        return [f"{w.upper()}" for w in words]


class FailingStore(MemoryKeyValueStore):
    def __init__(self, initial=None, fail_reads=False, fail_writes=False):
        super().__init__(initial)
        self.fail_reads = fail_reads
        self.fail_writes = fail_writes

    async def get(self, key):
        if self.fail_reads:
            raise OSError("storage unavailable")
        return await super().get(key)

    async def set(self, key, value):
        if self.fail_writes:
            raise OSError("disk full")
        await super().set(key, value)


class ClosingPoolStore(MemoryKeyValueStore):
    """Raises the driver error asyncpg gives once its pool starts closing."""

    async def get(self, key):
        raise asyncpg.InterfaceError("pool is closing")

    async def set(self, key, value):
        raise asyncpg.InterfaceError("pool is closing")


def fixed_clock(hour: int):
    return lambda: datetime(2024, 5, 1, hour, 30)


def make_config(monkeypatch, **env) -> CatalogConfig:
    monkeypatch.setenv("SC_DEBOUNCE_SECONDS", "0.01")
    monkeypatch.setenv("SC_STORAGE_BACKEND", "memory")
    for key, value in env.items():
        monkeypatch.setenv(key, value)
    return CatalogConfig()
