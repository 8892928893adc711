"""Debounced write-behind persistence over a key/value store.

Every key holds one JSON blob that is always written whole. ``save`` is
ignored until ``load`` for the same key has completed, so an empty startup
state can never overwrite data persisted by an earlier run. Saves inside the
debounce window coalesce into one write of the latest snapshot.
"""

from __future__ import annotations

import asyncio
import copy
import json
import logging
from typing import Callable, Protocol

import asyncpg

from symbol_catalog import db
from symbol_catalog.errors import CatalogError, StorageReadError, StorageWriteError

logger = logging.getLogger("symbol_catalog.persistence")

CUSTOM_SYMBOLS_KEY = "customSymbols"
CUSTOM_CATEGORIES_KEY = "customCategories"
CATEGORY_KEYWORD_MAP_KEY = "categoryKeywordMap"
DISPLAY_SETTINGS_KEY = "displaySettings"


# ---------------------------------------------------------------------------
# Stores
# ---------------------------------------------------------------------------

class KeyValueStore(Protocol):
    async def get(self, key: str) -> object | None: ...

    async def set(self, key: str, value: object) -> None: ...


class MemoryKeyValueStore:
    """In-process store keeping each blob as serialized JSON text."""

    def __init__(self, initial: dict[str, object] | None = None) -> None:
        self._blobs: dict[str, str] = {
            key: json.dumps(value) for key, value in (initial or {}).items()
        }
        self.writes = 0

    async def get(self, key: str) -> object | None:
        blob = self._blobs.get(key)
        return None if blob is None else json.loads(blob)

    async def set(self, key: str, value: object) -> None:
        self._blobs[key] = json.dumps(value)
        self.writes += 1

    def raw(self, key: str) -> str | None:
        return self._blobs.get(key)

    def keys(self) -> list[str]:
        return list(self._blobs)


class PostgresKeyValueStore:
    """Blobs in the ``kv_store`` jsonb table, one upsert per write."""

    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def get(self, key: str) -> object | None:
        return await db.kv_get(self._pool, key)

    async def set(self, key: str, value: object) -> None:
        await db.kv_put(self._pool, key, value)


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------

class PersistenceGateway:
    """Load-guarded, debounced writer shared by every persisted component."""

    def __init__(
        self,
        store: KeyValueStore,
        debounce_seconds: float = 0.5,
        notify: Callable[[CatalogError], None] | None = None,
    ) -> None:
        self._store = store
        self._debounce = debounce_seconds
        self._notify = notify
        self._loaded: set[str] = set()
        self._pending: dict[str, object] = {}
        self._timers: dict[str, asyncio.TimerHandle] = {}
        self._locks: dict[str, asyncio.Lock] = {}
        self._writes: set[asyncio.Task] = set()
        self._failed: set[str] = set()
        self.write_failures = 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def is_loaded(self, key: str) -> bool:
        return key in self._loaded

    async def load(self, key: str) -> object | None:
        """Read the blob for ``key``; raises StorageReadError on failure.

        The key counts as loaded either way, since callers fall back to a
        default state that may then be saved.
        """
        try:
            return await self._store.get(key)
        except Exception as exc:
            err = StorageReadError(key, str(exc))
            logger.exception("Failed to load %s", key)
            self._emit(err)
            raise err from exc
        finally:
            self._loaded.add(key)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    @property
    def pending_keys(self) -> list[str]:
        return sorted(self._pending)

    def save(self, key: str, value: object) -> None:
        """Schedule a write of the full snapshot ``value`` after the quiet period.

        Must be called from inside the running event loop.
        """
        if key not in self._loaded:
            logger.debug("Ignoring save for %s before its load completed", key)
            return

        self._pending[key] = copy.deepcopy(value)
        timer = self._timers.pop(key, None)
        if timer is not None:
            timer.cancel()
        loop = asyncio.get_running_loop()
        self._timers[key] = loop.call_later(self._debounce, self._fire, key)

    def _fire(self, key: str) -> None:
        self._timers.pop(key, None)
        if key not in self._pending:
            return
        value = self._pending.pop(key)
        task = asyncio.get_running_loop().create_task(self._write(key, value))
        self._writes.add(task)
        task.add_done_callback(self._writes.discard)

    async def _write(self, key: str, value: object) -> bool:
        lock = self._locks.setdefault(key, asyncio.Lock())
        async with lock:
            try:
                await self._store.set(key, value)
            except Exception as exc:
                self.write_failures += 1
                err = StorageWriteError(key, str(exc))
                logger.exception("Failed to save %s", key)
                if key not in self._failed:
                    self._failed.add(key)
                    self._emit(err)
                return False
        self._failed.discard(key)
        logger.debug("Saved %s", key)
        return True

    async def flush(self) -> None:
        """Write every pending snapshot now and wait for in-flight writes."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        pending, self._pending = self._pending, {}
        for key, value in pending.items():
            await self._write(key, value)
        if self._writes:
            await asyncio.gather(*list(self._writes))

    def _emit(self, err: CatalogError) -> None:
        if self._notify is not None:
            self._notify(err)
