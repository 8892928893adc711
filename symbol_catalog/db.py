"""Database pool management and key/value helpers for the symbol catalog."""

from __future__ import annotations

import json
import os

import asyncpg

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_DB_HOST = os.environ.get("SC_DB_HOST", "localhost")
_DB_PORT = os.environ.get("SC_DB_PORT", "5432")
_DB_USER = os.environ.get("SC_DB_USER", "postgres")
_DB_PASSWORD = os.environ.get("SC_DB_PASSWORD", "postgres")
_DB_NAME = os.environ.get("SC_DB_NAME", "symbol_catalog")

DATABASE_URL = os.environ.get(
    "SC_DATABASE_URL",
    f"postgresql://{_DB_USER}:{_DB_PASSWORD}@{_DB_HOST}:{_DB_PORT}/{_DB_NAME}",
)

# ---------------------------------------------------------------------------
# Pool
# ---------------------------------------------------------------------------

_pool: asyncpg.Pool | None = None


async def init_pool() -> asyncpg.Pool:
    """Create the global asyncpg connection pool."""
    global _pool
    _pool = await asyncpg.create_pool(
        DATABASE_URL,
        min_size=1,
        max_size=4,
        init=_init_connection,
    )
    return _pool


async def close_pool() -> None:
    """Gracefully close the connection pool."""
    global _pool
    if _pool:
        await _pool.close()
        _pool = None


def get_pool() -> asyncpg.Pool:
    """Return the pool, raising if not initialized."""
    if _pool is None:
        raise RuntimeError("Database pool not initialized")
    return _pool


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Set up JSON codec on each new connection."""
    await conn.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )
    await conn.set_type_codec(
        "json", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


# ---------------------------------------------------------------------------
# Key/value helpers
# ---------------------------------------------------------------------------

async def ensure_schema(pool: asyncpg.Pool) -> None:
    """Create the key/value table if it does not exist yet."""
    await pool.execute(
        "CREATE TABLE IF NOT EXISTS kv_store ("
        "  key TEXT PRIMARY KEY,"
        "  value JSONB NOT NULL,"
        "  updated_at TIMESTAMPTZ NOT NULL DEFAULT now()"
        ")"
    )


async def kv_get(pool: asyncpg.Pool, key: str):
    """Return the decoded blob stored under ``key``, or None."""
    return await pool.fetchval("SELECT value FROM kv_store WHERE key = $1", key)


async def kv_put(pool: asyncpg.Pool, key: str, value) -> None:
    """Replace the whole blob stored under ``key`` in one statement."""
    await pool.execute(
        "INSERT INTO kv_store (key, value, updated_at) VALUES ($1, $2, now()) "
        "ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = now()",
        key, value,
    )


async def get_stats(pool: asyncpg.Pool) -> dict:
    """Aggregate stats for the metrics endpoint."""
    total_keys = await pool.fetchval("SELECT COUNT(*) FROM kv_store")
    last_write = await pool.fetchval("SELECT MAX(updated_at) FROM kv_store")
    return {
        "total_keys": total_keys,
        "last_write": last_write.isoformat() if last_write else None,
    }
