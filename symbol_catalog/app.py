"""symbol-catalog — unified symbol catalog service for the communication board."""

from __future__ import annotations

import logging
import os
import time
from collections import deque
from contextlib import asynccontextmanager
from threading import Lock

import psutil
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from symbol_catalog import db
from symbol_catalog.catalog.engine import CatalogEngine
from symbol_catalog.catalog.persistence import MemoryKeyValueStore, PostgresKeyValueStore
from symbol_catalog.config import CatalogConfig

logger = logging.getLogger("symbol_catalog")


# ---------------------------------------------------------------------------
# RateCounter — thread-safe sliding-window request counter
# ---------------------------------------------------------------------------

SPARKLINE_BUCKETS = 60


class RateCounter:
    """Count events in a sliding window and expose per-second rate + history."""

    def __init__(self, window: float = 60.0) -> None:
        self._window = window
        self._lock = Lock()
        self._timestamps: deque[float] = deque()
        self._sparkline: deque[float] = deque(maxlen=SPARKLINE_BUCKETS)

    def record(self) -> None:
        now = time.monotonic()
        with self._lock:
            self._timestamps.append(now)

    def _prune(self, now: float) -> None:
        cutoff = now - self._window
        while self._timestamps and self._timestamps[0] < cutoff:
            self._timestamps.popleft()

    def rate(self) -> float:
        now = time.monotonic()
        with self._lock:
            self._prune(now)
            count = len(self._timestamps)
        return count / self._window if self._window else 0.0

    def snapshot_sparkline(self) -> None:
        self._sparkline.append(round(self.rate(), 2))

    def sparkline_history(self) -> list[float]:
        return list(self._sparkline)


request_counter = RateCounter(window=60.0)
_start_time: float = 0.0


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

async def _build_engine(config: CatalogConfig) -> CatalogEngine:
    """Create the engine on the configured storage backend."""
    if config.storage_backend == "memory":
        store = MemoryKeyValueStore()
    else:
        pool = await db.init_pool()
        await db.ensure_schema(pool)
        logger.info("Database pool initialized")
        store = PostgresKeyValueStore(pool)
    return CatalogEngine(config, store)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _start_time
    _start_time = time.time()

    config = CatalogConfig()
    engine = await _build_engine(config)
    await engine.initialize()
    app.state.engine = engine
    logger.info("Catalog engine initialized")

    yield

    await engine.close()
    await db.close_pool()
    logger.info("Database pool closed")


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title="symbol-catalog",
    version="0.1.0",
    description="Unified symbol catalog for the communication board display",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def count_requests(request: Request, call_next):
    request_counter.record()
    return await call_next(request)


from symbol_catalog.adapters.catalog import router as catalog_router  # noqa: E402
from symbol_catalog.adapters.custom import router as custom_router  # noqa: E402

app.include_router(catalog_router)
app.include_router(custom_router)


# ---------------------------------------------------------------------------
# Core routes
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    """Health check — engine readiness and DB connectivity."""
    engine = getattr(app.state, "engine", None)
    result: dict = {"status": "ok", "engine": "ready" if engine and engine.ready else "starting"}
    try:
        p = db.get_pool()
        db_ok = await p.fetchval("SELECT 1")
        result["database"] = "connected" if db_ok == 1 else "unexpected"
    except RuntimeError:
        result["database"] = "pool_not_initialized"
    except Exception as exc:
        result["status"] = "degraded"
        result["database"] = f"error: {exc}"
    if engine and engine.notices:
        result["status"] = "degraded"
    return result


@app.get("/metrics")
async def metrics():
    """Stats endpoint for server-monitor dashboard."""
    try:
        engine: CatalogEngine = app.state.engine
        now = time.time()
        process = psutil.Process(os.getpid())
        mem = process.memory_info()

        request_counter.snapshot_sparkline()

        # -- System metrics ---------------------------------------------------

        uptime = now - _start_time if _start_time else 0.0
        result: list[dict] = [
            {"key": "uptime", "label": "Uptime", "value": round(uptime), "unit": "seconds"},
            {
                "key": "rps",
                "label": "Requests / sec",
                "value": round(request_counter.rate(), 2),
                "unit": "req/s",
                "warn_above": 200,
                "sparkline_history": request_counter.sparkline_history(),
            },
            {
                "key": "memory_rss",
                "label": "Memory (RSS)",
                "value": round(mem.rss / 1_048_576, 1),
                "unit": "MB",
                "warn_above": 512,
            },
            {
                "key": "cpu_percent",
                "label": "CPU usage",
                "value": process.cpu_percent(interval=0),
                "unit": "%",
                "warn_above": 90,
            },
        ]

        # -- Catalog metrics --------------------------------------------------

        counts = engine.counts()
        result.extend([
            {"key": "categories", "label": "Categories", "value": counts["categories"], "unit": "categories"},
            {"key": "keywords", "label": "Standard keywords", "value": counts["keywords"], "unit": "keywords"},
            {"key": "custom_symbols", "label": "Custom symbols", "value": counts["custom_symbols"], "unit": "symbols"},
            {"key": "displayed", "label": "Displayed symbols", "value": counts["displayed_symbols"], "unit": "symbols"},
            {"key": "pending_writes", "label": "Pending writes", "value": counts["pending_writes"], "unit": "keys"},
            {
                "key": "write_failures",
                "label": "Storage write failures",
                "value": counts["write_failures"],
                "unit": "errors",
                "warn_above": 0,
            },
        ])

        # -- Storage ----------------------------------------------------------

        try:
            stats = await db.get_stats(db.get_pool())
        except RuntimeError:
            stats = None
        if stats:
            result.append({"key": "stored_keys", "label": "Stored keys", "value": stats["total_keys"], "unit": "keys"})

        return {"metrics": result}

    except Exception as exc:
        logger.exception("Error fetching metrics")
        return JSONResponse(
            status_code=500,
            content={"metrics": [], "error": f"Metrics error: {exc}"},
        )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

def run() -> None:
    config = CatalogConfig()
    uvicorn.run("symbol_catalog.app:app", host="127.0.0.1", port=config.port, reload=False)


if __name__ == "__main__":
    run()
