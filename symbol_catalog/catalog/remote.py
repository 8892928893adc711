"""Remote symbol API client.

Two read-only endpoints: the standard category map and the contextual list
for the current time of day. Every failure surfaces as NetworkFetchError;
callers fail open to empty results.
"""

from __future__ import annotations

import logging

import httpx

from symbol_catalog.errors import NetworkFetchError

logger = logging.getLogger("symbol_catalog.remote")

STANDARD_CATEGORIES_PATH = "/api/v1/symbols/standard-categories"
TIME_CONTEXT_PATH = "/api/v1/symbols/current-time-context"


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        raise NetworkFetchError(f"expected a list, got {type(value).__name__}")
    return [item for item in value if isinstance(item, str) and item.strip()]


class RemoteCatalogClient:
    """Fetch curated catalog data over HTTP."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._own_client = client is None
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def aclose(self) -> None:
        if self._own_client:
            await self._client.aclose()

    async def _get_json(self, path: str) -> object:
        try:
            resp = await self._client.get(path, headers={"accept": "application/json"})
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as exc:
            logger.error("Symbol API HTTP %d on %s", exc.response.status_code, path)
            raise NetworkFetchError(f"HTTP {exc.response.status_code} from {path}") from exc
        except httpx.HTTPError as exc:
            logger.error("Symbol API request failed on %s: %s", path, exc)
            raise NetworkFetchError(f"request to {path} failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Symbol API returned invalid JSON on %s", path)
            raise NetworkFetchError(f"invalid JSON from {path}") from exc

    async def fetch_standard_categories(self) -> dict[str, list[str]]:
        data = await self._get_json(STANDARD_CATEGORIES_PATH)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise NetworkFetchError("standard categories payload is not an object")
        return {
            str(name): _string_list(keywords)
            for name, keywords in data.items()
            if str(name).strip()
        }

    async def fetch_time_context_symbols(self) -> list[str]:
        data = await self._get_json(TIME_CONTEXT_PATH)
        if data is None:
            return []
        return _string_list(data)
