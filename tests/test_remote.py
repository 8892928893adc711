import asyncio

import httpx
import pytest

from symbol_catalog.catalog.remote import (
    STANDARD_CATEGORIES_PATH,
    TIME_CONTEXT_PATH,
    RemoteCatalogClient,
)
from symbol_catalog.errors import NetworkFetchError


def _client(routes: dict) -> RemoteCatalogClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return routes.get(request.url.path, httpx.Response(404))

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api")
    return RemoteCatalogClient("http://api", client=http)


def test_standard_categories_parsed_and_cleaned():
    client = _client({
        STANDARD_CATEGORIES_PATH: httpx.Response(
            200, json={"food": ["apple", 3, "", "bread"], "animals": []}
        )
    })

    result = asyncio.run(client.fetch_standard_categories())

    assert result == {"food": ["apple", "bread"], "animals": []}


def test_time_context_symbols():
    client = _client({TIME_CONTEXT_PATH: httpx.Response(200, json=["hello", "milk"])})

    assert asyncio.run(client.fetch_time_context_symbols()) == ["hello", "milk"]


def test_null_body_is_empty():
    client = _client({
        STANDARD_CATEGORIES_PATH: httpx.Response(200, json=None),
        TIME_CONTEXT_PATH: httpx.Response(200, json=None),
    })

    assert asyncio.run(client.fetch_standard_categories()) == {}
    assert asyncio.run(client.fetch_time_context_symbols()) == []


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(503),
        httpx.Response(200, text="<html>"),
        httpx.Response(200, json=["not", "a", "map"]),
        httpx.Response(200, json={"food": "apple"}),
    ],
)
def test_bad_responses_raise_network_fetch_error(response):
    client = _client({STANDARD_CATEGORIES_PATH: response})

    with pytest.raises(NetworkFetchError):
        asyncio.run(client.fetch_standard_categories())


def test_transport_error_raises_network_fetch_error():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    http = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://api")
    client = RemoteCatalogClient("http://api", client=http)

    with pytest.raises(NetworkFetchError):
        asyncio.run(client.fetch_time_context_symbols())
