import pytest
from fastapi.testclient import TestClient

import symbol_catalog.app as app_module
from symbol_catalog.catalog.contextual import ContextualSelector
from symbol_catalog.catalog.engine import CatalogEngine
from symbol_catalog.catalog.persistence import MemoryKeyValueStore

from fakes import FakeRemote, FakeTranslator, fixed_clock, make_config


@pytest.fixture()
def store():
    return MemoryKeyValueStore()


@pytest.fixture()
def client(monkeypatch, store):
    """TestClient over the real app with the engine wired to in-process doubles."""
    make_config(monkeypatch)

    async def build(config):
        return CatalogEngine(
            config,
            store,
            remote=FakeRemote({"Animals": ["dog", "cat"]}),
            translator=FakeTranslator(),
            selector=ContextualSelector(clock=fixed_clock(9)),
            defaults={"food": ["apple", "bread"]},
        )

    monkeypatch.setattr(app_module, "_build_engine", build)
    with TestClient(app_module.app) as test_client:
        yield test_client
