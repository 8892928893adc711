import asyncio

from symbol_catalog.catalog.contextual import ContextualSelector
from symbol_catalog.catalog.engine import CatalogEngine
from symbol_catalog.catalog.persistence import MemoryKeyValueStore
from symbol_catalog.catalog.presenter import normalize_selection

from fakes import FakeRemote, FakeTranslator, fixed_clock, make_config

FOOD_ONLY = {"food": ["apple", "bread"]}


def _engine(monkeypatch, remote=None, translator=None, hour=8, store=None, **env):
    return CatalogEngine(
        make_config(monkeypatch, **env),
        store or MemoryKeyValueStore(),
        remote=remote or FakeRemote(),
        translator=translator or FakeTranslator(),
        selector=ContextualSelector(clock=fixed_clock(hour)),
        defaults=FOOD_ONLY,
    )


def test_food_selection_in_source_language(monkeypatch):
    engine = _engine(monkeypatch)

    async def main():
        await engine.initialize()
        assert [c.name for c in engine.categories.categories] == ["contextual", "custom", "food"]
        return await engine.presenter.select("food")

    symbols = asyncio.run(main())
    assert [s.keyword for s in symbols] == ["apple", "bread"]
    assert [s.display_text for s in symbols] == ["apple", "bread"]
    assert [s.id for s in symbols] == ["cat_food_sym_0_apple", "cat_food_sym_1_bread"]
    assert not any(s.is_custom for s in symbols)


def test_initial_selection_is_contextual_in_curated_order(monkeypatch):
    engine = _engine(monkeypatch, hour=13)

    async def main():
        await engine.initialize()
        return engine.presenter

    presenter = asyncio.run(main())
    assert presenter.selection is None
    assert presenter.selection_label == "Contextual"
    keywords = [s.keyword for s in presenter.displayed]
    assert keywords[:3] == ["good afternoon", "lunch", "eat"]
    assert presenter.displayed[0].id == "ctx_sym_0_good_afternoon"


def test_remote_contextual_list_when_preferred(monkeypatch):
    remote = FakeRemote(contextual=["zoo", "apple"])
    engine = _engine(monkeypatch, remote=remote, SC_REMOTE_CONTEXTUAL="1")

    async def main():
        await engine.initialize()
        return engine.presenter.displayed

    assert [s.keyword for s in asyncio.run(main())] == ["apple", "zoo"]


def test_custom_selection_carries_images(monkeypatch):
    engine = _engine(monkeypatch)

    async def main():
        await engine.initialize()
        engine.custom.add("kite", image_uri="file:///kite.png")
        engine.custom.add("Ball")
        return await engine.presenter.select("Custom")

    symbols = asyncio.run(main())
    assert [s.keyword for s in symbols] == ["Ball", "kite"]
    assert symbols[1].image_uri == "file:///kite.png"
    assert symbols[0].image_uri is None
    assert all(s.is_custom for s in symbols)
    assert symbols[0].id == "custom_sym_0_ball"


def test_selecting_same_category_is_a_no_op(monkeypatch):
    translator = FakeTranslator()
    engine = _engine(monkeypatch, translator=translator)
    events = []

    async def main():
        await engine.initialize()
        engine.presenter.subscribe(lambda reason, symbols: events.append(reason))
        await engine.presenter.select("food")
        assert await engine.presenter.select("FOOD") is None
        assert await engine.presenter.select("contextual") is not None
        assert await engine.presenter.select(None) is None

    asyncio.run(main())
    assert events == ["selection", "selection"]


def test_language_change_translates_and_notifies(monkeypatch):
    engine = _engine(monkeypatch)
    events = []

    async def main():
        await engine.initialize()
        await engine.presenter.select("food")
        engine.presenter.subscribe(lambda reason, symbols: events.append((reason, len(symbols))))
        await engine.update_settings(language="dzo")
        return engine.presenter.displayed

    symbols = asyncio.run(main())
    assert [s.display_text for s in symbols] == ["APPLE", "BREAD"]
    assert [s.keyword for s in symbols] == ["apple", "bread"]
    assert events == [("language", 2)]


def test_failed_translation_still_renders_keywords(monkeypatch):
    engine = _engine(monkeypatch, translator=FakeTranslator(mode="fail"))

    async def main():
        await engine.initialize()
        await engine.update_settings(language="dzo")
        return await engine.presenter.select("food")

    symbols = asyncio.run(main())
    assert [s.display_text for s in symbols] == ["apple", "bread"]


def test_stale_result_is_discarded(monkeypatch):
    engine = _engine(monkeypatch, translator=FakeTranslator(delay=0.05))
    published = []

    async def main():
        await engine.initialize()
        await engine.update_settings(language="dzo")
        engine.presenter.subscribe(lambda reason, symbols: published.append([s.keyword for s in symbols]))
        slow = asyncio.create_task(engine.presenter.select("food"))
        await asyncio.sleep(0)
        fast = asyncio.create_task(engine.presenter.select("custom"))
        return await slow, await fast

    stale, fresh = asyncio.run(main())
    assert stale is None
    assert fresh == []
    assert published == [[]]
    assert engine.presenter.selection == "custom"


def test_add_keyword_refreshes_current_selection(monkeypatch):
    engine = _engine(monkeypatch)

    async def main():
        await engine.initialize()
        await engine.presenter.select("food")
        await engine.add_keyword("Food", "cheese")
        return engine.presenter.displayed

    assert [s.keyword for s in asyncio.run(main())] == ["apple", "bread", "cheese"]


def test_offline_start_keeps_engine_usable(monkeypatch):
    engine = _engine(monkeypatch, remote=FakeRemote(fail=True))

    async def main():
        await engine.initialize()
        return engine

    engine = asyncio.run(main())
    assert engine.ready
    assert [c.name for c in engine.categories.categories] == ["contextual", "custom", "food"]
    assert len(engine.presenter.displayed) == 20


def test_normalize_selection():
    assert normalize_selection(None) is None
    assert normalize_selection(" Contextual ") is None
    assert normalize_selection("") is None
    assert normalize_selection("Body Parts") == "body parts"
