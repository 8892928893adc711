import asyncio

from symbol_catalog.catalog.categories import CategoryStore, merge_categories
from symbol_catalog.catalog.naming import display_name_for

from fakes import FakeRemote


def _names(categories):
    return [c.name for c in categories]


def test_pinned_categories_first_then_alphabetical():
    remote = FakeRemote({"Toys": [], "animals": [], "Food": [], "drinks": []})
    store = CategoryStore(remote)

    categories = asyncio.run(store.load())

    assert _names(categories) == ["contextual", "custom", "animals", "drinks", "food", "Toys"]


def test_bundled_spelling_wins_over_remote_casing():
    store = CategoryStore(FakeRemote({"FOOD": ["apple"]}))

    categories = asyncio.run(store.load())

    food = [c for c in categories if c.name.lower() == "food"]
    assert len(food) == 1
    assert food[0].name == "food"
    assert food[0].id == "cat_food"
    assert food[0].is_standard


def test_remote_cannot_shadow_non_standard_entries():
    store = CategoryStore(FakeRemote({"Custom": ["x"], "Contextual": []}))

    categories = asyncio.run(store.load())

    assert _names(categories) == ["contextual", "custom", "food"]
    assert not store.find("CUSTOM").is_standard


def test_fetch_failure_keeps_offline_categories():
    store = CategoryStore(FakeRemote(fail=True))

    categories = asyncio.run(store.load())

    assert _names(categories) == ["contextual", "custom", "food"]
    assert store.remote_keywords == {}
    assert store.loaded


def test_load_is_idempotent():
    remote = FakeRemote({"body parts": ["head"], "Animals": ["dog"]})
    store = CategoryStore(remote)

    first = asyncio.run(store.load())
    second = asyncio.run(store.load())

    assert first == second
    assert remote.calls == 2


def test_remote_keywords_are_keyed_lowercase():
    store = CategoryStore(FakeRemote({"Animals": ["dog"], "body parts": ["head"]}))
    asyncio.run(store.load())

    assert store.remote_keywords == {"animals": ["dog"], "body parts": ["head"]}
    assert store.find("Body Parts").id == "cat_body_parts"


def test_merge_first_registration_wins():
    merged = merge_categories(["Colors", "colors", "COLORS"])
    colors = [c for c in merged if c.name.lower() == "colors"]
    assert [c.name for c in colors] == ["Colors"]


def test_display_names():
    assert display_name_for("contextual") == "Contextual"
    assert display_name_for("CUSTOM") == "Custom"
    assert display_name_for("body parts") == "Body parts"
