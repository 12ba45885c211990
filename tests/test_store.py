import pytest

from giftdraw.db import repo
from giftdraw.services.draw import draw
from giftdraw.services.store import DrawStore, DrawStoreError


def test_empty_store_loads_nothing(store):
    assert store.load() is None


def test_save_then_load_keeps_roster_order(store):
    result = draw(["Alice", "Bob", "Carol", "Dave"], seed=3)
    store.save(result)
    loaded = store.load()
    assert loaded == result
    assert [a.giver for a in loaded] == ["Alice", "Bob", "Carol", "Dave"]


def test_save_is_write_once(store):
    store.save(draw(["Alice", "Bob", "Carol"], seed=1))
    with pytest.raises(DrawStoreError):
        store.save(draw(["Alice", "Bob", "Carol"], seed=2))


def test_clear_removes_the_record(store):
    store.save(draw(["Alice", "Bob", "Carol"], seed=1))
    assert store.clear()
    assert store.load() is None
    assert not store.clear()


def test_keys_are_isolated(session_scope):
    first = DrawStore("first", session_scope=session_scope)
    second = DrawStore("second", session_scope=session_scope)
    first.save(draw(["Alice", "Bob", "Carol"], seed=1))
    assert second.load() is None


def test_unreadable_payload_raises(store, session_scope):
    with session_scope() as session:
        repo.create_draw_record(session, store.key, {"results": [{"giver": "Alice"}]})
    with pytest.raises(DrawStoreError):
        store.load()
