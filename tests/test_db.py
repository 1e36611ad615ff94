import pytest

from lounge.db import Db, KeyStatus


@pytest.fixture
def store(tmp_path):
    with Db(tmp_path / "nested" / "store.sqlite3") as database:
        yield database


def test_set_and_get_round_trip(store):
    value = {"light": "a", "dark": "b", "n": [1, 2]}
    store.set("theme", value)
    assert store.get("theme") == value


def test_set_reports_insert_then_update(store):
    assert store.set("k", 1) is KeyStatus.INSERTED
    assert store.set("k", 2) is KeyStatus.UPDATED
    assert store.get("k") == 2


def test_missing_key_returns_default(store):
    assert store.get("absent") is None
    assert store.get("absent", "fallback") == "fallback"


def test_delete(store):
    store.set("k", "v")
    assert store.delete("k") is True
    assert store.delete("k") is False
    assert store.get("k") is None


def test_unserializable_value_raises(store):
    with pytest.raises(TypeError):
        store.set("k", object())


def test_collection_documents(store):
    hotkeys = store.collection("command-hotkeys")
    hotkeys.put("b", {"id": "b", "hotkey": "alt+b"})
    hotkeys.put("a", {"id": "a", "hotkey": "alt+a"})
    hotkeys.put("a", {"id": "a", "hotkey": "control+a"})
    assert hotkeys.get("a") == {"id": "a", "hotkey": "control+a"}
    assert list(hotkeys.all()) == ["a", "b"]
    assert hotkeys.delete("a") is True
    assert hotkeys.get("a") is None
    assert hotkeys.delete("a") is False


def test_collections_are_separate(store):
    store.collection("one").put("x", 1)
    assert store.collection("two").get("x") is None
    assert store.collection("two").all() == {}
    assert store.get("x") is None


def test_values_persist_across_reopen(tmp_path):
    path = tmp_path / "store.sqlite3"
    with Db(path) as first:
        first.set("k", [1, 2, 3])
        first.collection("c").put("id", {"v": True})
    with Db(path) as second:
        assert second.get("k") == [1, 2, 3]
        assert second.collection("c").all() == {"id": {"v": True}}