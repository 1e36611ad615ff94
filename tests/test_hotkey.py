import pytest

from lounge.db import Db
from lounge.hotkey import (
    COLLECTION,
    FALLBACK_HOTKEY,
    HotKey,
    HotkeyError,
    HotkeyManager,
    HotkeyModifiers,
    HotkeyStore,
    hotkey_to_keystroke,
    keystroke_to_hotkey,
    validate_hotkey,
)
from lounge.query import Keystroke, Modifiers


@pytest.fixture
def store():
    database = Db(":memory:")
    yield HotkeyStore(database.collection(COLLECTION))
    database.close()


def test_keystroke_to_hotkey_token_order():
    stroke = Keystroke("k", Modifiers(alt=True, platform=True, control=True, shift=True))
    assert keystroke_to_hotkey(stroke) == "alt+command+control+shift+k"


def test_uppercase_key_adds_shift():
    assert keystroke_to_hotkey(Keystroke("A")).split("+") == ["shift", "A"]


@pytest.mark.parametrize(
    "stroke",
    [
        Keystroke("k", Modifiers(alt=True, platform=True)),
        Keystroke("space", Modifiers(control=True, shift=True)),
        Keystroke("enter"),
    ],
)
def test_round_trip(stroke):
    assert hotkey_to_keystroke(keystroke_to_hotkey(stroke)) == stroke


def test_validate_hotkey_parses_modifiers_and_code():
    parsed = validate_hotkey("control+shift+a")
    assert parsed == HotKey(HotkeyModifiers.CONTROL | HotkeyModifiers.SHIFT, "KeyA")


def test_validate_single_key():
    assert validate_hotkey("space") == HotKey(HotkeyModifiers.NONE, "Space")


def test_modifier_order_does_not_matter():
    assert validate_hotkey("shift+alt+Enter") == validate_hotkey("alt+shift+enter")


@pytest.mark.parametrize(
    "hotkey",
    ["", "control+", "control+a+b", "control+a+shift", "control+shift", "alt+nosuchkey"],
)
def test_validate_rejects(hotkey):
    with pytest.raises(HotkeyError):
        validate_hotkey(hotkey)


def test_store_set_get_unset(store):
    stroke = Keystroke("k", Modifiers(alt=True))
    stored = store.set("clipboard", stroke)
    assert stored == keystroke_to_hotkey(stroke)
    assert store.get("clipboard") == stroke
    assert store.all() == {"clipboard": stored}
    store.unset("clipboard")
    assert store.get("clipboard") is None
    assert store.all() == {}


def test_store_rejects_invalid_and_keeps_nothing(store):
    with pytest.raises(HotkeyError):
        store.set("clipboard", Keystroke("nosuchkey", Modifiers(alt=True)))
    assert store.all() == {}


def test_store_notifies_changes(store):
    calls = []
    store.on_change = lambda: calls.append(True)
    store.set("clipboard", Keystroke("k", Modifiers(alt=True)))
    store.unset("clipboard")
    assert len(calls) == 2


def test_manager_maps_known_commands(store):
    store.set("clipboard", Keystroke("k", Modifiers(control=True, shift=True)))
    store.set("missing", Keystroke("j", Modifiers(alt=True)))
    manager = HotkeyManager(store)
    manager.update({"clipboard": "open-clipboard"})
    assert manager.hotkeys == [validate_hotkey("control+shift+k")]
    assert manager.lookup("shift+control+k") == "open-clipboard"
    assert manager.lookup("alt+j") is None


def test_manager_update_drops_unset(store):
    store.set("clipboard", Keystroke("k", Modifiers(alt=True)))
    manager = HotkeyManager(store)
    commands = {"clipboard": "open-clipboard"}
    manager.update(commands)
    store.unset("clipboard")
    manager.update(commands)
    assert manager.hotkeys == []
    assert manager.lookup("alt+k") is None


def test_fallback_is_not_bound_to_a_command(store):
    manager = HotkeyManager(store)
    manager.update({})
    assert manager.fallback == FALLBACK_HOTKEY
    assert manager.lookup(FALLBACK_HOTKEY) is None
    assert validate_hotkey("control+alt+command+space") == FALLBACK_HOTKEY