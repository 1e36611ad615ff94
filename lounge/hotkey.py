"""Global hotkeys bound to launcher commands and their persistence."""

from __future__ import annotations

import string
import sys
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Any

from lounge.db import Collection, db
from lounge.query import Keystroke, Modifiers

COLLECTION = "command-hotkeys"


class HotkeyError(ValueError):
    """A hotkey string could not be parsed."""


class HotkeyModifiers(Flag):
    NONE = 0
    ALT = auto()
    CONTROL = auto()
    META = auto()
    SHIFT = auto()


@dataclass(frozen=True)
class HotKey:
    """A parsed global hotkey: modifiers and a key code such as ``"KeyA"``."""

    modifiers: HotkeyModifiers
    code: str


def _build_key_table() -> dict[str, str]:
    table: dict[str, str] = {}

    def add(code: str, *aliases: str) -> None:
        for name in (code.upper(), *aliases):
            table[name] = code

    for letter in string.ascii_uppercase:
        add(f"Key{letter}", letter)
    for digit in string.digits:
        add(f"Digit{digit}", digit)
        add(f"Numpad{digit}", f"NUM{digit}")
    for number in range(1, 25):
        add(f"F{number}")
    for code, symbol in (
        ("Backquote", "`"), ("Backslash", "\\"), ("BracketLeft", "["),
        ("BracketRight", "]"), ("Comma", ","), ("Equal", "="), ("Minus", "-"),
        ("Period", "."), ("Quote", "'"), ("Semicolon", ";"), ("Slash", "/"),
    ):
        add(code, symbol)
    for code in (
        "Backspace", "CapsLock", "Enter", "Space", "Tab", "Delete", "End", "Home",
        "Insert", "PageDown", "PageUp", "PrintScreen", "ScrollLock", "NumLock",
        "MediaPlay", "MediaPause", "MediaPlayPause", "MediaStop", "MediaTrackNext",
        "MediaTrackPrevious",
    ):
        add(code)
    add("ArrowDown", "DOWN")
    add("ArrowLeft", "LEFT")
    add("ArrowRight", "RIGHT")
    add("ArrowUp", "UP")
    add("Escape", "ESC")
    add("NumpadAdd", "NUMADD", "NUMPADPLUS", "NUMPLUS")
    add("NumpadDecimal", "NUMDECIMAL")
    add("NumpadDivide", "NUMDIVIDE")
    add("NumpadEnter", "NUMENTER")
    add("NumpadEqual", "NUMEQUAL")
    add("NumpadMultiply", "NUMMULTIPLY")
    add("NumpadSubtract", "NUMSUBTRACT")
    add("AudioVolumeDown", "VOLUMEDOWN")
    add("AudioVolumeUp", "VOLUMEUP")
    add("AudioVolumeMute", "VOLUMEMUTE")
    return table


_KEYS = _build_key_table()

_COMMAND_OR_CONTROL = (
    HotkeyModifiers.META if sys.platform == "darwin" else HotkeyModifiers.CONTROL
)

_MODIFIER_TOKENS = {
    "OPTION": HotkeyModifiers.ALT,
    "ALT": HotkeyModifiers.ALT,
    "CONTROL": HotkeyModifiers.CONTROL,
    "CTRL": HotkeyModifiers.CONTROL,
    "COMMAND": HotkeyModifiers.META,
    "CMD": HotkeyModifiers.META,
    "SUPER": HotkeyModifiers.META,
    "SHIFT": HotkeyModifiers.SHIFT,
    "COMMANDORCONTROL": _COMMAND_OR_CONTROL,
    "COMMANDORCTRL": _COMMAND_OR_CONTROL,
    "CMDORCTRL": _COMMAND_OR_CONTROL,
    "CMDORCONTROL": _COMMAND_OR_CONTROL,
}


def _parse_key(token: str, hotkey: str) -> str:
    try:
        return _KEYS[token.upper()]
    except KeyError:
        raise HotkeyError(f"unsupported key {token!r} in hotkey {hotkey!r}") from None


def keystroke_to_hotkey(keystroke: Keystroke) -> str:
    """Render a keystroke as a ``+``-joined hotkey string."""
    tokens = []
    mods = keystroke.modifiers
    if mods.alt:
        tokens.append("alt")
    if mods.platform:
        tokens.append("command")
    if mods.control:
        tokens.append("control")
    key = keystroke.key
    if mods.shift or (len(key) == 1 and key in string.ascii_uppercase):
        tokens.append("shift")
    tokens.append(key)
    return "+".join(tokens)


def hotkey_to_keystroke(hotkey: str) -> Keystroke:
    """Read a hotkey string back into a keystroke."""
    flags: dict[str, bool] = {}
    key = ""
    for token in hotkey.split("+"):
        match token:
            case "alt":
                flags["alt"] = True
            case "command":
                flags["platform"] = True
            case "control":
                flags["control"] = True
            case "shift":
                flags["shift"] = True
            case _:
                key = token
    return Keystroke(key=key, modifiers=Modifiers(**flags))


def validate_hotkey(hotkey: str) -> HotKey:
    """Parse a hotkey string such as ``"control+shift+a"``; raise HotkeyError if invalid."""
    tokens = hotkey.split("+")
    if len(tokens) == 1:
        return HotKey(HotkeyModifiers.NONE, _parse_key(tokens[0].strip(), hotkey))
    modifiers = HotkeyModifiers.NONE
    code = None
    for raw in tokens:
        token = raw.strip()
        if not token:
            raise HotkeyError(f"empty token in hotkey {hotkey!r}")
        if code is not None:
            raise HotkeyError(f"invalid hotkey format: {hotkey!r}")
        flag = _MODIFIER_TOKENS.get(token.upper())
        if flag is not None:
            modifiers |= flag
        else:
            code = _parse_key(token, hotkey)
    if code is None:
        raise HotkeyError(f"invalid hotkey format: {hotkey!r}")
    return HotKey(modifiers, code)


def _default_collection() -> Collection:
    return db().collection(COLLECTION)


@dataclass
class HotkeyStore:
    """Hotkeys saved per command id."""

    collection: Collection = field(default_factory=_default_collection)
    on_change: Callable[[], None] | None = None

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()

    def set(self, id: str, keystroke: Keystroke) -> str:
        """Bind ``keystroke`` to command ``id``; return the stored hotkey string."""
        hotkey = keystroke_to_hotkey(keystroke)
        validate_hotkey(hotkey)
        self.collection.put(id, {"id": id, "hotkey": hotkey})
        self._changed()
        return hotkey

    def unset(self, id: str) -> None:
        """Remove the hotkey of command ``id``, if any."""
        if self.collection.get(id) is not None:
            self.collection.delete(id)
        self._changed()

    def get(self, id: str) -> Keystroke | None:
        document = self.collection.get(id)
        if not isinstance(document, dict) or not isinstance(document.get("hotkey"), str):
            return None
        return hotkey_to_keystroke(document["hotkey"])

    def all(self) -> dict[str, str]:
        """Return every stored hotkey string keyed by command id."""
        return {
            doc_id: document["hotkey"]
            for doc_id, document in self.collection.all().items()
            if isinstance(document, dict) and isinstance(document.get("hotkey"), str)
        }


FALLBACK_HOTKEY = HotKey(
    HotkeyModifiers.CONTROL | HotkeyModifiers.ALT | HotkeyModifiers.META, "Space"
)


class HotkeyManager:
    """Maps registered hotkeys to the commands they start."""

    def __init__(self, store: HotkeyStore | None = None) -> None:
        self.store = store if store is not None else HotkeyStore()
        self.fallback = FALLBACK_HOTKEY
        self.hotkeys: list[HotKey] = []
        self._map: dict[HotKey, Any] = {}

    def update(self, commands: Mapping[str, Any]) -> None:
        """Re-register the stored hotkeys whose command is among ``commands``."""
        self.hotkeys = []
        self._map = {}
        for command_id, hotkey in self.store.all().items():
            if command_id not in commands:
                continue
            parsed = validate_hotkey(hotkey)
            self.hotkeys.append(parsed)
            self._map[parsed] = commands[command_id]

    def lookup(self, hotkey: HotKey | str) -> Any:
        """Return the command bound to ``hotkey``, or None."""
        parsed = validate_hotkey(hotkey) if isinstance(hotkey, str) else hotkey
        return self._map.get(parsed)