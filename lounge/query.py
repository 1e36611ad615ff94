"""Text input state for the launcher: editing, selection and events."""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

_MODIFIER_NAMES = {
    "ctrl": "control",
    "alt": "alt",
    "shift": "shift",
    "cmd": "platform",
    "super": "platform",
    "win": "platform",
    "fn": "function",
}


def _current_system() -> str:
    return "darwin" if sys.platform == "darwin" else "linux"


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held during a keystroke."""

    control: bool = False
    alt: bool = False
    shift: bool = False
    platform: bool = False
    function: bool = False

    def any(self) -> bool:
        """Return whether at least one modifier is held."""
        return self.control or self.alt or self.shift or self.platform or self.function


@dataclass(frozen=True)
class Keystroke:
    """A key with its modifiers and the text it produces, if any."""

    key: str = ""
    modifiers: Modifiers = field(default_factory=Modifiers)
    ime_key: str | None = None

    @classmethod
    def parse(cls, source: str) -> Keystroke:
        """Parse strings such as ``"cmd-shift-a"``, ``"ctrl--"`` or ``"a->b"``."""
        ime_key = None
        if source == "-" or source.endswith("--"):
            key = "-"
            head = source[:-2]
            modifier_names = head.split("-") if head else []
        else:
            parts = source.split("-")
            if len(parts) >= 2 and len(parts[-1]) > 1 and parts[-1].startswith(">"):
                key, ime_key = parts[-2], parts[-1][1:]
                modifier_names = parts[:-2]
            else:
                key = parts[-1]
                modifier_names = parts[:-1]
        if not key or key in _MODIFIER_NAMES:
            raise ValueError(f"invalid keystroke: {source!r}")
        flags: dict[str, bool] = {}
        for name in modifier_names:
            try:
                flags[_MODIFIER_NAMES[name]] = True
            except KeyError:
                raise ValueError(f"invalid keystroke: {source!r}") from None
        return cls(key=key, modifiers=Modifiers(**flags), ime_key=ime_key)


@dataclass(frozen=True)
class KeyDownEvent:
    keystroke: Keystroke
    is_held: bool = False


class TextEventKind(Enum):
    INPUT = "input"
    BLUR = "blur"
    BACK = "back"
    KEY_DOWN = "key_down"


@dataclass(frozen=True)
class TextEvent:
    """Something that happened to a text view."""

    kind: TextEventKind
    text: str | None = None
    key_down: KeyDownEvent | None = None


@dataclass
class Clipboard:
    """A clipboard holding at most one piece of text."""

    text: str | None = None

    def read(self) -> str | None:
        return self.text

    def write(self, text: str) -> None:
        self.text = text


class TextView:
    """Editable text with a character-indexed selection ``(start, end)``."""

    def __init__(self, placeholder: str = "Type here...", *, system: str | None = None) -> None:
        self.text = ""
        self.selection: tuple[int, int] = (0, 0)
        self.word_click: tuple[int, int] = (0, 0)
        self.placeholder = placeholder
        self.masked = False
        self.focused = False
        self.system = system if system is not None else _current_system()
        self._listeners: list[Callable[[TextEvent], None]] = []

    def subscribe(self, callback: Callable[[TextEvent], None]) -> Callable[[], None]:
        """Call ``callback`` with every event; return a function that stops it."""
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _emit(self, event: TextEvent) -> None:
        if event.kind is TextEventKind.INPUT:
            self.word_click = (0, 0)
        for listener in list(self._listeners):
            listener(event)

    def _emit_input(self) -> None:
        self._emit(TextEvent(TextEventKind.INPUT, text=self.text))

    def set_text(self, text: str) -> None:
        """Replace the text and place the cursor at its end."""
        self.text = str(text)
        self.selection = (len(self.text), len(self.text))
        self._emit_input()

    def set_masked(self, masked: bool) -> None:
        self.masked = masked

    def reset(self) -> None:
        """Clear the text."""
        self.text = ""
        self.selection = (0, 0)
        self._emit_input()

    def select_all(self) -> None:
        self.selection = (0, len(self.text))

    def focus(self) -> None:
        """Give the view focus; all text becomes selected."""
        self.focused = True
        self.select_all()

    def blur(self) -> None:
        self.focused = False
        self._emit(TextEvent(TextEventKind.BLUR))

    def _bounds(self) -> tuple[int, int]:
        length = len(self.text)
        start = min(self.selection[0], length)
        end = min(max(self.selection[1], start), length)
        return start, end

    def _selected_text(self) -> str:
        start, end = self._bounds()
        return self.text[start:end]

    def _replace_selection(self, replacement: str) -> None:
        start, end = self._bounds()
        self.text = self.text[:start] + replacement + self.text[end:]

    def word_ranges(self) -> list[tuple[int, int]]:
        """Return the ``(start, end)`` ranges of words made of letters, digits and ``_``."""
        words: list[tuple[int, int]] = []
        word_start = None
        for index, char in enumerate(self.text):
            if char.isalnum() or char == "_":
                if word_start is None:
                    word_start = index
            elif word_start is not None:
                words.append((word_start, index))
                word_start = None
        if word_start is not None:
            words.append((word_start, len(self.text)))
        return words

    def display_text(self) -> str:
        """The text as shown: masked if required, the placeholder when empty."""
        text = "\u2022" * len(self.text) if self.masked else self.text
        return text or self.placeholder

    def _command_pressed(self, modifiers: Modifiers) -> bool:
        return modifiers.platform if self.system == "darwin" else modifiers.control

    def key_down(self, event: KeyDownEvent, clipboard: Clipboard | None = None) -> None:
        """Apply a key press to the text and selection."""
        previous = self.text
        self._emit(TextEvent(TextEventKind.KEY_DOWN, key_down=event))
        stroke = event.keystroke
        key = stroke.key
        start, end = self.selection

        if self._command_pressed(stroke.modifiers):
            if key == "a":
                self.select_all()
            elif key == "c":
                if not self.masked and clipboard is not None:
                    clipboard.write(self._selected_text())
            elif key == "v":
                pasted = clipboard.read() if clipboard is not None else None
                if pasted is None:
                    return
                self._replace_selection(pasted)
                cursor = start + len(pasted)
                self.selection = (cursor, cursor)
            elif key == "x":
                if clipboard is not None:
                    clipboard.write(self._selected_text())
                self._replace_selection("")
                self.selection = (start, start)
        elif stroke.ime_key is not None:
            self._replace_selection(stroke.ime_key)
            cursor = start + len(stroke.ime_key)
            self.selection = (cursor, cursor)
        elif key == "left":
            if start > 0:
                cursor = start - 1 if start == end else start
                self.selection = (cursor, cursor)
        elif key == "right":
            if end < len(self.text):
                cursor = end + 1 if start == end else end
                self.selection = (cursor, cursor)
        elif key == "backspace":
            if not self.text and not event.is_held:
                self._emit(TextEvent(TextEventKind.BACK))
            elif start == end and start > 0:
                length = len(self.text)
                cursor = min(start - 1, length)
                self.text = self.text[:cursor] + self.text[min(end, length):]
                self.selection = (cursor, cursor)
            else:
                self._replace_selection("")
                self.selection = (start, start)
        elif key == "enter":
            if stroke.modifiers.shift:
                position, _ = self._bounds()
                self.text = self.text[:position] + "\n" + self.text[position:]
                self.selection = (start + 1, start + 1)

        if previous != self.text:
            self._emit_input()

    def click_word(self, index: int) -> None:
        """Register a click on word ``index``: twice selects it, four times selects all."""
        last, count = self.word_click
        count = count + 1 if last == index else 1
        if count == 2:
            self.selection = self.word_ranges()[index]
        elif count == 4:
            count = 0
            self.selection = (0, len(self.text))
        self.word_click = (index, count)