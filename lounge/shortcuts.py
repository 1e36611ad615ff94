"""Keyboard shortcuts, actions, dropdowns and toast notifications."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from lounge.query import Keystroke, Modifiers, _current_system

_MODIFIER_SYMBOLS = (
    ("control", "\u2303"),
    ("alt", "\u2325"),
    ("shift", "\u21e7"),
    ("platform", "\u2318"),
)

_KEY_SYMBOLS = {
    "enter": "\u21b5",
    "backspace": "\u232b",
    "delete": "\u232b",
    "escape": "\u238b",
    "tab": "\u21e5",
    "space": "\u2423",
    "up": "\u2191",
    "down": "\u2193",
    "left": "\u2190",
    "right": "\u2192",
    "comma": ",",
    "dot": ".",
    "questionmark": "?",
    "exclamationmark": "!",
    "slash": "/",
    "backslash": "\\",
}


@dataclass(frozen=True)
class Shortcut:
    """A keystroke that triggers an action."""

    keystroke: Keystroke
    system: str = field(default_factory=_current_system)

    @classmethod
    def new(cls, key: str, system: str | None = None) -> Shortcut:
        """A shortcut for ``key`` with no modifiers."""
        return cls(
            Keystroke(key=str(key)),
            system if system is not None else _current_system(),
        )

    @classmethod
    def from_keystroke(cls, keystroke: Keystroke) -> Shortcut:
        return cls(keystroke)

    def _with(self, **flags: bool) -> Shortcut:
        modifiers = replace(self.keystroke.modifiers, **flags)
        return replace(self, keystroke=replace(self.keystroke, modifiers=modifiers))

    def cmd(self) -> Shortcut:
        """Add the platform's command modifier (Command on macOS, Control elsewhere)."""
        return self._with(platform=True) if self.system == "darwin" else self._with(control=True)

    def shift(self) -> Shortcut:
        return self._with(shift=True)

    def alt(self) -> Shortcut:
        return self._with(alt=True)

    def ctrl(self) -> Shortcut:
        """Add the secondary modifier (Control on macOS, the platform key elsewhere)."""
        return self._with(control=True) if self.system == "darwin" else self._with(platform=True)

    def matches(self, keystroke: Keystroke) -> bool:
        return self.keystroke == keystroke

    def symbols(self) -> list[str]:
        """The key caps shown for this shortcut, modifiers first."""
        modifiers: Modifiers = self.keystroke.modifiers
        caps = [symbol for name, symbol in _MODIFIER_SYMBOLS if getattr(modifiers, name)]
        key = self.keystroke.key
        if key in _KEY_SYMBOLS:
            caps.append(_KEY_SYMBOLS[key])
        else:
            shown = self.keystroke.ime_key if self.keystroke.ime_key is not None else key
            caps.append(shown.upper())
        return caps


@dataclass(eq=False)
class Action:
    """A labelled command, optionally bound to a shortcut."""

    label: str
    action: Callable[[Any], Any]
    shortcut: Shortcut | None = None
    icon: str | None = None
    hide: bool = False

    def run(self, actions: Any) -> Any:
        return self.action(actions)


@dataclass
class Dropdown:
    """A value chosen from ``(value, label)`` pairs."""

    value: str = ""
    items: list[tuple[str, str]] = field(default_factory=list)

    def label(self) -> str | None:
        """The label of the current value, or None when there is none."""
        for value, label in self.items:
            if value == self.value:
                return label
        return None

    def set_items(self, items: Iterable[tuple[Any, Any]]) -> None:
        self.items = [(str(value), str(label)) for value, label in items]

    def set_value(self, value: Any) -> bool:
        """Select ``value`` if it is empty or known; return whether it was taken."""
        value = str(value)
        if value and not any(item_value == value for item_value, _ in self.items):
            return False
        self.value = value
        return True

    def cycle(self) -> None:
        """Move to the next item, wrapping around."""
        if not self.items:
            return
        index = next(
            (i for i, (item_value, _) in enumerate(self.items) if item_value == self.value), 0
        )
        self.value = self.items[(index + 1) % len(self.items)][0]


class ToastKind(Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


_FADE_SECONDS = 0.3
_SUCCESS_SECONDS = 3.0
_ERROR_SECONDS = 4.0


def _ease_in_out(t: float) -> float:
    if t < 0.5:
        return 2.0 * t * t
    x = -2.0 * t + 2.0
    return 1.0 - x * x / 2.0


@dataclass
class Toast:
    """A short status message shown at the bottom of the window."""

    kind: ToastKind = ToastKind.IDLE
    message: str = ""
    fade_in: float | None = None
    fade_out: float | None = None
    clock: Callable[[], float] = time.monotonic

    def _show(self, kind: ToastKind, message: Any, lifetime: float | None) -> None:
        now = self.clock()
        self.kind = kind
        self.message = str(message)
        self.fade_in = now
        self.fade_out = None if lifetime is None else now + lifetime

    def loading(self, message: Any) -> None:
        self._show(ToastKind.LOADING, message, None)

    def success(self, message: Any) -> None:
        self._show(ToastKind.SUCCESS, message, _SUCCESS_SECONDS)

    def error(self, message: Any) -> None:
        self._show(ToastKind.ERROR, message, _ERROR_SECONDS)

    def clear(self) -> None:
        self.kind = ToastKind.IDLE
        self.message = ""
        self.fade_in = None
        self.fade_out = None

    def offset(self, now: float | None = None, pulse: float = 0.0) -> tuple[float, float] | None:
        """Return ``(left, alpha)`` of the toast at ``now``, or None when idle.

        ``pulse`` is the position of the background pulse animation in 0..1.
        """
        if self.kind is ToastKind.IDLE or self.fade_in is None:
            return None
        if now is None:
            now = self.clock()
        alpha = 0.1 + pulse / 20.0
        if self.fade_out is not None and now > self.fade_out:
            delta = (now - self.fade_out) / _FADE_SECONDS
            if delta < 1.0:
                return _ease_in_out(delta), alpha * _ease_in_out(1.0 - delta)
            return 1.0, 0.0
        delta = (now - self.fade_in) / _FADE_SECONDS
        if delta < 1.0:
            return -_ease_in_out(1.0 - delta), alpha * _ease_in_out(delta)
        return 0.0, alpha