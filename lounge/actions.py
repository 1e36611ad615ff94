"""The action bar of a view and the stack of views shown in the launcher."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Any

from lounge.query import KeyDownEvent, Keystroke, TextEvent, TextEventKind, TextView, _current_system
from lounge.shortcuts import Action, Dropdown, Shortcut, Toast

POPUP_ITEM_HEIGHT = 42.0
POPUP_PADDING = 20.0
POPUP_VISIBLE_ITEMS = 4


class Actions:
    """Global and local actions of a view, its dropdown and its toast."""

    def __init__(
        self,
        *,
        system: str | None = None,
        on_update: Callable[[], None] | None = None,
        on_close: Callable[[], None] | None = None,
        on_list_change: Callable[[], None] | None = None,
    ) -> None:
        self.system = system if system is not None else _current_system()
        self.global_actions: list[Action] = []
        self.local_actions: list[Action] = []
        self.active: StateItem | None = None
        self.meta: Any = None
        self.show = False
        self.dropdown = Dropdown()
        self.toast = Toast()
        self.on_update = on_update
        self.on_close = on_close
        self.on_list_change = on_list_change

    def _list_changed(self) -> None:
        if self.on_list_change is not None:
            self.on_list_change()

    def combined(self) -> list[Action]:
        """Local then global actions; the first is bound to enter, plus the menu toggle."""
        combined = [*self.local_actions, *self.global_actions]
        if combined:
            combined[0] = replace(combined[0], shortcut=Shortcut.new("enter", self.system))
            combined.append(
                Action(
                    label="Actions",
                    action=lambda actions: actions.toggle(),
                    shortcut=Shortcut.new("k", self.system).cmd(),
                    icon="BookOpen",
                    hide=True,
                )
            )
        return combined

    def check(self, keystroke: Keystroke) -> Action | None:
        """Return the first action whose shortcut is ``keystroke``."""
        for action in self.combined():
            if action.shortcut is not None and action.shortcut.matches(keystroke):
                return action
        return None

    def update_global(self, actions: Iterable[Action]) -> None:
        self.global_actions = list(actions)
        self._list_changed()

    def update_local(self, actions: Iterable[Action], item: StateItem | None = None, meta: Any = None) -> None:
        self.active = item
        self.meta = meta
        self.local_actions = list(actions)
        self._list_changed()

    def clear_local(self) -> None:
        self.active = None
        self.local_actions = []
        self._list_changed()

    def notify_update(self) -> None:
        """Ask the owning list to refresh."""
        if self.on_update is not None:
            self.on_update()

    def set_dropdown_value(self, value: Any) -> None:
        self.dropdown.set_value(value)
        self.notify_update()

    def dropdown_cycle(self) -> None:
        self.dropdown.cycle()
        self.notify_update()

    def set_dropdown(self, value: Any, items: Iterable[tuple[Any, Any]]) -> None:
        """Replace the dropdown items, then select ``value``."""
        self.dropdown.set_items(items)
        self.set_dropdown_value(value)

    def toggle(self) -> None:
        """Show or hide the actions popup."""
        self._list_changed()
        self.show = not self.show

    def key_down(self, event: KeyDownEvent) -> Action | None:
        """Handle a key press in the view's query; return the action that ran."""
        ran = None
        action = self.check(event.keystroke)
        if action is not None:
            if not event.is_held:
                action.run(self)
                ran = action
        elif not event.is_held and event.keystroke == Keystroke(key="tab"):
            self.dropdown_cycle()
        if event.keystroke.key == "escape" and self.on_close is not None:
            self.on_close()
        return ran

    def popup_height(self, count: int) -> float:
        """Height of the actions popup listing ``count`` entries."""
        if count == 0:
            return 0.0
        visible = min(count, POPUP_VISIBLE_ITEMS)
        return visible * POPUP_ITEM_HEIGHT + POPUP_PADDING


@dataclass(eq=False)
class StateItem:
    """One view on the stack: its query input, actions and content."""

    id: str
    query: TextView = field(default_factory=TextView)
    actions: Actions = field(default_factory=Actions)
    view: Any = None
    workspace: bool = True


class StateModel:
    """The stack of views; the root view is never removed."""

    def __init__(self, root: StateItem | None = None) -> None:
        self.stack: list[StateItem] = []
        self._unsubscribers: dict[int, Callable[[], None]] = {}
        if root is not None:
            self.push(root)

    def _wire(self, item: StateItem) -> None:
        def on_event(event: TextEvent) -> None:
            if event.kind is TextEventKind.KEY_DOWN and event.key_down is not None:
                item.actions.key_down(event.key_down)
            elif event.kind is TextEventKind.BACK:
                self.pop()

        self._unsubscribers[id(item)] = item.query.subscribe(on_event)

    def push(self, item: StateItem) -> None:
        self._wire(item)
        self.stack.append(item)

    def pop(self) -> StateItem | None:
        """Remove and return the top view unless it is the last one."""
        if len(self.stack) <= 1:
            return None
        item = self.stack.pop()
        if item not in self.stack:
            unsubscribe = self._unsubscribers.pop(id(item), None)
            if unsubscribe is not None:
                unsubscribe()
        return item

    def replace(self, item: StateItem) -> None:
        self.pop()
        self.push(item)

    def reset(self) -> None:
        """Return to the root view and clear its query."""
        while len(self.stack) > 1:
            self.pop()
        if self.stack:
            self.stack[0].query.set_text("")

    def active(self) -> StateItem | None:
        return self.stack[-1] if self.stack else None