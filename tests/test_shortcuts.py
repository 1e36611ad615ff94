import pytest

from lounge.query import Keystroke, Modifiers
from lounge.shortcuts import Action, Dropdown, Shortcut, Toast, ToastKind


def test_cmd_on_darwin_sets_platform():
    shortcut = Shortcut.new("k", system="darwin").cmd()
    assert shortcut.keystroke.modifiers == Modifiers(platform=True)


def test_cmd_on_linux_sets_control():
    shortcut = Shortcut.new("k", system="linux").cmd()
    assert shortcut.keystroke.modifiers == Modifiers(control=True)


def test_ctrl_is_opposite_of_cmd():
    assert Shortcut.new("k", system="darwin").ctrl().keystroke.modifiers == Modifiers(control=True)
    assert Shortcut.new("k", system="linux").ctrl().keystroke.modifiers == Modifiers(platform=True)


def test_builders_do_not_mutate():
    base = Shortcut.new("a", system="linux")
    base.shift().alt()
    assert base.keystroke.modifiers == Modifiers()


def test_matches_keystroke():
    shortcut = Shortcut.new("tab", system="linux").shift()
    assert shortcut.matches(Keystroke(key="tab", modifiers=Modifiers(shift=True)))
    assert not shortcut.matches(Keystroke(key="tab"))


def test_from_keystroke_round_trip():
    stroke = Keystroke(key="x", modifiers=Modifiers(alt=True))
    assert Shortcut.from_keystroke(stroke).matches(stroke)


def test_symbols_for_named_keys():
    assert Shortcut.new("comma", system="linux").symbols() == [","]
    assert Shortcut.new("backslash", system="linux").symbols() == ["\\"]


def test_symbols_uppercase_default():
    caps = Shortcut.new("k", system="linux").shift().symbols()
    assert len(caps) == 2
    assert caps[-1] == "K"


def test_symbols_prefer_ime_key():
    shortcut = Shortcut.from_keystroke(Keystroke(key="a", ime_key="b"))
    assert shortcut.symbols() == ["B"]


def test_action_run_passes_actions():
    seen = []
    action = Action("Open", lambda actions: seen.append(actions) or "done")
    assert action.run("ctx") == "done"
    assert seen == ["ctx"]


def test_dropdown_set_value_requires_known_item():
    dropdown = Dropdown()
    dropdown.set_items([("a", "Alpha"), ("b", "Beta")])
    assert dropdown.set_value("b")
    assert dropdown.label() == "Beta"
    assert not dropdown.set_value("zzz")
    assert dropdown.value == "b"
    assert dropdown.set_value("")
    assert dropdown.value == ""


def test_dropdown_cycle_wraps():
    dropdown = Dropdown()
    dropdown.set_items([("a", "A"), ("b", "B")])
    dropdown.cycle()
    assert dropdown.value == "b"
    dropdown.cycle()
    assert dropdown.value == "a"


def test_dropdown_cycle_empty_is_noop():
    dropdown = Dropdown(value="x")
    dropdown.cycle()
    assert dropdown.value == "x"
    assert dropdown.label() is None


class FakeClock:
    def __init__(self, now=100.0):
        self.now = now

    def __call__(self):
        return self.now


def test_toast_lifetimes():
    toast = Toast(clock=FakeClock())
    toast.loading("Working")
    assert toast.kind is ToastKind.LOADING and toast.fade_out is None
    toast.success("Done")
    assert toast.fade_out == toast.fade_in + 3
    toast.error("Oops")
    assert toast.fade_out == toast.fade_in + 4
    assert toast.message == "Oops"


def test_toast_idle_has_no_offset():
    toast = Toast(clock=FakeClock())
    toast.success("x")
    toast.clear()
    assert toast.kind is ToastKind.IDLE
    assert toast.offset(200.0) is None


def test_toast_offset_phases():
    toast = Toast(clock=FakeClock(100.0))
    toast.success("x")
    left, alpha = toast.offset(100.1)
    assert left < 0 and 0 < alpha < 0.1
    assert toast.offset(101.0, pulse=0.0) == (0.0, pytest.approx(0.1))
    left, alpha = toast.offset(103.1)
    assert 0 < left < 1 and alpha < 0.1
    assert toast.offset(110.0) == (1.0, 0.0)


@pytest.mark.parametrize("pulse", [0.0, 0.5, 1.0])
def test_toast_pulse_increases_alpha(pulse):
    toast = Toast(clock=FakeClock(0.0))
    toast.loading("x")
    _, alpha = toast.offset(5.0, pulse=pulse)
    assert alpha == pytest.approx(0.1 + pulse / 20)