import pytest

from lounge.loader import (
    Loader,
    LoaderState,
    bar_geometry,
    fade_opacity,
    loader_state,
)


@pytest.fixture(autouse=True)
def clean_shared_state():
    state = loader_state()
    for loader in list(state.loaders):
        loader.remove()
    yield
    for loader in list(state.loaders):
        loader.remove()


def test_add_registers_and_shows():
    state = loader_state()
    loader = Loader.add()
    assert loader.active
    assert loader in state.loaders
    assert state.get()[0] is True


def test_remove_unregisters_and_hides():
    state = loader_state()
    loader = Loader.add()
    state.get()
    loader.remove()
    assert not loader.active
    assert loader not in state.loaders
    assert state.get()[0] is False


def test_bar_stays_shown_while_any_loader_active():
    state = loader_state()
    first = Loader.add()
    second = Loader.add()
    first.remove()
    assert state.loaders == [second]
    assert state.get()[0] is True


def test_timestamp_changes_only_on_toggle():
    now = [1.0]
    state = LoaderState(clock=lambda: now[0])
    assert state.get() == (False, 1.0)
    loader = Loader()
    state.register(loader)
    now[0] = 5.0
    assert state.get() == (True, 5.0)
    now[0] = 7.0
    assert state.get() == (True, 5.0)
    loader._active.clear()
    assert state.get() == (False, 7.0)


def test_prune_keeps_only_active():
    state = LoaderState()
    keep, drop = Loader(), Loader()
    state.register(keep)
    state.register(drop)
    drop._active.clear()
    state.prune()
    assert state.loaders == [keep]


def test_bar_geometry_endpoints():
    assert bar_geometry(0.0) == (0.0, 0.0)
    assert bar_geometry(0.4) == pytest.approx((0.0, 0.4))
    assert bar_geometry(1.0) == pytest.approx((1.0, 0.5))


def test_bar_geometry_grow_phase_keeps_left_edge():
    for progress in (0.1, 0.2, 0.3):
        left, width = bar_geometry(progress)
        assert left == 0.0
        assert 0.0 < width < 0.4


def test_bar_geometry_is_continuous_at_phase_change():
    before = bar_geometry(0.4)
    after = bar_geometry(0.4000001)
    assert after == pytest.approx(before, abs=1e-5)


def test_fade_opacity_limits():
    assert fade_opacity(True, 0.0) == 1.0
    assert fade_opacity(False, 0.0) == 0.0
    assert fade_opacity(True, 10.0) == 0.0
    assert fade_opacity(False, 10.0) == 1.0


@pytest.mark.parametrize("elapsed", [0.0, 0.1, 0.25, 0.4, 3.0])
def test_fade_opacity_show_and_hide_are_complementary(elapsed):
    assert fade_opacity(True, elapsed) + fade_opacity(False, elapsed) == pytest.approx(1.0)