"""Tracking of running background work and the loading bar it drives."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from functools import lru_cache

BAR_WIDTH = 1.0
BAR_START_WIDTH = 0.4
BAR_STOP_WIDTH = 0.5
BAR_GROW_PHASE = 0.4
FADE_SECONDS = 0.5


class Loader:
    """A handle for one piece of work in progress; active until removed."""

    def __init__(self) -> None:
        self._active = threading.Event()
        self._active.set()

    @property
    def active(self) -> bool:
        return self._active.is_set()

    @classmethod
    def add(cls) -> Loader:
        """Create an active loader and register it with the shared state."""
        loader = cls()
        loader_state().register(loader)
        return loader

    def remove(self) -> None:
        """Mark the work as finished and drop finished loaders from the shared state."""
        self._active.clear()
        loader_state().prune()


class LoaderState:
    """The registered loaders and whether the loading bar is shown."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self.show = False
        self.timestamp = clock()
        self.loaders: list[Loader] = []

    def register(self, loader: Loader) -> None:
        with self._lock:
            self.loaders.append(loader)

    def prune(self) -> None:
        """Forget every loader that is no longer active."""
        with self._lock:
            self.loaders = [loader for loader in self.loaders if loader.active]

    def get(self) -> tuple[bool, float]:
        """Return whether any loader is active and when that last changed."""
        with self._lock:
            active = any(loader.active for loader in self.loaders)
            if self.show != active:
                self.show = active
                self.timestamp = self._clock()
            return self.show, self.timestamp


@lru_cache(maxsize=1)
def loader_state() -> LoaderState:
    """Return the state shared by all loaders of the process."""
    return LoaderState()


def bar_geometry(progress: float) -> tuple[float, float]:
    """Return ``(left, width)`` of the moving bar, relative to its track, at ``progress`` in 0..1.

    The bar first grows from the left edge, then slides to the right while widening.
    """
    if progress > BAR_GROW_PHASE:
        t = (progress - BAR_GROW_PHASE) / (1.0 - BAR_GROW_PHASE)
        left = t * BAR_WIDTH
        width = t * (BAR_STOP_WIDTH - BAR_START_WIDTH) + BAR_START_WIDTH
        return left, width
    t = progress / BAR_GROW_PHASE
    return 0.0, t * BAR_START_WIDTH


def fade_opacity(show: bool, elapsed: float) -> float:
    """Return how far the bar colour is faded out, ``elapsed`` seconds after it was toggled.

    A shown bar fades in from fully faded (1.0) to not faded (0.0); a hidden one the reverse.
    """
    t = min(max(elapsed, 0.0) / FADE_SECONDS, 1.0)
    return 1.0 - t if show else t