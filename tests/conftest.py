"""Pytest fixtures for tests."""

from pathlib import Path
from tempfile import TemporaryDirectory

import numpy as np
import pytest
from PIL import Image

from wleddraw.services import EditorService
from wleddraw.storage import MemoryKeyValueStore, StateStore


class FakeTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, delay_s, callback):
        self.delay_s = delay_s
        self.callback = callback
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        if self.started and not self.cancelled:
            self.callback()


class FakeTimerFactory:
    """Timer factory recording every timer it creates."""

    def __init__(self):
        self.timers: list[FakeTimer] = []

    def __call__(self, delay_s, callback):
        timer = FakeTimer(delay_s, callback)
        self.timers.append(timer)
        return timer

    @property
    def last(self) -> FakeTimer:
        return self.timers[-1]


@pytest.fixture
def temp_dir():
    """Create a temporary directory that gets cleaned up."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def timers():
    """Deterministic timer factory for the coalescer."""
    return FakeTimerFactory()


@pytest.fixture
def memory_store():
    """StateStore over an in-memory backend."""
    return StateStore(MemoryKeyValueStore())


@pytest.fixture
def frames():
    """Collects every frame body handed to the sink."""
    return []


@pytest.fixture
def editor(memory_store, timers, frames):
    """4x4 editor with a recording sink and fake timers."""
    service = EditorService(
        memory_store,
        width=4,
        height=4,
        sink=frames.append,
        timer_factory=timers,
    )
    service.setup_grid(4, 4)
    return service


@pytest.fixture
def quadrant_image():
    """4x4 RGB image: red, green, blue and white 2x2 quadrants."""
    pixels = np.zeros((4, 4, 3), dtype=np.uint8)
    pixels[:2, :2] = (255, 0, 0)
    pixels[:2, 2:] = (0, 255, 0)
    pixels[2:, :2] = (0, 0, 255)
    pixels[2:, 2:] = (255, 255, 255)
    return Image.fromarray(pixels)


@pytest.fixture
def quadrant_image_file(temp_dir, quadrant_image):
    """The quadrant image saved as PNG."""
    path = temp_dir / "quadrants.png"
    quadrant_image.save(path)
    return path
