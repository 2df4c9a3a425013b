import os
import random

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from matrixsaver.config import RenderConfig


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def binary_config():
    """Two glyphs, a trail of two, every column moving each tick and entering at row -1."""
    return RenderConfig(
        glyph_set=("0", "1"),
        fade_length=2,
        speed_range=(1, 1),
        max_stagger=1,
        flicker_chance=0,
    )


class RecordingSurface:
    def __init__(self):
        self.frames = []

    def draw(self, cells):
        self.frames.append(list(cells))


@pytest.fixture
def surface():
    return RecordingSurface()
