import random
from enum import Enum

from matrixsaver.config import RenderConfig
from matrixsaver.glyphs import GlyphSource


class ColumnState(Enum):
    EMPTY = "empty"  # head above the screen
    ACTIVE = "active"  # head on screen
    DRAINING = "draining"  # head gone, tail still visible
    FINISHED = "finished"


class Column:
    """
    One falling stream of glyphs.

    The column owns one glyph slot per visible row. The head only moves down,
    one row every `speed` ticks, until the whole trail has left the screen;
    the next tick then resets the column above the top edge.
    """

    def __init__(self, x: int, rows: int, glyphs: GlyphSource, config: RenderConfig, rng: random.Random):
        self.x = x
        self.rows = rows
        self.glyphs = glyphs
        self.config = config
        self.rng = rng
        self.slots: list[str] = []
        self.head_row = -1
        self.fade_length = config.fade_length
        self.speed = 1
        self.counter = 0
        self.reset()

    @property
    def state(self) -> ColumnState:
        if self.head_row < 0:
            return ColumnState.EMPTY
        if self.head_row < self.rows:
            return ColumnState.ACTIVE
        if self.head_row - self.fade_length < self.rows:
            return ColumnState.DRAINING
        return ColumnState.FINISHED

    def reset(self):
        config = self.config
        self.slots = [self.glyphs.random_glyph() for _ in range(self.rows)]
        self.head_row = -self.rng.randint(1, config.max_stagger)
        if config.fade_length_range is not None:
            self.fade_length = self.rng.randint(*config.fade_length_range)
        else:
            self.fade_length = config.fade_length
        self.speed = self.rng.randint(*config.speed_range)
        self.counter = 0

    def step(self) -> bool:
        """Runs one tick. Returns True if the head moved."""
        if self.state is ColumnState.FINISHED:
            self.reset()
            return False

        moved = False
        self.counter += 1
        if self.counter >= self.speed:
            self.counter = 0
            self.head_row += 1
            moved = True

        self.flicker()
        return moved

    def flicker(self):
        chance = self.config.flicker_chance
        if chance <= 0:
            return
        for row in self.trail_rows():
            if self.rng.random() < chance:
                self.slots[row] = self.glyphs.random_glyph()

    def trail_rows(self) -> range:
        """Visible rows covered by the head and its fade trail, top to bottom."""
        top = max(0, self.head_row - self.fade_length)
        bottom = min(self.rows - 1, self.head_row)
        return range(top, bottom + 1)

    def glyph_at(self, row: int) -> str:
        return self.slots[row]

    def __repr__(self):
        return f"Column(x={self.x}, head_row={self.head_row}, fade_length={self.fade_length}, speed={self.speed}, state={self.state.value})"
