import math
import random

from matrixsaver.column import Column
from matrixsaver.config import ConfigurationError, RenderConfig
from matrixsaver.glyphs import GlyphSource


class ColumnGrid:
    def __init__(self, columns: int, rows: int, glyphs: GlyphSource, config: RenderConfig, rng: random.Random):
        self.column_count = max(0, columns)
        self.row_count = max(0, rows)
        if self.column_count == 0 or self.row_count == 0:
            self.column_count = self.row_count = 0
        self.columns = [Column(x, self.row_count, glyphs, config, rng) for x in range(self.column_count)]

    @classmethod
    def for_surface(cls, width, height, character_width, character_height, glyphs, config, rng):
        """Builds a grid with one column per character slot across the surface."""
        if character_width <= 0 or character_height <= 0:
            raise ConfigurationError(
                f"Character metrics must be positive, got {character_width}x{character_height}"
            )
        if width <= 0 or height <= 0:
            return cls(0, 0, glyphs, config, rng)
        columns = math.floor(width / character_width)
        rows = math.floor(height / character_height)
        return cls(columns, rows, glyphs, config, rng)

    @classmethod
    def empty(cls):
        return cls(0, 0, None, None, None)

    def reset_all(self):
        for column in self.columns:
            column.reset()

    def step(self):
        for column in self.columns:
            column.step()

    def __iter__(self):
        return iter(self.columns)

    def __len__(self):
        return len(self.columns)

    def __getitem__(self, x):
        return self.columns[x]
