import random
from typing import NamedTuple

from matrixsaver.config import ConfigurationError, RenderConfig, Style
from matrixsaver.fade import FadeStyler
from matrixsaver.glyphs import GlyphSource
from matrixsaver.grid import ColumnGrid
from matrixsaver.log import log


class RenderCell(NamedTuple):
    row: int
    column: int
    glyph: str
    style: Style


class AnimationDriver:
    """
    Advances the rain once per tick and hands the resulting cells to a surface.

    `surface` is anything with a `draw(cells)` method, or None when the caller
    only wants the cells returned from `tick`. Configuration problems are
    logged once and leave the driver with no columns instead of raising.
    """

    def __init__(self, config: RenderConfig | None = None, surface=None, rng: random.Random | None = None):
        self.config = config if config is not None else RenderConfig()
        self.surface = surface
        self.rng = rng if rng is not None else random.Random()
        self.styler = FadeStyler(self.config)
        self.grid = ColumnGrid.empty()
        self.error: ConfigurationError | None = None
        self.frames = 0
        self.elapsed = 0.0
        try:
            self.glyphs = GlyphSource(self.config.glyph_set, self.rng)
        except ConfigurationError as e:
            self._fail(e)
            self.glyphs = None

    def _fail(self, error: ConfigurationError):
        self.error = error
        self.grid = ColumnGrid.empty()
        log(f"Rain disabled: {error}", level=3)

    @property
    def column_count(self):
        return self.grid.column_count

    @property
    def row_count(self):
        return self.grid.row_count

    def resize(self, width, height, character_width, character_height):
        if self.glyphs is None:
            return
        try:
            self.grid = ColumnGrid.for_surface(
                width, height, character_width, character_height, self.glyphs, self.config, self.rng
            )
        except ConfigurationError as e:
            self._fail(e)
            return
        self.error = None
        log(f"Grid resized to {self.grid.column_count}x{self.grid.row_count} for {width}x{height} surface", level=2)

    def reset_columns(self):
        self.grid.reset_all()

    reset = reset_columns

    def cells(self) -> list[RenderCell]:
        """The cells for the current column state, without advancing anything."""
        cells = []
        style_for = self.styler.style_for
        for column in self.grid:
            for row in column.trail_rows():
                style = style_for(column.head_row - row, column.fade_length)
                if style is not None:
                    cells.append(RenderCell(row, column.x, column.glyph_at(row), style))
        return cells

    def tick(self, elapsed: float = 0.0) -> list[RenderCell]:
        if not len(self.grid):
            return []
        self.frames += 1
        self.elapsed += elapsed
        self.grid.step()
        cells = self.cells()
        if self.surface is not None:
            self.surface.draw(cells)
        return cells
