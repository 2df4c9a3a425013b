from matrixsaver.config import ConfigurationError, RenderConfig, Style, load_config
from matrixsaver.glyphs import GlyphSource
from matrixsaver.column import Column, ColumnState
from matrixsaver.grid import ColumnGrid
from matrixsaver.fade import FadeStyler
from matrixsaver.driver import AnimationDriver, RenderCell

__version__ = "1.1.0"
