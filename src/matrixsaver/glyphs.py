import random

from matrixsaver.config import ConfigurationError


class GlyphSource:
    """Hands out glyphs picked uniformly from a fixed set."""

    def __init__(self, glyph_set, rng: random.Random | None = None):
        self.glyph_set = tuple(glyph_set)
        if not self.glyph_set:
            raise ConfigurationError("Glyph set is empty")
        self.rng = rng if rng is not None else random.Random()

    def random_glyph(self) -> str:
        return self.rng.choice(self.glyph_set)

    def __len__(self):
        return len(self.glyph_set)
