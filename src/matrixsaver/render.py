import pygame

from matrixsaver.config import RenderConfig


class PygameSurface:
    """Blits draw instructions onto a pygame surface, one glyph per cell."""

    def __init__(self, screen: pygame.Surface, font, config: RenderConfig, character_width, character_height):
        self.screen = screen
        self.font = font
        self.config = config
        self.character_width = character_width
        self.character_height = character_height
        self._cache = {}

    def _glyph(self, glyph, style):
        key = (glyph, style.color, style.bold)
        surf = self._cache.get(key)
        if surf is None:
            self.font.set_bold(style.bold)
            surf = self.font.render(glyph, True, style.color)
            self._cache[key] = surf
        return surf

    def draw(self, cells):
        self.screen.fill(self.config.background)
        for cell in cells:
            text_surface = self._glyph(cell.glyph, cell.style)
            text_surface.set_alpha(cell.style.alpha)
            self.screen.blit(text_surface, (cell.column * self.character_width, cell.row * self.character_height))

    def clear_cache(self):
        self._cache.clear()
