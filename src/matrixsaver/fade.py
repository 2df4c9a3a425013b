from matrixsaver.config import RenderConfig, Style


class FadeStyler:
    """
    Maps how far a cell trails behind the head to how it is drawn.

    Distance 0 is the head. Distances 1..fade_length fade out towards
    `min_alpha`; anything else is not drawn and gives None.
    """

    def __init__(self, config: RenderConfig):
        self.config = config
        self.head_style = config.head_style
        # Body alpha never reaches the head's
        self._top_alpha = config.head_style.alpha - 1

    def _factor(self, distance: int, fade_length: int) -> float:
        if self.config.fade_curve == "exponential":
            return self.config.fade_decay ** distance
        return 1 - distance / (fade_length + 1)

    def style_for(self, distance: int, fade_length: int | None = None) -> Style | None:
        if fade_length is None:
            fade_length = self.config.fade_length
        if distance == 0:
            return self.head_style
        if distance < 0 or distance > fade_length:
            return None
        span = self._top_alpha - self.config.min_alpha
        alpha = self.config.min_alpha + round(span * self._factor(distance, fade_length))
        return Style(self.config.fade_color, alpha)
