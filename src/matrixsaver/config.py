import os
import json
from dataclasses import dataclass, field
from typing import Literal

from matrixsaver.log import log

expand = os.path.expanduser

CONFIG_DIR = expand("~/.screensaver")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")

# Half-width katakana, digits and the symbols of the old matrix.py
DEFAULT_GLYPHS = tuple(chr(i) for i in range(0xFF66, 0xFF9E)) + tuple("0123456789@#$%^&*()")

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
BRIGHT_GREEN = (0, 255, 0)


class ConfigurationError(ValueError):
    """Raised for settings the rain cannot be drawn with."""


@dataclass(frozen=True)
class Style:
    color: tuple[int, int, int]
    alpha: int = 255
    bold: bool = False

    def __post_init__(self):
        if len(self.color) != 3 or not all(0 <= c <= 255 for c in self.color):
            raise ConfigurationError(f"Color must be three values within [0, 255], got {self.color}")
        if not 0 <= self.alpha <= 255:
            raise ConfigurationError(f"alpha must be within [0, 255], got {self.alpha}")

    @property
    def brightness(self) -> float:
        return self.alpha / 255


@dataclass(frozen=True)
class RenderConfig:
    glyph_set: tuple[str, ...] = DEFAULT_GLYPHS
    fade_length: int = 8
    fade_length_range: tuple[int, int] | None = None
    speed_range: tuple[int, int] = (1, 3)
    head_style: Style = field(default_factory=lambda: Style(WHITE, 255, True))
    fade_color: tuple[int, int, int] = BRIGHT_GREEN
    min_alpha: int = 30
    fade_curve: Literal["linear", "exponential"] = "linear"
    fade_decay: float = 0.75
    max_stagger: int = 20
    flicker_chance: float = 0.02
    tick_interval: float = 1 / 20
    font_name: str = "Courier"
    font_size: int = 20
    background: tuple[int, int, int] = BLACK
    timeout: int = 180

    def __post_init__(self):
        # An empty glyph set is left to GlyphSource
        for glyph in self.glyph_set:
            if not isinstance(glyph, str) or len(glyph) != 1:
                raise ConfigurationError(f"Glyphs must be single characters, got {glyph!r}")
        if self.fade_length < 1:
            raise ConfigurationError(f"fade_length must be >= 1, got {self.fade_length}")
        if self.fade_length_range is not None:
            low, high = self.fade_length_range
            if low < 1 or high < low:
                raise ConfigurationError(f"Invalid fade_length_range: {self.fade_length_range}")
        low, high = self.speed_range
        if low < 1 or high < low:
            raise ConfigurationError(f"Invalid speed_range: {self.speed_range}")
        if self.max_stagger < 1:
            raise ConfigurationError(f"max_stagger must be >= 1, got {self.max_stagger}")
        if not 0 <= self.flicker_chance <= 1:
            raise ConfigurationError(f"flicker_chance must be within [0, 1], got {self.flicker_chance}")
        if self.fade_curve not in ("linear", "exponential"):
            raise ConfigurationError(f"Unknown fade_curve '{self.fade_curve}'")
        if not 0 < self.fade_decay < 1:
            raise ConfigurationError(f"fade_decay must be within (0, 1), got {self.fade_decay}")
        if not 0 <= self.min_alpha < self.head_style.alpha:
            raise ConfigurationError(f"min_alpha must be below the head alpha, got {self.min_alpha}")
        if len(self.fade_color) != 3 or not all(0 <= c <= 255 for c in self.fade_color):
            raise ConfigurationError(f"fade_color must be three values within [0, 255], got {self.fade_color}")
        if self.tick_interval <= 0:
            raise ConfigurationError(f"tick_interval must be positive, got {self.tick_interval}")

    @property
    def fps(self) -> int:
        return max(1, round(1 / self.tick_interval))


def _pair(value):
    if value is None:
        return None
    low, high = value
    return int(low), int(high)


def _color(value):
    return tuple(int(c) for c in value)


def config_from_dict(data: dict) -> RenderConfig:
    defaults = RenderConfig()
    glyphs = data.get("glyphs", defaults.glyph_set)
    if isinstance(glyphs, str):
        glyphs = list(glyphs)
    head = data.get("head_style", {})
    if not isinstance(head, dict):
        raise ConfigurationError(f"head_style must be an object, got {head!r}")
    try:
        return RenderConfig(
            glyph_set=tuple(glyphs),
            fade_length=int(data.get("fade_length", defaults.fade_length)),
            fade_length_range=_pair(data.get("fade_length_range", defaults.fade_length_range)),
            speed_range=_pair(data.get("speed_range", defaults.speed_range)),
            head_style=Style(
                _color(head.get("color", defaults.head_style.color)),
                int(head.get("alpha", defaults.head_style.alpha)),
                bool(head.get("bold", defaults.head_style.bold)),
            ),
            fade_color=_color(data.get("fade_color", defaults.fade_color)),
            min_alpha=int(data.get("min_alpha", defaults.min_alpha)),
            fade_curve=data.get("fade_curve", defaults.fade_curve),
            fade_decay=float(data.get("fade_decay", defaults.fade_decay)),
            max_stagger=int(data.get("max_stagger", defaults.max_stagger)),
            flicker_chance=float(data.get("flicker_chance", defaults.flicker_chance)),
            tick_interval=float(data.get("tick_interval", defaults.tick_interval)),
            font_name=data.get("font_name", defaults.font_name),
            font_size=int(data.get("font_size", defaults.font_size)),
            background=_color(data.get("background", defaults.background)),
            timeout=int(data.get("timeout", defaults.timeout)),
        )
    except (TypeError, ValueError) as e:
        if isinstance(e, ConfigurationError):
            raise
        raise ConfigurationError(f"Malformed config value: {e}") from e


def load_config(path=CONFIG_PATH) -> RenderConfig:
    """
    Reads the saver settings from a JSON file.

    A missing file gives the defaults, so does a corrupted one (with a warning).
    Values that parse but make no sense raise ConfigurationError.
    """
    if not os.path.exists(path):
        return RenderConfig()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        log(f"Failed to load config: {e}", level=1)
        return RenderConfig()
    if not isinstance(data, dict):
        log(f"Ignoring {path}: expected a JSON object", level=1)
        return RenderConfig()
    return config_from_dict(data)


def save_config(data: dict, path=CONFIG_PATH):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
