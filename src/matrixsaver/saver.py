import argparse
import random
import sys

import pygame

from matrixsaver.config import CONFIG_PATH, ConfigurationError, load_config
from matrixsaver.driver import AnimationDriver
from matrixsaver.log import log
from matrixsaver.render import PygameSurface


def character_metrics(font):
    width, _ = font.size("0")
    return width, font.get_linesize()


class RainWindow:
    """Feeds pygame events to the driver and draws one frame per tick."""

    def __init__(self, screen, font, config, windowed=False, rng=None):
        self.config = config
        self.windowed = windowed
        self.char_w, self.char_h = character_metrics(font)
        self.surface = PygameSurface(screen, font, config, self.char_w, self.char_h)
        self.driver = AnimationDriver(config, self.surface, rng)
        self.driver.resize(*screen.get_size(), self.char_w, self.char_h)
        self.running = True
        self.attempt = 0

    @property
    def screen(self):
        return self.surface.screen

    def update(self, events):
        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.resize(event.w, event.h)
            elif self.windowed and event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                self.driver.reset_columns()
            elif not self.windowed and event.type in (pygame.MOUSEMOTION, pygame.KEYDOWN):
                # The first motion event arrives when the window opens
                self.attempt += 1
                if self.attempt == 2:
                    self.running = False

    def resize(self, width, height):
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            self.surface.screen = pygame.display.get_surface()
        self.surface.clear_cache()
        self.driver.resize(width, height, self.char_w, self.char_h)

    def draw(self, elapsed):
        if not self.driver.column_count:
            self.screen.fill(self.config.background)
            return []
        return self.driver.tick(elapsed)


def run(config, windowed=None, seed=None):
    pygame.init()

    if windowed:
        screen = pygame.display.set_mode(windowed, flags=pygame.RESIZABLE)
    else:
        info = pygame.display.Info()
        screen = pygame.display.set_mode((info.current_w, info.current_h), flags=pygame.FULLSCREEN)
        pygame.mouse.set_visible(False)
    pygame.display.set_caption("Screen Saver")

    font = pygame.font.SysFont(config.font_name, config.font_size)
    window = RainWindow(screen, font, config, windowed=bool(windowed), rng=random.Random(seed))
    log(f"Running at {config.fps} fps with {window.driver.column_count} columns")

    clock = pygame.time.Clock()
    while window.running:
        window.update(pygame.event.get())
        window.draw(clock.tick(config.fps) / 1000)
        pygame.display.flip()

    pygame.mouse.set_visible(True)
    pygame.quit()
    return window.driver


def parse_size(text):
    try:
        w, h = text.lower().split("x")
        return int(w), int(h)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected WIDTHxHEIGHT, got '{text}'")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Digital rain screen saver")
    parser.add_argument("-c", "--config", default=CONFIG_PATH)
    parser.add_argument("-w", "--windowed", type=parse_size, default=None, metavar="WxH")
    parser.add_argument("-s", "--seed", type=int, default=None)
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        log(f"Invalid config {args.config}: {e}", level=3)
        return 1

    run(config, windowed=args.windowed, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())
