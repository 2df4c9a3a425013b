import io
import os
import sys
from typing import Literal

LEVELS = {0: "INFO", 1: "WARN", 2: "DEBUG", 3: "ERROR"}


def log(text: str, level: Literal[0, 1, 2, 3] = 0):
    print(f"[{LEVELS[level]}] {text}")


class DoubleOut(io.TextIOBase):
    """Writes everything to a file and to the real stdout."""

    def __init__(self, file):
        self.file = open(file, "w", encoding="utf-8")
        self.stdout = sys.__stdout__

    def write(self, s):
        self.file.write(s)
        self.stdout.write(s)
        return len(s)

    def flush(self):
        self.file.flush()
        self.stdout.flush()

    def close(self):
        super().close()
        self.file.close()


def log_to_file(path=os.path.expanduser("~/.screensaver/log.log")):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    sys.stdout = DoubleOut(path)
    return sys.stdout
