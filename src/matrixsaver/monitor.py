import argparse
import subprocess
import sys
import time
from threading import Timer
from typing import Literal

from matrixsaver.config import CONFIG_PATH, ConfigurationError, load_config
from matrixsaver.log import log, log_to_file

TIME_MAP = {
    "Seconds": 1,
    "Minutes": 60,
    "Hours": 3600
}


class InactivityMonitor:
    """
    Starts the saver once mouse and keyboard have been idle for `timeout`.

    After the saver exits cleanly the monitor goes back to listening; a
    non-zero exit code or `stop()` ends `run()`.
    """

    def __init__(self, timeout, time_format: Literal["Seconds", "Minutes", "Hours"], command):
        self.timeout = timeout * TIME_MAP[time_format]
        self.command = list(command)
        self.timer = None
        self.active = False
        self.running = False
        self.listening = False
        self.rc = None
        self.launches = 0
        self.mouse_listener = None
        self.keyboard_listener = None
        log(f"Made InactivityMonitor with timeout: {self.timeout} seconds", level=2)

    def reset_timer(self):
        if self.timer:
            self.timer.cancel()
        self.timer = Timer(self.timeout, self.on_inactivity)
        self.timer.daemon = True
        self.timer.start()

    def on_inactivity(self):
        log(f"No activity for {self.timeout} seconds", level=2)
        self.stop_listening()
        self.launches += 1
        result = subprocess.run(self.command)
        self.rc = result.returncode
        self.active = False

    def start_listening(self, mouse, keyboard):
        self.mouse_listener = mouse.Listener(
            on_move=self.on_input,
            on_click=self.on_input,
            on_scroll=self.on_input
        )
        self.keyboard_listener = keyboard.Listener(on_press=self.on_input)

        self.mouse_listener.start()
        self.keyboard_listener.start()
        self.listening = True

    def stop_listening(self):
        self.listening = False
        for listener in (self.mouse_listener, self.keyboard_listener):
            if listener is not None:
                listener.stop()
        self.mouse_listener = self.keyboard_listener = None

    def on_input(self, *args):
        if self.listening:
            self.reset_timer()

    def stop(self):
        self.running = False
        self.active = False
        if self.timer:
            self.timer.cancel()
        self.stop_listening()

    def run(self):
        # pynput needs a display at import time on X11
        from pynput import keyboard, mouse

        self.running = True
        while self.running:
            self.active = True
            self.start_listening(mouse, keyboard)
            self.reset_timer()

            while self.active:
                time.sleep(0.1)  # avoids high CPU usage

            if not self.running:
                break
            if self.rc != 0:
                log(f"Saver exited with error code {self.rc}, stopping monitor.", level=3)
                self.running = False
                break
            log("Saver completed, listening again.", level=2)
        return self.rc


def saver_command(config_path):
    return [sys.executable, "-m", "matrixsaver.saver", "--config", config_path]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Launch the rain after a period of inactivity")
    parser.add_argument("timeout", nargs="?", type=int, default=None, help="minutes of inactivity")
    parser.add_argument("-c", "--config", default=CONFIG_PATH)
    parser.add_argument("--log-file", action="store_true", help="also write output to ~/.screensaver/log.log")
    args = parser.parse_args(argv)

    if args.log_file:
        log_to_file()

    if args.timeout is not None:
        monitor = InactivityMonitor(args.timeout, "Minutes", saver_command(args.config))
    else:
        try:
            config = load_config(args.config)
        except ConfigurationError as e:
            log(f"Invalid config {args.config}: {e}", level=3)
            return 1
        monitor = InactivityMonitor(config.timeout, "Seconds", saver_command(args.config))

    log("Starting monitor")
    try:
        rc = monitor.run()
    except KeyboardInterrupt:
        monitor.stop()
        log("Monitor interrupted")
        return 0
    if rc not in (0, None):
        log(f"Saver crashed with error code: {rc}", level=3)
        return 1
    log("Screen Saver executed", level=2)
    return 0


if __name__ == "__main__":
    sys.exit(main())
