"""
Logging setup shared by the play/evaluate entry points
"""

import logging
import sys

LOG_FORMAT = "[%(asctime)s][%(levelname)-5s][%(name)s] %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers
QUIET_LOGGERS = ("arcade", "pyglet", "PIL", "matplotlib")

# ANSI colors for level names: INFO green, DEBUG bright black
LEVEL_COLORS = {
    logging.DEBUG: "\033[90m",
    logging.INFO: "\033[32m",
}
RESET = "\033[0m"


class ColoredLevelFormatter(logging.Formatter):
    """Formatter that wraps the level name in an ANSI color"""

    def format(self, record: logging.LogRecord) -> str:
        color = LEVEL_COLORS.get(record.levelno)
        if color is None:
            return super().format(record)
        levelname = record.levelname
        record.levelname = f"{color}{levelname:<5}{RESET}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


def setup_logger(level="INFO", color=None) -> logging.Logger:
    """Configure the root logger to write to stdout

    Level names are colored when `color` is True, or by default when stdout
    is a terminal.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    if color is None:
        color = sys.stdout.isatty()

    handler = logging.StreamHandler(sys.stdout)
    formatter_cls = ColoredLevelFormatter if color else logging.Formatter
    handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return root
