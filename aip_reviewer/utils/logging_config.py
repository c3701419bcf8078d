"""
Logging Config
==============
Console logging for the CLI.  Records go to stderr so JSON and Markdown
reports on stdout stay machine-readable.

    setup_logging("DEBUG")              coloured, DEBUG and above
    setup_logging("INFO", color=False)  plain text (pipes, CI logs)
"""
import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers whose level follows the CLI's --log-level
APP_LOGGERS = ("aip_reviewer", "main")


class ColoredFormatter(logging.Formatter):
    """Wraps each record in an ANSI colour chosen by level."""

    cyan = "\x1b[36m"
    green = "\x1b[32m"
    yellow = "\x1b[33m"
    red = "\x1b[31m"
    bold_red = "\x1b[31;1m"
    reset = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: cyan,
        logging.INFO: green,
        logging.WARNING: yellow,
        logging.ERROR: red,
        logging.CRITICAL: bold_red,
    }

    def __init__(self, use_color: bool = True):
        super().__init__(LOG_FORMAT, datefmt=DATE_FORMAT)
        self.use_color = use_color

    def format(self, record):
        text = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelno) if self.use_color else None
        # Custom levels print uncoloured
        if not color:
            return text
        return f"{color}{text}{self.reset}"


def resolve_level(level) -> int:
    """Accept a level name ("debug") or number; unknown names fall back to INFO."""
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level=logging.INFO, color: bool = True) -> None:
    """Install a single stderr handler on the root logger."""
    level = resolve_level(level)
    root_logger = logging.getLogger()

    # Repeated calls (tests, embedding) must not stack handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.setLevel(level)
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(ColoredFormatter(use_color=color))
    root_logger.addHandler(console_handler)

    for name in APP_LOGGERS:
        app_logger = logging.getLogger(name)
        app_logger.setLevel(level)
        app_logger.propagate = True

    root_logger.debug("Logging initialized at level %s.", logging.getLevelName(level))
