"""
Unit Tests — Logging Config
===========================
Level resolution, handler installation and colour toggling.
"""
import logging

import pytest

from aip_reviewer.utils.logging_config import ColoredFormatter, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _record(level, msg="hello"):
    return logging.LogRecord("aip_reviewer.test", level, __file__, 1, msg, None, None)


class TestResolveLevel:

    @pytest.mark.parametrize("value,expected", [
        ("debug", logging.DEBUG),
        ("WARNING", logging.WARNING),
        (logging.ERROR, logging.ERROR),
        ("nonsense", logging.INFO),
    ])
    def test_values(self, value, expected):
        assert resolve_level(value) == expected


class TestSetupLogging:

    def test_single_handler_after_repeated_calls(self):
        setup_logging("INFO")
        setup_logging("DEBUG")
        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
        assert logging.getLogger("aip_reviewer").level == logging.DEBUG

    def test_plain_formatter_when_color_disabled(self):
        setup_logging("INFO", color=False)
        formatter = logging.getLogger().handlers[0].formatter
        assert isinstance(formatter, ColoredFormatter)
        assert formatter.use_color is False


class TestColoredFormatter:

    def test_colored(self):
        text = ColoredFormatter().format(_record(logging.ERROR))
        assert text.startswith(ColoredFormatter.red)
        assert text.endswith(ColoredFormatter.reset)
        assert "hello" in text

    def test_plain(self):
        text = ColoredFormatter(use_color=False).format(_record(logging.ERROR))
        assert "\x1b[" not in text
        assert "| ERROR    | aip_reviewer.test:1 - hello" in text

    def test_custom_level_uncolored(self):
        text = ColoredFormatter().format(_record(25))
        assert "\x1b[" not in text
