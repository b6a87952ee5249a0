"""Tests for console logging helpers."""

import io
from unittest.mock import patch

import pytest
from rich.console import Console

from auto_merge_bot.utils import logging as bot_logging


@pytest.fixture
def output():
    """Capture console output in a string buffer."""
    buffer = io.StringIO()
    console = Console(file=buffer, highlight=False, width=200)
    with patch.object(bot_logging, "_console", console):
        yield buffer


@pytest.fixture
def verbose():
    """Enable debug output for one test."""
    bot_logging.set_verbose(True)
    yield
    bot_logging.set_verbose(False)


def test_brackets_printed_verbatim(output):
    """Test messages are not interpreted as Rich markup."""
    bot_logging.log_error("gh failed: [red]HTTP 404[/red] for [bold]o/r#1")

    assert "[red]HTTP 404[/red] for [bold]o/r#1" in output.getvalue()


def test_levels_have_symbols(output):
    """Test each level is prefixed with its symbol."""
    bot_logging.log_info("info")
    bot_logging.log_success("done")
    bot_logging.log_warning("careful")
    bot_logging.log_error("broken")

    lines = output.getvalue().splitlines()
    assert lines == ["ℹ info", "✓ done", "⚠ careful", "✗ broken"]


def test_debug_hidden_by_default(output):
    """Test debug messages need verbose mode."""
    bot_logging.set_verbose(False)
    bot_logging.log_debug("details")

    assert output.getvalue() == ""


def test_debug_shown_when_verbose(output, verbose):
    """Test debug messages print in verbose mode."""
    bot_logging.log_debug("details")

    assert "details" in output.getvalue()


def test_console_writes_to_stderr():
    """Test the shared console is a stderr console."""
    with patch.object(bot_logging, "_console", None):
        assert bot_logging.get_console().stderr is True
