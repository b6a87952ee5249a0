"""Console logging helpers built on Rich.

All log output goes to stderr so that command results printed to stdout
(JSON, tables) stay machine readable. Messages are printed as plain text,
so URLs and exception strings containing brackets are never read as markup.
"""

import os

from rich.console import Console
from rich.text import Text

_console: Console | None = None
_verbose = bool(os.environ.get("AUTO_MERGE_BOT_DEBUG"))


def get_console() -> Console:
    """Return the shared stderr console.

    Returns
    -------
    Console
        Rich console writing to stderr.

    """
    global _console  # noqa: PLW0603
    if _console is None:
        _console = Console(stderr=True, highlight=False)
    return _console


def set_verbose(enabled: bool) -> None:
    """Enable or disable debug output."""
    global _verbose  # noqa: PLW0603
    _verbose = enabled


def _log(symbol: str, style: str, message: str) -> None:
    get_console().print(Text.assemble((f"{symbol} ", style), message))


def log_debug(message: str) -> None:
    """Log a debug message, only shown in verbose mode."""
    if _verbose:
        _log("·", "dim", message)


def log_info(message: str) -> None:
    """Log an informational message."""
    _log("ℹ", "blue", message)


def log_success(message: str) -> None:
    """Log a success message."""
    _log("✓", "green", message)


def log_warning(message: str) -> None:
    """Log a warning message."""
    _log("⚠", "yellow", message)


def log_error(message: str) -> None:
    """Log an error message."""
    _log("✗", "bold red", message)
