"""Shared helpers for CLI commands."""

import sys
from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from typing import Any

import click
import yaml

from ..config import DEFAULT_DB_PATH, AutoMergeConfig, load_config
from ..utils.logging import log_error


def get_version() -> str:
    """Get the installed version of the package.

    Returns
    -------
    str
        Version string from package metadata.

    """
    try:
        return version("auto-merge-bot")
    except PackageNotFoundError:
        return "unknown"


def load_config_or_exit(config_path: str | None) -> AutoMergeConfig:
    """Load configuration, exiting with status 1 if it is invalid."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        log_error(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        log_error(f"Invalid YAML in configuration: {e}")
    except ValueError as e:
        log_error(f"Invalid configuration: {e}")
    sys.exit(1)


def config_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --config option."""
    return click.option(
        "--config",
        "config_path",
        type=click.Path(dir_okay=False),
        default=None,
        help="Path to the YAML configuration (default: .github/auto-merge.yml)",
    )(func)


def db_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --db option."""
    return click.option(
        "--db",
        "db_path",
        envvar="AUTO_MERGE_BOT_DB",
        default=DEFAULT_DB_PATH,
        show_default=True,
        help="SQLite database holding tracked pull requests",
    )(func)


def token_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --gh-token option."""
    return click.option(
        "--gh-token",
        envvar=["GH_TOKEN", "GITHUB_TOKEN"],
        default=None,
        help="GitHub token (default: GH_TOKEN or GITHUB_TOKEN, then gh's own login)",
    )(func)


def owner_option(func: Callable[..., Any]) -> Callable[..., Any]:
    """Add the --owner option."""
    return click.option(
        "--owner",
        envvar="GITHUB_REPOSITORY_OWNER",
        required=True,
        help="Owner (organization or user) of the current repository",
    )(func)
