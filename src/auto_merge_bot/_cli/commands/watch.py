"""CLI commands for managing the tracked pull request list."""

import sys

import click

from ...auto_merger import PullRequestStore, parse_github_url
from ...utils.logging import log_error, log_info, log_success, log_warning
from ..utils import db_option


@click.group()
def watch() -> None:
    """Manage the list of pull requests tracked for auto-merge."""


@watch.command(name="add")
@db_option
@click.argument("urls", nargs=-1, required=True)
def add(db_path: str, urls: tuple[str, ...]) -> None:
    """Track one or more pull request URLs."""
    store = PullRequestStore(db_path)
    failed = False
    for url in urls:
        try:
            parse_github_url(url)
        except ValueError as e:
            log_error(str(e))
            failed = True
            continue
        if store.add(url):
            log_success(f"Tracking {url}")
        else:
            log_warning(f"Already tracking {url}")
    if failed:
        sys.exit(1)


@watch.command(name="remove")
@db_option
@click.argument("urls", nargs=-1, required=True)
def remove(db_path: str, urls: tuple[str, ...]) -> None:
    """Stop tracking one or more pull request URLs."""
    store = PullRequestStore(db_path)
    for url in urls:
        if store.delete(url):
            log_success(f"Stopped tracking {url}")
        else:
            log_warning(f"Not tracked: {url}")


@watch.command(name="list")
@db_option
def list_tracked(db_path: str) -> None:
    """Print tracked pull request URLs, oldest first."""
    urls = PullRequestStore(db_path).list_urls()
    if not urls:
        log_info("No pull requests are tracked.")
        return
    for url in urls:
        click.echo(url)
