"""CLI command for tracking open pull requests of watched repositories."""

import sys

import click

from ...auto_merger import GitHubClient, PullRequestStore, sync_open_pull_requests
from ...utils.logging import log_error, log_success
from ..utils import (
    config_option,
    db_option,
    load_config_or_exit,
    owner_option,
    token_option,
)


@click.command()
@config_option
@db_option
@token_option
@owner_option
def sync(
    config_path: str | None,
    db_path: str,
    gh_token: str | None,
    owner: str,
) -> None:
    """Start tracking every open, non-draft pull request in watched repositories."""
    config = load_config_or_exit(config_path)

    try:
        added = sync_open_pull_requests(
            GitHubClient(gh_token=gh_token),
            PullRequestStore(db_path),
            config.watch,
            owner,
        )
    except Exception as e:
        log_error(f"Failed to sync open pull requests: {e}")
        sys.exit(1)

    for url in added:
        click.echo(url)
    log_success(f"Sync complete, {len(added)} pull request(s) added")
