"""CLI command for listing open pull requests of watched repositories."""

import sys

import click
from rich.console import Console
from rich.table import Table

from ...auto_merger import GitHubClient, get_open_pull_requests
from ...utils.logging import log_info
from ..utils import config_option, load_config_or_exit, owner_option, token_option


@click.command(name="open-prs")
@config_option
@token_option
@owner_option
@click.option(
    "--output-format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    help="Output format: 'table' for humans, 'json' for scripts",
)
def open_prs(
    config_path: str | None,
    gh_token: str | None,
    owner: str,
    output_format: str,
) -> None:
    """List open, non-draft pull requests matching the watch settings."""
    config = load_config_or_exit(config_path)

    try:
        items = get_open_pull_requests(GitHubClient(gh_token=gh_token), config.watch, owner)
    except Exception:
        # Already logged by get_open_pull_requests
        sys.exit(1)

    stdout_console = Console(stderr=False)
    if output_format == "json":
        stdout_console.print_json(
            data=[
                {
                    "url": item.get("html_url", ""),
                    "title": item.get("title", ""),
                    "author": (item.get("user") or {}).get("login", ""),
                    "updated_at": item.get("updated_at", ""),
                }
                for item in items
            ]
        )
        return

    if not items:
        log_info("No open pull requests found.")
        return

    table = Table(title=f"Open pull requests ({len(items)})")
    table.add_column("URL", overflow="fold")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Updated")
    for item in items:
        table.add_row(
            item.get("html_url", ""),
            item.get("title", ""),
            (item.get("user") or {}).get("login", ""),
            item.get("updated_at", ""),
        )
    stdout_console.print(table)
