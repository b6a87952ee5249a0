"""CLI command for evaluating and merging tracked pull requests."""

import sys
from collections import Counter

import click
from rich.console import Console

from ...auto_merger import GitHubClient, PullRequestStore, QueueManager, StatusPoller
from ...config import DEFAULT_WORKFLOW_NAME
from ...utils.logging import log_error, log_info
from ..utils import config_option, db_option, load_config_or_exit, token_option


@click.command()
@config_option
@db_option
@token_option
@click.option(
    "--workflow-name",
    envvar="WORKFLOW_NAME",
    default=DEFAULT_WORKFLOW_NAME,
    show_default=True,
    help="Check run name of this bot's own workflow, excluded from CI checks",
)
@click.option(
    "--check-interval",
    type=click.FloatRange(min=0),
    default=60,
    show_default=True,
    help="Seconds between CI status polls",
)
@click.option(
    "--max-attempts",
    type=click.IntRange(min=1),
    default=100,
    show_default=True,
    help="Maximum number of CI status polls per pull request",
)
@click.option(
    "--output-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format for the run summary",
)
def update(
    config_path: str | None,
    db_path: str,
    gh_token: str | None,
    workflow_name: str,
    check_interval: float,
    max_attempts: int,
    output_format: str,
) -> None:
    r"""Evaluate tracked pull requests and merge those that are ready.

    A pull request is merged once it has been inactive longer than its merge
    timeout, has enough approvals, and all CI checks passed.

    Examples:
      \b
      # Scheduled run
      auto-merge-bot update --config .github/auto-merge.yml --db state/prs.db

    """
    config = load_config_or_exit(config_path)

    try:
        client = GitHubClient(gh_token=gh_token)
        manager = QueueManager(
            client=client,
            store=PullRequestStore(db_path),
            config=config,
            status_poller=StatusPoller(
                client,
                workflow_name,
                check_interval=check_interval,
                max_attempts=max_attempts,
            ),
        )
        results = manager.update_pull_requests()
    except Exception as e:
        log_error(f"Unexpected error: {e}")
        sys.exit(1)

    counts = Counter(result.outcome.value for result in results)
    if output_format == "json":
        Console(stderr=False).print_json(
            data=[
                {"url": r.url, "outcome": r.outcome.value, "message": r.message}
                for r in results
            ]
        )
    elif results:
        summary = ", ".join(f"{name}={count}" for name, count in sorted(counts.items()))
        log_info(f"Processed {len(results)} pull request(s): {summary}")
