"""GitHub REST client built on the gh CLI."""

import json
import os
import subprocess
from typing import Any

from ..utils.logging import log_debug
from .models import (
    CheckRun,
    CheckSuite,
    PullRequestDetails,
    PullRequestRef,
    Review,
    TimelineEvent,
)


class GitHubClient:
    """Call the GitHub REST API through ``gh api``.

    Parameters
    ----------
    gh_token : str or None, optional
        GitHub token exported to gh as GH_TOKEN. If None, gh falls back to
        its own authentication.

    Attributes
    ----------
    gh_token : str or None
        GitHub token.

    """

    def __init__(self, gh_token: str | None = None):
        """Initialize GitHub client.

        Parameters
        ----------
        gh_token : str or None, optional
            GitHub token exported to gh as GH_TOKEN.

        """
        self.gh_token = gh_token

    def _run_gh_command(self, cmd: list[str]) -> str:
        """Execute gh CLI command.

        Parameters
        ----------
        cmd : list[str]
            Command and arguments to execute.

        Returns
        -------
        str
            Stripped stdout from command.

        Raises
        ------
        subprocess.CalledProcessError
            If command fails.

        """
        # Inherit environment and add GH_TOKEN
        env = os.environ.copy()
        if self.gh_token:
            env["GH_TOKEN"] = self.gh_token

        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=True,
            env=env,
        )
        return result.stdout.strip()

    def api(
        self,
        path: str,
        method: str = "GET",
        fields: dict[str, str] | None = None,
        paginate: bool = False,
    ) -> Any:
        """Call a REST endpoint and decode the JSON response.

        Parameters
        ----------
        path : str
            Endpoint path relative to the API root (e.g. "repos/o/r/pulls/1").
        method : str, optional
            HTTP method (default="GET").
        fields : dict[str, str] or None, optional
            Query or body parameters.
        paginate : bool, optional
            Fetch every page. The result is then a list with one entry per
            page (default=False).

        Returns
        -------
        Any
            Decoded JSON, or None for an empty body.

        Raises
        ------
        subprocess.CalledProcessError
            If gh exits with an error.
        json.JSONDecodeError
            If the response is not JSON.

        """
        cmd = ["gh", "api", "-X", method, path]
        if paginate:
            cmd.extend(["--paginate", "--slurp"])
        for key, value in (fields or {}).items():
            cmd.extend(["-f", f"{key}={value}"])

        log_debug(f"gh api {method} {path}")
        output = self._run_gh_command(cmd)
        return json.loads(output) if output else None

    def _paginate_list(self, path: str, key: str | None = None, **fields: str) -> list[Any]:
        """Fetch all pages of a list endpoint and flatten them.

        Parameters
        ----------
        path : str
            Endpoint path.
        key : str or None, optional
            Key holding the items when pages are objects (e.g. "check_runs").
            If None, each page is itself a list.

        Returns
        -------
        list[Any]
            Items from every page.

        """
        pages = self.api(path, fields=fields or None, paginate=True) or []
        items: list[Any] = []
        for page in pages:
            items.extend(page[key] if key else page)
        return items

    def get_pull_request(self, ref: PullRequestRef) -> PullRequestDetails:
        """Fetch pull request details."""
        data = self.api(f"repos/{ref.owner}/{ref.repo}/pulls/{ref.issue_number}")
        return PullRequestDetails.from_api(data)

    def list_reviews(self, ref: PullRequestRef) -> list[Review]:
        """List every review submitted on a pull request."""
        items = self._paginate_list(
            f"repos/{ref.owner}/{ref.repo}/pulls/{ref.issue_number}/reviews",
            per_page="100",
        )
        return [Review.from_api(item) for item in items]

    def list_check_suites(self, ref: PullRequestRef, sha: str) -> list[CheckSuite]:
        """List the check suites run against a commit."""
        items = self._paginate_list(
            f"repos/{ref.owner}/{ref.repo}/commits/{sha}/check-suites",
            key="check_suites",
            per_page="100",
        )
        return [CheckSuite.from_api(item) for item in items]

    def list_check_runs(self, ref: PullRequestRef, suite_id: int) -> list[CheckRun]:
        """List the check runs of a check suite."""
        items = self._paginate_list(
            f"repos/{ref.owner}/{ref.repo}/check-suites/{suite_id}/check-runs",
            key="check_runs",
            per_page="100",
        )
        return [CheckRun.from_api(item) for item in items]

    def list_timeline_events(self, ref: PullRequestRef) -> list[TimelineEvent]:
        """List every timeline event of a pull request."""
        items = self._paginate_list(
            f"repos/{ref.owner}/{ref.repo}/issues/{ref.issue_number}/timeline",
            per_page="100",
        )
        return [TimelineEvent.from_api(item) for item in items]

    def search_issues(self, query: str) -> list[dict[str, Any]]:
        """Run an issue and pull request search, returning every result."""
        return self._paginate_list(
            "search/issues", key="items", q=query, per_page="100"
        )

    def merge_pull_request(self, ref: PullRequestRef) -> dict[str, Any]:
        """Merge a pull request.

        Raises
        ------
        subprocess.CalledProcessError
            If GitHub refuses the merge.

        """
        return self.api(
            f"repos/{ref.owner}/{ref.repo}/pulls/{ref.issue_number}/merge",
            method="PUT",
        ) or {}
