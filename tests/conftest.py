"""Shared fixtures for auto-merge-bot tests."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

from auto_merge_bot.auto_merger import GitHubClient, PullRequestStore
from auto_merge_bot.auto_merger.models import (
    CheckRun,
    CheckRunStatus,
    PullRequestDetails,
)
from auto_merge_bot.config import (
    ApprovalsRequired,
    AutoMergeConfig,
    MergeTimeout,
    WatchSettings,
)

PR_URL = "https://github.com/test-org/test-repo/pull/42"
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def config():
    """Config with a 3 day collaborator and 7 day contributor timeout."""
    return AutoMergeConfig(
        merge_timeout=MergeTimeout(collaborator="3 days", contributor="7 days"),
        approvals_required=ApprovalsRequired(collaborator=1, contributor=2),
        watch=WatchSettings(monitor=("test-org/test-repo",), ignore=()),
    )


@pytest.fixture
def mock_client():
    """GitHub client mock with the real client's interface."""
    return MagicMock(spec=GitHubClient)


@pytest.fixture
def store(tmp_path):
    """Empty tracked pull request store backed by a temporary file."""
    return PullRequestStore(str(tmp_path / "prs.db"))


def make_details(**overrides) -> PullRequestDetails:
    """Build open pull request details with sensible defaults."""
    values = {
        "number": 42,
        "state": "open",
        "merged": False,
        "closed_at": None,
        "author_association": "CONTRIBUTOR",
        "head_sha": "abc123",
        "html_url": PR_URL,
        "draft": False,
    }
    values.update(overrides)
    return PullRequestDetails(**values)


def make_run(
    name: str = "tests",
    status: str = "completed",
    conclusion: str | None = "success",
    run_id: int = 1,
) -> CheckRun:
    """Build a check run."""
    return CheckRun(
        id=run_id,
        name=name,
        status=CheckRunStatus.parse(status),
        conclusion=conclusion,
        url=f"https://api.github.com/check-runs/{run_id}",
    )
