"""Auto-merger for tracked pull requests."""

from .github_client import GitHubClient
from .models import (
    CheckRun,
    CheckRunStatus,
    CIStatus,
    PullRequestDetails,
    PullRequestRef,
    Requirements,
    Review,
    ReviewState,
    TimelineEvent,
    UpdateOutcome,
    UpdateResult,
    WatchTarget,
)
from .queue_manager import QueueManager
from .requirements import get_approval_count, resolve_requirements
from .status_poller import StatusPoller
from .store import PullRequestStore
from .targets import (
    build_search_filter,
    get_open_pull_requests,
    parse_target,
    sync_open_pull_requests,
)
from .urls import parse_github_url

__all__ = [
    "QueueManager",
    "StatusPoller",
    "GitHubClient",
    "PullRequestStore",
    "CheckRun",
    "CheckRunStatus",
    "CIStatus",
    "PullRequestDetails",
    "PullRequestRef",
    "Requirements",
    "Review",
    "ReviewState",
    "TimelineEvent",
    "UpdateOutcome",
    "UpdateResult",
    "WatchTarget",
    "build_search_filter",
    "get_approval_count",
    "get_open_pull_requests",
    "parse_github_url",
    "parse_target",
    "resolve_requirements",
    "sync_open_pull_requests",
]
