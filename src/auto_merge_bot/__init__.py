"""Auto Merge Bot - merge pull requests once they are approved, green and idle."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("auto-merge-bot")
except PackageNotFoundError:
    # Package not installed, use fallback
    __version__ = "0.1.0.dev"

from .auto_merger import (
    GitHubClient,
    PullRequestStore,
    QueueManager,
    StatusPoller,
    parse_github_url,
)
from .config import AutoMergeConfig, load_config

__all__ = [
    "AutoMergeConfig",
    "GitHubClient",
    "PullRequestStore",
    "QueueManager",
    "StatusPoller",
    "load_config",
    "parse_github_url",
    "__version__",
]
