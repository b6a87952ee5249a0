"""Last activity detection from pull request timelines."""

from datetime import datetime

from .github_client import GitHubClient
from .models import PullRequestRef, TimelineEvent


def get_all_timeline_events(client: GitHubClient, ref: PullRequestRef) -> list[TimelineEvent]:
    """Fetch every timeline event of a pull request."""
    return client.list_timeline_events(ref)


def last_activity_date(events: list[TimelineEvent]) -> datetime | None:
    """Return the most recent event timestamp, or None if no event has one."""
    timestamps = [event.timestamp for event in events if event.timestamp is not None]
    return max(timestamps, default=None)
