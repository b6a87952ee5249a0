"""Data models for pull request evaluation.

API payloads are converted into these types as soon as they are fetched, so
the rest of the package never probes raw dicts for optional fields.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

COLLABORATOR_ASSOCIATIONS = frozenset({"COLLABORATOR", "MEMBER", "OWNER"})
TIMELINE_TIMESTAMP_FIELDS = ("created_at", "updated_at", "timestamp", "commented_at")


class ReviewState(str, Enum):
    """State of a pull request review."""

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def parse(cls, value: str | None) -> "ReviewState":
        """Parse a review state, mapping unrecognized values to UNKNOWN."""
        try:
            return cls(str(value).upper())
        except ValueError:
            return cls.UNKNOWN


class CheckRunStatus(str, Enum):
    """Lifecycle status of a check run."""

    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    WAITING = "waiting"
    REQUESTED = "requested"
    PENDING = "pending"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> "CheckRunStatus":
        """Parse a check run status, mapping unrecognized values to UNKNOWN."""
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.UNKNOWN


class CIStatus(str, Enum):
    """Outcome of a CI poll attempt."""

    INDETERMINATE = "indeterminate"
    GREEN = "green"
    RED = "red"


class UpdateOutcome(str, Enum):
    """What happened to a tracked pull request during an update run."""

    REMOVED = "removed"
    MERGED = "merged"
    WAITING = "waiting"
    INSUFFICIENT_APPROVALS = "insufficient_approvals"
    CI_FAILED = "ci_failed"
    ERROR = "error"


@dataclass(frozen=True)
class PullRequestRef:
    """Owner, repository and number identifying a pull request."""

    owner: str
    repo: str
    issue_number: int

    @property
    def full_name(self) -> str:
        """Repository in owner/repo form."""
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.full_name}#{self.issue_number}"


@dataclass(frozen=True)
class Requirements:
    """Merge requirements for a pull request author."""

    merge_timeout: str
    required_approval_count: int


@dataclass(frozen=True)
class WatchTarget:
    """A monitored or ignored organization, optionally narrowed to a repo."""

    org: str
    repo: str | None = None

    def to_query_term(self, negate: bool = False) -> str:
        """Render as a search qualifier such as ``repo:org/name`` or ``-org:org``."""
        prefix = "-" if negate else ""
        if self.repo:
            return f"{prefix}repo:{self.org}/{self.repo}"
        return f"{prefix}org:{self.org}"


@dataclass(frozen=True)
class PullRequestDetails:
    """The subset of pull request fields used to decide on a merge."""

    number: int
    state: str
    merged: bool
    closed_at: str | None
    author_association: str
    head_sha: str
    html_url: str
    draft: bool = False

    @property
    def is_finished(self) -> bool:
        """True if the pull request is merged or closed."""
        return self.merged or bool(self.closed_at)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PullRequestDetails":
        """Build from a ``GET /repos/{owner}/{repo}/pulls/{number}`` payload.

        Raises
        ------
        KeyError
            If a required field is missing.

        """
        return cls(
            number=int(data["number"]),
            state=data.get("state", ""),
            merged=bool(data.get("merged")),
            closed_at=data.get("closed_at"),
            author_association=data.get("author_association") or "NONE",
            head_sha=data["head"]["sha"],
            html_url=data.get("html_url", ""),
            draft=bool(data.get("draft")),
        )


@dataclass(frozen=True)
class Review:
    """A pull request review."""

    id: int
    state: ReviewState
    user: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Review":
        """Build from a review list entry."""
        return cls(
            id=int(data.get("id", 0)),
            state=ReviewState.parse(data.get("state")),
            user=(data.get("user") or {}).get("login", ""),
        )


@dataclass(frozen=True)
class CheckSuite:
    """A check suite attached to a commit."""

    id: int
    url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CheckSuite":
        """Build from a check suite list entry."""
        return cls(id=int(data["id"]), url=data.get("url", ""))


@dataclass(frozen=True)
class CheckRun:
    """A single CI job and its result."""

    id: int
    name: str
    status: CheckRunStatus
    conclusion: str | None = None
    url: str = ""

    @property
    def is_completed(self) -> bool:
        """True if the run has finished."""
        return self.status is CheckRunStatus.COMPLETED

    @property
    def is_failure(self) -> bool:
        """True if the run finished with a failure conclusion."""
        return self.conclusion == "failure"

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "CheckRun":
        """Build from a check run list entry."""
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name", ""),
            status=CheckRunStatus.parse(data.get("status")),
            conclusion=data.get("conclusion"),
            url=data.get("url", ""),
        )


def parse_timestamp(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp into an aware UTC datetime.

    Returns None for empty or unparsable values.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


@dataclass(frozen=True)
class TimelineEvent:
    """An issue timeline event reduced to its kind and timestamp."""

    event: str
    timestamp: datetime | None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "TimelineEvent":
        """Build from a timeline entry.

        Timeline entries carry their time under different keys depending on
        the event kind; the first non-empty one is used.
        """
        raw = next(
            (data[field] for field in TIMELINE_TIMESTAMP_FIELDS if data.get(field)),
            None,
        )
        return cls(event=data.get("event", ""), timestamp=parse_timestamp(raw))


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of processing one tracked pull request."""

    url: str
    outcome: UpdateOutcome
    message: str = ""
