"""Tests for API payload parsing and last activity detection."""

from datetime import UTC, datetime

import pytest

from auto_merge_bot.auto_merger.models import (
    CheckRun,
    CheckRunStatus,
    PullRequestDetails,
    ReviewState,
    TimelineEvent,
    WatchTarget,
    parse_timestamp,
)
from auto_merge_bot.auto_merger.timeline import last_activity_date


class TestTimelineEvent:
    """Test timestamp extraction from timeline entries."""

    @pytest.mark.parametrize(
        "field", ["created_at", "updated_at", "timestamp", "commented_at"]
    )
    def test_each_timestamp_field(self, field):
        """Test every supported field is read."""
        event = TimelineEvent.from_api({"event": "x", field: "2025-06-01T10:00:00Z"})
        assert event.timestamp == datetime(2025, 6, 1, 10, tzinfo=UTC)

    def test_first_present_field_wins(self):
        """Test created_at is preferred over later fields."""
        event = TimelineEvent.from_api(
            {"created_at": "2025-01-01T00:00:00Z", "updated_at": "2025-06-01T00:00:00Z"}
        )
        assert event.timestamp == datetime(2025, 1, 1, tzinfo=UTC)

    def test_empty_field_is_skipped(self):
        """Test empty values fall through to the next field."""
        event = TimelineEvent.from_api({"created_at": "", "timestamp": "2025-01-02T00:00:00Z"})
        assert event.timestamp == datetime(2025, 1, 2, tzinfo=UTC)

    def test_no_timestamp(self):
        """Test events without dates have no timestamp."""
        assert TimelineEvent.from_api({"event": "committed"}).timestamp is None

    def test_unparsable_timestamp(self):
        """Test invalid dates are discarded."""
        assert TimelineEvent.from_api({"created_at": "yesterday"}).timestamp is None


def test_parse_timestamp_normalizes_to_utc():
    """Test offsets are converted and naive values assumed UTC."""
    assert parse_timestamp("2025-06-01T12:00:00+02:00") == datetime(2025, 6, 1, 10, tzinfo=UTC)
    assert parse_timestamp("2025-06-01T12:00:00") == datetime(2025, 6, 1, 12, tzinfo=UTC)
    assert parse_timestamp(None) is None


def test_last_activity_date():
    """Test the latest valid timestamp is chosen."""
    events = [
        TimelineEvent("a", datetime(2025, 1, 1, tzinfo=UTC)),
        TimelineEvent("b", None),
        TimelineEvent("c", datetime(2025, 3, 1, tzinfo=UTC)),
    ]
    assert last_activity_date(events) == datetime(2025, 3, 1, tzinfo=UTC)


def test_last_activity_date_without_timestamps():
    """Test no valid timestamp yields None."""
    assert last_activity_date([]) is None
    assert last_activity_date([TimelineEvent("a", None)]) is None


def test_enum_parsing_fallbacks():
    """Test unrecognized states map to UNKNOWN."""
    assert ReviewState.parse("approved") is ReviewState.APPROVED
    assert ReviewState.parse("SOMETHING_NEW") is ReviewState.UNKNOWN
    assert ReviewState.parse(None) is ReviewState.UNKNOWN
    assert CheckRunStatus.parse("COMPLETED") is CheckRunStatus.COMPLETED
    assert CheckRunStatus.parse(None) is CheckRunStatus.UNKNOWN


def test_check_run_from_api():
    """Test check run fields and predicates."""
    run = CheckRun.from_api(
        {"id": 3, "name": "tests", "status": "completed", "conclusion": "failure"}
    )
    assert run.is_completed and run.is_failure


def test_pull_request_details_finished():
    """Test merged or closed pull requests are finished."""
    base = {"number": 1, "head": {"sha": "s"}}
    assert not PullRequestDetails.from_api(base).is_finished
    assert PullRequestDetails.from_api({**base, "merged": True}).is_finished
    assert PullRequestDetails.from_api({**base, "closed_at": "2025-01-01T00:00:00Z"}).is_finished
    assert PullRequestDetails.from_api(base).author_association == "NONE"


def test_watch_target_query_terms():
    """Test qualifier rendering."""
    assert WatchTarget("o", "r").to_query_term() == "repo:o/r"
    assert WatchTarget("o").to_query_term(negate=True) == "-org:o"
