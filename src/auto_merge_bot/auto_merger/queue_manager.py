"""Queue manager for evaluating tracked pull requests."""

from collections.abc import Callable
from datetime import UTC, datetime

from ..config import AutoMergeConfig
from ..utils.durations import is_past_due
from ..utils.logging import log_debug, log_error, log_info, log_success, log_warning
from .github_client import GitHubClient
from .models import PullRequestRef, UpdateOutcome, UpdateResult
from .requirements import get_approval_count, resolve_requirements
from .status_poller import StatusPoller
from .store import PullRequestStore
from .timeline import get_all_timeline_events, last_activity_date
from .urls import parse_github_url


def _utcnow() -> datetime:
    return datetime.now(UTC)


class QueueManager:
    """Process the queue of tracked pull requests one at a time.

    Each pull request is evaluated independently: an error on one is logged
    and the next one is processed.

    Parameters
    ----------
    client : GitHubClient
        Client for GitHub operations.
    store : PullRequestStore
        Persistent list of tracked pull requests.
    config : AutoMergeConfig
        Merge timeouts, approval counts and watch targets.
    status_poller : StatusPoller
        CI gate.
    now : Callable[[], datetime], optional
        Clock returning the current aware datetime (default=UTC now).

    Attributes
    ----------
    client : GitHubClient
        Client for GitHub operations.
    store : PullRequestStore
        Persistent list of tracked pull requests.
    config : AutoMergeConfig
        Auto-merge settings.
    status_poller : StatusPoller
        CI gate.

    """

    def __init__(
        self,
        client: GitHubClient,
        store: PullRequestStore,
        config: AutoMergeConfig,
        status_poller: StatusPoller,
        now: Callable[[], datetime] = _utcnow,
    ):
        """Initialize queue manager.

        Parameters
        ----------
        client : GitHubClient
            Client for GitHub operations.
        store : PullRequestStore
            Persistent list of tracked pull requests.
        config : AutoMergeConfig
            Auto-merge settings.
        status_poller : StatusPoller
            CI gate.
        now : Callable[[], datetime], optional
            Clock (default=UTC now).

        """
        self.client = client
        self.store = store
        self.config = config
        self.status_poller = status_poller
        self._now = now

    def update_pull_requests(self) -> list[UpdateResult]:
        """Evaluate every tracked pull request and merge those that are ready.

        Returns
        -------
        list[UpdateResult]
            One result per tracked pull request, in processing order.

        """
        pull_requests = self.store.list_urls()
        if not pull_requests:
            log_info("Nothing to do.")
            return []

        results = []
        for url in pull_requests:
            try:
                result = self.process_pull_request(url)
            except Exception as e:
                log_error(f"Could not process pull-request {url} for auto-merge: {e}")
                result = UpdateResult(url, UpdateOutcome.ERROR, str(e))
            results.append(result)
        return results

    def process_pull_request(self, url: str) -> UpdateResult:
        """Evaluate a single tracked pull request.

        Parameters
        ----------
        url : str
            Tracked pull request URL.

        Returns
        -------
        UpdateResult
            What was done with the pull request.

        Raises
        ------
        ValueError
            If the URL is malformed or the configured timeout is invalid.
        subprocess.CalledProcessError
            If fetching details, the timeline, or merging fails.

        """
        ref = parse_github_url(url)
        details = self.client.get_pull_request(ref)
        log_debug(f"Processing pull-request {url}...")

        if details.is_finished:
            log_info(f"The pull request {url} is already merged or closed, nothing to do.")
            try:
                self.store.delete(url)
            except Exception as e:
                log_error(f"Failed to delete pull-request {url}: {e}")
            return UpdateResult(url, UpdateOutcome.REMOVED)

        events = get_all_timeline_events(self.client, ref)
        last_activity = last_activity_date(events)
        if last_activity is None:
            log_warning(f"No dated timeline activity found for {url}, treating it as past due.")

        requirements = resolve_requirements(self.config, details.author_association)
        log_debug(
            f"Requirements according to association {details.author_association}: "
            f"{requirements} with last activity date: {last_activity}"
        )

        if not is_past_due(last_activity, requirements.merge_timeout, self._now()):
            log_info(f"PR {url} has activity up until ({last_activity}), nothing to do.")
            return UpdateResult(url, UpdateOutcome.WAITING)

        approvals = get_approval_count(self.client, ref)
        if approvals < requirements.required_approval_count:
            log_info(
                f"Pull-request {url} does not have sufficient reviewer approvals to be "
                f"merged ({approvals}/{requirements.required_approval_count})."
            )
            return UpdateResult(url, UpdateOutcome.INSUFFICIENT_APPROVALS)

        if not self.status_poller.is_ci_green(ref, details.head_sha):
            log_info(
                f"Pull-request {url} (sha: {details.head_sha}) does not pass all CI tests, "
                "won't merge."
            )
            return UpdateResult(url, UpdateOutcome.CI_FAILED)

        log_info(
            f"Pull-request {url} is past its due date ({requirements.merge_timeout} "
            f"after {last_activity}), will merge."
        )
        self.merge_pull_request(url, ref)
        return UpdateResult(url, UpdateOutcome.MERGED)

    def merge_pull_request(self, url: str, ref: PullRequestRef) -> None:
        """Stop tracking a pull request, then merge it.

        Raises
        ------
        subprocess.CalledProcessError
            If GitHub refuses the merge.

        """
        self.store.delete(url)
        self.client.merge_pull_request(ref)
        log_success(f"Merged {ref}")

