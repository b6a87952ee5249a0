"""Status poller gating merges on CI results."""

import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

from ..utils.logging import log_debug, log_error, log_info, log_warning
from .github_client import GitHubClient
from .models import CheckRun, CheckSuite, CIStatus, PullRequestRef


class StatusPoller:
    """Poll check runs of a commit until CI settles.

    Check runs named after this bot's own workflow are ignored, since that
    run is still in progress while the poller executes.

    Parameters
    ----------
    client : GitHubClient
        GitHub client.
    workflow_name : str
        Name of the check run belonging to this automation.
    check_interval : float, optional
        Seconds to wait between attempts (default=60).
    max_attempts : int, optional
        Maximum number of attempts (default=100).
    sleep : Callable[[float], None], optional
        Sleep function, replaceable in tests (default=time.sleep).
    max_workers : int, optional
        Threads used to fetch check runs of several suites at once (default=8).

    Attributes
    ----------
    client : GitHubClient
        GitHub client.
    workflow_name : str
        Name of the check run belonging to this automation.
    check_interval : float
        Seconds between attempts.
    max_attempts : int
        Maximum number of attempts.

    """

    def __init__(
        self,
        client: GitHubClient,
        workflow_name: str,
        check_interval: float = 60,
        max_attempts: int = 100,
        sleep: Callable[[float], None] = time.sleep,
        max_workers: int = 8,
    ):
        """Initialize status poller.

        Parameters
        ----------
        client : GitHubClient
            GitHub client.
        workflow_name : str
            Name of the check run belonging to this automation.
        check_interval : float, optional
            Seconds to wait between attempts (default=60).
        max_attempts : int, optional
            Maximum number of attempts (default=100).
        sleep : Callable[[float], None], optional
            Sleep function (default=time.sleep).
        max_workers : int, optional
            Threads for concurrent check run fetches (default=8).

        """
        self.client = client
        self.workflow_name = workflow_name
        self.check_interval = check_interval
        self.max_attempts = max_attempts
        self._sleep = sleep
        self._max_workers = max_workers

    def _fetch_check_runs(
        self, ref: PullRequestRef, suites: list[CheckSuite]
    ) -> list[CheckRun]:
        """Fetch check runs for every suite concurrently, minus our own."""
        for suite in suites:
            log_debug(
                f"Checking runs for suite {suite.id}: {suite.url}, "
                f"and filter out {self.workflow_name}"
            )
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            results = list(
                pool.map(lambda suite: self.client.list_check_runs(ref, suite.id), suites)
            )
        return [
            run
            for runs in results
            for run in runs
            if run.name != self.workflow_name
        ]

    @staticmethod
    def evaluate(runs: list[CheckRun]) -> CIStatus:
        """Reduce check runs to a single CI status.

        Parameters
        ----------
        runs : list[CheckRun]
            Check runs, already excluding this bot's own run.

        Returns
        -------
        CIStatus
            INDETERMINATE if any run is unfinished, RED if any failed,
            GREEN otherwise.

        """
        if any(not run.is_completed for run in runs):
            return CIStatus.INDETERMINATE
        for run in runs:
            log_debug(f"Workflow {run.name}/{run.id} {run.url}: {run.status.value},{run.conclusion}")
        if any(run.is_failure for run in runs):
            return CIStatus.RED
        return CIStatus.GREEN

    def poll(self, ref: PullRequestRef, sha: str) -> CIStatus:
        """Wait for CI on a commit to finish.

        Parameters
        ----------
        ref : PullRequestRef
            Pull request whose repository holds the commit.
        sha : str
            Commit to inspect.

        Returns
        -------
        CIStatus
            GREEN or RED once settled, INDETERMINATE if attempts ran out,
            RED if the check data could not be fetched.

        """
        try:
            suites = self.client.list_check_suites(ref, sha)
            status = CIStatus.INDETERMINATE

            for attempt in range(1, self.max_attempts + 1):
                status = self.evaluate(self._fetch_check_runs(ref, suites))
                if status is not CIStatus.INDETERMINATE:
                    return status

                log_info(
                    f"Not all CI runs were complete, will retry... "
                    f"(attempt {attempt}/{self.max_attempts})"
                )
                if attempt < self.max_attempts:
                    self._sleep(self.check_interval)

            log_warning(
                f"CI for {ref} ({sha}) still running after {self.max_attempts} attempts"
            )
            return status

        except Exception as e:
            log_error(f"Error checking CI status: {e}")
            return CIStatus.RED

    def is_ci_green(self, ref: PullRequestRef, sha: str) -> bool:
        """Return True only if every check run completed without failure."""
        return self.poll(ref, sha) is CIStatus.GREEN
