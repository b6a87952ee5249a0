"""Watch target resolution and open pull request search."""

from typing import Any

from ..config import WatchSettings
from ..utils.logging import log_debug, log_error, log_info
from .github_client import GitHubClient
from .models import WatchTarget
from .store import PullRequestStore

BASE_QUERY = "is:pr is:open draft:false"


def parse_target(target: str, owner: str) -> WatchTarget | None:
    """Resolve a watch target against the current repository owner.

    ``org/repo`` targets are kept only when ``org`` is the owner. A bare name
    equal to the owner selects the whole organization; any other bare name is
    read as a repository of the owner.

    Parameters
    ----------
    target : str
        Target string, "org" or "org/repo".
    owner : str
        Login of the current repository owner.

    Returns
    -------
    WatchTarget or None
        Resolved target, or None if it belongs to another organization.

    Raises
    ------
    ValueError
        If owner is empty.

    """
    if not owner:
        raise ValueError("No repository owner has been found, the target cannot be parsed.")

    org_parsed, _, repo_parsed = target.strip().partition("/")
    if repo_parsed:
        if org_parsed != owner:
            return None
        return WatchTarget(org=owner, repo=repo_parsed)
    if org_parsed == owner:
        return WatchTarget(org=owner)
    return WatchTarget(org=owner, repo=org_parsed)


def build_search_filter(targets: WatchSettings, owner: str) -> list[str]:
    """Build search qualifiers for monitored and ignored targets.

    An empty monitor list defaults to the owner's organization.

    Raises
    ------
    ValueError
        If monitor targets are configured but none of them belongs to the
        owner. An unscoped search would match every open pull request.

    """
    monitor = list(targets.monitor) or [owner]
    terms = []
    for target in monitor:
        parsed = parse_target(target, owner)
        if parsed:
            terms.append(parsed.to_query_term())
    if not terms:
        message = (
            f"None of the monitor targets ({', '.join(monitor)}) belong to {owner}, "
            "refusing to search without a scope."
        )
        log_error(message)
        raise ValueError(message)
    for target in targets.ignore:
        parsed = parse_target(target, owner)
        if parsed:
            terms.append(parsed.to_query_term(negate=True))
    return terms


def get_open_pull_requests(
    client: GitHubClient, targets: WatchSettings, owner: str
) -> list[dict[str, Any]]:
    """Return every open, non-draft pull request matching the targets.

    Parameters
    ----------
    client : GitHubClient
        GitHub client.
    targets : WatchSettings
        Monitor and ignore lists.
    owner : str
        Login of the current repository owner.

    Returns
    -------
    list[dict[str, Any]]
        Search result items.

    Raises
    ------
    ValueError
        If no monitor target belongs to the owner.
    subprocess.CalledProcessError
        If the search fails. The error is logged first.

    """
    search_filter = build_search_filter(targets, owner)
    query = f"{BASE_QUERY} {' '.join(search_filter)}".strip()
    log_debug(f"Searching pull requests with query: {query}")
    try:
        return client.search_issues(query)
    except Exception as e:
        log_error(
            f"Error getting open pull-requests for targets: {', '.join(search_filter)}. {e}"
        )
        raise


def sync_open_pull_requests(
    client: GitHubClient, store: PullRequestStore, targets: WatchSettings, owner: str
) -> list[str]:
    """Track every open pull request matching the watch settings.

    Parameters
    ----------
    client : GitHubClient
        GitHub client.
    store : PullRequestStore
        Persistent list of tracked pull requests.
    targets : WatchSettings
        Monitor and ignore lists.
    owner : str
        Login of the current repository owner.

    Returns
    -------
    list[str]
        URLs that were not tracked before.

    Raises
    ------
    ValueError
        If no monitor target belongs to the owner.
    subprocess.CalledProcessError
        If the search fails.

    """
    added = []
    for item in get_open_pull_requests(client, targets, owner):
        url = item.get("html_url")
        if not url:
            continue
        if store.add(url):
            log_debug(f"Now tracking {url}")
            added.append(url)
    log_info(f"Tracking {len(added)} new pull request(s)")
    return added
