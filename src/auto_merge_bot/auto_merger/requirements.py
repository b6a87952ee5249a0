"""Merge requirements and review approvals."""

from ..config import AutoMergeConfig
from ..utils.logging import log_debug, log_error
from .github_client import GitHubClient
from .models import (
    COLLABORATOR_ASSOCIATIONS,
    PullRequestRef,
    Requirements,
    ReviewState,
)


def resolve_requirements(config: AutoMergeConfig, author_association: str) -> Requirements:
    """Pick the merge timeout and approval count for an author.

    Owners, members and collaborators get the collaborator settings; every
    other association gets the contributor settings.
    """
    if author_association in COLLABORATOR_ASSOCIATIONS:
        return Requirements(
            merge_timeout=config.merge_timeout.collaborator,
            required_approval_count=config.approvals_required.collaborator,
        )
    return Requirements(
        merge_timeout=config.merge_timeout.contributor,
        required_approval_count=config.approvals_required.contributor,
    )


def get_approval_count(client: GitHubClient, ref: PullRequestRef) -> int:
    """Count approving reviews on a pull request.

    Parameters
    ----------
    client : GitHubClient
        GitHub client.
    ref : PullRequestRef
        Pull request to inspect.

    Returns
    -------
    int
        Number of APPROVED reviews, or 0 if reviews could not be fetched.

    """
    try:
        reviews = client.list_reviews(ref)
    except Exception as e:
        log_error(f"Error fetching reviews' approvals for {ref}: {e}")
        return 0

    count = sum(1 for review in reviews if review.state is ReviewState.APPROVED)
    log_debug(f"{ref} has {count} approval(s) out of {len(reviews)} review(s)")
    return count
