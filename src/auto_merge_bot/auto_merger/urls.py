"""Pull request URL parsing."""

import re
from urllib.parse import urlparse

from .models import PullRequestRef


def parse_github_url(url: str) -> PullRequestRef:
    """Extract owner, repository and number from a pull request URL.

    The URL path must have exactly five segments once split on "/", the
    leading slash yielding an empty first one, as in
    ``https://github.com/OWNER/REPO/pull/42``.

    Parameters
    ----------
    url : str
        Pull request or issue URL.

    Returns
    -------
    PullRequestRef
        Parsed reference.

    Raises
    ------
    ValueError
        If the URL does not have the expected shape.

    """
    path = urlparse(url).path.split("/")
    if len(path) != 5:
        raise ValueError(f"Invalid url: {url}")
    if not re.fullmatch(r"[0-9]+", path[4]):
        raise ValueError(f"Invalid url: {url} (not a pull request number)")
    return PullRequestRef(owner=path[1], repo=path[2], issue_number=int(path[4]))
