"""Repository state and commit recency checks.

Both checks fail open: when the GitHub API cannot answer, the result is an
error, which the classifier treats as not stale.
"""

import logging
import re
from datetime import datetime

import httpx

from ..config import AuditConfig
from ..github_client import GitHubClient
from ..github_client.models import RepositoryState
from ..utils.date_parser import stale_cutoff
from .models import CheckResult, StaleReason

logger = logging.getLogger(__name__)

SEGMENT_PATTERN = r"[A-Za-z0-9._-]+"

# Failures that make a check inconclusive instead of stale
CHECK_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


def is_repository_link(link: str, hosting_url: str) -> bool:
    """Check that a link points at a repository root (owner/name only)."""
    prefix = re.escape(hosting_url.rstrip("/"))
    pattern = rf"{prefix}/{SEGMENT_PATTERN}/{SEGMENT_PATTERN}"
    return re.fullmatch(pattern, link) is not None


def split_repository_link(link: str, hosting_url: str) -> tuple[str, str]:
    """Strip the hosting prefix and return (owner, name).

    Raises:
        ValueError: If the link is not a repository root on the hosting URL
    """
    prefix = hosting_url.rstrip("/") + "/"
    if not link.startswith(prefix):
        raise ValueError(f"{link} is not hosted on {hosting_url}")

    parts = link[len(prefix) :].split("/")
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"{link} is not a repository link")
    return parts[0], parts[1]


def _state_reason(state: RepositoryState) -> StaleReason | None:
    if state.status_code == 301:
        return StaleReason.MOVED_PERMANENTLY
    if state.status_code == 302:
        return StaleReason.FOUND_REDIRECT
    if state.status_code >= 400:
        return StaleReason.DEAD_LINK
    if state.archived:
        return StaleReason.ARCHIVED
    return None


def check_state(client: GitHubClient, link: str, config: AuditConfig) -> CheckResult:
    """Flag moved, dead and archived repositories.

    The first matching condition wins: 301, 302, any status >= 400, then
    the archived flag.
    """
    try:
        owner, name = split_repository_link(link, config.hosting_url)
        state = client.get_repository_state(owner, name)
    except CHECK_ERRORS as e:
        logger.warning(f"Failed at repository {link}: {e}")
        return CheckResult.error(str(e))

    reason = _state_reason(state)
    if reason is None:
        return CheckResult.not_flagged()

    logger.info(f"{link} flagged as {reason.value} (status {state.status_code})")
    return CheckResult.flagged(reason)


def check_recency(
    client: GitHubClient, link: str, config: AuditConfig, now: datetime
) -> CheckResult:
    """Flag repositories without commits inside the staleness window."""
    since = stale_cutoff(now, config.stale_years)
    try:
        owner, name = split_repository_link(link, config.hosting_url)
        commits = client.get_commits_since(owner, name, since)
    except CHECK_ERRORS as e:
        logger.warning(f"Failed at repository {link}: {e}")
        return CheckResult.error(str(e))

    if commits:
        return CheckResult.not_flagged()

    logger.info(f"{link} has not had a commit in a while")
    return CheckResult.flagged(StaleReason.INACTIVE)
