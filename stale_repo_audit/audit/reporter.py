"""Render and submit the aggregated tracking issue."""

import logging
from datetime import date

from ..config import AuditConfig
from ..github_client import GitHubClient
from ..github_client.models import TrackingIssue
from .dedup import issue_title
from .models import ReasonMessages, StaleEntry

logger = logging.getLogger(__name__)


def render_issue_body(entries: list[StaleEntry], messages: ReasonMessages) -> str:
    """Render entries as an unchecked markdown checklist, in order."""
    items = "".join(f"\n- [ ] {entry.render(messages)}\n" for entry in entries)
    return f"\n{items}\n"


def report(
    client: GitHubClient,
    entries: list[StaleEntry],
    config: AuditConfig,
    run_date: date,
    dry_run: bool = False,
) -> TrackingIssue | None:
    """Create one tracking issue listing all stale repositories.

    Args:
        client: GitHub client used to submit the issue
        entries: Stale entries collected during the run
        config: Audit settings
        run_date: Date embedded in the issue title
        dry_run: Render the issue without submitting it

    Returns:
        The created issue, or None when nothing was submitted

    Raises:
        ValueError: If the tracking repository does not exist
        github.GithubException: If the issue cannot be created
    """
    if not entries:
        logger.info("No stale repositories")
        return None

    title = issue_title(run_date, config.title_prefix)
    body = render_issue_body(entries, config.messages)

    if dry_run:
        logger.info(f"Dry run: not creating '{title}' with {len(entries)} entries")
        return None

    return client.create_issue(
        config.tracking_owner, config.tracking_repo, title=title, body=body
    )
