"""Reconstruct links already reported in today's tracking issue."""

import logging
from datetime import date

from ..config import AuditConfig
from ..github_client import GitHubClient
from ..utils.date_parser import format_issue_date
from .models import ReasonMessages

logger = logging.getLogger(__name__)

LIST_ITEM_DELIMITER = "- "
CHECKBOX_MARKERS = ("[ ]", "[x]", "[X]")


def issue_title(run_date: date, prefix: str) -> str:
    """Build the tracking issue title for a run date."""
    return f"{prefix} - {format_issue_date(run_date)}"


def parse_issue_body(body: str | None, messages: ReasonMessages) -> list[str]:
    """Recover the repository links listed in a tracking issue body.

    Only lines starting with a list item marker are read. Reason suffixes
    are removed before whitespace, since the suffixes themselves contain
    spaces.

    Args:
        body: Markdown checklist as rendered by the reporter
        messages: Reason suffixes used when the body was rendered

    Returns:
        Links in the order they appear in the body
    """
    if not body:
        return []

    links = []
    for line in body.splitlines():
        item = line.strip()
        if not item.startswith(LIST_ITEM_DELIMITER):
            continue
        token = item.removeprefix(LIST_ITEM_DELIMITER)
        for marker in CHECKBOX_MARKERS:
            token = token.replace(marker, "")
        for suffix in messages.suffixes():
            if suffix:
                token = token.replace(suffix, "")
        token = "".join(token.split())
        if token:
            links.append(token)
    return links


def load_flagged(
    client: GitHubClient, config: AuditConfig, run_date: date
) -> dict[str, bool]:
    """Collect links listed in open tracking issues filed on the run date.

    Only open issues are listed, so links from issues closed earlier the
    same day can be reported again.

    Raises:
        ValueError: If the tracking repository does not exist
        github.GithubException: If the issues cannot be fetched
    """
    title = issue_title(run_date, config.title_prefix)
    issues = client.list_open_issues(config.tracking_owner, config.tracking_repo)

    flagged: dict[str, bool] = {}
    for issue in issues:
        if issue.title != title:
            continue
        for link in parse_issue_body(issue.body, config.messages):
            flagged[link] = True

    logger.info(
        f"Found {len(flagged)} already reported links in "
        f"{config.tracking_repository} under '{title}'"
    )
    return flagged
