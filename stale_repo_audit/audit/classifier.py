"""Classify document links and collect stale repositories for one run."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from ..config import AuditConfig
from ..github_client import GitHubClient
from .checks import check_recency, check_state, is_repository_link
from .models import AuditResult, CheckResult, CheckStatus, StaleEntry

logger = logging.getLogger(__name__)


class StaleClassifier:
    """Runs the repository checks over a sequence of links.

    Links are processed one at a time. The state check runs first; the commit
    recency check only runs when the state check did not flag the link, so a
    link gets at most one reason and state reasons take precedence.
    """

    def __init__(
        self,
        client: GitHubClient,
        config: AuditConfig,
        flagged: dict[str, bool],
        now: datetime | None = None,
    ):
        """Initialize classifier.

        Args:
            client: GitHub client used by the checks
            config: Audit settings
            flagged: Links already reported today; never re-reported
            now: Reference time for the commit window, defaults to current UTC
        """
        self.client = client
        self.config = config
        self.flagged = flagged
        self.now = now or datetime.now(timezone.utc)
        self.run_counter = 0
        self.errors = 0
        self.entries: list[StaleEntry] = []

    @property
    def limit_reached(self) -> bool:
        if self.config.unlimited:
            return False
        return self.run_counter >= self.config.run_limit

    def _is_flagged(self, result: CheckResult) -> bool:
        """Map a check result to a decision; errors are not stale."""
        if result.status == CheckStatus.ERROR:
            self.errors += 1
            return False
        return result.is_flagged

    def classify(self, link: str) -> StaleEntry | None:
        """Check a single repository link.

        Returns:
            StaleEntry if the link is stale, None otherwise
        """
        result = check_state(self.client, link, self.config)
        if not self._is_flagged(result):
            result = check_recency(self.client, link, self.config, self.now)
            if not self._is_flagged(result):
                return None

        if result.reason is None:
            raise RuntimeError(f"Flagged result for {link} has no reason")
        return StaleEntry(link=link, reason=result.reason)

    def accept(self, entry: StaleEntry) -> None:
        self.entries.append(entry)
        self.run_counter += 1

    def run(self, links: Iterable[str]) -> AuditResult:
        """Classify links in order until they run out or the run limit is hit."""
        result = AuditResult()
        seen: set[str] = set()

        for link in links:
            if self.flagged.get(link):
                logger.debug(f"Issue already exists for {link}")
                result.skipped_existing += 1
                continue

            if not is_repository_link(link, self.config.hosting_url):
                logger.debug(f"{link} non-github repo not currently handled")
                result.skipped_non_repo += 1
                continue

            if link in seen:
                continue

            if self.limit_reached:
                logger.info(f"Max number of issues reached ({self.config.run_limit})")
                result.limit_reached = True
                break

            seen.add(link)
            result.checked += 1
            entry = self.classify(link)
            if entry is not None:
                self.accept(entry)

        result.entries = list(self.entries)
        result.errors = self.errors
        return result
