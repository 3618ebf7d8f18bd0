"""Tests for the stale classifier and run orchestration."""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import httpx
import pytest

from stale_repo_audit.audit.classifier import StaleClassifier
from stale_repo_audit.audit.models import (
    CheckResult,
    CheckStatus,
    StaleEntry,
    StaleReason,
)
from stale_repo_audit.config import AuditConfig
from stale_repo_audit.github_client.models import RepositoryState

NOW = datetime(2024, 3, 5, tzinfo=timezone.utc)


def _links(count: int) -> list[str]:
    return [f"https://github.com/acme/repo-{i}" for i in range(count)]


class TestClassify:
    """Test classification of a single link."""

    def test_moved_permanently_skips_commit_check(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a 301 is reported without checking commits."""
        mock_client.get_repository_state.return_value = RepositoryState(status_code=301)
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        entry = classifier.classify("https://github.com/acme/moved")

        assert entry == StaleEntry(
            link="https://github.com/acme/moved", reason=StaleReason.MOVED_PERMANENTLY
        )
        assert entry.render(audit_config.messages) == (
            "https://github.com/acme/moved status code 301 received"
        )
        mock_client.get_commits_since.assert_not_called()

    def test_archived_with_recent_commits(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that archived repositories are flagged despite recent commits."""
        mock_client.get_repository_state.return_value = RepositoryState(
            status_code=200, archived=True
        )
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        entry = classifier.classify("https://github.com/acme/archived")

        assert entry is not None
        assert entry.render(audit_config.messages) == (
            "https://github.com/acme/archived repository has been archived"
        )

    def test_inactive_is_bare_link(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a repository without recent commits renders bare."""
        mock_client.get_commits_since.return_value = []
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        entry = classifier.classify("https://github.com/acme/quiet")

        assert entry is not None
        assert entry.reason == StaleReason.INACTIVE
        assert entry.render(audit_config.messages) == "https://github.com/acme/quiet"

    def test_healthy_repository(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that healthy repositories produce no entry."""
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        assert classifier.classify("https://github.com/acme/healthy") is None
        mock_client.get_commits_since.assert_called_once()

    def test_state_error_falls_back_to_commit_check(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a failed state check is treated as not flagged."""
        mock_client.get_repository_state.side_effect = httpx.ConnectError("refused")
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        entry = classifier.classify("https://github.com/acme/flaky")

        assert entry is None
        assert classifier.errors == 1
        mock_client.get_commits_since.assert_called_once()

    def test_errors_never_flag(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that failing both checks does not mark a link stale."""
        mock_client.get_repository_state.side_effect = httpx.ConnectError("refused")
        mock_client.get_commits_since.side_effect = ValueError("bad payload")
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        assert classifier.classify("https://github.com/acme/flaky") is None
        assert classifier.errors == 2

    def test_flagged_result_without_reason_raises(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a flagged result missing its reason is not reported."""
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        with patch(
            "stale_repo_audit.audit.classifier.check_state",
            return_value=CheckResult(status=CheckStatus.FLAGGED),
        ):
            with pytest.raises(RuntimeError, match="has no reason"):
                classifier.classify("https://github.com/acme/tool")


class TestRun:
    """Test the orchestration over a list of links."""

    def test_already_flagged_links_are_skipped(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that links in today's issue are never re-reported."""
        mock_client.get_repository_state.return_value = RepositoryState(status_code=404)
        flagged = {"https://github.com/acme/repo-0": True}
        classifier = StaleClassifier(mock_client, audit_config, flagged, now=NOW)

        result = classifier.run(_links(2))

        assert [e.link for e in result.entries] == ["https://github.com/acme/repo-1"]
        assert result.skipped_existing == 1
        mock_client.get_repository_state.assert_called_once_with("acme", "repo-1")

    def test_non_repository_links_make_no_calls(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that non-repository links are skipped without API calls."""
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        result = classifier.run(
            [
                "https://github.com/acme/tool/blob/main/docs/guide.md",
                "https://example.com/project",
            ]
        )

        assert result.entries == []
        assert result.skipped_non_repo == 2
        assert result.checked == 0
        mock_client.get_repository_state.assert_not_called()
        mock_client.get_commits_since.assert_not_called()

    def test_run_limit_caps_entries(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that the run stops once the limit of new entries is reached."""
        mock_client.get_commits_since.return_value = []
        config = audit_config.model_copy(update={"run_limit": 3})
        classifier = StaleClassifier(mock_client, config, {}, now=NOW)

        result = classifier.run(_links(10))

        assert len(result.entries) == 3
        assert classifier.run_counter == 3
        assert result.checked == 3
        assert result.limit_reached

    def test_limit_counts_only_flagged_links(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that healthy links do not use up the run limit."""
        mock_client.get_commits_since.side_effect = [[{"sha": "a"}], [], [], []]
        config = audit_config.model_copy(update={"run_limit": 2})
        classifier = StaleClassifier(mock_client, config, {}, now=NOW)

        result = classifier.run(_links(4))

        assert [e.link for e in result.entries] == [
            "https://github.com/acme/repo-1",
            "https://github.com/acme/repo-2",
        ]
        assert result.checked == 3

    def test_unlimited_run(self, mock_client: Mock, audit_config: AuditConfig) -> None:
        """Test that a limit of -1 disables the cap."""
        mock_client.get_commits_since.return_value = []
        config = audit_config.model_copy(update={"run_limit": -1})
        classifier = StaleClassifier(mock_client, config, {}, now=NOW)

        result = classifier.run(_links(25))

        assert len(result.entries) == 25
        assert not result.limit_reached

    def test_zero_limit_checks_nothing(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a limit of zero stops before the first check."""
        config = audit_config.model_copy(update={"run_limit": 0})
        classifier = StaleClassifier(mock_client, config, {}, now=NOW)

        result = classifier.run(_links(3))

        assert result.entries == []
        assert result.limit_reached
        mock_client.get_repository_state.assert_not_called()

    def test_duplicate_links_checked_once(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test that a link listed twice produces one entry."""
        mock_client.get_repository_state.return_value = RepositoryState(
            status_code=200, archived=True
        )
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        result = classifier.run(["https://github.com/acme/dup"] * 2)

        assert len(result.entries) == 1
        mock_client.get_repository_state.assert_called_once()

    def test_mixed_document(
        self, mock_client: Mock, audit_config: AuditConfig
    ) -> None:
        """Test reasons, order and error counting across a run."""
        states = {
            "gone": RepositoryState(status_code=404),
            "renamed": RepositoryState(status_code=301),
            "frozen": RepositoryState(status_code=200, archived=True),
        }

        def state(owner: str, name: str) -> RepositoryState:
            if name == "broken":
                raise httpx.ReadTimeout("timed out")
            return states.get(name, RepositoryState(status_code=200))

        def commits(owner: str, name: str, since: datetime) -> list[dict]:
            return [] if name == "quiet" else [{"sha": "abc"}]

        mock_client.get_repository_state.side_effect = state
        mock_client.get_commits_since.side_effect = commits
        classifier = StaleClassifier(mock_client, audit_config, {}, now=NOW)

        result = classifier.run(
            [
                "https://github.com/acme/gone",
                "https://github.com/acme/healthy",
                "https://github.com/acme/broken",
                "https://github.com/acme/quiet",
                "https://github.com/acme/renamed",
                "https://github.com/acme/frozen",
            ]
        )

        assert [(e.link, e.reason) for e in result.entries] == [
            ("https://github.com/acme/gone", StaleReason.DEAD_LINK),
            ("https://github.com/acme/quiet", StaleReason.INACTIVE),
            ("https://github.com/acme/renamed", StaleReason.MOVED_PERMANENTLY),
            ("https://github.com/acme/frozen", StaleReason.ARCHIVED),
        ]
        assert result.checked == 6
        assert result.errors == 1
