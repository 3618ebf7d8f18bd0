"""Pydantic models for stale repository classification."""

from enum import Enum

from pydantic import BaseModel, Field


class StaleReason(str, Enum):
    """Why a repository link was flagged."""

    MOVED_PERMANENTLY = "moved_permanently"
    FOUND_REDIRECT = "found_redirect"
    DEAD_LINK = "dead_link"
    ARCHIVED = "archived"
    INACTIVE = "inactive"


class CheckStatus(str, Enum):
    """Outcome of a single repository check."""

    FLAGGED = "flagged"
    NOT_FLAGGED = "not_flagged"
    ERROR = "error"


class CheckResult(BaseModel):
    """Result of the state or commit recency check for one link."""

    status: CheckStatus = Field(description="Outcome of the check")
    reason: StaleReason | None = Field(
        None, description="Reason the link was flagged (flagged results only)"
    )
    detail: str | None = Field(
        None, description="Error description when the check could not finish"
    )

    @classmethod
    def flagged(cls, reason: StaleReason) -> "CheckResult":
        return cls(status=CheckStatus.FLAGGED, reason=reason)

    @classmethod
    def not_flagged(cls) -> "CheckResult":
        return cls(status=CheckStatus.NOT_FLAGGED)

    @classmethod
    def error(cls, detail: str) -> "CheckResult":
        return cls(status=CheckStatus.ERROR, detail=detail)

    @property
    def is_flagged(self) -> bool:
        """Errors count as not flagged."""
        return self.status == CheckStatus.FLAGGED


class ReasonMessages(BaseModel):
    """Suffixes appended to a link in the tracking issue.

    The same strings are stripped again when an existing issue body is parsed,
    so changing them breaks deduplication against issues filed earlier the
    same day.
    """

    moved_permanently: str = " status code 301 received"
    found_redirect: str = " status code 302 received"
    dead_link: str = (
        " this repository might no longer exist! (status code >= 400 returned)"
    )
    archived: str = " repository has been archived"

    def suffix_for(self, reason: StaleReason) -> str:
        """Return the suffix for a reason; inactive repositories have none."""
        if reason == StaleReason.INACTIVE:
            return ""
        return str(getattr(self, reason.value))

    def suffixes(self) -> list[str]:
        return [
            self.moved_permanently,
            self.found_redirect,
            self.dead_link,
            self.archived,
        ]


class StaleEntry(BaseModel):
    """A repository link flagged as stale during a run."""

    link: str = Field(description="Repository URL as it appears in the document")
    reason: StaleReason = Field(description="Why the link was flagged")

    def render(self, messages: ReasonMessages) -> str:
        """Render the checklist text for this entry."""
        return f"{self.link}{messages.suffix_for(self.reason)}"


class AuditResult(BaseModel):
    """Summary of one audit run."""

    entries: list[StaleEntry] = Field(
        default_factory=list, description="Newly flagged links in document order"
    )
    checked: int = Field(0, description="Links sent to the GitHub API")
    skipped_existing: int = Field(
        0, description="Links already listed in today's tracking issue"
    )
    skipped_non_repo: int = Field(
        0, description="Links that are not GitHub repository roots"
    )
    errors: int = Field(0, description="Checks that failed and were ignored")
    limit_reached: bool = Field(
        False, description="Whether the run stopped at the run limit"
    )
