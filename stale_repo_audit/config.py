"""Configuration for the stale repository audit."""

import os
from typing import Any

from pydantic import BaseModel, Field

from .audit.models import ReasonMessages

# Run limit value that disables the cap
UNLIMITED = -1

DEFAULT_TITLE_PREFIX = "Investigate repositories with more than 1 year without update"


def parse_repository_slug(value: str) -> tuple[str, str]:
    """Split an ``owner/name`` repository slug.

    Args:
        value: Repository slug (e.g., 'avelino/awesome-go')

    Returns:
        Tuple of (owner, name)

    Raises:
        ValueError: If the slug is not exactly two non-empty segments
    """
    parts = value.strip().split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(
            f"Invalid repository '{value}'. Expected format: owner/name"
        )
    return parts[0], parts[1]


class AuditConfig(BaseModel):
    """Settings for one audit run."""

    run_limit: int = Field(
        10,
        ge=UNLIMITED,
        description="Maximum newly flagged repositories per run (-1 = no limit)",
    )
    stale_years: int = Field(
        1, ge=1, description="Years without commits before a repository is stale"
    )
    tracking_owner: str = Field(
        "avelino", description="Owner of the tracking repository"
    )
    tracking_repo: str = Field(
        "awesome-go", description="Name of the tracking repository"
    )
    title_prefix: str = Field(
        DEFAULT_TITLE_PREFIX, description="Tracking issue title before the date"
    )
    messages: ReasonMessages = Field(default_factory=ReasonMessages)
    hosting_url: str = Field(
        "https://github.com", description="Web URL prefix of repository links"
    )
    api_url: str = Field("https://api.github.com", description="GitHub REST API URL")
    timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")

    @property
    def tracking_repository(self) -> str:
        return f"{self.tracking_owner}/{self.tracking_repo}"

    @property
    def unlimited(self) -> bool:
        return self.run_limit == UNLIMITED

    @classmethod
    def from_env(
        cls,
        run_limit: int | None = None,
        stale_years: int | None = None,
        tracking_repository: str | None = None,
        title_prefix: str | None = None,
    ) -> "AuditConfig":
        """Build configuration from environment variables.

        Explicit arguments take precedence over STALE_AUDIT_LIMIT,
        STALE_AUDIT_YEARS, STALE_AUDIT_TRACKING_REPO and
        STALE_AUDIT_TITLE_PREFIX.

        Raises:
            ValueError: If a value is malformed or out of range
        """
        values: dict[str, Any] = {}

        limit = run_limit if run_limit is not None else os.getenv("STALE_AUDIT_LIMIT")
        if limit is not None:
            values["run_limit"] = limit

        years = (
            stale_years if stale_years is not None else os.getenv("STALE_AUDIT_YEARS")
        )
        if years is not None:
            values["stale_years"] = years

        slug = tracking_repository or os.getenv("STALE_AUDIT_TRACKING_REPO")
        if slug:
            values["tracking_owner"], values["tracking_repo"] = parse_repository_slug(
                slug
            )

        prefix = title_prefix or os.getenv("STALE_AUDIT_TITLE_PREFIX")
        if prefix:
            values["title_prefix"] = prefix

        return cls.model_validate(values)
