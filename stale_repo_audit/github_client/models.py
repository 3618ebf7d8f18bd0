"""Pydantic models for GitHub data structures.

These models map to the subset of GitHub's REST API v3 responses the audit
consumes.
API Reference: https://docs.github.com/en/rest/repos/repos
"""

from pydantic import BaseModel, Field


class RepositoryState(BaseModel):
    """Current state of a linked repository.

    Built from the raw response of ``GET /repos/{owner}/{repo}``. The status
    code is kept as returned because redirects are not followed.
    API Reference: https://docs.github.com/en/rest/repos/repos#get-a-repository
    """

    status_code: int = Field(..., description="HTTP status code of the lookup")
    archived: bool = Field(
        False, description="Whether the repository is archived (read-only)"
    )


class TrackingIssue(BaseModel):
    """Issue in the tracking repository that lists stale repositories.

    Maps to GitHub REST API Issue object.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    number: int = Field(..., description="Issue number within the repository")
    title: str = Field(..., description="Title of the issue")
    body: str | None = Field(
        None, description="Markdown checklist of stale repositories"
    )
    url: str | None = Field(None, description="Browser URL of the issue")
