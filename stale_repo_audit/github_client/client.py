"""GitHub API client using PyGitHub and httpx."""

import logging
import os
from datetime import datetime
from types import TracebackType
from typing import Any

import httpx
from github import Auth, Github
from github.GithubException import UnknownObjectException
from github.Issue import Issue
from github.Repository import Repository

from ..utils.date_parser import format_rfc3339
from .models import RepositoryState, TrackingIssue

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
USER_AGENT = "stale-repo-audit/0.1.0"


class GitHubClient:
    """GitHub API client with optional authentication.

    Issue listing and creation go through PyGitHub. Repository and commit
    lookups use httpx directly so redirect status codes reach the caller
    instead of being followed.
    """

    def __init__(
        self,
        token: str | None = None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize GitHub client.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN or OAUTH_TOKEN env vars. Without a token the
                client is unauthenticated and subject to lower rate limits.
            api_url: Base URL of the GitHub REST API
            timeout: Timeout in seconds for raw HTTP requests
            transport: Optional httpx transport, used by tests
        """
        self.token = token or os.getenv("GITHUB_TOKEN") or os.getenv("OAUTH_TOKEN")

        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }
        if self.token:
            self.github = Github(auth=Auth.Token(self.token), base_url=api_url)
            headers["Authorization"] = f"Bearer {self.token}"
        else:
            logger.warning("No GitHub token found. Using unauthenticated client ...")
            self.github = Github(base_url=api_url)

        self.http = httpx.Client(
            base_url=api_url,
            headers=headers,
            timeout=timeout,
            follow_redirects=False,
            transport=transport,
        )

    def __enter__(self) -> "GitHubClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Release HTTP connections held by both clients."""
        self.http.close()
        self.github.close()

    def _convert_issue(self, github_issue: Issue) -> TrackingIssue:
        """Convert PyGitHub issue to our model."""
        return TrackingIssue(
            number=github_issue.number,
            title=github_issue.title,
            body=github_issue.body,
            url=github_issue.html_url,
        )

    def get_repository(self, owner: str, repo: str) -> Repository:
        """Get repository object."""
        try:
            return self.github.get_repo(f"{owner}/{repo}")
        except UnknownObjectException:
            raise ValueError(f"Repository {owner}/{repo} not found")

    def get_repository_state(self, owner: str, repo: str) -> RepositoryState:
        """Look up a repository without following redirects.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            RepositoryState with the raw status code and archived flag

        Raises:
            httpx.HTTPError: If the request could not be sent
            ValueError: If a successful response is not a JSON object
        """
        response = self.http.get(f"/repos/{owner}/{repo}")

        archived = False
        # Error and redirect bodies only carry a message, nothing to decode
        if response.is_success:
            data = response.json()
            if not isinstance(data, dict):
                raise ValueError(
                    f"Unexpected repository payload for {owner}/{repo}: "
                    f"{type(data).__name__}"
                )
            archived = bool(data.get("archived", False))

        return RepositoryState(status_code=response.status_code, archived=archived)

    def get_commits_since(
        self, owner: str, repo: str, since: datetime
    ) -> list[dict[str, Any]]:
        """List commits on the default branch made after a point in time.

        Only the first page is requested; callers only need to know whether
        the list is empty.

        Args:
            owner: Repository owner
            repo: Repository name
            since: Only commits after this time are returned

        Returns:
            List of raw commit objects

        Raises:
            httpx.HTTPError: If the request failed or returned a non-2xx status
            ValueError: If the response is not a JSON array
        """
        response = self.http.get(
            f"/repos/{owner}/{repo}/commits", params={"since": format_rfc3339(since)}
        )
        response.raise_for_status()

        data = response.json()
        if not isinstance(data, list):
            raise ValueError(
                f"Unexpected commits payload for {owner}/{repo}: {type(data).__name__}"
            )
        return data

    def list_open_issues(self, owner: str, repo: str) -> list[TrackingIssue]:
        """List all open issues of a repository.

        Args:
            owner: Repository owner
            repo: Repository name

        Returns:
            List of TrackingIssue objects

        Raises:
            ValueError: If the repository does not exist
            github.GithubException: If the API request fails
        """
        repository = self.get_repository(owner, repo)
        return [
            self._convert_issue(issue) for issue in repository.get_issues(state="open")
        ]

    def create_issue(
        self, owner: str, repo: str, title: str, body: str
    ) -> TrackingIssue:
        """Create a new issue.

        Raises:
            ValueError: If the repository does not exist
            github.GithubException: If the API request fails
        """
        repository = self.get_repository(owner, repo)
        github_issue = repository.create_issue(title=title, body=body)
        logger.info(f"Created issue #{github_issue.number} in {owner}/{repo}")
        return self._convert_issue(github_issue)
