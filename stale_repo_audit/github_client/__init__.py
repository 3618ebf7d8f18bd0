"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import RepositoryState, TrackingIssue

__all__ = [
    "GitHubClient",
    "RepositoryState",
    "TrackingIssue",
]
