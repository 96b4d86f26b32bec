"""GitHub client package for API interaction."""

from .client import GitHubClient, IssueTracker
from .models import GitHubIssue, GitHubLabel, GitHubUser, Repository

__all__ = [
    "GitHubClient",
    "IssueTracker",
    "GitHubUser",
    "GitHubLabel",
    "GitHubIssue",
    "Repository",
]
