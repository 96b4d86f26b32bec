"""GitHub API client using PyGitHub."""

import logging
import os
import time
from typing import Protocol

from github import Auth, Github
from github.GithubException import UnknownObjectException
from github.Issue import Issue
from github.Label import Label
from github.NamedUser import NamedUser
from github.Repository import Repository as GithubRepository

from ..exceptions import ConfigurationError, MilestoneNotFoundError
from .models import GitHubIssue, GitHubLabel, GitHubUser, Repository

logger = logging.getLogger(__name__)

RATE_LIMIT_THRESHOLD = 10


class IssueTracker(Protocol):
    """Issue tracker queries needed to build a changelog."""

    def get_milestone_number(self, title: str, repository: Repository) -> int:
        """Return the number of the milestone with exactly this title.

        Raises:
            MilestoneNotFoundError: If no milestone has the title
        """
        ...

    def get_issues_for_milestone(
        self, milestone_number: int, repository: Repository
    ) -> list[GitHubIssue]:
        """Return every issue and pull request of the milestone, all pages."""
        ...


class GitHubClient:
    """GitHub API client with rate limiting and authentication."""

    def __init__(self, token: str | None = None, base_url: str | None = None):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            base_url: API root for GitHub Enterprise installations.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        if base_url:
            self.github = Github(auth=Auth.Token(self.token), base_url=base_url)
        else:
            self.github = Github(auth=Auth.Token(self.token))
        self._repositories: dict[Repository, GithubRepository] = {}

    def _check_rate_limit(self) -> None:
        """Check rate limit and sleep if necessary."""
        remaining, limit = self.github.rate_limiting
        logger.debug("GitHub API rate limit: %s/%s requests remaining", remaining, limit)

        if 0 <= remaining < RATE_LIMIT_THRESHOLD:
            sleep_time = self.github.rate_limiting_resettime - time.time() + 1
            if sleep_time > 0:
                logger.warning(
                    "Rate limit low, sleeping for %.1f seconds...", sleep_time
                )
                time.sleep(sleep_time)

    def _convert_user(self, github_user: NamedUser) -> GitHubUser:
        """Convert PyGitHub user to our model."""
        return GitHubUser(name=github_user.login, url=github_user.html_url)

    def _convert_label(self, github_label: Label) -> GitHubLabel:
        """Convert PyGitHub label to our model."""
        return GitHubLabel(name=github_label.name)

    def _convert_issue(self, github_issue: Issue) -> GitHubIssue:
        """Convert PyGitHub issue to our model."""
        user = None
        if github_issue.user is not None:
            user = self._convert_user(github_issue.user)

        return GitHubIssue(
            number=github_issue.number,
            title=github_issue.title,
            url=github_issue.html_url,
            labels=tuple(self._convert_label(label) for label in github_issue.labels),
            pull_request=github_issue.pull_request is not None,
            user=user,
        )

    def get_repository(self, repository: Repository) -> GithubRepository:
        """Get repository object, fetching it at most once."""
        if repository not in self._repositories:
            try:
                self._repositories[repository] = self.github.get_repo(str(repository))
            except UnknownObjectException:
                raise ConfigurationError(f"Repository {repository} not found")
        return self._repositories[repository]

    def get_milestone_number(self, title: str, repository: Repository) -> int:
        """Look up a milestone by exact title, searching open and closed ones.

        Args:
            title: Milestone title, e.g. "2.1.0"
            repository: Repository owning the milestone

        Returns:
            The milestone number

        Raises:
            MilestoneNotFoundError: If no milestone has the title
        """
        self._check_rate_limit()

        for milestone in self.get_repository(repository).get_milestones(state="all"):
            if milestone.title == title:
                logger.debug("Milestone '%s' has number %d", title, milestone.number)
                return milestone.number

        raise MilestoneNotFoundError(title, repository)

    def get_issues_for_milestone(
        self, milestone_number: int, repository: Repository
    ) -> list[GitHubIssue]:
        """Get all issues and pull requests attached to a milestone.

        PyGitHub pages through results lazily; the whole list is materialized
        before returning so callers never see a partial result.

        Args:
            milestone_number: Milestone number
            repository: Repository owning the milestone

        Returns:
            List of GitHubIssue objects in API order
        """
        self._check_rate_limit()

        github_repository = self.get_repository(repository)
        milestone = github_repository.get_milestone(milestone_number)
        issues = [
            self._convert_issue(github_issue)
            for github_issue in github_repository.get_issues(
                milestone=milestone, state="all"
            )
        ]
        logger.info(
            "Fetched %d issues for milestone %d of %s",
            len(issues),
            milestone_number,
            repository,
        )
        return issues
