"""Test configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from gh_changelog.config import ChangelogConfig
from gh_changelog.exceptions import MilestoneNotFoundError
from gh_changelog.github_client.models import (
    GitHubIssue,
    GitHubLabel,
    GitHubUser,
    Repository,
)


class FakeTracker:
    """In-memory issue tracker recording the calls it receives."""

    def __init__(
        self,
        milestones: dict[str, int] | None = None,
        issues: dict[int, list[GitHubIssue]] | None = None,
    ):
        self.milestones = milestones or {}
        self.issues = issues or {}
        self.milestone_lookups: list[str] = []
        self.issue_requests: list[int] = []

    def get_milestone_number(self, title: str, repository: Repository) -> int:
        self.milestone_lookups.append(title)
        if title not in self.milestones:
            raise MilestoneNotFoundError(title, repository)
        return self.milestones[title]

    def get_issues_for_milestone(
        self, milestone_number: int, repository: Repository
    ) -> list[GitHubIssue]:
        self.issue_requests.append(milestone_number)
        return list(self.issues.get(milestone_number, []))


@pytest.fixture
def make_issue() -> Callable[..., GitHubIssue]:
    """Build issues with sensible defaults."""

    def _make_issue(
        number: int,
        title: str = "Some issue",
        labels: tuple[str, ...] = (),
        author: str | None = None,
    ) -> GitHubIssue:
        user = None
        if author is not None:
            user = GitHubUser(name=author, url=f"https://github.com/{author}")
        return GitHubIssue(
            number=number,
            title=title,
            url=f"https://github.com/testorg/testrepo/issues/{number}",
            labels=tuple(GitHubLabel(name=name) for name in labels),
            pull_request=author is not None,
            user=user,
        )

    return _make_issue


@pytest.fixture
def make_config() -> Callable[..., ChangelogConfig]:
    """Build a validated config from raw (YAML-shaped) values."""

    def _make_config(**raw: Any) -> ChangelogConfig:
        raw.setdefault("repository", "testorg/testrepo")
        return ChangelogConfig.model_validate(raw)

    return _make_config


@pytest.fixture
def fake_tracker_class() -> type[FakeTracker]:
    return FakeTracker
