"""Changelog generation for a GitHub milestone."""

import logging
import re
from collections.abc import Callable, Iterable
from pathlib import Path

from .config import ChangelogConfig, MilestoneReference
from .exceptions import (
    ChangelogWriteError,
    ConfigurationError,
    InvalidMilestoneIdError,
)
from .formatter import render_changelog
from .github_client.client import IssueTracker
from .github_client.models import GitHubIssue, GitHubUser
from .sections import ChangelogSections, sort_issues

logger = logging.getLogger(__name__)


class ChangelogGenerator:
    """Generates a markdown changelog with bug fixes, enhancements and
    contributors for a milestone."""

    def __init__(self, tracker: IssueTracker, config: ChangelogConfig):
        self.tracker = tracker
        self.config = config
        self.repository = config.repository
        self.sort = config.issues.sort
        self.exclude_labels = config.issues.excludes.labels
        self.exclude_contributors = [
            _name_pattern(name) for name in config.contributors.exclude.names
        ]
        self.sections = ChangelogSections(config)
        self._resolve_milestone = self._milestone_resolver(config.milestone_reference)

    def _milestone_resolver(
        self, reference: MilestoneReference
    ) -> Callable[[str], int]:
        match reference:
            case MilestoneReference.TITLE:
                return self._milestone_by_title
            case MilestoneReference.ID:
                return self._milestone_by_id
            case _:
                raise ConfigurationError(
                    f"Unsupported milestone reference value {reference!r}"
                )

    def _milestone_by_title(self, milestone: str) -> int:
        return self.tracker.get_milestone_number(milestone, self.repository)

    def _milestone_by_id(self, milestone: str) -> int:
        # ASCII digits with an optional sign; no whitespace or underscores
        digits = milestone[1:] if milestone[:1] in ("-", "+") else milestone
        if not (digits.isascii() and digits.isdigit()):
            raise InvalidMilestoneIdError(milestone)
        return int(milestone)

    def generate(self, milestone: str, path: str | Path) -> None:
        """Write a changelog for the milestone to the given path.

        Args:
            milestone: Milestone title or number, depending on configuration
            path: File to create or overwrite

        Raises:
            MilestoneNotFoundError: If no milestone has the given title
            InvalidMilestoneIdError: If an id reference is not a number
            ChangelogWriteError: If the file could not be written
        """
        milestone_number = self._resolve_milestone(milestone)
        logger.info(
            "Generating changelog for milestone %s (#%d)", milestone, milestone_number
        )
        issues = self.get_issues(milestone_number)
        content = self.generate_content(issues)
        write_changelog(content, path)

    def get_issues(self, milestone_number: int) -> list[GitHubIssue]:
        """Fetch the milestone's issues without those carrying excluded labels."""
        issues = self.tracker.get_issues_for_milestone(
            milestone_number, self.repository
        )
        kept = [issue for issue in issues if not self.is_excluded(issue)]
        if len(kept) != len(issues):
            logger.info("Excluded %d issues by label", len(issues) - len(kept))
        return kept

    def is_excluded(self, issue: GitHubIssue) -> bool:
        return not self.exclude_labels.isdisjoint(issue.label_names)

    def generate_content(self, issues: list[GitHubIssue]) -> str:
        """Render the changelog text for already filtered issues."""
        collated = {
            section: sort_issues(section_issues, section.sort or self.sort)
            for section, section_issues in self.sections.collate(issues).items()
        }
        return render_changelog(collated, self.get_contributors(issues))

    def get_contributors(self, issues: Iterable[GitHubIssue]) -> list[GitHubUser]:
        """Return pull request authors, deduplicated, in first-seen order."""
        contributors = dict.fromkeys(
            issue.user for issue in issues if issue.pull_request and issue.user
        )
        return [user for user in contributors if not self._is_excluded_user(user)]

    def _is_excluded_user(self, user: GitHubUser) -> bool:
        return any(
            pattern.fullmatch(user.name) for pattern in self.exclude_contributors
        )


def _name_pattern(name: str) -> re.Pattern[str]:
    """Compile a login pattern where only ``*`` is a wildcard."""
    return re.compile(".*".join(re.escape(part) for part in name.split("*")))


def write_changelog(content: str, path: str | Path) -> None:
    """Write the changelog text to a file, replacing any previous content.

    Raises:
        ChangelogWriteError: If the file could not be written
    """
    try:
        Path(path).write_text(content, encoding="utf-8")
    except OSError as exc:
        raise ChangelogWriteError(
            f"Could not write changelog to {path}: {exc}"
        ) from exc
    logger.info("Changelog written to %s", path)
