"""Sorting milestone issues into changelog sections."""

from collections.abc import Iterable
from dataclasses import dataclass

from .config import ChangelogConfig, IssueSort, SectionConfig
from .github_client.models import GitHubIssue


@dataclass(frozen=True, eq=False)
class ChangelogSection:
    """A heading of the changelog together with the rule that fills it.

    Sections compare by identity so two identically configured headings stay
    distinct keys of the collated mapping.
    """

    title: str
    labels: frozenset[str]
    group: str = "default"
    sort: IssueSort | None = None
    catch_all: bool = False

    @classmethod
    def from_config(cls, config: SectionConfig) -> "ChangelogSection":
        return cls(
            title=config.title,
            labels=frozenset(config.labels),
            group=config.group,
            sort=config.sort,
            catch_all=config.catch_all,
        )

    def is_match_for(self, issue: GitHubIssue) -> bool:
        """Check whether the issue carries any of the section's labels."""
        return not self.labels.isdisjoint(issue.label_names)

    def __str__(self) -> str:
        return self.title


class ChangelogSections:
    """Ordered section rules, first match per group wins."""

    def __init__(self, config: ChangelogConfig):
        self.sections = [ChangelogSection.from_config(s) for s in config.sections]

    def collate(
        self, issues: Iterable[GitHubIssue]
    ) -> dict[ChangelogSection, list[GitHubIssue]]:
        """Group issues by section.

        Sections keep configured order and only sections that claimed at
        least one issue are returned. Issues claimed by no section are
        dropped. Issue order inside a section is the input order.
        """
        claimed: dict[ChangelogSection, list[GitHubIssue]] = {
            section: [] for section in self.sections
        }
        for issue in issues:
            for section in self.get_sections(issue):
                claimed[section].append(issue)
        return {section: found for section, found in claimed.items() if found}

    def get_sections(self, issue: GitHubIssue) -> list[ChangelogSection]:
        """Return the sections claiming an issue, at most one per group."""
        matched: dict[str, ChangelogSection] = {}
        for section in self.sections:
            if (
                not section.catch_all
                and section.group not in matched
                and section.is_match_for(issue)
            ):
                matched[section.group] = section
        for section in self.sections:
            if section.catch_all and section.group not in matched:
                matched[section.group] = section
        return [section for section in self.sections if section in matched.values()]


def sort_issues(issues: list[GitHubIssue], sort: IssueSort) -> list[GitHubIssue]:
    """Return the issues in the requested order.

    Title order ignores case and keeps ties in their original order.
    """
    if sort is IssueSort.TITLE:
        return sorted(issues, key=lambda issue: issue.title.lower())
    return list(issues)
