"""Markdown rendering of collated issues and contributors."""

import re
from collections.abc import Iterable, Mapping, Sequence

from .github_client.models import GitHubIssue, GitHubUser
from .sections import ChangelogSection

CONTRIBUTORS_HEADING = "## :heart: Contributors"
CONTRIBUTORS_INTRO = (
    "We'd like to thank all the contributors who worked on this release!"
)

# A mention starts the title or follows a character that is neither an ASCII word
# character nor a backtick, so e-mail addresses and escaped mentions are kept.
MENTION_PATTERN = re.compile(r"(^|[^\w`])(@[\w-]+)", re.ASCII)


def escape_mentions(text: str) -> str:
    """Wrap ``@user`` mentions in backticks so GitHub does not notify them."""
    return MENTION_PATTERN.sub(r"\1`\2`", text)


def format_issue(issue: GitHubIssue) -> str:
    return f"- {escape_mentions(issue.title)} [#{issue.number}]({issue.url})\n"


def format_contributor(user: GitHubUser) -> str:
    return f"- [@{user.name}]({user.url})\n"


def render_sections(
    collated: Mapping[ChangelogSection, Sequence[GitHubIssue]],
) -> str:
    """Render one heading per section followed by its issue bullets.

    Sections without issues are skipped so no empty heading is emitted.
    """
    blocks = []
    for section, issues in collated.items():
        if not issues:
            continue
        bullets = "".join(format_issue(issue) for issue in issues)
        blocks.append(f"## {section}\n\n{bullets}")
    return "\n".join(blocks)


def render_contributors(contributors: Iterable[GitHubUser]) -> str:
    bullets = "".join(format_contributor(user) for user in contributors)
    if not bullets:
        return ""
    return f"{CONTRIBUTORS_HEADING}\n\n{CONTRIBUTORS_INTRO}\n\n{bullets}"


def render_changelog(
    collated: Mapping[ChangelogSection, Sequence[GitHubIssue]],
    contributors: Iterable[GitHubUser],
) -> str:
    """Render the complete changelog text.

    Sections come first in the given order, the contributors block last,
    separated from the previous content by a blank line.
    """
    content = render_sections(collated)
    contributors_block = render_contributors(contributors)
    if contributors_block:
        content = f"{content}\n{contributors_block}"
    return content
