"""CLI command for generating a milestone changelog."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ..config import load_config
from ..exceptions import ChangelogError
from ..generator import ChangelogGenerator
from ..github_client.client import GitHubClient
from .options import (
    API_URL_OPTION,
    CONFIG_OPTION,
    MILESTONE_ARGUMENT,
    OUTPUT_ARGUMENT,
    REPOSITORY_OPTION,
    TOKEN_OPTION,
    VERBOSE_OPTION,
)

console = Console()


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich, DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def generate(
    milestone: str = MILESTONE_ARGUMENT,
    output: Path = OUTPUT_ARGUMENT,
    config: Path = CONFIG_OPTION,
    repository: str | None = REPOSITORY_OPTION,
    token: str | None = TOKEN_OPTION,
    api_url: str | None = API_URL_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Generate a markdown changelog for a milestone.

    Examples:
        github-changelog generate 2.1.0 changelog.md --repository myorg/myrepo
        github-changelog generate 42 CHANGES.md --config .github/changelog.yml
    """
    setup_logging(verbose)

    try:
        changelog_config = load_config(config, repository=repository)
        client = GitHubClient(token=token, base_url=api_url)
        generator = ChangelogGenerator(client, changelog_config)
        generator.generate(milestone, output)
    except (ChangelogError, ValueError) as e:
        console.print(f"❌ Error: {escape(str(e))}")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"❌ Unexpected error: {escape(str(e))}")
        console.print("Please check your GitHub token and network connection.")
        raise typer.Exit(1)

    console.print(
        f"✅ Changelog for milestone {milestone} of "
        f"{changelog_config.repository} saved to {output}"
    )
