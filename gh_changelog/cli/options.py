"""Standardized CLI option definitions for consistent shorthand mappings."""

from pathlib import Path

import typer

from ..config import DEFAULT_CONFIG_FILE

MILESTONE_ARGUMENT = typer.Argument(
    ..., help="Milestone title (or number with milestone-reference: id)"
)

OUTPUT_ARGUMENT = typer.Argument(..., help="Markdown file to write the changelog to")

CONFIG_OPTION = typer.Option(
    Path(DEFAULT_CONFIG_FILE),
    "--config",
    "-c",
    help="YAML changelog configuration (defaults used when missing)",
)

REPOSITORY_OPTION = typer.Option(
    None,
    "--repository",
    "-r",
    help="Repository in owner/name format (defaults to GITHUB_REPOSITORY env var)",
)

TOKEN_OPTION = typer.Option(
    None, "--token", "-t", help="GitHub API token (defaults to GITHUB_TOKEN env var)"
)

API_URL_OPTION = typer.Option(
    None, "--api-url", help="GitHub API URL for GitHub Enterprise installations"
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Show debug logging")
