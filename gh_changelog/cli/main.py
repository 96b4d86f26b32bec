"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .generate import generate

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(
    name="github-changelog",
    help="Markdown changelogs from GitHub milestones",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="generate", context_settings={"help_option_names": ["-h", "--help"]})(
    generate
)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from gh_changelog import __version__

    console.print(f"GitHub Changelog Generator v{__version__}")


if __name__ == "__main__":
    app()
