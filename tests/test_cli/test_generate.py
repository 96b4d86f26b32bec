"""Tests for the generate CLI command."""

from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock, patch

from github.GithubException import BadCredentialsException
from typer.testing import CliRunner

from gh_changelog.cli.main import app

runner = CliRunner()

CONFIG = """\
repository: testorg/testrepo
issues:
  excludes:
    labels: [wontfix]
"""


class TestGenerateCommand:
    """Test generate command."""

    @patch("gh_changelog.cli.generate.GitHubClient")
    def test_generate_writes_changelog(
        self,
        mock_client_class: Mock,
        tmp_path: Path,
        fake_tracker_class: type,
        make_issue: Callable,
    ) -> None:
        config = tmp_path / "changelog.yml"
        config.write_text(CONFIG, encoding="utf-8")
        output = tmp_path / "changelog.md"
        mock_client_class.return_value = fake_tracker_class(
            milestones={"2.1.0": 42},
            issues={
                42: [
                    make_issue(1, title="Fix crash", labels=("bug",), author="alice"),
                    make_issue(2, title="Not happening", labels=("wontfix",)),
                ]
            },
        )

        result = runner.invoke(
            app,
            ["generate", "2.1.0", str(output), "-c", str(config), "-t", "test_token"],
        )

        assert result.exit_code == 0, result.stdout
        assert "✅" in result.stdout
        mock_client_class.assert_called_once_with(token="test_token", base_url=None)
        content = output.read_text(encoding="utf-8")
        assert "## :beetle: Bug Fixes" in content
        assert "- [@alice](https://github.com/alice)" in content
        assert "Not happening" not in content

    @patch("gh_changelog.cli.generate.GitHubClient")
    def test_generate_milestone_not_found(
        self, mock_client_class: Mock, tmp_path: Path, fake_tracker_class: type
    ) -> None:
        mock_client_class.return_value = fake_tracker_class()

        result = runner.invoke(
            app,
            [
                "generate",
                "9.9.9",
                str(tmp_path / "changelog.md"),
                "--repository",
                "testorg/testrepo",
                "--config",
                str(tmp_path / "missing.yml"),
            ],
        )

        assert result.exit_code == 1
        assert "❌" in result.stdout
        assert "9.9.9" in result.stdout
        assert not (tmp_path / "changelog.md").exists()

    def test_generate_invalid_config(self, tmp_path: Path) -> None:
        config = tmp_path / "changelog.yml"
        config.write_text(
            "repository: testorg/testrepo\nmilestone-reference: url\n",
            encoding="utf-8",
        )

        result = runner.invoke(
            app, ["generate", "2.1.0", str(tmp_path / "out.md"), "-c", str(config)]
        )

        assert result.exit_code == 1
        assert "❌" in result.stdout

    def test_generate_unreadable_config(self, tmp_path: Path) -> None:
        result = runner.invoke(
            app,
            [
                "generate",
                "1",
                str(tmp_path / "out.md"),
                "-c",
                str(tmp_path),
                "-r",
                "testorg/testrepo",
                "-t",
                "test_token",
            ],
        )

        assert result.exit_code == 1
        assert "❌" in result.stdout
        assert "Could not read" in result.stdout

    @patch("gh_changelog.cli.generate.GitHubClient")
    def test_generate_github_error(
        self, mock_client_class: Mock, tmp_path: Path
    ) -> None:
        mock_client_class.return_value.get_milestone_number.side_effect = (
            BadCredentialsException(401, {"message": "Bad credentials"}, None)
        )

        result = runner.invoke(
            app,
            [
                "generate",
                "2.1.0",
                str(tmp_path / "out.md"),
                "-c",
                str(tmp_path / "missing.yml"),
                "-r",
                "testorg/testrepo",
                "-t",
                "bad_token",
            ],
        )

        assert result.exit_code == 1
        assert "❌ Unexpected error" in result.stdout
        assert not (tmp_path / "out.md").exists()
