"""Pydantic models for GitHub data structures.

These models keep only the parts of GitHub's REST API v3 responses that a
changelog needs. They are immutable so users can be deduplicated in sets.
API Reference: https://docs.github.com/en/rest/issues
"""

from pydantic import BaseModel, ConfigDict, Field


class Repository(BaseModel):
    """Coordinates of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., min_length=1, description="Repository owner (user or org)")
    name: str = Field(..., min_length=1, description="Repository name")

    @classmethod
    def of(cls, value: str) -> "Repository":
        """Parse an ``owner/name`` string.

        Raises:
            ValueError: If the value is not in ``owner/name`` form
        """
        owner, sep, name = value.strip().partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(
                f"Invalid repository '{value}'. Expected format: owner/name"
            )
        return cls(owner=owner, name=name)

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


class GitHubUser(BaseModel):
    """GitHub user credited as a contributor.

    Maps to GitHub REST API User object.
    API Reference: https://docs.github.com/en/rest/users/users
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="GitHub username/login (string)")
    url: str = Field(..., description="Link to the user's profile page (string)")


class GitHubLabel(BaseModel):
    """GitHub label model representing repository labels.

    Maps to GitHub REST API Label object.
    API Reference: https://docs.github.com/en/rest/issues/labels
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Name of the label, matched case-sensitively")


class GitHubIssue(BaseModel):
    """GitHub issue or pull request attached to a milestone.

    Maps to GitHub REST API Issue object. Pull requests are issues with a
    ``pull_request`` association.
    API Reference: https://docs.github.com/en/rest/issues/issues
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., gt=0, description="Issue number within the repository")
    title: str = Field(..., description="Short description/title of the issue")
    url: str = Field(..., description="Link to the issue on GitHub")
    labels: tuple[GitHubLabel, ...] = Field(
        default=(), description="Labels attached to the issue"
    )
    pull_request: bool = Field(
        False, description="Whether the issue is a pull request"
    )
    user: GitHubUser | None = Field(None, description="Creator/author of the issue")

    @property
    def label_names(self) -> set[str]:
        return {label.name for label in self.labels}
