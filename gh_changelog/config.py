"""Changelog configuration loaded from YAML.

The file mirrors the settings a release manager tunes per repository::

    repository: owner/name
    milestone-reference: title
    issues:
      sort: title
      excludes:
        labels: [wontfix]
    sections:
      - title: ":beetle: Bug Fixes"
        labels: [bug, regression]
    contributors:
      exclude:
        names: ["dependabot[bot]"]
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .exceptions import ConfigurationError
from .github_client.models import Repository

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "changelog.yml"


class MilestoneReference(str, Enum):
    """How the milestone argument identifies a milestone."""

    TITLE = "title"
    ID = "id"


class IssueSort(str, Enum):
    """Order of issues within a section."""

    TITLE = "title"
    NONE = "none"


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


def _as_sequence(cls: type, value: Any) -> Any:
    """Accept a single string where a list of strings is expected."""
    if isinstance(value, str):
        return (value,)
    return value


class IssueExcludes(_ConfigModel):
    labels: frozenset[str] = Field(
        default=frozenset(), description="Issues with any of these labels are dropped"
    )

    _single_label = field_validator("labels", mode="before")(_as_sequence)


class IssuesConfig(_ConfigModel):
    sort: IssueSort = Field(IssueSort.NONE, description="Default sort for sections")
    excludes: IssueExcludes = Field(default_factory=IssueExcludes)


class SectionConfig(_ConfigModel):
    """A changelog heading and the labels that place an issue under it."""

    title: str = Field(..., min_length=1, description="Markdown heading text")
    labels: tuple[str, ...] = Field(default=(), description="Labels claiming an issue")
    group: str = Field(
        "default", description="Sections in one group never share an issue"
    )
    sort: IssueSort | None = Field(None, description="Overrides issues.sort")
    catch_all: bool = Field(
        False,
        alias="catch-all",
        description="Claims issues no labelled section of the group claimed",
    )

    _single_label = field_validator("labels", mode="before")(_as_sequence)

    @model_validator(mode="after")
    def _has_rule(self) -> "SectionConfig":
        if not self.labels and not self.catch_all:
            raise ValueError(
                f"Section '{self.title}' needs at least one label or catch-all: true"
            )
        return self


class ContributorExcludes(_ConfigModel):
    names: tuple[str, ...] = Field(
        default=(), description="Login patterns (``*`` wildcards) not credited"
    )

    _single_name = field_validator("names", mode="before")(_as_sequence)


class ContributorsConfig(_ConfigModel):
    exclude: ContributorExcludes = Field(default_factory=ContributorExcludes)


def default_sections() -> tuple[SectionConfig, ...]:
    """Sections used when the configuration defines none."""
    return (
        SectionConfig(title=":star: New Features", labels=("enhancement",)),
        SectionConfig(title=":beetle: Bug Fixes", labels=("regression", "bug")),
        SectionConfig(
            title=":notebook_with_decorative_cover: Documentation",
            labels=("documentation",),
        ),
        SectionConfig(
            title=":hammer: Dependency Upgrades", labels=("dependency-upgrade",)
        ),
    )


class ChangelogConfig(_ConfigModel):
    """Everything the generator needs besides the milestone and output path."""

    repository: Repository
    milestone_reference: MilestoneReference = Field(
        MilestoneReference.TITLE, alias="milestone-reference"
    )
    issues: IssuesConfig = Field(default_factory=IssuesConfig)
    sections: tuple[SectionConfig, ...] = Field(default_factory=default_sections)
    contributors: ContributorsConfig = Field(default_factory=ContributorsConfig)

    @field_validator("repository", mode="before")
    @classmethod
    def _parse_repository(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Repository.of(value)
        return value

    @field_validator("sections", mode="before")
    @classmethod
    def _default_when_empty(cls, value: Any) -> Any:
        return value or default_sections()


def load_config(
    path: str | Path | None = None, repository: str | None = None
) -> ChangelogConfig:
    """Load and validate a YAML changelog config file.

    Args:
        path: Path to the YAML file. A missing file means all defaults.
        repository: ``owner/name`` overriding the file's repository. When
            neither is set, GITHUB_REPOSITORY is used.

    Returns:
        A validated ChangelogConfig

    Raises:
        ConfigurationError: If the YAML is malformed or fails validation
    """
    raw: Any = {}
    source = "defaults"
    if path is not None and Path(path).exists():
        source = str(path)
        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationError(f"Could not read {path}: {exc}") from exc
        try:
            raw = yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {path}: {exc}") from exc
    elif path is not None:
        logger.debug("Config file %s not found, using defaults", path)

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Changelog config in {source} must be a mapping")

    # Files may nest everything under a top-level "changelog" key
    if set(raw) == {"changelog"} and isinstance(raw["changelog"], dict):
        raw = raw["changelog"]

    raw = dict(raw)
    if repository:
        raw["repository"] = repository
    elif "repository" not in raw and os.getenv("GITHUB_REPOSITORY"):
        raw["repository"] = os.environ["GITHUB_REPOSITORY"]

    try:
        config = ChangelogConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid changelog config in {source}: {exc}") from exc

    logger.debug("Loaded changelog config for %s from %s", config.repository, source)
    return config
