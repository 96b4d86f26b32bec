"""Errors raised while generating a changelog."""


class ChangelogError(Exception):
    """Base class for changelog generation failures."""


class ConfigurationError(ChangelogError):
    """Configuration is invalid or names an unsupported option."""


class MilestoneNotFoundError(ChangelogError):
    """No milestone with the requested title exists in the repository."""

    def __init__(self, title: str, repository: object):
        super().__init__(f"Milestone '{title}' not found in {repository}")
        self.title = title


class InvalidMilestoneIdError(ChangelogError):
    """A milestone id reference could not be parsed as an integer."""

    def __init__(self, value: str):
        super().__init__(f"Invalid milestone id '{value}'")
        self.value = value


class ChangelogWriteError(ChangelogError):
    """The changelog file could not be written."""
