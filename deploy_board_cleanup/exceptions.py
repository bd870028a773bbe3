"""Error types raised while cleaning up the deployment board."""


class DeployBoardCleanupError(Exception):
    """Base class for all cleanup errors."""


class ConfigurationError(DeployBoardCleanupError, ValueError):
    """A required input is missing or invalid."""


class IssueQueryError(DeployBoardCleanupError):
    """The open-issue query failed or returned an incomplete response."""


class BranchListingError(DeployBoardCleanupError):
    """The repository branches could not be listed."""


class CardArchiveError(DeployBoardCleanupError):
    """A project board card could not be archived."""


class IssueCloseError(DeployBoardCleanupError):
    """An issue could not be closed."""
