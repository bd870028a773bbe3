"""Configuration for a deployment board cleanup run."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from .cleanup.models import RefType, RetentionStrategy
from .exceptions import ConfigurationError

DEFAULT_GITHUB_LOGIN = "github-actions"

# Input names as they appear on the command line and in action inputs.
INPUT_NAMES = {
    "github_login": "github-login",
    "github_token": "github-token",
    "board_number": "board-number",
    "branch_cleanup_strategy": "branch-cleanup-strategy",
    "tag_cleanup_strategy": "tag-cleanup-strategy",
    "sha_cleanup_strategy": "sha-cleanup-strategy",
    "branch_threshold": "branch-threshold",
    "tag_threshold": "tag-threshold",
    "sha_threshold": "sha-threshold",
    "org": "org",
    "repo": "repo",
}


def split_repository(repository: str | None) -> tuple[str | None, str | None]:
    """Split an ``owner/repo`` string such as ``GITHUB_REPOSITORY``."""
    if not repository or "/" not in repository:
        return None, None
    owner, _, name = repository.strip().partition("/")
    return owner or None, name or None


class CleanupConfig(BaseModel):
    """Validated inputs of a cleanup run."""

    org: str = Field(..., description="Owner of the repository")
    repo: str = Field(..., description="Repository name")
    github_login: str = Field(
        DEFAULT_GITHUB_LOGIN, description="Account whose mentions mark deploy issues"
    )
    github_token: str = Field(..., description="Token for queries and mutations")
    board_number: int = Field(..., description="Number of the project board")
    branch_cleanup_strategy: RetentionStrategy
    tag_cleanup_strategy: RetentionStrategy
    sha_cleanup_strategy: RetentionStrategy
    branch_threshold: int = Field(..., ge=0, description="Days or item count")
    tag_threshold: int = Field(..., ge=0, description="Days or item count")
    sha_threshold: int = Field(..., ge=0, description="Days or item count")

    @field_validator("github_login", mode="before")
    @classmethod
    def default_login(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_GITHUB_LOGIN
        return value.strip() if isinstance(value, str) else value

    @field_validator(
        "org",
        "repo",
        "github_token",
        "board_number",
        "branch_cleanup_strategy",
        "tag_cleanup_strategy",
        "sha_cleanup_strategy",
        "branch_threshold",
        "tag_threshold",
        "sha_threshold",
        mode="before",
    )
    @classmethod
    def strip_required(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("a value is required")
        return value

    @field_validator(
        "branch_cleanup_strategy",
        "tag_cleanup_strategy",
        "sha_cleanup_strategy",
        mode="before",
    )
    @classmethod
    def lowercase_strategy(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @classmethod
    def from_inputs(cls, **inputs: Any) -> "CleanupConfig":
        """Build a config, reporting every invalid input in one error.

        Raises:
            ConfigurationError: If any required input is missing or invalid
        """
        try:
            return cls.model_validate(inputs)
        except ValidationError as e:
            problems = []
            for error in e.errors():
                field = str(error["loc"][0]) if error["loc"] else "input"
                name = INPUT_NAMES.get(field, field)
                if error["type"] == "missing" or inputs.get(field) is None:
                    problems.append(f"{name} (missing)")
                else:
                    problems.append(f"{name} ({error['msg']})")
            raise ConfigurationError(
                "Invalid or missing required inputs: " + ", ".join(problems)
            ) from e

    def strategy_for(self, ref_type: RefType) -> RetentionStrategy:
        return {
            RefType.BRANCH: self.branch_cleanup_strategy,
            RefType.TAG: self.tag_cleanup_strategy,
            RefType.SHA: self.sha_cleanup_strategy,
        }[ref_type]

    def threshold_for(self, ref_type: RefType) -> int:
        return {
            RefType.BRANCH: self.branch_threshold,
            RefType.TAG: self.tag_threshold,
            RefType.SHA: self.sha_threshold,
        }[ref_type]
