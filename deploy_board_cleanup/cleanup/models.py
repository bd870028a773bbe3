"""Pydantic models for deployment board items and retention decisions."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

DISPLAY_DATE_FORMAT = "%m-%d-%Y %H:%M"


class RefType(str, Enum):
    """Kind of git reference a deployment issue tracks."""

    BRANCH = "branch"
    TAG = "tag"
    SHA = "sha"

    @property
    def display_name(self) -> str:
        """Name used in log headings (Branch, Tag, SHA)."""
        return "SHA" if self is RefType.SHA else self.value.title()


class RetentionStrategy(str, Enum):
    """How stale items of one reference type are selected."""

    AGE = "age"
    NUMBER = "number"


class DeployItem(BaseModel):
    """One open deployment issue on the board.

    Built once per run from the issue query snapshot and never persisted.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = Field(None, description="Database id of the issue, if known")
    title: str = Field(..., description="Issue title, e.g. 'Branch Deploy: main'")
    number: int = Field(..., description="Issue number used for closing")
    updated_at: datetime = Field(..., description="Last update instant (UTC)")
    labels: list[str] = Field(
        default_factory=list,
        description="Labels marking the environments the reference is deployed to",
    )
    project_card_id: int = Field(
        0, description="Card id on the configured board, 0 when not on the board"
    )
    ref_type: RefType = Field(..., description="Deploy reference type")
    is_an_active_branch: bool = Field(
        False, description="Branch item whose branch still exists in the repository"
    )

    @field_validator("updated_at")
    @classmethod
    def normalize_to_utc(cls, value: datetime) -> datetime:
        """Treat naive timestamps as UTC and convert aware ones to UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def is_currently_deployed_to_an_env(self) -> bool:
        return len(self.labels) > 0

    @property
    def updated_at_display(self) -> str:
        return self.updated_at.strftime(DISPLAY_DATE_FORMAT)


class ClassifiedItems(BaseModel):
    """Board items partitioned by reference type, most recently updated first."""

    branches: list[DeployItem] = Field(default_factory=list)
    tags: list[DeployItem] = Field(default_factory=list)
    shas: list[DeployItem] = Field(default_factory=list)

    def for_ref_type(self, ref_type: RefType) -> list[DeployItem]:
        return {
            RefType.BRANCH: self.branches,
            RefType.TAG: self.tags,
            RefType.SHA: self.shas,
        }[ref_type]


class RetentionDecision(BaseModel):
    """Outcome of applying a retention strategy to one group of items."""

    strategy: RetentionStrategy
    threshold: int
    kept: list[DeployItem] = Field(default_factory=list)
    removed: list[DeployItem] = Field(default_factory=list)
    cutoff: datetime | None = Field(
        None, description="Oldest update instant kept by the age strategy"
    )
