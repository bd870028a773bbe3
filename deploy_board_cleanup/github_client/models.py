"""Pydantic models for the GitHub data the cleanup consumes.

These mirror the fields requested by the GraphQL issue query.
API Reference: https://docs.github.com/en/graphql/reference/objects#issue
"""

from datetime import datetime

from pydantic import BaseModel, Field


class ProjectCardRef(BaseModel):
    """A classic project board card attached to an issue."""

    card_id: int = Field(..., description="Card databaseId")
    board_number: int = Field(..., description="Number of the project containing it")


class RawIssue(BaseModel):
    """An open issue as returned by the issue query, before classification."""

    database_id: int | None = Field(None, description="Issue databaseId")
    title: str = Field(..., description="Issue title")
    number: int = Field(..., description="Issue number within the repository")
    updated_at: datetime = Field(..., description="Timestamp of last update")
    labels: list[str] = Field(
        default_factory=list, description="Names of up to 20 labels on the issue"
    )
    project_cards: list[ProjectCardRef] = Field(
        default_factory=list, description="Project board cards for the issue"
    )
