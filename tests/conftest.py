"""Test configuration and fixtures."""

import io
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from deploy_board_cleanup.cleanup.models import DeployItem, RefType
from deploy_board_cleanup.cleanup.reporting import CleanupReporter
from deploy_board_cleanup.github_client.models import ProjectCardRef, RawIssue

# Fixed reference time: midnight UTC of this day is 2024-06-15T00:00:00Z.
NOW = datetime(2024, 6, 15, 14, 30, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    """Reference time used for age based retention."""
    return NOW


@pytest.fixture
def make_item() -> Callable[..., DeployItem]:
    """Factory for deploy items updated a number of days before NOW."""

    def _make_item(
        title: str = "Branch Deploy: feature",
        number: int = 1,
        days_old: float = 1,
        labels: list[str] | None = None,
        ref_type: RefType | None = None,
        active_branch: bool = False,
        card_id: int = 0,
    ) -> DeployItem:
        if ref_type is None:
            lowered = title.lower()
            if "tag deploy:" in lowered:
                ref_type = RefType.TAG
            elif "sha deploy:" in lowered:
                ref_type = RefType.SHA
            else:
                ref_type = RefType.BRANCH
        return DeployItem(
            id=number * 100,
            title=title,
            number=number,
            updated_at=NOW - timedelta(days=days_old),
            labels=labels or [],
            project_card_id=card_id,
            ref_type=ref_type,
            is_an_active_branch=active_branch,
        )

    return _make_item


@pytest.fixture
def make_raw_issue() -> Callable[..., RawIssue]:
    """Factory for raw issues as returned by the issue query."""

    def _make_raw_issue(
        title: str,
        number: int = 1,
        days_old: float = 1,
        labels: list[str] | None = None,
        cards: list[tuple[int, int]] | None = None,
    ) -> RawIssue:
        return RawIssue(
            database_id=number * 100,
            title=title,
            number=number,
            updated_at=NOW - timedelta(days=days_old),
            labels=labels or [],
            project_cards=[
                ProjectCardRef(card_id=card_id, board_number=board_number)
                for card_id, board_number in (cards or [])
            ],
        )

    return _make_raw_issue


@pytest.fixture
def output() -> io.StringIO:
    """Buffer capturing everything the reporter prints."""
    return io.StringIO()


@pytest.fixture
def reporter(output: io.StringIO) -> CleanupReporter:
    """Reporter writing plain text to the output buffer."""
    console = Console(file=output, width=200, color_system=None)
    return CleanupReporter(console=console, github_actions=False)


@pytest.fixture
def actions_reporter(output: io.StringIO) -> CleanupReporter:
    """Reporter writing GitHub Actions workflow commands to the output buffer."""
    console = Console(file=output, width=200, color_system=None)
    return CleanupReporter(console=console, github_actions=True)
