"""Archives board cards and closes issues selected for removal."""

import logging
from collections.abc import Sequence
from typing import Protocol

from pydantic import BaseModel, Field

from ..exceptions import CardArchiveError, IssueCloseError
from .models import DeployItem
from .reporting import CleanupReporter

logger = logging.getLogger(__name__)


class BoardMutator(Protocol):
    """The GitHub calls the executor needs."""

    def archive_project_card(self, card_id: int) -> None: ...

    def close_issue(self, org: str, repo: str, issue_number: int) -> None: ...


class RemovalOutcome(BaseModel):
    """Result of removing a single item from the board."""

    title: str
    issue_number: int
    card_id: int = 0
    card_archived: bool = False
    issue_closed: bool = False
    dry_run: bool = False
    errors: list[str] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors


class ExecutionSummary(BaseModel):
    """Aggregated outcomes of a removal pass."""

    outcomes: list[RemovalOutcome] = Field(default_factory=list)

    @property
    def failed(self) -> list[RemovalOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)


class CleanupExecutor:
    """Applies removal decisions to the board, one item at a time.

    Both steps of a removal are best-effort: a failed archive does not stop
    the issue from being closed, and a failed item does not stop the items
    after it.
    """

    def __init__(
        self,
        client: BoardMutator,
        org: str,
        repo: str,
        reporter: CleanupReporter | None = None,
        dry_run: bool = False,
    ):
        self.client = client
        self.org = org
        self.repo = repo
        self.reporter = reporter or CleanupReporter()
        self.dry_run = dry_run

    def remove_item(
        self, title: str, issue_number: int, card_id: int
    ) -> RemovalOutcome:
        """Archive the item's card (if any) and close its issue."""
        outcome = RemovalOutcome(
            title=title,
            issue_number=issue_number,
            card_id=card_id,
            dry_run=self.dry_run,
        )
        prefix = "[dry-run] Would archive" if self.dry_run else "Archiving"

        if card_id:
            self.reporter.info(f"{prefix} card #{card_id} for '{title}'")
            if not self.dry_run:
                try:
                    self.client.archive_project_card(card_id)
                    outcome.card_archived = True
                except CardArchiveError as e:
                    outcome.errors.append(str(e))
                    self.reporter.error(str(e))

        prefix = "[dry-run] Would close" if self.dry_run else "Closing"
        self.reporter.info(f"{prefix} issue #{issue_number} for '{title}'")
        if not self.dry_run:
            try:
                self.client.close_issue(self.org, self.repo, issue_number)
                outcome.issue_closed = True
            except IssueCloseError as e:
                outcome.errors.append(f"An error occurred closing the issue: {e}")
                self.reporter.error(f"An error occurred closing the issue: {e}")

        return outcome

    def remove_items(self, items: Sequence[DeployItem]) -> ExecutionSummary:
        """Remove items sequentially, in the given order."""
        summary = ExecutionSummary()
        for item in items:
            summary.outcomes.append(
                self.remove_item(item.title, item.number, item.project_card_id)
            )
        logger.debug(
            "Processed %d removals, %d failed",
            len(summary.outcomes),
            len(summary.failed),
        )
        return summary
