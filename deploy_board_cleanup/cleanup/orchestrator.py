"""Runs a full cleanup: query, classify, decide, then remove."""

import logging
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, Field

from ..github_client.models import RawIssue
from .classifier import classify
from .executor import BoardMutator, CleanupExecutor, ExecutionSummary
from .models import ClassifiedItems, DeployItem, RefType, RetentionDecision
from .reporting import CleanupReporter
from .retention import select_for_removal

if TYPE_CHECKING:
    from ..config import CleanupConfig

logger = logging.getLogger(__name__)

# Groups are always processed and removed in this order.
REF_TYPE_ORDER = [RefType.BRANCH, RefType.TAG, RefType.SHA]


class BoardSource(BoardMutator, Protocol):
    """The GitHub calls a full cleanup run needs."""

    def get_open_deploy_issues(
        self, org: str, repo: str, login: str
    ) -> list[RawIssue]: ...

    def list_active_branches(self, org: str, repo: str) -> set[str]: ...


class CleanupReport(BaseModel):
    """Decisions taken for each reference type and the removal results."""

    decisions: dict[RefType, RetentionDecision] = Field(default_factory=dict)
    execution: ExecutionSummary = Field(default_factory=ExecutionSummary)

    @property
    def removed(self) -> list[DeployItem]:
        return [
            item
            for ref_type in REF_TYPE_ORDER
            if ref_type in self.decisions
            for item in self.decisions[ref_type].removed
        ]

    @property
    def has_failures(self) -> bool:
        return self.execution.has_failures


class DeployBoardCleanup:
    """Sequences classification, retention and removal for one repository."""

    def __init__(
        self,
        config: "CleanupConfig",
        client: BoardSource,
        reporter: CleanupReporter | None = None,
        dry_run: bool = False,
        now: datetime | None = None,
    ):
        self.config = config
        self.client = client
        self.reporter = reporter or CleanupReporter()
        self.dry_run = dry_run
        self.now = now
        self.executor = CleanupExecutor(
            client, config.org, config.repo, reporter=self.reporter, dry_run=dry_run
        )

    @property
    def repository(self) -> str:
        return f"{self.config.org}/{self.config.repo}"

    def collect_items(self) -> ClassifiedItems:
        """Query the open deploy issues and classify them.

        Branches are only listed when there is at least one issue.

        Raises:
            IssueQueryError: If the issue query fails
            BranchListingError: If the branches cannot be listed
        """
        raw_issues = self.client.get_open_deploy_issues(
            self.config.org, self.config.repo, self.config.github_login
        )
        if not raw_issues:
            self.reporter.info(
                f"The {self.repository} repository does not appear to have any issues."
            )
            return ClassifiedItems()

        known_branches = self.client.list_active_branches(
            self.config.org, self.config.repo
        )
        return classify(raw_issues, self.config.board_number, known_branches)

    def decide(self, ref_type: RefType, items: list[DeployItem]) -> RetentionDecision:
        """Report one group of items and select the ones to remove."""
        strategy = self.config.strategy_for(ref_type)
        threshold = self.config.threshold_for(ref_type)
        name = ref_type.display_name

        if not items:
            self.reporter.info(f"\nThere were no active {name} cards to cleanup.")
            return RetentionDecision(strategy=strategy, threshold=threshold)

        with self.reporter.group(f"{name} Cards"):
            self.reporter.items(
                f"All {name} Cards ordered by most recently updated:",
                items,
                f"There are no {name} cards",
            )
            self.reporter.items(
                f"Currently Deployed {name} Cards that will not be removed:",
                [item for item in items if item.is_currently_deployed_to_an_env],
                f"There are no currently deployed {name} cards",
            )
            if ref_type is RefType.BRANCH:
                self.reporter.items(
                    "Cards with active branches that will not be removed:",
                    [item for item in items if item.is_an_active_branch],
                    "There are no Branch Cards with active branches",
                )
            return select_for_removal(
                items,
                strategy,
                threshold,
                card_type=name,
                reporter=self.reporter,
                now=self.now,
            )

    def run(self) -> CleanupReport:
        """Run the cleanup and return what was decided and done.

        Raises:
            IssueQueryError: If the issue query fails
            BranchListingError: If the branches cannot be listed
        """
        items = self.collect_items()

        report = CleanupReport()
        for ref_type in REF_TYPE_ORDER:
            report.decisions[ref_type] = self.decide(
                ref_type, items.for_ref_type(ref_type)
            )

        report.execution = self.executor.remove_items(report.removed)
        logger.info(
            "Cleanup of %s finished: %d removed, %d failed",
            self.repository,
            len(report.execution.outcomes),
            len(report.execution.failed),
        )
        return report
