"""Classification of open deployment issues into branch, tag and SHA items."""

import logging
import re
from collections.abc import Iterable, Sequence

from rich.console import Console

from ..github_client.models import RawIssue
from .models import ClassifiedItems, DeployItem, RefType

console = Console()
logger = logging.getLogger(__name__)

CURRENTLY_DEPLOYED_MARKER = "🚀currently-in-"

# Checked in order; the first marker found in the lower-cased title wins.
TITLE_MARKERS: list[tuple[str, RefType]] = [
    ("tag deploy:", RefType.TAG),
    ("branch deploy:", RefType.BRANCH),
    ("sha deploy:", RefType.SHA),
]

BRANCH_TITLE_PREFIX = re.compile(r"^\s*(\[.*\]\s*)?Branch Deploy:\s*", re.IGNORECASE)


def deployed_labels(labels: Iterable[str]) -> list[str]:
    """Return the labels marking an environment the reference is deployed to."""
    return [label for label in labels if CURRENTLY_DEPLOYED_MARKER in label]


def ref_type_for_title(title: str) -> RefType | None:
    """Determine the deploy reference type from an issue title.

    Returns:
        The matching RefType, or None if the title is not a deployment title
    """
    lowered = title.lower()
    for marker, ref_type in TITLE_MARKERS:
        if marker in lowered:
            return ref_type
    return None


def branch_name_from_title(title: str) -> str:
    """Extract the lower-cased branch name from a branch deploy title.

    Examples:
        >>> branch_name_from_title("[env] Branch Deploy: Main")
        'main'
        >>> branch_name_from_title("Branch Deploy: feature-x")
        'feature-x'
    """
    return BRANCH_TITLE_PREFIX.sub("", title, count=1).strip().lower()


def project_card_id_for_board(issue: RawIssue, board_number: int) -> int:
    """Return the id of the issue's card on the given board, or 0."""
    for card in issue.project_cards:
        if card.board_number == board_number:
            return card.card_id
    return 0


def classify(
    raw_issues: Sequence[RawIssue], board_number: int, known_branches: Iterable[str]
) -> ClassifiedItems:
    """Partition open issues into branch, tag and SHA deploy items.

    The query order of ``raw_issues`` (most recently updated first) is kept
    within each group. Issues whose title carries no deploy marker are
    skipped.

    Args:
        raw_issues: Issues returned by the open issue query
        board_number: Number of the project board whose cards are tracked
        known_branches: Names of the branches that exist in the repository

    Returns:
        ClassifiedItems holding the three ordered groups
    """
    classified = ClassifiedItems()
    if not raw_issues:
        console.print("The repository does not appear to have any open deploy issues.")
        return classified

    branches = {branch.lower() for branch in known_branches}

    for issue in raw_issues:
        ref_type = ref_type_for_title(issue.title)
        if ref_type is None:
            console.print(
                f"Issue #{issue.number} was retrieved but does not appear to be "
                "an automated project board issue."
            )
            continue

        card_id = project_card_id_for_board(issue, board_number)
        if not card_id:
            logger.debug(
                "Issue #%d has no card on project board %d", issue.number, board_number
            )

        is_an_active_branch = (
            ref_type is RefType.BRANCH
            and branch_name_from_title(issue.title) in branches
        )

        item = DeployItem(
            id=issue.database_id,
            title=issue.title,
            number=issue.number,
            updated_at=issue.updated_at,
            labels=deployed_labels(issue.labels),
            project_card_id=card_id,
            ref_type=ref_type,
            is_an_active_branch=is_an_active_branch,
        )
        classified.for_ref_type(ref_type).append(item)

    return classified
