"""Retention strategies deciding which inactive deploy items are stale.

Items currently deployed to an environment are never removed. Both
strategies keep the incoming order (most recently updated first) in the
kept and removed lists, and report the full partition before returning.
"""

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from .models import DeployItem, RetentionDecision, RetentionStrategy
from .reporting import CleanupReporter

CUTOFF_DATE_FORMAT = "%m-%d-%Y"


def start_of_day_utc(now: datetime | None = None) -> datetime:
    """Truncate ``now`` (default: current time) to midnight UTC."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).replace(
        hour=0, minute=0, second=0, microsecond=0
    )


def select_for_removal_by_age(
    items: Sequence[DeployItem],
    max_age_days: int,
    card_type: str = "",
    reporter: CleanupReporter | None = None,
    now: datetime | None = None,
) -> RetentionDecision:
    """Select inactive items last updated before the age cutoff.

    The cutoff is today's midnight UTC minus ``max_age_days`` days. Items
    updated strictly before it are removed, the rest are kept.

    Args:
        items: Deploy items of one reference type, most recent first
        max_age_days: Maximum age in days of an inactive item
        card_type: Display name of the reference type used in messages
        reporter: Where the decision is reported
        now: Reference time, defaults to the current time

    Returns:
        RetentionDecision with the kept and removed inactive items
    """
    reporter = reporter or CleanupReporter()
    cutoff = start_of_day_utc(now) - timedelta(days=max_age_days)
    decision = RetentionDecision(
        strategy=RetentionStrategy.AGE, threshold=max_age_days, cutoff=cutoff
    )

    if not items:
        reporter.info(f"\nThere are no active {card_type} cards.  Nothing to remove.")
        return decision

    inactive = [item for item in items if not item.is_currently_deployed_to_an_env]
    if not inactive:
        reporter.info(f"\nThere are no inactive {card_type} cards to remove.")
        return decision

    decision.kept = [item for item in inactive if item.updated_at >= cutoff]
    decision.removed = [item for item in inactive if item.updated_at < cutoff]

    cutoff_display = cutoff.strftime(CUTOFF_DATE_FORMAT)
    reporter.items(
        f"Inactive {card_type} Cards to Keep based on Max Age of {max_age_days} "
        f"Days (created after {cutoff_display}):",
        decision.kept,
        f"There are no inactive {card_type} cards to keep",
    )
    reporter.items(
        f"Inactive {card_type} Cards to Remove based on Max Age of {max_age_days} "
        f"Days (created before {cutoff_display}):",
        decision.removed,
        f"There are no inactive {card_type} cards to cleanup",
    )
    return decision


def select_for_removal_by_count(
    items: Sequence[DeployItem],
    max_count: int,
    card_type: str = "",
    reporter: CleanupReporter | None = None,
) -> RetentionDecision:
    """Keep the ``max_count`` most recent inactive items and remove the rest.

    Items with an existing branch are not candidates at all: they are
    neither kept nor removed.

    Args:
        items: Deploy items of one reference type, most recent first
        max_count: Number of inactive items to keep
        card_type: Display name of the reference type used in messages
        reporter: Where the decision is reported

    Returns:
        RetentionDecision with the kept and removed inactive items
    """
    reporter = reporter or CleanupReporter()
    decision = RetentionDecision(strategy=RetentionStrategy.NUMBER, threshold=max_count)

    inactive = [
        item
        for item in items
        if not item.is_currently_deployed_to_an_env and not item.is_an_active_branch
    ]
    if not inactive:
        reporter.info(f"\nThere are no inactive {card_type} cards to remove")
        return decision

    if len(inactive) <= max_count:
        decision.kept = inactive
        reporter.items(
            f"Nothing to cleanup.  The number of inactive {card_type} cards does "
            f"not exceed the max number: {len(inactive)}/{max_count}.",
            inactive,
            f"There are no inactive {card_type} cards to keep",
        )
        return decision

    decision.kept = inactive[:max_count]
    decision.removed = inactive[max_count:]

    reporter.items(
        f"Inactive {card_type} Cards to Keep based on Max Number of {max_count} "
        "Inactive Items:",
        decision.kept,
        f"There are no inactive {card_type} cards to keep",
    )
    reporter.items(
        f"Inactive {card_type} Cards to Remove based on Max Number of {max_count} "
        "Inactive Items:",
        decision.removed,
        f"There are no inactive {card_type} cards to cleanup",
    )
    return decision


def select_for_removal(
    items: Sequence[DeployItem],
    strategy: RetentionStrategy,
    threshold: int,
    card_type: str = "",
    reporter: CleanupReporter | None = None,
    now: datetime | None = None,
) -> RetentionDecision:
    """Apply the configured retention strategy to one group of items."""
    strategy = RetentionStrategy(strategy)
    if strategy is RetentionStrategy.AGE:
        return select_for_removal_by_age(
            items, threshold, card_type=card_type, reporter=reporter, now=now
        )
    if strategy is RetentionStrategy.NUMBER:
        return select_for_removal_by_count(
            items, threshold, card_type=card_type, reporter=reporter
        )
    raise ValueError(f"Unsupported retention strategy: {strategy.value}")
