"""Retention decisions and removal of stale deployment board items."""

from .classifier import classify
from .executor import CleanupExecutor, ExecutionSummary, RemovalOutcome
from .models import (
    ClassifiedItems,
    DeployItem,
    RefType,
    RetentionDecision,
    RetentionStrategy,
)
from .orchestrator import CleanupReport, DeployBoardCleanup
from .reporting import CleanupReporter
from .retention import (
    select_for_removal,
    select_for_removal_by_age,
    select_for_removal_by_count,
)

__all__ = [
    "ClassifiedItems",
    "CleanupExecutor",
    "CleanupReport",
    "CleanupReporter",
    "DeployBoardCleanup",
    "DeployItem",
    "ExecutionSummary",
    "RefType",
    "RemovalOutcome",
    "RetentionDecision",
    "RetentionStrategy",
    "classify",
    "select_for_removal",
    "select_for_removal_by_age",
    "select_for_removal_by_count",
]
