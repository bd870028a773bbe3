"""CLI command running the deployment board cleanup."""

import logging
import os

import typer
from rich.console import Console
from rich.logging import RichHandler

from ..cleanup.orchestrator import CleanupReport, DeployBoardCleanup
from ..cleanup.reporting import CleanupReporter
from ..config import CleanupConfig, split_repository
from ..exceptions import ConfigurationError, DeployBoardCleanupError
from ..github_client.client import GitHubClient
from .options import (
    BOARD_NUMBER_OPTION,
    BRANCH_STRATEGY_OPTION,
    BRANCH_THRESHOLD_OPTION,
    DRY_RUN_OPTION,
    GITHUB_LOGIN_OPTION,
    GITHUB_TOKEN_OPTION,
    ORG_OPTION,
    REPO_OPTION,
    SHA_STRATEGY_OPTION,
    SHA_THRESHOLD_OPTION,
    TAG_STRATEGY_OPTION,
    TAG_THRESHOLD_OPTION,
    VERBOSE_OPTION,
)

console = Console()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _print_summary(report: CleanupReport, reporter: CleanupReporter) -> None:
    outcomes = report.execution.outcomes
    failed = report.execution.failed
    if not outcomes:
        console.print("\n✅ [green]Nothing to remove[/green]")
        return
    if failed:
        reporter.error(
            f"{len(failed)} of {len(outcomes)} removal(s) failed: "
            + ", ".join(f"#{outcome.issue_number}" for outcome in failed)
        )
        return
    verb = "would be removed" if outcomes[0].dry_run else "removed"
    console.print(f"\n✅ [green]{len(outcomes)} deploy card(s) {verb}[/green]")


def run(
    org: str | None = ORG_OPTION,
    repo: str | None = REPO_OPTION,
    github_login: str | None = GITHUB_LOGIN_OPTION,
    github_token: str | None = GITHUB_TOKEN_OPTION,
    board_number: str | None = BOARD_NUMBER_OPTION,
    branch_cleanup_strategy: str | None = BRANCH_STRATEGY_OPTION,
    tag_cleanup_strategy: str | None = TAG_STRATEGY_OPTION,
    sha_cleanup_strategy: str | None = SHA_STRATEGY_OPTION,
    branch_threshold: str | None = BRANCH_THRESHOLD_OPTION,
    tag_threshold: str | None = TAG_THRESHOLD_OPTION,
    sha_threshold: str | None = SHA_THRESHOLD_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Close and archive stale branch, tag and SHA deploy cards.

    Open issues mentioning the bot login are grouped by their title
    ("Branch Deploy:", "Tag Deploy:", "SHA Deploy:"). Cards currently
    deployed to an environment are never removed. For every other card the
    configured strategy decides:

    - age: remove cards not updated within the threshold in days
    - number: keep the threshold most recent cards and remove the rest
      (cards whose branch still exists are kept)

    Examples:
        deploy-board-cleanup run --org myorg --repo myrepo --board-number 3 \\
            --branch-cleanup-strategy number --branch-threshold 10 \\
            --tag-cleanup-strategy age --tag-threshold 30 \\
            --sha-cleanup-strategy age --sha-threshold 7 --dry-run
    """
    configure_logging(verbose)
    reporter = CleanupReporter(console=console)

    if not (org and repo):
        default_org, default_repo = split_repository(os.getenv("GITHUB_REPOSITORY"))
        org = org or default_org
        repo = repo or default_repo

    try:
        config = CleanupConfig.from_inputs(
            org=org,
            repo=repo,
            github_login=github_login,
            github_token=github_token,
            board_number=board_number,
            branch_cleanup_strategy=branch_cleanup_strategy,
            tag_cleanup_strategy=tag_cleanup_strategy,
            sha_cleanup_strategy=sha_cleanup_strategy,
            branch_threshold=branch_threshold,
            tag_threshold=tag_threshold,
            sha_threshold=sha_threshold,
        )
    except ConfigurationError as e:
        reporter.error(f"Error: {e}")
        raise typer.Exit(1)

    if dry_run:
        reporter.warning("Dry run - no cards will be archived and no issues closed")

    client = GitHubClient(token=config.github_token)
    try:
        report = DeployBoardCleanup(
            config, client, reporter=reporter, dry_run=dry_run
        ).run()
    except DeployBoardCleanupError as e:
        reporter.error(str(e))
        raise typer.Exit(1)
    finally:
        client.close()

    _print_summary(report, reporter)
    if report.has_failures:
        raise typer.Exit(1)
