"""Standardized CLI option definitions.

Every input can also be supplied the way a GitHub Action receives its
inputs (``INPUT_<NAME>`` environment variables), so the same command works
from a workflow step and from a terminal.
"""

import typer

# Repository options
ORG_OPTION = typer.Option(
    None,
    "--org",
    "-o",
    help="Repository owner (defaults to the owner in GITHUB_REPOSITORY)",
)

REPO_OPTION = typer.Option(
    None,
    "--repo",
    "-r",
    help="Repository name (defaults to the name in GITHUB_REPOSITORY)",
)

# Authentication options
GITHUB_LOGIN_OPTION = typer.Option(
    None,
    "--github-login",
    envvar="INPUT_GITHUB-LOGIN",
    help="Account whose mentions identify deploy issues [default: github-actions]",
)

GITHUB_TOKEN_OPTION = typer.Option(
    None,
    "--github-token",
    "-t",
    envvar=["INPUT_GITHUB-TOKEN", "GITHUB_TOKEN"],
    help="GitHub API token (defaults to GITHUB_TOKEN env var)",
)

# Board options
BOARD_NUMBER_OPTION = typer.Option(
    None,
    "--board-number",
    "-b",
    envvar="INPUT_BOARD-NUMBER",
    help="Number of the project board holding the deploy cards",
)

# Retention options
BRANCH_STRATEGY_OPTION = typer.Option(
    None,
    "--branch-cleanup-strategy",
    envvar="INPUT_BRANCH-CLEANUP-STRATEGY",
    help="Retention strategy for branch deploys: age or number",
)

TAG_STRATEGY_OPTION = typer.Option(
    None,
    "--tag-cleanup-strategy",
    envvar="INPUT_TAG-CLEANUP-STRATEGY",
    help="Retention strategy for tag deploys: age or number",
)

SHA_STRATEGY_OPTION = typer.Option(
    None,
    "--sha-cleanup-strategy",
    envvar="INPUT_SHA-CLEANUP-STRATEGY",
    help="Retention strategy for SHA deploys: age or number",
)

BRANCH_THRESHOLD_OPTION = typer.Option(
    None,
    "--branch-threshold",
    envvar="INPUT_BRANCH-THRESHOLD",
    help="Days (age) or number of inactive branch deploys to keep",
)

TAG_THRESHOLD_OPTION = typer.Option(
    None,
    "--tag-threshold",
    envvar="INPUT_TAG-THRESHOLD",
    help="Days (age) or number of inactive tag deploys to keep",
)

SHA_THRESHOLD_OPTION = typer.Option(
    None,
    "--sha-threshold",
    envvar="INPUT_SHA-THRESHOLD",
    help="Days (age) or number of inactive SHA deploys to keep",
)

# Behavior options
DRY_RUN_OPTION = typer.Option(
    False,
    "--dry-run",
    "-d",
    help="Report what would be removed without archiving or closing anything",
)

VERBOSE_OPTION = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
