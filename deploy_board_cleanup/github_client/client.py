"""GitHub API client using PyGitHub and httpx."""

import logging
import os

import httpx
import requests
from github import Auth, Github
from github.GithubException import GithubException, UnknownObjectException
from github.Repository import Repository
from rich.console import Console

from ..exceptions import (
    BranchListingError,
    CardArchiveError,
    IssueCloseError,
    IssueQueryError,
)
from .models import RawIssue
from .query import OPEN_ISSUES_QUERY, parse_open_issues_response

console = Console()
logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Classic project cards are only reachable through the inertia preview.
PROJECTS_PREVIEW_ACCEPT = "application/vnd.github.inertia-preview+json"


class GitHubClient:
    """GitHub API client for the deployment board collaborators."""

    def __init__(
        self,
        token: str | None = None,
        http_client: httpx.Client | None = None,
    ):
        """Initialize GitHub client with authentication.

        Args:
            token: GitHub personal access token. If None, reads from
                GITHUB_TOKEN env var.
            http_client: Client used for GraphQL and project card calls.
                Created with the token when not provided.
        """
        self.token = token or os.getenv("GITHUB_TOKEN")
        if not self.token:
            raise ValueError(
                "GitHub token is required. Set GITHUB_TOKEN environment variable."
            )

        self.github = Github(auth=Auth.Token(self.token))
        self.http = http_client or httpx.Client(
            base_url=GITHUB_API_URL,
            headers={
                "Authorization": f"token {self.token}",
                "User-Agent": "deploy-board-cleanup/0.1.0",
            },
            timeout=30.0,
        )
        self._repositories: dict[str, Repository] = {}

    def close(self) -> None:
        """Release the underlying HTTP connections."""
        self.http.close()
        self.github.close()

    def get_repository(self, org: str, repo: str) -> Repository:
        """Get repository object, fetched once per client."""
        full_name = f"{org}/{repo}"
        if full_name not in self._repositories:
            try:
                self._repositories[full_name] = self.github.get_repo(full_name)
            except UnknownObjectException:
                raise ValueError(f"Repository {full_name} not found")
        return self._repositories[full_name]

    def get_open_deploy_issues(self, org: str, repo: str, login: str) -> list[RawIssue]:
        """Fetch the 100 most recently updated open issues mentioning a login.

        Args:
            org: Organization or user owning the repository
            repo: Repository name
            login: Account whose mentions identify deployment issues

        Returns:
            List of RawIssue objects, most recently updated first

        Raises:
            IssueQueryError: If the request fails or the response is incomplete
        """
        try:
            response = self.http.post(
                "/graphql",
                json={
                    "query": OPEN_ISSUES_QUERY,
                    "variables": {"owner": org, "repo": repo, "login": login},
                },
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise IssueQueryError(
                f"An error occurred retrieving the cards for {org}/{repo}: {e}"
            ) from e

        if not isinstance(payload, dict):
            raise IssueQueryError("The issue query returned an unexpected payload.")

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                error.get("message", str(error))
                if isinstance(error, dict)
                else str(error)
                for error in errors
            )
            raise IssueQueryError(
                f"An error occurred retrieving the cards for {org}/{repo}: {messages}"
            )

        issues = parse_open_issues_response(payload.get("data"))
        logger.debug("Retrieved %d open issues mentioning %s", len(issues), login)
        return issues

    def list_active_branches(self, org: str, repo: str) -> set[str]:
        """List every branch of a repository, lower-cased.

        Pagination is handled by PyGitHub.

        Raises:
            BranchListingError: If the repository or its branches cannot be read
        """
        try:
            repository = self.get_repository(org, repo)
            branches = {branch.name.lower() for branch in repository.get_branches()}
        except (GithubException, requests.RequestException, ValueError) as e:
            raise BranchListingError(
                f"An error occurred retrieving the active branches for "
                f"{org}/{repo}: {e}"
            ) from e

        if not branches:
            console.print(
                f"There were no active branches on the {org}/{repo} repository."
            )
        return branches

    def archive_project_card(self, card_id: int) -> None:
        """Mark a classic project board card as archived.

        Raises:
            CardArchiveError: If the request fails
        """
        try:
            response = self.http.patch(
                f"/projects/columns/cards/{card_id}",
                json={"archived": True},
                headers={"Accept": PROJECTS_PREVIEW_ACCEPT},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise CardArchiveError(
                f"An error occurred archiving card {card_id}: {e}"
            ) from e

    def close_issue(self, org: str, repo: str, issue_number: int) -> None:
        """Set an issue's state to closed.

        Raises:
            IssueCloseError: If the repository or issue cannot be updated
        """
        try:
            repository = self.get_repository(org, repo)
            github_issue = repository.get_issue(issue_number)
            github_issue.edit(state="closed")
        except UnknownObjectException as e:
            raise IssueCloseError(
                f"Issue #{issue_number} not found in {org}/{repo}"
            ) from e
        except (GithubException, requests.RequestException, ValueError) as e:
            raise IssueCloseError(
                f"An error occurred closing issue #{issue_number}: {e}"
            ) from e
