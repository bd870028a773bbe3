"""GitHub client package for API interaction."""

from .client import GitHubClient
from .models import ProjectCardRef, RawIssue
from .query import OPEN_ISSUES_QUERY, parse_open_issues_response

__all__ = [
    "GitHubClient",
    "ProjectCardRef",
    "RawIssue",
    "OPEN_ISSUES_QUERY",
    "parse_open_issues_response",
]
