"""GraphQL query for open deployment issues and parsing of its response."""

from typing import Any

from pydantic import ValidationError

from ..exceptions import IssueQueryError
from .models import ProjectCardRef, RawIssue

OPEN_ISSUES_QUERY = """
query($owner: String!, $repo: String!, $login: String!) {
  repository(owner: $owner, name: $repo) {
    issues(
      first: 100
      orderBy: {field: UPDATED_AT, direction: DESC}
      filterBy: {mentioned: $login, states: [OPEN]}
    ) {
      edges {
        node {
          databaseId
          title
          number
          updatedAt
          labels(first: 20) {
            edges {
              node {
                name
              }
            }
          }
          projectCards {
            edges {
              node {
                databaseId
                project {
                  number
                }
              }
            }
          }
        }
      }
    }
  }
}
"""


def _edge_nodes(
    connection: Any, name: str, issue_number: Any
) -> list[dict[str, Any]]:
    """Return the nodes of an optional connection, empty when absent.

    Raises:
        IssueQueryError: If an edge or its node is not an object
    """
    edges = connection.get("edges") if isinstance(connection, dict) else None
    if not isinstance(edges, list):
        return []
    nodes = []
    for edge in edges:
        node = edge.get("node") if isinstance(edge, dict) else None
        if not isinstance(edge, dict) or not isinstance(node or {}, dict):
            raise IssueQueryError(
                f"Issue #{issue_number} in the query response has a malformed "
                f"{name} edge."
            )
        if node:
            nodes.append(node)
    return nodes


def _issue_edges(data: Any) -> list[Any]:
    path = ["repository", "issues", "edges"]
    current = data
    for depth, key in enumerate(path):
        if not isinstance(current, dict) or current.get(key) is None:
            missing = ".".join(path[: depth + 1])
            raise IssueQueryError(
                "An error occurred making the request to retrieve the active "
                f"issues: response is missing '{missing}'."
            )
        current = current[key]
    if not isinstance(current, list):
        raise IssueQueryError(
            "An error occurred making the request to retrieve the active issues: "
            "'repository.issues.edges' is not a list."
        )
    return current


def _parse_node(node: dict[str, Any]) -> RawIssue:
    number = node.get("number")
    labels = [
        label["name"]
        for label in _edge_nodes(node.get("labels"), "label", number)
        if label.get("name")
    ]

    cards = []
    for card in _edge_nodes(node.get("projectCards"), "project card", number):
        project = card.get("project") or {}
        if card.get("databaseId") is None or project.get("number") is None:
            continue
        cards.append(
            ProjectCardRef(card_id=card["databaseId"], board_number=project["number"])
        )

    return RawIssue(
        database_id=node.get("databaseId"),
        title=node.get("title"),
        number=node.get("number"),
        updated_at=node.get("updatedAt"),
        labels=labels,
        project_cards=cards,
    )


def parse_open_issues_response(data: Any) -> list[RawIssue]:
    """Convert the ``data`` member of the issue query response to raw issues.

    Order is preserved (most recently updated first).

    Args:
        data: The ``data`` object of the GraphQL response

    Returns:
        List of RawIssue objects

    Raises:
        IssueQueryError: If the response structure is incomplete
    """
    issues = []
    for index, edge in enumerate(_issue_edges(data)):
        node = edge.get("node") if isinstance(edge, dict) else None
        if not isinstance(node, dict):
            raise IssueQueryError(
                f"Issue edge {index} in the query response has no 'node'."
            )
        try:
            issues.append(_parse_node(node))
        except ValidationError as e:
            fields = ", ".join(
                ".".join(str(part) for part in error["loc"]) for error in e.errors()
            )
            raise IssueQueryError(
                f"Issue edge {index} in the query response is incomplete "
                f"(invalid or missing: {fields})."
            ) from e
    return issues
