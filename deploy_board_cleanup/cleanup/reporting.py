"""Human-readable audit output for cleanup decisions.

Every decision the cleanup makes is written here so operators can see why
an item was kept or removed. When running inside GitHub Actions the output
is folded into collapsible log groups and errors become workflow
annotations; elsewhere rich rules separate the groups.
"""

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.markup import escape

from .models import DeployItem


def running_in_github_actions() -> bool:
    return os.getenv("GITHUB_ACTIONS", "").lower() == "true"


def describe_item(item: DeployItem) -> str:
    """Format an item as ``- <updated> - <title>`` with its liveness cause."""
    line = f"- {item.updated_at_display} - {item.title}"
    if item.is_currently_deployed_to_an_env:
        return f"{line} ({', '.join(item.labels)})"
    if item.is_an_active_branch:
        return f"{line} (active branch)"
    return line


class CleanupReporter:
    """Writes cleanup progress and decisions to a rich console."""

    def __init__(
        self, console: Console | None = None, github_actions: bool | None = None
    ):
        self.console = console or Console()
        self.github_actions = (
            running_in_github_actions() if github_actions is None else github_actions
        )

    def info(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False, soft_wrap=True)

    def warning(self, message: str) -> None:
        if self.github_actions:
            self.info(f"::warning::{message}")
        else:
            self.console.print(
                f"⚠️  [yellow]{escape(message)}[/yellow]", soft_wrap=True
            )

    def error(self, message: str) -> None:
        if self.github_actions:
            self.info(f"::error::{message}")
        else:
            self.console.print(f"❌ [red]{escape(message)}[/red]", soft_wrap=True)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """Fold everything reported inside the block under ``title``."""
        if self.github_actions:
            self.info(f"::group::{title}")
        else:
            self.console.rule(escape(title))
        try:
            yield
        finally:
            if self.github_actions:
                self.info("::endgroup::")

    def items(
        self, heading: str, items: Iterable[DeployItem], empty_message: str
    ) -> None:
        """Report a heading followed by one line per item."""
        self.info(f"\n{heading}")
        lines = [describe_item(item) for item in items]
        if not lines:
            self.info(f"- {empty_message}")
        for line in lines:
            self.info(line)
