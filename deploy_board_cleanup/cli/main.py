"""Main CLI entry point."""

import typer
from dotenv import load_dotenv
from rich.console import Console

from .run import run

load_dotenv()

app = typer.Typer(
    name="deploy-board-cleanup",
    help="Close and archive stale deployment cards on a GitHub project board",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()


app.command(name="run", context_settings={"help_option_names": ["-h", "--help"]})(run)


@app.command(context_settings={"help_option_names": ["-h", "--help"]})
def version() -> None:
    """Show version information."""
    from deploy_board_cleanup import __version__

    console.print(f"Deploy Board Cleanup v{__version__}")


if __name__ == "__main__":
    app()
