"""Test that the CLI entry point works correctly in built packages."""

import subprocess
import sys


def test_entry_point_import():
    """Test that the entry point module can be imported."""
    from deploy_board_cleanup.cli.main import app

    assert app is not None


def test_cli_help_command():
    """Test that the CLI help command works."""
    result = subprocess.run(
        [
            sys.executable,
            "-c",
            "from deploy_board_cleanup.cli.main import app; app(['--help'])",
        ],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "Close and archive stale deployment cards" in result.stdout


def test_module_entry_point():
    """Test ``python -m deploy_board_cleanup``."""
    result = subprocess.run(
        [sys.executable, "-m", "deploy_board_cleanup", "version"],
        capture_output=True,
        text=True,
    )

    assert result.returncode == 0
    assert "Deploy Board Cleanup v" in result.stdout
