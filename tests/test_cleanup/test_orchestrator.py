"""Tests for the full cleanup run."""

from unittest.mock import MagicMock, call

import pytest

from deploy_board_cleanup.cleanup.models import RefType, RetentionStrategy
from deploy_board_cleanup.cleanup.orchestrator import DeployBoardCleanup
from deploy_board_cleanup.config import CleanupConfig
from deploy_board_cleanup.exceptions import (
    BranchListingError,
    IssueCloseError,
    IssueQueryError,
)


@pytest.fixture
def config() -> CleanupConfig:
    """Branches by age (7 days), tags by number (2), SHAs by number (1)."""
    return CleanupConfig.from_inputs(
        org="test-org",
        repo="test-repo",
        github_token="fake-token",
        board_number="3",
        branch_cleanup_strategy="age",
        tag_cleanup_strategy="number",
        sha_cleanup_strategy="number",
        branch_threshold="7",
        tag_threshold="2",
        sha_threshold="1",
    )


@pytest.fixture
def raw_issues(make_raw_issue) -> list:
    """A board snapshot, most recently updated first."""
    return [
        make_raw_issue("SHA Deploy: fff", number=20, days_old=0.1),
        make_raw_issue("Tag Deploy: v4", number=14, days_old=1, cards=[(1400, 3)]),
        make_raw_issue("Branch Deploy: fresh", number=1, days_old=2),
        make_raw_issue(
            "[qa] Branch Deploy: Main",
            number=2,
            days_old=9,
            labels=["🚀currently-in-qa"],
        ),
        make_raw_issue("Tag Deploy: v3", number=13, days_old=10),
        make_raw_issue("SHA Deploy: eee", number=19, days_old=11, cards=[(1900, 3)]),
        make_raw_issue("Branch Deploy: stale", number=3, days_old=12, cards=[(300, 3)]),
        make_raw_issue("Release notes", number=99, days_old=13),
        make_raw_issue("Tag Deploy: v2", number=12, days_old=20, cards=[(1200, 8)]),
        make_raw_issue("Tag Deploy: v1", number=11, days_old=30),
        make_raw_issue("Branch Deploy: develop", number=4, days_old=40),
    ]


@pytest.fixture
def client(raw_issues) -> MagicMock:
    """Mock GitHub client serving the snapshot."""
    mock_client = MagicMock()
    mock_client.get_open_deploy_issues.return_value = raw_issues
    mock_client.list_active_branches.return_value = {"main", "develop"}
    return mock_client


@pytest.fixture
def cleanup(config, client, actions_reporter, now) -> DeployBoardCleanup:
    """Cleanup run with a fixed reference time."""
    return DeployBoardCleanup(config, client, reporter=actions_reporter, now=now)


class TestDeployBoardCleanup:
    """Test DeployBoardCleanup orchestration."""

    def test_collect_items(self, cleanup, client) -> None:
        items = cleanup.collect_items()

        client.get_open_deploy_issues.assert_called_once_with(
            "test-org", "test-repo", "github-actions"
        )
        client.list_active_branches.assert_called_once_with("test-org", "test-repo")
        assert [i.number for i in items.branches] == [1, 2, 3, 4]
        assert [i.number for i in items.tags] == [14, 13, 12, 11]
        assert [i.number for i in items.shas] == [20, 19]
        assert [i.is_an_active_branch for i in items.branches] == [
            False,
            True,
            False,
            True,
        ]

    def test_run_decisions(self, cleanup) -> None:
        report = cleanup.run()

        branches = report.decisions[RefType.BRANCH]
        assert branches.strategy == RetentionStrategy.AGE
        # Main is deployed; develop is old but the age strategy ignores
        # branch existence.
        assert [i.number for i in branches.kept] == [1]
        assert [i.number for i in branches.removed] == [3, 4]

        tags = report.decisions[RefType.TAG]
        assert [i.number for i in tags.kept] == [14, 13]
        assert [i.number for i in tags.removed] == [12, 11]

        shas = report.decisions[RefType.SHA]
        assert [i.number for i in shas.kept] == [20]
        assert [i.number for i in shas.removed] == [19]

    def test_run_removes_branches_then_tags_then_shas(self, cleanup, client) -> None:
        report = cleanup.run()

        mutations = [
            c
            for c in client.mock_calls
            if c[0] in ("archive_project_card", "close_issue")
        ]
        assert mutations == [
            call.archive_project_card(300),
            call.close_issue("test-org", "test-repo", 3),
            call.close_issue("test-org", "test-repo", 4),
            call.close_issue("test-org", "test-repo", 12),
            call.close_issue("test-org", "test-repo", 11),
            call.archive_project_card(1900),
            call.close_issue("test-org", "test-repo", 19),
        ]
        assert report.has_failures is False
        assert [i.number for i in report.removed] == [3, 4, 12, 11, 19]

    def test_run_reports_groups(self, cleanup, output) -> None:
        cleanup.run()

        lines = output.getvalue().splitlines()
        assert lines.count("::endgroup::") == 3
        branch_start = lines.index("::group::Branch Cards")
        tag_start = lines.index("::group::Tag Cards")
        sha_start = lines.index("::group::SHA Cards")
        assert branch_start < tag_start < sha_start

        branch_group = lines[branch_start:tag_start]
        assert "All Branch Cards ordered by most recently updated:" in branch_group
        assert "Cards with active branches that will not be removed:" in branch_group
        assert any(
            line.endswith("[qa] Branch Deploy: Main (🚀currently-in-qa)")
            for line in branch_group
        )
        assert any(
            line.endswith("Branch Deploy: develop (active branch)")
            for line in branch_group
        )

        tag_group = lines[tag_start:sha_start]
        assert "Cards with active branches that will not be removed:" not in tag_group
        assert "- There are no currently deployed Tag cards" in tag_group

    def test_count_strategy_protects_active_branches(
        self, config, client, reporter, now
    ) -> None:
        config = config.model_copy(
            update={
                "branch_cleanup_strategy": RetentionStrategy.NUMBER,
                "branch_threshold": 0,
            }
        )
        cleanup = DeployBoardCleanup(config, client, reporter=reporter, now=now)

        report = cleanup.run()

        removed = [i.number for i in report.decisions[RefType.BRANCH].removed]
        assert removed == [1, 3]

    def test_no_issues_skips_branch_listing(
        self, cleanup, client, output
    ) -> None:
        client.get_open_deploy_issues.return_value = []

        report = cleanup.run()

        client.list_active_branches.assert_not_called()
        client.close_issue.assert_not_called()
        assert report.removed == []
        text = output.getvalue()
        assert "does not appear to have any issues" in text
        assert "There were no active Branch cards to cleanup." in text
        assert "There were no active SHA cards to cleanup." in text

    def test_issue_query_failure_aborts(self, cleanup, client) -> None:
        client.get_open_deploy_issues.side_effect = IssueQueryError("bad response")

        with pytest.raises(IssueQueryError, match="bad response"):
            cleanup.run()

        client.list_active_branches.assert_not_called()
        client.close_issue.assert_not_called()

    def test_branch_listing_failure_aborts(self, cleanup, client) -> None:
        client.list_active_branches.side_effect = BranchListingError("forbidden")

        with pytest.raises(BranchListingError):
            cleanup.run()

        client.archive_project_card.assert_not_called()
        client.close_issue.assert_not_called()

    def test_mutation_failures_mark_run_failed(self, cleanup, client) -> None:
        client.close_issue.side_effect = IssueCloseError("boom")

        report = cleanup.run()

        assert client.close_issue.call_count == 5
        assert report.has_failures is True
        assert len(report.execution.failed) == 5

    def test_dry_run(self, config, client, reporter, now) -> None:
        cleanup = DeployBoardCleanup(
            config, client, reporter=reporter, dry_run=True, now=now
        )

        report = cleanup.run()

        client.archive_project_card.assert_not_called()
        client.close_issue.assert_not_called()
        assert len(report.execution.outcomes) == 5
        assert all(o.dry_run for o in report.execution.outcomes)
