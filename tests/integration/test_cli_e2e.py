"""End-to-end CLI tests against a fake Jira server."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from jira_subtask_generator.cli import cli

pytestmark = pytest.mark.integration


@pytest.fixture
def runner() -> CliRunner:
    """Create CLI runner."""
    return CliRunner()


class TestCLIEndToEnd:
    """Parse a file and create its subtasks through the HTTP layer."""

    def test_creates_subtasks(self, runner: CliRunner, fake_jira, sample_file: Path):
        """Test every section becomes one subtask under the parent."""
        result = runner.invoke(cli, ["--file", str(sample_file)])

        assert result.exit_code == 0
        assert [f["summary"] for f in fake_jira.created] == ["Task One", "Task Two"]
        assert all(f["parent"] == {"key": "STORY-123"} for f in fake_jira.created)
        assert all(f["issuetype"] == {"id": "10003"} for f in fake_jira.created)
        assert [f["timetracking"]["originalEstimate"] for f in fake_jira.created] == ["2h", "4h"]

        description = fake_jira.created[0]["description"]["content"][0]["content"][0]["text"]
        assert description == "Some test\r\non multiple lines\r\n"
        assert fake_jira.created[1]["description"]["content"][0]["content"] == []

        assert "PROJ1-1" in result.output
        assert "PROJ1-2" in result.output
        assert "Created subtask: PROJ1-1 for 'Task One'" in result.output

    def test_dry_run_makes_no_requests(self, runner: CliRunner, fake_jira, sample_file: Path):
        """Test dry run never reaches Jira."""
        result = runner.invoke(cli, ["--file", str(sample_file), "--dry-run"])

        assert result.exit_code == 0
        assert fake_jira.created == []
        assert "[Dry Run] Would create subtask: 'Task One' - 2h" in result.output

    def test_no_subtask_issue_type(self, runner: CliRunner, fake_jira, sample_file: Path):
        """Test exit code 2 when the project has no subtask type."""
        fake_jira.issue_types = [{"id": "10001", "name": "Story", "subtask": False}]

        result = runner.invoke(cli, ["--file", str(sample_file)])

        assert result.exit_code == 2
        assert fake_jira.created == []

    def test_fail_fast_on_rejected_subtask(self, runner: CliRunner, fake_jira, tmp_path: Path):
        """Test the run stops at the first rejected subtask."""
        path = tmp_path / "three.md"
        path.write_text("@PROJ1:STORY-123\n## A || 1\n## B || 2\n## C || 3\n")
        fake_jira.reject_titles = {"B"}

        result = runner.invoke(cli, ["--file", str(path)])

        assert result.exit_code == 3
        assert [f["summary"] for f in fake_jira.created] == ["A"]
        assert "Jira API Error: 400" in result.output
        assert "1 created, 1 failed, 1 skipped" in result.output

    def test_continue_on_error(self, runner: CliRunner, fake_jira, tmp_path: Path):
        """Test remaining subtasks are created with --continue-on-error."""
        path = tmp_path / "three.md"
        path.write_text("@PROJ1:STORY-123\n## A || 1\n## B || 2\n## C || 3\n")
        fake_jira.reject_titles = {"B"}

        result = runner.invoke(cli, ["--file", str(path), "--continue-on-error"])

        assert result.exit_code == 3
        assert [f["summary"] for f in fake_jira.created] == ["A", "C"]
        assert "2 created, 1 failed, 0 skipped" in result.output

    def test_unknown_project(self, runner: CliRunner, fake_jira, sample_file: Path):
        """Test an HTTP error during lookup exits with code 3."""
        fake_jira.missing_projects = {"PROJ1"}

        result = runner.invoke(cli, ["--file", str(sample_file)])

        assert result.exit_code == 3
        assert fake_jira.created == []
        assert "Jira API Error: 404" in result.output
