"""Tests for the clique command-line interface."""

import json
from pathlib import Path

from typer.testing import CliRunner

from clique.cli import EXIT_CONFIG_ERROR, EXIT_ERROR, EXIT_SUCCESS, app

runner = CliRunner()


class TestWorkflowCommands:
    """Tests for the workflow command group."""

    def test_show_json(self, workspace: Path) -> None:
        """Items are emitted as JSON in (phase, id) order."""
        result = runner.invoke(app, ["workflow", "show", "--root", str(workspace), "--json"])

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = json.loads(result.stdout)
        assert data["project"] == "Demo"
        assert [item["id"] for item in data["items"]] == [
            "product-brief",
            "custom-step",
            "prd",
            "architecture",
        ]

    def test_show_table(self, workspace: Path) -> None:
        """The default output is a table of items."""
        result = runner.invoke(app, ["workflow", "show", "--root", str(workspace)])

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "architecture" in result.output
        assert "required" in result.output

    def test_set_updates_file(self, workspace: Path) -> None:
        """Only the targeted status changes on disk."""
        path = workspace / "docs" / "bmm-workflow-status.yaml"
        before = path.read_text()

        result = runner.invoke(app, ["workflow", "set", "prd", "in_progress", "--root", str(workspace)])

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert path.read_text() == before.replace(
            "status: not_started  # next up", "status: in_progress  # next up"
        )

    def test_set_unknown_item(self, workspace: Path) -> None:
        """An unknown id reports the not-found error."""
        result = runner.invoke(app, ["workflow", "set", "missing", "done", "--root", str(workspace)])

        assert result.exit_code == EXIT_ERROR
        assert "Item not found: missing" in result.output

    def test_no_workflow_file(self, tmp_path: Path) -> None:
        """A workspace without a workflow document is an error."""
        result = runner.invoke(app, ["workflow", "show", "--root", str(tmp_path)])

        assert result.exit_code == EXIT_ERROR
        assert "No workflow status file" in result.output

    def test_malformed_document(self, workspace: Path) -> None:
        """Parse errors are reported, not raised."""
        (workspace / "docs" / "bmm-workflow-status.yaml").write_text("workflows: [\n")

        result = runner.invoke(app, ["workflow", "show", "--root", str(workspace)])

        assert result.exit_code == EXIT_ERROR
        assert "Failed to parse YAML" in result.output

    def test_file_outside_workspace(self, workspace: Path) -> None:
        """--file cannot point outside the root."""
        result = runner.invoke(
            app,
            ["workflow", "show", "--root", str(workspace), "--file", "../elsewhere.yaml"],
        )

        assert result.exit_code == EXIT_ERROR
        assert "Path validation failed" in result.output

    def test_invalid_config(self, workspace: Path) -> None:
        """A bad clique.yaml exits with the config error code."""
        (workspace / "clique.yaml").write_text("enforce_workspace: maybe\n")

        result = runner.invoke(app, ["workflow", "show", "--root", str(workspace)])

        assert result.exit_code == EXIT_CONFIG_ERROR


class TestSprintCommands:
    """Tests for the sprint command group."""

    def test_show_json(self, workspace: Path) -> None:
        """Epics and stories are emitted as camelCase JSON."""
        result = runner.invoke(app, ["sprint", "show", "--root", str(workspace), "--json"])

        assert result.exit_code == EXIT_SUCCESS, result.output
        data = json.loads(result.stdout)
        assert data["projectKey"] == "DMO"
        assert [epic["id"] for epic in data["epics"]] == ["epic-1", "epic-2"]

    def test_show_table(self, workspace: Path) -> None:
        """Stories are listed under their epics."""
        result = runner.invoke(app, ["sprint", "show", "--root", str(workspace)])

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "2-story-alpha" in result.output

    def test_set_updates_file(self, workspace: Path) -> None:
        """The discovered sprint file is updated in place."""
        path = workspace / "_bmad-output" / "implementation-artifacts" / "sprint-status.yaml"

        result = runner.invoke(
            app, ["sprint", "set", "2-story-alpha", "ready-for-dev", "--root", str(workspace)]
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "2-story-alpha: ready-for-dev\n" in path.read_text()

    def test_set_with_explicit_file(self, workspace: Path) -> None:
        """--file is resolved against the root."""
        other = workspace / "other-sprint.yaml"
        other.write_text("development_status:\n  epic-1: backlog\n")

        result = runner.invoke(
            app,
            ["sprint", "set", "epic-1", "done", "--root", str(workspace), "--file", "other-sprint.yaml"],
        )

        assert result.exit_code == EXIT_SUCCESS, result.output
        assert other.read_text() == "development_status:\n  epic-1: done\n"

    def test_set_unknown_story(self, workspace: Path) -> None:
        """An unknown key reports the not-found error."""
        result = runner.invoke(app, ["sprint", "set", "9-nope", "done", "--root", str(workspace)])

        assert result.exit_code == EXIT_ERROR
        assert "Story not found: 9-nope" in result.output

    def test_no_sprint_file(self, tmp_path: Path) -> None:
        """A workspace without a sprint document is an error."""
        result = runner.invoke(app, ["sprint", "show", "--root", str(tmp_path)])
        assert result.exit_code == EXIT_ERROR


class TestPathCommands:
    """Tests for path check."""

    def test_inside(self) -> None:
        """Dot segments are resolved before comparing."""
        result = runner.invoke(app, ["path", "check", "/ws/./a/./b", "--root", "/ws"])
        assert result.exit_code == EXIT_SUCCESS

    def test_outside(self) -> None:
        """Climbing above the root is outside."""
        result = runner.invoke(app, ["path", "check", "/ws/../etc/passwd", "--root", "/ws"])
        assert result.exit_code == EXIT_ERROR

    def test_relative_to_root(self) -> None:
        """Relative paths are checked against the root."""
        assert runner.invoke(app, ["path", "check", "docs/prd.md", "--root", "/ws"]).exit_code == 0
        assert runner.invoke(app, ["path", "check", "../x", "--root", "/ws"]).exit_code == 1

    def test_windows_paths(self) -> None:
        """Drive letters and case are normalized."""
        result = runner.invoke(app, ["path", "check", r"C:\WS\docs\a.md", "--root", "c:/ws"])
        assert result.exit_code == EXIT_SUCCESS


def test_verbose_flag(workspace: Path) -> None:
    """--verbose enables debug logging without changing output."""
    result = runner.invoke(app, ["--verbose", "workflow", "show", "--root", str(workspace), "--json"])
    assert result.exit_code == EXIT_SUCCESS, result.output
