"""Pytest configuration and fixtures for clique tests."""

from pathlib import Path
from textwrap import dedent

import pytest

NESTED_WORKFLOW = dedent("""\
    # Workflow status for Demo
    last_updated: 2025-12-01
    status: active
    status_note: Planning underway
    project: Demo
    project_type: software
    selected_track: bmad-method
    field_type: greenfield
    workflow_path: _bmad/bmm/workflows/greenfield.yaml

    workflows:
      product-brief:
        status: complete
        output_file: docs/product-brief.md
      prd:
        status: not_started  # next up
        notes: Waiting on brief review
      architecture:
        status: in_progress
      custom-step:
        status: not_started
""")

SPRINT_STATUS = dedent("""\
    # Sprint tracking
    project: Demo Project
    project_key: DMO

    development_status:
      epic-1: in-progress
      1-story-one: done
      1-story-two: in-progress
      epic-1-retrospective: optional
      epic-2: backlog
      2-story-alpha: backlog
""")


@pytest.fixture
def nested_workflow() -> str:
    """Nested-schema workflow status document text."""
    return NESTED_WORKFLOW


@pytest.fixture
def sprint_status() -> str:
    """Sprint status document text with two epics."""
    return SPRINT_STATUS


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Workspace root holding a workflow status file and one sprint status file."""
    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "bmm-workflow-status.yaml").write_text(NESTED_WORKFLOW, encoding="utf-8")
    sprint_dir = tmp_path / "_bmad-output" / "implementation-artifacts"
    sprint_dir.mkdir(parents=True)
    (sprint_dir / "sprint-status.yaml").write_text(SPRINT_STATUS, encoding="utf-8")
    return tmp_path
