"""Tests for workflow value types."""

import dataclasses

import pytest

from clique.workflow.models import (
    PHASES,
    PREREQUISITE,
    WorkflowData,
    WorkflowItem,
    phase_sort_key,
)


class TestPhaseOrdering:
    """Tests for phase_sort_key."""

    def test_prerequisite_sorts_last(self):
        """Numbered phases come first, prerequisite after all of them."""
        assert sorted([3, PREREQUISITE, 0, 1], key=phase_sort_key) == [0, 1, 3, PREREQUISITE]

    def test_large_phase_before_prerequisite(self):
        """Any integer, however large or negative, precedes prerequisite."""
        assert phase_sort_key(10**6) < phase_sort_key(PREREQUISITE)
        assert phase_sort_key(-5) < phase_sort_key(0)

    def test_phase_labels(self):
        """The four numbered phases have fixed labels."""
        assert [(p.number, p.label) for p in PHASES] == [
            (0, "Discovery"),
            (1, "Planning"),
            (2, "Solutioning"),
            (3, "Implementation"),
        ]


class TestWorkflowItem:
    """Tests for WorkflowItem."""

    def test_empty_id_rejected(self):
        """An item must have an id."""
        with pytest.raises(ValueError, match="cannot be empty"):
            WorkflowItem(id="", phase=1, status="required")

    def test_immutable(self):
        """Items are frozen."""
        item = WorkflowItem(id="prd", phase=1, status="required")
        with pytest.raises(dataclasses.FrozenInstanceError):
            item.status = "done"  # type: ignore[misc]

    def test_sort_key_ties_broken_by_id(self):
        """Equal phases are ordered by id."""
        items = [
            WorkflowItem(id="b", phase=1, status=""),
            WorkflowItem(id="a", phase=1, status=""),
            WorkflowItem(id="z", phase=PREREQUISITE, status=""),
        ]
        assert [i.id for i in sorted(items, key=WorkflowItem.sort_key)] == ["a", "b", "z"]

    def test_to_dict_omits_missing_fields(self):
        """Absent optional fields are left out of to_dict."""
        item = WorkflowItem(id="prd", phase=PREREQUISITE, status="required", note="n")
        assert item.to_dict() == {
            "id": "prd",
            "phase": "prerequisite",
            "status": "required",
            "note": "n",
        }


class TestWorkflowData:
    """Tests for WorkflowData."""

    def test_get_item(self):
        """get_item finds items by id."""
        item = WorkflowItem(id="prd", phase=1, status="required")
        data = WorkflowData(items=(item,))
        assert data.get_item("prd") is item
        assert data.get_item("nope") is None

    def test_to_dict_without_status_note(self):
        """A missing status note is omitted."""
        assert "statusNote" not in WorkflowData().to_dict()
