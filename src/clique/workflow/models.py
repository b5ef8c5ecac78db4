"""Workflow status data models.

Immutable value types produced by the workflow status parser. A fresh set of
objects is built on every parse; updates operate on document text and need a
re-parse to be observed.

Usage:
    from clique.workflow.models import WorkflowItem, phase_sort_key

    item = WorkflowItem(id="prd", phase=1, status="required")
"""

from dataclasses import dataclass, field
from typing import Any, Literal

__all__ = [
    "PREREQUISITE",
    "Phase",
    "PhaseInfo",
    "PHASES",
    "phase_sort_key",
    "WorkflowItem",
    "WorkflowData",
]

PREREQUISITE: Literal["prerequisite"] = "prerequisite"

Phase = int | Literal["prerequisite"]


@dataclass(frozen=True)
class PhaseInfo:
    """Display metadata for one methodology phase."""

    id: str
    number: Phase
    label: str


PHASES: tuple[PhaseInfo, ...] = (
    PhaseInfo(id="discovery", number=0, label="Discovery"),
    PhaseInfo(id="planning", number=1, label="Planning"),
    PhaseInfo(id="solutioning", number=2, label="Solutioning"),
    PhaseInfo(id="implementation", number=3, label="Implementation"),
)


def phase_sort_key(phase: Phase) -> tuple[int, int]:
    """Return the total-order key for a phase.

    Numbered phases sort by value; the prerequisite marker sorts after
    every one of them.

    Examples:
        >>> sorted([2, "prerequisite", 0], key=phase_sort_key)
        [0, 2, 'prerequisite']

    """
    if phase == PREREQUISITE:
        return (1, 0)
    return (0, int(phase))


@dataclass(frozen=True)
class WorkflowItem:
    """One workflow entry from a workflow status document.

    Attributes:
        id: Workflow identifier (e.g. "prd"). Never empty.
        phase: Phase number or the prerequisite marker.
        status: Normalized status. For the nested schema a completed item
            carries its output file path here when one is declared.
        agent: Owning agent role.
        command: Command that runs the workflow.
        note: Free-form note.
        output_file: Declared output document path.

    """

    id: str
    phase: Phase
    status: str
    agent: str | None = None
    command: str | None = None
    note: str | None = None
    output_file: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("WorkflowItem id cannot be empty")

    def sort_key(self) -> tuple[tuple[int, int], str]:
        return (phase_sort_key(self.phase), self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase mapping used by editor bindings."""
        result: dict[str, Any] = {"id": self.id, "phase": self.phase, "status": self.status}
        for key, value in (
            ("agent", self.agent),
            ("command", self.command),
            ("note", self.note),
            ("outputFile", self.output_file),
        ):
            if value is not None:
                result[key] = value
        return result


@dataclass(frozen=True)
class WorkflowData:
    """Parsed workflow status document.

    Items are ordered by (phase, id) ascending.
    """

    last_updated: str = ""
    status: str = ""
    status_note: str | None = None
    project: str = ""
    project_type: str = ""
    selected_track: str = ""
    field_type: str = ""
    workflow_path: str = ""
    items: tuple[WorkflowItem, ...] = field(default_factory=tuple)

    def get_item(self, item_id: str) -> WorkflowItem | None:
        """Return the item with the given id, or None."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase mapping used by editor bindings."""
        result: dict[str, Any] = {
            "lastUpdated": self.last_updated,
            "status": self.status,
            "project": self.project,
            "projectType": self.project_type,
            "selectedTrack": self.selected_track,
            "fieldType": self.field_type,
            "workflowPath": self.workflow_path,
            "items": [item.to_dict() for item in self.items],
        }
        if self.status_note is not None:
            result["statusNote"] = self.status_note
        return result
