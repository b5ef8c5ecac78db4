"""Workflow status parsing and updating.

Public API:
    - WorkflowItem, WorkflowData: Parsed models
    - PREREQUISITE, PHASES, phase_sort_key: Phase markers and ordering
    - WorkflowFormat: Enum of recognised document shapes
    - detect_format: Determine the shape of a loaded document
    - parse_workflow_status: Parse workflow status text into WorkflowData
    - get_items_for_phase: Filter items by phase
    - update_workflow_status: Rewrite one item's status in the original text
    - infer_phase, infer_agent, infer_command: Inference table lookups
"""

from .inference import infer_agent, infer_command, infer_phase
from .models import PHASES, PREREQUISITE, PhaseInfo, WorkflowData, WorkflowItem, phase_sort_key
from .parser import WorkflowFormat, detect_format, get_items_for_phase, parse_workflow_status
from .updater import update_workflow_status

__all__ = [
    "infer_agent",
    "infer_command",
    "infer_phase",
    "PHASES",
    "PREREQUISITE",
    "PhaseInfo",
    "WorkflowData",
    "WorkflowItem",
    "phase_sort_key",
    "WorkflowFormat",
    "detect_format",
    "get_items_for_phase",
    "parse_workflow_status",
    "update_workflow_status",
]
