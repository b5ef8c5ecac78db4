"""Phase, agent and command inference for workflow items.

The nested and flat workflow schemas never record which phase a workflow
belongs to or which agent owns it, so both are looked up here from the
workflow id. The tables are read-only module constants.
"""

from types import MappingProxyType
from typing import Final

from clique.workflow.models import Phase

__all__ = [
    "DEFAULT_PHASE",
    "DEFAULT_AGENT",
    "WORKFLOW_PHASES",
    "WORKFLOW_AGENTS",
    "infer_phase",
    "infer_agent",
    "infer_command",
]

# Unknown workflows are treated as planning work owned by the PM
DEFAULT_PHASE: Final = 1
DEFAULT_AGENT: Final = "pm"

WORKFLOW_PHASES: Final = MappingProxyType(
    {
        # Phase 0 - Discovery
        "brainstorm": 0,
        "brainstorm-project": 0,
        "research": 0,
        "product-brief": 0,
        # Phase 1 - Planning
        "prd": 1,
        "validate-prd": 1,
        "ux-design": 1,
        "create-ux-design": 1,
        # Phase 2 - Solutioning
        "architecture": 2,
        "create-architecture": 2,
        "epics-stories": 2,
        "create-epics-and-stories": 2,
        "test-design": 2,
        "implementation-readiness": 2,
        # Phase 3 - Implementation
        "sprint-planning": 3,
    }
)

WORKFLOW_AGENTS: Final = MappingProxyType(
    {
        "brainstorm": "analyst",
        "brainstorm-project": "analyst",
        "research": "analyst",
        "product-brief": "analyst",
        "prd": "pm",
        "validate-prd": "pm",
        "ux-design": "ux-designer",
        "create-ux-design": "ux-designer",
        "architecture": "architect",
        "create-architecture": "architect",
        "epics-stories": "pm",
        "create-epics-and-stories": "pm",
        "test-design": "tea",
        "implementation-readiness": "architect",
        "sprint-planning": "sm",
    }
)


def infer_phase(workflow_id: str) -> Phase:
    """Return the phase for a workflow id, defaulting to planning (1)."""
    return WORKFLOW_PHASES.get(workflow_id, DEFAULT_PHASE)


def infer_agent(workflow_id: str) -> str:
    """Return the owning agent for a workflow id, defaulting to "pm"."""
    return WORKFLOW_AGENTS.get(workflow_id, DEFAULT_AGENT)


def infer_command(workflow_id: str) -> str:
    """Return the command that runs a workflow.

    Commands share the workflow id.
    """
    return workflow_id
