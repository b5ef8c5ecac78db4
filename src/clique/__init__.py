"""clique - parse and surgically update workflow and sprint status documents.

Public API:
    - parse_workflow_status: Workflow status text to WorkflowData
    - parse_sprint_status: Sprint status text to SprintData
    - update_workflow_status: Rewrite one workflow item's status in place
    - update_story_status: Rewrite one story's status in place
    - is_inside_workspace, get_validated_path: String-only path containment
"""

from .core.exceptions import (
    CliqueError,
    ItemNotFoundError,
    NotFoundError,
    ParserError,
    PathValidationError,
    SprintError,
    SprintParseError,
    SprintUpdateError,
    StoryNotFoundError,
    UpdateError,
    WorkflowError,
    WorkflowParseError,
    WorkflowUpdateError,
)
from .sprint import Epic, SprintData, Story, parse_sprint_status, update_story_status
from .workflow import (
    PREREQUISITE,
    WorkflowData,
    WorkflowItem,
    parse_workflow_status,
    update_workflow_status,
)
from .workspace import get_validated_path, is_inside_workspace

__version__ = "0.1.0"

__all__ = [
    "parse_workflow_status",
    "parse_sprint_status",
    "update_workflow_status",
    "update_story_status",
    "is_inside_workspace",
    "get_validated_path",
    "PREREQUISITE",
    "WorkflowData",
    "WorkflowItem",
    "SprintData",
    "Epic",
    "Story",
    "CliqueError",
    "ParserError",
    "NotFoundError",
    "UpdateError",
    "WorkflowError",
    "WorkflowParseError",
    "ItemNotFoundError",
    "WorkflowUpdateError",
    "SprintError",
    "SprintParseError",
    "StoryNotFoundError",
    "SprintUpdateError",
    "PathValidationError",
]
