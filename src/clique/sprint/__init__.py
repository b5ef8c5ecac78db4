"""Sprint status parsing and updating.

Public API:
    - EntryType: Enum for development_status key classification
    - classify_entry: Classify a key by naming convention
    - Story, Epic, SprintData: Parsed hierarchy models
    - StoryStatus: Enum of known status values
    - parse_sprint_status: Parse sprint-status text into SprintData
    - update_story_status: Rewrite one entry's status in the original text
"""

from .classifier import EntryType, classify_entry
from .models import Epic, SprintData, Story, StoryStatus
from .parser import parse_sprint_status
from .updater import update_story_status

__all__ = [
    "EntryType",
    "classify_entry",
    "Epic",
    "SprintData",
    "Story",
    "StoryStatus",
    "parse_sprint_status",
    "update_story_status",
]
