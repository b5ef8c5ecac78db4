"""Sprint status data models.

Immutable value types produced by the sprint status parser: SprintData holds
epics sorted by number, each Epic holds its stories in document order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

__all__ = ["StoryStatus", "Story", "Epic", "SprintData"]


class StoryStatus(Enum):
    """Known sprint-status values.

    Documents may carry any string; UNKNOWN stands in for values outside
    this set when a typed view is wanted.
    """

    BACKLOG = "backlog"
    DRAFTED = "drafted"
    READY_FOR_DEV = "ready-for-dev"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"
    OPTIONAL = "optional"
    COMPLETED = "completed"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: str) -> "StoryStatus":
        """Map a raw status string to a StoryStatus, UNKNOWN if unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Story:
    """A story entry.

    Attributes:
        id: Story key (e.g. "4-7-create-admin-staff-domain").
        status: Raw status string.
        epic_id: Id of the owning epic (e.g. "epic-4").

    """

    id: str
    status: str
    epic_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "status": self.status, "epicId": self.epic_id}


@dataclass(frozen=True)
class Epic:
    """An epic with its stories in document order.

    Attributes:
        id: Epic key (e.g. "epic-4").
        name: Display name (e.g. "Epic 4").
        status: Raw status string.
        stories: Stories whose key starts with this epic's number.

    """

    id: str
    name: str
    status: str
    stories: tuple[Story, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for story in self.stories:
            if story.epic_id != self.id:
                raise ValueError(f"Story {story.id} belongs to {story.epic_id}, not {self.id}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "stories": [story.to_dict() for story in self.stories],
        }


@dataclass(frozen=True)
class SprintData:
    """Parsed sprint status document."""

    project: str
    project_key: str
    epics: tuple[Epic, ...] = field(default_factory=tuple)

    def get_story(self, story_id: str) -> Story | None:
        """Return the story with the given id, or None."""
        for epic in self.epics:
            for story in epic.stories:
                if story.id == story_id:
                    return story
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "project": self.project,
            "projectKey": self.project_key,
            "epics": [epic.to_dict() for epic in self.epics],
        }
