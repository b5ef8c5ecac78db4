"""Exception hierarchy for clique.

Every public operation reports failure by raising a subclass of CliqueError.
The workflow and sprint families mirror each other so callers can catch
either the document family (WorkflowError, SprintError) or the failure kind
(ParserError, NotFoundError, UpdateError) regardless of document type.
"""

__all__ = [
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
    "ConfigError",
    "DocumentIOError",
]


class CliqueError(Exception):
    """Base exception for all clique errors."""


class ParserError(CliqueError):
    """Input is not a well-formed structured document.

    Attributes:
        detail: Message from the underlying YAML loader.

    """

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse YAML: {detail}")
        self.detail = detail


class NotFoundError(CliqueError):
    """Target identifier is not present in a recognised value position.

    Attributes:
        identifier: The identifier that was looked up.

    """

    label = "Identifier"

    def __init__(self, identifier: str) -> None:
        super().__init__(f"{self.label} not found: {identifier}")
        self.identifier = identifier


class UpdateError(CliqueError):
    """Locator pattern for an update could not be built or applied."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Update failed: {detail}")
        self.detail = detail


class WorkflowError(CliqueError):
    """Base for workflow status document errors."""


class WorkflowParseError(WorkflowError, ParserError):
    """Workflow status document is malformed."""


class ItemNotFoundError(WorkflowError, NotFoundError):
    """Workflow item id not found in the document."""

    label = "Item"


class WorkflowUpdateError(WorkflowError, UpdateError):
    """Workflow item update failed."""


class SprintError(CliqueError):
    """Base for sprint status document errors."""


class SprintParseError(SprintError, ParserError):
    """Sprint status document is malformed."""


class StoryNotFoundError(SprintError, NotFoundError):
    """Story id not found in the document."""

    label = "Story"


class SprintUpdateError(SprintError, UpdateError):
    """Story update failed."""


class PathValidationError(CliqueError):
    """A file path resolved outside the trusted workspace root.

    Attributes:
        path: The rejected path as supplied by the caller.
        root: The workspace root it was checked against.

    """

    def __init__(self, path: str, root: str) -> None:
        super().__init__(f"Path validation failed: {path} is outside workspace {root}")
        self.path = path
        self.root = root


class ConfigError(CliqueError):
    """Configuration file is unreadable, not valid YAML, or fails validation."""


class DocumentIOError(CliqueError):
    """A status document could not be read or written."""
