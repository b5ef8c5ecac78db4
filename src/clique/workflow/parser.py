"""Schema-tolerant workflow status parser.

Workflow status files (bmm-workflow-status.yaml) have been written in three
shapes over time. The shape is detected once from the document structure and
the document is handed to one parser per shape:

- NESTED: ``workflows`` maps each id to a mapping with its own ``status``,
  optional ``output_file`` and ``notes``/``note``.
- FLAT: ``workflow_status`` maps each id directly to a status string, which
  may be the path of the produced document.
- LEGACY: ``workflow_status`` is a list of entries that carry their own
  ``id``, ``phase``, ``status``, ``agent``, ``command`` and ``note``.

Public API:
    - WorkflowFormat: Enum of the recognised shapes
    - detect_format: Determine the shape of a loaded document
    - parse_workflow_status: Main entry point, text to WorkflowData
    - get_items_for_phase: Filter parsed items by phase
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from clique.core.exceptions import WorkflowParseError
from clique.core.yaml_utils import load_mapping, scalar_text
from clique.workflow.inference import infer_agent, infer_command, infer_phase
from clique.workflow.models import PREREQUISITE, Phase, WorkflowData, WorkflowItem

logger = logging.getLogger(__name__)

__all__ = [
    "WorkflowFormat",
    "detect_format",
    "parse_workflow_status",
    "get_items_for_phase",
]

# Values with one of these endings are recorded as output files in FLAT documents
DOCUMENT_EXTENSIONS: tuple[str, ...] = (".md", ".yaml", ".yml", ".json", ".txt")

# Raw NESTED statuses that are rewritten for display
_STATUS_COMPLETE = "complete"
_STATUS_NOT_STARTED = "not_started"
_STATUS_REQUIRED = "required"


class WorkflowFormat(Enum):
    """Detected workflow status document shape."""

    NESTED = "nested"
    FLAT = "flat"
    LEGACY = "legacy"


def detect_format(data: dict[Any, Any]) -> WorkflowFormat:
    """Detect the workflow status shape of a loaded document.

    Checked in priority order, first match wins: a ``workflows`` mapping is
    NESTED, a ``workflow_status`` mapping is FLAT, anything else is LEGACY
    (including documents with neither key, which yield no items).

    Args:
        data: Root mapping of the loaded document.

    Returns:
        The detected WorkflowFormat.

    """
    if isinstance(data.get("workflows"), dict):
        return WorkflowFormat.NESTED
    if isinstance(data.get("workflow_status"), dict):
        return WorkflowFormat.FLAT
    return WorkflowFormat.LEGACY


def _looks_like_file_path(value: str) -> bool:
    return "/" in value or value.endswith(DOCUMENT_EXTENSIONS)


def _item_id(key: Any) -> str | None:
    item_id = scalar_text(key)
    if not item_id:
        logger.debug("Skipping workflow entry with non-text or empty key: %r", key)
        return None
    return item_id


def _inferred_item(
    item_id: str,
    status: str,
    note: str | None = None,
    output_file: str | None = None,
) -> WorkflowItem:
    return WorkflowItem(
        id=item_id,
        phase=infer_phase(item_id),
        status=status,
        agent=infer_agent(item_id),
        command=infer_command(item_id),
        note=note,
        output_file=output_file,
    )


def _normalize_nested_status(raw_status: str, output_file: str | None) -> str:
    if raw_status == _STATUS_COMPLETE:
        return output_file if output_file is not None else _STATUS_COMPLETE
    if raw_status == _STATUS_NOT_STARTED:
        return _STATUS_REQUIRED
    return raw_status


def _parse_nested(data: dict[Any, Any]) -> list[WorkflowItem]:
    items = []
    for key, entry in data["workflows"].items():
        item_id = _item_id(key)
        if item_id is None:
            continue
        fields = entry if isinstance(entry, dict) else {}

        raw_status = scalar_text(fields.get("status")) or _STATUS_NOT_STARTED
        output_file = scalar_text(fields.get("output_file"))
        note = scalar_text(fields.get("notes"))
        if note is None:
            note = scalar_text(fields.get("note"))

        items.append(
            _inferred_item(
                item_id,
                _normalize_nested_status(raw_status, output_file),
                note=note,
                output_file=output_file,
            )
        )
    return items


def _parse_flat(data: dict[Any, Any]) -> list[WorkflowItem]:
    items = []
    for key, value in data["workflow_status"].items():
        item_id = _item_id(key)
        if item_id is None:
            continue
        status = scalar_text(value) or ""
        output_file = status if _looks_like_file_path(status) else None
        items.append(_inferred_item(item_id, status, output_file=output_file))
    return items


def _legacy_phase(value: Any, item_id: str) -> Phase:
    # bool is an int subclass; "phase: yes" is not a phase number
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if value == PREREQUISITE:
        return PREREQUISITE
    return infer_phase(item_id)


def _parse_legacy(data: dict[Any, Any]) -> list[WorkflowItem]:
    entries = data.get("workflow_status")
    if not isinstance(entries, list):
        return []

    items = []
    for entry in entries:
        if not isinstance(entry, dict):
            logger.debug("Skipping non-mapping workflow_status entry: %r", entry)
            continue
        item_id = _item_id(entry.get("id"))
        if item_id is None:
            continue
        items.append(
            WorkflowItem(
                id=item_id,
                phase=_legacy_phase(entry.get("phase"), item_id),
                status=scalar_text(entry.get("status")) or "",
                agent=scalar_text(entry.get("agent")),
                command=scalar_text(entry.get("command")),
                note=scalar_text(entry.get("note")),
            )
        )
    return items


_FORMAT_PARSERS: dict[WorkflowFormat, Callable[[dict[Any, Any]], list[WorkflowItem]]] = {
    WorkflowFormat.NESTED: _parse_nested,
    WorkflowFormat.FLAT: _parse_flat,
    WorkflowFormat.LEGACY: _parse_legacy,
}


def _text_field(data: dict[Any, Any], key: str) -> str:
    return scalar_text(data.get(key)) or ""


def parse_workflow_status(content: str) -> WorkflowData:
    """Parse workflow status document text.

    Args:
        content: Raw YAML text of a workflow status document.

    Returns:
        WorkflowData with metadata and items sorted by (phase, id). Missing
        metadata fields default to empty strings, ``status_note`` to None.

    Raises:
        WorkflowParseError: If the text is not well-formed YAML.

    Examples:
        >>> data = parse_workflow_status("workflows:\\n  prd:\\n    status: not_started\\n")
        >>> data.items[0].status
        'required'

    """
    data = load_mapping(content, WorkflowParseError)
    workflow_format = detect_format(data)
    logger.debug("Detected workflow status format: %s", workflow_format.value)

    items = _FORMAT_PARSERS[workflow_format](data)
    items.sort(key=WorkflowItem.sort_key)

    project = scalar_text(data.get("project"))
    if project is None:
        project = scalar_text(data.get("project_name"))

    return WorkflowData(
        last_updated=_text_field(data, "last_updated"),
        status=_text_field(data, "status"),
        status_note=scalar_text(data.get("status_note")),
        project=project or "",
        project_type=_text_field(data, "project_type"),
        selected_track=_text_field(data, "selected_track"),
        field_type=_text_field(data, "field_type"),
        workflow_path=_text_field(data, "workflow_path"),
        items=tuple(items),
    )


def get_items_for_phase(data: WorkflowData, phase: Phase) -> tuple[WorkflowItem, ...]:
    """Return the items of a parsed document that belong to one phase."""
    return tuple(item for item in data.items if item.phase == phase)
