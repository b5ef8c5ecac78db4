"""Surgical status updates for workflow status documents.

The document shape is detected the same way the parser does it, then a
shape-specific locator finds the one value to rewrite:

- NESTED: the ``status:`` line inside the item's indented block under
  ``workflows:``.
- FLAT: the item's own ``id: value`` line under ``workflow_status:``.
- LEGACY: the ``status:`` field of the ``- id: <item>`` entry in the
  ``workflow_status:`` list.

Only that value span changes; the rest of the text is returned untouched.
"""

import logging
from collections.abc import Callable

from clique.core.exceptions import ItemNotFoundError, WorkflowParseError, WorkflowUpdateError
from clique.core.patching import (
    Section,
    ValueSpan,
    apply_span,
    compile_locator,
    double_quote,
    find_section,
    format_scalar,
    indent_width,
    is_blank_or_comment,
    is_locatable_key,
    iter_lines,
    key_alternatives,
    locate_value,
)
from clique.core.yaml_utils import load_mapping
from clique.workflow.parser import WorkflowFormat, detect_format

logger = logging.getLogger(__name__)

__all__ = ["update_workflow_status"]

_STATUS_FIELD = compile_locator(r"^[ \t]*status:", WorkflowUpdateError)


def _child_status(
    content: str, block_start: int, end: int, min_indent: int
) -> ValueSpan | None:
    """Find the ``status:`` value among the direct children of a block.

    The block runs from block_start until the first content line indented
    min_indent or less. Only lines at the indentation of the first child are
    considered, so a ``status:`` of a deeper mapping is never picked up.
    """
    child_indent: int | None = None
    for line in iter_lines(content, block_start, end):
        if is_blank_or_comment(line.text):
            continue
        width = indent_width(line.text)
        if width <= min_indent:
            break
        if child_indent is None:
            child_indent = width
        if width != child_indent:
            continue
        field = _STATUS_FIELD.match(content, line.start, line.end)
        if field is not None:
            return locate_value(content, field.end(), line.end)
    return None


def _in_section(indent: str, section: Section) -> bool:
    return section.child_indent is None or indent == section.child_indent


def _locate_nested(content: str, item_id: str) -> ValueSpan | None:
    section = find_section(content, "workflows")
    locator = compile_locator(
        rf"^(?P<indent>[ \t]*){key_alternatives(item_id)}:[ \t]*(?:#[^\r\n]*)?\r?$",
        WorkflowUpdateError,
    )
    for match in locator.finditer(content, section.start, section.end):
        if _in_section(match.group("indent"), section):
            return _child_status(
                content, match.end() + 1, section.end, len(match.group("indent"))
            )
    return None


def _locate_flat(content: str, item_id: str) -> ValueSpan | None:
    section = find_section(content, "workflow_status")
    locator = compile_locator(
        rf"^(?P<indent>[ \t]*){key_alternatives(item_id)}:", WorkflowUpdateError
    )
    for match in locator.finditer(content, section.start, section.end):
        if not _in_section(match.group("indent"), section):
            continue
        line_end = content.find("\n", match.end())
        span = locate_value(content, match.end(), len(content) if line_end == -1 else line_end)
        if span is not None:
            return span
    return None


def _locate_legacy(content: str, item_id: str) -> ValueSpan | None:
    section = find_section(content, "workflow_status")
    locator = compile_locator(
        rf"^(?P<dash>(?P<indent>[ \t]*)-[ \t]+)id:[ \t]*{key_alternatives(item_id)}"
        r"[ \t]*(?:#[^\r\n]*)?\r?$",
        WorkflowUpdateError,
    )
    for match in locator.finditer(content, section.start, section.end):
        if _in_section(match.group("indent"), section):
            # Sibling keys of "id" line up with it, one column past the dash
            key_column = len(match.group("dash"))
            return _child_status(content, match.end() + 1, section.end, key_column - 1)
    return None


# Legacy entries are always written quoted; the mapping shapes quote on demand
_FORMAT_STRATEGIES: dict[
    WorkflowFormat,
    tuple[Callable[[str, str], ValueSpan | None], Callable[[str], str]],
] = {
    WorkflowFormat.NESTED: (_locate_nested, format_scalar),
    WorkflowFormat.FLAT: (_locate_flat, format_scalar),
    WorkflowFormat.LEGACY: (_locate_legacy, double_quote),
}


def update_workflow_status(content: str, item_id: str, new_status: str) -> str:
    """Set one workflow item's status in workflow status document text.

    Args:
        content: Original document text.
        item_id: Workflow id whose status should change.
        new_status: Status value to write.

    Returns:
        The document text with only that item's status value replaced.

    Raises:
        WorkflowParseError: If content is not well-formed YAML.
        ItemNotFoundError: If item_id has no status in a recognised position,
            including when it is empty or spans lines.
        WorkflowUpdateError: If the locator pattern cannot be built.

    Examples:
        >>> text = "workflows:\\n  prd:\\n    status: not_started\\n"
        >>> update_workflow_status(text, "prd", "complete")
        'workflows:\\n  prd:\\n    status: complete\\n'

    """
    workflow_format = detect_format(load_mapping(content, WorkflowParseError))
    locate, render = _FORMAT_STRATEGIES[workflow_format]

    span = locate(content, item_id) if is_locatable_key(item_id) else None
    if span is None:
        logger.debug("Workflow item %r not found in %s document", item_id, workflow_format.value)
        raise ItemNotFoundError(item_id)

    return apply_span(content, span, render(new_status))
