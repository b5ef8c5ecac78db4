"""Surgical story status updates for sprint status documents."""

import logging

from clique.core.exceptions import StoryNotFoundError, SprintUpdateError
from clique.core.patching import (
    apply_span,
    compile_locator,
    find_section,
    format_scalar,
    is_locatable_key,
    key_alternatives,
    locate_value,
)

logger = logging.getLogger(__name__)

__all__ = ["update_story_status"]


def update_story_status(content: str, story_id: str, new_status: str) -> str:
    """Set one entry's status in sprint status document text.

    Finds the ``<story_id>: <value>`` line (inside ``development_status``
    when that block exists) and replaces only the value. Plain statuses such
    as ``in-progress`` are written as-is; values that would not read back as
    the same plain string are double-quoted. The text is not parsed, so this
    never raises a parse error.

    Args:
        content: Original document text.
        story_id: Key of the entry to change (stories and epics alike).
        new_status: Status value to write.

    Returns:
        The document text with only that value replaced.

    Raises:
        StoryNotFoundError: If no ``story_id:`` value line exists, including
            when story_id is empty or spans lines.
        SprintUpdateError: If the locator pattern cannot be built.

    """
    if not is_locatable_key(story_id):
        raise StoryNotFoundError(story_id)

    section = find_section(content, "development_status")
    locator = compile_locator(
        rf"^(?P<indent>[ \t]*){key_alternatives(story_id)}:", SprintUpdateError
    )
    for match in locator.finditer(content, section.start, section.end):
        if section.child_indent is not None and match.group("indent") != section.child_indent:
            continue
        line_end = content.find("\n", match.end())
        span = locate_value(content, match.end(), len(content) if line_end == -1 else line_end)
        if span is not None:
            return apply_span(content, span, format_scalar(new_status))

    logger.debug("Story %r not found", story_id)
    raise StoryNotFoundError(story_id)
