"""Sprint status parser.

Rebuilds the two-level epic → story hierarchy from the flat
``development_status`` mapping of a sprint-status.yaml document using key
naming alone (see classifier). Parsing is lenient: stories whose epic is not
declared are dropped, and epic keys that share a number (``epic-1`` and
``epic-01``) collapse to the last one written.
"""

import logging
from typing import Any

from clique.core.exceptions import SprintParseError
from clique.core.yaml_utils import load_mapping, scalar_text
from clique.sprint.classifier import (
    EntryType,
    classify_entry,
    epic_number,
    normalize_number,
    number_sort_key,
    story_epic_number,
)
from clique.sprint.models import Epic, SprintData, Story

logger = logging.getLogger(__name__)

__all__ = ["parse_sprint_status"]

DEFAULT_PROJECT = "Unknown"


def _development_entries(data: dict[Any, Any]) -> list[tuple[str, str]]:
    section = data.get("development_status")
    if not isinstance(section, dict):
        return []

    entries = []
    for key, value in section.items():
        key_text = scalar_text(key)
        if not key_text:
            logger.debug("Skipping development_status entry with non-text key: %r", key)
            continue
        entries.append((key_text, scalar_text(value) or ""))
    return entries


def parse_sprint_status(content: str) -> SprintData:
    """Parse sprint status document text.

    Args:
        content: Raw YAML text of a sprint-status document.

    Returns:
        SprintData with epics sorted by number. ``project`` defaults to
        "Unknown" and ``project_key`` to an empty string; a missing
        development_status yields no epics.

    Raises:
        SprintParseError: If the text is not well-formed YAML.

    """
    data = load_mapping(content, SprintParseError)
    entries = _development_entries(data)

    # Pass 1: epics, keyed by normalised number
    epics: dict[str, tuple[str, str, str]] = {}
    for key, status in entries:
        digits = epic_number(key)
        if digits is None:
            continue
        number = normalize_number(digits)
        if number in epics:
            logger.debug("Epic %s overrides %s", key, epics[number][0])
        epics[number] = (key, digits, status)

    # Pass 2: stories, appended to their epic in document order
    stories: dict[str, list[Story]] = {number: [] for number in epics}
    for key, status in entries:
        digits = story_epic_number(key)
        if digits is None or classify_entry(key) is not EntryType.STORY:
            continue
        number = normalize_number(digits)
        if number not in epics:
            logger.debug("Dropping orphan story %s (no epic-%s)", key, digits)
            continue
        stories[number].append(Story(id=key, status=status, epic_id=epics[number][0]))

    ordered = sorted(epics, key=number_sort_key)
    return SprintData(
        project=scalar_text(data.get("project")) or DEFAULT_PROJECT,
        project_key=scalar_text(data.get("project_key")) or "",
        epics=tuple(
            Epic(
                id=epics[number][0],
                name=f"Epic {epics[number][1]}",
                status=epics[number][2],
                stories=tuple(stories[number]),
            )
            for number in ordered
        ),
    )
