"""Key classification for sprint-status development_status entries.

The sprint parser rebuilds the epic/story hierarchy purely from key naming,
so every key is classified first. Classification follows a strict priority
order:
1. Key containing ``retrospective`` → RETROSPECTIVE (never a story)
2. ``epic-{N}`` → EPIC
3. ``{N}-...`` → STORY (owned by epic N)
4. Anything else → UNKNOWN

N is a run of ASCII digits; matching is case-sensitive.
"""

import logging
import re
from enum import Enum

logger = logging.getLogger(__name__)

__all__ = [
    "EntryType",
    "RETROSPECTIVE_MARKER",
    "classify_entry",
    "epic_number",
    "story_epic_number",
    "normalize_number",
    "number_sort_key",
]

RETROSPECTIVE_MARKER = "retrospective"

_EPIC_PATTERN = re.compile(r"^epic-([0-9]+)$")
_STORY_PATTERN = re.compile(r"^([0-9]+)-")


class EntryType(Enum):
    """Classification of a development_status key.

    - EPIC: Epic-level entry (``epic-3``). Owns stories with prefix ``3-``.
    - STORY: Story entry (``3-2-login-form``) attached to its epic if present.
    - RETROSPECTIVE: Retrospective entry, excluded from the hierarchy.
    - UNKNOWN: Unrecognised key, excluded from the hierarchy.
    """

    EPIC = "epic"
    STORY = "story"
    RETROSPECTIVE = "retrospective"
    UNKNOWN = "unknown"


def classify_entry(key: str) -> EntryType:
    """Classify a development_status key by naming convention.

    Examples:
        >>> classify_entry("epic-12")
        <EntryType.EPIC: 'epic'>
        >>> classify_entry("12-3-story-name")
        <EntryType.STORY: 'story'>
        >>> classify_entry("epic-12-retrospective")
        <EntryType.RETROSPECTIVE: 'retrospective'>

    """
    if not key:
        return EntryType.UNKNOWN
    if RETROSPECTIVE_MARKER in key:
        return EntryType.RETROSPECTIVE
    if _EPIC_PATTERN.match(key):
        return EntryType.EPIC
    if _STORY_PATTERN.match(key):
        return EntryType.STORY
    return EntryType.UNKNOWN


def epic_number(key: str) -> str | None:
    """Return the digits of an ``epic-N`` key, or None."""
    match = _EPIC_PATTERN.match(key)
    return match.group(1) if match else None


def story_epic_number(key: str) -> str | None:
    """Return the leading epic digits of a ``N-...`` story key, or None."""
    match = _STORY_PATTERN.match(key)
    return match.group(1) if match else None


def normalize_number(digits: str) -> str:
    """Strip leading zeros so ``epic-01`` and ``epic-1`` share one key."""
    return digits.lstrip("0") or "0"


def number_sort_key(digits: str) -> tuple[int, str]:
    """Numeric ordering of a digit string without int() conversion.

    Comparing (length, text) of the normalised digits orders arbitrarily long
    numbers correctly and is immune to int conversion limits.
    """
    normalized = normalize_number(digits)
    return (len(normalized), normalized)
