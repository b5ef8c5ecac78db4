"""Safe YAML loading shared by the status document parsers.

PyYAML raises more than YAMLError on hostile input: implicit timestamps with
impossible dates raise ValueError during construction and very deep nesting
exhausts the recursive composer. All of these are reported as a single
ParserError subclass chosen by the caller.
"""

import datetime
import logging
from typing import Any

import yaml

from clique.core.exceptions import ParserError

logger = logging.getLogger(__name__)

__all__ = ["load_mapping", "scalar_text"]


def load_mapping(content: str, error_cls: type[ParserError]) -> dict[Any, Any]:
    """Load YAML text and return its root mapping.

    Args:
        content: Raw document text.
        error_cls: ParserError subclass raised on malformed input.

    Returns:
        The root mapping, or an empty dict when the document is empty or its
        root is a scalar or sequence.

    Raises:
        ParserError: (as error_cls) if the text is not well-formed YAML.

    """
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise error_cls(str(e)) from e
    except (ValueError, TypeError, OverflowError) as e:
        raise error_cls(f"invalid scalar value: {e}") from e
    except RecursionError as e:
        raise error_cls("document nesting exceeds parser limits") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.debug("Document root is %s, not a mapping; treating as empty", type(data).__name__)
        return {}
    return data


def scalar_text(value: Any) -> str | None:
    """Return the textual form of a YAML scalar, or None.

    Strings pass through. Dates and datetimes come back in ISO form because the
    loader resolves unquoted stamps like ``2025-12-01`` implicitly. Every other
    value (numbers, booleans, null, collections) has no textual form.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return None
