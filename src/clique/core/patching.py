"""Surgical text patching for YAML status documents.

Status updates rewrite exactly one scalar value in the original text instead
of loading and re-dumping the document, so comments, key order, quoting and
line endings elsewhere survive byte-for-byte. This module holds the pieces the
workflow and sprint updaters share: top-level section bounds, locator regex
construction around an escaped identifier, value span detection on a single
line, and quoting of replacement values.

Value spans are found by scanning rather than by a single regex so that
adversarial lines cannot trigger catastrophic backtracking.
"""

import logging
import re
from collections.abc import Iterator
from dataclasses import dataclass

import yaml
from yaml.resolver import Resolver

from clique.core.exceptions import UpdateError

logger = logging.getLogger(__name__)

__all__ = [
    "Line",
    "Section",
    "ValueSpan",
    "iter_lines",
    "indent_width",
    "is_blank_or_comment",
    "find_section",
    "is_locatable_key",
    "key_alternatives",
    "compile_locator",
    "locate_value",
    "apply_span",
    "double_quote",
    "format_scalar",
]

_DOUBLE_QUOTED = re.compile(r'"(?:[^"\\\r\n]|\\.)*"')
_SINGLE_QUOTED = re.compile(r"'(?:[^'\r\n]|'')*'")
_INLINE_COMMENT = re.compile(r"[ \t]#")
_TRAILER = re.compile(r"(?:[ \t]+#.*)?[ \t]*")

# Plain scalars made only of these characters read back as the same string
_PLAIN_SAFE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.+()\- ]*")

# Characters that must be escaped inside a double-quoted YAML scalar: the quote
# and backslash themselves, line breaks, and everything outside YAML's
# printable set
_NEEDS_ESCAPE = re.compile(
    "[\\\\\"\t\n\r\x85\u2028\u2029]|[^\x20-\x7e\xa0-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)
_NAMED_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\x00": "\\0",
    "\x85": "\\N",
    "\u2028": "\\L",
    "\u2029": "\\P",
}

_STR_TAG = "tag:yaml.org,2002:str"
_RESOLVER = Resolver()


@dataclass(frozen=True)
class Line:
    """One physical line of a document.

    ``start``/``end`` are offsets into the document; ``end`` stops before the
    ``\\n`` but includes a trailing ``\\r``. ``text`` has the line break removed.
    """

    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Section:
    """Body of a top-level block key such as ``workflows:``.

    Attributes:
        start: Offset of the first body line.
        end: Offset where the next top-level key (or the document) begins.
        child_indent: Leading whitespace of the first entry in the body, or
            None when the section could not be located and the whole document
            is searched instead.

    """

    start: int
    end: int
    child_indent: str | None


@dataclass(frozen=True)
class ValueSpan:
    """Location of a scalar value to replace.

    ``prefix`` and ``suffix`` are inserted around the new value when the old
    value was empty (``key:`` or ``key: # comment``) so the result stays a
    key/value pair.
    """

    start: int
    end: int
    prefix: str = ""
    suffix: str = ""


def iter_lines(content: str, start: int = 0, end: int | None = None) -> Iterator[Line]:
    """Yield the lines of content[start:end]."""
    stop = len(content) if end is None else end
    pos = start
    while pos < stop:
        newline = content.find("\n", pos, stop)
        line_end = stop if newline == -1 else newline
        text = content[pos:line_end]
        if text.endswith("\r"):
            text = text[:-1]
        yield Line(pos, line_end, text)
        pos = line_end + 1


def indent_width(text: str) -> int:
    return len(text) - len(text.lstrip(" \t"))


def is_blank_or_comment(text: str) -> bool:
    stripped = text.strip()
    return not stripped or stripped.startswith("#")


def is_locatable_key(identifier: str) -> bool:
    """Return True if identifier can name a key on a single document line."""
    return bool(identifier) and "\n" not in identifier and "\r" not in identifier


def key_alternatives(identifier: str) -> str:
    """Return a regex fragment matching identifier as a bare or quoted key."""
    escaped = re.escape(identifier)
    return f"(?:{escaped}|\"{escaped}\"|'{escaped}')"


def compile_locator(pattern: str, error_cls: type[UpdateError]) -> re.Pattern[str]:
    """Compile a multiline locator pattern.

    Raises:
        UpdateError: (as error_cls) if the pattern does not compile.

    """
    try:
        return re.compile(pattern, re.MULTILINE)
    except re.error as e:
        raise error_cls(f"invalid locator pattern: {e}") from e


def _ends_section(text: str) -> bool:
    if is_blank_or_comment(text) or text[0] in " \t":
        return False
    # Block sequences may sit at the same column as their parent key
    return not (text == "-" or text.startswith(("- ", "-\t")))


def find_section(content: str, name: str) -> Section:
    """Locate the body of the top-level block key ``name``.

    Falls back to the whole document (with no indent constraint) when the key
    is not written as a block header at column zero, e.g. in flow style.
    """
    header = re.compile(
        rf"^{key_alternatives(name)}:[ \t]*(?:#[^\r\n]*)?\r?$", re.MULTILINE
    ).search(content)
    if header is None:
        logger.debug("No block header for %r; searching whole document", name)
        return Section(0, len(content), None)

    body_start = min(header.end() + 1, len(content))
    child_indent: str | None = None
    for line in iter_lines(content, body_start):
        if _ends_section(line.text):
            return Section(body_start, line.start, child_indent or "")
        if child_indent is None and not is_blank_or_comment(line.text):
            child_indent = line.text[: indent_width(line.text)]
    return Section(body_start, len(content), child_indent or "")


def locate_value(content: str, sep_start: int, line_end: int) -> ValueSpan | None:
    """Find the scalar value that follows a ``key:`` on one line.

    Args:
        content: Full document text.
        sep_start: Offset just after the key's colon.
        line_end: Offset of the end of that line (before ``\\n``).

    Returns:
        The value span, or None if the rest of the line is not a single
        scalar optionally followed by a comment.

    """
    rest = content[sep_start:line_end]
    if rest.endswith("\r"):
        rest = rest[:-1]
    body = rest.lstrip(" \t")
    sep_width = len(rest) - len(body)
    value_start = sep_start + sep_width
    prefix = "" if sep_width else " "

    if not body:
        return ValueSpan(value_start, value_start, prefix=prefix)
    if body.startswith("#"):
        # Empty value followed by a comment; "key:#x" is not a mapping at all
        if not sep_width:
            return None
        return ValueSpan(value_start, value_start, suffix=" ")
    if not sep_width:
        return None

    if body[0] in "\"'":
        quoted = (_DOUBLE_QUOTED if body[0] == '"' else _SINGLE_QUOTED).match(body)
        if quoted is None or not _TRAILER.fullmatch(body, quoted.end()):
            return None
        return ValueSpan(value_start, value_start + quoted.end())

    comment = _INLINE_COMMENT.search(body)
    value = body[: comment.start()] if comment else body
    return ValueSpan(value_start, value_start + len(value.rstrip(" \t")))


def apply_span(content: str, span: ValueSpan, replacement: str) -> str:
    """Return content with only the span replaced."""
    return (
        content[: span.start]
        + span.prefix
        + replacement
        + span.suffix
        + content[span.end :]
    )


def _escape_char(match: re.Match[str]) -> str:
    char = match.group()
    named = _NAMED_ESCAPES.get(char)
    if named is not None:
        return named
    code = ord(char)
    if code <= 0xFF:
        return f"\\x{code:02x}"
    if code <= 0xFFFF:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def double_quote(value: str) -> str:
    """Render value as a double-quoted YAML scalar."""
    return '"' + _NEEDS_ESCAPE.sub(_escape_char, value) + '"'


def _reads_back_as_plain(value: str) -> bool:
    if not _PLAIN_SAFE.fullmatch(value) or value != value.rstrip(" "):
        return False
    # "true", "123", "null" and friends resolve to other types when unquoted
    return _RESOLVER.resolve(yaml.ScalarNode, value, (True, False)) == _STR_TAG


def format_scalar(value: str) -> str:
    """Render a replacement value, quoting only when a plain scalar would not do.

    Values containing a path separator or colon are always quoted.

    Examples:
        >>> format_scalar("in-progress")
        'in-progress'
        >>> format_scalar("docs/prd.md")
        '"docs/prd.md"'

    """
    if "/" in value or ":" in value or not _reads_back_as_plain(value):
        return double_quote(value)
    return value
