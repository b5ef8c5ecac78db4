"""Tests for the shared text patching helpers."""

import pytest
import yaml

from clique.core.exceptions import WorkflowUpdateError
from clique.core.patching import (
    ValueSpan,
    apply_span,
    compile_locator,
    double_quote,
    find_section,
    format_scalar,
    is_locatable_key,
    key_alternatives,
    locate_value,
)


def _value_of(line: str) -> ValueSpan | None:
    """Locate the value of a single 'key: value' line."""
    return locate_value(line, line.index(":") + 1, len(line))


class TestLocateValue:
    """Tests for value span detection on one line."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("key: value", "value"),
            ("key: value  # comment", "value"),
            ("key: two words", "two words"),
            ("key: a#b", "a#b"),
            ('key: "quoted # not comment"', '"quoted # not comment"'),
            ('key: "esc \\" quote"  # c', '"esc \\" quote"'),
            ("key: 'it''s'", "'it''s'"),
            ("key: value\r", "value"),
            ("key:\tvalue", "value"),
        ],
    )
    def test_value_text(self, line, expected):
        """The span covers the scalar and stops at a comment or line end."""
        span = _value_of(line)
        assert span is not None
        assert line[span.start : span.end] == expected

    def test_empty_value(self):
        """A bare key gets a span with a separating space."""
        assert _value_of("key:") == ValueSpan(4, 4, prefix=" ")

    def test_empty_value_with_comment(self):
        """An empty value before a comment keeps the comment apart."""
        assert _value_of("key: # later") == ValueSpan(5, 5, suffix=" ")

    @pytest.mark.parametrize(
        "line", ["key:value", "key:#x", 'key: "unterminated', 'key: "a" trailing', "key: 'a' b"]
    )
    def test_not_a_single_scalar(self, line):
        """Lines that are not one scalar have no span."""
        assert _value_of(line) is None

    def test_pathological_line_is_fast(self):
        """Long runs of escapes and comment markers do not backtrack."""
        line = "key: " + "\"" + "\\" * 50000 + " #" * 50000
        # Must terminate without catastrophic backtracking
        _value_of(line)


class TestApplySpan:
    """Tests for apply_span."""

    def test_prefix_and_suffix(self):
        """Padding is added around an empty span."""
        assert apply_span("key:", ValueSpan(4, 4, prefix=" "), "x") == "key: x"
        assert apply_span("key: # c", ValueSpan(5, 5, suffix=" "), "x") == "key: x # c"

    def test_replacement_is_literal(self):
        """Group references are written as text."""
        assert apply_span("k: v", ValueSpan(3, 4), r"\1\g<0>") == r"k: \1\g<0>"


class TestFindSection:
    """Tests for top-level block detection."""

    def test_section_bounds(self):
        """The body runs until the next top-level key."""
        content = "a: 1\nworkflows:\n  prd:\n    status: x\nnext: 2\n"

        section = find_section(content, "workflows")

        assert content[section.start : section.end] == "  prd:\n    status: x\n"
        assert section.child_indent == "  "

    def test_sequence_at_key_column_stays_inside(self):
        """Dash items at column zero belong to the block."""
        content = "workflow_status:\n- id: prd\n  status: x\nother: 1\n"

        section = find_section(content, "workflow_status")

        assert content[section.start : section.end] == "- id: prd\n  status: x\n"
        assert section.child_indent == ""

    def test_comments_and_blank_lines_inside(self):
        """Comments and blank lines do not end the block."""
        content = "workflows:\n\n# note\n  prd:\n    status: x\n"
        section = find_section(content, "workflows")
        assert section.end == len(content)
        assert section.child_indent == "  "

    def test_missing_header_searches_everything(self):
        """Flow-style blocks fall back to the whole document."""
        content = "workflows: {prd: {status: x}}\n"
        section = find_section(content, "workflows")
        assert (section.start, section.end, section.child_indent) == (0, len(content), None)

    def test_header_with_comment(self):
        """A comment after the header is allowed."""
        section = find_section("workflows:  # all items\n  prd: x\n", "workflows")
        assert section.child_indent == "  "


class TestLocatorHelpers:
    """Tests for identifier matching helpers."""

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [("prd", True), ("1-a b", True), ("", False), ("a\nb", False), ("a\r", False)],
    )
    def test_is_locatable_key(self, identifier, expected):
        """Only non-empty single-line identifiers can be located."""
        assert is_locatable_key(identifier) is expected

    def test_key_alternatives_escape(self):
        """Keys match bare or quoted, with metacharacters escaped."""
        pattern = key_alternatives("a.b")
        assert compile_locator(f"^{pattern}:", WorkflowUpdateError).match("a.b:")
        assert not compile_locator(f"^{pattern}:", WorkflowUpdateError).match("axb:")
        assert compile_locator(f"^{pattern}:", WorkflowUpdateError).match("'a.b':")

    def test_compile_error_is_typed(self):
        """Pattern errors surface as the caller's update error."""
        with pytest.raises(WorkflowUpdateError, match="invalid locator pattern"):
            compile_locator("(", WorkflowUpdateError)


class TestQuoting:
    """Tests for replacement value rendering."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("done", "done"),
            ("in-progress", "in-progress"),
            ("ready for dev", "ready for dev"),
            ("docs/prd.md", '"docs/prd.md"'),
            ("a: b", '"a: b"'),
            ("true", '"true"'),
            ("yes", '"yes"'),
            ("null", '"null"'),
            ("123", '"123"'),
            ("1.5", '"1.5"'),
            ("2025-01-01", '"2025-01-01"'),
            ("", '""'),
            (" padded", '" padded"'),
            ("trailing ", '"trailing "'),
            ("-dash", '"-dash"'),
            ("a # b", '"a # b"'),
        ],
    )
    def test_format_scalar(self, value, expected):
        """Values are quoted only when plain text would not read back."""
        assert format_scalar(value) == expected

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ('say "hi"', '"say \\"hi\\""'),
            ("back\\slash", '"back\\\\slash"'),
            ("line\nbreak", '"line\\nbreak"'),
            ("tab\there", '"tab\\there"'),
            ("nul\x00", '"nul\\0"'),
            ("bell\x07", '"bell\\x07"'),
            ("del\x7f", '"del\\x7f"'),
            ("sep\u2028", '"sep\\L"'),
            ("café", '"café"'),
        ],
    )
    def test_double_quote(self, value, expected):
        """Escapes follow YAML double-quoted rules."""
        assert double_quote(value) == expected

    @pytest.mark.parametrize(
        "value", ["plain", "", 'q"uote', "\\", "\x00\x01\x1f", "  \x85", "🙂", " # :"]
    )
    def test_reads_back_unchanged(self, value):
        """Both renderings load back as the original string."""
        for rendered in (double_quote(value), format_scalar(value)):
            assert yaml.safe_load(f"key: {rendered}\n") == {"key": value}
