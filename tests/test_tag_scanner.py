"""Unit tests for the markup tag scanner.

The scanner tokenizes ``<element ...>`` tags and pairs openers with closers
through an explicit stack. These tests cover attribute parsing, top-level
versus nested pairs, self-closing tags and the nesting errors.
"""

from __future__ import annotations

import pytest

from xtemplate.errors import UnmatchedClosingTagError, UnterminatedTagError
from xtemplate.scanner.tags import (
    TagKind,
    find_tag,
    list_tags,
    match_pairs,
    match_tags,
    parse_attributes,
    scan_tags,
)


def test_parse_attributes_handles_quoting_styles() -> None:
    """Double-quoted, single-quoted, bare and valueless attributes are parsed."""
    attributes = parse_attributes(' type="card" Class=\'red wide\' size=3 hidden')
    assert attributes == {
        "type": "card",
        "class": "red wide",
        "size": "3",
        "hidden": "",
    }, "Expected every attribute form with lower-cased keys"


def test_parse_attributes_keeps_first_duplicate() -> None:
    """A repeated key keeps the value of its first occurrence."""
    assert parse_attributes('type="a" type="b"') == {"type": "a"}


def test_parse_attributes_preserves_scan_order() -> None:
    """Attribute order follows the source text."""
    attributes = parse_attributes('id="x" type="card" class="red"')
    assert list(attributes) == ["id", "type", "class"]


def test_scan_tags_classifies_tokens() -> None:
    """Opening, closing and self-closing tokens are told apart."""
    tokens = list(scan_tags('<slot name="a">x</slot><component type="c"/>'))
    assert [(token.element, token.kind) for token in tokens] == [
        ("slot", TagKind.OPENING),
        ("slot", TagKind.CLOSING),
        ("component", TagKind.SELF_CLOSING),
    ]


def test_scan_tags_filters_elements_case_insensitively() -> None:
    """Only the requested elements are reported, whatever their case."""
    tokens = list(scan_tags("<div><Slot>x</SLOT></div>", ["slot"]))
    assert [token.element for token in tokens] == ["slot", "slot"]


def test_scan_tags_ignores_angle_brackets_in_quoted_values() -> None:
    """A ``>`` inside a quoted attribute value does not end the tag."""
    (token,) = scan_tags('<component type="x" title="a > b">', ["component"])
    assert token.attributes["title"] == "a > b"


def test_find_tag_returns_outermost_pair() -> None:
    """The first top-level pair is returned with its full body."""
    src = 'a<slot name="outer">b<slot name="inner">c</slot>d</slot>e'
    tag = find_tag(src, "slot")
    assert tag is not None, "Expected a slot pair"
    assert tag.name == "outer"
    assert tag.body == 'b<slot name="inner">c</slot>d'
    assert src[tag.start : tag.end] == src[1:-1]
    assert tag.kind is TagKind.PAIR


def test_find_tag_returns_none_without_element() -> None:
    """Text without the element yields ``None``."""
    assert find_tag("<div>plain</div>", "slot") is None


def test_list_tags_skips_nested_pairs() -> None:
    """Only depth-zero pairs are listed, in source order."""
    src = '<slot name="a"><slot name="n">x</slot></slot><slot name="b"></slot>'
    assert [tag.name for tag in list_tags(src, "slot")] == ["a", "b"]


def test_match_tags_lists_innermost_first() -> None:
    """Every pair is reported in closing order."""
    src = '<slot name="a"><slot name="n">x</slot></slot><slot name="b"></slot>'
    assert [tag.name for tag in match_tags(src, "slot")] == ["n", "a", "b"]


def test_self_closing_pair_has_empty_body() -> None:
    """A self-closing tag is a complete pair with no body."""
    tag = find_tag('<component type="card" class="red" />', "component")
    assert tag is not None
    assert tag.id == "card"
    assert tag.body == ""
    assert tag.attributes == {"type": "card", "class": "red"}
    assert tag.kind is TagKind.SELF_CLOSING, "Self-closing tags keep their kind"


def test_unterminated_tag_reports_position() -> None:
    """An opener left on the stack raises with its line and column."""
    src = 'first line\n  <slot name="a">never closed'
    with pytest.raises(UnterminatedTagError) as excinfo:
        list_tags(src, "slot")
    assert excinfo.value.line == 2, "Expected the opener's line"
    assert excinfo.value.column == 3, "Expected the opener's column"
    assert "<slot>" in str(excinfo.value)


def test_closing_tag_without_opener_raises() -> None:
    """A stray closer aborts the scan."""
    with pytest.raises(UnmatchedClosingTagError):
        list_tags("text</slot>", "slot")


def test_mismatched_closing_tag_raises() -> None:
    """Interleaved elements sharing a stack are rejected."""
    with pytest.raises(UnmatchedClosingTagError, match="does not match"):
        list(
            match_pairs(
                "<component type='a'><slot></component></slot>",
                ["component", "slot"],
            )
        )
