"""Unit tests for the mutable document buffer."""

from __future__ import annotations

import pytest

from xtemplate.document import Document


def test_splice_replaces_span_and_bumps_revision() -> None:
    """Splicing rewrites the span and records a new revision."""
    doc = Document("<p>hello</p>")
    doc.splice(3, 8, "goodbye")
    assert doc.text == "<p>goodbye</p>"
    assert doc.revision == 1
    assert len(doc) == len("<p>goodbye</p>")


def test_cut_removes_span() -> None:
    """Cutting is a splice with empty replacement text."""
    doc = Document("abcdef")
    doc.cut(1, 3)
    assert str(doc) == "adef"
    assert doc[0:2] == "ad"


@pytest.mark.parametrize(("start", "end"), [(-1, 2), (3, 2), (0, 99)])
def test_splice_rejects_spans_outside_buffer(start: int, end: int) -> None:
    """Spans that do not fit the current text raise ``IndexError``."""
    doc = Document("abc")
    with pytest.raises(IndexError):
        doc.splice(start, end, "x")
    assert doc.revision == 0, "A rejected splice must not change the revision"


def test_replace_counts_literal_occurrences() -> None:
    """Literal replacement reports how many occurrences changed."""
    doc = Document("a.b.c")
    assert doc.replace(".", "-", count=1) == 1
    assert doc.text == "a-b.c"
    assert doc.replace(".", "-") == 1
    assert doc.replace(".", "-") == 0
    assert doc.revision == 2, "Only effective replacements bump the revision"


def test_replace_rejects_empty_pattern() -> None:
    """An empty search string is refused."""
    with pytest.raises(ValueError, match="empty"):
        Document("abc").replace("", "x")
