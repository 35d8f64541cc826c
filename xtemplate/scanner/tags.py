r"""Scan HTML-like markup tags and match them into open/close pairs.

Recognition of a single tag token is done with :data:`TAG_PATTERN`; nesting
is resolved by an explicit stack because regular expressions cannot follow
arbitrary depth. The scanner knows nothing about components: it simply
reports elements and their attributes.

Example
-------
>>> from xtemplate.scanner.tags import find_tag
>>> tag = find_tag('<div><slot name="a">hi</slot></div>', "slot")
>>> (tag.name, tag.body)
('a', 'hi')
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re

from xtemplate._constants import NAME_ATTRIBUTE, TYPE_ATTRIBUTE
from xtemplate.errors import UnmatchedClosingTagError, UnterminatedTagError

TAG_PATTERN = re.compile(
    r"""<(?P<closing>/)?(?P<element>[A-Za-z][\w.:-]*)(?=[\s/>])"""
    r"""(?P<attributes>(?:"[^"]*"|'[^']*'|[^'">])*?)\s*(?P<self_closing>/)?>"""
)
ATTRIBUTE_PATTERN = re.compile(
    r"""(?P<key>[^\s"'=<>/]+)"""
    r"""(?:\s*=\s*(?:"(?P<double>[^"]*)"|'(?P<single>[^']*)'|(?P<bare>[^\s"'=<>`]+)))?"""
)


class TagKind(enum.Enum):
    """Classify a scanned tag token or a matched pair."""

    OPENING = "opening"
    CLOSING = "closing"
    SELF_CLOSING = "self_closing"
    PAIR = "pair"


@dc.dataclass(slots=True)
class Tag:
    """One scanned markup tag, or a matched opener/closer pair.

    Attributes
    ----------
    element : str
        Lower-cased element name.
    kind : TagKind
        Token kind; :attr:`TagKind.PAIR` for matched pairs. A self-closing
        tag stays :attr:`TagKind.SELF_CLOSING` when reported as a pair.
    start : int
        Offset of the opening ``<``.
    end : int
        Offset one past the final ``>`` (of the closer, for pairs).
    attributes : dict[str, str]
        Attributes in scan order, keyed by lower-cased name.
    body : str
        Text strictly between the opener and the closer of a pair.
    """

    element: str
    kind: TagKind
    start: int
    end: int
    attributes: dict[str, str] = dc.field(default_factory=dict)
    body: str = ""

    @property
    def id(self) -> str:
        """Return the ``type`` attribute, or ``""`` when absent."""
        return self.attributes.get(TYPE_ATTRIBUTE, "")

    @property
    def name(self) -> str:
        """Return the ``name`` attribute, or ``""`` when absent."""
        return self.attributes.get(NAME_ATTRIBUTE, "")


def parse_attributes(text: str) -> dict[str, str]:
    """Return the attributes found in the raw attribute text of a tag.

    Keys are lower-cased; values are kept verbatim without their quotes. An
    attribute written without a value maps to an empty string. When a key is
    repeated the first occurrence wins.
    """
    attributes: dict[str, str] = {}
    for match in ATTRIBUTE_PATTERN.finditer(text):
        key = match.group("key").lower()
        if key in attributes:
            continue
        value = match.group("double")
        if value is None:
            value = match.group("single")
        if value is None:
            value = match.group("bare") or ""
        attributes[key] = value
    return attributes


def scan_tags(
    src: str, elements: cabc.Iterable[str] | None = None
) -> cabc.Iterator[Tag]:
    """Yield every tag token in ``src`` in source order.

    Parameters
    ----------
    src : str
        Text to scan.
    elements : Iterable[str], optional
        Element names to report (case-insensitive); all elements when
        ``None``.

    Yields
    ------
    Tag
        Opening, closing, or self-closing tokens. Closing tokens carry no
        attributes.
    """
    wanted = {element.lower() for element in elements} if elements else None
    for match in TAG_PATTERN.finditer(src):
        element = match.group("element").lower()
        if wanted is not None and element not in wanted:
            continue
        if match.group("closing"):
            yield Tag(element, TagKind.CLOSING, match.start(), match.end())
            continue
        kind = TagKind.SELF_CLOSING if match.group("self_closing") else TagKind.OPENING
        yield Tag(
            element,
            kind,
            match.start(),
            match.end(),
            attributes=parse_attributes(match.group("attributes")),
        )


def match_pairs(
    src: str, elements: cabc.Iterable[str]
) -> cabc.Iterator[tuple[Tag, int]]:
    """Yield matched pairs of ``elements`` with the stack depth left after each.

    All listed elements share one stack, so a closer must match the most
    recent opener of any listed element. Pairs are produced in closing order
    (innermost first). A self-closing tag is reported as a complete pair
    with an empty body.

    Raises
    ------
    UnmatchedClosingTagError
        If a closer arrives with an empty stack or does not match the
        innermost open element.
    UnterminatedTagError
        If openers remain on the stack at the end of ``src``.
    """
    stack: list[Tag] = []
    for token in scan_tags(src, elements):
        match token.kind:
            case TagKind.OPENING:
                stack.append(token)
            case TagKind.SELF_CLOSING:
                yield _pair(src, token, token), len(stack)
            case TagKind.CLOSING:
                if not stack:
                    msg = f"Closing </{token.element}> has no matching opening tag"
                    raise UnmatchedClosingTagError(
                        msg, source=src, position=token.start
                    )
                if stack[-1].element != token.element:
                    msg = (
                        f"Closing </{token.element}> does not match "
                        f"open <{stack[-1].element}>"
                    )
                    raise UnmatchedClosingTagError(
                        msg, source=src, position=token.start
                    )
                opener = stack.pop()
                yield _pair(src, opener, token), len(stack)
            case _:  # pragma: no cover - scan_tags never yields pairs
                continue
    if stack:
        opener = stack[-1]
        msg = f"Opening <{opener.element}> is never closed"
        raise UnterminatedTagError(msg, source=src, position=opener.start)


def find_tag(src: str, element: str) -> Tag | None:
    """Return the first top-level ``element`` pair in ``src``.

    Returns ``None`` when ``src`` holds no such element. Scanning stops as
    soon as the first top-level pair is complete, so nesting errors after
    that pair are not reported.
    """
    for pair, depth in match_pairs(src, (element,)):
        if depth == 0:
            return pair
    return None


def list_tags(src: str, element: str) -> list[Tag]:
    """Return every top-level ``element`` pair in ``src`` in source order."""
    return [pair for pair, depth in match_pairs(src, (element,)) if depth == 0]


def match_tags(src: str, element: str) -> list[Tag]:
    """Return every ``element`` pair at any depth, innermost first."""
    return [pair for pair, _depth in match_pairs(src, (element,))]


def _pair(src: str, opener: Tag, closer: Tag) -> Tag:
    if opener is closer:
        return dc.replace(opener, attributes=dict(opener.attributes))
    return Tag(
        opener.element,
        TagKind.PAIR,
        opener.start,
        closer.end,
        attributes=dict(opener.attributes),
        body=src[opener.end : closer.start],
    )


__all__ = [
    "ATTRIBUTE_PATTERN",
    "TAG_PATTERN",
    "Tag",
    "TagKind",
    "find_tag",
    "list_tags",
    "match_pairs",
    "match_tags",
    "parse_attributes",
    "scan_tags",
]
