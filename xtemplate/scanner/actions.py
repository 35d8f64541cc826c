r"""Scan ``{{ }}`` template actions and match block actions with ``{{end}}``.

The scanner mirrors :mod:`xtemplate.scanner.tags`: :data:`ACTION_PATTERN`
recognizes one action token (honouring ``{{-``/``-}}`` trim markers, quoted
strings and ``{{/* */}}`` comments) and an explicit stack pairs the block
openers ``if``, ``range``, ``with``, ``block`` and ``define`` with ``end``.
Every other action, ``else`` included, is a single action.

Example
-------
>>> from xtemplate.scanner.actions import list_placeholder_slots
>>> [slot.id for slot in list_placeholder_slots('{{block "#slot--body" .}}x{{end}}')]
['#slot--body']
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import enum
import re

from xtemplate._constants import SLOT_PREFIX
from xtemplate.errors import UnmatchedEndError, UnterminatedActionError

ACTION_PATTERN = re.compile(
    r"\{\{(?P<left_trim>-\s)?\s*"
    r"(?P<content>/\*.*?\*/"
    r"""|(?:"(?:\\.|[^"\\])*"|`[^`]*`|'(?:\\.|[^'\\])*'|[^"`'])*?)"""
    r"\s*(?P<right_trim>\s-)?\}\}",
    re.DOTALL,
)
STRING_LITERAL_PATTERN = re.compile(r""""(?P<double>(?:\\.|[^"\\])*)"|`(?P<raw>[^`]*)`""")

BLOCK_OPENERS = frozenset({"if", "range", "with", "block", "define"})
BLOCK_CLOSER = "end"


class ActionKind(enum.Enum):
    """Classify a scanned action token or a matched block."""

    OPENING = "opening"
    CLOSING = "closing"
    SINGLE = "single"
    BLOCK = "block"


@dc.dataclass(slots=True)
class Action:
    """One scanned template action, or a matched block opener/``end`` pair.

    Attributes
    ----------
    name : str
        First word of the action (``block``, ``if``, ``end``, ``.Title`` ...).
    args : str
        Raw text following the name.
    id : str
        First quoted string literal in ``args``; ``""`` when there is none.
    start : int
        Offset of the opening ``{{``.
    end : int
        Offset one past the closing ``}}`` (of ``{{end}}`` for blocks).
    kind : ActionKind
        Token kind; :attr:`ActionKind.BLOCK` for matched blocks.
    body : str
        Text between the opener and its ``{{end}}``.
    body_start : int
        Offset where ``body`` begins; equals ``end`` for tokens.
    body_end : int
        Offset where ``body`` ends; equals ``end`` for tokens.
    """

    name: str
    args: str
    id: str
    start: int
    end: int
    kind: ActionKind
    body: str = ""
    body_start: int = -1
    body_end: int = -1

    def __post_init__(self) -> None:
        if self.body_start < 0:
            self.body_start = self.end
        if self.body_end < 0:
            self.body_end = self.end


def _classify(name: str) -> ActionKind:
    if name == BLOCK_CLOSER:
        return ActionKind.CLOSING
    if name in BLOCK_OPENERS:
        return ActionKind.OPENING
    return ActionKind.SINGLE


def _first_literal(args: str) -> str:
    match = STRING_LITERAL_PATTERN.search(args)
    if match is None:
        return ""
    literal = match.group("double")
    return match.group("raw") if literal is None else literal


def scan_actions(src: str) -> cabc.Iterator[Action]:
    """Yield every action token in ``src`` in source order."""
    for match in ACTION_PATTERN.finditer(src):
        parts = match.group("content").split(None, 1)
        name = parts[0] if parts else ""
        args = parts[1].strip() if len(parts) > 1 else ""
        yield Action(
            name=name,
            args=args,
            id=_first_literal(args),
            start=match.start(),
            end=match.end(),
            kind=_classify(name),
        )


def match_blocks(src: str) -> cabc.Iterator[Action]:
    """Yield matched block actions in closing order (innermost first).

    Raises
    ------
    UnmatchedEndError
        If ``{{end}}`` appears while no block is open.
    UnterminatedActionError
        If block openers remain unclosed at the end of ``src``.
    """
    stack: list[Action] = []
    for token in scan_actions(src):
        match token.kind:
            case ActionKind.OPENING:
                stack.append(token)
            case ActionKind.CLOSING:
                if not stack:
                    msg = "{{end}} has no matching block action"
                    raise UnmatchedEndError(msg, source=src, position=token.start)
                opener = stack.pop()
                yield Action(
                    name=opener.name,
                    args=opener.args,
                    id=opener.id,
                    start=opener.start,
                    end=token.end,
                    kind=ActionKind.BLOCK,
                    body=src[opener.end : token.start],
                    body_start=opener.end,
                    body_end=token.start,
                )
            case _:
                continue
    if stack:
        opener = stack[-1]
        msg = f"{{{{{opener.name}}}}} action is never closed by {{{{end}}}}"
        raise UnterminatedActionError(msg, source=src, position=opener.start)


def find_action(src: str, name: str, id: str) -> Action | None:  # noqa: A002
    """Return the first matched block whose opener has ``name`` and ``id``.

    Parameters
    ----------
    src : str
        Template text to scan.
    name : str
        Action name of the opener, for example ``"block"`` or ``"define"``.
    id : str
        Unquoted value of the opener's first string literal.

    Returns
    -------
    Action or None
        The matched block, or ``None`` when no block qualifies.
    """
    for block in match_blocks(src):
        if block.name == name and block.id == id:
            return block
    return None


def list_blocks(src: str) -> list[Action]:
    """Return every matched block action in ``src``, innermost first."""
    return list(match_blocks(src))


def list_placeholder_slots(src: str) -> list[Action]:
    """Return every ``block`` whose id starts with ``#slot--``, innermost first."""
    return [
        block
        for block in match_blocks(src)
        if block.name == "block" and block.id.startswith(SLOT_PREFIX)
    ]


__all__ = [
    "ACTION_PATTERN",
    "BLOCK_CLOSER",
    "BLOCK_OPENERS",
    "Action",
    "ActionKind",
    "find_action",
    "list_blocks",
    "list_placeholder_slots",
    "match_blocks",
    "scan_actions",
]
