"""Bind user-supplied slots to the placeholders of a component template.

A component template declares substitution points as block actions whose
identifier starts with ``#slot--``::

    <div class="card">{{block "#slot--body" .}}default body{{end}}</div>

Binding a ``<component type="card">`` instance numbered ``n`` produces::

    {{- block "component__card__n" . -}}
    {{- $props := (kwargs "class" "red") -}}
    <div class="card">{{block "card__n__body" .}}{{$props := (kwargs "class" "red")}}slot body{{end}}</div>{{end -}}

Every renamed placeholder re-declares ``$props`` because variables declared
by the caller are not visible inside a nested ``block`` body.
"""

from __future__ import annotations

import logging
import typing as typ

from xtemplate._constants import (
    COMPONENT_BLOCK_TEMPLATE,
    DEFAULT_SLOT,
    NEUTRAL_PROPS,
    SLOT_BLOCK_TEMPLATE,
    SLOT_PREFIX,
    TYPE_ATTRIBUTE,
)
from xtemplate.components.locator import direct_slots
from xtemplate.scanner.actions import Action, list_placeholder_slots
from xtemplate.scanner.tags import TagKind

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from xtemplate.components.loader import ComponentSource
    from xtemplate.scanner.tags import Tag

log = logging.getLogger(__name__)


def build_props(attributes: cabc.Mapping[str, str]) -> list[str]:
    """Return the alternating key/value list passed to ``kwargs``.

    Every attribute except ``type`` is kept in scan order. A component with
    no other attributes gets the neutral pair ``"_" ""`` so the ``kwargs``
    call is always well formed.
    """
    props: list[str] = []
    for key, value in attributes.items():
        if key == TYPE_ATTRIBUTE:
            continue
        props.extend((key, value))
    if not props:
        props.extend(NEUTRAL_PROPS)
    return props


def props_call(props: cabc.Sequence[str]) -> str:
    """Return the ``(kwargs "k" "v" ...)`` pipeline for ``props``."""
    quoted = " ".join(f'"{item}"' for item in props)
    return f"(kwargs {quoted})"


def props_binding(props: cabc.Sequence[str], *, trim: bool = False) -> str:
    """Return the action that binds ``$props``, optionally whitespace-trimming."""
    if trim:
        return f"{{{{- $props := {props_call(props)} -}}}}"
    return f"{{{{$props := {props_call(props)}}}}}"


def wrap_template(
    snippet: str, component_type: str, n: int, props: cabc.Sequence[str]
) -> str:
    """Wrap ``snippet`` in the named outer block of component number ``n``."""
    block_id = COMPONENT_BLOCK_TEMPLATE.format(type=component_type, n=n)
    return (
        f'{{{{- block "{block_id}" . -}}}}\n'
        f"{props_binding(props, trim=True)}\n"
        f"{snippet}"
        "{{end -}}"
    )


def bind_slots(
    text: str,
    *,
    component_type: str,
    n: int,
    props: cabc.Sequence[str],
    slots: cabc.Sequence[tuple[str, str]],
    default_body: str | None = None,
) -> str:
    """Substitute and rename every ``#slot--`` placeholder in ``text``.

    Placeholders are located once, in the template text as given. Supplied
    slot bodies and ``default_body`` are inserted verbatim and never scanned
    for placeholders themselves. A placeholder that keeps its authored
    default has any placeholders nested in that default bound as well.

    Parameters
    ----------
    text : str
        Wrapped component template.
    component_type : str
        ``type`` of the component being bound.
    n : int
        Generated index of the component.
    props : Sequence[str]
        Alternating key/value list re-bound inside every placeholder.
    slots : Sequence[tuple[str, str]]
        ``(name, body)`` pairs supplied by the component's caller. Each slot
        fills at most one placeholder, in source order; leftovers are
        discarded.
    default_body : str, optional
        Content for the ``#slot--default`` placeholder when no slot named
        ``default`` was supplied. Pass ``None`` to keep the authored default.

    Returns
    -------
    str
        ``text`` with every template placeholder renamed.

    Raises
    ------
    UnterminatedActionError, UnmatchedEndError
        If the template's block actions are not properly nested.
    """
    placeholders = sorted(
        list_placeholder_slots(text), key=lambda action: action.start
    )
    pending = list(slots)
    binding = props_binding(props)

    def render(start: int, end: int) -> str:
        parts: list[str] = []
        cursor = start
        for placeholder in placeholders:
            if placeholder.start < cursor or placeholder.end > end:
                continue
            parts.append(text[cursor : placeholder.start])
            parts.append(bind_one(placeholder))
            cursor = placeholder.end
        parts.append(text[cursor:end])
        return "".join(parts)

    def bind_one(placeholder: Action) -> str:
        slot_name = placeholder.id.removeprefix(SLOT_PREFIX)
        new_id = SLOT_BLOCK_TEMPLATE.format(type=component_type, n=n, slot=slot_name)
        supplied = _take_slot(pending, slot_name)
        if supplied is not None:
            body = supplied
        elif slot_name == DEFAULT_SLOT and default_body is not None:
            body = default_body
        else:
            body = render(placeholder.body_start, placeholder.body_end)
        opener = _rename_opener(
            text[placeholder.start : placeholder.body_start], placeholder, new_id
        )
        closer = text[placeholder.body_end : placeholder.end]
        return f"{opener}{binding}{body}{closer}"

    bound = render(0, len(text))
    for name, _body in pending:
        log.debug(
            "Discarding slot %r: component %r declares no such placeholder",
            name,
            component_type,
        )
    return bound


def _take_slot(pending: list[tuple[str, str]], name: str) -> str | None:
    for index, (slot_name, body) in enumerate(pending):
        if slot_name == name:
            del pending[index]
            return body
    return None


def _rename_opener(opener: str, placeholder: Action, new_id: str) -> str:
    for quote in ('"', "`"):
        literal = f"{quote}{placeholder.id}{quote}"
        if literal in opener:
            return opener.replace(literal, f'"{new_id}"', 1)
    return opener


class SlotBinder:
    """Resolve one component tag into its bound block text.

    The binder shares a loader and an index source with the translator that owns
    it. Slot bodies are handed to ``expand`` before the component itself is
    numbered, so components nested in slots are fully expanded first and
    receive smaller indices.
    """

    def __init__(
        self,
        loader: ComponentSource,
        next_index: cabc.Callable[[], int],
        expand: cabc.Callable[[str], str],
    ) -> None:
        """Initialize the binder.

        Parameters
        ----------
        loader : ComponentSource
            Session loader resolving component types to template snippets.
        next_index : Callable[[], int]
            Returns the next unique component index of the session.
        expand : Callable[[str], str]
            Expands every component found in a piece of text; used on slot
            bodies before they are substituted.
        """
        self._loader = loader
        self._next_index = next_index
        self._expand = expand

    def bind(self, component: Tag) -> str:
        """Return the fully bound block text for ``component``."""
        slots = direct_slots(component)
        supplied = [(slot.name, self._expand(slot.body)) for slot in slots]
        default_body = None
        if not slots and component.kind is not TagKind.SELF_CLOSING:
            default_body = self._expand(component.body)

        n = self._next_index()
        props = build_props(component.attributes)
        snippet = self._loader.load(component.id)
        wrapped = wrap_template(snippet, component.id, n, props)
        log.debug(
            "Binding component %r as #%d with %d slot(s)", component.id, n, len(slots)
        )
        return bind_slots(
            wrapped,
            component_type=component.id,
            n=n,
            props=props,
            slots=supplied,
            default_body=default_body,
        )


__all__ = [
    "SlotBinder",
    "bind_slots",
    "build_props",
    "props_binding",
    "props_call",
    "wrap_template",
]
