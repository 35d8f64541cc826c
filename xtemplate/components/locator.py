"""Locate ``<component>`` elements and the ``<slot>`` elements they own.

The locator layers component semantics over the generic tag scanner. A
component without a ``type`` attribute is treated as malformed and left out
of every listing; it is not an error.
"""

from __future__ import annotations

from xtemplate._constants import COMPONENT_ELEMENT, SLOT_ELEMENT
from xtemplate.scanner.tags import Tag, find_tag, match_pairs, match_tags


def find_component(src: str) -> Tag | None:
    """Return the first top-level ``<component>`` pair in ``src``, if any.

    The returned pair may lack a ``type``; callers decide what to do with
    malformed components.
    """
    return find_tag(src, COMPONENT_ELEMENT)


def list_components(src: str) -> list[Tag]:
    """Return every well-formed ``<component>`` pair, innermost first.

    Pairs are reported in the order their closing tags appear, so a
    component nested inside another precedes its parent. Pairs with an
    empty ``type`` are dropped.
    """
    return [tag for tag in match_tags(src, COMPONENT_ELEMENT) if tag.id]


def direct_slots(component: Tag) -> list[Tag]:
    """Return the ``<slot>`` pairs that are direct children of ``component``.

    ``<component>`` and ``<slot>`` tags share a single stack while the body is
    scanned, so slots that belong to a nested component are never reported
    for the outer one.
    """
    return [
        pair
        for pair, depth in match_pairs(component.body, (COMPONENT_ELEMENT, SLOT_ELEMENT))
        if depth == 0 and pair.element == SLOT_ELEMENT
    ]


def list_component_slots(src: str, component_id: str) -> list[Tag]:
    """Return the direct ``<slot>`` children of a component in ``src``.

    Parameters
    ----------
    src : str
        Text containing the component, typically the component's own markup.
    component_id : str
        ``type`` of the component whose slots are wanted. The first such
        component in source order is used.

    Returns
    -------
    list[Tag]
        Slot pairs in source order; empty when no matching component exists.
    """
    candidates = [tag for tag in match_tags(src, COMPONENT_ELEMENT) if tag.id == component_id]
    if not candidates:
        return []
    component = min(candidates, key=lambda tag: tag.start)
    return direct_slots(component)


__all__ = [
    "direct_slots",
    "find_component",
    "list_component_slots",
    "list_components",
]
