"""Unit tests for slot binding.

Expected strings are spelled out in full so that any change to the generated
block layout is a deliberate one.
"""

from __future__ import annotations

import itertools
import typing as typ

from xtemplate.components.binder import (
    SlotBinder,
    bind_slots,
    build_props,
    props_binding,
    wrap_template,
)
from xtemplate.components.locator import find_component

if typ.TYPE_CHECKING:
    from xtemplate.components.loader import MappingComponentLoader


def test_build_props_skips_type_and_keeps_order() -> None:
    """Every attribute except ``type`` becomes a key/value pair."""
    props = build_props({"id": "main", "type": "card", "class": "red"})
    assert props == ["id", "main", "class", "red"]


def test_build_props_uses_neutral_pair() -> None:
    """A component with only ``type`` still gets a well-formed call."""
    assert build_props({"type": "card"}) == ["_", ""]


def test_props_binding_trim_variants() -> None:
    """The outer binding trims whitespace, the placeholder binding does not."""
    props = ["class", "red"]
    assert props_binding(props, trim=True) == '{{- $props := (kwargs "class" "red") -}}'
    assert props_binding(props) == '{{$props := (kwargs "class" "red")}}'


def test_wrap_template_layout() -> None:
    """The snippet sits inside the named outer block after the binding."""
    wrapped = wrap_template("<b>x</b>\n", "box", 4, ["_", ""])
    assert wrapped == (
        '{{- block "component__box__4" . -}}\n'
        '{{- $props := (kwargs "_" "") -}}\n'
        "<b>x</b>\n"
        "{{end -}}"
    )


def test_bind_slots_substitutes_and_renames() -> None:
    """Supplied slots replace bodies, others keep their default."""
    text = (
        '{{block "#slot--title" .}}Untitled{{end}}'
        '{{block "#slot--body" .}}{{end}}'
    )
    bound = bind_slots(
        text,
        component_type="panel",
        n=2,
        props=["_", ""],
        slots=[("body", "Hello")],
    )
    assert bound == (
        '{{block "panel__2__title" .}}{{$props := (kwargs "_" "")}}Untitled{{end}}'
        '{{block "panel__2__body" .}}{{$props := (kwargs "_" "")}}Hello{{end}}'
    )


def test_bind_slots_uses_default_body_only_for_default_placeholder() -> None:
    """Component content fills ``#slot--default`` and nothing else."""
    text = '{{block "#slot--default" .}}none{{end}}{{block "#slot--side" .}}S{{end}}'
    bound = bind_slots(
        text,
        component_type="box",
        n=1,
        props=["_", ""],
        slots=[],
        default_body="\n  content\n",
    )
    assert '{{block "box__1__default" .}}{{$props := (kwargs "_" "")}}\n  content\n{{end}}' in bound
    assert '{{block "box__1__side" .}}{{$props := (kwargs "_" "")}}S{{end}}' in bound


def test_bind_slots_consumes_each_slot_once() -> None:
    """Two placeholders with the same name take two supplied slots in order."""
    text = '{{block "#slot--item" .}}{{end}},{{block "#slot--item" .}}{{end}}'
    bound = bind_slots(
        text,
        component_type="list",
        n=1,
        props=["_", ""],
        slots=[("item", "one"), ("item", "two")],
    )
    assert bound.index("one") < bound.index("two")
    assert "#slot--" not in bound


def test_bind_slots_discards_unknown_slots() -> None:
    """A slot with no matching placeholder is dropped silently."""
    bound = bind_slots(
        '{{block "#slot--body" .}}B{{end}}',
        component_type="card",
        n=1,
        props=["_", ""],
        slots=[("footer", "DISCARDED")],
    )
    assert "DISCARDED" not in bound
    assert bound.endswith("B{{end}}")


def test_bind_slots_renames_nested_placeholders() -> None:
    """Placeholders inside placeholder defaults are renamed as well."""
    text = '{{block "#slot--outer" .}}[{{block "#slot--inner" .}}i{{end}}]{{end}}'
    bound = bind_slots(text, component_type="c", n=3, props=["_", ""], slots=[])
    assert bound == (
        '{{block "c__3__outer" .}}{{$props := (kwargs "_" "")}}'
        '[{{block "c__3__inner" .}}{{$props := (kwargs "_" "")}}i{{end}}]{{end}}'
    )


def test_bind_slots_accepts_raw_string_ids() -> None:
    """Backtick placeholder ids are rewritten to quoted names."""
    bound = bind_slots(
        "{{block `#slot--body` .}}B{{end}}",
        component_type="card",
        n=1,
        props=["_", ""],
        slots=[],
    )
    assert bound.startswith('{{block "card__1__body" .}}')


def test_slot_binder_expands_slots_before_numbering(
    mapping_loader: MappingComponentLoader,
) -> None:
    """Slot bodies go through ``expand`` and the index is taken afterwards."""
    order: list[str] = []
    counter = itertools.count(7)

    def expand(text: str) -> str:
        order.append(f"expand:{text}")
        return text.upper()

    def next_index() -> int:
        order.append("index")
        return next(counter)

    component = find_component(
        '<component type="card" class="red"><slot name="body">hi</slot></component>'
    )
    assert component is not None
    bound = SlotBinder(mapping_loader, next_index, expand).bind(component)

    assert order == ["expand:hi", "index"], "Slots must be expanded before numbering"
    assert bound.startswith('{{- block "component__card__7" . -}}')
    assert '{{block "card__7__body" .}}{{$props := (kwargs "class" "red")}}HI{{end}}' in bound


def test_slot_binder_keeps_default_for_self_closing_component(
    mapping_loader: MappingComponentLoader,
) -> None:
    """A self-closing component keeps the authored default body."""
    component = find_component('<component type="box" />')
    assert component is not None
    bound = SlotBinder(mapping_loader, itertools.count(1).__next__, str).bind(component)
    assert "empty box" in bound


def test_slot_binder_empties_default_for_paired_component(
    mapping_loader: MappingComponentLoader,
) -> None:
    """An explicitly empty component replaces the authored default."""
    component = find_component('<component type="box"></component>')
    assert component is not None
    bound = SlotBinder(mapping_loader, itertools.count(1).__next__, str).bind(component)
    assert '{{block "box__1__default" .}}{{$props := (kwargs "_" "")}}{{end}}' in bound
    assert "empty box" not in bound


def test_bind_slots_inserts_slot_bodies_verbatim() -> None:
    """Placeholder syntax inside a supplied body is neither renamed nor reused."""
    bound = bind_slots(
        '{{block "#slot--body" .}}{{end}}',
        component_type="card",
        n=1,
        props=["_", ""],
        slots=[("body", '{{block "#slot--x" .}}u{{end}}')],
    )
    assert bound == (
        '{{block "card__1__body" .}}{{$props := (kwargs "_" "")}}'
        '{{block "#slot--x" .}}u{{end}}{{end}}'
    )


def test_bind_slots_inserts_default_body_verbatim() -> None:
    """Component content that looks like a placeholder is copied as is."""
    bound = bind_slots(
        '{{block "#slot--default" .}}{{end}}',
        component_type="box",
        n=2,
        props=["_", ""],
        slots=[],
        default_body='{{block "#slot--default" .}}x{{end}}',
    )
    assert bound.count('"box__2__default"') == 1
    assert bound.endswith('{{block "#slot--default" .}}x{{end}}{{end}}')
