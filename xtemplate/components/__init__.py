"""Locate, load, and bind ``<component>`` elements."""

from .binder import SlotBinder, bind_slots, build_props, wrap_template
from .loader import (
    ComponentSource,
    ComponentTemplateLoader,
    MappingComponentLoader,
    fallback_template,
)
from .locator import direct_slots, find_component, list_component_slots, list_components

__all__ = [
    "ComponentSource",
    "ComponentTemplateLoader",
    "MappingComponentLoader",
    "SlotBinder",
    "bind_slots",
    "build_props",
    "direct_slots",
    "fallback_template",
    "find_component",
    "list_component_slots",
    "list_components",
    "wrap_template",
]
