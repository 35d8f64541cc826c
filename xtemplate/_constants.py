"""Common literal values used across xtemplate.

These constants keep reserved identifiers and default locations in one place
so the scanners, binder, loader, and tests agree on the same spellings.
Intended for internal use within the xtemplate package.

Examples
--------
>>> from xtemplate import _constants
>>> _constants.COMPONENT_BLOCK_TEMPLATE.format(type="card", n=3)
'component__card__3'
>>> _constants.SLOT_BLOCK_TEMPLATE.format(type="card", n=3, slot="body")
'card__3__body'
"""

COMPONENT_ELEMENT = "component"
SLOT_ELEMENT = "slot"
TYPE_ATTRIBUTE = "type"
NAME_ATTRIBUTE = "name"

SLOT_PREFIX = "#slot--"
DEFAULT_SLOT = "default"
UNKNOWN_SLOT = "unknown"

COMPONENT_BLOCK_TEMPLATE = "component__{type}__{n}"
SLOT_BLOCK_TEMPLATE = "{type}__{n}__{slot}"

NEUTRAL_PROPS: tuple[str, str] = ("_", "")

DEFAULT_COMPONENTS_SUBDIR = "_components"
DEFAULT_EXTENSION = "html"
