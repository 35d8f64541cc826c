"""Expand ``<component>`` tags into named blocks for Go-style templates.

``xtemplate`` reads templates that use HTML-like component tags::

    <component type="card" class="red">
      <slot name="body">Hello</slot>
    </component>

and rewrites each tag into ``{{block}}`` actions bound to the matching
template in the components folder, so a stock ``text/template`` or
``html/template`` engine can render the result.

Examples
--------
>>> from xtemplate import MappingComponentLoader, Translator
>>> loader = MappingComponentLoader({"card": '{{block "#slot--body" .}}{{end}}'})
>>> "card__1__body" in Translator(loader).translate(
...     '<component type="card"><slot name="body">Hi</slot></component>'
... )
True
"""

from .components import (
    ComponentTemplateLoader,
    MappingComponentLoader,
    find_component,
    list_component_slots,
    list_components,
)
from .config import TranslatorConfig, load_translator_config
from .document import Document
from .errors import (
    ConfigError,
    ExpansionLimitError,
    ScanError,
    TranslationError,
    UnmatchedClosingTagError,
    UnmatchedEndError,
    UnterminatedActionError,
    UnterminatedTagError,
)
from .translator import Translator, translate

__version__ = "0.1.0"

__all__ = [
    "ComponentTemplateLoader",
    "ConfigError",
    "Document",
    "ExpansionLimitError",
    "MappingComponentLoader",
    "ScanError",
    "TranslationError",
    "Translator",
    "TranslatorConfig",
    "UnmatchedClosingTagError",
    "UnmatchedEndError",
    "UnterminatedActionError",
    "UnterminatedTagError",
    "__version__",
    "find_component",
    "list_component_slots",
    "list_components",
    "load_translator_config",
    "translate",
]
