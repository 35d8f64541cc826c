"""Load and validate translator configuration YAML.

The configuration names the templates directory, the component folder
inside it and the component file extension. :func:`load_translator_config`
reads it with ``ruamel.yaml`` and returns a :class:`TranslatorConfig`.

Examples
--------
>>> from xtemplate.config import TranslatorConfig
>>> TranslatorConfig(templates_dir="site", extension=".tmpl").components_dir.as_posix()
'site/_components'
"""

from .loader import load_translator_config
from .models import ConfigError, TranslatorConfig

__all__ = ["ConfigError", "TranslatorConfig", "load_translator_config"]
