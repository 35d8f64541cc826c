"""Load translator configuration YAML into a typed dataclass."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from xtemplate._constants import DEFAULT_COMPONENTS_SUBDIR, DEFAULT_EXTENSION

from .models import ConfigError, TranslatorConfig


def load_translator_config(path: Path) -> TranslatorConfig:
    """Load the YAML file describing where component templates live.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``xtemplate.yaml``).

    Returns
    -------
    TranslatorConfig
        Parsed configuration. Relative ``templates_dir`` values are resolved
        against the directory holding the configuration file.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    ConfigError
        If ``templates_dir`` is missing or a field has the wrong type.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from xtemplate.config import load_translator_config
    >>> config = load_translator_config(Path("xtemplate.yaml"))  # doctest: +SKIP
    >>> config.components_dir  # doctest: +SKIP
    PosixPath('templates/_components')
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)

    templates_dir = _require_str(raw, "templates_dir")
    components_dir = _optional_str(raw, "components_dir", DEFAULT_COMPONENTS_SUBDIR)
    extension = _optional_str(raw, "extension", DEFAULT_EXTENSION)

    base = path.parent
    return TranslatorConfig(
        templates_dir=base / templates_dir,
        components_subdir=Path(components_dir),
        extension=extension,
    )


def _require_str(raw: typ.Mapping[str, typ.Any], key: str) -> str:
    value = raw.get(key)
    if value is None or value == "":
        msg = f"Configuration is missing required '{key}'."
        raise ConfigError(msg)
    if not isinstance(value, str):
        msg = f"Configuration field '{key}' must be a string."
        raise ConfigError(msg)
    return value


def _optional_str(raw: typ.Mapping[str, typ.Any], key: str, default: str) -> str:
    match raw.get(key):
        case None:
            return default
        case str() as value:
            return value
        case _:
            msg = f"Configuration field '{key}' must be a string."
            raise ConfigError(msg)


__all__ = ["load_translator_config"]
