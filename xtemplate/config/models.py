"""Typed dataclasses describing translator configuration."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from xtemplate._constants import DEFAULT_COMPONENTS_SUBDIR, DEFAULT_EXTENSION
from xtemplate.errors import ConfigError


@dc.dataclass(slots=True)
class TranslatorConfig:
    """Where component templates live and how their files are named.

    Attributes
    ----------
    templates_dir : Path
        Root directory of the site templates.
    components_subdir : Path
        Component folder, relative to ``templates_dir`` unless absolute.
    extension : str
        Component template file extension without the leading dot.
    """

    templates_dir: Path
    components_subdir: Path = Path(DEFAULT_COMPONENTS_SUBDIR)
    extension: str = DEFAULT_EXTENSION

    def __post_init__(self) -> None:
        self.templates_dir = Path(self.templates_dir)
        self.components_subdir = Path(self.components_subdir)
        self.extension = self.extension.strip().lstrip(".")
        if not self.extension:
            msg = "Component template extension must not be empty."
            raise ConfigError(msg)

    @property
    def components_dir(self) -> Path:
        """Return the resolved component folder."""
        return self.templates_dir / self.components_subdir

    def with_overrides(
        self,
        *,
        templates_dir: Path | None = None,
        extension: str | None = None,
    ) -> TranslatorConfig:
        """Return a copy with any non-``None`` override applied."""
        return TranslatorConfig(
            templates_dir=self.templates_dir if templates_dir is None else templates_dir,
            components_subdir=self.components_subdir,
            extension=self.extension if extension is None else extension,
        )


__all__ = ["ConfigError", "TranslatorConfig"]
