"""Component template loaders.

A loader maps a component ``type`` to the template snippet that defines it.
Loaders never raise for a missing or unreadable template: they return a
fallback snippet that renders ``unknown component <type>`` so a single bad
reference shows up in the output instead of aborting the whole document.

Loaded snippets are cached on the loader instance. A translator owns exactly
one loader, so the cache lives as long as one translation session and is
never shared between independent runs.

Example
-------
>>> from xtemplate.components.loader import MappingComponentLoader
>>> loader = MappingComponentLoader({"card": "<div>{{.}}</div>"})
>>> loader.load("card")
'<div>{{.}}</div>'
>>> "unknown component ghost" in loader.load("ghost")
True
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from xtemplate._constants import DEFAULT_EXTENSION, SLOT_PREFIX, UNKNOWN_SLOT

if typ.TYPE_CHECKING:
    import collections.abc as cabc

log = logging.getLogger(__name__)


class ComponentSource(typ.Protocol):
    """Anything that can resolve a component type to its template snippet."""

    def load(self, component_type: str) -> str:
        """Return the template snippet for ``component_type``."""
        ...

    def exists(self, component_type: str) -> bool:
        """Return ``True`` when a real template backs ``component_type``."""
        ...


def fallback_template(component_type: str) -> str:
    """Return the snippet used when no template exists for ``component_type``."""
    return (
        '<div class="component-unknown">'
        f'{{{{block "{SLOT_PREFIX}{UNKNOWN_SLOT}" .}}}}'
        f"unknown component {component_type}"
        "{{end}}</div>"
    )


class ComponentTemplateLoader:
    """Load component templates from ``{components_dir}/{type}.{extension}``."""

    def __init__(
        self,
        components_dir: Path,
        extension: str = DEFAULT_EXTENSION,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the loader for one translation session.

        Parameters
        ----------
        components_dir : Path
            Directory holding one file per component type.
        extension : str, optional
            File extension of component templates, with or without the
            leading dot. Defaults to ``"html"``.
        encoding : str, optional
            Text encoding of the template files. Defaults to ``"utf-8"``.
        """
        self.components_dir = Path(components_dir)
        self.extension = extension.lstrip(".")
        self.encoding = encoding
        self._cache: dict[str, str] = {}

    def path_for(self, component_type: str) -> Path | None:
        """Return the template path for ``component_type``.

        Returns ``None`` when the type would resolve to a file outside
        :attr:`components_dir` (for example ``../secrets``).
        """
        if not component_type:
            return None
        candidate = self.components_dir / f"{component_type}.{self.extension}"
        root = self.components_dir.resolve()
        if not candidate.resolve().is_relative_to(root):
            return None
        return candidate

    def load(self, component_type: str) -> str:
        """Return the template for ``component_type`` or the fallback snippet."""
        cached = self._cache.get(component_type)
        if cached is not None:
            return cached
        path = self.path_for(component_type)
        if path is None:
            log.warning(
                "Component type %r resolves outside %s; using fallback",
                component_type,
                self.components_dir,
            )
            return fallback_template(component_type)
        try:
            content = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            log.warning(
                "No usable template for component %r at %s (%s); using fallback",
                component_type,
                path,
                exc,
            )
            return fallback_template(component_type)
        self._cache[component_type] = content
        log.debug("Loaded component template %s", path)
        return content

    def exists(self, component_type: str) -> bool:
        """Return ``True`` when a template file exists for ``component_type``."""
        path = self.path_for(component_type)
        return path is not None and path.is_file()

    def available(self) -> list[str]:
        """List component types that have a template file, sorted."""
        if not self.components_dir.is_dir():
            return []
        suffix = f".{self.extension}"
        return sorted(
            path.relative_to(self.components_dir).with_suffix("").as_posix()
            for path in self.components_dir.rglob(f"*{suffix}")
            if path.is_file()
        )


class MappingComponentLoader:
    """Serve component templates from an in-memory mapping."""

    def __init__(self, templates: cabc.Mapping[str, str]) -> None:
        self._templates = dict(templates)

    def load(self, component_type: str) -> str:
        """Return the mapped template or the fallback snippet."""
        try:
            return self._templates[component_type]
        except KeyError:
            log.warning(
                "No template mapped for component %r; using fallback", component_type
            )
            return fallback_template(component_type)

    def exists(self, component_type: str) -> bool:
        """Return ``True`` when ``component_type`` is mapped."""
        return component_type in self._templates

    def available(self) -> list[str]:
        """List mapped component types, sorted."""
        return sorted(self._templates)


__all__ = [
    "ComponentSource",
    "ComponentTemplateLoader",
    "MappingComponentLoader",
    "fallback_template",
]
