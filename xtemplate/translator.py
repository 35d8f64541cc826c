"""Expand ``<component>`` tags into named template blocks.

The translator repeatedly locates the first top-level component in the
document, binds it to its template and splices the result back, re-scanning
the mutated text each time until no component remains.

Example
-------
>>> from xtemplate.components import MappingComponentLoader
>>> from xtemplate.translator import Translator
>>> loader = MappingComponentLoader({"box": '<b>{{block "#slot--default" .}}{{end}}</b>'})
>>> output = Translator(loader).translate('<component type="box">hi</component>')
>>> "component__box__1" in output and "box__1__default" in output
True
"""

from __future__ import annotations

import itertools
import logging
import typing as typ
from pathlib import Path

from xtemplate._constants import DEFAULT_EXTENSION
from xtemplate.components.binder import SlotBinder
from xtemplate.components.loader import ComponentTemplateLoader
from xtemplate.components.locator import find_component
from xtemplate.document import Document
from xtemplate.errors import ExpansionLimitError

if typ.TYPE_CHECKING:
    from xtemplate.components.loader import ComponentSource

log = logging.getLogger(__name__)

DEFAULT_MAX_COMPONENTS = 10_000
DEFAULT_MAX_DEPTH = 64


class Translator:
    """One translation session: a component loader plus a name counter.

    The loader and its template cache live as long as the instance. The
    counter and the component budget restart with every top-level call to
    :meth:`translate`, so the same document always yields the same block
    names. Nested calls made while binding slots share the running counter.
    """

    def __init__(
        self,
        loader: ComponentSource,
        *,
        max_components: int = DEFAULT_MAX_COMPONENTS,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        """Initialize the session.

        Parameters
        ----------
        loader : ComponentSource
            Resolves component types to template snippets.
        max_components : int, optional
            Number of components one top-level call may resolve before giving
            up with :class:`~xtemplate.errors.ExpansionLimitError`.
        max_depth : int, optional
            Deepest nesting of components inside slots before giving up with
            :class:`~xtemplate.errors.ExpansionLimitError`.
        """
        self.loader = loader
        self.max_components = max_components
        self.max_depth = max_depth
        self.resolved = 0
        self._depth = 0
        self._counter = itertools.count(1)
        self._binder = SlotBinder(loader, self._next_index, self.translate)

    def _next_index(self) -> int:
        if self.resolved >= self.max_components:
            msg = (
                f"Resolved {self.resolved} components without finishing; "
                "a component template probably references itself"
            )
            raise ExpansionLimitError(msg)
        self.resolved += 1
        return next(self._counter)

    def translate(self, text: str) -> str:
        """Return ``text`` with every ``<component>`` expanded.

        Raises
        ------
        ScanError
            If tag or action nesting is malformed. No partial output is
            returned.
        ExpansionLimitError
            If expansion exceeds ``max_components`` or ``max_depth``.
        """
        if self._depth == 0:
            self.resolved = 0
            self._counter = itertools.count(1)
        elif self._depth >= self.max_depth:
            msg = (
                f"Components nested more than {self.max_depth} levels deep; "
                "a component template probably references itself"
            )
            raise ExpansionLimitError(msg)
        self._depth += 1
        try:
            return self._expand(text)
        finally:
            self._depth -= 1

    def _expand(self, text: str) -> str:
        doc = Document(text)
        while (component := find_component(doc.text)) is not None:
            if not component.id:
                log.debug(
                    "Dropping <component> without a type at offset %d",
                    component.start,
                )
                doc.cut(component.start, component.end)
                continue
            bound = self._binder.bind(component)
            doc.splice(component.start, component.end, bound)
            log.debug("Expanded component %r", component.id)
        return doc.text


def translate(
    text: str,
    *,
    components_dir: Path | str,
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """Translate ``text`` in a fresh session reading templates from disk."""
    loader = ComponentTemplateLoader(Path(components_dir), extension)
    return Translator(loader).translate(text)


__all__ = ["DEFAULT_MAX_COMPONENTS", "DEFAULT_MAX_DEPTH", "Translator", "translate"]
