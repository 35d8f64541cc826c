"""Exceptions raised while expanding components.

Every failure that aborts a translation derives from
:class:`TranslationError`, so callers can guard a whole run with a single
``except`` clause. Scanner failures additionally record where in the source
the problem was detected.

Exception hierarchy::

    TranslationError (ValueError)
    ├── ScanError
    │   ├── UnterminatedTagError
    │   ├── UnmatchedClosingTagError
    │   ├── UnterminatedActionError
    │   └── UnmatchedEndError
    ├── ExpansionLimitError
    └── ConfigError
"""

from __future__ import annotations


class TranslationError(ValueError):
    """Raised when a document cannot be translated."""


class ConfigError(TranslationError):
    """Raised when the translator configuration is invalid or incomplete."""


class ExpansionLimitError(TranslationError):
    """Raised when a document keeps producing components without end.

    This happens when a component template, directly or through other
    components, contains a reference to itself.
    """


class ScanError(TranslationError):
    """Raised when tag or action nesting in a source text is malformed.

    Attributes
    ----------
    position : int
        Offset into the scanned text where the problem was detected.
    line : int
        1-based line number of ``position``.
    column : int
        1-based column number of ``position``.
    """

    def __init__(self, detail: str, *, source: str, position: int) -> None:
        self.detail = detail
        self.position = position
        self.line, self.column = _locate(source, position)
        super().__init__(
            f"{detail} (line {self.line}, column {self.column})"
        )


class UnterminatedTagError(ScanError):
    """Raised when an opening tag is never closed."""


class UnmatchedClosingTagError(ScanError):
    """Raised when a closing tag appears without a matching opener."""


class UnterminatedActionError(ScanError):
    """Raised when a block action is never closed by ``{{end}}``."""


class UnmatchedEndError(ScanError):
    """Raised when ``{{end}}`` appears without an open block action."""


def _locate(source: str, position: int) -> tuple[int, int]:
    """Return the 1-based ``(line, column)`` of ``position`` in ``source``."""
    clamped = max(0, min(position, len(source)))
    line = source.count("\n", 0, clamped) + 1
    column = clamped - (source.rfind("\n", 0, clamped) + 1) + 1
    return line, column


__all__ = [
    "ConfigError",
    "ExpansionLimitError",
    "ScanError",
    "TranslationError",
    "UnmatchedClosingTagError",
    "UnmatchedEndError",
    "UnterminatedActionError",
    "UnterminatedTagError",
]
