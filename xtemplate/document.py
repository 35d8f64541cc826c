"""Mutable text buffer used while components are spliced into a document.

Offsets handed out by the scanners are only meaningful for the exact text
they were computed against. :class:`Document` keeps a ``revision`` number
that every mutation bumps, which lets callers check that the positions they
are about to use were scanned from the current text.

Example
-------
>>> doc = Document("<p>hello</p>")
>>> doc.splice(3, 8, "world")
>>> str(doc)
'<p>world</p>'
>>> doc.revision
1
"""

from __future__ import annotations


class Document:
    """Text buffer supporting cut, splice, and literal replace."""

    __slots__ = ("_text", "revision")

    def __init__(self, text: str = "") -> None:
        self._text = text
        self.revision = 0

    def __str__(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    def __getitem__(self, key: slice) -> str:
        return self._text[key]

    def __repr__(self) -> str:
        return f"Document(revision={self.revision}, length={len(self._text)})"

    @property
    def text(self) -> str:
        """Return the current buffer contents."""
        return self._text

    def cut(self, start: int, end: int) -> None:
        """Remove the characters in ``[start, end)``."""
        self.splice(start, end, "")

    def splice(self, start: int, end: int, data: str) -> None:
        """Replace the characters in ``[start, end)`` with ``data``.

        Parameters
        ----------
        start : int
            Offset of the first character to replace.
        end : int
            Offset one past the last character to replace.
        data : str
            Replacement text; may be longer or shorter than the span.

        Raises
        ------
        IndexError
            If the span does not lie within the buffer.
        """
        if not 0 <= start <= end <= len(self._text):
            msg = f"Span [{start}, {end}) is outside a buffer of length {len(self._text)}"
            raise IndexError(msg)
        self._text = f"{self._text[:start]}{data}{self._text[end:]}"
        self.revision += 1

    def replace(self, old: str, new: str, count: int = -1) -> int:
        """Replace literal occurrences of ``old`` and return how many changed."""
        if not old:
            msg = "Cannot replace an empty string"
            raise ValueError(msg)
        found = self._text.count(old)
        replaced = found if count < 0 else min(found, count)
        if replaced:
            self._text = self._text.replace(old, new, count)
            self.revision += 1
        return replaced


__all__ = ["Document"]
