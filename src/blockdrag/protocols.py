"""Protocols for the host collaborators blockdrag talks to."""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from blockdrag.models.block import Line, TextEdit


@runtime_checkable
class TextBufferProtocol(Protocol):
    """Protocol for the text buffer behind an open editor pane."""

    name: str

    def get_text(self) -> str:
        """Return the whole document text."""
        ...

    def line_at(self, offset: int) -> Line:
        """Return the line containing ``offset``.

        Raises GeometryOutOfRangeError when the offset is outside the document.
        """
        ...

    def line(self, number: int) -> Line:
        """Return a line by its 1-based number."""
        ...

    def apply_edits(self, edits: Sequence[TextEdit]) -> None:
        """Apply edits computed against the current text, all or nothing."""
        ...

    def focus(self) -> None:
        """Give the pane keyboard focus."""
        ...
