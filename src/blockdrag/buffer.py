"""Text buffers the drag handlers read from and write edits into."""

from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from blockdrag.core.structure.parser import LineTable
from blockdrag.core.transfer import apply_edits
from blockdrag.models.block import Line, TextEdit


class TextBuffer:
    """In-memory text buffer.

    Edits are applied to a copy of the text which replaces the current text
    only once every edit succeeded, so a failing edit leaves the buffer as
    it was.
    """

    def __init__(self, text: str = "", *, name: str = "Untitled") -> None:
        self.name = name
        self._text = text
        self._lines = LineTable(text)
        self.focused = False
        self.version = 0

    def get_text(self) -> str:
        return self._text

    def line_at(self, offset: int) -> Line:
        return self._lines.line_at(offset)

    def line(self, number: int) -> Line:
        return self._lines.line(number)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def apply_edits(self, edits: Sequence[TextEdit]) -> None:
        if not edits:
            return
        new_text = apply_edits(self._text, edits)
        self._text = new_text
        self._lines = LineTable(new_text)
        self.version += 1
        logger.debug("Applied {} edit(s) to {}", len(edits), self.name)

    def focus(self) -> None:
        self.focused = True


class FileBuffer(TextBuffer):
    """A text buffer loaded from, and saved back to, a file.

    The buffer name is the file's stem, which is how embed links refer to it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        if not self.path.is_file():
            msg = f"File {str(self.path)!r} not found"
            raise FileNotFoundError(msg)
        super().__init__(self.path.read_text(), name=self.path.stem)
        self._saved_version = self.version

    @property
    def dirty(self) -> bool:
        return self.version != self._saved_version

    def save(self) -> bool:
        """Write the text back if it changed. Returns whether a write happened."""
        if not self.dirty:
            return False
        self.path.write_text(self.get_text())
        self._saved_version = self.version
        logger.info("Saved {}", self.path)
        return True
