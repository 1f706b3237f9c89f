"""Parse markdown into a flat arena of block nodes with line positions."""

import bisect
import re
from dataclasses import dataclass
from functools import cached_property

from markdown_it import MarkdownIt

from blockdrag.errors import GeometryOutOfRangeError
from blockdrag.models.block import Line

_MARKDOWN = MarkdownIt("commonmark").enable("table")

# markdown-it token type (without "_open") -> block kind
_KIND_BY_TOKEN: dict[str, str] = {
    "bullet_list": "list",
    "ordered_list": "list",
    "list_item": "listItem",
    "paragraph": "paragraph",
    "heading": "heading",
    "blockquote": "blockquote",
    "table": "table",
    "fence": "code",
    "code_block": "code",
    "hr": "thematicBreak",
    "html_block": "html",
}

BLOCK_ID_PATTERN = re.compile(r"(?:^|\s)\^([A-Za-z0-9-]+)\s*$")


def find_block_id(line_text: str) -> str | None:
    """Return the ``^id`` at the end of a line, if there is one."""
    match = BLOCK_ID_PATTERN.search(line_text)
    return match.group(1) if match else None


class LineTable:
    """Line/offset lookups over a text, lines numbered from 1."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines = text.split("\n")
        self.starts: list[int] = []
        offset = 0
        for line in self.lines:
            self.starts.append(offset)
            offset += len(line) + 1

    def __len__(self) -> int:
        return len(self.lines)

    def _check(self, number: int) -> None:
        if not 1 <= number <= len(self.lines):
            msg = f"Line {number} outside document of {len(self.lines)} lines"
            raise GeometryOutOfRangeError(msg)

    def line(self, number: int) -> Line:
        self._check(number)
        text = self.lines[number - 1].rstrip("\r")
        start = self.starts[number - 1]
        return Line(number=number, start=start, end=start + len(text), text=text)

    def line_at(self, offset: int) -> Line:
        if not 0 <= offset <= len(self.text):
            msg = f"Offset {offset} outside document of length {len(self.text)}"
            raise GeometryOutOfRangeError(msg)
        return self.line(bisect.bisect_right(self.starts, offset))

    def is_blank(self, number: int) -> bool:
        return not self.lines[number - 1].strip()

    def content_start(self, number: int) -> int:
        text = self.lines[number - 1]
        return self.starts[number - 1] + len(text) - len(text.lstrip(" \t"))

    def content_end(self, number: int) -> int:
        return self.starts[number - 1] + len(self.lines[number - 1].rstrip())

    def trim_end(self, start: int, end: int) -> int:
        """Move ``end`` up past trailing blank lines, never above ``start``."""
        end = min(end, len(self.lines))
        while end > start and self.is_blank(end):
            end -= 1
        return end


@dataclass(frozen=True)
class BlockNode:
    """One node of the block arena; ``parent`` is an index into the arena."""

    kind: str
    start_line: int
    end_line: int
    parent: int | None = None

    @property
    def height(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class ParsedDocument:
    """A document's line table plus its block arena in document order."""

    lines: LineTable
    nodes: tuple[BlockNode, ...]

    @cached_property
    def children(self) -> dict[int, tuple[int, ...]]:
        by_parent: dict[int, list[int]] = {}
        for index, node in enumerate(self.nodes):
            if node.parent is not None:
                by_parent.setdefault(node.parent, []).append(index)
        return {parent: tuple(kids) for parent, kids in by_parent.items()}

    def enclosing(self, index: int, kind: str) -> int | None:
        """Index of the nearest ancestor of the given kind."""
        parent = self.nodes[index].parent
        while parent is not None:
            if self.nodes[parent].kind == kind:
                return parent
            parent = self.nodes[parent].parent
        return None

    def own_end_line(self, index: int) -> int:
        """Last line of a node excluding any nested list under it."""
        node = self.nodes[index]
        for child in self.children.get(index, ()):
            if self.nodes[child].kind == "list":
                return self.lines.trim_end(node.start_line, self.nodes[child].start_line - 1)
        return node.end_line


def parse_document(text: str) -> ParsedDocument:
    """Parse markdown text into a block arena.

    Token maps from markdown-it are 0-based and end-exclusive; nodes store
    1-based inclusive lines with trailing blank lines trimmed. Container
    tokens without a map (table cells and rows) keep the parent chain intact
    but do not become nodes.
    """
    table = LineTable(text)
    nodes: list[BlockNode] = []
    stack: list[int | None] = []

    for token in _MARKDOWN.parse(text):
        if token.nesting == -1:
            stack.pop()
            continue

        index: int | None = None
        kind = _KIND_BY_TOKEN.get(token.type.removesuffix("_open"))
        if kind is not None and token.map:
            start = token.map[0] + 1
            end = table.trim_end(start, token.map[1])
            parent = next((i for i in reversed(stack) if i is not None), None)
            nodes.append(BlockNode(kind=kind, start_line=start, end_line=end, parent=parent))
            index = len(nodes) - 1

        if token.nesting == 1:
            stack.append(index)

    return ParsedDocument(lines=table, nodes=tuple(nodes))
