"""Domain models for block drag and drop."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from blockdrag.protocols import TextBufferProtocol

OperationKind = Literal["move", "copy", "embed", "none"]
DropMode = Literal["current", "parent"]
BlockKind = Literal["listItem", "paragraph"]

DROP_MODES: tuple[DropMode, ...] = ("current", "parent")


@dataclass(frozen=True)
class Line:
    """A single line of a text buffer."""

    number: int
    start: int
    end: int
    text: str


@dataclass(frozen=True)
class Block:
    """A list item or paragraph with its line and offset range.

    Lines are 1-based and inclusive, offsets 0-based. ``start_offset`` points
    at the first non-indent character of the start line and ``end_offset``
    just past the last content character of the end line.
    """

    start_line: int
    end_line: int
    start_offset: int
    end_offset: int
    parent_start_line: int | None = None
    stable_id: str | None = None

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    @property
    def height(self) -> int:
        return self.end_line - self.start_line


@dataclass(frozen=True)
class Section:
    """A top-level section of a document (list, paragraph, heading, ...)."""

    type: str
    start_line: int
    end_line: int

    def contains_line(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line


@dataclass(frozen=True)
class BlockIndex:
    """Flat index of a document's list items and top-level sections.

    Each list item covers only its own lines; nested sub-lists are separate
    items pointing back at it through ``parent_start_line``.
    """

    list_items: tuple[Block, ...] = ()
    sections: tuple[Section, ...] = ()

    def item_at(self, line: int) -> Block | None:
        return next((item for item in self.list_items if item.contains_line(line)), None)

    def section_at(self, line: int) -> Section | None:
        return next((s for s in self.sections if s.contains_line(line)), None)

    def existing_ids(self) -> frozenset[str]:
        return frozenset(item.stable_id for item in self.list_items if item.stable_id)


@dataclass(frozen=True)
class BlockGroup:
    """A root block plus every block nested under it, root first."""

    members: tuple[Block, ...] = ()

    @property
    def root(self) -> Block | None:
        return self.members[0] if self.members else None

    @property
    def from_line(self) -> int | None:
        if not self.members:
            return None
        return min(b.start_line for b in self.members)

    @property
    def to_line(self) -> int | None:
        if not self.members:
            return None
        return max(b.end_line for b in self.members)

    def __len__(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class AnchorRecord:
    """The id of a block and the patch (if any) that writes it into the text."""

    stable_id: str
    insertion_offset: int
    insertion_text: str
    from_line: int | None = None
    to_line: int | None = None

    @property
    def is_noop(self) -> bool:
        return not self.insertion_text


@dataclass(frozen=True)
class TextEdit:
    """Replace ``[start, end)`` of the pre-edit text with ``insert``."""

    start: int
    end: int
    insert: str = ""

    @classmethod
    def insertion(cls, at: int, text: str) -> "TextEdit":
        return cls(start=at, end=at, insert=text)

    @classmethod
    def deletion(cls, start: int, end: int) -> "TextEdit":
        return cls(start=start, end=end)


@dataclass(frozen=True)
class Transfer:
    """Edits produced by one drop, split by the buffer they target."""

    source_edits: tuple[TextEdit, ...] = ()
    destination_edits: tuple[TextEdit, ...] = ()
    same_buffer: bool = True

    @property
    def is_noop(self) -> bool:
        return not self.source_edits and not self.destination_edits


@dataclass(frozen=True)
class DragOperation:
    """Everything a drop needs, gathered at drop time."""

    source_line: int
    source_buffer: "TextBufferProtocol"
    destination_line: int
    destination_buffer: "TextBufferProtocol"
    mode: DropMode
    kind: OperationKind

    @property
    def same_buffer(self) -> bool:
        return self.source_buffer is self.destination_buffer


@dataclass(frozen=True)
class HighlightSpan:
    """One highlighted line; ``landing`` marks where the drop will land."""

    line: int
    landing: bool = False


@dataclass(frozen=True)
class HighlightState:
    """Highlighted lines for both drop modes."""

    current_spans: tuple[HighlightSpan, ...] = field(default_factory=tuple)
    parent_spans: tuple[HighlightSpan, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> "HighlightState":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.current_spans and not self.parent_spans

    def spans_for(self, mode: DropMode) -> tuple[HighlightSpan, ...]:
        return self.current_spans if mode == "current" else self.parent_spans
