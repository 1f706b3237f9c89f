"""Turn a drop into text edits: move, copy or embed a list block."""

from collections.abc import Sequence

from loguru import logger

from blockdrag.core.anchor import IdFactory, anchor_for_line, generate_id
from blockdrag.core.structure.index import build_block_index
from blockdrag.core.structure.parser import LineTable
from blockdrag.core.structure.resolver import resolve_block
from blockdrag.errors import EditConflictError, GeometryOutOfRangeError
from blockdrag.models.block import DragOperation, DropMode, OperationKind, TextEdit, Transfer


def count_indent(line_text: str) -> int:
    """Number of leading tab characters."""
    return len(line_text) - len(line_text.lstrip("\t"))


def rebase_indent(span: str, *, source_indent: int, target_indent: int, adjust: int) -> str:
    """Shift the tab depth of every line following a newline in ``span``.

    Exactly one of the strip/add counts is non-zero for a real depth change.
    Lines with fewer leading tabs than the strip count are left as they are.
    """
    add = max(target_indent - source_indent + adjust, 0)
    remove = max(source_indent - target_indent - adjust, 0)
    return span.replace("\n" + "\t" * remove, "\n" + "\t" * add)


def insertion_offset(target_text: str, target_line: int) -> int:
    """Where dropped text goes: after the paragraph at the target line, else line end."""
    paragraph = resolve_block(target_text, target_line, "paragraph")
    if paragraph is not None:
        return paragraph.end_offset
    return LineTable(target_text).line(target_line).end


def compute_transfer(
    kind: OperationKind,
    mode: DropMode,
    *,
    source_text: str,
    source_line: int,
    target_text: str,
    target_line: int,
    same_buffer: bool,
    source_name: str,
    id_factory: IdFactory = generate_id,
) -> Transfer:
    """Compute the edits for dropping the list item at ``source_line``.

    All offsets refer to the texts as they are before any edit is applied.

    Args:
        kind: What the drop does.
        mode: ``current`` nests the block under the target line, ``parent``
            places it at the target line's depth.
        source_text: Text of the buffer the block was dragged from.
        source_line: 1-based line the drag started on.
        target_text: Text of the buffer the block was dropped on.
        target_line: 1-based line the block was dropped on.
        same_buffer: Whether both texts belong to one buffer.
        source_name: Document name used in embed links.
        id_factory: Generator for new block ids.

    Returns:
        Transfer with the source-side and destination-side edits. Empty when
        nothing applies (kind ``none``, no list item, or a drop onto itself).
    """
    noop = Transfer(same_buffer=same_buffer)
    if kind == "none":
        return noop

    item = resolve_block(source_text, source_line, "listItem")
    if item is None:
        logger.debug("Nothing to drag at line {}", source_line)
        return noop

    if same_buffer and item.contains_line(target_line):
        logger.debug(
            "Drop on line {} is inside lines {}-{}, ignoring",
            target_line, item.start_line, item.end_line,
        )
        return noop

    at = insertion_offset(target_text, target_line)

    if kind == "embed":
        index = build_block_index(source_text)
        anchor = anchor_for_line(index, item.start_line, id_factory=id_factory)
        if anchor is None:
            return noop
        source_edits: tuple[TextEdit, ...] = ()
        if not anchor.is_noop:
            source_edits = (TextEdit.insertion(anchor.insertion_offset, anchor.insertion_text),)
        link = f" ![[{source_name}#^{anchor.stable_id}]]"
        return Transfer(
            source_edits=source_edits,
            destination_edits=(TextEdit.insertion(at, link),),
            same_buffer=same_buffer,
        )

    source_lines = LineTable(source_text)
    first = source_lines.line(item.start_line)
    span = "\n" + source_text[first.start : item.end_offset].replace("\r\n", "\n")
    text = rebase_indent(
        span,
        source_indent=count_indent(first.text),
        target_indent=count_indent(LineTable(target_text).line(target_line).text),
        adjust=1 if mode == "current" else 0,
    )
    if "\r\n" in target_text:
        text = text.replace("\n", "\r\n")

    source_edits = ()
    if kind == "move":
        if item.start_line > 1:
            start = source_lines.line(item.start_line - 1).end
            source_edits = (TextEdit.deletion(start, item.end_offset),)
        elif item.end_line < len(source_lines):
            # no line break before the first line; take the one after it
            end = source_lines.line(item.end_line + 1).start
            source_edits = (TextEdit.deletion(0, end),)
        else:
            source_edits = (TextEdit.deletion(0, item.end_offset),)

    logger.debug(
        "{} lines {}-{} to line {} ({})",
        kind, item.start_line, item.end_line, target_line, mode,
    )
    return Transfer(
        source_edits=source_edits,
        destination_edits=(TextEdit.insertion(at, text),),
        same_buffer=same_buffer,
    )


def apply_edits(text: str, edits: Sequence[TextEdit]) -> str:
    """Apply edits computed against ``text`` and return the new text.

    Edits are applied in position order; equal positions keep their given
    order. Raises EditConflictError when two edits overlap.
    """
    pieces: list[str] = []
    cursor = 0
    for edit in sorted(edits, key=lambda e: (e.start, e.end)):
        if not 0 <= edit.start <= edit.end <= len(text):
            msg = f"Edit {edit!r} outside document of length {len(text)}"
            raise GeometryOutOfRangeError(msg)
        if edit.start < cursor:
            msg = f"Edit {edit!r} overlaps a previous edit ending at {cursor}"
            raise EditConflictError(msg)
        pieces.append(text[cursor : edit.start])
        pieces.append(edit.insert)
        cursor = edit.end
    pieces.append(text[cursor:])
    return "".join(pieces)


def plan_transfer(op: DragOperation, *, id_factory: IdFactory = generate_id) -> Transfer:
    """Compute the transfer for a drag operation from its buffers' current text."""
    return compute_transfer(
        op.kind,
        op.mode,
        source_text=op.source_buffer.get_text(),
        source_line=op.source_line,
        target_text=op.destination_buffer.get_text(),
        target_line=op.destination_line,
        same_buffer=op.same_buffer,
        source_name=op.source_buffer.name,
        id_factory=id_factory,
    )


def apply_transfer(op: DragOperation, transfer: Transfer) -> None:
    """Apply a transfer to the operation's buffers.

    One buffer gets all edits in a single application. Two buffers are
    updated source first, then destination. The destination gets focus.
    """
    if transfer.is_noop:
        return

    if op.same_buffer:
        op.source_buffer.apply_edits([*transfer.source_edits, *transfer.destination_edits])
    else:
        if transfer.source_edits:
            op.source_buffer.apply_edits(transfer.source_edits)
        op.destination_buffer.apply_edits(transfer.destination_edits)

    op.destination_buffer.focus()
