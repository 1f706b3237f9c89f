"""Find the tightest list item or paragraph enclosing a line."""

from loguru import logger

from blockdrag.core.structure.parser import ParsedDocument, find_block_id, parse_document
from blockdrag.models.block import Block, BlockKind


def node_to_block(doc: ParsedDocument, index: int) -> Block:
    """Build a Block for an arena node, spanning its nested children too."""
    node = doc.nodes[index]
    parent = doc.enclosing(index, "listItem")
    id_line = doc.own_end_line(index) if node.kind == "listItem" else node.end_line
    return Block(
        start_line=node.start_line,
        end_line=node.end_line,
        start_offset=doc.lines.content_start(node.start_line),
        end_offset=doc.lines.content_end(node.end_line),
        parent_start_line=doc.nodes[parent].start_line if parent is not None else None,
        stable_id=find_block_id(doc.lines.line(id_line).text),
    )


def resolve_block(text: str, line: int, kind: BlockKind = "listItem") -> Block | None:
    """Return the narrowest block of ``kind`` whose range contains ``line``.

    Nested lists give several list items around the same line; the one with
    the smallest height is the block that was actually grabbed. Ties keep
    the first node in document order. Returns None when no block of that
    kind covers the line.
    """
    doc = parse_document(text)
    candidates = [
        i
        for i, node in enumerate(doc.nodes)
        if node.kind == kind and node.start_line <= line <= node.end_line
    ]
    if not candidates:
        logger.debug("No {} encloses line {}", kind, line)
        return None

    best = min(candidates, key=lambda i: doc.nodes[i].height)
    return node_to_block(doc, best)
