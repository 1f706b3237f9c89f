"""Build the flat list-item and section index of a document."""

from blockdrag.core.structure.parser import find_block_id, parse_document
from blockdrag.models.block import Block, BlockIndex, Section


def build_block_index(text: str) -> BlockIndex:
    """Index every list item and top-level section of a markdown document.

    List items cover only their own lines. Nesting is recorded by pointing
    each item at its enclosing item's start line, so the tree can be rebuilt
    from the flat list without object references.
    """
    doc = parse_document(text)
    items: list[Block] = []
    sections: list[Section] = []

    for i, node in enumerate(doc.nodes):
        if node.parent is None:
            sections.append(
                Section(type=node.kind, start_line=node.start_line, end_line=node.end_line)
            )
        if node.kind != "listItem":
            continue

        own_end = doc.own_end_line(i)
        parent = doc.enclosing(i, "listItem")
        items.append(
            Block(
                start_line=node.start_line,
                end_line=own_end,
                start_offset=doc.lines.content_start(node.start_line),
                end_offset=doc.lines.content_end(own_end),
                parent_start_line=doc.nodes[parent].start_line if parent is not None else None,
                stable_id=find_block_id(doc.lines.line(own_end).text),
            )
        )

    return BlockIndex(list_items=tuple(items), sections=tuple(sections))
