"""Compute which lines to highlight while a block is dragged over a document."""

from blockdrag.config import DROP_MODE_THRESHOLD_PX
from blockdrag.core.tree.descendants import collect_descendants
from blockdrag.models.block import BlockIndex, DropMode, HighlightSpan, HighlightState


def item_spans(
    index: BlockIndex,
    line: int,
    landing_line: int | None = None,
) -> tuple[HighlightSpan, ...] | None:
    """Spans for every line of the item at ``line`` and its descendants.

    The landing line defaults to the last line of the item itself.
    Returns None when no list item covers ``line``.
    """
    block = index.item_at(line)
    if block is None:
        return None

    group = collect_descendants([block], index.list_items)
    landing = landing_line or block.end_line
    return tuple(
        HighlightSpan(line=n, landing=n == landing)
        for n in range(group.from_line, group.to_line + 1)
    )


def project_highlights(
    index: BlockIndex,
    hovered_line: int,
    destination_line: int | None = None,
) -> HighlightState:
    """Highlights for both drop modes when hovering ``hovered_line``.

    ``current`` covers the hovered item. ``parent`` covers the hovered item's
    parent with the hovered line as landing line, or repeats ``current`` for
    a top-level item.
    """
    current = item_spans(index, hovered_line, destination_line)
    if current is None:
        return HighlightState.empty()

    block = index.item_at(hovered_line)
    parent = None
    if block is not None and block.parent_start_line is not None:
        parent = item_spans(index, block.parent_start_line, hovered_line)

    return HighlightState(current_spans=current, parent_spans=parent or current)


def choose_drop_mode(
    indent_px: float,
    pointer_x: float,
    line_left: float,
    *,
    threshold: float = DROP_MODE_THRESHOLD_PX,
) -> DropMode:
    """Nest under the hovered line once the pointer is past its indentation."""
    if indent_px + threshold < pointer_x - line_left:
        return "current"
    return "parent"
