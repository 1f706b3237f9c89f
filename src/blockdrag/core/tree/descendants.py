"""Tree reconstruction over the flat list-item index."""

from collections.abc import Sequence

from blockdrag.models.block import Block, BlockGroup


def get_children(parent: Block, all_blocks: Sequence[Block]) -> tuple[Block, ...]:
    """Get direct children of a block, in document order."""
    return tuple(b for b in all_blocks if b.parent_start_line == parent.start_line)


def collect_descendants(roots: Sequence[Block], all_blocks: Sequence[Block]) -> BlockGroup:
    """Collect roots and every block transitively nested under them.

    Children point at their parent by start line. The frontier holds the
    blocks whose children are still to be found; ``visited`` holds start lines
    so each block joins the group at most once. Blocks sharing a root's start
    line are the roots themselves and are skipped.

    Returns:
        BlockGroup with the roots first, then descendants breadth-first.
    """
    members: list[Block] = []
    visited: set[int] = set()
    for root in roots:
        if root.start_line not in visited:
            visited.add(root.start_line)
            members.append(root)

    frontier = list(members)
    while frontier:
        found: list[Block] = []
        for parent in frontier:
            for child in get_children(parent, all_blocks):
                if child.start_line not in visited:
                    visited.add(child.start_line)
                    found.append(child)
        members.extend(found)
        frontier = found

    return BlockGroup(members=tuple(members))
