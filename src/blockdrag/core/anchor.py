"""Stable block ids: generate them and write each one into the text once."""

import random
import string
from collections.abc import Callable, Collection

from loguru import logger

from blockdrag.config import ANCHOR_ID_LENGTH
from blockdrag.core.tree.descendants import collect_descendants
from blockdrag.models.block import AnchorRecord, Block, BlockGroup, BlockIndex

_ID_ALPHABET = string.digits + string.ascii_lowercase

IdFactory = Callable[[], str]


def generate_id() -> str:
    """Return a short random lowercase alphanumeric block id."""
    return "".join(random.choices(_ID_ALPHABET, k=ANCHOR_ID_LENGTH))


def assign_anchor(
    block: Block,
    group: BlockGroup,
    *,
    existing_ids: Collection[str] = (),
    id_factory: IdFactory = generate_id,
) -> AnchorRecord:
    """Return the block's id and the patch that persists it.

    A block that already carries an id gets an empty patch. Otherwise a new
    id is drawn until it differs from every id in ``existing_ids`` and is
    appended as `` ^id`` right after the block's last character.
    """
    if block.stable_id:
        return AnchorRecord(
            stable_id=block.stable_id,
            insertion_offset=block.end_offset,
            insertion_text="",
            from_line=group.from_line,
            to_line=group.to_line,
        )

    new_id = id_factory()
    while new_id in existing_ids:
        logger.debug("Block id {} already used, drawing another", new_id)
        new_id = id_factory()

    return AnchorRecord(
        stable_id=new_id,
        insertion_offset=block.end_offset,
        insertion_text=f" ^{new_id}",
        from_line=group.from_line,
        to_line=group.to_line,
    )


def anchor_for_line(
    index: BlockIndex,
    line: int,
    *,
    id_factory: IdFactory = generate_id,
) -> AnchorRecord | None:
    """Anchor the list item covering ``line``, or None if there is none."""
    block = index.item_at(line)
    if block is None:
        logger.debug("No list item at line {} to anchor", line)
        return None

    group = collect_descendants([block], index.list_items)
    return assign_anchor(block, group, existing_ids=index.existing_ids(), id_factory=id_factory)
