"""Tests for block id generation and anchoring."""

import string

from blockdrag.core.anchor import anchor_for_line, assign_anchor, generate_id
from blockdrag.core.structure.index import build_block_index
from blockdrag.core.transfer import apply_edits
from blockdrag.core.tree.descendants import collect_descendants
from blockdrag.models.block import TextEdit
from tests.unit.conftest import MIXED_DOC, NESTED_DOC
from tests.unit.fakes import SequenceIds


def test_generate_id_is_short_lowercase_alphanumeric() -> None:
    for _ in range(20):
        new_id = generate_id()
        assert len(new_id) == 6
        assert set(new_id) <= set(string.digits + string.ascii_lowercase)


def test_assign_anchor_patches_end_of_block() -> None:
    index = build_block_index(NESTED_DOC)
    block = index.list_items[1]
    group = collect_descendants([block], index.list_items)

    record = assign_anchor(block, group, id_factory=SequenceIds(["abc123"]))

    assert record.stable_id == "abc123"
    assert record.insertion_offset == block.end_offset
    assert record.insertion_text == " ^abc123"
    assert (record.from_line, record.to_line) == (2, 3)
    patched = apply_edits(
        NESTED_DOC, [TextEdit.insertion(record.insertion_offset, record.insertion_text)]
    )
    assert patched.splitlines()[1] == "\t- B ^abc123"


def test_assign_anchor_reuses_existing_id() -> None:
    index = build_block_index(MIXED_DOC)
    block = index.item_at(7)
    assert block is not None
    ids = SequenceIds([])

    record = assign_anchor(block, collect_descendants([block], index.list_items), id_factory=ids)

    assert record.stable_id == "keep01"
    assert record.is_noop
    assert ids.calls == 0


def test_anchoring_twice_is_idempotent() -> None:
    first = anchor_for_line(build_block_index(NESTED_DOC), 4, id_factory=SequenceIds(["one111"]))
    assert first is not None
    text = apply_edits(
        NESTED_DOC, [TextEdit.insertion(first.insertion_offset, first.insertion_text)]
    )

    second = anchor_for_line(build_block_index(text), 4, id_factory=SequenceIds(["two222"]))

    assert second is not None
    assert second.stable_id == first.stable_id == "one111"
    assert second.insertion_text == ""
    assert text.count("^one111") == 1


def test_new_id_avoids_ids_already_in_document() -> None:
    index = build_block_index(MIXED_DOC)
    block = index.item_at(6)
    assert block is not None
    ids = SequenceIds(["keep01", "fresh1"])

    record = assign_anchor(
        block,
        collect_descendants([block], index.list_items),
        existing_ids=index.existing_ids(),
        id_factory=ids,
    )

    assert record.stable_id == "fresh1"
    assert ids.calls == 2


def test_anchor_for_line_without_item() -> None:
    assert anchor_for_line(build_block_index(MIXED_DOC), 3) is None
