"""Tests for the drop operation policy."""

import pytest

from blockdrag.core.policy import Modifiers, classify_modifiers, decide_operation
from blockdrag.settings import DEFAULT_SETTINGS, DndSettings


@pytest.mark.parametrize(
    ("modifiers", "expected"),
    [
        (Modifiers(), "simple"),
        (Modifiers(shift=True), "shift"),
        (Modifiers(alt=True), "alt"),
        (Modifiers(meta=True), "alt"),
        (Modifiers(shift=True, alt=True), "shift"),
        (Modifiers(shift=True, meta=True), "shift"),
    ],
)
def test_classify_modifiers(modifiers: Modifiers, expected: str) -> None:
    assert classify_modifiers(modifiers) == expected


@pytest.mark.parametrize(
    ("modifiers", "same_buffer", "expected"),
    [
        (Modifiers(), True, "move"),
        (Modifiers(), False, "embed"),
        (Modifiers(shift=True), True, "copy"),
        (Modifiers(shift=True), False, "copy"),
        (Modifiers(alt=True), True, "none"),
        (Modifiers(meta=True), False, "none"),
    ],
)
def test_default_policy(modifiers: Modifiers, same_buffer: bool, expected: str) -> None:
    assert decide_operation(modifiers, same_buffer, DEFAULT_SETTINGS) == expected


def test_each_slot_is_configurable() -> None:
    settings = DndSettings(
        simple_same_pane="copy",
        simple_different_panes="move",
        shift="embed",
        alt="move",
    )
    assert decide_operation(Modifiers(), True, settings) == "copy"
    assert decide_operation(Modifiers(), False, settings) == "move"
    assert decide_operation(Modifiers(shift=True), True, settings) == "embed"
    assert decide_operation(Modifiers(alt=True), False, settings) == "move"
