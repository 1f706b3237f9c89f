"""Decide what a drop does from the held modifiers and the panes involved."""

from dataclasses import dataclass
from typing import Literal

from blockdrag.models.block import OperationKind
from blockdrag.settings import DndSettings

ModifierClass = Literal["shift", "alt", "simple"]


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held when the block was dropped."""

    shift: bool = False
    alt: bool = False
    meta: bool = False


def classify_modifiers(modifiers: Modifiers) -> ModifierClass:
    """Reduce held modifiers to one class. Shift wins over alt/meta."""
    if modifiers.shift:
        return "shift"
    if modifiers.alt or modifiers.meta:
        return "alt"
    return "simple"


def decide_operation(
    modifiers: Modifiers,
    same_buffer: bool,
    settings: DndSettings,
) -> OperationKind:
    """Look up the configured operation for this drop."""
    modifier = classify_modifiers(modifiers)
    if modifier == "shift":
        return settings.shift
    if modifier == "alt":
        return settings.alt
    return settings.simple_same_pane if same_buffer else settings.simple_different_panes
