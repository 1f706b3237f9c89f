"""Drag and drop list blocks inside markdown documents."""

from blockdrag.buffer import FileBuffer, TextBuffer
from blockdrag.core.structure.resolver import resolve_block
from blockdrag.core.transfer import apply_edits, compute_transfer
from blockdrag.protocols import TextBufferProtocol
from blockdrag.session import DragSession, drag_enter, drag_over, drop, end_drag, start_drag
from blockdrag.settings import DndSettings, load_settings, save_settings

__all__ = [
    "DndSettings",
    "DragSession",
    "FileBuffer",
    "TextBuffer",
    "TextBufferProtocol",
    "apply_edits",
    "compute_transfer",
    "drag_enter",
    "drag_over",
    "drop",
    "end_drag",
    "load_settings",
    "resolve_block",
    "save_settings",
    "start_drag",
]
