"""Drag gesture handlers, threaded through an explicit session object.

A session is created by ``start_drag`` and passed to every later handler of
the same gesture. ``drop`` and ``end_drag`` always leave the session in its
initial state (mode ``current``, no highlights), whatever happened before.
"""

from dataclasses import dataclass, field

from loguru import logger

from blockdrag.core.anchor import IdFactory, generate_id
from blockdrag.core.highlight import choose_drop_mode, project_highlights
from blockdrag.core.policy import Modifiers, decide_operation
from blockdrag.core.structure.index import build_block_index
from blockdrag.core.transfer import apply_transfer, plan_transfer
from blockdrag.errors import GeometryOutOfRangeError
from blockdrag.models.block import (
    DragOperation,
    DropMode,
    HighlightSpan,
    HighlightState,
    Transfer,
)
from blockdrag.protocols import TextBufferProtocol
from blockdrag.settings import DndSettings

EFFECT_ALLOWED = "copyMove"


@dataclass
class DragSession:
    """State owned by one drag gesture."""

    source_buffer: TextBufferProtocol
    source_line: int
    mode: DropMode = "current"
    highlights: HighlightState = field(default_factory=HighlightState.empty)
    ended: bool = False

    @property
    def payload(self) -> dict[str, str]:
        """Data attached to the drag, as the host's drag event carries it."""
        return {"line": str(self.source_line)}

    @property
    def effect_allowed(self) -> str:
        return EFFECT_ALLOWED

    def reset(self) -> None:
        self.mode = "current"
        self.highlights = HighlightState.empty()

    @property
    def visible_highlights(self) -> tuple[HighlightSpan, ...]:
        return self.highlights.spans_for(self.mode)


def start_drag(source_buffer: TextBufferProtocol, line: int) -> DragSession:
    """Begin dragging the block at ``line`` of ``source_buffer``."""
    logger.debug("Drag started at line {} of {}", line, source_buffer.name)
    return DragSession(source_buffer=source_buffer, source_line=line)


def drag_over(
    session: DragSession,
    *,
    indent_px: float,
    pointer_x: float,
    line_left: float,
) -> DropMode:
    """Update the drop mode from pointer geometry and return it."""
    session.mode = choose_drop_mode(indent_px, pointer_x, line_left)
    return session.mode


def drag_enter(session: DragSession, buffer: TextBufferProtocol, offset: int) -> HighlightState:
    """Recompute highlights for the line at ``offset`` of the hovered buffer.

    A position outside the document clears the highlights instead of failing.
    """
    try:
        line = buffer.line_at(offset).number
    except GeometryOutOfRangeError:
        logger.debug("Hover position {} outside {}", offset, buffer.name)
        session.highlights = HighlightState.empty()
        return session.highlights

    session.highlights = project_highlights(build_block_index(buffer.get_text()), line)
    return session.highlights


def drop(
    session: DragSession,
    target_buffer: TextBufferProtocol,
    target_offset: int,
    modifiers: Modifiers,
    settings: DndSettings,
    *,
    id_factory: IdFactory = generate_id,
) -> Transfer:
    """Drop the dragged block at ``target_offset`` of ``target_buffer``.

    Decides the operation, computes the edits and applies them. The session
    is reset whether or not anything changed.

    Returns:
        The applied transfer (empty when the drop was a no-op).
    """
    try:
        same_buffer = session.source_buffer is target_buffer
        kind = decide_operation(modifiers, same_buffer, settings)
        if kind == "none":
            logger.debug("Drop ignored: no operation configured")
            return Transfer(same_buffer=same_buffer)

        try:
            target_line = target_buffer.line_at(target_offset).number
        except GeometryOutOfRangeError:
            logger.debug("Drop position {} outside {}", target_offset, target_buffer.name)
            return Transfer(same_buffer=same_buffer)

        op = DragOperation(
            source_line=session.source_line,
            source_buffer=session.source_buffer,
            destination_line=target_line,
            destination_buffer=target_buffer,
            mode=session.mode,
            kind=kind,
        )
        transfer = plan_transfer(op, id_factory=id_factory)
        apply_transfer(op, transfer)
        return transfer
    finally:
        session.reset()


def end_drag(session: DragSession) -> None:
    """Finish the gesture, dropped or cancelled. Safe to call repeatedly."""
    session.reset()
    session.ended = True
