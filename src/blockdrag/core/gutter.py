"""Drag handles shown in the gutter next to draggable lines."""

import re
from collections.abc import Callable
from dataclasses import dataclass

from blockdrag.config import ALWAYS_SHOW_HANDLES_CLASS
from blockdrag.models.block import BlockIndex, Section
from blockdrag.settings import DndSettings

# Hebrew, Arabic, Syriac, Arabic supplement, Arabic extended-A and the
# Arabic presentation forms.
_RTL_PATTERN = re.compile(
    "[\u0590-\u05FF\u0600-\u06FF\u0700-\u074F\u0750-\u077F"
    "\u08A0-\u08FF\uFB50-\uFDFF\uFE70-\uFEFF]"
)


@dataclass(frozen=True)
class HandleMarker:
    """A gutter marker; only draggable markers show the six-dot handle."""

    section_type: str | None
    draggable: bool = False
    rtl: bool = False


def is_rtl_text(text: str) -> bool:
    return bool(_RTL_PATTERN.search(text))


def drag_preview_text(line_text: str) -> str:
    """Text shown under the pointer while dragging a line."""
    return line_text.strip() or "..."


def _list_handle(section: Section, line_text: str) -> HandleMarker:
    return HandleMarker(section_type=section.type, draggable=True, rtl=is_rtl_text(line_text))


def _empty_marker(section: Section, line_text: str) -> HandleMarker:
    return HandleMarker(section_type=section.type)


# TODO: paragraphs need their own transfer rules before they get a handle.
_RENDERERS: dict[str, Callable[[Section, str], HandleMarker]] = {
    "list": _list_handle,
}


def handle_for_line(index: BlockIndex, line_text: str, line: int) -> HandleMarker | None:
    """Marker for a gutter line; None for empty lines, which get no marker."""
    if not line_text:
        return None

    section = index.section_at(line)
    if section is None:
        return HandleMarker(section_type=None)

    render = _RENDERERS.get(section.type, _empty_marker)
    return render(section, line_text)


def handle_visibility_class(settings: DndSettings) -> str | None:
    """Body class to set when handles stay visible without hovering."""
    return None if settings.show_handle_on_hover else ALWAYS_SHOW_HANDLES_CLASS
