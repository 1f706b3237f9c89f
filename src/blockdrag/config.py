"""Configuration constants for blockdrag."""

from pathlib import Path

# Settings file location. First file found is used; when none exists the
# first candidate is where settings get saved.
SETTINGS_FILES: list[Path] = [
    Path("~/.config/blockdrag/settings.json").expanduser(),
    Path("~/.blockdrag.json").expanduser(),
]

# Length of generated block ids (the part after "^").
ANCHOR_ID_LENGTH: int = 6

# Pixels past a line's own indentation the pointer must travel before a drop
# nests under the hovered line instead of landing after its parent.
DROP_MODE_THRESHOLD_PX: int = 2

# Body class toggled on when handles should be visible without hovering.
ALWAYS_SHOW_HANDLES_CLASS: str = "dnd-always-show-handles"


def resolve_settings_file() -> Path:
    """Return the first existing settings file, or the default location."""
    for candidate in SETTINGS_FILES:
        if candidate.is_file():
            return candidate
    return SETTINGS_FILES[0]
