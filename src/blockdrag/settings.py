"""Persisted drag-and-drop settings, merged over defaults on load."""

import json
from pathlib import Path
from typing import Any

from loguru import logger
from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError

from blockdrag.config import resolve_settings_file
from blockdrag.models.block import OperationKind


class DndSettings(BaseModel):
    """What each kind of drop does, and when drag handles are shown."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    simple_same_pane: OperationKind = "move"
    simple_different_panes: OperationKind = "embed"
    shift: OperationKind = "copy"
    alt: OperationKind = "none"
    show_handle_on_hover: StrictBool = True


DEFAULT_SETTINGS = DndSettings()


def settings_from_dict(data: Any) -> DndSettings:
    """Build settings from a raw record.

    Missing keys take defaults, unknown keys are ignored and invalid values
    are replaced by their default with a warning.
    """
    try:
        return DndSettings.model_validate(data)
    except ValidationError as e:
        errors = e.errors()

    if not isinstance(data, dict):
        logger.warning(
            "Settings must be a JSON object, got {}; using defaults", type(data).__name__
        )
        return DEFAULT_SETTINGS

    invalid: set[str | int] = set()
    for error in errors:
        key = error["loc"][0]
        invalid.add(key)
        logger.warning("Invalid value {!r} for {}, using default", error["input"], key)

    return DndSettings.model_validate({k: v for k, v in data.items() if k not in invalid})


def load_settings(path: Path | None = None) -> DndSettings:
    """Load settings from a JSON file, falling back to defaults.

    Args:
        path: Settings file. Defaults to the first existing configured file.
    """
    path = path or resolve_settings_file()
    if not path.exists():
        logger.debug("No settings file at {}, using defaults", path)
        return DEFAULT_SETTINGS

    try:
        data = json.loads(path.read_text())
    except (OSError, ValueError) as e:
        logger.warning("Cannot read settings from {}: {}; using defaults", path, e)
        return DEFAULT_SETTINGS

    return settings_from_dict(data)


def save_settings(settings: DndSettings, path: Path | None = None) -> Path:
    """Write settings as a flat JSON record and return the file written."""
    path = path or resolve_settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(settings.model_dump(), sort_keys=True, indent=4) + "\n")
    return path
