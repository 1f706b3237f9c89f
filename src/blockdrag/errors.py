"""Exceptions raised by blockdrag."""


class BlockDragError(Exception):
    """Base class for blockdrag errors."""


class GeometryOutOfRangeError(BlockDragError, IndexError):
    """A position or line lookup fell outside the current document.

    Happens transiently while the pointer moves faster than the document
    updates. Drag handlers treat it the same as finding no block.
    """


class EditConflictError(BlockDragError, ValueError):
    """Two edits in one application overlap."""
