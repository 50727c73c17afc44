"""
Error types raised by the Photool editing engine.

All errors are recoverable: the editor layer turns them into failed
outcomes and the history stack is never touched by a failed operation.
"""


class EditorError(Exception):
    """Base class for recoverable editing errors."""

    title = "Edit failed"


class NoImageLoaded(EditorError):
    """An operation was attempted before any image was loaded."""

    title = "No image loaded"


class NoHistory(EditorError):
    """Undo or redo was requested past the end of the history."""

    title = "Nothing to undo"


class InvalidRegion(EditorError):
    """A crop rectangle is degenerate or outside the image."""

    title = "Invalid crop region"


class DecodeFailure(EditorError):
    """A produced buffer could not be rasterized or decoded."""

    title = "Could not process image"


class EditorBusy(EditorError):
    """An effect is already being processed."""

    title = "Editor busy"
