"""
Interactive crop selection.

The user drags a rectangle in normalized image coordinates, which keeps the
selection independent of the on-screen display size. Committing crops the
current history entry; cancelling leaves the history alone.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Tuple

from ..processing.buffer import PixelBuffer
from ..processing.errors import InvalidRegion
from ..processing.geometry import CropRect, clamp_unit, crop
from ..processing.history import HistoryStack

logger = logging.getLogger(__name__)


class CropState(Enum):
    INACTIVE = "inactive"
    SELECTING = "selecting"
    RECT_READY = "rect_ready"


class CropSession:
    """State machine for one crop interaction."""

    def __init__(self, on_preview: Optional[Callable[[Optional[CropRect]], None]] = None):
        """
        Args:
            on_preview: Called with the live rectangle (or None) on every change
        """
        self.on_preview = on_preview
        self.state = CropState.INACTIVE
        self.anchor: Optional[Tuple[float, float]] = None
        self.preview: Optional[CropRect] = None
        self._held = False

    @property
    def is_active(self) -> bool:
        return self.state is not CropState.INACTIVE

    def begin(self) -> None:
        """Enter selection mode, dropping any previous selection."""
        self._clear()
        self.state = CropState.SELECTING
        logger.debug("Crop mode activated")

    def pointer_down(self, x: float, y: float) -> None:
        """Mark the anchor corner of a new rectangle."""
        if not self.is_active:
            return
        self.anchor = (clamp_unit(x), clamp_unit(y))
        self._held = True
        self.state = CropState.SELECTING
        self._publish(None)

    def pointer_move(self, x: float, y: float) -> Optional[CropRect]:
        """
        Update the live rectangle while the pointer is held.

        Returns:
            The current preview rectangle
        """
        if not self.is_active or not self._held or self.anchor is None:
            return self.preview

        rect = CropRect.from_points(self.anchor, (x, y))
        self.state = CropState.SELECTING if rect.is_degenerate else CropState.RECT_READY
        self._publish(rect)
        return rect

    def pointer_up(self) -> None:
        """Release the pointer; the rectangle stays selected."""
        self._held = False

    def select(self, rect: CropRect) -> CropRect:
        """
        Select an exact rectangle without dragging.

        Unlike pointer input, the rectangle is not clamped.

        Raises:
            InvalidRegion: If the session is inactive or the rectangle does
                not fit inside the image. The previous selection is kept.
        """
        if not self.is_active:
            raise InvalidRegion("Activate crop mode before selecting an area")
        rect.validate()
        self.anchor = (rect.x, rect.y)
        self._held = False
        self.state = CropState.RECT_READY
        self._publish(rect)
        return rect

    def commit(self, history: HistoryStack) -> PixelBuffer:
        """
        Crop the current image to the selected rectangle and record it.

        Returns:
            The cropped buffer

        Raises:
            InvalidRegion: If nothing usable is selected. The session keeps
                its state so the user can adjust the selection.
        """
        if self.state is not CropState.RECT_READY or self.preview is None:
            raise InvalidRegion("Select an area to crop first")

        cropped = crop(history.current(), self.preview)
        history.commit(cropped, label="Crop")
        logger.info(f"Committed crop {self.preview}")
        self._clear()
        return cropped

    def cancel(self) -> None:
        """Leave crop mode without touching the history."""
        if self.is_active:
            logger.debug("Crop cancelled")
        self._clear()

    def _clear(self) -> None:
        self.state = CropState.INACTIVE
        self.anchor = None
        self._held = False
        self._publish(None)

    def _publish(self, rect: Optional[CropRect]) -> None:
        self.preview = rect
        if self.on_preview is not None:
            self.on_preview(rect)
