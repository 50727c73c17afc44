"""
Editing session context for Photool.

EditorSession owns all mutable editing state: the history stack, slider
values, transform state, crop selection and the processing flags. The
dispatcher and adjustment controller receive the session explicitly.
"""

import logging
from typing import Callable, List, Optional

from ..processing.adjustments import AdjustmentState
from ..processing.buffer import DEFAULT_EXPORT_FORMAT, PixelBuffer
from ..processing.errors import EditorBusy, EditorError, NoImageLoaded
from ..processing.geometry import TransformState
from ..processing.history import HistoryStack
from .crop import CropSession
from .notifications import EditOutcome, LoggingNotifier, Notifier

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FILENAME = "photool-edited-image.png"


class EditorSession:
    """State of one image being edited."""

    def __init__(self, notifier: Optional[Notifier] = None):
        self.notifier: Notifier = notifier or LoggingNotifier()
        self.history = HistoryStack()
        self.adjustments = AdjustmentState()
        self.transform = TransformState()
        self.crop = CropSession()

        self.is_processing = False
        self.active_effect: Optional[str] = None

        # Bumped whenever the image is replaced, so in-flight work can detect it
        self.generation = 0
        self._reset_listeners: List[Callable[[], None]] = []

    @property
    def is_loaded(self) -> bool:
        return not self.history.is_empty

    def add_reset_listener(self, listener: Callable[[], None]) -> None:
        """Register a callback run whenever the session is reset."""
        self._reset_listeners.append(listener)

    def notify(self, outcome: EditOutcome) -> EditOutcome:
        self.notifier(outcome)
        return outcome

    def load(self, image: PixelBuffer) -> EditOutcome:
        """
        Start editing a new image.

        Seeds the history with the image and resets all slider, transform
        and crop state.
        """
        self.generation += 1
        self.history.reset(image)
        self._reset_state()
        logger.info(f"Loaded {image.width}x{image.height} image (session generation {self.generation})")
        return self.notify(EditOutcome.success(
            "load", "Image loaded", f"{image.width}x{image.height} image ready to edit"
        ))

    def reset_effects(self) -> EditOutcome:
        """Return to the original image and default settings."""
        if self.is_loaded:
            self.generation += 1
            self.history.reset(self.history.original())
        self._reset_state()
        return self.notify(EditOutcome.success(
            "reset", "Effects reset", "The image has been restored to its original state"
        ))

    def undo(self) -> EditOutcome:
        try:
            self._require_image()
            self.require_idle()
            self.history.undo()
        except EditorError as e:
            logger.debug(f"Undo rejected: {e}")
            return self.notify(EditOutcome.failure("undo", e, title="Cannot undo"))
        return self.notify(EditOutcome.success("undo", "Undo", "Reverted the last edit"))

    def redo(self) -> EditOutcome:
        try:
            self._require_image()
            self.require_idle()
            self.history.redo()
        except EditorError as e:
            logger.debug(f"Redo rejected: {e}")
            return self.notify(EditOutcome.failure("redo", e, title="Cannot redo"))
        return self.notify(EditOutcome.success("redo", "Redo", "Reapplied the next edit"))

    def current_buffer(self) -> PixelBuffer:
        """
        Raises:
            NoImageLoaded: If nothing has been loaded yet
        """
        return self.history.current()

    def original_buffer(self) -> PixelBuffer:
        return self.history.original()

    def export(self, format: str = DEFAULT_EXPORT_FORMAT) -> bytes:
        """
        Encode the current image for delivery.

        Raises:
            NoImageLoaded: If nothing has been loaded yet
            DecodeFailure: If the image cannot be encoded
        """
        return self.current_buffer().encode(format)

    def require_idle(self) -> None:
        """
        Raises:
            EditorBusy: If an effect is still processing
        """
        if self.is_processing:
            raise EditorBusy(f"Still processing '{self.active_effect}', try again when it finishes")

    def _require_image(self) -> None:
        if not self.is_loaded:
            raise NoImageLoaded("Upload an image before editing")

    def _reset_state(self) -> None:
        self.adjustments.reset()
        self.transform.reset()
        self.crop.cancel()
        self.active_effect = None
        for listener in self._reset_listeners:
            listener()
