"""
Slider adjustment controller for Photool.

Slider changes only touch AdjustmentState. A debounced commit rasterizes
all slider values in one pass and records exactly one history entry, no
matter how many changes arrived during the quiet window.
"""

import logging

from ..processing.adjustments import apply_adjustments
from ..processing.errors import EditorError, NoImageLoaded
from .debounce import DebouncedTask
from .notifications import EditOutcome
from .session import EditorSession

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_DELAY = 0.3  # seconds


class AdjustmentController:
    """Connects slider input to debounced history commits."""

    def __init__(self, session: EditorSession, debounce_delay: float = DEFAULT_DEBOUNCE_DELAY):
        self.session = session
        self._task = DebouncedTask(self._on_quiet, debounce_delay)
        self.commit_count = 0

        # Never commit adjustments meant for a previous image
        session.add_reset_listener(self.cancel)

    @property
    def pending(self) -> bool:
        return self._task.pending

    def set(self, name: str, value: float) -> float:
        """
        Change one slider and (re)arm the debounced commit.

        Must be called from a running event loop.

        Returns:
            The stored (clamped) value
        """
        stored = self.session.adjustments.set(name, value)
        self._task.schedule()
        return stored

    def commit(self) -> EditOutcome:
        """Rasterize the current slider values now."""
        session = self.session
        try:
            if not session.is_loaded:
                raise NoImageLoaded("Upload an image before adjusting it")
            session.require_idle()
            result = apply_adjustments(session.current_buffer(), session.adjustments)
            session.history.commit(result, label="Adjustments")
        except EditorError as e:
            logger.warning(f"Adjustments not applied: {e}")
            return session.notify(EditOutcome.failure("adjust", e))

        self.commit_count += 1
        logger.info(f"Committed adjustments {session.adjustments.to_dict()}")
        return session.notify(EditOutcome.success(
            "adjust", "Adjustments applied", "The image adjustments have been applied"
        ))

    def cancel(self) -> None:
        """Drop any pending commit."""
        self._task.cancel()

    def _on_quiet(self) -> None:
        if self.session.is_processing:
            # One commit at a time; try again after the effect finishes
            logger.debug("Effect in progress, deferring adjustment commit")
            self._task.schedule()
            return
        self.commit()
