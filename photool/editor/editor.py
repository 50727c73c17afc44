"""
PhotoEditor facade.

Bundles an EditorSession with its EffectDispatcher and AdjustmentController
and exposes the operations a front end wires its controls to.
"""

import logging
from typing import Any, Dict, Optional

from ..config import get_config_value, get_default_config
from ..processing.buffer import PixelBuffer
from ..processing.errors import EditorError, NoImageLoaded
from .adjustments import DEFAULT_DEBOUNCE_DELAY, AdjustmentController
from .comparison import ComparisonView
from .dispatcher import DEFAULT_PROCESSING_DELAY, EffectDispatcher, Sleep
from .notifications import EditOutcome, Notifier
from .session import EditorSession

logger = logging.getLogger(__name__)


class PhotoEditor:
    """One editing session plus the services that operate on it."""

    def __init__(self, notifier: Optional[Notifier] = None,
                 processing_delay: float = DEFAULT_PROCESSING_DELAY,
                 debounce_delay: float = DEFAULT_DEBOUNCE_DELAY,
                 sleep: Optional[Sleep] = None,
                 offload_to_thread: bool = False,
                 verify_encoding: bool = False):
        self.session = EditorSession(notifier)
        self.dispatcher = EffectDispatcher(
            self.session,
            processing_delay=processing_delay,
            sleep=sleep,
            offload_to_thread=offload_to_thread,
            verify_encoding=verify_encoding,
        )
        self.adjustments = AdjustmentController(self.session, debounce_delay)

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None,
                    notifier: Optional[Notifier] = None,
                    sleep: Optional[Sleep] = None) -> 'PhotoEditor':
        """
        Build an editor from a configuration dictionary

        Args:
            config: Configuration as returned by load_config, defaults if None
            notifier: Outcome sink, logs outcomes if None
            sleep: Awaitable sleep strategy for the processing delay
        """
        config = config if config is not None else get_default_config()
        defaults = get_default_config()['editor']

        def editor_value(key: str) -> Any:
            return get_config_value(config, f'editor.{key}', defaults[key])

        return cls(
            notifier=notifier,
            processing_delay=float(editor_value('processing_delay_ms')) / 1000.0,
            debounce_delay=float(editor_value('adjustment_debounce_ms')) / 1000.0,
            sleep=sleep,
            offload_to_thread=bool(editor_value('offload_to_thread')),
            verify_encoding=bool(editor_value('verify_encoding')),
        )

    @property
    def history(self):
        return self.session.history

    @property
    def crop(self):
        return self.session.crop

    def load(self, image: PixelBuffer) -> EditOutcome:
        return self.session.load(image)

    async def apply_effect(self, effect_id: str, params: Optional[Dict[str, Any]] = None) -> EditOutcome:
        return await self.dispatcher.apply(effect_id, params)

    def set_adjustment(self, name: str, value: float) -> float:
        return self.adjustments.set(name, value)

    def commit_adjustments(self) -> EditOutcome:
        # A pending debounce stays armed if the commit is refused as busy
        if not self.session.is_processing:
            self.adjustments.cancel()
        return self.adjustments.commit()

    def apply_crop(self) -> EditOutcome:
        """Commit the current crop selection."""
        session = self.session
        try:
            if not session.is_loaded:
                raise NoImageLoaded("Upload an image before cropping")
            session.require_idle()
            cropped = session.crop.commit(session.history)
        except EditorError as e:
            logger.warning(f"Crop not applied: {e}")
            return session.notify(EditOutcome.failure("crop", e))

        logger.info(f"Image cropped to {cropped.width}x{cropped.height}")
        return session.notify(EditOutcome.success(
            "crop", "Image cropped", "Your image has been cropped successfully", effect_id="crop"
        ))

    def cancel_crop(self) -> EditOutcome:
        self.session.crop.cancel()
        return self.session.notify(EditOutcome.success("crop", "Crop cancelled", effect_id="crop"))

    def undo(self) -> EditOutcome:
        return self.session.undo()

    def redo(self) -> EditOutcome:
        return self.session.redo()

    def reset(self) -> EditOutcome:
        return self.session.reset_effects()

    def comparison(self, position: float = 50.0) -> ComparisonView:
        """
        Raises:
            NoImageLoaded: If nothing has been loaded yet
        """
        return ComparisonView(self.session.original_buffer(), self.session.current_buffer(), position)

    def export(self, format: Optional[str] = None) -> bytes:
        return self.session.export(format) if format else self.session.export()

    def close(self) -> None:
        """Drop pending work; call before discarding the editor."""
        self.adjustments.cancel()
        self.session.crop.cancel()
