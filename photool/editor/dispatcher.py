"""
Effect dispatcher for Photool.

Resolves an effect identifier to a filter or geometry operation, runs it
against the current image and commits the result. Processing always yields
to the event loop and lasts at least `processing_delay` seconds so the busy
state stays visible; the delay and the sleep function are injectable.
"""

import asyncio
import logging
from functools import partial
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

import cv2

from ..processing.buffer import PixelBuffer
from ..processing.catalog import display_name
from ..processing.effects import EffectKind, EffectSpec, resolve_effect
from ..processing.errors import DecodeFailure, EditorBusy, EditorError, NoImageLoaded
from ..processing.geometry import flip, rotate
from ..utils.logging import StructuredLogger
from .notifications import EditOutcome
from .session import EditorSession

logger = logging.getLogger(__name__)

DEFAULT_PROCESSING_DELAY = 0.5  # seconds

Sleep = Callable[[float], Awaitable[Any]]


class StaleResult(EditorError):
    """The image was replaced while an effect was processing."""

    title = "Effect discarded"


class EffectDispatcher:
    """Runs one effect at a time against an EditorSession."""

    def __init__(self, session: EditorSession,
                 processing_delay: float = DEFAULT_PROCESSING_DELAY,
                 sleep: Optional[Sleep] = None,
                 offload_to_thread: bool = False,
                 verify_encoding: bool = False):
        """
        Args:
            session: Editing session to operate on
            processing_delay: Minimum time the busy state lasts, in seconds
            sleep: Awaitable sleep strategy, asyncio.sleep by default
            offload_to_thread: Run pixel work in the default executor
            verify_encoding: Round-trip every result through PNG before commit
        """
        self.session = session
        self.processing_delay = processing_delay
        self._sleep: Sleep = sleep or asyncio.sleep
        self.offload_to_thread = offload_to_thread
        self.verify_encoding = verify_encoding
        self.log = StructuredLogger(__name__)

    async def apply(self, effect_id: str, params: Optional[Dict[str, Any]] = None) -> EditOutcome:
        """
        Apply an effect to the current image.

        Args:
            effect_id: Catalog identifier; unknown ones get the simulated effect
            params: Overrides for the effect's default parameters

        Returns:
            Outcome of the operation, also passed to the session notifier
        """
        session = self.session
        spec = resolve_effect(effect_id)

        if not session.is_loaded:
            return self._reject(effect_id, NoImageLoaded("Upload an image before applying effects"))
        try:
            session.require_idle()
        except EditorBusy as e:
            return self._reject(effect_id, e)

        if spec.kind is EffectKind.CROP:
            session.crop.begin()
            return session.notify(EditOutcome.success(
                "crop", "Crop mode activated", "Drag to select the area you want to keep",
                effect_id=effect_id,
            ))

        session.is_processing = True
        session.active_effect = effect_id
        generation = session.generation
        source = session.history.current()
        self.log.debug("Processing effect", effect=effect_id, kind=spec.kind.value)

        try:
            await self._sleep(self.processing_delay)
            result, transform = await self._run(self._render, spec, source, params)
            if self.verify_encoding:
                result = PixelBuffer.decode(result.encode())

            if session.generation != generation:
                raise StaleResult("A new image was loaded while the effect was processing")

            session.history.commit(result, label=display_name(effect_id))
            self._update_transform(spec, transform)
        except EditorError as e:
            self.log.warning("Effect failed", effect=effect_id, error=str(e))
            return self._reject(effect_id, e)
        finally:
            session.is_processing = False
            session.active_effect = None

        self.log.info("Effect applied", effect=effect_id, size=result.size,
                      position=session.history.cursor)
        return session.notify(self._success(spec))

    async def _run(self, func: Callable, *args) -> Any:
        if not self.offload_to_thread:
            return func(*args)
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(func, *args))

    def _render(self, spec: EffectSpec, source: PixelBuffer,
                params: Optional[Dict[str, Any]]) -> Tuple[PixelBuffer, Any]:
        transform = self.session.transform
        try:
            if spec.kind is EffectKind.ROTATE:
                return rotate(source, transform.rotation_degrees)
            if spec.kind is EffectKind.FLIP:
                return flip(source, transform.rotation_degrees, transform.flipped)
            return spec.render(source, params), None
        except (ValueError, TypeError, cv2.error) as e:
            raise DecodeFailure(f"Could not render '{spec.effect_id}': {e}") from e

    def _update_transform(self, spec: EffectSpec, value: Any) -> None:
        if spec.kind is EffectKind.ROTATE:
            self.session.transform.rotation_degrees = value
        elif spec.kind is EffectKind.FLIP:
            self.session.transform.flipped = value

    def _success(self, spec: EffectSpec) -> EditOutcome:
        if spec.kind is EffectKind.ROTATE:
            return EditOutcome.success("rotate", "Image rotated",
                                       "Your image has been rotated 90 degrees",
                                       effect_id=spec.effect_id)
        if spec.kind is EffectKind.FLIP:
            return EditOutcome.success("flip", "Image flipped",
                                       "Your image has been flipped horizontally",
                                       effect_id=spec.effect_id)
        description = "Simulated preview, not a faithful rendition" if spec.simulated else ""
        return EditOutcome.success("effect", f"{display_name(spec.effect_id)} effect applied",
                                   description, effect_id=spec.effect_id,
                                   simulated=spec.simulated)

    def _reject(self, effect_id: str, error: EditorError) -> EditOutcome:
        logger.debug(f"Rejected '{effect_id}': {error}")
        return self.session.notify(EditOutcome.failure("effect", error, effect_id=effect_id))
