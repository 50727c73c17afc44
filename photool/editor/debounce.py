"""
Cancellable debounced task.

A single pending slot: scheduling again replaces the pending call instead
of queueing another one, and cancel() guarantees it will not fire.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class DebouncedTask:
    """Run a callback once the calls to schedule() stop for `delay` seconds."""

    def __init__(self, callback: Callable[[], None], delay: float):
        """
        Args:
            callback: Called on the event loop when the window elapses
            delay: Quiet window in seconds
        """
        self.callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self) -> None:
        """
        (Re)start the quiet window.

        Must be called from a running event loop.
        """
        loop = asyncio.get_running_loop()
        if self._handle is not None:
            self._handle.cancel()
        self._handle = loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            logger.debug("Cancelled pending debounced call")

    def _fire(self) -> None:
        self._handle = None
        self.callback()
