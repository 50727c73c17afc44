"""
History stack management for Photool.

Implements linear undo/redo over committed pixel buffers. Committing while
the cursor is behind the tail discards the redo branch; index 0 always
holds the pristine original of the current editing session.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from .buffer import PixelBuffer
from .errors import NoHistory, NoImageLoaded


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryEntry:
    """A committed buffer and the edit that produced it."""
    buffer: PixelBuffer
    label: str
    timestamp: str


class HistoryStack:
    """
    Manages undo/redo history for a Photool editing session.

    Features:
    - Buffers are frozen on commit so published entries never change
    - Redo branch is pruned on commit (last write wins)
    - Cursor always points at the current entry
    """

    def __init__(self):
        self.entries: List[HistoryEntry] = []
        self.cursor = -1  # -1 only while empty

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    def reset(self, original: PixelBuffer, label: str = "Original") -> None:
        """
        Start a new session seeded with exactly one entry.

        Args:
            original: The pristine image of the session
            label: Description of the seed entry
        """
        self.entries = [self._entry(original, label)]
        self.cursor = 0
        logger.info(f"History reset with {original.width}x{original.height} original")

    def commit(self, buffer: PixelBuffer, label: str = "Edit") -> HistoryEntry:
        """
        Publish a new buffer as the current entry.

        Any entries after the cursor are discarded before appending.

        Args:
            buffer: Result of an edit
            label: Human-readable description of the edit

        Returns:
            The new history entry

        Raises:
            NoImageLoaded: If the history has not been seeded with reset()
        """
        if self.is_empty:
            raise NoImageLoaded("Cannot commit an edit before an image is loaded")

        if self.cursor < len(self.entries) - 1:
            pruned = len(self.entries) - self.cursor - 1
            del self.entries[self.cursor + 1:]
            logger.debug(f"Discarded {pruned} redo entries")

        entry = self._entry(buffer, label)
        self.entries.append(entry)
        self.cursor = len(self.entries) - 1

        logger.debug(f"Committed '{label}' at position {self.cursor}")
        return entry

    def undo(self) -> PixelBuffer:
        """
        Step back one entry.

        Returns:
            Buffer at the new cursor position

        Raises:
            NoHistory: If the cursor is already at the original
        """
        if not self.can_undo():
            raise NoHistory("No more undo's available")
        self.cursor -= 1
        logger.debug(f"Undo: moved to position {self.cursor}")
        return self.entries[self.cursor].buffer

    def redo(self) -> PixelBuffer:
        """
        Step forward one entry.

        Returns:
            Buffer at the new cursor position

        Raises:
            NoHistory: If the cursor is already at the newest entry
        """
        if not self.can_redo():
            raise NoHistory("No more redo's available")
        self.cursor += 1
        logger.debug(f"Redo: moved to position {self.cursor}")
        return self.entries[self.cursor].buffer

    def can_undo(self) -> bool:
        """Check if undo is possible."""
        return self.cursor > 0

    def can_redo(self) -> bool:
        """Check if redo is possible."""
        return 0 <= self.cursor < len(self.entries) - 1

    def current(self) -> PixelBuffer:
        """
        Buffer at the cursor.

        Raises:
            NoImageLoaded: If the history is empty
        """
        if self.is_empty:
            raise NoImageLoaded("No image loaded")
        return self.entries[self.cursor].buffer

    def original(self) -> PixelBuffer:
        """Pristine image of the session."""
        if self.is_empty:
            raise NoImageLoaded("No image loaded")
        return self.entries[0].buffer

    def clear(self) -> None:
        """Drop all entries."""
        self.entries = []
        self.cursor = -1
        logger.debug("Cleared history")

    def get_history_summary(self) -> Dict[str, Any]:
        """
        Get a summary of the current history state.

        Returns:
            Cursor, length, undo/redo availability and entry labels
        """
        return {
            'total_entries': len(self.entries),
            'current_position': self.cursor,
            'can_undo': self.can_undo(),
            'can_redo': self.can_redo(),
            'entries': [
                {
                    'label': entry.label,
                    'timestamp': entry.timestamp,
                    'size': entry.buffer.size,
                }
                for entry in self.entries
            ],
        }

    @staticmethod
    def _entry(buffer: PixelBuffer, label: str) -> HistoryEntry:
        # Frozen buffers can be shared between entries without copying
        published = buffer if buffer.is_frozen else buffer.copy().freeze()
        return HistoryEntry(
            buffer=published,
            label=label,
            timestamp=datetime.now().isoformat(),
        )
