"""
Operation outcomes for Photool.

Every editor operation produces an EditOutcome. The editor hands it to a
notifier callable; rendering the message is up to the collaborator.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..processing.errors import EditorError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EditOutcome:
    """Semantic result of one editor operation."""
    operation: str
    succeeded: bool
    title: str
    description: str = ""
    effect_id: Optional[str] = None
    simulated: bool = False
    error: Optional[str] = None  # Error class name on failure

    @classmethod
    def success(cls, operation: str, title: str, description: str = "", **kwargs) -> 'EditOutcome':
        return cls(operation=operation, succeeded=True, title=title, description=description, **kwargs)

    @classmethod
    def failure(cls, operation: str, error: EditorError, title: Optional[str] = None,
                **kwargs) -> 'EditOutcome':
        return cls(
            operation=operation,
            succeeded=False,
            title=title or error.title,
            description=str(error),
            error=type(error).__name__,
            **kwargs,
        )


Notifier = Callable[[EditOutcome], None]


class LoggingNotifier:
    """Writes outcomes to the log."""

    def __init__(self, name: str = "photool.notifications"):
        self.logger = logging.getLogger(name)

    def __call__(self, outcome: EditOutcome) -> None:
        message = f"{outcome.title}: {outcome.description}" if outcome.description else outcome.title
        if outcome.succeeded:
            self.logger.info(message)
        else:
            self.logger.warning(message)


class CollectingNotifier:
    """Keeps every outcome in memory."""

    def __init__(self):
        self.outcomes: List[EditOutcome] = []

    def __call__(self, outcome: EditOutcome) -> None:
        self.outcomes.append(outcome)

    @property
    def last(self) -> Optional[EditOutcome]:
        return self.outcomes[-1] if self.outcomes else None

    def clear(self) -> None:
        self.outcomes.clear()
