"""
Photool editor module.

Session state, effect dispatch, debounced slider adjustments, crop
interaction and the before/after comparison.
"""

from .adjustments import AdjustmentController
from .comparison import ComparisonView, render_comparison
from .crop import CropSession, CropState
from .debounce import DebouncedTask
from .dispatcher import EffectDispatcher, StaleResult
from .editor import PhotoEditor
from .notifications import CollectingNotifier, EditOutcome, LoggingNotifier
from .session import DEFAULT_EXPORT_FILENAME, EditorSession

__all__ = [
    'AdjustmentController',
    'CollectingNotifier',
    'ComparisonView',
    'CropSession',
    'CropState',
    'DEFAULT_EXPORT_FILENAME',
    'DebouncedTask',
    'EditOutcome',
    'EditorSession',
    'EffectDispatcher',
    'LoggingNotifier',
    'PhotoEditor',
    'StaleResult',
    'render_comparison',
]
