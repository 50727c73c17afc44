"""
Image processing modules for Photool

Includes the pixel buffer model, filters, geometry and the edit history.
"""

from .buffer import PixelBuffer
from .errors import (
    EditorError, NoImageLoaded, NoHistory, InvalidRegion, DecodeFailure, EditorBusy,
)
from .history import HistoryStack, HistoryEntry
from .adjustments import AdjustmentState, apply_adjustments
from .effects import EffectKind, EffectSpec, EFFECT_REGISTRY, resolve_effect

__all__ = [
    "PixelBuffer",
    "EditorError",
    "NoImageLoaded",
    "NoHistory",
    "InvalidRegion",
    "DecodeFailure",
    "EditorBusy",
    "HistoryStack",
    "HistoryEntry",
    "AdjustmentState",
    "apply_adjustments",
    "EffectKind",
    "EffectSpec",
    "EFFECT_REGISTRY",
    "resolve_effect",
]
