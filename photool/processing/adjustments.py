"""
Slider adjustments for Photool.

AdjustmentState holds pending slider values. They are rasterized in one
combined pass only when a commit is requested.
"""

import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Tuple

from .buffer import PixelBuffer
from .color.adjustments import brightness, contrast, saturation, hue_shift
from .enhance import gaussian_blur

logger = logging.getLogger(__name__)

# Slider ranges (min, max)
ADJUSTMENT_RANGES: Dict[str, Tuple[float, float]] = {
    'brightness': (0.0, 200.0),
    'contrast': (0.0, 200.0),
    'saturation': (0.0, 200.0),
    'hue': (0.0, 360.0),
    'blur': (0.0, 20.0),
}


@dataclass
class AdjustmentState:
    """Pending slider values (brightness/contrast/saturation: 100 = neutral)."""
    brightness: float = 100.0
    contrast: float = 100.0
    saturation: float = 100.0
    hue: float = 0.0  # degrees
    blur: float = 0.0  # px

    def set(self, name: str, value: float) -> float:
        """
        Set one slider, clamped to its range.

        Hue wraps into [0, 360).

        Returns:
            The stored value

        Raises:
            KeyError: If the slider name is unknown
        """
        if name not in ADJUSTMENT_RANGES:
            raise KeyError(f"Unknown adjustment: {name}")
        low, high = ADJUSTMENT_RANGES[name]
        value = float(value)
        if name == 'hue':
            value = value % high
        else:
            value = min(high, max(low, value))
        setattr(self, name, value)
        return value

    def reset(self) -> None:
        defaults = AdjustmentState()
        for name in ADJUSTMENT_RANGES:
            setattr(self, name, getattr(defaults, name))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def apply_adjustments(buffer: PixelBuffer, state: AdjustmentState) -> PixelBuffer:
    """
    Rasterize all slider values in one pass.

    Order is fixed: brightness, contrast, saturation, hue, then blur when it
    is non-zero. Each stage is stored as 8-bit before the next one runs.

    Args:
        buffer: Image current at commit time
        state: Slider values to apply

    Returns:
        New adjusted buffer
    """
    result = brightness(buffer, state.brightness)
    result = contrast(result, state.contrast)
    result = saturation(result, state.saturation)
    result = hue_shift(result, state.hue)
    if state.blur > 0:
        result = gaussian_blur(result, state.blur)

    logger.debug(f"Applied adjustments {state.to_dict()} to {buffer.width}x{buffer.height}")
    return result
