"""
Effect registry for Photool.

Maps stable effect identifiers to the filter that implements them. Adding
an effect is a table entry; identifiers missing from the table resolve to
the simulated fallback.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .buffer import PixelBuffer
from .color import (
    brightness, contrast, cross_process, grayscale, hdr, hue_shift,
    saturation, sepia, vintage,
)
from .enhance import clarity, noise_reduction, sharpen, soft_focus
from .simulated import simulate_effect
from .vignette import vignette

logger = logging.getLogger(__name__)


class EffectKind(Enum):
    """How the dispatcher has to handle an effect."""
    FILTER = "filter"          # Pixel filter, buffer -> buffer
    ROTATE = "rotate"          # Geometry, updates rotation state
    FLIP = "flip"              # Geometry, updates mirror state
    CROP = "crop"              # Starts an interactive crop session
    SIMULATED = "simulated"    # Placeholder for unimplemented effects


@dataclass(frozen=True)
class EffectSpec:
    """A registered effect and its default parameters."""
    effect_id: str
    kind: EffectKind
    handler: Optional[Callable[..., PixelBuffer]] = None
    defaults: Dict[str, Any] = field(default_factory=dict)

    @property
    def simulated(self) -> bool:
        return self.kind is EffectKind.SIMULATED

    def render(self, buffer: PixelBuffer, params: Optional[Dict[str, Any]] = None) -> PixelBuffer:
        """
        Run the pixel handler with defaults overridden by `params`.

        Raises:
            ValueError: If the effect has no pixel handler (geometry/crop)
        """
        if self.kind is EffectKind.SIMULATED:
            return simulate_effect(buffer, self.effect_id)
        if self.handler is None:
            raise ValueError(f"Effect '{self.effect_id}' is not a pixel filter")
        kwargs = {**self.defaults, **(params or {})}
        return self.handler(buffer, **kwargs)


def _filter(effect_id: str, handler: Callable[..., PixelBuffer], **defaults) -> EffectSpec:
    return EffectSpec(effect_id, EffectKind.FILTER, handler, defaults)


EFFECT_REGISTRY: Dict[str, EffectSpec] = {
    spec.effect_id: spec
    for spec in [
        # Basic
        _filter("black-white", grayscale),
        _filter("grayscale", grayscale),
        _filter("sepia", sepia),
        _filter("vintage", vintage),
        _filter("vintage-film", vintage),
        _filter("hdr", hdr),
        _filter("cross-process", cross_process),
        _filter("brightness", brightness, value=120.0),
        _filter("contrast", contrast, value=120.0),
        _filter("saturation-boost", saturation, value=150.0),
        _filter("color-boost", saturation, value=150.0),
        _filter("desaturation", saturation, value=50.0),
        _filter("hue-shift", hue_shift, degrees=180.0),

        # Enhance
        _filter("sharpen", sharpen),
        _filter("noise-reduction", noise_reduction),
        _filter("clarity", clarity),
        _filter("vignette", vignette, intensity=0.5),
        _filter("soft-focus", soft_focus),

        # Transform
        EffectSpec("rotate", EffectKind.ROTATE),
        EffectSpec("flip", EffectKind.FLIP),
        EffectSpec("crop", EffectKind.CROP),
    ]
}


def resolve_effect(effect_id: str) -> EffectSpec:
    """
    Look up an effect, falling back to the simulated placeholder.

    Args:
        effect_id: Stable effect identifier

    Returns:
        Registered spec, or a SIMULATED spec for unknown identifiers
    """
    spec = EFFECT_REGISTRY.get(effect_id)
    if spec is None:
        logger.debug(f"No implementation for '{effect_id}', using simulated effect")
        spec = EffectSpec(effect_id, EffectKind.SIMULATED)
    return spec


def is_implemented(effect_id: str) -> bool:
    return effect_id in EFFECT_REGISTRY
