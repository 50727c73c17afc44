"""
Colour processing modules for Photool

Includes the basic per-pixel adjustments and composite looks.
"""

from .adjustments import (
    grayscale,
    sepia,
    brightness,
    contrast,
    saturation,
    hue_shift,
    rgb_to_hsl,
    hsl_to_rgb,
)
from .looks import vintage, hdr, cross_process

__all__ = [
    "grayscale",
    "sepia",
    "brightness",
    "contrast",
    "saturation",
    "hue_shift",
    "rgb_to_hsl",
    "hsl_to_rgb",
    "vintage",
    "hdr",
    "cross_process",
]
