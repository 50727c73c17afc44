"""
Enhancement filters for Photool.

Implements the detail filters:
1. Sharpen / Clarity - contrast and brightness boost
2. Noise reduction / Soft focus / Blur - Gaussian smoothing passes
"""

import logging

import cv2
import numpy as np

from .buffer import PixelBuffer
from .color.adjustments import contrast

logger = logging.getLogger(__name__)

SHARPEN_CONTRAST = 1.5
SHARPEN_BRIGHTNESS = 1.1
CLARITY_CONTRAST = 110.0

NOISE_REDUCTION_SIGMA = 0.5
SOFT_FOCUS_SIGMA = 5.0
SOFT_FOCUS_OPACITY = 0.7


def sharpen(buffer: PixelBuffer) -> PixelBuffer:
    """
    Boost local contrast with a contrast(1.5) then brightness(1.1) pass.

    This is not a convolution kernel; it mimics the CSS filter chain and
    clamps after each stage.
    """
    v = buffer.pixels[:, :, :3].astype(np.float64) / 255.0
    v = np.clip((v - 0.5) * SHARPEN_CONTRAST + 0.5, 0.0, 1.0)
    v = np.clip(v * SHARPEN_BRIGHTNESS, 0.0, 1.0)
    return buffer.with_rgb(v * 255.0)


def clarity(buffer: PixelBuffer) -> PixelBuffer:
    """Sharpen followed by a mild contrast boost."""
    return contrast(sharpen(buffer), CLARITY_CONTRAST)


def gaussian_blur(buffer: PixelBuffer, radius: float) -> PixelBuffer:
    """
    Blur the colour channels with a Gaussian of standard deviation `radius`.

    A radius of 0 returns an unchanged copy.
    """
    if radius <= 0:
        return buffer.copy()
    return buffer.with_rgb(_smooth(buffer.rgb(), radius))


def noise_reduction(buffer: PixelBuffer) -> PixelBuffer:
    """Smooth sensor noise with a small-radius Gaussian."""
    return buffer.with_rgb(_smooth(buffer.rgb(), NOISE_REDUCTION_SIGMA))


def soft_focus(buffer: PixelBuffer) -> PixelBuffer:
    """Lay a heavily blurred copy over the image at 70% opacity."""
    rgb = buffer.rgb()
    blurred = _smooth(rgb, SOFT_FOCUS_SIGMA)
    blended = SOFT_FOCUS_OPACITY * blurred + (1.0 - SOFT_FOCUS_OPACITY) * rgb
    return buffer.with_rgb(blended)


def _smooth(rgb: np.ndarray, sigma: float) -> np.ndarray:
    # Kernel size is derived from sigma
    return cv2.GaussianBlur(rgb, (0, 0), sigmaX=sigma, sigmaY=sigma, borderType=cv2.BORDER_REFLECT)
