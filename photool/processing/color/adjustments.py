"""
Per-pixel colour adjustments for Photool.

Every function takes a PixelBuffer and returns a new one. Channel results
are rounded to the nearest integer (ties to even) and clamped to [0, 255];
alpha is carried over untouched.
"""

import logging
from typing import Tuple

import numpy as np

from ..buffer import PixelBuffer

logger = logging.getLogger(__name__)

# Sepia tone matrix, rows are the output R, G, B
SEPIA_MATRIX = np.array([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
])

# Luma weights used by the saturation adjustment
LUMA_WEIGHTS = np.array([0.2989, 0.587, 0.114])

NEUTRAL_LEVEL = 100.0


def grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """Replace each colour channel with the mean of R, G and B."""
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    avg = rgb.sum(axis=2, keepdims=True) / 3.0
    return buffer.with_rgb(np.repeat(avg, 3, axis=2))


def sepia(buffer: PixelBuffer) -> PixelBuffer:
    """Apply the classic sepia tone matrix."""
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    return buffer.with_rgb(rgb @ SEPIA_MATRIX.T)


def brightness(buffer: PixelBuffer, value: float = 120.0) -> PixelBuffer:
    """
    Scale every channel by value/100.

    Args:
        buffer: Source image
        value: Brightness level, 100 is neutral
    """
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    return buffer.with_rgb(rgb * (value / NEUTRAL_LEVEL))


def contrast(buffer: PixelBuffer, value: float = 120.0) -> PixelBuffer:
    """
    Stretch channels around mid-grey.

    channel' = 128 + (channel - 128) * (value/100 * 2). Note that the
    neutral slider value of 100 doubles contrast; 50 is the identity.
    """
    factor = (value / NEUTRAL_LEVEL) * 2
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    return buffer.with_rgb(128.0 + (rgb - 128.0) * factor)


def saturation(buffer: PixelBuffer, value: float = 150.0) -> PixelBuffer:
    """
    Move channels towards or away from the pixel luma.

    Args:
        buffer: Source image
        value: Saturation level, 100 is neutral, 0 is fully desaturated
    """
    factor = value / NEUTRAL_LEVEL
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    luma = (rgb @ LUMA_WEIGHTS)[:, :, np.newaxis]
    return buffer.with_rgb(luma + factor * (rgb - luma))


def hue_shift(buffer: PixelBuffer, degrees: float = 180.0) -> PixelBuffer:
    """Rotate the hue of every pixel by the given angle in degrees."""
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    h, s, l = rgb_to_hsl(rgb)
    shifted = np.mod(h * 360.0 + degrees, 360.0) / 360.0
    return buffer.with_rgb(hsl_to_rgb(shifted, s, l))


def rgb_to_hsl(rgb: np.ndarray) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Convert 0-255 RGB samples to HSL components in [0, 1].

    Args:
        rgb: (..., 3) array of RGB values in 0-255

    Returns:
        Tuple of hue, saturation and lightness arrays
    """
    rgb = rgb / 255.0
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    mx = rgb.max(axis=-1)
    mn = rgb.min(axis=-1)
    l = (mx + mn) / 2.0
    d = mx - mn
    chromatic = d > 0

    # Avoid division by zero on grey pixels, their h and s stay 0
    safe_d = np.where(chromatic, d, 1.0)
    denom = np.where(l > 0.5, 2.0 - mx - mn, mx + mn)
    s = np.where(chromatic, d / np.where(chromatic, denom, 1.0), 0.0)

    # Sector tests run in R, G, B order so ties resolve like the reference formula
    h = np.select(
        [mx == r, mx == g],
        [(g - b) / safe_d + np.where(g < b, 6.0, 0.0), (b - r) / safe_d + 2.0],
        default=(r - g) / safe_d + 4.0,
    ) / 6.0
    h = np.where(chromatic, h, 0.0)

    return h, s, l


def _hue_to_rgb(p: np.ndarray, q: np.ndarray, t: np.ndarray) -> np.ndarray:
    t = np.where(t < 0, t + 1.0, t)
    t = np.where(t > 1, t - 1.0, t)
    return np.select(
        [t < 1.0 / 6.0, t < 0.5, t < 2.0 / 3.0],
        [p + (q - p) * 6.0 * t, q, p + (q - p) * (2.0 / 3.0 - t) * 6.0],
        default=p,
    )


def hsl_to_rgb(h: np.ndarray, s: np.ndarray, l: np.ndarray) -> np.ndarray:
    """
    Convert HSL components in [0, 1] back to 0-255 RGB.

    Output values are rounded half up, so they are already integral.
    """
    q = np.where(l < 0.5, l * (1.0 + s), l + s - l * s)
    p = 2.0 * l - q

    r = _hue_to_rgb(p, q, h + 1.0 / 3.0)
    g = _hue_to_rgb(p, q, h)
    b = _hue_to_rgb(p, q, h - 1.0 / 3.0)

    achromatic = s == 0
    r = np.where(achromatic, l, r)
    g = np.where(achromatic, l, g)
    b = np.where(achromatic, l, b)

    return np.floor(np.stack([r, g, b], axis=-1) * 255.0 + 0.5)
