"""
Composite colour looks for Photool.

Looks chain the basic adjustments, the same way a preset does.
"""

import logging
from typing import Optional

import numpy as np

from ..buffer import PixelBuffer
from ..vignette import vignette
from .adjustments import contrast, saturation, sepia

logger = logging.getLogger(__name__)

VINTAGE_VIGNETTE = 0.3
VINTAGE_NOISE = 10.0

HDR_CONTRAST = 130.0
HDR_SATURATION = 120.0
HDR_VIGNETTE = 0.2


def vintage(buffer: PixelBuffer, rng: Optional[np.random.Generator] = None,
            noise_amplitude: float = VINTAGE_NOISE) -> PixelBuffer:
    """
    Sepia, a light vignette and film grain.

    The grain is one uniform sample in [-amplitude, amplitude] per pixel,
    added to all three colour channels.

    Args:
        buffer: Source image
        rng: Random generator, a fresh unseeded one if omitted
        noise_amplitude: Maximum grain offset in 0-255 units
    """
    rng = rng if rng is not None else np.random.default_rng()
    toned = vignette(sepia(buffer), VINTAGE_VIGNETTE)

    noise = rng.uniform(-noise_amplitude, noise_amplitude,
                        size=(toned.height, toned.width, 1))
    rgb = toned.pixels[:, :, :3].astype(np.float64)
    return toned.with_rgb(rgb + noise)


def hdr(buffer: PixelBuffer) -> PixelBuffer:
    """Simulated HDR: strong contrast, extra saturation and a soft vignette."""
    result = contrast(buffer, HDR_CONTRAST)
    result = saturation(result, HDR_SATURATION)
    return vignette(result, HDR_VIGNETTE)


def cross_process(buffer: PixelBuffer) -> PixelBuffer:
    """
    Cross-processed film look.

    Each boost is stored (rounded and clamped) before the next condition is
    tested, so the highlight test sees the boosted green channel.
    """
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    r, g, b = rgb[:, :, 0], rgb[:, :, 1], rgb[:, :, 2]

    def _store(values):
        return np.clip(np.rint(values), 0, 255)

    # Blue into the shadows
    shadows = (r < 120) & (g < 120)
    b = np.where(shadows, _store(b * 1.2), b)

    # Green into the midtones
    midtones = (r > 80) & (r < 180)
    g = np.where(midtones, _store(g * 1.2), g)

    # Yellow into the highlights
    highlights = (r > 150) & (g > 150)
    r = np.where(highlights, _store(r * 1.1), r)
    g = np.where(highlights, _store(g * 1.1), g)

    return buffer.with_rgb(np.stack([r, g, b], axis=-1))
