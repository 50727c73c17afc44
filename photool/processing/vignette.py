"""
Radial vignette for Photool.

The vignette multiplies the image with a black radial gradient centred on
the buffer. Alpha is 0 out to half of the corner radius and rises linearly
to the requested intensity at the corner radius sqrt((w/2)^2 + (h/2)^2).
"""

import numpy as np

from .buffer import PixelBuffer

VIGNETTE_START = 0.5  # Fraction of the corner radius where darkening begins


def vignette_mask(width: int, height: int, intensity: float) -> np.ndarray:
    """
    Build the darkening alpha of a radial vignette.

    Returns:
        (height, width) float64 array of alpha values in [0, intensity]
    """
    cx, cy = width / 2.0, height / 2.0
    corner_radius = np.sqrt(cx ** 2 + cy ** 2)

    # Sample at pixel centres
    y, x = np.ogrid[0:height, 0:width]
    dist = np.sqrt((x + 0.5 - cx) ** 2 + (y + 0.5 - cy) ** 2)
    t = dist / corner_radius if corner_radius > 0 else np.zeros_like(dist)

    ramp = np.clip((t - VIGNETTE_START) / (1.0 - VIGNETTE_START), 0.0, 1.0)
    return ramp * intensity


def vignette(buffer: PixelBuffer, intensity: float = 0.5) -> PixelBuffer:
    """
    Darken the corners by multiplying with a radial black gradient.

    Args:
        buffer: Source image
        intensity: Alpha of the black gradient at the corner radius (0-1)
    """
    alpha = vignette_mask(buffer.width, buffer.height, intensity)
    rgb = buffer.pixels[:, :, :3].astype(np.float64)
    return buffer.with_rgb(rgb * (1.0 - alpha)[:, :, np.newaxis])
