"""
Photool: raster photo editor core

Pixel buffers, a filter library, geometry operations and a linear edit
history, with an asynchronous effect dispatcher and debounced slider
adjustments on top.
"""

__version__ = "0.1.0"

from .config import load_config
from .editor import PhotoEditor
from .processing import PixelBuffer

__all__ = [
    "load_config",
    "PhotoEditor",
    "PixelBuffer",
]
