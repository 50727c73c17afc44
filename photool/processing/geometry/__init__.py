"""
Geometry processing modules for Photool

Includes rotation, mirroring and normalized cropping.
"""

from .models import CropRect, TransformState, clamp_unit
from .transforms import rotate, flip, crop

__all__ = [
    "CropRect",
    "TransformState",
    "clamp_unit",
    "rotate",
    "flip",
    "crop",
]
