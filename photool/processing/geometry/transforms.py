"""
Geometric transforms for Photool: rotate, flip and crop.

The current image is always the unrotated content, optionally mirrored,
then turned clockwise by the cumulative rotation. Rotate and flip each
bring the buffer back to the unrotated frame with an exact quarter-turn
inverse and resample it once by the absolute target angle, so successive
operations never compound resampling error and the two commute.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from ..buffer import PixelBuffer
from ..errors import InvalidRegion
from .models import CropRect, QUARTER_TURNS

logger = logging.getLogger(__name__)

ROTATION_STEP = 90


def _check_rotation(degrees: int) -> int:
    degrees = int(degrees) % 360
    if degrees not in QUARTER_TURNS:
        raise ValueError(f"Rotation must be a multiple of 90 degrees, got {degrees}")
    return degrees


def _unrotate(pixels: np.ndarray, degrees: int) -> np.ndarray:
    """Undo a clockwise rotation exactly (np.rot90 turns counter-clockwise)."""
    return np.rot90(pixels, k=degrees // ROTATION_STEP).copy()


def _rotation_matrix(width: int, height: int, degrees: int, mirror: bool) -> Tuple[np.ndarray, Tuple[int, int]]:
    """
    Affine matrix turning an image clockwise about its centre.

    Args:
        width: Source width
        height: Source height
        degrees: Clockwise angle
        mirror: Mirror horizontally before rotating

    Returns:
        Tuple of (2x3 matrix, (new_width, new_height))
    """
    quarter = degrees in (90, 270)
    new_w, new_h = (height, width) if quarter else (width, height)

    # Pixel-centre coordinates so quarter turns land exactly on the grid
    center = ((width - 1) / 2.0, (height - 1) / 2.0)

    # OpenCV angles are counter-clockwise
    rotation = np.vstack([cv2.getRotationMatrix2D(center, -degrees, 1.0), [0, 0, 1]])
    if mirror:
        flip = np.array([[-1.0, 0.0, width - 1.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]])
        rotation = rotation @ flip

    M = rotation[:2].copy()

    # Adjust for the new canvas size
    M[0, 2] += (new_w - width) / 2
    M[1, 2] += (new_h - height) / 2

    # Remove float noise from cos/sin of quarter angles
    return np.round(M, 9), (new_w, new_h)


def _resample(pixels: np.ndarray, degrees: int, mirror: bool = False) -> np.ndarray:
    h, w = pixels.shape[:2]
    if degrees == 0 and not mirror:
        return pixels.copy()
    M, (new_w, new_h) = _rotation_matrix(w, h, degrees, mirror)
    return cv2.warpAffine(
        pixels,
        M,
        (new_w, new_h),
        flags=cv2.INTER_NEAREST,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )


def rotate(buffer: PixelBuffer, current_degrees: int) -> Tuple[PixelBuffer, int]:
    """
    Turn the image a further 90 degrees clockwise.

    Args:
        buffer: Current image, already rotated by current_degrees
        current_degrees: Cumulative rotation (0, 90, 180 or 270)

    Returns:
        Tuple of (rotated buffer, new cumulative rotation)
    """
    current = _check_rotation(current_degrees)
    new_degrees = (current + ROTATION_STEP) % 360

    base = _unrotate(buffer.pixels, current)
    rotated = _resample(base, new_degrees)

    logger.debug(f"Rotated {buffer.width}x{buffer.height} from {current} to {new_degrees} degrees")
    return PixelBuffer.from_array(rotated), new_degrees


def flip(buffer: PixelBuffer, current_rotation: int, current_flipped: bool) -> Tuple[PixelBuffer, bool]:
    """
    Mirror the image horizontally, keeping the current rotation.

    The mirror is applied in the unrotated frame and the cumulative rotation
    is applied after it.

    Args:
        buffer: Current image
        current_rotation: Cumulative rotation (0, 90, 180 or 270)
        current_flipped: Whether the image is currently mirrored

    Returns:
        Tuple of (flipped buffer, new mirror state)
    """
    rotation = _check_rotation(current_rotation)

    base = _unrotate(buffer.pixels, rotation)
    flipped = _resample(base, rotation, mirror=True)

    logger.debug(f"Flipped {buffer.width}x{buffer.height} at rotation {rotation}")
    return PixelBuffer.from_array(flipped), not current_flipped


def crop(buffer: PixelBuffer, rect: CropRect) -> PixelBuffer:
    """
    Cut the normalized rectangle out of the image.

    Args:
        buffer: Source image
        rect: Region to keep, in 0-1 image coordinates

    Returns:
        New buffer with the size of the rounded crop box

    Raises:
        InvalidRegion: If the rectangle is out of bounds or rounds to nothing
    """
    rect.validate()
    left, top, width, height = rect.to_pixels(buffer.width, buffer.height)
    if width <= 0 or height <= 0:
        raise InvalidRegion(
            f"Crop area is smaller than one pixel on a {buffer.width}x{buffer.height} image"
        )

    region = buffer.pixels[top:top + height, left:left + width]
    logger.debug(f"Cropped {buffer.width}x{buffer.height} to {width}x{height} at ({left}, {top})")
    return PixelBuffer.from_array(region)
