"""
Pixel buffer model for Photool.

A PixelBuffer wraps an (height, width, 4) uint8 RGBA numpy array. Buffers
are frozen when they are published to history; every edit produces a new
buffer instead of mutating a published one.
"""

import io
import logging
from dataclasses import dataclass
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeFailure

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_FORMAT = "PNG"


@dataclass(frozen=True)
class PixelBuffer:
    """Rectangular grid of RGBA samples."""
    width: int
    height: int
    pixels: np.ndarray  # (height, width, 4) uint8

    def __post_init__(self):
        if self.pixels.dtype != np.uint8:
            raise DecodeFailure(f"Pixel data must be uint8, got {self.pixels.dtype}")
        if self.pixels.shape != (self.height, self.width, 4):
            raise DecodeFailure(
                f"Pixel data shape {self.pixels.shape} does not match "
                f"{self.width}x{self.height} RGBA"
            )

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'PixelBuffer':
        """
        Build a buffer from an RGB/RGBA/grayscale array.

        Float arrays are rounded and clamped to [0, 255]. A missing alpha
        channel is filled with 255. The data is always copied.
        """
        data = np.asarray(array)
        if data.ndim == 2:
            data = np.stack([data] * 3, axis=-1)
        if data.ndim != 3 or data.shape[2] not in (3, 4):
            raise DecodeFailure(f"Unsupported pixel array shape: {data.shape}")

        if data.dtype != np.uint8:
            data = np.clip(np.rint(data), 0, 255).astype(np.uint8)
        else:
            data = data.copy()

        if data.shape[2] == 3:
            alpha = np.full(data.shape[:2] + (1,), 255, dtype=np.uint8)
            data = np.concatenate([data, alpha], axis=2)

        height, width = data.shape[:2]
        return cls(width=width, height=height, pixels=np.ascontiguousarray(data))

    @classmethod
    def from_image(cls, image: Image.Image) -> 'PixelBuffer':
        """Build a buffer from a Pillow image of any mode."""
        return cls.from_array(np.asarray(image.convert("RGBA")))

    @classmethod
    def decode(cls, blob: Union[bytes, bytearray]) -> 'PixelBuffer':
        """
        Decode an encoded image blob (PNG, JPEG, ...).

        Raises:
            DecodeFailure: If the blob is not a readable image
        """
        try:
            with Image.open(io.BytesIO(blob)) as image:
                image.load()
                return cls.from_image(image)
        except (UnidentifiedImageError, OSError, ValueError) as e:
            raise DecodeFailure(f"Could not decode image data: {e}") from e

    @classmethod
    def blank(cls, width: int, height: int, color=(0, 0, 0, 255)) -> 'PixelBuffer':
        """Create a buffer filled with a single RGBA color."""
        pixels = np.empty((height, width, 4), dtype=np.uint8)
        pixels[:, :] = color
        return cls(width=width, height=height, pixels=pixels)

    @property
    def size(self):
        return (self.width, self.height)

    @property
    def is_frozen(self) -> bool:
        return not self.pixels.flags.writeable

    def freeze(self) -> 'PixelBuffer':
        """Mark the pixel data read-only. Returns self."""
        self.pixels.flags.writeable = False
        return self

    def copy(self) -> 'PixelBuffer':
        """Return a writable deep copy."""
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    def rgb(self) -> np.ndarray:
        """Float32 copy of the colour channels."""
        return self.pixels[:, :, :3].astype(np.float32)

    def with_rgb(self, rgb: np.ndarray) -> 'PixelBuffer':
        """
        New buffer with the given colour channels and this buffer's alpha.

        Values are rounded to the nearest integer and clamped to [0, 255].
        """
        out = np.empty_like(self.pixels)
        out[:, :, :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
        out[:, :, 3] = self.pixels[:, :, 3]
        return PixelBuffer(self.width, self.height, out)

    def to_image(self) -> Image.Image:
        """Convert to a Pillow RGBA image."""
        return Image.fromarray(np.ascontiguousarray(self.pixels))

    def encode(self, format: str = DEFAULT_EXPORT_FORMAT) -> bytes:
        """
        Encode to an image blob.

        Raises:
            DecodeFailure: If Pillow cannot write the requested format
        """
        image = self.to_image()
        if format.upper() in ("JPEG", "JPG"):
            image = image.convert("RGB")
        out = io.BytesIO()
        try:
            image.save(out, format=format)
        except (KeyError, OSError, ValueError) as e:
            raise DecodeFailure(f"Could not encode image as {format}: {e}") from e
        logger.debug(f"Encoded {self.width}x{self.height} buffer as {format} ({out.tell()} bytes)")
        return out.getvalue()

    def equals(self, other: 'PixelBuffer') -> bool:
        """Bit-identical pixel comparison."""
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )
