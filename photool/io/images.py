"""
Image file operations for Photool
Reads images into PixelBuffers, writes them back and finds images for batches
"""

from pathlib import Path
from typing import List, Optional, Union
import logging

from ..processing.buffer import DEFAULT_EXPORT_FORMAT, PixelBuffer
from ..processing.errors import DecodeFailure

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = ['.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tif', '.tiff', '.webp']

FORMAT_BY_SUFFIX = {
    '.png': 'PNG',
    '.jpg': 'JPEG',
    '.jpeg': 'JPEG',
    '.bmp': 'BMP',
    '.gif': 'GIF',
    '.tif': 'TIFF',
    '.tiff': 'TIFF',
    '.webp': 'WEBP',
}


def format_for_path(path: Union[str, Path]) -> str:
    """Pillow format name for a file suffix, PNG when unknown"""
    return FORMAT_BY_SUFFIX.get(Path(path).suffix.lower(), DEFAULT_EXPORT_FORMAT)


def load_image(source: Union[str, Path, bytes]) -> PixelBuffer:
    """
    Load an image from a file path or an encoded blob

    Args:
        source: Path to an image file, or its bytes

    Returns:
        Decoded RGBA buffer

    Raises:
        DecodeFailure: If the file is missing or not a readable image
    """
    if isinstance(source, (bytes, bytearray)):
        return PixelBuffer.decode(source)

    path = Path(source)
    try:
        blob = path.read_bytes()
    except OSError as e:
        raise DecodeFailure(f"Could not read {path}: {e}") from e

    buffer = PixelBuffer.decode(blob)
    logger.debug(f"Loaded {path} ({buffer.width}x{buffer.height})")
    return buffer


def save_image(buffer: PixelBuffer, path: Union[str, Path], format: Optional[str] = None) -> Path:
    """
    Encode a buffer and write it to disk

    Args:
        buffer: Image to write
        path: Destination file; parent directories are created
        format: Pillow format name, derived from the suffix if None

    Returns:
        The written path
    """
    path = Path(path)
    blob = buffer.encode(format or format_for_path(path))
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(blob)
    logger.info(f"Saved {buffer.width}x{buffer.height} image to {path}")
    return path


def find_images(input_path: Union[str, Path]) -> List[Path]:
    """
    Find all supported images under a directory (or a single file)

    Args:
        input_path: File or directory to search

    Returns:
        Sorted list of image paths
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise ValueError(f"Input path does not exist: {input_path}")

    if input_path.is_file():
        return [input_path] if input_path.suffix.lower() in IMAGE_EXTENSIONS else []

    images = [p for p in input_path.rglob("*") if p.is_file() and p.suffix.lower() in IMAGE_EXTENSIONS]
    images = sorted(images)
    logger.info(f"Found {len(images)} images in {input_path}")
    return images
