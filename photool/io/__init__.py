"""
Photool I/O module.
"""

from .images import IMAGE_EXTENSIONS, find_images, format_for_path, load_image, save_image

__all__ = [
    'IMAGE_EXTENSIONS',
    'find_images',
    'format_for_path',
    'load_image',
    'save_image',
]
