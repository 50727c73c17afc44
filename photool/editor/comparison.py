"""
Before/after comparison view.

The edited image covers the left `position` percent of the frame and the
original shows through on the right. The edited image is scaled to the
original's size, the way the editor overlays the two.
"""

from dataclasses import dataclass

from PIL import Image

from ..processing.buffer import PixelBuffer


def clamp_position(position: float) -> float:
    return max(0.0, min(100.0, float(position)))


def render_comparison(original: PixelBuffer, current: PixelBuffer, position: float = 50.0,
                      divider_width: int = 0) -> PixelBuffer:
    """
    Compose a split before/after frame.

    Args:
        original: Unedited image, defines the output size
        current: Edited image
        position: Split position in percent of the width (0-100, clamped)
        divider_width: Width of a white divider line at the split, 0 for none

    Returns:
        Buffer the size of `original`
    """
    if current.size != original.size:
        current = PixelBuffer.from_image(
            current.to_image().resize(original.size, Image.BILINEAR)
        )

    split = int(round(clamp_position(position) / 100.0 * original.width))
    frame = original.pixels.copy()
    frame[:, :split] = current.pixels[:, :split]

    if divider_width > 0:
        left = min(split, original.width)
        frame[:, left:left + divider_width] = (255, 255, 255, 255)

    return PixelBuffer(original.width, original.height, frame)


@dataclass
class ComparisonView:
    """Original and current images plus the slider position."""
    original: PixelBuffer
    current: PixelBuffer
    position: float = 50.0

    def move_to(self, position: float) -> float:
        self.position = clamp_position(position)
        return self.position

    def render(self, divider_width: int = 0) -> PixelBuffer:
        return render_comparison(self.original, self.current, self.position, divider_width)
