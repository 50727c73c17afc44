"""
Simulated fallback effect.

Any effect identifier without a real implementation still produces a
visible, repeatable change: a hue rotation derived from the identifier and
a badge naming the effect as simulated. The result is NOT a rendition of
the named effect.
"""

import logging

from PIL import Image, ImageDraw, ImageFont

from .buffer import PixelBuffer
from .color.adjustments import hue_shift

logger = logging.getLogger(__name__)

BADGE_BOX = (10, 10, 209, 39)  # 200x30, corners inclusive
BADGE_TEXT_ORIGIN = (15, 14)
BADGE_FONT_SIZE = 20
BADGE_FILL = (255, 255, 255, 204)
BADGE_TEXT_FILL = (0, 0, 0, 204)


def simulated_hue(effect_id: str) -> int:
    """Hue rotation in degrees derived from the identifier's character codes."""
    return sum(ord(char) for char in effect_id) % 360


def badge_text(effect_id: str) -> str:
    return f"{effect_id} (simulated)"


def simulate_effect(buffer: PixelBuffer, effect_id: str) -> PixelBuffer:
    """
    Apply the placeholder treatment for an unimplemented effect.

    Args:
        buffer: Source image
        effect_id: Identifier of the requested effect

    Returns:
        Hue-shifted buffer with a "(simulated)" badge in the top-left corner
    """
    shifted = hue_shift(buffer, simulated_hue(effect_id))

    overlay = Image.new("RGBA", (buffer.width, buffer.height), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    draw.rectangle(BADGE_BOX, fill=BADGE_FILL)
    font = ImageFont.load_default(size=BADGE_FONT_SIZE)
    draw.text(BADGE_TEXT_ORIGIN, badge_text(effect_id), fill=BADGE_TEXT_FILL, font=font)

    composed = Image.alpha_composite(shifted.to_image(), overlay)
    logger.debug(f"Simulated effect '{effect_id}' with hue shift {simulated_hue(effect_id)}")
    return PixelBuffer.from_image(composed)
