"""
Effect catalog for Photool.

Presentation-only listing of effects by category. The dispatcher only
needs the `id` strings; names and ordering are for display.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class EffectDescriptor:
    id: str
    name: str
    premium: bool = False


@dataclass(frozen=True)
class EffectCategory:
    id: str
    name: str
    effects: Tuple[EffectDescriptor, ...]


EFFECT_CATALOG: Tuple[EffectCategory, ...] = (
    EffectCategory("basic", "Basic", (
        EffectDescriptor("black-white", "Black and White"),
        EffectDescriptor("grayscale", "Grayscale"),
        EffectDescriptor("sepia", "Sepia"),
        EffectDescriptor("vintage", "Vintage"),
        EffectDescriptor("vintage-film", "Vintage Film"),
        EffectDescriptor("hdr", "HDR"),
        EffectDescriptor("cross-process", "Cross Process"),
        EffectDescriptor("brightness", "Brightness"),
        EffectDescriptor("contrast", "Contrast"),
        EffectDescriptor("saturation-boost", "Saturation Boost"),
        EffectDescriptor("color-boost", "Color Boost"),
        EffectDescriptor("desaturation", "Desaturation"),
        EffectDescriptor("hue-shift", "Hue Shift"),
    )),
    EffectCategory("enhance", "Enhance", (
        EffectDescriptor("sharpen", "Sharpen"),
        EffectDescriptor("noise-reduction", "Noise Reduction"),
        EffectDescriptor("clarity", "Clarity"),
        EffectDescriptor("vignette", "Vignette"),
        EffectDescriptor("soft-focus", "Soft Focus"),
    )),
    EffectCategory("transform", "Transform", (
        EffectDescriptor("rotate", "Rotate"),
        EffectDescriptor("flip", "Flip"),
        EffectDescriptor("crop", "Crop"),
    )),
)

# Shortcuts shown under the image
QUICK_EFFECTS: Tuple[EffectDescriptor, ...] = (
    EffectDescriptor("black-white", "B&W"),
    EffectDescriptor("sepia", "Sepia"),
    EffectDescriptor("vintage", "Vintage"),
    EffectDescriptor("pop-art", "Pop Art"),
    EffectDescriptor("rotate", "Rotate"),
    EffectDescriptor("crop", "Crop"),
)


def find_effect(effect_id: str) -> Optional[EffectDescriptor]:
    for category in EFFECT_CATALOG:
        for effect in category.effects:
            if effect.id == effect_id:
                return effect
    return None


def display_name(effect_id: str) -> str:
    """Catalog name of an effect, or the identifier with dashes as spaces."""
    effect = find_effect(effect_id)
    return effect.name if effect else effect_id.replace("-", " ")


def search_effects(query: str) -> List[EffectCategory]:
    """
    Filter the catalog by case-insensitive name match.

    Categories with no matching effects are dropped; an empty query returns
    the whole catalog.
    """
    if not query:
        return list(EFFECT_CATALOG)

    needle = query.lower()
    results = []
    for category in EFFECT_CATALOG:
        matches = tuple(e for e in category.effects if needle in e.name.lower())
        if matches:
            results.append(EffectCategory(category.id, category.name, matches))
    return results
