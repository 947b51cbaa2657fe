"""pixelsmith data models - pure Pydantic, no rendering."""

from pixelsmith.models.character import (
    COLOR_PALETTES,
    GOLDEN_RATIO,
    CharacterConfig,
    CharacterProportions,
    ColorPalette,
    DetailedColors,
    default_character,
)
from pixelsmith.models.color import Color
from pixelsmith.models.document import (
    SpriteDocument,
    SpriteFormatError,
    load_sprite,
    save_sprite,
)
from pixelsmith.models.enums import AnimationState, CharacterType, DrawMode, PatternType
from pixelsmith.models.sprite import (
    AnimationColors,
    AnimationConfig,
    CharacterSprite,
    Frame,
    Pixel,
    SpriteConfig,
)

__all__ = [
    "COLOR_PALETTES",
    "GOLDEN_RATIO",
    "AnimationColors",
    "AnimationConfig",
    "AnimationState",
    "CharacterConfig",
    "CharacterProportions",
    "CharacterSprite",
    "CharacterType",
    "Color",
    "ColorPalette",
    "DetailedColors",
    "DrawMode",
    "Frame",
    "PatternType",
    "Pixel",
    "SpriteConfig",
    "SpriteDocument",
    "SpriteFormatError",
    "default_character",
    "load_sprite",
    "save_sprite",
]
