"""Character appearance models: proportions, palettes and the fixed theme table."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from pixelsmith.models.color import Color
from pixelsmith.models.enums import CharacterType

GOLDEN_RATIO = 1.618


class CharacterProportions(BaseModel):
    """Multipliers applied to the base humanoid measurements."""

    model_config = ConfigDict(frozen=True)

    head_size: float = 1.1
    body_width: float = 0.9
    arm_length: float = GOLDEN_RATIO * 1.05
    leg_length: float = GOLDEN_RATIO * 1.2
    shoulder_width: float = 1.4
    torso_length: float = GOLDEN_RATIO * 1.1
    neck_width: float = 0.28
    waist_width: float = 0.65
    hip_width: float = 0.85
    arm_width: float = 0.22
    leg_width: float = 0.25
    muscle_definition: float = 0.8


class DetailedColors(BaseModel):
    """Opaque colours used to paint a character."""

    model_config = ConfigDict(frozen=True)

    primary: Color
    secondary: Color
    outline: Color


class ColorPalette(BaseModel):
    """A named colour theme."""

    model_config = ConfigDict(frozen=True)

    name: str
    colors: DetailedColors


class CharacterConfig(BaseModel):
    """Immutable description of one rolled character."""

    model_config = ConfigDict(frozen=True)

    type: CharacterType = CharacterType.WARRIOR
    colors: DetailedColors
    proportions: CharacterProportions = Field(default_factory=CharacterProportions)


def _palette(name: str, primary: str, secondary: str, outline: str) -> ColorPalette:
    return ColorPalette(
        name=name,
        colors=DetailedColors(
            primary=Color.from_hex(primary),
            secondary=Color.from_hex(secondary),
            outline=Color.from_hex(outline),
        ),
    )


COLOR_PALETTES: dict[CharacterType, list[ColorPalette]] = {
    CharacterType.WARRIOR: [
        _palette("Knight", "#6D7B8D", "#4A5664", "#2F3640"),
        _palette("Golden", "#FFD700", "#DAA520", "#8B4513"),
        _palette("Shadow", "#2C3E50", "#34495E", "#1B2631"),
        _palette("Ruby", "#E74C3C", "#C0392B", "#922B21"),
        _palette("Forest", "#27AE60", "#229954", "#196F3D"),
        _palette("Royal", "#3498DB", "#2980B9", "#1B4F72"),
        _palette("Mystic", "#9B59B6", "#8E44AD", "#633974"),
    ],
}


def default_character() -> CharacterConfig:
    """The un-jittered first palette with default proportions.

    Used whenever frames are generated without a rolled character.
    """
    palette = COLOR_PALETTES[CharacterType.WARRIOR][0]
    return CharacterConfig(type=CharacterType.WARRIOR, colors=palette.colors)
