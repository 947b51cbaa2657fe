"""Enumerations used throughout pixelsmith."""

from enum import StrEnum


class AnimationState(StrEnum):
    IDLE = "idle"
    WALK = "walk"
    ATTACK = "attack"


class CharacterType(StrEnum):
    WARRIOR = "warrior"


class PatternType(StrEnum):
    """Material patterns the pixel manipulator can layer over a pixel."""

    CHAIN = "chain"
    PLATE = "plate"
    CLOTH = "cloth"
    LEATHER = "leather"
    MAGIC = "magic"
    WOOD = "wood"


class DrawMode(StrEnum):
    DRAW = "draw"
    ERASE = "erase"
