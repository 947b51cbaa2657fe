"""Pixel, frame and sprite configuration models."""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pixelsmith.models.character import CharacterConfig
from pixelsmith.models.color import Color
from pixelsmith.models.enums import AnimationState

DEFAULT_BREATHING_INTENSITY = 1.5
DEFAULT_WALKING_SPEED = 3.0
DEFAULT_ATTACK_RANGE = math.pi * 1.5


class Pixel(BaseModel):
    """One coloured cell in sprite space.

    ``z`` is a depth hint written by the walk deformation; the renderer ignores it.
    """

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float | None = None
    color: Color

    @property
    def key(self) -> tuple[int, int]:
        """Integer grid cell this pixel occupies."""
        return (math.floor(self.x), math.floor(self.y))


class Frame(BaseModel):
    """A single animation frame: an ordered list of pixels."""

    id: str
    pixels: list[Pixel] = Field(default_factory=list)
    state: AnimationState
    index: int = Field(ge=0)

    @staticmethod
    def make_id(state: AnimationState, index: int) -> str:
        return f"{state}-{index}"


class AnimationColors(BaseModel):
    """Optional per-state colour overrides."""

    body: Color | None = None
    outline: Color | None = None
    weapon: Color | None = None


class AnimationConfig(BaseModel):
    """Settings for one animation state."""

    state: AnimationState
    frames: int = Field(default=8, ge=2)
    frame_delay: int = Field(default=100, gt=0)  # milliseconds
    breathing_intensity: float | None = None
    walking_speed: float | None = None
    attack_range: float | None = None
    colors: AnimationColors | None = None

    @property
    def tunable(self) -> float:
        """The state-specific deformation knob, or its default."""
        return state_tunable(self.state, self)


class SpriteConfig(BaseModel):
    """Sprite dimensions, display scale and the animations to generate."""

    width: int = Field(default=32, gt=0)
    height: int = Field(default=32, gt=0)
    scale: int = Field(default=10, ge=1)
    animations: list[AnimationConfig] = Field(default_factory=list)

    @field_validator("animations")
    @classmethod
    def _unique_states(cls, animations: list[AnimationConfig]) -> list[AnimationConfig]:
        seen: set[AnimationState] = set()
        for animation in animations:
            if animation.state in seen:
                msg = f"duplicate animation config for state '{animation.state}'"
                raise ValueError(msg)
            seen.add(animation.state)
        return animations

    def animation_for(self, state: AnimationState) -> AnimationConfig | None:
        for animation in self.animations:
            if animation.state == state:
                return animation
        return None


class CharacterSprite(BaseModel):
    """Generation output: every frame plus the configs they were built from."""

    frames: list[Frame] = Field(default_factory=list)
    width: int
    height: int
    config: SpriteConfig
    character_config: CharacterConfig | None = None

    def frames_for(self, state: AnimationState) -> list[Frame]:
        return [f for f in self.frames if f.state == state]

    def frame_by_id(self, frame_id: str) -> Frame | None:
        for frame in self.frames:
            if frame.id == frame_id:
                return frame
        return None

    @property
    def states(self) -> list[AnimationState]:
        """Distinct states in generation order."""
        return list(dict.fromkeys(f.state for f in self.frames))


def state_tunable(state: AnimationState, config: AnimationConfig | None) -> float:
    """Resolve the tunable for *state*, falling back to built-in defaults."""
    if state == AnimationState.IDLE:
        value = config.breathing_intensity if config else None
        return DEFAULT_BREATHING_INTENSITY if value is None else value
    if state == AnimationState.WALK:
        value = config.walking_speed if config else None
        return DEFAULT_WALKING_SPEED if value is None else value
    value = config.attack_range if config else None
    return DEFAULT_ATTACK_RANGE if value is None else value
