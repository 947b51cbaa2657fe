"""Tests for pixelsmith data models."""

import math

import pytest
from pydantic import ValidationError

from pixelsmith.models import (
    COLOR_PALETTES,
    AnimationConfig,
    AnimationState,
    CharacterSprite,
    CharacterType,
    Color,
    DrawMode,
    Frame,
    PatternType,
    Pixel,
    SpriteConfig,
    default_character,
)
from pixelsmith.models.sprite import (
    DEFAULT_ATTACK_RANGE,
    DEFAULT_BREATHING_INTENSITY,
    DEFAULT_WALKING_SPEED,
    state_tunable,
)


def test_enums():
    assert AnimationState.IDLE == "idle"
    assert AnimationState.ATTACK == "attack"
    assert CharacterType.WARRIOR == "warrior"
    assert PatternType.MAGIC == "magic"
    assert DrawMode.ERASE == "erase"


# --- Color ---


def test_color_from_hex():
    c = Color.from_hex("#6D7B8D")
    assert c.rgb == (0x6D, 0x7B, 0x8D)
    assert c.a == 1.0
    assert not c.is_translucent
    assert c.to_hex() == "#6d7b8d"
    assert str(c) == "#6d7b8d"


def test_color_rgba_string():
    c = Color.model_validate("rgba(10, 20, 30, 0.4)")
    assert c.rgb == (10, 20, 30)
    assert c.a == pytest.approx(0.4)
    assert c.is_translucent
    assert str(c) == "rgba(10, 20, 30, 0.4)"
    assert c.rgba == (10, 20, 30, 102)


def test_color_rejects_garbage():
    with pytest.raises(ValidationError):
        Color.model_validate("not a colour")
    with pytest.raises(ValidationError):
        Color(r=256, g=0, b=0)
    with pytest.raises(ValidationError):
        Color(r=0, g=0, b=0, a=1.5)


def test_color_shade_clamps():
    c = Color(r=200, g=100, b=0, a=0.5)
    assert c.shade(2.0).rgb == (255, 200, 0)
    assert c.shade(0.5).rgb == (100, 50, 0)
    assert c.shade(2.0).a == 0.5


def test_color_with_alpha_clamps():
    c = Color(r=1, g=2, b=3)
    assert c.with_alpha(0.3).a == pytest.approx(0.3)
    assert c.with_alpha(-1).a == 0.0
    assert c.with_alpha(4).a == 1.0


# --- Pixel / Frame ---


def test_pixel_key_floors_negative_coordinates():
    p = Pixel(x=-0.5, y=3.9, color=Color(r=0, g=0, b=0))
    assert p.key == (-1, 3)
    assert p.z is None


def test_pixel_is_frozen():
    p = Pixel(x=1, y=1, color=Color(r=0, g=0, b=0))
    with pytest.raises(ValidationError):
        p.x = 2  # type: ignore[misc]


def test_frame_make_id():
    assert Frame.make_id(AnimationState.WALK, 3) == "walk-3"


# --- Animation / sprite config ---


def test_animation_config_requires_two_frames():
    with pytest.raises(ValidationError):
        AnimationConfig(state=AnimationState.IDLE, frames=1)
    with pytest.raises(ValidationError):
        AnimationConfig(state=AnimationState.IDLE, frame_delay=0)


def test_animation_config_tunable_defaults():
    assert AnimationConfig(state=AnimationState.IDLE).tunable == DEFAULT_BREATHING_INTENSITY
    assert AnimationConfig(state=AnimationState.WALK).tunable == DEFAULT_WALKING_SPEED
    assert AnimationConfig(state=AnimationState.ATTACK).tunable == pytest.approx(math.pi * 1.5)
    walk = AnimationConfig(state=AnimationState.WALK, walking_speed=2.0)
    assert walk.tunable == 2.0


def test_state_tunable_without_config():
    assert state_tunable(AnimationState.ATTACK, None) == DEFAULT_ATTACK_RANGE


def test_sprite_config_animation_for():
    config = SpriteConfig(animations=[AnimationConfig(state=AnimationState.WALK)])
    assert config.animation_for(AnimationState.WALK) is not None
    assert config.animation_for(AnimationState.ATTACK) is None
    assert (config.width, config.height, config.scale) == (32, 32, 10)


def test_sprite_config_rejects_duplicate_states():
    with pytest.raises(ValidationError, match="duplicate animation config"):
        SpriteConfig(
            animations=[
                AnimationConfig(state=AnimationState.IDLE, frames=2),
                AnimationConfig(state=AnimationState.IDLE, frames=3),
            ]
        )


def test_character_sprite_helpers():
    black = Color(r=0, g=0, b=0)
    frames = [
        Frame(id="idle-0", state=AnimationState.IDLE, index=0, pixels=[Pixel(x=0, y=0, color=black)]),
        Frame(id="walk-0", state=AnimationState.WALK, index=0),
        Frame(id="idle-1", state=AnimationState.IDLE, index=1),
    ]
    sprite = CharacterSprite(frames=frames, width=32, height=32, config=SpriteConfig())
    assert [f.id for f in sprite.frames_for(AnimationState.IDLE)] == ["idle-0", "idle-1"]
    assert sprite.frame_by_id("walk-0") is frames[1]
    assert sprite.frame_by_id("attack-0") is None
    assert sprite.states == [AnimationState.IDLE, AnimationState.WALK]


# --- Character ---


def test_palettes_table():
    names = [p.name for p in COLOR_PALETTES[CharacterType.WARRIOR]]
    assert names == ["Knight", "Golden", "Shadow", "Ruby", "Forest", "Royal", "Mystic"]
    for palette in COLOR_PALETTES[CharacterType.WARRIOR]:
        assert not palette.colors.primary.is_translucent


def test_default_character():
    character = default_character()
    assert character.type == CharacterType.WARRIOR
    assert character.colors.primary.to_hex() == "#6d7b8d"
    assert character.proportions.head_size == pytest.approx(1.1)
