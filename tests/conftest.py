"""Shared fixtures for pixelsmith tests."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from pixelsmith.models import (
    AnimationConfig,
    AnimationState,
    CharacterConfig,
    CharacterSprite,
    SpriteConfig,
    default_character,
)
from pixelsmith.pipeline.sprite_gen import SpriteGenerator


@pytest.fixture
def sprite_config() -> SpriteConfig:
    return SpriteConfig(
        width=32,
        height=32,
        scale=2,
        animations=[
            AnimationConfig(state=AnimationState.IDLE, frames=3, frame_delay=100),
            AnimationConfig(state=AnimationState.WALK, frames=4, frame_delay=80),
            AnimationConfig(state=AnimationState.ATTACK, frames=3, frame_delay=60),
        ],
    )


@pytest.fixture
def character() -> CharacterConfig:
    return default_character()


@pytest.fixture
def sprite(sprite_config: SpriteConfig, character: CharacterConfig) -> CharacterSprite:
    return SpriteGenerator(sprite_config, character, rng=random.Random(7)).generate_sprite()


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the working directory at *tmp_path*; clear PIXELSMITH_* vars."""
    import os

    for name in list(os.environ):
        if name.startswith("PIXELSMITH_"):
            monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path
