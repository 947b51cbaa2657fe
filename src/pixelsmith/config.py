"""Application configuration with pydantic-settings + TOML."""

from __future__ import annotations

import math
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

from pixelsmith.models.enums import AnimationState
from pixelsmith.models.sprite import AnimationConfig, SpriteConfig


def _default_config_dir() -> Path:
    return Path.home() / ".pixelsmith"


def _default_output_dir() -> Path:
    return Path("output")


class SpriteSettings(BaseSettings):
    """Sprite dimensions in cells and the display scale."""

    width: int = Field(default=32, gt=0)
    height: int = Field(default=32, gt=0)
    scale: int = Field(default=10, ge=1)


class AnimationSettings(BaseSettings):
    """Frame count, delay and the deformation knob of one animation state."""

    frames: int = Field(default=8, ge=2)
    frame_delay: int = Field(default=100, gt=0)
    tunable: float | None = None


class IdleSettings(AnimationSettings):
    frames: int = Field(default=8, ge=2)
    frame_delay: int = Field(default=150, gt=0)
    tunable: float | None = 1.2


class WalkSettings(AnimationSettings):
    frames: int = Field(default=12, ge=2)
    frame_delay: int = Field(default=80, gt=0)
    tunable: float | None = 2.5


class AttackSettings(AnimationSettings):
    frames: int = Field(default=10, ge=2)
    frame_delay: int = Field(default=60, gt=0)
    tunable: float | None = math.pi * 1.5


class ExportSettings(BaseSettings):
    """Export defaults."""

    padding: int = Field(default=1, ge=0)
    sheet_name: str = "sprite-sheet.png"
    archive_name: str = "animations.zip"


# AnimationConfig field that receives each state's tunable.
_TUNABLE_FIELDS = {
    AnimationState.IDLE: "breathing_intensity",
    AnimationState.WALK: "walking_speed",
    AnimationState.ATTACK: "attack_range",
}


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PIXELSMITH_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    output_dir: Path = Field(default_factory=_default_output_dir)
    log_level: str = "WARNING"
    sprite: SpriteSettings = Field(default_factory=SpriteSettings)
    idle: IdleSettings = Field(default_factory=IdleSettings)
    walk: WalkSettings = Field(default_factory=WalkSettings)
    attack: AttackSettings = Field(default_factory=AttackSettings)
    export: ExportSettings = Field(default_factory=ExportSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))

    def animation_settings(self, state: AnimationState) -> AnimationSettings:
        return {
            AnimationState.IDLE: self.idle,
            AnimationState.WALK: self.walk,
            AnimationState.ATTACK: self.attack,
        }[state]

    def sprite_config(self, states: list[AnimationState] | None = None) -> SpriteConfig:
        """Build the :class:`SpriteConfig` for *states* (all states by default)."""
        animations = []
        for state in dict.fromkeys(states or AnimationState):
            settings = self.animation_settings(state)
            knob = _TUNABLE_FIELDS[state]
            animations.append(
                AnimationConfig(
                    state=state,
                    frames=settings.frames,
                    frame_delay=settings.frame_delay,
                    **{knob: settings.tunable},
                )
            )
        return SpriteConfig(
            width=self.sprite.width,
            height=self.sprite.height,
            scale=self.sprite.scale,
            animations=animations,
        )

    def ensure_dirs(self) -> None:
        """Create the config and output directories if they don't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)


def load_config() -> AppConfig:
    """Load application config, creating directories if needed."""
    config = AppConfig()
    config.ensure_dirs()
    return config
