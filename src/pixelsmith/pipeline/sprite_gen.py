"""Full sprite generation: character roll, base frames and every animation frame."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from pixelsmith.models.sprite import CharacterSprite, Frame
from pixelsmith.pipeline.animation import AnimationFrameGenerator
from pixelsmith.pipeline.base_frame import BaseFrameGenerator
from pixelsmith.pipeline.character_gen import CharacterGenerator

if TYPE_CHECKING:
    from pixelsmith.models.character import CharacterConfig
    from pixelsmith.models.enums import CharacterType
    from pixelsmith.models.sprite import SpriteConfig

logger = logging.getLogger(__name__)


class SpriteGenerator:
    """Produces a :class:`CharacterSprite` for a sprite configuration.

    Without an explicit *character_config* a character is rolled from *rng*
    on construction.  Frame derivation itself involves no randomness, so the
    same character and config always yield identical frames.
    """

    def __init__(
        self,
        config: SpriteConfig,
        character_config: CharacterConfig | None = None,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        # Seeded RNG for reproducible procedural rolls - not cryptographic use.
        self.rng = rng or random.Random()  # noqa: S311
        self.character_generator = CharacterGenerator(self.rng)
        self.character_config = character_config or self.character_generator.generate()
        self.base_frames = BaseFrameGenerator(config)
        self.animation_frames = AnimationFrameGenerator(config)

    def generate_sprite(self) -> CharacterSprite:
        """Generate every frame of every configured animation state."""
        frames: list[Frame] = []
        for animation in self.config.animations:
            base = self.base_frames.generate(animation.state, 0, self.character_config)
            for index in range(animation.frames):
                frames.append(
                    self.animation_frames.generate(base, animation.state, index, animation.frames)
                )
            logger.debug("Generated %d %s frames", animation.frames, animation.state)

        logger.info(
            "Generated sprite: %d frames across %d states (%dx%d)",
            len(frames), len(self.config.animations), self.config.width, self.config.height,
        )
        return CharacterSprite(
            frames=frames,
            width=self.config.width,
            height=self.config.height,
            config=self.config,
            character_config=self.character_config,
        )

    def reroll(
        self,
        character_type: CharacterType | None = None,
        theme_name: str | None = None,
    ) -> CharacterConfig:
        """Roll a new character for subsequent :meth:`generate_sprite` calls.

        Previously generated sprites are independent values and stay as they were.
        """
        self.character_config = self.character_generator.generate(character_type, theme_name)
        return self.character_config


def generate_character_sprite(
    config: SpriteConfig,
    *,
    character_type: CharacterType | None = None,
    theme_name: str | None = None,
    seed: int | None = None,
) -> CharacterSprite:
    """Roll a character and generate its complete sprite in one call."""
    # Seeded RNG for reproducible procedural rolls - not cryptographic use.
    rng = random.Random(seed)  # noqa: S311
    character = CharacterGenerator(rng).generate(character_type, theme_name)
    return SpriteGenerator(config, character, rng=rng).generate_sprite()
