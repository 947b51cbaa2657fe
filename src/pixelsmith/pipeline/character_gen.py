"""Randomised character rolls: palette choice, colour jitter and body proportions."""

from __future__ import annotations

import logging
import math
import random

from pixelsmith.models.character import (
    COLOR_PALETTES,
    GOLDEN_RATIO,
    CharacterConfig,
    CharacterProportions,
    DetailedColors,
)
from pixelsmith.models.color import Color
from pixelsmith.models.enums import CharacterType

logger = logging.getLogger(__name__)

COLOR_VARIATION = 12

DEFAULT_PROPORTIONS = CharacterProportions()

# Per-attribute spread of the multiplicative jitter.  Widths of thin limbs stay
# tight; muscle definition is allowed to wander the most.
PROPORTION_VARIATION: dict[str, float] = {
    "head_size": 0.08,
    "body_width": 0.1,
    "shoulder_width": 0.12,
    "torso_length": 0.1,
    "neck_width": 0.05,
    "waist_width": 0.08,
    "hip_width": 0.08,
    "arm_width": 0.06,
    "leg_width": 0.06,
    "muscle_definition": 0.15,
}


def available_themes(character_type: CharacterType = CharacterType.WARRIOR) -> list[str]:
    """Names of the palettes defined for *character_type*."""
    return [p.name for p in COLOR_PALETTES[character_type]]


class CharacterGenerator:
    """Rolls :class:`CharacterConfig` instances.

    Pass a seeded :class:`random.Random` to make rolls reproducible.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        # Seeded RNG for reproducible procedural rolls - not cryptographic use.
        self.rng = rng or random.Random()  # noqa: S311

    def generate(
        self,
        character_type: CharacterType | None = None,
        theme_name: str | None = None,
    ) -> CharacterConfig:
        character_type = character_type or CharacterType.WARRIOR
        colors = self._generate_colors(character_type, theme_name)
        proportions = self._generate_proportions()
        logger.debug("Rolled %s character (%s)", character_type, colors.primary)
        return CharacterConfig(type=character_type, colors=colors, proportions=proportions)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _gaussian(self) -> float:
        """Box-Muller style unit sample: ``rho * cos(theta)``."""
        theta = 2 * math.pi * self.rng.random()
        rho = math.sqrt(-2 * math.log(1 - self.rng.random()))
        return rho * math.cos(theta)

    def _generate_colors(
        self,
        character_type: CharacterType,
        theme_name: str | None,
    ) -> DetailedColors:
        palettes = COLOR_PALETTES[character_type]
        if theme_name:
            palette = next((p for p in palettes if p.name == theme_name), None)
            if palette is None:
                logger.warning(
                    "Theme '%s' not found for %s, using '%s'",
                    theme_name, character_type, palettes[0].name,
                )
                palette = palettes[0]
        else:
            palette = self.rng.choice(palettes)

        base = palette.colors
        return DetailedColors(
            primary=self._vary_color(base.primary),
            secondary=self._vary_color(base.secondary),
            outline=base.outline,
        )

    def _vary_color(self, color: Color) -> Color:
        def channel(value: int) -> int:
            offset = self._gaussian() * COLOR_VARIATION / 2
            return int(round(min(255.0, max(0.0, value + offset))))

        return Color(r=channel(color.r), g=channel(color.g), b=channel(color.b))

    def _generate_proportions(self) -> CharacterProportions:
        values = DEFAULT_PROPORTIONS.model_dump()
        for name, variation in PROPORTION_VARIATION.items():
            values[name] *= 1 + self._gaussian() * variation

        # Limb lengths follow the torso through the golden ratio.
        values["arm_length"] = values["torso_length"] * GOLDEN_RATIO * 0.8
        values["leg_length"] = values["torso_length"] * GOLDEN_RATIO

        shoulder = values["shoulder_width"]
        values["waist_width"] = min(values["waist_width"], shoulder * 0.75)
        values["neck_width"] = min(values["neck_width"], shoulder * 0.3)
        values["hip_width"] = min(values["hip_width"], shoulder * 0.95)

        return CharacterProportions(**values)
