"""Neutral-pose silhouette synthesis from a character's proportions and palette.

Base measurements are expressed for a 32-unit sprite and scaled by the
character's proportion multipliers (and by the sprite size), then rounded to
whole sprite units.  Every pixel is routed through :class:`PixelManipulator`
so shading, anti-aliasing and material patterns are applied uniformly.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pixelsmith.models.character import CharacterConfig, default_character
from pixelsmith.models.enums import AnimationState, PatternType
from pixelsmith.models.sprite import Frame
from pixelsmith.pipeline.pixels import PixelCanvas, PixelEffects, PixelManipulator

if TYPE_CHECKING:
    from pixelsmith.models.color import Color
    from pixelsmith.models.sprite import SpriteConfig

logger = logging.getLogger(__name__)

REFERENCE_SIZE = 32

# Base measurements (sprite units at REFERENCE_SIZE) before proportions apply.
HEAD_HEIGHT = 6.0
HEAD_HALF_WIDTH = 2.6
NECK_HEIGHT = 1.0
NECK_WIDTH = 6.0
TORSO_LENGTH = 5.0
BODY_HALF_WIDTH = 6.5
SHOULDER_HALF_WIDTH = 2.6
WAIST_HALF_WIDTH = 4.2
HIP_HALF_WIDTH = 3.6
ARM_LENGTH = 4.0
ARM_WIDTH = 9.0
LEG_LENGTH = 3.2
LEG_WIDTH = 12.0
HIP_BAND = 2.0
BLADE_LENGTH = 7.0

WAIST_POINT = 0.8
MIN_GLOW_SIZE = 24


@dataclass(frozen=True)
class _Palette:
    body: Color
    accent: Color
    outline: Color
    weapon: Color


@dataclass(frozen=True)
class _Layout:
    """Rounded measurements and anchor rows for one character."""

    cx: int
    unit: float
    head_top: int
    head_height: int
    head_half: float
    neck_top: int
    neck_height: int
    neck_half: int
    torso_top: int
    torso_length: int
    shoulder_half: float
    waist_half: float
    hip_half: float
    body_half: int
    arm_top: int
    arm_length: int
    arm_width: int
    hip_top: int
    hip_band: int
    leg_top: int
    leg_length: int
    leg_width: int
    leg_spread: int
    muscle: float

    @property
    def torso_bottom(self) -> int:
        return self.torso_top + self.torso_length


def _layout(config: SpriteConfig, character: CharacterConfig) -> _Layout:
    p = character.proportions
    unit = min(config.width, config.height) / REFERENCE_SIZE
    cx = config.width // 2
    cy = config.height // 2

    def span(base: float, factor: float) -> int:
        return max(1, round(base * factor * unit))

    torso_length = span(TORSO_LENGTH, p.torso_length)
    torso_top = cy - torso_length // 2
    neck_height = span(NECK_HEIGHT, 1.0)
    neck_top = torso_top - neck_height
    head_height = span(HEAD_HEIGHT, p.head_size)
    hip_top = torso_top + torso_length
    hip_band = span(HIP_BAND, 1.0)
    hip_half = HIP_HALF_WIDTH * p.hip_width * unit
    arm_length = span(ARM_LENGTH, p.arm_length)
    leg_width = span(LEG_WIDTH, p.leg_width)

    return _Layout(
        cx=cx,
        unit=unit,
        head_top=neck_top - head_height,
        head_height=head_height,
        head_half=HEAD_HALF_WIDTH * p.head_size * unit,
        neck_top=neck_top,
        neck_height=neck_height,
        neck_half=max(0, round(NECK_WIDTH * p.neck_width * unit / 2)),
        torso_top=torso_top,
        torso_length=torso_length,
        shoulder_half=SHOULDER_HALF_WIDTH * p.shoulder_width * unit,
        waist_half=WAIST_HALF_WIDTH * p.waist_width * unit,
        hip_half=hip_half,
        body_half=span(BODY_HALF_WIDTH, p.body_width),
        arm_top=max(torso_top, cy - arm_length // 2),
        arm_length=arm_length,
        arm_width=span(ARM_WIDTH, p.arm_width),
        hip_top=hip_top,
        hip_band=hip_band,
        leg_top=hip_top + hip_band,
        leg_length=span(LEG_LENGTH, p.leg_length),
        leg_width=leg_width,
        leg_spread=max(leg_width // 2 + 1, round(hip_half * 0.6)),
        muscle=p.muscle_definition,
    )


class BaseFrameGenerator:
    """Builds the undeformed pose for an animation state."""

    def __init__(
        self,
        config: SpriteConfig,
        manipulator: PixelManipulator | None = None,
    ) -> None:
        self.config = config
        self.manipulator = manipulator or PixelManipulator(config)

    def generate(
        self,
        state: AnimationState,
        frame_index: int = 0,
        character_config: CharacterConfig | None = None,
    ) -> Frame:
        """Return the neutral pose for *state*.

        The result always carries *frame_index*, but its pixels are the
        undeformed silhouette; pass ``0`` for the canonical base frame.
        """
        character = character_config or default_character()
        palette = self._palette(state, character)
        layout = _layout(self.config, character)
        canvas = PixelCanvas()

        self._draw_head(canvas, layout, palette)
        self._draw_neck(canvas, layout, palette)
        self._draw_torso(canvas, layout, palette)
        self._draw_arms(canvas, layout, palette)
        self._draw_legs(canvas, layout, palette)
        self._draw_face(canvas, layout, palette)
        if state == AnimationState.ATTACK:
            self._draw_weapon(canvas, layout, palette)

        return Frame(
            id=Frame.make_id(state, frame_index),
            pixels=canvas.pixels(),
            state=state,
            index=frame_index,
        )

    # ------------------------------------------------------------------
    # Colours
    # ------------------------------------------------------------------

    def _palette(self, state: AnimationState, character: CharacterConfig) -> _Palette:
        colors = character.colors
        palette = _Palette(
            body=colors.primary,
            accent=colors.secondary,
            outline=colors.outline,
            weapon=colors.secondary,
        )
        animation = self.config.animation_for(state)
        if animation is None:
            logger.debug("No animation config for %s; using character colours", state)
            return palette
        overrides = animation.colors
        if overrides is None:
            return palette
        return _Palette(
            body=overrides.body or palette.body,
            accent=palette.accent,
            outline=overrides.outline or palette.outline,
            weapon=overrides.weapon or palette.weapon,
        )

    # ------------------------------------------------------------------
    # Body parts
    # ------------------------------------------------------------------

    def _put(
        self,
        canvas: PixelCanvas,
        x: int,
        y: int,
        color: Color,
        shade: float = 1.0,
        *,
        anti_alias: bool = True,
        pattern: PatternType | None = None,
        glow: Color | None = None,
    ) -> None:
        effects = PixelEffects(shade=shade, anti_alias=anti_alias, pattern=pattern, glow=glow)
        self.manipulator.apply(canvas, x, y, color, effects)

    def _draw_head(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        cx = layout.cx
        for row in range(layout.head_height):
            progress = (row + 0.5) / layout.head_height
            if progress < 0.3:
                # Rounded crown.
                half = layout.head_half * (0.55 + 0.45 * progress / 0.3)
            elif progress < 0.8:
                half = layout.head_half
            else:
                # Chin.
                half = layout.head_half * (1 - 0.45 * (progress - 0.8) / 0.2)
            half_width = round(half)
            for x in range(cx - half_width, cx + half_width + 1):
                distance = abs(x - cx) / max(half_width, 1)
                self._put(canvas, x, layout.head_top + row, palette.body, 1 - 0.1 * distance)

    def _draw_face(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        eye_row = layout.head_top + round(0.4 * layout.head_height)
        eye_offset = max(1, round(0.5 * layout.head_half))
        for x in (layout.cx - eye_offset, layout.cx + eye_offset):
            self._put(canvas, x, eye_row, palette.outline, anti_alias=False)
            self._put(canvas, x, eye_row - 1, palette.outline, 0.7, anti_alias=False)
        mouth_row = layout.head_top + round(0.7 * layout.head_height)
        self._put(canvas, layout.cx, mouth_row, palette.outline, 0.8, anti_alias=False)

    def _draw_neck(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        shade = self._muscle_baseline(layout) * 0.92
        for y in range(layout.neck_top, layout.neck_top + layout.neck_height):
            for x in range(layout.cx - layout.neck_half, layout.cx + layout.neck_half + 1):
                self._put(canvas, x, y, palette.accent, shade)

    def _draw_torso(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        cx = layout.cx
        baseline = self._muscle_baseline(layout)
        for row in range(layout.torso_length):
            y = layout.torso_top + row
            progress = row / max(layout.torso_length - 1, 1)
            if progress < WAIST_POINT:
                taper = (progress / WAIST_POINT) ** 1.5
                half = layout.shoulder_half - (layout.shoulder_half - layout.waist_half) * taper
            else:
                flare = (progress - WAIST_POINT) / (1 - WAIST_POINT)
                half = layout.waist_half + (layout.hip_half - layout.waist_half) * flare
            half_width = max(1, round(half))
            ripple = math.sin((y - layout.torso_top) * 0.3) * layout.muscle * 0.03
            for x in range(cx - half_width, cx + half_width + 1):
                edge = abs(x - cx) / half_width
                shade = (baseline + ripple) * (1 + 0.08 * edge)
                self._put(canvas, x, y, palette.body, shade, pattern=PatternType.PLATE)

    def _draw_arms(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        cx = layout.cx
        inner = layout.body_half + 1
        for row in range(layout.arm_length):
            y = layout.arm_top + row
            progress = row / max(layout.arm_length - 1, 1)
            width = max(1, round(layout.arm_width * (1 - 0.35 * progress)))
            bow = round(math.sin(progress * math.pi) * 1.5 * 0.3)
            detail = math.sin(row * 0.5) * layout.muscle * 0.05
            for column in range(width):
                offset = inner + bow + column
                edge = 0.1 if column == width - 1 else 0.0
                shade = 1 + detail - edge
                # Left and right arms are exact mirrors around the centre column.
                self._put(canvas, cx - offset, y, palette.body, shade, pattern=PatternType.CHAIN)
                self._put(canvas, cx + offset, y, palette.body, shade, pattern=PatternType.CHAIN)

    def _draw_legs(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        cx = layout.cx
        leg_outer = layout.leg_spread + layout.leg_width // 2

        for row in range(layout.hip_band):
            progress = (row + 1) / (layout.hip_band + 1)
            half_width = max(1, round(layout.hip_half + (leg_outer - layout.hip_half) * progress))
            for x in range(cx - half_width, cx + half_width + 1):
                self._put(canvas, x, layout.hip_top + row, palette.accent, 0.9, pattern=PatternType.LEATHER)

        for row in range(layout.leg_length):
            y = layout.leg_top + row
            progress = row / max(layout.leg_length - 1, 1)
            width = max(1, round(layout.leg_width * (1 - 0.25 * progress)))
            center = layout.leg_spread + round(math.sin(progress * math.pi) * 2)
            for column in range(width):
                offset = center - width // 2 + column
                edge = abs(column - (width - 1) / 2) / max(width, 1)
                shade = 1 - 0.15 * edge
                self._put(canvas, cx - offset, y, palette.accent, shade, pattern=PatternType.CLOTH)
                self._put(canvas, cx + offset, y, palette.accent, shade, pattern=PatternType.CLOTH)

    def _draw_weapon(self, canvas: PixelCanvas, layout: _Layout, palette: _Palette) -> None:
        hand_x = layout.cx + layout.body_half + 1 + layout.arm_width - 1
        hand_y = layout.arm_top + layout.arm_length - 1
        guard_y = hand_y - 3
        blade_length = max(2, round(BLADE_LENGTH * layout.unit))
        glow = None
        if min(self.config.width, self.config.height) >= MIN_GLOW_SIZE:
            glow = palette.weapon.shade(1.3).with_alpha(0.5)

        # Blade, drawn tip first so the tip glow never covers the blade body.
        for k in reversed(range(blade_length)):
            y = guard_y - 1 - k
            x0 = hand_x + round(k * 0.35)
            width = max(1, round(2 * (1 - k / blade_length)))
            for column in range(width):
                highlight = 1.3 if column == width - 1 else 1.0
                tip_glow = glow if k == blade_length - 1 and column == 0 else None
                self._put(
                    canvas, x0 + column, y, palette.weapon, highlight,
                    anti_alias=False, glow=tip_glow,
                )

        # Guard with a centre accent.
        for dx in (-1, 0, 1):
            if dx == 0:
                self._put(canvas, hand_x, guard_y, palette.accent, 1.2, anti_alias=False)
            else:
                self._put(canvas, hand_x + dx, guard_y, palette.outline, anti_alias=False)

        # Handle with a grip accent every second row.
        for k, y in enumerate(range(guard_y + 1, hand_y + 1)):
            if k % 2 == 0:
                self._put(
                    canvas, hand_x, y, palette.accent, 0.8,
                    anti_alias=False, pattern=PatternType.LEATHER,
                )
            else:
                self._put(canvas, hand_x, y, palette.outline, anti_alias=False)

        self._put(canvas, hand_x, hand_y + 1, palette.weapon, 1.1, anti_alias=False)

    @staticmethod
    def _muscle_baseline(layout: _Layout) -> float:
        return 0.95 + 0.05 * min(layout.muscle, 1.0)
