"""Per-state deformation of a base frame into later animation frames.

Handlers are plain functions selected by :class:`AnimationState`.  Each one
describes the displacement of a pixel at normalised time ``t`` and is applied
relative to its own value at ``t = 0``, so frame 0 always reproduces the base
pose exactly and looping cycles close on themselves.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pixelsmith.models.enums import AnimationState
from pixelsmith.models.sprite import Frame, Pixel, state_tunable
from pixelsmith.pipeline import easing

if TYPE_CHECKING:
    from pixelsmith.models.sprite import AnimationConfig, SpriteConfig

logger = logging.getLogger(__name__)

Motion = tuple[float, float, float]  # (dx, dy, dz)


@dataclass(frozen=True)
class SpriteBounds:
    width: float
    height: float

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def center_y(self) -> float:
        return self.height / 2


Handler = Callable[[Sequence[Pixel], float, float, SpriteBounds], list[Pixel]]
MotionFn = Callable[[Pixel, float, float, SpriteBounds], Motion]


def _anchored(motion: MotionFn) -> Handler:
    """Turn a displacement function into a handler that is the identity at ``t = 0``."""

    def handler(
        pixels: Sequence[Pixel],
        t: float,
        tunable: float,
        bounds: SpriteBounds,
    ) -> list[Pixel]:
        result: list[Pixel] = []
        for pixel in pixels:
            x1, y1, z1 = motion(pixel, t, tunable, bounds)
            x0, y0, z0 = motion(pixel, 0.0, tunable, bounds)
            dz = z1 - z0
            z = pixel.z if dz == 0 else (pixel.z or 0.0) + dz
            result.append(
                pixel.model_copy(update={"x": pixel.x + (x1 - x0), "y": pixel.y + (y1 - y0), "z": z})
            )
        return result

    handler.__name__ = motion.__name__.lstrip("_").replace("_motion", "_handler")
    handler.__doc__ = motion.__doc__
    return handler


# ---------------------------------------------------------------------------
# Idle
# ---------------------------------------------------------------------------


def _idle_motion(pixel: Pixel, t: float, intensity: float, bounds: SpriteBounds) -> Motion:
    """Breathing, upper-body sway and a lazy arm swing."""
    x, y = pixel.x, pixel.y
    width, height = bounds.width, bounds.height
    dx = dy = 0.0

    # Breathing fades out from the top of the sprite to mid-height.
    height_falloff = max(0.0, 1 - (y / height) * 2) ** 1.2
    dy += easing.breathing(t) * intensity * height_falloff

    phase = t * math.pi * 2
    if y < height * 0.7:
        sway = math.sin(phase) * 0.2 + math.sin(phase * 0.5) * 0.1
        sway_factor = (1 - y / (height * 0.7)) ** 1.3
        dx += sway * sway_factor
        dy += math.sin(phase * 1.5) * 0.1 * sway_factor

    if x < width * 0.3 or x > width * 0.7:
        is_left = x < width * 0.3
        arm_factor = abs(bounds.center_x - x) / bounds.center_x
        arm_phase = phase + (math.pi if is_left else 0.0)
        swing = math.sin(arm_phase * 0.5) * 0.4 + math.sin(arm_phase * 0.25) * 0.2
        dy += swing * arm_factor
        dx += math.cos(arm_phase * 0.5) * 0.2 * arm_factor

    return dx, dy, 0.0


# ---------------------------------------------------------------------------
# Walk
# ---------------------------------------------------------------------------

FORWARD_LEAN = 0.4
TORSO_BAND = (0.3, 0.7)
ARM_BAND = (0.3, 0.7)
PRIMARY = 0.8
SECONDARY = 0.15
MICRO = 0.05


def _leg_dynamics(phase: float, leg_factor: float, speed: float) -> tuple[float, float]:
    """Displacement of one leg at its own gait phase, for the left-hand side.

    While the leg swings forward it bends at the knee and lifts; while it is
    planted it settles into the ground.
    """
    stride_phase = phase * math.pi * 2
    swing_dir = math.sin(stride_phase)
    lift_phase = ((phase + 0.25) % 1) * math.pi * 2
    leg_swing = (
        swing_dir * speed * 0.55
        + math.sin(stride_phase * 2) * 0.25
        + math.sin(lift_phase) * 0.15
    )
    bend = abs(leg_swing) / (speed or 1.0)
    knee_rotation = math.cos(stride_phase) * 0.15

    dx = leg_swing * leg_factor * 0.9
    if swing_dir > 0:
        knee_bend = swing_dir * 1.4
        lift_curve = easing.ease_in_out_sine(1 - leg_factor**1.3)
        dy = -bend * 0.9 * knee_bend * lift_curve
        dx += (bend * knee_rotation + 0.15 * swing_dir) * leg_factor
    else:
        ground_contact = max(0.0, math.sin(stride_phase * 2)) * 0.8
        dy = -swing_dir * 0.25 * leg_factor + ground_contact * 0.1 * leg_factor
    return dx, dy


def _arm_dynamics(
    arm_phase: float,
    arm_factor: float,
    speed: float,
) -> tuple[float, float, float, float]:
    """Return ``(swing, lift, elbow_bend, twist)`` for one arm."""
    angle = arm_phase * math.pi * 2
    primary_swing = math.sin(angle) * speed * 0.5
    secondary_swing = math.sin(angle) * 0.15 * easing.ease_in_out_sine(arm_phase)
    micro = math.sin(angle * 2) * 0.04
    swing = primary_swing * 0.8 + secondary_swing + micro

    shoulder_rotation = math.sin(angle) * 0.25
    shoulder_lift = math.cos(angle) * 0.15

    # Elbow trails the shoulder by a quarter cycle.
    elbow_phase = (arm_phase + 0.25) % 1
    base_bend = math.sin(elbow_phase * math.pi * 2 + math.pi)
    relaxed = max(0.0, 1 - abs(swing) / (speed or 1.0))
    elbow_bend = base_bend * 0.25 * easing.ease_in_out_sine(relaxed)
    twist = math.sin(angle) * 0.08

    return swing, (shoulder_rotation + shoulder_lift) * arm_factor, elbow_bend, twist


def _walk_motion(pixel: Pixel, t: float, speed: float, bounds: SpriteBounds) -> Motion:
    """Gait: lean, torso twist, alternating legs and arms, mid-body bounce."""
    x, y = pixel.x, pixel.y
    width, height = bounds.width, bounds.height
    dx = dy = dz = 0.0

    is_left = x < bounds.center_x
    side = -1.0 if is_left else 1.0
    relative_height = y / height
    distance_from_center = abs(x - bounds.center_x) / bounds.center_x
    cycle = t * math.pi * 2

    stride = easing.walk_cycle(t) * speed
    hip = easing.hip_sway(t)
    torso = easing.torso_rotation(t)

    # 1. Forward lean and lateral micro-jitter.
    if y < height * 0.9:
        lean_factor = max(0.0, 1 - relative_height) ** 1.4
        lean = FORWARD_LEAN * (1 + math.sin(cycle) * SECONDARY)
        lateral = math.sin(cycle * 2) * MICRO * (1 - relative_height)
        dx += lean * lean_factor + lateral
        dz += math.sin(cycle) * MICRO * (1 - relative_height)

    # 2. Torso rotation, resisting near full compression.
    low, high = TORSO_BAND
    if height * low < y < height * high:
        torso_factor = (y - height * low) / (height * (high - low))
        rotation = torso * (1 - torso_factor**1.2) * distance_from_center
        dx += rotation * 1.8
        dy += abs(rotation) * 0.4 + math.sin(t * math.pi * 3) * 0.1 * (1 - torso_factor)

    # 3. Legs, half a cycle apart and mirrored in sign.
    if y > height * 0.7:
        leg_factor = min(1.0, (y - height * 0.7) / (height * 0.3))
        leg_phase = t if is_left else (t + 0.5) % 1
        leg_dx, leg_dy = _leg_dynamics(leg_phase, leg_factor, speed)
        dx += -side * leg_dx
        dy += leg_dy
        dx += hip * (1 - leg_factor**1.3) * -side

    # 4. Arms swing opposite to the legs on the same side.
    if y < height * 0.5 and (x < width * ARM_BAND[0] or x > width * ARM_BAND[1]):
        arm_factor = distance_from_center
        arm_phase = (t + 0.5) % 1 if is_left else t
        swing, lift, elbow_bend, twist = _arm_dynamics(arm_phase, arm_factor, speed)
        dx += side * swing * arm_factor
        dy += lift
        if y > height * 0.3:
            elbow_factor = (y - height * 0.3) / (height * 0.2)
            dx -= side * elbow_bend * arm_factor * elbow_factor
            dx -= side * twist * arm_factor * (1 - elbow_factor)
        dz -= side * (swing * 0.25 + elbow_bend * 0.15) * arm_factor
        dx += torso * 0.8 * arm_factor * 1.2
        dy += abs(torso * 0.8) * arm_factor * 0.4

    # 5. Mid-body bounce and lateral shift.
    if height * 0.5 <= y <= height * high:
        body_factor = (y - height * 0.5) / (height * (high - 0.5))
        horizontal_factor = (x - bounds.center_x) / bounds.center_x
        eased = easing.ease_in_out_sine(1 - body_factor)
        bounce = abs(math.sin(cycle)) * 0.3 * (1 - body_factor**1.4) * 0.4
        secondary_bounce = math.sin(t * math.pi * 3) * MICRO * 0.8 * (1 - body_factor)
        breathing = math.sin(t * math.pi * 4) * MICRO * 0.8 * (1 - body_factor)
        lateral_shift = math.sin(cycle) * (1 - body_factor) * PRIMARY * 0.4
        momentum = math.sin(cycle + math.pi / 6) * SECONDARY * 0.7 * (1 - body_factor)
        dy += (bounce + secondary_bounce) * eased + breathing
        dx += (lateral_shift + momentum + math.sin(cycle) * 0.08 + stride * 0.04) * eased
        dz += (math.sin(cycle) * SECONDARY + horizontal_factor * MICRO) * (1 - body_factor)

    return dx, dy, dz


# ---------------------------------------------------------------------------
# Attack
# ---------------------------------------------------------------------------

ANTICIPATION_END = 0.2
STRIKE_END = 0.6


def attack_phase(t: float) -> tuple[str, float]:
    """Split *t* into ``(phase name, progress within the phase)``."""
    if t < ANTICIPATION_END:
        return "anticipation", t / ANTICIPATION_END
    if t < STRIKE_END:
        return "strike", (t - ANTICIPATION_END) / (STRIKE_END - ANTICIPATION_END)
    return "recovery", min(1.0, (t - STRIKE_END) / (1 - STRIKE_END))


def swing_angle(t: float, attack_range: float) -> float:
    """Arm angle: pulled back, swept to ``1.2 * range``, settling at ``range``."""
    phase, progress = attack_phase(t)
    if phase == "anticipation":
        return -easing.ease_in_back(progress) * attack_range * 0.2
    if phase == "strike":
        return -0.2 * attack_range + easing.ease_out_expo(progress) * attack_range * 1.4
    return attack_range * 1.2 - easing.ease_out_elastic(progress) * attack_range * 0.2


def _attack_body(t: float) -> tuple[float, float, float]:
    """Return ``(weight_shift, body_rotation, counter_balance)`` at *t*."""
    phase, progress = attack_phase(t)
    if phase == "anticipation":
        return (
            -easing.ease_in_back(progress) * 1.5,
            -progress * 0.3,
            math.sin(progress * math.pi) * 0.5,
        )
    if phase == "strike":
        return (
            -1.5 + easing.ease_out_expo(progress) * 4.5,
            -0.3 + progress * 0.8,
            -math.sin(progress * math.pi),
        )
    return (
        3.0 - easing.ease_out_elastic(progress) * 1.5,
        0.5 - easing.ease_in_out_sine(progress) * 0.5 + math.sin(progress * math.pi) * 0.2,
        -math.sin(progress * math.pi) * 0.3,
    )


def _attack_motion(pixel: Pixel, t: float, attack_range: float, bounds: SpriteBounds) -> Motion:
    """Weapon arm rotation, torso weight shift and off-hand counter-balance."""
    x, y = pixel.x, pixel.y
    width, height = bounds.width, bounds.height
    relative_height = y / height
    new_x, new_y = x, y
    weight_shift, body_rotation, counter_balance = _attack_body(t)

    if x > width * 0.6 and y < height * 0.5:
        dx = x - bounds.center_x
        dy = y - bounds.center_y
        radius = math.hypot(dx, dy)
        base_angle = math.atan2(dy, dx)
        angle = base_angle + swing_angle(t, attack_range)
        dynamic_radius = radius * (1 + math.sin(t * math.pi) * 0.1)
        new_x = bounds.center_x + dynamic_radius * math.cos(angle)
        new_y = bounds.center_y + dynamic_radius * math.sin(angle)

    if y < height * 0.8:
        body_factor = max(0.0, 1 - relative_height) ** 1.2
        new_x += weight_shift * body_factor
        # Small rotation around the centre of mass.
        origin = bounds.center_x
        rotation_offset = (new_x - origin) * body_rotation
        new_x = origin + (new_x - origin) * (1 + body_rotation * 0.1)
        new_y += rotation_offset * 0.2

    if x < width * 0.4 and y < height * 0.5:
        new_x += counter_balance * (1 - relative_height)
        new_y += counter_balance * 0.5 * (1 - relative_height)

    return new_x - x, new_y - y, 0.0


idle_handler = _anchored(_idle_motion)
walk_handler = _anchored(_walk_motion)
attack_handler = _anchored(_attack_motion)

HANDLERS: dict[AnimationState, Handler] = {
    AnimationState.IDLE: idle_handler,
    AnimationState.WALK: walk_handler,
    AnimationState.ATTACK: attack_handler,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalized_time(frame_index: int, total_frames: int) -> float:
    """``frame_index / (total_frames - 1)``; a single-frame animation sits at 0."""
    if total_frames < 1:
        msg = f"total_frames must be positive, got {total_frames}"
        raise ValueError(msg)
    if total_frames == 1:
        return 0.0
    return frame_index / (total_frames - 1)


def deform(
    base_frame: Frame,
    state: AnimationState,
    frame_index: int,
    total_frames: int,
    state_config: AnimationConfig | None = None,
    *,
    bounds: SpriteBounds,
) -> Frame:
    """Return frame *frame_index* of *state* derived from *base_frame*.

    The base frame is never modified; the result holds fresh pixels with
    only their coordinates changed.
    """
    t = normalized_time(frame_index, total_frames)
    tunable = state_tunable(state, state_config)
    pixels = HANDLERS[state](base_frame.pixels, t, tunable, bounds)
    return Frame(
        id=Frame.make_id(state, frame_index),
        pixels=pixels,
        state=state,
        index=frame_index,
    )


class AnimationFrameGenerator:
    """Derives animation frames using the per-state settings of a sprite."""

    def __init__(self, config: SpriteConfig) -> None:
        self.config = config
        self.bounds = SpriteBounds(config.width, config.height)

    def generate(
        self,
        base_frame: Frame,
        state: AnimationState,
        frame_index: int,
        total_frames: int | None = None,
    ) -> Frame:
        animation = self.config.animation_for(state)
        if animation is None:
            logger.debug("No animation config for %s; using default tunables", state)
        if total_frames is None:
            total_frames = animation.frames if animation else 1
        return deform(
            base_frame, state, frame_index, total_frames, animation, bounds=self.bounds,
        )
