"""Easing curves and composite waveforms used by the animation handlers.

Every function maps a normalised time ``t`` (usually ``0..1``) to a scalar and
is free of state.
"""

from __future__ import annotations

import math

# ---------------------------------------------------------------------------
# Easing curves
# ---------------------------------------------------------------------------


def ease_in_out_quad(t: float) -> float:
    return 2 * t * t if t < 0.5 else -1 + (4 - 2 * t) * t


def ease_in_out_sine(t: float) -> float:
    return -(math.cos(math.pi * t) - 1) / 2


def ease_out_bounce(t: float) -> float:
    n1 = 7.5625
    d1 = 2.75
    if t < 1 / d1:
        return n1 * t * t
    if t < 2 / d1:
        t -= 1.5 / d1
        return n1 * t * t + 0.75
    if t < 2.5 / d1:
        t -= 2.25 / d1
        return n1 * t * t + 0.9375
    t -= 2.625 / d1
    return n1 * t * t + 0.984375


def ease_out_elastic(t: float) -> float:
    if t == 0:
        return 0.0
    if t == 1:
        return 1.0
    c4 = (2 * math.pi) / 3
    return 2 ** (-10 * t) * math.sin((t * 10 - 0.75) * c4) + 1


def ease_in_back(t: float) -> float:
    c1 = 1.70158
    c3 = c1 + 1
    return c3 * t * t * t - c1 * t * t


def ease_out_expo(t: float) -> float:
    return 1.0 if t == 1 else 1 - 2 ** (-10 * t)


# ---------------------------------------------------------------------------
# Composite waveforms
# ---------------------------------------------------------------------------


def breathing(t: float) -> float:
    """Primary breath, rhythmic variation and micro-movement, centred on zero."""
    main_breath = math.sin(t * math.pi * 2) * 0.05
    variation = math.sin(t * math.pi * 1.5) * 0.015
    micro_movement = math.sin(t * math.pi * 8) * 0.005
    return main_breath + variation + micro_movement


def walk_cycle(t: float) -> float:
    """Gait approximation built from stride, heel-strike, toe-push and friends."""
    stride_phase = t * math.pi * 2
    stride = math.sin(stride_phase)

    acceleration = abs(stride) ** 1.6 * _sign(stride)
    heel_strike = max(0.0, math.sin(stride_phase * 2 - math.pi / 3)) * 0.25
    toe_push = max(0.0, math.sin(stride_phase * 2 + math.pi / 3)) * 0.2
    stance_pause = math.cos(stride_phase * 2) * 0.12 * (1 - abs(stride))
    weight_transfer = math.sin(stride_phase - math.pi / 4) * 0.15
    ground_reaction = max(0.0, math.sin(stride_phase * 2)) * 0.1
    momentum = math.sin(stride_phase + math.pi / 6) * 0.15

    return (
        acceleration * 0.5
        + stance_pause
        + heel_strike
        - toe_push
        + weight_transfer
        + ground_reaction
        + momentum
    )


def hip_sway(t: float) -> float:
    main_sway = math.sin(t * math.pi * 2) * 0.25
    secondary_sway = math.sin(t * math.pi * 4) * 0.08
    stabilization = math.sin(t * math.pi * 6) * 0.03
    # Resistance at the extremes of the sway.
    resistance = abs(main_sway) ** 1.2 * -0.05 * _sign(main_sway)
    return main_sway + secondary_sway + stabilization + resistance


def torso_rotation(t: float) -> float:
    main_rotation = math.sin(t * math.pi * 2 - math.pi / 4) * 0.15
    counter_rotation = math.sin(t * math.pi * 4 + math.pi / 6) * 0.04
    stabilization = math.sin(t * math.pi * 6) * 0.02
    resistance = abs(main_rotation) ** 1.3 * -0.03 * _sign(main_rotation)
    return main_rotation + counter_rotation + stabilization + resistance


def attack_swing(t: float) -> float:
    """Anticipation pull-back, explosive strike, elastic follow-through."""
    if t < 0.2:
        return ease_in_back(t * 5) * -0.2
    if t < 0.6:
        return ease_out_expo((t - 0.2) * 2.5)
    elastic = ease_out_elastic((t - 0.6) * 2.5)
    return 1 - (1 - elastic) * 0.3


def jump_arc(t: float) -> float:
    return -4 * t * (t - 1) + ease_out_bounce(t) * 0.2


def _sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0
