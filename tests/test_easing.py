"""Tests for pipeline.easing: curve endpoints and waveform shape."""

import math

import pytest

from pixelsmith.pipeline import easing


@pytest.mark.parametrize(
    "fn",
    [
        easing.ease_in_out_quad,
        easing.ease_in_out_sine,
        easing.ease_out_bounce,
        easing.ease_out_elastic,
        easing.ease_in_back,
        easing.ease_out_expo,
    ],
)
def test_easing_endpoints(fn):
    assert fn(0.0) == pytest.approx(0.0, abs=1e-9)
    assert fn(1.0) == pytest.approx(1.0, abs=1e-9)


def test_elastic_and_expo_exact_at_one():
    assert easing.ease_out_elastic(1.0) == 1.0
    assert easing.ease_out_expo(1.0) == 1.0


def test_ease_in_out_quad_midpoint():
    assert easing.ease_in_out_quad(0.5) == pytest.approx(0.5)


def test_ease_in_back_undershoots():
    assert easing.ease_in_back(0.3) < 0


def test_ease_out_elastic_overshoots():
    assert max(easing.ease_out_elastic(i / 100) for i in range(101)) > 1.0


def test_breathing_is_centred():
    assert easing.breathing(0.0) == 0.0
    samples = [easing.breathing(i / 200) for i in range(201)]
    assert max(samples) > 0
    assert min(samples) < 0
    assert max(abs(s) for s in samples) < 0.1


def test_walk_cycle_is_periodic():
    assert easing.walk_cycle(0.0) == pytest.approx(easing.walk_cycle(1.0), abs=1e-9)
    assert easing.walk_cycle(0.25) != pytest.approx(easing.walk_cycle(0.75))


def test_hip_sway_and_torso_rotation_are_periodic():
    assert easing.hip_sway(0.0) == pytest.approx(0.0, abs=1e-12)
    assert easing.hip_sway(1.0) == pytest.approx(0.0, abs=1e-9)
    assert easing.torso_rotation(0.0) == pytest.approx(easing.torso_rotation(1.0), abs=1e-9)


def test_attack_swing_phases():
    assert easing.attack_swing(0.0) == pytest.approx(0.0, abs=1e-12)
    # Pulled back during anticipation.
    assert easing.attack_swing(0.19) < 0
    assert easing.attack_swing(0.59) > 0.9
    assert easing.attack_swing(1.0) == pytest.approx(1.0)


def test_jump_arc():
    assert easing.jump_arc(0.0) == pytest.approx(0.0)
    assert easing.jump_arc(0.5) > 1.0
    assert easing.jump_arc(1.0) == pytest.approx(0.2)


def test_sign_helper():
    assert easing._sign(-3.0) == -1.0
    assert easing._sign(0.0) == 0.0
    assert easing._sign(math.pi) == 1.0
