"""Tests for the editor session."""

from __future__ import annotations

import random
from typing import TYPE_CHECKING

import pytest

from pixelsmith.models import AnimationState, Color, DrawMode, SpriteFormatError
from pixelsmith.session import EditorSession, SessionError

if TYPE_CHECKING:
    from pathlib import Path

RED = Color(r=255, g=0, b=0)


@pytest.fixture
def session(sprite_config) -> EditorSession:
    s = EditorSession(sprite_config, rng=random.Random(3))
    s.generate()
    return s


def test_fresh_session_has_nothing_selected(sprite_config, tmp_path: Path):
    s = EditorSession(sprite_config, rng=random.Random(3))
    assert s.sprite is None
    assert s.current_frame is None
    assert s.frame_info() == "No frame selected"
    assert s.draw(0, 0) is None
    assert s.navigate(1) is None
    with pytest.raises(SessionError):
        s.select_state(AnimationState.WALK)
    with pytest.raises(SessionError):
        s.save(tmp_path / "empty.json")


def test_generate_selects_first_frame(session):
    assert session.current_frame_id == "idle-0"
    assert session.frame_info() == "idle - Frame 1 of 3"


def test_navigate_wraps(session):
    session.navigate(-1)
    assert session.frame_info() == "idle - Frame 3 of 3"
    session.navigate(1)
    assert session.current_frame_id == "idle-0"
    session.navigate(4)
    assert session.current_frame_id == "idle-1"


def test_select_state(session):
    frame = session.select_state(AnimationState.WALK)
    assert frame.id == "walk-0"
    assert session.frame_info() == "walk - Frame 1 of 4"
    session.navigate(1)
    assert session.current_frame_id == "walk-1"


def test_draw_replaces_only_current_frame(session):
    session.set_color(RED)
    before = session.sprite
    updated = session.draw(1, 1)
    assert updated is not None
    assert any(p.key == (0, 0) and p.color == RED for p in session.current_frame.pixels)
    assert not any(p.key == (0, 0) for p in session.sprite.frame_by_id("idle-1").pixels)
    # The previous sprite value is left alone.
    assert not any(p.key == (0, 0) for p in before.frame_by_id("idle-0").pixels)


def test_erase_at_pointer(session):
    session.set_color(RED)
    session.draw(1, 1)
    session.set_mode(DrawMode.ERASE)
    session.apply_pointer(1.5, 1.9)
    assert not any(p.key == (0, 0) for p in session.current_frame.pixels)


def test_apply_pointer_draws_in_draw_mode(session):
    session.set_color(RED)
    session.apply_pointer(3, 3)
    assert any(p.key == (1, 1) and p.color == RED for p in session.current_frame.pixels)


def test_reroll_regenerates(session):
    before = session.sprite
    after = session.reroll(theme_name="Golden")
    assert after is session.sprite
    assert after.character_config != before.character_config
    assert session.current_frame_id == "idle-0"


def test_save_and_load(session, tmp_path: Path):
    session.draw(1, 1)
    path = session.save(tmp_path / "edit.json")

    other = EditorSession(session.config, rng=random.Random(9))
    other.load(path)
    assert other.sprite == session.sprite
    assert other.generator.character_config == session.sprite.character_config
    assert other.current_frame_id == "idle-0"


def test_failed_load_leaves_session_untouched(session, tmp_path: Path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"version": "1.0.0", "sprite": {"frames": 3, "config": {}}}')
    session.navigate(1)
    sprite, frame_id = session.sprite, session.current_frame_id
    with pytest.raises(SpriteFormatError):
        session.load(bad)
    assert session.sprite is sprite
    assert session.current_frame_id == frame_id


def test_frame_delay_follows_state(session):
    assert session.frame_delay() == 100
    session.select_state(AnimationState.ATTACK)
    assert session.frame_delay() == 60


def test_draw_on_walk_frame_keeps_other_pixels(session):
    session.select_state(AnimationState.WALK)
    session.navigate(3)
    frame = session.current_frame
    taken = {p.key for p in frame.pixels}
    x, y = next((x, y) for y in range(32) for x in range(32) if (x, y) not in taken)
    session.set_color(RED)
    session.draw(x * 2, y * 2)
    updated = session.current_frame
    assert updated.id == "walk-3"
    assert updated.pixels[:-1] == frame.pixels
    assert updated.pixels[-1].key == (x, y)
