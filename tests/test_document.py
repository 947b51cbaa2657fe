"""Tests for models.document: saving and loading sprite documents."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from pixelsmith.models import SpriteDocument, SpriteFormatError, load_sprite, save_sprite
from pixelsmith.models.document import (
    SPRITE_FORMAT_VERSION,
    load_sprite_async,
    parse_sprite_document,
)

if TYPE_CHECKING:
    from pathlib import Path


def test_round_trip_is_exact(sprite, tmp_path: Path):
    path = save_sprite(sprite, tmp_path / "hero.json")
    loaded = load_sprite(path)
    assert loaded == sprite
    walk = loaded.frames_for("walk")[2]
    original = sprite.frames_for("walk")[2]
    assert [(p.x, p.y, p.z) for p in walk.pixels] == [(p.x, p.y, p.z) for p in original.pixels]


def test_save_into_directory(sprite, tmp_path: Path):
    path = save_sprite(sprite, tmp_path / "project")
    assert path == tmp_path / "project" / "sprite.json"
    assert load_sprite(tmp_path / "project") == sprite


def test_document_envelope(sprite, tmp_path: Path):
    path = save_sprite(sprite, tmp_path / "hero.json")
    data = json.loads(path.read_text())
    assert data["version"] == SPRITE_FORMAT_VERSION
    assert "timestamp" in data
    assert data["sprite"]["frames"][0]["id"] == "idle-0"


def test_missing_file(tmp_path: Path):
    with pytest.raises(SpriteFormatError, match="not found"):
        load_sprite(tmp_path / "nope.json")


def test_invalid_json(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json")
    with pytest.raises(SpriteFormatError, match="invalid JSON"):
        load_sprite(path)


def test_non_utf8_file(tmp_path: Path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(SpriteFormatError, match="not UTF-8"):
        load_sprite(path)


def test_unreadable_path(tmp_path: Path):
    (tmp_path / "sprite.json").mkdir()
    with pytest.raises(SpriteFormatError, match="cannot read sprite file"):
        load_sprite(tmp_path)


def test_duplicate_animation_states_rejected(sprite):
    data = json.loads(SpriteDocument(sprite=sprite).dump_json())
    animations = data["sprite"]["config"]["animations"]
    animations.append(dict(animations[0]))
    with pytest.raises(SpriteFormatError, match="invalid structure"):
        parse_sprite_document(json.dumps(data))


def test_frames_not_array():
    text = json.dumps({"version": "1.0.0", "sprite": {"frames": {}, "config": {}}})
    with pytest.raises(SpriteFormatError, match="invalid sprite data format"):
        parse_sprite_document(text)


def test_missing_config():
    text = json.dumps({"version": "1.0.0", "sprite": {"frames": []}})
    with pytest.raises(SpriteFormatError):
        parse_sprite_document(text)


def test_pydantic_errors_are_wrapped(sprite):
    data = json.loads(SpriteDocument(sprite=sprite).dump_json())
    data["sprite"]["frames"][0]["state"] = "dance"
    with pytest.raises(SpriteFormatError, match="invalid structure"):
        parse_sprite_document(json.dumps(data))


def test_format_error_is_value_error():
    assert issubclass(SpriteFormatError, ValueError)


def test_unknown_version_warns_but_loads(sprite, caplog):
    data = json.loads(SpriteDocument(sprite=sprite).dump_json())
    data["version"] = "9.9.9"
    with caplog.at_level(logging.WARNING, logger="pixelsmith.models.document"):
        document = parse_sprite_document(json.dumps(data))
    assert document.sprite == sprite
    assert "9.9.9" in caplog.text


@pytest.mark.asyncio
async def test_load_sprite_async(sprite, tmp_path: Path):
    path = save_sprite(sprite, tmp_path / "hero.json")
    assert await load_sprite_async(path) == sprite


@pytest.mark.asyncio
async def test_load_sprite_async_failure(tmp_path: Path):
    with pytest.raises(SpriteFormatError):
        await load_sprite_async(tmp_path / "missing.json")
