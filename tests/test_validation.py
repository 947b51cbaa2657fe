"""Tests for sprite.schema.json validation."""

from __future__ import annotations

import copy

import pytest
from jsonschema import ValidationError

from pixelsmith.validation import validate_sprite_document

VALID_DOCUMENT: dict[str, object] = {
    "version": "1.0.0",
    "timestamp": "2026-01-01T00:00:00Z",
    "sprite": {
        "width": 32,
        "height": 32,
        "config": {"width": 32, "height": 32, "scale": 10, "animations": []},
        "frames": [
            {
                "id": "idle-0",
                "state": "idle",
                "index": 0,
                "pixels": [{"x": 1, "y": 2.5, "z": None, "color": "#ff0000"}],
            },
        ],
    },
}


def test_valid_document_passes():
    validate_sprite_document(VALID_DOCUMENT)


def test_missing_version_fails():
    data = copy.deepcopy(VALID_DOCUMENT)
    del data["version"]
    with pytest.raises(ValidationError):
        validate_sprite_document(data)


def test_frames_must_be_array():
    data = copy.deepcopy(VALID_DOCUMENT)
    data["sprite"]["frames"] = {"idle-0": {}}  # type: ignore[index]
    with pytest.raises(ValidationError):
        validate_sprite_document(data)


def test_config_must_be_object():
    data = copy.deepcopy(VALID_DOCUMENT)
    data["sprite"]["config"] = "32x32"  # type: ignore[index]
    with pytest.raises(ValidationError):
        validate_sprite_document(data)


def test_pixel_requires_coordinates():
    data = copy.deepcopy(VALID_DOCUMENT)
    del data["sprite"]["frames"][0]["pixels"][0]["x"]  # type: ignore[index]
    with pytest.raises(ValidationError):
        validate_sprite_document(data)


def test_non_object_document_fails():
    with pytest.raises(ValidationError):
        validate_sprite_document([1, 2, 3])
