"""Sprite persistence document - wraps CharacterSprite with save/load."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from pixelsmith.models.sprite import CharacterSprite
from pixelsmith.validation import validate_sprite_document

logger = logging.getLogger(__name__)

SPRITE_FORMAT_VERSION = "1.0.0"
KNOWN_VERSIONS = frozenset({SPRITE_FORMAT_VERSION})


class SpriteFormatError(ValueError):
    """Raised when a sprite document cannot be loaded."""


class SpriteDocument(BaseModel):
    """On-disk representation of a sprite."""

    sprite: CharacterSprite
    version: str = SPRITE_FORMAT_VERSION
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def dump_json(self) -> str:
        return self.model_dump_json(indent=2)


def save_sprite(sprite: CharacterSprite, path: Path) -> Path:
    """Write *sprite* as a JSON document.

    A directory argument gets a ``sprite.json`` file inside it.
    """
    save_path = path if path.suffix == ".json" else path / "sprite.json"
    save_path.parent.mkdir(parents=True, exist_ok=True)
    save_path.write_text(SpriteDocument(sprite=sprite).dump_json(), encoding="utf-8")
    logger.info("Saved sprite (%d frames) -> %s", len(sprite.frames), save_path)
    return save_path


def parse_sprite_document(text: str) -> SpriteDocument:
    """Validate a JSON string and return the document it describes."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"sprite file contains invalid JSON: {exc}"
        raise SpriteFormatError(msg) from None
    try:
        validate_sprite_document(data)
    except SchemaValidationError as exc:
        msg = f"invalid sprite data format: {exc.message}"
        raise SpriteFormatError(msg) from None
    try:
        document = SpriteDocument.model_validate(data)
    except PydanticValidationError as exc:
        msg = f"sprite file has invalid structure: {exc}"
        raise SpriteFormatError(msg) from None
    if document.version not in KNOWN_VERSIONS:
        logger.warning(
            "Sprite document version %s is not recognised; loading anyway",
            document.version,
        )
    return document


def load_sprite(path: Path) -> CharacterSprite:
    """Load a sprite from a JSON document on disk."""
    if path.is_dir():
        path = path / "sprite.json"
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = f"sprite file not found: {path}"
        raise SpriteFormatError(msg) from None
    except PermissionError:
        msg = f"permission denied reading sprite file: {path}"
        raise SpriteFormatError(msg) from None
    except UnicodeDecodeError:
        msg = f"sprite file is not UTF-8 text: {path}"
        raise SpriteFormatError(msg) from None
    except OSError as exc:
        msg = f"cannot read sprite file {path}: {exc.strerror or exc}"
        raise SpriteFormatError(msg) from None
    sprite = parse_sprite_document(text).sprite
    logger.debug("Loaded sprite from %s (%d frames)", path, len(sprite.frames))
    return sprite


async def load_sprite_async(path: Path) -> CharacterSprite:
    """One-shot task resolving to the loaded sprite or raising SpriteFormatError."""
    return await asyncio.to_thread(load_sprite, path)
