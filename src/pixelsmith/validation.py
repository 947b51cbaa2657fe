"""Structural validation for persisted sprite documents."""

from __future__ import annotations

import json
from functools import lru_cache
from pathlib import Path

import jsonschema

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "sprite.schema.json"


@lru_cache(maxsize=1)
def _load_schema() -> dict[str, object]:
    return json.loads(_SCHEMA_PATH.read_text())


def validate_sprite_document(data: object) -> None:
    """Validate a decoded sprite document against sprite.schema.json.

    Parameters
    ----------
    data:
        The decoded JSON value.

    Raises
    ------
    jsonschema.ValidationError
        If ``sprite.frames`` is not an array, ``sprite.config`` is missing,
        or the document otherwise does not match the schema.
    """
    jsonschema.validate(data, _load_schema())
