"""Structured colour value shared by pixels, palettes and the renderer."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{2})([0-9a-fA-F]{2})([0-9a-fA-F]{2})$")
_RGBA_RE = re.compile(
    r"^rgba?\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*(?:,\s*([0-9.]+)\s*)?\)$",
)


def _clamp_channel(value: float) -> int:
    return int(min(255, max(0, round(value))))


class Color(BaseModel):
    """An RGB colour with an optional alpha component.

    ``a`` is ``1.0`` for opaque colours.  Anything below that is treated as
    translucent by the renderer (drawn after the solid silhouette).

    For convenience the model also validates from ``"#rrggbb"`` and
    ``"rgba(r, g, b, a)"`` strings so hand-written sprite documents stay
    readable.
    """

    model_config = ConfigDict(frozen=True)

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
    a: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def _parse_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return _parse_colour_string(data)
        return data

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Build an opaque colour from ``#rrggbb``."""
        return cls.model_validate(value)

    @property
    def is_translucent(self) -> bool:
        return self.a < 1.0

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.r, self.g, self.b)

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        """Pillow-style ``(R, G, B, A)`` tuple with alpha scaled to 0-255."""
        return (self.r, self.g, self.b, _clamp_channel(self.a * 255))

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def with_alpha(self, alpha: float) -> Color:
        return Color(r=self.r, g=self.g, b=self.b, a=min(1.0, max(0.0, alpha)))

    def shade(self, factor: float) -> Color:
        """Multiply every channel by *factor*, clamping to the valid range."""
        return Color(
            r=_clamp_channel(self.r * factor),
            g=_clamp_channel(self.g * factor),
            b=_clamp_channel(self.b * factor),
            a=self.a,
        )

    def __str__(self) -> str:
        if self.is_translucent:
            return f"rgba({self.r}, {self.g}, {self.b}, {self.a:g})"
        return self.to_hex()


def _parse_colour_string(value: str) -> dict[str, Any]:
    text = value.strip()
    match = _HEX_RE.match(text)
    if match:
        r, g, b = (int(part, 16) for part in match.groups())
        return {"r": r, "g": g, "b": b, "a": 1.0}
    match = _RGBA_RE.match(text)
    if match:
        r, g, b, a = match.groups()
        return {"r": int(r), "g": int(g), "b": int(b), "a": float(a) if a else 1.0}
    msg = f"unrecognised colour string: {value!r}"
    raise ValueError(msg)
