"""Rasterise frames into scaled RGBA images with Pillow."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from PIL import Image, ImageFilter

if TYPE_CHECKING:
    from pixelsmith.models.sprite import Frame, Pixel, SpriteConfig

logger = logging.getLogger(__name__)

BLOOM_ALPHA_THRESHOLD = 0.5


class RendererError(RuntimeError):
    """Raised when the drawing surface cannot be created."""


def draw_order(pixels: list[Pixel]) -> list[Pixel]:
    """Opaque pixels first, then translucent ones; relative order is kept."""
    opaque = [p for p in pixels if not p.color.is_translucent]
    translucent = [p for p in pixels if p.color.is_translucent]
    return opaque + translucent


class FrameRenderer:
    """Draws frames as ``scale x scale`` blocks on a reusable surface.

    Parameters
    ----------
    width, height:
        Sprite size in cells.
    scale:
        Edge length in image pixels of one cell.
    """

    def __init__(self, width: int, height: int, scale: int = 1) -> None:
        if width <= 0 or height <= 0 or scale <= 0:
            msg = f"cannot create a {width}x{height} surface at scale {scale}"
            raise RendererError(msg)
        self.width = width
        self.height = height
        self.scale = scale
        try:
            self.surface = Image.new("RGBA", self.size, (0, 0, 0, 0))
        except (ValueError, MemoryError) as exc:
            msg = f"cannot create drawing surface: {exc}"
            raise RendererError(msg) from exc

    @classmethod
    def for_config(cls, config: SpriteConfig) -> FrameRenderer:
        return cls(config.width, config.height, config.scale)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width * self.scale, self.height * self.scale)

    def render(self, frame: Frame, scale: int | None = None) -> Image.Image:
        """Render *frame* and return a copy of the surface.

        A *scale* different from the renderer's own draws on a temporary
        surface of the matching size.
        """
        scale = scale or self.scale
        if scale == self.scale:
            surface = self.surface
            surface.paste((0, 0, 0, 0), (0, 0, *surface.size))
        else:
            surface = Image.new("RGBA", (self.width * scale, self.height * scale), (0, 0, 0, 0))

        for pixel in draw_order(frame.pixels):
            left = _round_half_up(pixel.x * scale)
            top = _round_half_up(pixel.y * scale)
            _blend_block(surface, left, top, scale, pixel.color.rgba)
            if pixel.color.is_translucent and pixel.color.a < BLOOM_ALPHA_THRESHOLD:
                _bloom(surface, left, top, scale, pixel.color.rgba)

        return surface.copy()


# ---------------------------------------------------------------------------
# Drawing helpers
# ---------------------------------------------------------------------------


def _round_half_up(value: float) -> int:
    # Halves go up (2.5 -> 3, -0.5 -> 0), not to the nearest even integer.
    return math.floor(value + 0.5)


def _clip(surface: Image.Image, left: int, top: int, w: int, h: int) -> tuple[int, int, int, int] | None:
    """Intersect a rectangle with the surface; ``None`` when nothing is visible."""
    x0, y0 = max(0, left), max(0, top)
    x1, y1 = min(surface.width, left + w), min(surface.height, top + h)
    if x0 >= x1 or y0 >= y1:
        return None
    return x0, y0, x1, y1


def _blend_block(
    surface: Image.Image,
    left: int,
    top: int,
    size: int,
    rgba: tuple[int, int, int, int],
) -> None:
    box = _clip(surface, left, top, size, size)
    if box is None:
        return
    x0, y0, x1, y1 = box
    if rgba[3] == 255:
        surface.paste(rgba, box)
        return
    block = Image.new("RGBA", (x1 - x0, y1 - y0), rgba)
    surface.alpha_composite(block, (x0, y0))


def _bloom(
    surface: Image.Image,
    left: int,
    top: int,
    size: int,
    rgba: tuple[int, int, int, int],
) -> None:
    """Soft halo around a faint pixel, blurred with radius ``size / 2``."""
    radius = size / 2
    margin = max(1, round(radius * 2))
    extent = size + margin * 2
    halo = Image.new("RGBA", (extent, extent), (*rgba[:3], 0))
    halo.paste(rgba, (margin, margin, margin + size, margin + size))
    halo = halo.filter(ImageFilter.GaussianBlur(radius))

    origin_x, origin_y = left - margin, top - margin
    box = _clip(surface, origin_x, origin_y, extent, extent)
    if box is None:
        return
    x0, y0, x1, y1 = box
    crop = halo.crop((x0 - origin_x, y0 - origin_y, x1 - origin_x, y1 - origin_y))
    surface.alpha_composite(crop, (x0, y0))
