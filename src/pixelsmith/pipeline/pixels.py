"""Pixel placement with optional visual effects, and pointer-driven erasing.

The same effect pipeline is used for bulk silhouette generation (through a
:class:`PixelCanvas`) and for single edits on an existing :class:`Frame`
(through :class:`FramePixels`).
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from pixelsmith.models.enums import PatternType
from pixelsmith.models.sprite import Frame, Pixel

if TYPE_CHECKING:
    from pixelsmith.models.color import Color
    from pixelsmith.models.sprite import SpriteConfig

Cell = tuple[int, int]
Clock = Callable[[], float]

ANTI_ALIAS_DIAGONAL_ALPHA = 0.3
ANTI_ALIAS_ORTHOGONAL_ALPHA = 0.4
DEFAULT_GLOW_ALPHA = 0.6

_ORTHOGONAL: tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL: tuple[Cell, ...] = ((-1, -1), (1, -1), (-1, 1), (1, 1))
_SECOND_RING: tuple[Cell, ...] = ((-2, 0), (2, 0), (0, -2), (0, 2))

# (offsets, fraction of the glow intensity) from the innermost ring outwards.
_GLOW_RINGS: tuple[tuple[tuple[Cell, ...], float], ...] = (
    (_ORTHOGONAL, 1.0),
    (_DIAGONAL, 0.7),
    (_SECOND_RING, 0.3),
)


@dataclass(frozen=True)
class PixelEffects:
    """Optional effects applied when a pixel is placed."""

    shade: float | None = None
    anti_alias: bool = False
    glow: Color | None = None
    pattern: PatternType | None = None


class PixelCanvas:
    """Mutable working set of pixels keyed by integer cell.

    Each cell holds one base pixel and at most one translucent overlay (the
    material pattern layer).  Insertion order is preserved.
    """

    def __init__(self, pixels: Iterable[Pixel] = ()) -> None:
        self._cells: dict[Cell, Pixel] = {}
        self._overlays: dict[Cell, Pixel] = {}
        for pixel in pixels:
            key = pixel.key
            base = self._cells.get(key)
            if (
                base is not None
                and pixel.color.is_translucent
                and not base.color.is_translucent
            ):
                self._overlays[key] = pixel
            else:
                self._cells[key] = pixel

    def __len__(self) -> int:
        return len(self._cells) + len(self._overlays)

    def __contains__(self, cell: object) -> bool:
        return cell in self._cells

    def get(self, cell: Cell) -> Pixel | None:
        return self._cells.get(cell)

    def put(self, cell: Cell, color: Color) -> None:
        """Write *color* at *cell*; an existing pixel keeps its position."""
        existing = self._cells.get(cell)
        if existing is None:
            self._cells[cell] = Pixel(x=cell[0], y=cell[1], color=color)
        else:
            self._cells[cell] = existing.model_copy(update={"color": color})
        self._overlays.pop(cell, None)

    def put_if_empty(self, cell: Cell, color: Color) -> None:
        if cell not in self._cells:
            self._cells[cell] = Pixel(x=cell[0], y=cell[1], color=color)

    def overlay(self, cell: Cell, color: Color) -> None:
        self._overlays[cell] = Pixel(x=cell[0], y=cell[1], color=color)

    def remove(self, cell: Cell) -> None:
        self._cells.pop(cell, None)
        self._overlays.pop(cell, None)

    def pixels(self) -> list[Pixel]:
        return [*self._cells.values(), *self._overlays.values()]


class FramePixels:
    """Cell-addressed writes on an existing frame's pixel list.

    Unlike :class:`PixelCanvas` nothing is collapsed: several pixels may share
    a cell (deformed frames have fractional positions) and every pixel the
    write does not target keeps its value and its place in the list.
    """

    def __init__(self, pixels: Iterable[Pixel] = ()) -> None:
        self._pixels: list[Pixel] = list(pixels)

    def __len__(self) -> int:
        return len(self._pixels)

    def __contains__(self, cell: object) -> bool:
        return self._find(cell) is not None

    def _find(self, cell: object) -> int | None:
        """Index of the first opaque pixel in *cell*, else of the first pixel there."""
        fallback = None
        for i, pixel in enumerate(self._pixels):
            if pixel.key != cell:
                continue
            if not pixel.color.is_translucent:
                return i
            if fallback is None:
                fallback = i
        return fallback

    def get(self, cell: Cell) -> Pixel | None:
        i = self._find(cell)
        return None if i is None else self._pixels[i]

    def put(self, cell: Cell, color: Color) -> None:
        i = self._find(cell)
        if i is None:
            self._pixels.append(Pixel(x=cell[0], y=cell[1], color=color))
        else:
            self._pixels[i] = self._pixels[i].model_copy(update={"color": color})

    def put_if_empty(self, cell: Cell, color: Color) -> None:
        if self._find(cell) is None:
            self._pixels.append(Pixel(x=cell[0], y=cell[1], color=color))

    def overlay(self, cell: Cell, color: Color) -> None:
        """Set the pattern layer of *cell*, replacing one left by an earlier edit."""
        base = self._find(cell)
        layer = Pixel(x=cell[0], y=cell[1], color=color)
        for i, pixel in enumerate(self._pixels):
            if (
                base is not None
                and i > base
                and pixel.color.is_translucent
                and (pixel.x, pixel.y) == cell
            ):
                self._pixels[i] = layer
                return
        self._pixels.append(layer)

    def pixels(self) -> list[Pixel]:
        return list(self._pixels)


class PixelManipulator:
    """Places and erases pixels on frames.

    ``clock`` returns wall-clock seconds and only feeds the animated
    ``magic`` pattern.
    """

    def __init__(self, config: SpriteConfig, clock: Clock | None = None) -> None:
        self.config = config
        self.clock = clock or time.time

    # ------------------------------------------------------------------
    # Frame-level API (never mutates the input frame)
    # ------------------------------------------------------------------

    def place(
        self,
        frame: Frame,
        x: float,
        y: float,
        color: Color,
        effects: PixelEffects | None = None,
    ) -> Frame:
        """Return a copy of *frame* with *color* placed at sprite cell ``(x, y)``."""
        target = FramePixels(frame.pixels)
        self.apply(target, x, y, color, effects)
        return frame.model_copy(update={"pixels": target.pixels()})

    def place_at_pointer(
        self,
        frame: Frame,
        px: float,
        py: float,
        color: Color,
        effects: PixelEffects | None = None,
    ) -> Frame:
        """Like :meth:`place` but with display coordinates from a pointer."""
        x, y = self.pointer_to_cell(px, py)
        return self.place(frame, x, y, color, effects)

    def erase(self, frame: Frame, px: float, py: float) -> Frame:
        """Remove every pixel in the cell under pointer position ``(px, py)``."""
        target = self.pointer_to_cell(px, py)
        pixels = [p for p in frame.pixels if p.key != target]
        return frame.model_copy(update={"pixels": pixels})

    def erase_cell(self, frame: Frame, x: int, y: int) -> Frame:
        pixels = [p for p in frame.pixels if p.key != (x, y)]
        return frame.model_copy(update={"pixels": pixels})

    def pointer_to_cell(self, px: float, py: float) -> Cell:
        scale = self.config.scale
        return (math.floor(px / scale), math.floor(py / scale))

    # ------------------------------------------------------------------
    # Canvas-level effect pipeline
    # ------------------------------------------------------------------

    def apply(
        self,
        canvas: PixelCanvas | FramePixels,
        x: float,
        y: float,
        color: Color,
        effects: PixelEffects | None = None,
    ) -> None:
        """Place one pixel on *canvas*, running the full effect pipeline."""
        effects = effects or PixelEffects()
        cell = (math.floor(x), math.floor(y))

        if effects.shade is not None:
            color = color.shade(effects.shade)
        canvas.put(cell, color)

        if effects.anti_alias:
            self._anti_alias(canvas, cell, color)
        if effects.glow is not None:
            self._glow(canvas, cell, effects.glow)
        if effects.pattern is not None:
            shade, alpha = pattern_overlay(effects.pattern, cell[0], cell[1], self._now_ms())
            canvas.overlay(cell, color.shade(shade).with_alpha(alpha))

    def _anti_alias(self, canvas: PixelCanvas | FramePixels, cell: Cell, color: Color) -> None:
        cx, cy = cell
        for dx, dy in _DIAGONAL:
            canvas.put_if_empty((cx + dx, cy + dy), color.with_alpha(ANTI_ALIAS_DIAGONAL_ALPHA))
        for dx, dy in _ORTHOGONAL:
            canvas.put_if_empty((cx + dx, cy + dy), color.with_alpha(ANTI_ALIAS_ORTHOGONAL_ALPHA))

    def _glow(self, canvas: PixelCanvas | FramePixels, cell: Cell, glow: Color) -> None:
        cx, cy = cell
        intensity = glow.a if glow.is_translucent else DEFAULT_GLOW_ALPHA
        for offsets, fraction in _GLOW_RINGS:
            for dx, dy in offsets:
                canvas.put((cx + dx, cy + dy), glow.with_alpha(intensity * fraction))

    def _now_ms(self) -> float:
        return self.clock() * 1000


# ---------------------------------------------------------------------------
# Material patterns
# ---------------------------------------------------------------------------


def pattern_overlay(pattern: PatternType, x: int, y: int, now_ms: float = 0.0) -> tuple[float, float]:
    """Return the ``(shade, alpha)`` of the pattern layer at cell ``(x, y)``.

    Only :attr:`PatternType.MAGIC` depends on *now_ms*; it shimmers over time.
    """
    if pattern == PatternType.CHAIN:
        # Interlocking rings: alternating bright/dark checker.
        return (1.1 if (x + y) % 2 == 0 else 0.85, 0.2)
    if pattern == PatternType.PLATE:
        # Horizontal seams every third row.
        return (1.15 if y % 3 == 0 else 0.95, 0.15)
    if pattern == PatternType.CLOTH:
        return (1 + 0.08 * math.sin(x * 1.7) * math.cos(y * 1.3), 0.12)
    if pattern == PatternType.LEATHER:
        noise = _hash_noise(x, y)
        return (0.9 + 0.15 * noise, 0.15)
    if pattern == PatternType.MAGIC:
        return (1 + 0.25 * math.sin(x * 0.8 + y * 0.6 + now_ms * 0.004), 0.25)
    # Wood grain: warped vertical bands.
    return (0.92 + 0.1 * math.sin(x * 0.5 + math.sin(y * 0.3) * 2), 0.18)


def _hash_noise(x: int, y: int) -> float:
    """Deterministic pseudo-noise in ``[0, 1)``."""
    value = math.sin(x * 12.9898 + y * 78.233) * 43758.5453
    return value - math.floor(value)
