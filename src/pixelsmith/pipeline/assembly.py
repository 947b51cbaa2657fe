"""Sprite sheet assembly, trimming and PNG/ZIP export with Pillow."""

from __future__ import annotations

import asyncio
import io
import logging
import zipfile
from collections import defaultdict
from typing import TYPE_CHECKING

from PIL import Image

from pixelsmith.pipeline.render import FrameRenderer

if TYPE_CHECKING:
    from pathlib import Path

    from pixelsmith.models.sprite import CharacterSprite, Frame

logger = logging.getLogger(__name__)

DEFAULT_TRIM_PADDING = 1


def _renderer_for(sprite: CharacterSprite, renderer: FrameRenderer | None) -> FrameRenderer:
    return renderer or FrameRenderer(sprite.width, sprite.height, sprite.config.scale)


def assemble_sprite_sheet(
    sprite: CharacterSprite,
    renderer: FrameRenderer | None = None,
) -> Image.Image:
    """Lay out every frame of *sprite* in a single horizontal strip.

    Parameters
    ----------
    sprite:
        The sprite whose frames are rendered, in stored order.
    renderer:
        Renderer to use.  Defaults to one sized from the sprite and its scale.

    Returns
    -------
    Image.Image
        An RGBA image ``frame_width * n`` wide and one frame high.
    """
    if not sprite.frames:
        msg = "No frames provided for sprite sheet assembly"
        raise ValueError(msg)

    renderer = _renderer_for(sprite, renderer)
    fw, fh = renderer.size
    n = len(sprite.frames)
    sheet = Image.new("RGBA", (fw * n, fh), (0, 0, 0, 0))

    for idx, frame in enumerate(sprite.frames):
        img = renderer.render(frame)
        sheet.paste(img, (idx * fw, 0))

    logger.info("Assembled sprite sheet (%d frames, %dx%d)", n, fw * n, fh)
    return sheet


def save_sprite_sheet(
    sprite: CharacterSprite,
    output: Path,
    renderer: FrameRenderer | None = None,
) -> Path:
    """Assemble the sprite sheet and write it as a PNG to *output*."""
    sheet = assemble_sprite_sheet(sprite, renderer)
    output.parent.mkdir(parents=True, exist_ok=True)
    sheet.save(output, "PNG")
    logger.info("Saved sprite sheet: %s", output)
    return output


def trim_to_content(image: Image.Image, padding: int = DEFAULT_TRIM_PADDING) -> Image.Image:
    """Crop *image* to its non-transparent bounding box plus *padding*.

    The padded box is clamped to the image.  A fully transparent image is
    returned unchanged.
    """
    bbox = image.getchannel("A").getbbox()
    if bbox is None:
        return image
    left, top, right, bottom = bbox
    box = (
        max(0, left - padding),
        max(0, top - padding),
        min(image.width, right + padding),
        min(image.height, bottom + padding),
    )
    return image.crop(box)


def _png_bytes(image: Image.Image) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, "PNG")
    return buffer.getvalue()


def animation_entry_names(sprite: CharacterSprite) -> list[str]:
    """Archive names ``{state}{ordinal}.png`` for each frame, ordinals 1-based per state."""
    counters: dict[str, int] = defaultdict(int)
    names: list[str] = []
    for frame in sprite.frames:
        counters[frame.state] += 1
        names.append(f"{frame.state}{counters[frame.state]}.png")
    return names


def export_animations(
    sprite: CharacterSprite,
    output: Path,
    renderer: FrameRenderer | None = None,
    *,
    padding: int = DEFAULT_TRIM_PADDING,
) -> Path:
    """Write every frame, trimmed to its content, into a ZIP archive at *output*."""
    renderer = _renderer_for(sprite, renderer)
    output.parent.mkdir(parents=True, exist_ok=True)
    names = animation_entry_names(sprite)
    with zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name, frame in zip(names, sprite.frames, strict=True):
            image = trim_to_content(renderer.render(frame), padding)
            archive.writestr(name, _png_bytes(image))
    logger.info("Exported %d frames -> %s", len(names), output)
    return output


def export_frame(
    frame: Frame,
    sprite: CharacterSprite,
    output: Path,
    renderer: FrameRenderer | None = None,
) -> Path:
    """Render a single frame to PNG.

    A directory *output* gets a ``frame-{state}-{index}.png`` file inside it.
    """
    if output.suffix.lower() != ".png":
        output = output / f"frame-{frame.state}-{frame.index}.png"
    output.parent.mkdir(parents=True, exist_ok=True)
    _renderer_for(sprite, renderer).render(frame).save(output, "PNG")
    logger.info("Exported frame %s -> %s", frame.id, output)
    return output


async def export_animations_async(
    sprite: CharacterSprite,
    output: Path,
    *,
    padding: int = DEFAULT_TRIM_PADDING,
) -> Path:
    """Run :func:`export_animations` off the event loop."""
    return await asyncio.to_thread(export_animations, sprite, output, padding=padding)


async def save_sprite_sheet_async(sprite: CharacterSprite, output: Path) -> Path:
    """Run :func:`save_sprite_sheet` off the event loop."""
    return await asyncio.to_thread(save_sprite_sheet, sprite, output)
