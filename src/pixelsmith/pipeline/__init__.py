"""pixelsmith generation pipeline - from character roll to exported images."""

from pixelsmith.pipeline.animation import (
    HANDLERS,
    AnimationFrameGenerator,
    SpriteBounds,
    deform,
    normalized_time,
)
from pixelsmith.pipeline.assembly import (
    assemble_sprite_sheet,
    export_animations,
    export_animations_async,
    export_frame,
    save_sprite_sheet,
    trim_to_content,
)
from pixelsmith.pipeline.base_frame import BaseFrameGenerator
from pixelsmith.pipeline.character_gen import CharacterGenerator, available_themes
from pixelsmith.pipeline.pixels import FramePixels, PixelCanvas, PixelEffects, PixelManipulator
from pixelsmith.pipeline.render import FrameRenderer, RendererError
from pixelsmith.pipeline.sprite_gen import SpriteGenerator, generate_character_sprite

__all__ = [
    "HANDLERS",
    "AnimationFrameGenerator",
    "BaseFrameGenerator",
    "CharacterGenerator",
    "FramePixels",
    "FrameRenderer",
    "PixelCanvas",
    "PixelEffects",
    "PixelManipulator",
    "RendererError",
    "SpriteBounds",
    "SpriteGenerator",
    "assemble_sprite_sheet",
    "available_themes",
    "deform",
    "export_animations",
    "export_animations_async",
    "export_frame",
    "generate_character_sprite",
    "normalized_time",
    "save_sprite_sheet",
    "trim_to_content",
]
