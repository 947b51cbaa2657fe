"""Editor session: the explicit state of one sprite editing context.

Everything an interactive front end needs (current sprite, selected frame,
drawing mode and colour) lives on an :class:`EditorSession` instance and is
changed only through its methods.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pixelsmith.models.color import Color
from pixelsmith.models.document import load_sprite, save_sprite
from pixelsmith.models.enums import AnimationState, DrawMode
from pixelsmith.pipeline.pixels import PixelEffects, PixelManipulator
from pixelsmith.pipeline.sprite_gen import SpriteGenerator

if TYPE_CHECKING:
    import random
    from pathlib import Path

    from pixelsmith.models.character import CharacterConfig
    from pixelsmith.models.enums import CharacterType
    from pixelsmith.models.sprite import CharacterSprite, Frame, SpriteConfig

logger = logging.getLogger(__name__)

DEFAULT_DRAW_COLOR = Color(r=0, g=0, b=0)
DEFAULT_FRAME_DELAY = 100


class SessionError(RuntimeError):
    """Raised when an operation needs a sprite but none is loaded."""


class EditorSession:
    """State and operations of one editing context."""

    def __init__(
        self,
        config: SpriteConfig,
        *,
        rng: random.Random | None = None,
        manipulator: PixelManipulator | None = None,
    ) -> None:
        self.config = config
        self.generator = SpriteGenerator(config, rng=rng)
        self.manipulator = manipulator or PixelManipulator(config)
        self.sprite: CharacterSprite | None = None
        self.current_frame_id: str | None = None
        self.mode = DrawMode.DRAW
        self.color = DEFAULT_DRAW_COLOR
        self.effects = PixelEffects()

    # ------------------------------------------------------------------
    # Sprite lifecycle
    # ------------------------------------------------------------------

    def generate(self) -> CharacterSprite:
        """Generate a sprite for the current character and select its first frame."""
        self._set_sprite(self.generator.generate_sprite())
        return self._require_sprite()

    def reroll(
        self,
        character_type: CharacterType | None = None,
        theme_name: str | None = None,
    ) -> CharacterSprite:
        """Roll a new character and regenerate the sprite from it."""
        character: CharacterConfig = self.generator.reroll(character_type, theme_name)
        logger.info("Rerolled character: %s", character.colors.primary)
        return self.generate()

    def load(self, path: Path) -> CharacterSprite:
        """Replace the current sprite with one loaded from *path*.

        On failure the exception propagates and the session is unchanged.
        """
        sprite = load_sprite(path)
        self._set_sprite(sprite)
        if sprite.character_config is not None:
            self.generator.character_config = sprite.character_config
        return sprite

    def save(self, path: Path) -> Path:
        return save_sprite(self._require_sprite(), path)

    # ------------------------------------------------------------------
    # Frame selection
    # ------------------------------------------------------------------

    @property
    def current_frame(self) -> Frame | None:
        if self.sprite is None or self.current_frame_id is None:
            return None
        return self.sprite.frame_by_id(self.current_frame_id)

    @property
    def current_state(self) -> AnimationState | None:
        frame = self.current_frame
        return frame.state if frame else None

    def state_frames(self) -> list[Frame]:
        state = self.current_state
        if self.sprite is None or state is None:
            return []
        return self.sprite.frames_for(state)

    def select_state(self, state: AnimationState) -> Frame | None:
        """Jump to the first frame of *state*; no-op if the sprite has none."""
        frames = self._require_sprite().frames_for(state)
        if not frames:
            logger.debug("Sprite has no %s frames", state)
            return self.current_frame
        self.current_frame_id = frames[0].id
        return frames[0]

    def navigate(self, delta: int) -> Frame | None:
        """Move *delta* frames within the current state, wrapping around."""
        frames = self.state_frames()
        current = self.current_frame
        if not frames or current is None:
            return None
        position = next(i for i, f in enumerate(frames) if f.id == current.id)
        target = frames[(position + delta) % len(frames)]
        self.current_frame_id = target.id
        return target

    def frame_info(self) -> str:
        """Human-readable position, e.g. ``"idle - Frame 1 of 8"``."""
        frames = self.state_frames()
        current = self.current_frame
        if current is None:
            return "No frame selected"
        position = next(i for i, f in enumerate(frames) if f.id == current.id)
        return f"{current.state} - Frame {position + 1} of {len(frames)}"

    def frame_delay(self) -> int:
        """Delay in milliseconds of the current state's animation."""
        state = self.current_state
        config = self.sprite.config if self.sprite else self.config
        animation = config.animation_for(state) if state else None
        return animation.frame_delay if animation else DEFAULT_FRAME_DELAY

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def set_mode(self, mode: DrawMode) -> None:
        self.mode = mode

    def set_color(self, color: Color) -> None:
        self.color = color

    def apply_pointer(self, px: float, py: float) -> Frame | None:
        """Draw or erase at a pointer position according to :attr:`mode`."""
        if self.mode == DrawMode.ERASE:
            return self.erase(px, py)
        return self.draw(px, py)

    def draw(self, px: float, py: float) -> Frame | None:
        frame = self.current_frame
        if frame is None:
            return None
        updated = self.manipulator.place_at_pointer(frame, px, py, self.color, self.effects)
        self._replace_frame(updated)
        return updated

    def erase(self, px: float, py: float) -> Frame | None:
        frame = self.current_frame
        if frame is None:
            return None
        updated = self.manipulator.erase(frame, px, py)
        self._replace_frame(updated)
        return updated

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_sprite(self) -> CharacterSprite:
        if self.sprite is None:
            msg = "no sprite loaded; generate or load one first"
            raise SessionError(msg)
        return self.sprite

    def _set_sprite(self, sprite: CharacterSprite) -> None:
        self.sprite = sprite
        self.current_frame_id = sprite.frames[0].id if sprite.frames else None

    def _replace_frame(self, frame: Frame) -> None:
        sprite = self._require_sprite()
        frames = [frame if f.id == frame.id else f for f in sprite.frames]
        self.sprite = sprite.model_copy(update={"frames": frames})
