"""CLI entry point using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from pixelsmith.models.sprite import CharacterSprite

app = typer.Typer(
    name="pixelsmith",
    help="Procedural pixel-art character sprite generator.",
    no_args_is_help=True,
)


def _load(sprite_path: Path) -> CharacterSprite:
    from pixelsmith.models.document import SpriteFormatError, load_sprite

    try:
        return load_sprite(sprite_path)
    except SpriteFormatError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def generate(
    character_type: Annotated[
        str | None,
        typer.Option("--type", "-t", help="Character type"),
    ] = None,
    theme: Annotated[str | None, typer.Option("--theme", help="Colour theme name")] = None,
    seed: Annotated[int | None, typer.Option("--seed", "-s", help="Random seed")] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Sprite JSON path"),
    ] = None,
) -> None:
    """Roll a character and generate all of its animation frames."""
    from pixelsmith.config import load_config
    from pixelsmith.models.document import save_sprite
    from pixelsmith.models.enums import CharacterType
    from pixelsmith.pipeline.sprite_gen import generate_character_sprite

    try:
        kind = CharacterType(character_type) if character_type else None
    except ValueError:
        choices = ", ".join(t.value for t in CharacterType)
        typer.echo(f"Error: unknown character type '{character_type}' (choose: {choices})", err=True)
        raise typer.Exit(1) from None

    config = load_config()
    sprite = generate_character_sprite(
        config.sprite_config(),
        character_type=kind,
        theme_name=theme,
        seed=seed,
    )
    save_path = save_sprite(sprite, output or config.output_dir / "sprite.json")
    typer.echo(f"Generated {len(sprite.frames)} frames -> {save_path}")


@app.command()
def sheet(
    sprite_path: Annotated[Path, typer.Argument(help="Sprite JSON file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Sprite sheet PNG path"),
    ] = None,
) -> None:
    """Render every frame into one horizontal sprite sheet."""
    from pixelsmith.config import load_config
    from pixelsmith.pipeline.assembly import save_sprite_sheet

    sprite = _load(sprite_path)
    config = load_config()
    saved = save_sprite_sheet(sprite, output or config.output_dir / config.export.sheet_name)
    typer.echo(f"Saved sprite sheet to {saved}")


@app.command()
def export(
    sprite_path: Annotated[Path, typer.Argument(help="Sprite JSON file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="ZIP archive path"),
    ] = None,
) -> None:
    """Export each frame as a trimmed PNG inside a ZIP archive."""
    from pixelsmith.config import load_config
    from pixelsmith.pipeline.assembly import export_animations

    sprite = _load(sprite_path)
    config = load_config()
    saved = export_animations(
        sprite,
        output or config.output_dir / config.export.archive_name,
        padding=config.export.padding,
    )
    typer.echo(f"Exported {len(sprite.frames)} frames to {saved}")


@app.command()
def frame(
    sprite_path: Annotated[Path, typer.Argument(help="Sprite JSON file")],
    frame_id: Annotated[str, typer.Argument(help="Frame id, e.g. walk-3")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="PNG path or directory"),
    ] = None,
) -> None:
    """Render a single frame to PNG."""
    from pixelsmith.pipeline.assembly import export_frame

    sprite = _load(sprite_path)
    selected = sprite.frame_by_id(frame_id)
    if selected is None:
        typer.echo(f"Error: no frame '{frame_id}' in {sprite_path}", err=True)
        raise typer.Exit(1)
    saved = export_frame(selected, sprite, output or Path())
    typer.echo(f"Saved {frame_id} to {saved}")


@app.command()
def info(
    sprite_path: Annotated[Path, typer.Argument(help="Sprite JSON file")],
) -> None:
    """Summarise a sprite document."""
    sprite = _load(sprite_path)
    typer.echo(f"Size: {sprite.width}x{sprite.height} (scale {sprite.config.scale})")
    if sprite.character_config is not None:
        colors = sprite.character_config.colors
        typer.echo(f"Character: {sprite.character_config.type} ({colors.primary}, {colors.secondary})")
    for state in sprite.states:
        animation = sprite.config.animation_for(state)
        delay = f", {animation.frame_delay} ms" if animation else ""
        typer.echo(f"  {state}: {len(sprite.frames_for(state))} frames{delay}")


@app.command()
def themes(
    character_type: Annotated[
        str,
        typer.Option("--type", "-t", help="Character type"),
    ] = "warrior",
) -> None:
    """List the colour themes available for a character type."""
    from pixelsmith.models.enums import CharacterType
    from pixelsmith.pipeline.character_gen import available_themes

    try:
        kind = CharacterType(character_type)
    except ValueError:
        typer.echo(f"Error: unknown character type '{character_type}'", err=True)
        raise typer.Exit(1) from None
    for name in available_themes(kind):
        typer.echo(name)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-V", help="Show version")
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging")
    ] = False,
) -> None:
    """pixelsmith - procedural pixel-art character sprites."""
    if version:
        from pixelsmith import __version__

        typer.echo(f"pixelsmith {__version__}")
        raise typer.Exit()

    from pixelsmith.config import AppConfig

    level = logging.DEBUG if verbose else AppConfig().log_level.upper()
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
