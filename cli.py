#!/usr/bin/env python3
"""
Photool Command Line Interface

Main CLI entry point for the Photool editor core.
Applies catalog effects, slider adjustments, crops and comparisons to image files.
"""

import asyncio
import sys
import click
import logging
from pathlib import Path
from typing import List, Optional

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from photool import __version__
from photool.config import get_config_value, load_config
from photool.editor import CollectingNotifier, PhotoEditor, render_comparison
from photool.editor.notifications import EditOutcome
from photool.io import find_images, load_image, save_image
from photool.processing.catalog import QUICK_EFFECTS, search_effects
from photool.processing.effects import is_implemented
from photool.processing.errors import EditorError
from photool.processing.geometry import CropRect
from photool.utils.logging import setup_console_logging

logger = logging.getLogger(__name__)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True),
              help='Configuration file path')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress non-error output')
@click.option('--no-delay', is_flag=True, help='Skip the minimum processing delay')
@click.pass_context
def main(ctx, config: Optional[str] = None, verbose: bool = False, quiet: bool = False,
         no_delay: bool = False):
    """
    Photool - raster photo editor

    Apply effects, slider adjustments, rotation, mirroring and crops to image
    files using the same editor core an interactive front end drives.
    """
    ctx.ensure_object(dict)

    ctx.obj['config'] = load_config(config) if config else load_config()
    settings = ctx.obj['config']

    if verbose:
        level = 'DEBUG'
    elif quiet:
        level = 'ERROR'
    else:
        level = get_config_value(settings, 'logging.level', 'INFO')
    setup_console_logging(
        level,
        color=get_config_value(settings, 'logging.color', True),
        fmt=get_config_value(settings, 'logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
    )

    ctx.obj['verbose'] = verbose
    ctx.obj['quiet'] = quiet
    ctx.obj['no_delay'] = no_delay


def _build_editor(ctx) -> PhotoEditor:
    editor = PhotoEditor.from_config(ctx.obj['config'], notifier=CollectingNotifier())
    if ctx.obj.get('no_delay'):
        editor.dispatcher.processing_delay = 0
    return editor


def _open(editor: PhotoEditor, path: str) -> None:
    try:
        buffer = load_image(path)
    except EditorError as e:
        raise click.ClickException(f"{e.title}: {e}")
    editor.load(buffer)


def _check(outcome: EditOutcome) -> EditOutcome:
    if not outcome.succeeded:
        raise click.ClickException(f"{outcome.title}: {outcome.description}")
    return outcome


def _save(ctx, editor: PhotoEditor, output: str) -> None:
    try:
        save_image(editor.session.current_buffer(), output)
    except EditorError as e:
        raise click.ClickException(f"{e.title}: {e}")
    if not ctx.obj.get('quiet'):
        width, height = editor.session.current_buffer().size
        click.echo(f"💾 Saved {width}x{height} image to {output}")


def _report(ctx, outcome: EditOutcome) -> None:
    if ctx.obj.get('quiet'):
        return
    marker = "🧪" if outcome.simulated else "✅"
    line = f"{marker} {outcome.title}"
    if outcome.description and (outcome.simulated or ctx.obj.get('verbose')):
        line += f" - {outcome.description}"
    click.echo(line)


async def _apply_all(editor: PhotoEditor, effect_ids: List[str]) -> List[EditOutcome]:
    outcomes = []
    for effect_id in effect_ids:
        outcomes.append(_check(await editor.apply_effect(effect_id)))
    return outcomes


@main.command()
@click.option('--search', '-s', default='', help='Only show effects whose name contains this text')
@click.pass_context
def effects(ctx, search: str = ''):
    """List the effect catalog."""
    categories = search_effects(search)
    if not categories:
        click.echo(f"No effects match '{search}'")
        return

    for category in categories:
        click.echo(f"{category.name}:")
        for effect in category.effects:
            note = "" if is_implemented(effect.id) else "  (simulated)"
            click.echo(f"  {effect.id:<18} {effect.name}{note}")

    if not search:
        click.echo("Quick effects: " + ", ".join(effect.id for effect in QUICK_EFFECTS))


@main.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.argument('effect_ids', nargs=-1, required=True)
@click.pass_context
def apply(ctx, input_path: str, output_path: str, effect_ids):
    """
    Apply one or more effects in order.

    Unknown effect identifiers get the simulated preview effect.
    """
    editor = _build_editor(ctx)
    _open(editor, input_path)
    for outcome in asyncio.run(_apply_all(editor, list(effect_ids))):
        _report(ctx, outcome)
    _save(ctx, editor, output_path)


@main.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.option('--brightness', type=float, default=100.0, help='Brightness percent (0-200)')
@click.option('--contrast', type=float, default=100.0, help='Contrast percent (0-200)')
@click.option('--saturation', type=float, default=100.0, help='Saturation percent (0-200)')
@click.option('--hue', type=float, default=0.0, help='Hue rotation in degrees')
@click.option('--blur', type=float, default=0.0, help='Blur radius in pixels (0-20)')
@click.pass_context
def adjust(ctx, input_path: str, output_path: str, brightness: float, contrast: float,
           saturation: float, hue: float, blur: float):
    """Apply slider adjustments as a single edit."""
    editor = _build_editor(ctx)
    _open(editor, input_path)

    values = {
        'brightness': brightness,
        'contrast': contrast,
        'saturation': saturation,
        'hue': hue,
        'blur': blur,
    }
    for name, value in values.items():
        editor.session.adjustments.set(name, value)

    _report(ctx, _check(editor.commit_adjustments()))
    _save(ctx, editor, output_path)


@main.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.argument('x', type=float)
@click.argument('y', type=float)
@click.argument('width', type=float)
@click.argument('height', type=float)
@click.pass_context
def crop(ctx, input_path: str, output_path: str, x: float, y: float, width: float, height: float):
    """
    Crop to a rectangle given in normalized coordinates.

    X, Y, WIDTH and HEIGHT are fractions of the image size (0-1).
    """
    editor = _build_editor(ctx)
    _open(editor, input_path)

    _check(asyncio.run(editor.apply_effect('crop')))
    try:
        editor.crop.select(CropRect(x, y, width, height))
    except EditorError as e:
        raise click.ClickException(f"{e.title}: {e}")

    _report(ctx, _check(editor.apply_crop()))
    _save(ctx, editor, output_path)


@main.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.option('--times', '-n', type=click.IntRange(1, 4), default=1, help='Number of quarter turns')
@click.pass_context
def rotate(ctx, input_path: str, output_path: str, times: int = 1):
    """Rotate clockwise by quarter turns."""
    editor = _build_editor(ctx)
    _open(editor, input_path)
    for outcome in asyncio.run(_apply_all(editor, ['rotate'] * times)):
        _report(ctx, outcome)
    _save(ctx, editor, output_path)


@main.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.pass_context
def flip(ctx, input_path: str, output_path: str):
    """Mirror horizontally."""
    editor = _build_editor(ctx)
    _open(editor, input_path)
    for outcome in asyncio.run(_apply_all(editor, ['flip'])):
        _report(ctx, outcome)
    _save(ctx, editor, output_path)


@main.command()
@click.argument('original_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('edited_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.option('--position', '-p', type=float, default=50.0, help='Split position in percent (0-100)')
@click.option('--divider', type=int, default=0, help='Width of the divider line in pixels')
@click.pass_context
def compare(ctx, original_path: str, edited_path: str, output_path: str,
            position: float = 50.0, divider: int = 0):
    """Render a before/after split of two images."""
    try:
        original = load_image(original_path)
        edited = load_image(edited_path)
        frame = render_comparison(original, edited, position, divider)
        save_image(frame, output_path)
    except EditorError as e:
        raise click.ClickException(f"{e.title}: {e}")

    if not ctx.obj.get('quiet'):
        click.echo(f"💾 Saved comparison to {output_path}")


@main.command()
@click.argument('directory', type=click.Path(exists=True, file_okay=False, dir_okay=True))
@click.argument('output_dir', type=click.Path(file_okay=False, dir_okay=True))
@click.argument('effect_ids', nargs=-1, required=True)
@click.pass_context
def batch(ctx, directory: str, output_dir: str, effect_ids):
    """
    Apply the same effects to every image in a directory.

    The directory structure is preserved under OUTPUT_DIR.
    """
    from tqdm import tqdm

    quiet = ctx.obj.get('quiet', False)
    images = find_images(directory)
    if not images:
        click.echo("❌ No images found in directory", err=True)
        return

    base = Path(directory)
    output_base = Path(output_dir)
    failures = 0

    for path in tqdm(images, desc="Applying effects", disable=quiet):
        editor = _build_editor(ctx)
        try:
            editor.load(load_image(path))
            asyncio.run(_apply_all(editor, list(effect_ids)))
            save_image(editor.session.current_buffer(), output_base / path.relative_to(base))
        except (EditorError, click.ClickException) as e:
            failures += 1
            logger.error(f"Failed to process {path}: {e}")

    if not quiet:
        click.echo(f"🎉 Processed {len(images) - failures}/{len(images)} images into {output_base}")
    if failures:
        raise click.ClickException(f"{failures} image(s) could not be processed")


@main.command()
def version():
    """Show Photool version information."""
    click.echo(f"Photool v{__version__}")
    click.echo("Raster photo editor core")


if __name__ == '__main__':
    main()
