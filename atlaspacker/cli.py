"""
atlaspacker CLI - Command-line interface for packing texture atlases
"""

import click
import logging
import sys
from pathlib import Path
from typing import List, Tuple

from PIL import Image, UnidentifiedImageError
from pydantic import ValidationError

from atlaspacker import AtlasPacker, PackConfig, PackMethod, TextureAtlas
from atlaspacker.config import DEFAULT_MAX_SIZE, DEFAULT_PADDING
from atlaspacker.exceptions import AtlasFileError, PackError

IMAGE_EXTENSIONS = {'.png', '.jpg', '.jpeg', '.bmp', '.gif', '.tga', '.webp'}


def collect_image_paths(inputs) -> List[Path]:
    """Expand files and directories into a sorted list of image files."""
    paths = []
    for item in inputs:
        path = Path(item)
        if path.is_dir():
            paths.extend(sorted(p for p in path.iterdir() if p.suffix.lower() in IMAGE_EXTENSIONS))
        elif path.exists():
            paths.append(path)
        else:
            raise FileNotFoundError(f"Input not found: {item}")
    return paths


def read_image_size(path: Path) -> Tuple[int, int]:
    """Read width/height from the image header without decoding pixels."""
    with Image.open(path) as img:
        return img.size


@click.group()
@click.version_option(package_name='atlaspacker')
def cli():
    """
    atlaspacker - Pack image rectangles into a texture atlas layout.

    Examples:
        atlaspacker pack sprites/ -o sprites.json
        atlaspacker show sprites.json
    """
    pass


@cli.command()
@click.argument('inputs', nargs=-1, required=True)
@click.option('-o', '--output', required=True, help='Output atlas definition (.json)')
@click.option('--name', default=None, help='Atlas name (default: output file stem)')
@click.option('--texture-path', default=None, help='Texture path to record in the atlas file')
@click.option('--max-width', default=DEFAULT_MAX_SIZE, show_default=True, type=int, help='Maximum atlas width')
@click.option('--max-height', default=DEFAULT_MAX_SIZE, show_default=True, type=int, help='Maximum atlas height')
@click.option('--padding', default=DEFAULT_PADDING, show_default=True, type=int, help='Trailing padding per image')
@click.option('--method', default='shelf', show_default=True,
              type=click.Choice([m.value for m in PackMethod]), help='Packing algorithm')
@click.option('--pot/--no-pot', default=True, show_default=True, help='Round atlas size to powers of two')
@click.option('--allow-rotation', is_flag=True, help='Allow 90 degree rotation (not used yet)')
@click.option('--verbose', '-v', is_flag=True, help='Show packing details')
def pack(inputs, output, name, texture_path, max_width, max_height, padding, method, pot, allow_rotation, verbose):
    """
    Pack images into an atlas definition.

    INPUTS are image files or directories of images. Only image sizes are
    read; no atlas texture is written.

    Examples:
        atlaspacker pack icons/ -o icons.json
        atlaspacker pack a.png b.png -o ab.json --padding 0 --no-pot
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        config = PackConfig(
            max_width=max_width,
            max_height=max_height,
            padding=padding,
            method=method,
            power_of_two=pot,
            allow_rotation=allow_rotation,
        )
        packer = AtlasPacker(config)

        for path in collect_image_paths(inputs):
            width, height = read_image_size(path)
            if not packer.add_image(path.stem, width, height, payload=str(path)):
                click.secho(f"Skipping {path}: duplicate name or invalid size", fg='yellow', err=True)
            elif verbose:
                click.echo(f"  {path.stem}: {width}x{height}")

        packer.pack()

        atlas_name = name or Path(output).stem
        atlas = packer.require_atlas(atlas_name, texture_path=texture_path)
        atlas.save(output)

        click.echo(f"Packed {atlas.region_count} images into {atlas.width}x{atlas.height} "
                   f"({packer.efficiency:.1%} efficiency)")
        click.secho(f"✓ Success! Atlas saved to {output}", fg='green')

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except UnidentifiedImageError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except ValidationError as e:
        click.secho(f"Invalid options: {e}", fg='red', err=True)
        sys.exit(1)
    except PackError as e:
        click.secho(f"Pack Error: {e}", fg='red', err=True)
        sys.exit(1)


@cli.command()
@click.argument('atlas_path')
def show(atlas_path):
    """
    Show the regions of an atlas definition.

    Example:
        atlaspacker show sprites.json
    """
    try:
        if not Path(atlas_path).exists():
            raise FileNotFoundError(f"Atlas file not found: {atlas_path}")

        atlas = TextureAtlas.load(atlas_path)

        click.echo(f"Atlas: {atlas.name} ({atlas.width}x{atlas.height}, {atlas.region_count} regions)")
        if atlas.texture_path:
            click.echo(f"Texture: {atlas.texture_path}")
        for region in atlas:
            flag = " [rotated]" if region.rotated else ""
            click.echo(f"  {region.name}: {region.width}x{region.height} at ({region.x}, {region.y}){flag}")

    except FileNotFoundError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)
    except AtlasFileError as e:
        click.secho(f"Error: {e}", fg='red', err=True)
        sys.exit(1)


def main():
    """Entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
