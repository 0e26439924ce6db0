"""
Font Selection CLI
==================

Command line access to the configured font sources: list installed families and
faces, select the best face for a family list, or look a face up by PostScript name.
"""

import logging
import sys
from pathlib import Path

import click

from fontmatch.core.config import FontMatchConfig
from fontmatch.core.exceptions import FontMatchError
from fontmatch.fonts.family_name import parse_family_list
from fontmatch.fonts.handle import Handle, PathHandle
from fontmatch.fonts.properties import Properties, Style
from fontmatch.fonts.utils import describe_handle
from fontmatch.selection import FontSelector

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _format_handle(handle: Handle) -> str:
    if isinstance(handle, PathHandle):
        return f"{handle.path}\t{handle.font_index}"
    return f"<memory>\t{handle.font_index}"


def _get_selector(ctx: click.Context) -> FontSelector:
    obj = ctx.ensure_object(dict)
    if "selector" not in obj:
        obj["selector"] = FontSelector.from_config(obj["config"])
    return obj["selector"]


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration YAML file",
)
@click.option(
    "--font-dir",
    "-d",
    "font_dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Extra font directory, searched before system fonts (repeatable)",
)
@click.option("--no-system", is_flag=True, help="Do not query the platform font catalog")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.pass_context
def cli(ctx, config, font_dirs, no_system, verbose):
    """Font discovery and CSS-style font matching."""
    logging.basicConfig(level=logging.WARNING, format=LOG_FORMAT)

    try:
        settings = FontMatchConfig.from_env_and_yaml(yaml_path=config)
    except FontMatchError as e:
        raise click.ClickException(str(e)) from e

    updates = {}
    if font_dirs:
        updates["font_directories"] = [*font_dirs, *settings.font_directories]
    if no_system:
        updates["include_system_fonts"] = False
    if updates:
        settings = settings.model_copy(update=updates)

    settings.configure_logging()
    if verbose:
        logging.getLogger("fontmatch").setLevel(logging.DEBUG)

    ctx.ensure_object(dict)["config"] = settings


@cli.command(name="list-families")
@click.pass_context
def list_families(ctx):
    """List every available font family."""
    try:
        families = _get_selector(ctx).all_families()
    except FontMatchError as e:
        logger.exception(f"Listing families failed: {e}")
        sys.exit(1)

    for family in families:
        click.echo(family)


@cli.command(name="list-fonts")
@click.option("--details", is_flag=True, help="Read each face and print its names")
@click.pass_context
def list_fonts(ctx, details):
    """List every available face as path and collection index."""
    try:
        handles = _get_selector(ctx).all_fonts()
    except FontMatchError as e:
        logger.exception(f"Listing fonts failed: {e}")
        sys.exit(1)

    for handle in handles:
        if not details:
            click.echo(_format_handle(handle))
            continue
        try:
            font = describe_handle(handle)
        except FontMatchError as e:
            logger.warning(f"Skipping unreadable face {handle}: {e}")
            continue
        click.echo(f"{_format_handle(handle)}\t{font.postscript_name or ''}\t{font}")


@cli.command(name="match")
@click.argument("families")
@click.option(
    "--style",
    "-s",
    type=click.Choice([style.value for style in Style]),
    default=Style.NORMAL.value,
    show_default=True,
    help="Desired style",
)
@click.option(
    "--weight", "-w", type=float, default=400.0, show_default=True, help="Desired weight"
)
@click.option(
    "--stretch",
    type=float,
    default=1.0,
    show_default=True,
    help="Desired width as a fraction of normal (1.0 = 100%)",
)
@click.pass_context
def match(ctx, families, style, weight, stretch):
    """Select the best face for FAMILIES, e.g. "Helvetica Neue, Arial, sans-serif"."""
    family_names = parse_family_list(families)
    if not family_names:
        raise click.BadParameter("no family names given", param_hint="FAMILIES")

    try:
        properties = Properties(style=Style(style), weight=weight, stretch=stretch)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    try:
        handle = _get_selector(ctx).select(family_names, properties)
        font = describe_handle(handle)
    except FontMatchError as e:
        logger.exception(f"Font matching failed: {e}")
        sys.exit(1)

    click.echo(f"Family:          {font.family}")
    click.echo(f"PostScript name: {font.postscript_name or '-'}")
    click.echo(f"Properties:      {font.properties}")
    click.echo(f"Path:            {font.path or '<memory>'}")
    click.echo(f"Index:           {font.font_index}")


@cli.command(name="postscript")
@click.argument("postscript_name")
@click.pass_context
def postscript(ctx, postscript_name):
    """Find the face whose PostScript name is exactly POSTSCRIPT_NAME."""
    try:
        handle = _get_selector(ctx).select_by_postscript_name(postscript_name)
    except FontMatchError as e:
        logger.exception(f"PostScript lookup failed: {e}")
        sys.exit(1)

    click.echo(_format_handle(handle))


if __name__ == "__main__":
    cli()
