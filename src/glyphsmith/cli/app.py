"""CLI application entry point for glyphsmith.

This module provides the command-line interface using Typer: compiling a
stored glyph map to a font and importing a font into a glyph map.
"""

from pathlib import Path
from typing import Annotated

import typer

from glyphsmith import __version__
from glyphsmith.cli.output import (
    console,
    format_file_size,
    print_error,
    print_header,
    print_skipped,
    print_source_info,
    print_step,
    print_success,
)
from glyphsmith.config import GlyphsmithSettings, LoggingConfig
from glyphsmith.exceptions import FontCompileError, FontImportError, GlyphsmithError
from glyphsmith.io import (
    DEFAULT_CHARSET,
    FontCompiler,
    import_font,
    load_glyph_map,
    save_glyph_map,
)
from glyphsmith.utils.logging import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphsmith",
    help="Draw glyphs as vector paths and compile them into OpenType fonts.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphsmith[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Glyphsmith font tools."""
    settings = GlyphsmithSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"settings": settings, "quiet": quiet}


@app.command("compile")
def compile_font(
    ctx: typer.Context,
    glyphs_json: Annotated[
        Path,
        typer.Argument(
            help="Path to a stored glyph map (JSON)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}.otf next to the input)",
        ),
    ] = None,
    name: Annotated[
        str,
        typer.Option(
            "--name",
            "-n",
            help="Font family name",
        ),
    ] = "Glyphsmith",
    spacing: Annotated[
        float,
        typer.Option(
            "--spacing",
            "-s",
            help="Letter spacing added to auto advance widths (font units)",
        ),
    ] = 0.0,
) -> None:
    """Compile a stored glyph map into an OpenType font.

    Example:
        glyphsmith compile glyphs.json --name "My Font"
    """
    settings: GlyphsmithSettings = ctx.obj["settings"]
    quiet: bool = ctx.obj["quiet"]

    if not glyphs_json.is_file():
        print_error(
            f"Input file not found: {glyphs_json}",
            details=f"The file '{glyphs_json}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Loading glyphs")

    try:
        glyphs = load_glyph_map(glyphs_json)
    except (ValueError, KeyError, TypeError) as e:
        print_error(f"Could not read glyph map: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        print_source_info(str(glyphs_json), len(glyphs))
        print_step("Compiling")

    compiler = FontCompiler(settings)
    try:
        data = compiler.compile(glyphs, name, letter_spacing=spacing)
    except FontCompileError as e:
        print_error(f"Could not compile font: {e.reason}")
        raise typer.Exit(code=1)

    output_path = output or glyphs_json.with_name(f"{name.replace(' ', '')}.otf")
    output_path.write_bytes(data)

    if not quiet:
        print_success(str(output_path), format_file_size(len(data)), compiler.stats, "compiled")
        print_skipped(compiler.stats)


@app.command("import")
def import_command(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to a TTF/OTF font file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {font}.glyphs.json)",
        ),
    ] = None,
    chars: Annotated[
        str | None,
        typer.Option(
            "--chars",
            "-c",
            help="Characters to import (default: letters, digits and accents)",
        ),
    ] = None,
) -> None:
    """Import the outlines of a font into a glyph map.

    Example:
        glyphsmith import Roboto-Regular.ttf --chars abc
    """
    settings: GlyphsmithSettings = ctx.obj["settings"]
    quiet: bool = ctx.obj["quiet"]

    if not font.is_file():
        print_error(
            f"Input file not found: {font}",
            details="Please provide a path to a TTF or OTF font file.",
        )
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)
        print_step("Importing outlines")

    try:
        result = import_font(
            font.read_bytes(),
            chars or DEFAULT_CHARSET,
            settings,
            source=str(font),
        )
    except FontImportError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except GlyphsmithError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if not quiet:
        print_source_info(str(font), len(result.glyphs), result.family_name or None)

    output_path = output or font.with_suffix(".glyphs.json")
    save_glyph_map(result.glyphs, output_path)

    if not quiet:
        print_success(
            str(output_path),
            format_file_size(output_path.stat().st_size),
            result.stats,
            "imported",
        )
        print_skipped(result.stats)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
