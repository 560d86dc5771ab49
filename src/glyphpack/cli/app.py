"""CLI application entry point for glyphpack.

This module provides the command-line interface using Typer:

- ``glyphpack serve``: run the HTTP service
- ``glyphpack build``: build a font bundle from local SVG files
- ``glyphpack cleanup``: purge the upload area of a data directory
"""

import shutil
import tempfile
import time
import zipfile
from pathlib import Path
from typing import Annotated

import typer

from glyphpack import __version__
from glyphpack.cli.output import (
    console,
    print_cleanup_summary,
    print_error,
    print_header,
    print_mappings,
    print_server_info,
    print_step,
    print_success,
)
from glyphpack.config import (
    GlyphPackSettings,
    LoggingConfig,
    ServerConfig,
    StorageConfig,
)
from glyphpack.core import (
    BulkCleanup,
    FontBundlePipeline,
    FontToolsSynthesizer,
    UploadCandidate,
)
from glyphpack.domain import GlyphMapping, SynthesisRequest
from glyphpack.exceptions import GlyphPackError
from glyphpack.storage import FileSystemGlyphStore, InMemoryGlyphStore, WorkingArea
from glyphpack.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="glyphpack",
    help="Turn SVG icons into a zipped TTF/WOFF/WOFF2/EOT/SVG icon font bundle.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Glyphpack[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Glyphpack icon font service."""


def parse_codepoint(value: str) -> str:
    """Parse a ``--char`` value into a single character.

    Accepts ``U+E001``, ``0xE001`` or a literal character.

    Args:
        value: Raw option value

    Returns:
        The character

    Raises:
        typer.BadParameter: If the value names no single code point
    """
    text = value.strip()
    lowered = text.lower()
    if lowered.startswith(("u+", "0x")):
        try:
            codepoint = int(text[2:], 16)
            return chr(codepoint)
        except (ValueError, OverflowError) as e:
            raise typer.BadParameter(f"Invalid code point: {value}") from e
    if len(text) == 1:
        return text
    raise typer.BadParameter(f"Expected one character or U+XXXX, got {value!r}")


@app.command()
def serve(
    host: Annotated[
        str,
        typer.Option("--host", help="Bind address"),
    ] = "0.0.0.0",
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Bind port", envvar="PORT", min=1, max=65535),
    ] = 8888,
    data_dir: Annotated[
        Path,
        typer.Option("--data-dir", "-d", help="Directory holding uploads/ and temp/"),
    ] = Path("."),
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "INFO",
) -> None:
    """Run the glyphpack HTTP service."""
    import uvicorn

    from glyphpack.api import create_app

    settings = GlyphPackSettings(
        storage=StorageConfig(data_dir=data_dir),
        server=ServerConfig(host=host, port=port),
        logging=LoggingConfig(log_file=log_file, log_level=log_level),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
    )

    print_header(__version__)
    print_server_info(host, port, str(data_dir))

    uvicorn.run(create_app(settings), host=host, port=port, log_level=log_level.lower())


@app.command()
def build(
    svgs: Annotated[
        list[Path],
        typer.Argument(help="SVG icon files", show_default=False),
    ],
    chars: Annotated[
        list[str] | None,
        typer.Option(
            "--char",
            "-c",
            help="Character per SVG, in order (U+E001, 0xE001 or a literal character)",
        ),
    ] = None,
    start: Annotated[
        str,
        typer.Option("--start", help="First code point when --char is omitted"),
    ] = "U+E001",
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Font name"),
    ] = "custom-font",
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output archive (default: {name}.zip)"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Build an icon font bundle from local SVG files.

    Example:
        glyphpack build home.svg search.svg --name demo

    This writes demo.zip with home.svg at U+E001 and search.svg at U+E002.
    """
    configure_logging(console_level=log_level, quiet=quiet)

    for path in svgs:
        if not path.is_file():
            print_error(f"Input file not found: {path}")
            raise typer.Exit(code=1)

    if chars:
        if len(chars) != len(svgs):
            print_error(
                f"Got {len(chars)} --char values for {len(svgs)} SVG files",
                details="Pass one --char per file, or none to number from --start.",
            )
            raise typer.Exit(code=1)
        targets = [parse_codepoint(c) for c in chars]
    else:
        first = ord(parse_codepoint(start))
        targets = [chr(first + i) for i in range(len(svgs))]

    if not quiet:
        print_header(__version__)
        print_step("Mapping icons")
        print_mappings([(p.name, f"U+{ord(c):04X}") for p, c in zip(svgs, targets)])

    settings = GlyphPackSettings()
    output_path = output if output is not None else Path(f"{name}.zip")
    start_time = time.time()

    try:
        with tempfile.TemporaryDirectory(prefix="glyphpack-") as tmp:
            pipeline = FontBundlePipeline(
                store=InMemoryGlyphStore(),
                synthesizer=FontToolsSynthesizer(settings.font),
                area=WorkingArea(Path(tmp)),
                settings=settings,
            )
            assets = pipeline.upload(
                [UploadCandidate(p.name, None, p.read_bytes()) for p in svgs]
            )
            request = SynthesisRequest(
                font_name=name,
                mappings=[GlyphMapping(a.asset_id, c) for a, c in zip(assets, targets)],
            )

            if not quiet:
                print_step("Synthesizing")

            with pipeline.build(request) as lease:
                shutil.copyfile(lease.archive_path, output_path)
    except GlyphPackError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OSError as e:
        print_error(f"Could not write {output_path}: {e}")
        raise typer.Exit(code=1)

    if not quiet:
        with zipfile.ZipFile(output_path) as zf:
            entries = zf.namelist()
        print_success(
            output_path=str(output_path),
            size_bytes=output_path.stat().st_size,
            entries=entries,
            total_time_s=time.time() - start_time,
        )


@app.command()
def cleanup(
    data_dir: Annotated[
        Path,
        typer.Option("--data-dir", "-d", help="Directory holding uploads/"),
    ] = Path("."),
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
) -> None:
    """Delete every uploaded SVG in a data directory."""
    configure_logging(console_level=log_level)

    settings = GlyphPackSettings(storage=StorageConfig(data_dir=data_dir))
    store = FileSystemGlyphStore(settings.storage.uploads_dir)
    report = BulkCleanup(store).run()

    print_cleanup_summary(report.removed, report.failed)
    if not report.success:
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
