"""Command-line interface for glyphpack.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- Run the HTTP service
- Build a font bundle from local SVG files
- Purge the upload area
"""

from glyphpack.cli.app import cli, main

__all__ = ["cli", "main"]
