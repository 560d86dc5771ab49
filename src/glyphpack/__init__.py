"""Glyphpack - Turn SVG icons into a downloadable icon font bundle.

Glyphpack is a small web service (and CLI) that accepts a batch of SVG
icons, lets the caller bind each icon to a character, and synthesizes an
icon font in TrueType, WOFF, WOFF2, Embedded-OpenType and SVG-font formats,
delivered as a single ZIP archive.

Example:
    $ glyphpack serve --port 8888

Then upload icons to ``POST /uploads`` and request ``POST /generate-font``.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
