"""Font I/O layer for glyphpack.

This module handles converting SVG icons into fonttools glyphs and
serializing the assembled font into every delivered format.

Key responsibilities:
- Parse SVG icons and fit them to the em box
- Convert cubic outlines to TrueType quadratics
- Serialize TTF/WOFF/WOFF2 through fonttools flavors
- Write Embedded-OpenType and SVG-font files

Key functions:
- svg_to_glyph: SVG document to TrueType glyph
- serialize_font: TTFont to bytes with an optional flavor
- build_eot: TrueType data to EOT container
- build_svg_font: TTFont to SVG font document
"""

from glyphpack.io.svg import GlyphOutline, read_viewbox, svg_to_glyph, svg_transform
from glyphpack.io.writer import build_eot, build_svg_font, serialize_font

__all__ = [
    "GlyphOutline",
    "build_eot",
    "build_svg_font",
    "read_viewbox",
    "serialize_font",
    "svg_to_glyph",
    "svg_transform",
]
