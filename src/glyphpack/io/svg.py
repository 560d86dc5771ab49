"""SVG icon to TrueType glyph conversion.

Icons are scaled so their viewBox height fills the font's ascent-to-descent
band, flipped from SVG's y-down space into font y-up space, and converted
from cubic to quadratic curves on the way into a TTGlyphPen.
"""

import re
from dataclasses import dataclass
from typing import Any
from xml.etree import ElementTree as ET

from fontTools.misc.transform import Transform
from fontTools.pens.cu2quPen import Cu2QuPen
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.svgLib import SVGPath

from glyphpack.exceptions import InvalidSvgError

# Max deviation (font units) allowed when approximating cubics with quadratics
CU2QU_MAX_ERR = 1.0

_LENGTH = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*(px)?\s*$")


@dataclass
class GlyphOutline:
    """A converted glyph ready for FontBuilder.

    Attributes:
        glyph: fonttools TrueType glyph object
        advance_width: Horizontal advance in font units
        left_side_bearing: Minimum x of the outline in font units
    """

    glyph: Any
    advance_width: int
    left_side_bearing: int


def _parse_length(value: str | None) -> float | None:
    """Parse a unitless or px SVG length; other units are ignored."""
    if value is None:
        return None
    match = _LENGTH.match(value)
    if match is None:
        return None
    return float(match.group(1))


def read_viewbox(root: ET.Element, fallback: float) -> tuple[float, float, float, float]:
    """Determine the drawing box of an SVG document.

    Uses ``viewBox`` when present, then ``width``/``height``, then a square
    of ``fallback`` units.

    Args:
        root: Parsed ``<svg>`` element
        fallback: Edge length used when the document declares no size

    Returns:
        ``(min_x, min_y, width, height)``

    Raises:
        InvalidSvgError: If the viewBox is malformed or has no area
    """
    viewbox = root.get("viewBox")
    if viewbox:
        parts = re.split(r"[\s,]+", viewbox.strip())
        try:
            min_x, min_y, width, height = (float(p) for p in parts)
        except ValueError as e:
            raise InvalidSvgError(f"malformed viewBox {viewbox!r}") from e
    else:
        min_x = min_y = 0.0
        width = _parse_length(root.get("width")) or fallback
        height = _parse_length(root.get("height")) or fallback

    if width <= 0 or height <= 0:
        raise InvalidSvgError(f"viewBox has no area ({width} x {height})")

    return min_x, min_y, width, height


def svg_transform(
    viewbox: tuple[float, float, float, float],
    ascent: int,
    descent: int,
) -> tuple[Transform, float]:
    """Build the SVG-to-font transform for a viewBox.

    Args:
        viewbox: ``(min_x, min_y, width, height)`` in SVG units
        ascent: Font ascender (font units)
        descent: Font descender (font units, negative)

    Returns:
        Tuple of the affine transform and the scale factor applied
    """
    min_x, min_y, _width, height = viewbox
    scale = (ascent - descent) / height
    transform = Transform(scale, 0, 0, -scale, -min_x * scale, ascent + min_y * scale)
    return transform, scale


def svg_to_glyph(
    svg_data: str | bytes,
    units_per_em: int,
    ascent: int,
    descent: int,
) -> GlyphOutline:
    """Convert an SVG document to a TrueType glyph.

    Args:
        svg_data: SVG document as text or bytes
        units_per_em: Font units per em (fallback drawing size)
        ascent: Font ascender
        descent: Font descender (negative)

    Returns:
        GlyphOutline with glyph, advance width and left side bearing

    Raises:
        InvalidSvgError: If the document is not parseable SVG, has a bad
            viewBox, contains malformed path data or draws nothing
    """
    data = svg_data.encode("utf-8") if isinstance(svg_data, str) else svg_data

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise InvalidSvgError(f"not well-formed XML ({e})") from e

    if root.tag.rsplit("}", 1)[-1] != "svg":
        raise InvalidSvgError(f"root element is <{root.tag}>, expected <svg>")

    viewbox = read_viewbox(root, fallback=float(units_per_em))
    transform, scale = svg_transform(viewbox, ascent, descent)

    tt_pen = TTGlyphPen(None)
    pen = Cu2QuPen(tt_pen, max_err=CU2QU_MAX_ERR, reverse_direction=True)
    try:
        SVGPath.fromstring(data, transform=transform).draw(pen)
        glyph = tt_pen.glyph()
    except (ValueError, TypeError, IndexError, AssertionError) as e:
        raise InvalidSvgError(f"unreadable path data ({e})") from e

    if glyph.numberOfContours == 0:
        raise InvalidSvgError("no drawable outlines")

    advance_width = max(1, round(viewbox[2] * scale))
    left_side_bearing = min(x for x, _ in glyph.coordinates)

    return GlyphOutline(
        glyph=glyph,
        advance_width=advance_width,
        left_side_bearing=int(left_side_bearing),
    )
