"""Font synthesis: (character, SVG) pairs in, font files out.

The pipeline only ever talks to the ``FontSynthesizer`` protocol, so the
orchestration can be exercised with a test double. ``FontToolsSynthesizer``
is the production implementation.
"""

import re
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen
from fontTools.ttLib import TTFont

from glyphpack.config import FontConfig
from glyphpack.domain import FontFormat
from glyphpack.exceptions import GlyphPackError, SynthesisError
from glyphpack.io import build_eot, build_svg_font, serialize_font, svg_to_glyph

NOTDEF = ".notdef"

_FLAVORS: dict[FontFormat, str | None] = {
    FontFormat.TTF: None,
    FontFormat.WOFF: "woff",
    FontFormat.WOFF2: "woff2",
}


@runtime_checkable
class FontSynthesizer(Protocol):
    """Builds binary fonts from SVG glyphs."""

    def synthesize(
        self,
        font_name: str,
        glyphs: Sequence[tuple[str, str]],
        formats: Sequence[FontFormat],
    ) -> dict[FontFormat, bytes]:
        """Build one font and serialize it in every requested format.

        Args:
            font_name: Family name of the font
            glyphs: ``(char, svg_text)`` pairs, one per glyph
            formats: Output formats to produce

        Returns:
            Mapping of format to file content

        Raises:
            SynthesisError: If any glyph or format cannot be produced
        """
        ...


def glyph_name_for(codepoint: int) -> str:
    """AGL-style name for a code point: ``uniE001`` or ``u1F600``."""
    if codepoint <= 0xFFFF:
        return f"uni{codepoint:04X}"
    return f"u{codepoint:05X}"


def postscript_name(font_name: str) -> str:
    """PostScript-safe name: printable ASCII without spaces, at most 63 chars."""
    cleaned = re.sub(r"[^A-Za-z0-9-]", "", font_name)[:63]
    return cleaned or "IconFont"


class FontToolsSynthesizer:
    """Synthesizes icon fonts with fonttools.

    Example:
        synthesizer = FontToolsSynthesizer()
        files = synthesizer.synthesize(
            "demo",
            [("\\ue001", svg_text)],
            [FontFormat.TTF, FontFormat.WOFF2],
        )
    """

    def __init__(self, config: FontConfig | None = None) -> None:
        """Initialize the synthesizer.

        Args:
            config: Font metrics; defaults to FontConfig()
        """
        self.config = config if config is not None else FontConfig()

    def build_font(self, font_name: str, glyphs: Sequence[tuple[str, str]]) -> TTFont:
        """Assemble a TrueType font from SVG glyphs.

        Args:
            font_name: Family name of the font
            glyphs: ``(char, svg_text)`` pairs

        Returns:
            Built fonttools TTFont

        Raises:
            SynthesisError: On an invalid or repeated character
            InvalidSvgError: On unusable SVG content
        """
        cfg = self.config
        glyph_order = [NOTDEF]
        tt_glyphs = {NOTDEF: TTGlyphPen(None).glyph()}
        metrics = {NOTDEF: (cfg.units_per_em, 0)}
        cmap: dict[int, str] = {}

        for char, svg_text in glyphs:
            if len(char) != 1:
                raise SynthesisError("character must be a single code point", char=char)

            codepoint = ord(char)
            if codepoint in cmap:
                raise SynthesisError("character mapped more than once", char=char)

            try:
                outline = svg_to_glyph(
                    svg_text,
                    units_per_em=cfg.units_per_em,
                    ascent=cfg.ascent,
                    descent=cfg.descent,
                )
            except SynthesisError as e:
                raise type(e)(e.reason, char=char) from e

            name = glyph_name_for(codepoint)
            glyph_order.append(name)
            tt_glyphs[name] = outline.glyph
            metrics[name] = (outline.advance_width, outline.left_side_bearing)
            cmap[codepoint] = name

        ps_name = postscript_name(font_name)

        fb = FontBuilder(cfg.units_per_em, isTTF=True)
        fb.setupGlyphOrder(glyph_order)
        fb.setupCharacterMap(cmap)
        fb.setupGlyf(tt_glyphs)
        fb.setupHorizontalMetrics(metrics)
        fb.setupHorizontalHeader(ascent=cfg.ascent, descent=cfg.descent)
        fb.setupNameTable(
            {
                "familyName": font_name,
                "styleName": "Regular",
                "uniqueFontIdentifier": f"{ps_name}-Regular",
                "fullName": font_name,
                "psName": ps_name,
                "version": "Version 1.000",
            },
            mac=False,
        )
        fb.setupOS2(
            sTypoAscender=cfg.ascent,
            sTypoDescender=cfg.descent,
            sTypoLineGap=0,
            usWinAscent=cfg.ascent,
            usWinDescent=-cfg.descent,
        )
        fb.setupPost()

        return fb.font

    def synthesize(
        self,
        font_name: str,
        glyphs: Sequence[tuple[str, str]],
        formats: Sequence[FontFormat],
    ) -> dict[FontFormat, bytes]:
        if not glyphs:
            raise SynthesisError("no glyphs supplied")

        try:
            font = self.build_font(font_name, glyphs)

            outputs: dict[FontFormat, bytes] = {}
            ttf_data: bytes | None = None
            for fmt in formats:
                if fmt in _FLAVORS:
                    outputs[fmt] = serialize_font(font, _FLAVORS[fmt])
                elif fmt == FontFormat.EOT:
                    if ttf_data is None:
                        ttf_data = serialize_font(font)
                    outputs[fmt] = build_eot(ttf_data)
                elif fmt == FontFormat.SVG:
                    outputs[fmt] = build_svg_font(font)
                else:
                    raise SynthesisError(f"unsupported format {fmt!r}")
        except GlyphPackError:
            raise
        except Exception as e:
            raise SynthesisError(str(e) or type(e).__name__) from e

        return outputs
