"""Font serializers for the formats fonttools does not write directly.

TrueType, WOFF and WOFF2 come straight out of ``TTFont.save`` with the
matching ``flavor``. Embedded-OpenType is the TrueType data behind a small
little-endian header, and the SVG font is rebuilt from the glyph outlines.
"""

import struct
from io import BytesIO
from xml.etree import ElementTree as ET

from fontTools.pens.svgPathPen import SVGPathPen
from fontTools.ttLib import TTFont

EOT_VERSION = 0x00020001
EOT_MAGIC = 0x504C
EOT_DEFAULT_CHARSET = 1

# Name table IDs copied into the EOT header
NAME_ID_FAMILY = 1
NAME_ID_SUBFAMILY = 2
NAME_ID_FULL_NAME = 4
NAME_ID_VERSION = 5

_PANOSE_FIELDS = (
    "bFamilyType",
    "bSerifStyle",
    "bWeight",
    "bProportion",
    "bContrast",
    "bStrokeVariation",
    "bArmStyle",
    "bLetterForm",
    "bMidline",
    "bXHeight",
)

SVG_NS = "http://www.w3.org/2000/svg"
SVG_PREAMBLE = (
    '<?xml version="1.0" standalone="no"?>\n'
    '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n'
)


def serialize_font(font: TTFont, flavor: str | None = None) -> bytes:
    """Save a font to bytes as plain sfnt, ``"woff"`` or ``"woff2"``.

    Args:
        font: Font to serialize
        flavor: fonttools flavor, None for a bare TrueType file

    Returns:
        Serialized font data
    """
    buf = BytesIO()
    font.flavor = flavor
    try:
        font.save(buf)
    finally:
        font.flavor = None
    return buf.getvalue()


def _name(font: TTFont, name_id: int) -> bytes:
    value = font["name"].getDebugName(name_id) or ""
    return value.encode("utf-16-le")


def _panose_bytes(os2: object) -> bytes:
    panose = getattr(os2, "panose", None)
    if panose is None:
        return bytes(10)
    return bytes(getattr(panose, field, 0) for field in _PANOSE_FIELDS)


def build_eot(ttf_data: bytes) -> bytes:
    """Wrap TrueType data in an Embedded-OpenType (version 2.1) container.

    Args:
        ttf_data: Complete TrueType font file

    Returns:
        EOT file data (uncompressed, unobfuscated)
    """
    font = TTFont(BytesIO(ttf_data))
    os2 = font["OS/2"]
    head = font["head"]

    fixed = struct.pack(
        "<10sBBLHH4L2LL4LH",
        _panose_bytes(os2),
        EOT_DEFAULT_CHARSET,
        1 if os2.fsSelection & 0x01 else 0,
        os2.usWeightClass,
        os2.fsType,
        EOT_MAGIC,
        os2.ulUnicodeRange1,
        os2.ulUnicodeRange2,
        os2.ulUnicodeRange3,
        os2.ulUnicodeRange4,
        getattr(os2, "ulCodePageRange1", 0),
        getattr(os2, "ulCodePageRange2", 0),
        head.checkSumAdjustment,
        0,
        0,
        0,
        0,
        0,
    )

    names = b""
    for name_id in (NAME_ID_FAMILY, NAME_ID_SUBFAMILY, NAME_ID_VERSION, NAME_ID_FULL_NAME):
        encoded = _name(font, name_id)
        names += struct.pack("<H", len(encoded)) + encoded + struct.pack("<H", 0)
    # Empty RootString (version 0x00020001 only)
    names += struct.pack("<H", 0)

    font.close()

    # EOTSize, FontDataSize, Version and Flags precede the fixed block
    eot_size = 16 + len(fixed) + len(names) + len(ttf_data)
    prefix = struct.pack("<LLLL", eot_size, len(ttf_data), EOT_VERSION, 0)
    return prefix + fixed + names + ttf_data


def build_svg_font(font: TTFont) -> bytes:
    """Render every encoded glyph into an SVG 1.1 ``<font>`` document.

    Args:
        font: Built TrueType font

    Returns:
        UTF-8 encoded SVG document
    """
    units_per_em = font["head"].unitsPerEm
    hhea = font["hhea"]
    hmtx = font["hmtx"]
    family = font["name"].getDebugName(NAME_ID_FAMILY) or "icons"
    glyph_set = font.getGlyphSet()

    root = ET.Element("svg", {"xmlns": SVG_NS})
    defs = ET.SubElement(root, "defs")
    font_el = ET.SubElement(defs, "font", {"id": family, "horiz-adv-x": str(units_per_em)})
    ET.SubElement(
        font_el,
        "font-face",
        {
            "font-family": family,
            "font-weight": "400",
            "font-stretch": "normal",
            "units-per-em": str(units_per_em),
            "ascent": str(hhea.ascent),
            "descent": str(hhea.descent),
        },
    )
    ET.SubElement(font_el, "missing-glyph", {"horiz-adv-x": str(units_per_em)})

    for codepoint, glyph_name in sorted(font.getBestCmap().items()):
        pen = SVGPathPen(glyph_set)
        glyph_set[glyph_name].draw(pen)
        ET.SubElement(
            font_el,
            "glyph",
            {
                "glyph-name": glyph_name,
                "unicode": chr(codepoint),
                "horiz-adv-x": str(hmtx[glyph_name][0]),
                "d": pen.getCommands(),
            },
        )

    body = ET.tostring(root, encoding="unicode")
    return (SVG_PREAMBLE + body + "\n").encode("utf-8")
