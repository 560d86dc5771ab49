"""Glyph assets, mappings and synthesis requests.

These are the plain values that flow between the pipeline stages. They
know nothing about HTTP or the filesystem.
"""

from dataclasses import dataclass, field
from enum import Enum


class FontFormat(str, Enum):
    """Output font format; the value doubles as the file extension."""

    TTF = "ttf"
    WOFF = "woff"
    WOFF2 = "woff2"
    EOT = "eot"
    SVG = "svg"

    @property
    def extension(self) -> str:
        """File extension including the leading dot."""
        return f".{self.value}"


@dataclass(frozen=True)
class GlyphAsset:
    """An uploaded vector image held by the glyph store.

    Attributes:
        asset_id: Opaque unique identifier (uuid4 string)
        original_name: Filename as supplied by the client, normalized to text
        storage_name: Name under which the store keeps the content
        content: Raw SVG bytes
    """

    asset_id: str
    original_name: str
    storage_name: str
    content: bytes = field(repr=False)

    def text(self) -> str:
        """Decode the SVG content as UTF-8 text."""
        return self.content.decode("utf-8", errors="replace")


@dataclass(frozen=True)
class GlyphMapping:
    """Binds a stored asset to a target character.

    Attributes:
        file_id: Identifier of a GlyphAsset
        char: Target character (one Unicode code point)
    """

    file_id: str
    char: str


@dataclass
class SynthesisRequest:
    """One font synthesis job.

    Attributes:
        font_name: Free-form font name, also used for output filenames
        mappings: Ordered glyph mappings
    """

    font_name: str
    mappings: list[GlyphMapping] = field(default_factory=list)


@dataclass(frozen=True)
class ResolvedGlyph:
    """A validated mapping with its asset content loaded."""

    char: str
    asset: GlyphAsset

    def to_pair(self) -> tuple[str, str]:
        """Return the ``(char, svg_text)`` pair handed to the synthesizer."""
        return self.char, self.asset.text()
