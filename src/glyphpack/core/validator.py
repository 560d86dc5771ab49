"""Mapping validation: every mapping must resolve before synthesis starts."""

from collections.abc import Sequence

from glyphpack.domain import GlyphMapping, ResolvedGlyph
from glyphpack.exceptions import (
    DuplicateCharacterError,
    GlyphNotFoundError,
    InvalidCharacterError,
    NoMappingsError,
)
from glyphpack.storage import GlyphStore

# The only C0 controls XML 1.0 allows; the SVG font writes characters verbatim
_XML_WHITESPACE = frozenset("\t\n\r")


def is_font_character(char: str) -> bool:
    """Check that ``char`` is one code point every output format can encode."""
    if len(char) != 1:
        return False
    codepoint = ord(char)
    if codepoint < 0x20:
        return char in _XML_WHITESPACE
    if 0xD800 <= codepoint <= 0xDFFF:
        return False
    return codepoint not in (0xFFFE, 0xFFFF)


class MappingValidator:
    """Resolves glyph mappings against the glyph store, failing fast.

    Asset content is loaded here, so later stages never go back to the
    store for a mapping that has already been validated.
    """

    def __init__(self, store: GlyphStore) -> None:
        self.store = store

    def validate(self, mappings: Sequence[GlyphMapping] | None) -> list[ResolvedGlyph]:
        """Check and resolve every mapping, in order.

        Args:
            mappings: Mappings from the synthesis request

        Returns:
            Resolved glyphs in mapping order

        Raises:
            NoMappingsError: If there are no mappings
            InvalidCharacterError: If a character is not one encodable code point
            DuplicateCharacterError: If two mappings share a character
            GlyphNotFoundError: If a file id does not resolve
        """
        if not mappings:
            raise NoMappingsError()

        resolved: list[ResolvedGlyph] = []
        seen: set[str] = set()

        for mapping in mappings:
            if not is_font_character(mapping.char):
                raise InvalidCharacterError(mapping.char)
            if mapping.char in seen:
                raise DuplicateCharacterError(mapping.char)
            seen.add(mapping.char)

            asset = self.store.get(mapping.file_id)
            if asset is None:
                raise GlyphNotFoundError(mapping.file_id)

            resolved.append(ResolvedGlyph(char=mapping.char, asset=asset))

        return resolved
