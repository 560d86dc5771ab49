"""Domain models for glyphpack.

This module contains the values passed between pipeline stages. All models
are plain dataclasses, independent of the web framework, the storage
backend and fonttools.

Key classes:
- FontFormat: Output font format (ttf, woff, woff2, eot, svg)
- GlyphAsset: An uploaded SVG held by the glyph store
- GlyphMapping: Asset identifier bound to a target character
- SynthesisRequest: Font name plus ordered mappings
- ResolvedGlyph: A validated mapping with its asset loaded
- CleanupReport: Outcome of a best-effort deletion sweep
"""

from glyphpack.domain.asset import (
    FontFormat,
    GlyphAsset,
    GlyphMapping,
    ResolvedGlyph,
    SynthesisRequest,
)
from glyphpack.domain.report import CleanupReport

__all__: list[str] = [
    # Enums
    "FontFormat",
    # Core types
    "GlyphAsset",
    "GlyphMapping",
    "ResolvedGlyph",
    "SynthesisRequest",
    "CleanupReport",
]
