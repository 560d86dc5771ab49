"""Storage layer for glyphpack.

Key classes:
- GlyphStore: Protocol for the shared asset store (put/get/clear)
- FileSystemGlyphStore: Flat directory of ``<id>.svg`` files
- InMemoryGlyphStore: Dictionary-backed store for tests and the CLI
- WorkingArea: Allocates isolated per-request working scopes
- WorkingScope: One request's directory of synthesized font files
"""

from glyphpack.storage.glyph_store import (
    FileSystemGlyphStore,
    GlyphStore,
    InMemoryGlyphStore,
    is_valid_asset_id,
    new_asset_id,
    storage_name_for,
)
from glyphpack.storage.workspace import WorkingArea, WorkingScope

__all__ = [
    "FileSystemGlyphStore",
    "GlyphStore",
    "InMemoryGlyphStore",
    "WorkingArea",
    "WorkingScope",
    "is_valid_asset_id",
    "new_asset_id",
    "storage_name_for",
]
