"""HTTP interface for glyphpack.

This module exposes the pipeline as a FastAPI application. Route handlers
stay thin: they translate HTTP bodies into domain values, hand off to the
pipeline, and render GlyphPackError subclasses as ``{"error": message}``
with the status code each error declares.
"""

from glyphpack.api.app import create_app
from glyphpack.api.responses import ArchiveResponse

__all__ = ["ArchiveResponse", "create_app"]
