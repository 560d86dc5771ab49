"""Exception hierarchy for Glyphpack.

Every error carries an HTTP ``status_code`` so the API layer can render it
without a per-class lookup table.
"""


def codepoint_label(char: str) -> str:
    """Render a mapping character as U+XXXX, or its repr when not a single code point."""
    if len(char) == 1:
        return f"U+{ord(char):04X}"
    return repr(char)


class GlyphPackError(Exception):
    """Base exception for all Glyphpack errors."""

    status_code: int = 500


class ValidationError(GlyphPackError):
    """Caller input was rejected before any synthesis work began."""

    status_code = 400


class NoFilesError(ValidationError):
    """Upload batch contained no files."""

    def __init__(self) -> None:
        super().__init__("Please upload at least one SVG file")


class TooManyFilesError(ValidationError):
    """Upload batch exceeded the configured file limit."""

    def __init__(self, count: int, limit: int) -> None:
        self.count = count
        self.limit = limit
        super().__init__(f"Too many files: {count} uploaded, at most {limit} allowed")


class UnsupportedFileTypeError(ValidationError):
    """Uploaded file is not an SVG image."""

    def __init__(self, filename: str, media_type: str | None) -> None:
        self.filename = filename
        self.media_type = media_type
        super().__init__(
            f"Only SVG files are allowed: '{filename}' ({media_type or 'unknown type'})"
        )


class NoMappingsError(ValidationError):
    """Synthesis request carried no glyph mappings."""

    def __init__(self) -> None:
        super().__init__("No mappings provided")


class InvalidCharacterError(ValidationError):
    """Mapping target is not a single code point the fonts can encode."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(
            f"Mapping character must be a single encodable code point, got {char!r}"
        )


class DuplicateCharacterError(ValidationError):
    """Two mappings in one request target the same character."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Character {codepoint_label(char)} is mapped more than once")


class GlyphNotFoundError(ValidationError):
    """Mapping references an asset the store does not hold."""

    status_code = 404

    def __init__(self, file_id: str) -> None:
        self.file_id = file_id
        super().__init__(f"File not found: {file_id}.svg")


class StorageError(GlyphPackError):
    """Errors raised by the glyph store."""

    pass


class AssetExistsError(StorageError):
    """An asset identifier was written twice."""

    def __init__(self, asset_id: str) -> None:
        self.asset_id = asset_id
        super().__init__(f"Asset '{asset_id}' already exists")


class SynthesisError(GlyphPackError):
    """The font synthesizer could not build the font."""

    def __init__(self, reason: str, char: str | None = None) -> None:
        self.reason = reason
        self.char = char
        if char is not None:
            super().__init__(f"Font synthesis failed for {codepoint_label(char)}: {reason}")
        else:
            super().__init__(f"Font synthesis failed: {reason}")


class InvalidSvgError(SynthesisError):
    """SVG content is malformed or has nothing to draw."""

    pass


class PackagingError(GlyphPackError):
    """Building the archive for a working scope failed."""

    def __init__(self, scope_id: str, reason: str) -> None:
        self.scope_id = scope_id
        self.reason = reason
        super().__init__(f"Failed to package scope '{scope_id}': {reason}")


class CleanupError(GlyphPackError):
    """A transient file or directory could not be removed.

    Only ever logged; cleanup failures never reach the caller.
    """

    def __init__(self, target: str, reason: str) -> None:
        self.target = target
        self.reason = reason
        super().__init__(f"Failed to remove '{target}': {reason}")
