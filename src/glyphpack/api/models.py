"""Request and response bodies for the HTTP API.

Field names on the wire are camelCase (``fileId``, ``fontName``,
``originalName``); the Python attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field

from glyphpack.domain import GlyphAsset, GlyphMapping, SynthesisRequest


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MappingIn(_CamelModel):
    """One ``{fileId, char}`` pair."""

    file_id: str = Field(alias="fileId", description="Identifier returned by /uploads")
    char: str = Field(description="Target character")

    def to_domain(self) -> GlyphMapping:
        return GlyphMapping(file_id=self.file_id, char=self.char)


class GenerateFontRequest(_CamelModel):
    """Body of ``POST /generate-font``."""

    font_name: str | None = Field(default=None, alias="fontName")
    mappings: list[MappingIn] | None = None

    def to_domain(self, default_name: str) -> SynthesisRequest:
        """Convert to a SynthesisRequest, defaulting the font name.

        Args:
            default_name: Font name used when none (or only whitespace) is given

        Returns:
            SynthesisRequest with mappings in request order
        """
        font_name = (self.font_name or "").strip() or default_name
        return SynthesisRequest(
            font_name=font_name,
            mappings=[m.to_domain() for m in self.mappings or []],
        )


class UploadedFile(_CamelModel):
    """Descriptor of one stored upload."""

    id: str
    original_name: str = Field(alias="originalName")
    filename: str

    @classmethod
    def from_asset(cls, asset: GlyphAsset) -> "UploadedFile":
        return cls(id=asset.asset_id, original_name=asset.original_name, filename=asset.storage_name)


class UploadResponse(_CamelModel):
    """Body returned by ``POST /uploads``."""

    success: bool = True
    files: list[UploadedFile]


class CleanupResponse(_CamelModel):
    """Body returned by ``POST /cleanup``."""

    success: bool
    message: str
    removed: int = 0
    failed: list[str] = Field(default_factory=list)


class ErrorResponse(_CamelModel):
    """Body of every error response."""

    error: str


class HealthResponse(_CamelModel):
    status: str = "ok"
    version: str
