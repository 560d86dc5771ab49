"""Configuration settings for Glyphpack."""

from pathlib import Path

from pydantic import BaseModel, Field

from glyphpack.domain.asset import FontFormat


class StorageConfig(BaseModel):
    """Where uploaded assets and per-request working scopes live."""

    data_dir: Path = Field(
        default=Path("."),
        description="Root directory for the uploads and temp areas",
    )
    uploads_dirname: str = Field(
        default="uploads",
        description="Flat directory holding one file per uploaded asset",
    )
    work_dirname: str = Field(
        default="temp/fonts",
        description="Directory holding one subdirectory per synthesis request",
    )

    @property
    def uploads_dir(self) -> Path:
        """Path of the uploads area."""
        return self.data_dir / self.uploads_dirname

    @property
    def work_dir(self) -> Path:
        """Path of the working area."""
        return self.data_dir / self.work_dirname


class UploadConfig(BaseModel):
    """Configuration for upload intake."""

    field_name: str = Field(
        default="svgs",
        description="Multipart field carrying the SVG files",
    )
    max_files: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Maximum number of files per upload batch",
    )
    media_type: str = Field(
        default="image/svg+xml",
        description="Accepted media type",
    )
    extension: str = Field(
        default=".svg",
        description="Accepted file extension",
    )


class FontConfig(BaseModel):
    """Configuration for font synthesis."""

    default_name: str = Field(
        default="custom-font",
        min_length=1,
        description="Font name used when the request does not supply one",
    )
    formats: list[FontFormat] = Field(
        default_factory=lambda: list(FontFormat),
        min_length=1,
        description="Output formats written into every bundle",
    )
    units_per_em: int = Field(
        default=1024,
        ge=16,
        le=16384,
        description="Font units per em",
    )
    ascent: int = Field(
        default=896,
        description="Ascender in font units",
    )
    descent: int = Field(
        default=-128,
        le=0,
        description="Descender in font units (negative)",
    )


class ServerConfig(BaseModel):
    """HTTP server configuration."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8888, ge=1, le=65535, description="Bind port")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed by the CORS middleware",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="INFO",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphPackSettings(BaseModel):
    """Main application settings."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    font: FontConfig = Field(default_factory=FontConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphPackSettings:
    """Get default application settings."""
    return GlyphPackSettings()
