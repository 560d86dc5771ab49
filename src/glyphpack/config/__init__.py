"""Configuration management for glyphpack.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- StorageConfig: Upload and working area locations
- UploadConfig: Intake limits and accepted file type
- FontConfig: Font name default, output formats and metrics
- ServerConfig: HTTP bind address and CORS origins
- LoggingConfig: Logging settings
- GlyphPackSettings: Main application settings
"""

from glyphpack.config.settings import (
    FontConfig,
    GlyphPackSettings,
    LoggingConfig,
    ServerConfig,
    StorageConfig,
    UploadConfig,
    get_default_settings,
)

__all__ = [
    "FontConfig",
    "GlyphPackSettings",
    "LoggingConfig",
    "ServerConfig",
    "StorageConfig",
    "UploadConfig",
    "get_default_settings",
]
