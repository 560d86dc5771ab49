"""Utility functions for glyphpack.

This module provides utility functions including:

- Logging setup and configuration
- Pipeline event logging with running statistics
- Filename normalization for uploaded files
"""

from glyphpack.utils.filenames import normalize_filename, safe_stem
from glyphpack.utils.logging import (
    PipelineLogger,
    PipelineStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "PipelineLogger",
    "PipelineStats",
    "configure_logging",
    "get_logger",
    "normalize_filename",
    "safe_stem",
]
