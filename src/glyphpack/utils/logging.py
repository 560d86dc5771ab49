"""Logging utilities for Glyphpack."""

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class PipelineStats:
    """Counters accumulated over the lifetime of a server process."""

    files_uploaded: int = 0
    fonts_generated: int = 0
    synthesis_failures: int = 0
    cleanup_failures: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphpack")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


def get_logger() -> structlog.stdlib.BoundLogger:
    """Return the package logger (configured or structlog's default)."""
    return structlog.get_logger("glyphpack")


class PipelineLogger:
    """Logger for pipeline events, keeping running statistics.

    Shared between request threads, so counter updates take a lock.
    """

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger if logger is not None else get_logger()
        self._stats = PipelineStats()
        self._lock = threading.Lock()

    def log_upload_accepted(self, asset_id: str, original_name: str, size: int) -> None:
        """Log a stored upload."""
        self._logger.info(
            "Upload accepted",
            asset_id=asset_id,
            original_name=original_name,
            size=size,
        )
        with self._lock:
            self._stats.files_uploaded += 1

    def log_upload_rejected(self, reason: str) -> None:
        """Log a rejected upload batch."""
        self._logger.warning("Upload rejected", reason=reason)

    def log_synthesis_start(self, scope_id: str, font_name: str, glyph_count: int) -> None:
        """Log start of font synthesis."""
        self._logger.info(
            "Synthesis started",
            scope_id=scope_id,
            font_name=font_name,
            glyphs=glyph_count,
        )

    def log_synthesis_complete(
        self,
        scope_id: str,
        formats: list[str],
        duration_ms: float,
    ) -> None:
        """Log successful synthesis."""
        self._logger.info(
            "Synthesis complete",
            scope_id=scope_id,
            formats=formats,
            duration_ms=round(duration_ms, 2),
        )

    def log_synthesis_error(self, scope_id: str, error: Exception) -> None:
        """Log synthesis failure."""
        self._logger.error(
            "Synthesis failed",
            scope_id=scope_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        with self._lock:
            self._stats.synthesis_failures += 1
            self._stats.errors.append((scope_id, str(error)))

    def log_archive_packaged(self, scope_id: str, entries: int, size: int) -> None:
        """Log a packaged archive."""
        self._logger.info("Archive packaged", scope_id=scope_id, entries=entries, size=size)
        with self._lock:
            self._stats.fonts_generated += 1

    def log_released(self, scope_id: str) -> None:
        """Log removal of a scope and its archive."""
        self._logger.debug("Scope released", scope_id=scope_id)

    def log_cleanup_error(self, error: Exception) -> None:
        """Log a cleanup failure; these never propagate."""
        self._logger.error(
            "Cleanup failed",
            error=str(error),
            error_type=type(error).__name__,
        )
        with self._lock:
            self._stats.cleanup_failures += 1

    def log_bulk_cleanup(self, removed: int, failed: int) -> None:
        """Log a store-wide purge."""
        self._logger.info("Bulk cleanup", removed=removed, failed=failed)

    @property
    def stats(self) -> PipelineStats:
        """Get current pipeline statistics."""
        return self._stats
