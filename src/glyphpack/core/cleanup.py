"""Bulk cleanup of the glyph store."""

from glyphpack.domain import CleanupReport
from glyphpack.storage import GlyphStore
from glyphpack.utils import PipelineLogger


class BulkCleanup:
    """Purges every asset held by a glyph store.

    Working scopes live in a separate area and are never touched. Running
    this while a synthesis request is still being validated can make that
    request fail with a not-found error; callers are expected to avoid it.
    """

    def __init__(self, store: GlyphStore, logger: PipelineLogger | None = None) -> None:
        self.store = store
        self.logger = logger if logger is not None else PipelineLogger()

    def run(self) -> CleanupReport:
        """Delete all assets, continuing past individual failures.

        Returns:
            CleanupReport with the removed count and any failures
        """
        report = self.store.clear()
        self.logger.log_bulk_cleanup(report.removed, len(report.failed))
        return report
