"""Upload-to-archive orchestration.

This module ties the pipeline stages together:

1. Upload intake stores SVG assets in the glyph store
2. The mapping validator resolves a synthesis request against the store
3. The orchestrator allocates a private working scope, runs the font
   synthesizer into it and packages the result
4. The caller receives an ``ArchiveLease`` owning the scope and archive,
   and must release it once delivery has finished, whatever the outcome

Key classes:
- ArchiveLease: Scoped ownership of one request's transient files
- SynthesisOrchestrator: Scope allocation, synthesis and packaging
- FontBundlePipeline: Entry point used by the API and the CLI
"""

import threading
import time
from collections.abc import Sequence
from pathlib import Path

from glyphpack.config import FontConfig, GlyphPackSettings, get_default_settings
from glyphpack.core.cleanup import BulkCleanup
from glyphpack.core.intake import UploadCandidate, UploadIntake
from glyphpack.core.packager import ArchivePackager
from glyphpack.core.synthesizer import FontSynthesizer
from glyphpack.core.validator import MappingValidator
from glyphpack.domain import CleanupReport, GlyphAsset, ResolvedGlyph, SynthesisRequest
from glyphpack.exceptions import CleanupError, GlyphPackError, PackagingError, SynthesisError
from glyphpack.storage import GlyphStore, WorkingArea, WorkingScope
from glyphpack.utils import PipelineLogger, safe_stem

ARCHIVE_EXTENSION = ".zip"


class ArchiveLease:
    """Owns one request's working scope and archive blob until released.

    ``release()`` may be called any number of times from any thread; the
    first call removes the scope directory and the archive, later calls do
    nothing. Removal failures are logged and never raised.

    Example:
        with orchestrator.run("demo", glyphs) as lease:
            send(lease.archive_path)
    """

    def __init__(
        self,
        area: WorkingArea,
        scope: WorkingScope,
        download_name: str,
        logger: PipelineLogger,
    ) -> None:
        self._area = area
        self._scope = scope
        self._download_name = download_name
        self._logger = logger
        self._lock = threading.Lock()
        self._released = False

    @property
    def scope(self) -> WorkingScope:
        return self._scope

    @property
    def scope_id(self) -> str:
        return self._scope.scope_id

    @property
    def archive_path(self) -> Path:
        return self._area.archive_path(self._scope.scope_id)

    @property
    def download_name(self) -> str:
        """Filename offered to the client (``<font name>.zip``)."""
        return self._download_name

    @property
    def released(self) -> bool:
        return self._released

    def read_bytes(self) -> bytes:
        """Read the whole archive blob."""
        return self.archive_path.read_bytes()

    def release(self) -> None:
        """Remove the working scope and the archive blob, once."""
        with self._lock:
            if self._released:
                return
            self._released = True

        try:
            self._area.remove_scope(self._scope)
        except CleanupError as e:
            self._logger.log_cleanup_error(e)

        try:
            self._area.remove_archive(self._scope.scope_id)
        except CleanupError as e:
            self._logger.log_cleanup_error(e)

        self._logger.log_released(self._scope.scope_id)

    def __enter__(self) -> "ArchiveLease":
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        self.release()


class SynthesisOrchestrator:
    """Runs the font synthesizer inside an isolated working scope.

    Each run allocates its own scope, so concurrent runs never see each
    other's files. If synthesis or packaging fails, the scope is released
    before the error propagates.
    """

    def __init__(
        self,
        synthesizer: FontSynthesizer,
        area: WorkingArea,
        config: FontConfig | None = None,
        packager: ArchivePackager | None = None,
        logger: PipelineLogger | None = None,
    ) -> None:
        self.synthesizer = synthesizer
        self.area = area
        self.config = config if config is not None else FontConfig()
        self.packager = packager if packager is not None else ArchivePackager(area)
        self.logger = logger if logger is not None else PipelineLogger()

    def run(self, font_name: str, glyphs: Sequence[ResolvedGlyph]) -> ArchiveLease:
        """Synthesize and package a font for already validated glyphs.

        Args:
            font_name: Requested font name
            glyphs: Resolved glyphs from the mapping validator

        Returns:
            Lease owning the scope and the packaged archive

        Raises:
            SynthesisError: If the synthesizer fails
            PackagingError: If the archive cannot be written
        """
        stem = safe_stem(font_name, self.config.default_name)
        scope = self.area.allocate()
        lease = ArchiveLease(self.area, scope, f"{stem}{ARCHIVE_EXTENSION}", self.logger)

        try:
            start_time = time.time()
            self.logger.log_synthesis_start(scope.scope_id, font_name, len(glyphs))

            try:
                outputs = self.synthesizer.synthesize(
                    font_name,
                    [glyph.to_pair() for glyph in glyphs],
                    list(self.config.formats),
                )
            except GlyphPackError:
                raise
            except Exception as e:
                raise SynthesisError(str(e) or type(e).__name__) from e

            try:
                for fmt, data in outputs.items():
                    scope.write(f"{stem}{fmt.extension}", data)
            except OSError as e:
                raise PackagingError(scope.scope_id, str(e)) from e

            duration_ms = (time.time() - start_time) * 1000
            self.logger.log_synthesis_complete(
                scope.scope_id, [fmt.value for fmt in outputs], duration_ms
            )

            archive_path = self.packager.package(scope)
            self.logger.log_archive_packaged(
                scope.scope_id, len(outputs), archive_path.stat().st_size
            )
        except Exception as e:
            self.logger.log_synthesis_error(scope.scope_id, e)
            lease.release()
            raise
        except BaseException:
            lease.release()
            raise

        return lease


class FontBundlePipeline:
    """The full upload-to-archive pipeline over one glyph store.

    Example:
        pipeline = FontBundlePipeline(store, FontToolsSynthesizer(), area)
        assets = pipeline.upload(candidates)
        request = SynthesisRequest("demo", [GlyphMapping(assets[0].asset_id, "\\ue001")])
        with pipeline.build(request) as lease:
            data = lease.read_bytes()
    """

    def __init__(
        self,
        store: GlyphStore,
        synthesizer: FontSynthesizer,
        area: WorkingArea,
        settings: GlyphPackSettings | None = None,
        logger: PipelineLogger | None = None,
    ) -> None:
        self.settings = settings if settings is not None else get_default_settings()
        self.store = store
        self.area = area
        self.logger = logger if logger is not None else PipelineLogger()
        self.intake = UploadIntake(store, self.settings.upload, self.logger)
        self.validator = MappingValidator(store)
        self.orchestrator = SynthesisOrchestrator(
            synthesizer,
            area,
            config=self.settings.font,
            logger=self.logger,
        )
        self.bulk_cleanup = BulkCleanup(store, self.logger)

    def upload(self, candidates: Sequence[UploadCandidate]) -> list[GlyphAsset]:
        """Run upload intake on a batch of files."""
        return self.intake.accept(candidates)

    def build(self, request: SynthesisRequest) -> ArchiveLease:
        """Validate a request, then synthesize and package its font.

        Validation completes before any working scope is created.

        Args:
            request: Font name and glyph mappings

        Returns:
            Lease the caller must release after delivery
        """
        glyphs = self.validator.validate(request.mappings)
        font_name = request.font_name.strip() or self.settings.font.default_name
        return self.orchestrator.run(font_name, glyphs)

    def purge(self) -> CleanupReport:
        """Delete every asset from the glyph store."""
        return self.bulk_cleanup.run()
