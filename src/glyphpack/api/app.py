"""FastAPI application exposing the glyphpack pipeline.

Endpoints:
- POST /uploads: multipart batch of SVG files
- POST /generate-font: JSON mappings in, ZIP archive out
- POST /cleanup: purge every uploaded asset
- GET /uploads/<filename>: read-only access to stored assets
- GET /health: liveness probe
"""

from typing import Annotated

from fastapi import FastAPI, File, Request, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from glyphpack import __version__
from glyphpack.api.models import (
    CleanupResponse,
    ErrorResponse,
    GenerateFontRequest,
    HealthResponse,
    UploadedFile,
    UploadResponse,
)
from glyphpack.api.responses import ArchiveResponse
from glyphpack.config import GlyphPackSettings, get_default_settings
from glyphpack.core import FontBundlePipeline, FontSynthesizer, FontToolsSynthesizer, UploadCandidate
from glyphpack.exceptions import GlyphPackError
from glyphpack.storage import FileSystemGlyphStore, GlyphStore, WorkingArea
from glyphpack.utils import PipelineLogger

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_app(
    settings: GlyphPackSettings | None = None,
    *,
    store: GlyphStore | None = None,
    synthesizer: FontSynthesizer | None = None,
    logger: PipelineLogger | None = None,
) -> FastAPI:
    """Build the web application.

    Args:
        settings: Application settings (defaults if None)
        store: Glyph store; a FileSystemGlyphStore on the uploads area if None
        synthesizer: Font synthesizer; FontToolsSynthesizer if None
        logger: Pipeline logger shared by all requests

    Returns:
        Configured FastAPI application
    """
    settings = settings if settings is not None else get_default_settings()
    if store is None:
        store = FileSystemGlyphStore(settings.storage.uploads_dir)
    if synthesizer is None:
        synthesizer = FontToolsSynthesizer(settings.font)

    pipeline = FontBundlePipeline(
        store=store,
        synthesizer=synthesizer,
        area=WorkingArea(settings.storage.work_dir),
        settings=settings,
        logger=logger,
    )

    app = FastAPI(
        title="glyphpack",
        version=__version__,
        description="Turn SVG icons into a zipped icon font bundle.",
    )
    app.state.pipeline = pipeline
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    @app.exception_handler(GlyphPackError)
    async def handle_glyphpack_error(_request: Request, exc: GlyphPackError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc)})

    @app.post("/uploads", response_model=UploadResponse, responses=_ERROR_RESPONSES)
    async def upload_svgs(
        files: Annotated[
            list[UploadFile] | None,
            File(alias=settings.upload.field_name, description="SVG files"),
        ] = None,
    ) -> UploadResponse:
        """Store a batch of SVG files and return their identifiers."""
        candidates = []
        for upload in files or []:
            # Browsers send an empty, unnamed part for an empty file input
            if not upload.filename:
                continue
            candidates.append(
                UploadCandidate(
                    filename=upload.filename,
                    content_type=upload.content_type,
                    content=await upload.read(),
                )
            )

        assets = await run_in_threadpool(pipeline.upload, candidates)
        return UploadResponse(files=[UploadedFile.from_asset(a) for a in assets])

    @app.post(
        "/generate-font",
        responses={
            200: {"content": {"application/zip": {}}, "description": "ZIP archive"},
            **_ERROR_RESPONSES,
        },
    )
    def generate_font(body: GenerateFontRequest) -> ArchiveResponse:
        """Synthesize the requested font and stream it as a ZIP archive."""
        request = body.to_domain(settings.font.default_name)
        lease = pipeline.build(request)
        try:
            return ArchiveResponse(lease)
        except BaseException:
            lease.release()
            raise

    @app.post("/cleanup", response_model=CleanupResponse)
    def cleanup() -> JSONResponse:
        """Delete every uploaded asset."""
        report = pipeline.purge()
        if report.success:
            body = CleanupResponse(
                success=True,
                message="Temporary files cleaned up",
                removed=report.removed,
            )
            status_code = 200
        else:
            body = CleanupResponse(
                success=False,
                message=f"Cleanup finished with {len(report.failed)} undeletable file(s)",
                removed=report.removed,
                failed=[name for name, _reason in report.failed],
            )
            status_code = 500
        return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    # Mounted after POST /uploads so that route keeps precedence
    if isinstance(store, FileSystemGlyphStore):
        app.mount("/uploads", StaticFiles(directory=store.root), name="uploads")

    return app
