"""Archive delivery with guaranteed cleanup."""

from starlette.responses import FileResponse
from starlette.types import Receive, Scope, Send

from glyphpack.core import ArchiveLease

ARCHIVE_MEDIA_TYPE = "application/zip"


class ArchiveResponse(FileResponse):
    """Streams a leased archive and releases the lease afterwards.

    The lease is released in a ``finally`` block around the whole send, so
    the working scope and the archive are removed after a completed
    download, a failed send, and a client disconnect alike.
    """

    def __init__(self, lease: ArchiveLease) -> None:
        super().__init__(
            lease.archive_path,
            media_type=ARCHIVE_MEDIA_TYPE,
            filename=lease.download_name,
        )
        self.lease = lease

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            self.lease.release()
