"""Upload intake: type-check a batch of files and persist them."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import PurePath

from glyphpack.config import UploadConfig
from glyphpack.domain import GlyphAsset
from glyphpack.exceptions import NoFilesError, TooManyFilesError, UnsupportedFileTypeError
from glyphpack.storage import GlyphStore, new_asset_id, storage_name_for
from glyphpack.utils import PipelineLogger, normalize_filename


@dataclass(frozen=True)
class UploadCandidate:
    """One file as received from the client.

    Attributes:
        filename: Client-supplied filename (possibly mis-decoded)
        content_type: Declared media type, if any
        content: File bytes
    """

    filename: str
    content_type: str | None
    content: bytes = field(repr=False)


class UploadIntake:
    """Validates upload batches and stores accepted SVG files.

    A file is accepted when its media type or its extension says SVG. Types
    are checked for the whole batch before anything is written, so a
    rejected batch leaves no trace in the store.

    Example:
        intake = UploadIntake(store)
        assets = intake.accept([UploadCandidate("icon.svg", "image/svg+xml", data)])
    """

    def __init__(
        self,
        store: GlyphStore,
        config: UploadConfig | None = None,
        logger: PipelineLogger | None = None,
    ) -> None:
        self.store = store
        self.config = config if config is not None else UploadConfig()
        self.logger = logger if logger is not None else PipelineLogger()

    def is_accepted(self, candidate: UploadCandidate) -> bool:
        """Check whether a file is an SVG by media type or extension.

        Args:
            candidate: File to check

        Returns:
            True if either signal indicates SVG
        """
        media_type = (candidate.content_type or "").split(";", 1)[0].strip().lower()
        if media_type == self.config.media_type:
            return True

        suffix = PurePath(normalize_filename(candidate.filename)).suffix.lower()
        return suffix == self.config.extension

    def accept(self, candidates: Sequence[UploadCandidate]) -> list[GlyphAsset]:
        """Validate and persist a batch of uploaded files.

        Args:
            candidates: Files in upload order

        Returns:
            One stored GlyphAsset per file, in upload order

        Raises:
            NoFilesError: If the batch is empty
            TooManyFilesError: If the batch exceeds the configured limit
            UnsupportedFileTypeError: If any file is not an SVG
        """
        if not candidates:
            self.logger.log_upload_rejected("no files")
            raise NoFilesError()

        if len(candidates) > self.config.max_files:
            self.logger.log_upload_rejected("too many files")
            raise TooManyFilesError(len(candidates), self.config.max_files)

        for candidate in candidates:
            if not self.is_accepted(candidate):
                self.logger.log_upload_rejected("unsupported file type")
                raise UnsupportedFileTypeError(
                    normalize_filename(candidate.filename),
                    candidate.content_type,
                )

        assets = []
        for candidate in candidates:
            asset_id = new_asset_id()
            asset = GlyphAsset(
                asset_id=asset_id,
                original_name=normalize_filename(candidate.filename),
                storage_name=storage_name_for(asset_id),
                content=candidate.content,
            )
            self.store.put(asset)
            self.logger.log_upload_accepted(asset_id, asset.original_name, len(candidate.content))
            assets.append(asset)

        return assets
