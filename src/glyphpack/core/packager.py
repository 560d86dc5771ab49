"""Archive packaging: one working scope in, one ZIP blob out."""

import contextlib
import zipfile
from pathlib import Path

from glyphpack.exceptions import PackagingError
from glyphpack.storage import WorkingArea, WorkingScope


class ArchivePackager:
    """Bundles the files of a working scope into a flat ZIP archive.

    The archive holds exactly the regular files present in the scope at
    packaging time, under their bare filenames and with unmodified bytes.
    It is written next to the scope as ``<scope_id>.zip``.
    """

    def __init__(self, area: WorkingArea, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.area = area
        self.compression = compression

    def package(self, scope: WorkingScope) -> Path:
        """Write the archive for a scope.

        Args:
            scope: Scope whose files are archived

        Returns:
            Path of the archive blob

        Raises:
            PackagingError: If the scope cannot be read or the archive
                cannot be written; no partial archive is left behind
        """
        archive_path = self.area.archive_path(scope.scope_id)

        try:
            files = scope.files()
            with zipfile.ZipFile(archive_path, "w", compression=self.compression) as zf:
                for path in files:
                    zf.writestr(path.name, path.read_bytes())
        except (OSError, zipfile.BadZipFile, zipfile.LargeZipFile) as e:
            with contextlib.suppress(OSError):
                archive_path.unlink(missing_ok=True)
            raise PackagingError(scope.scope_id, str(e)) from e

        return archive_path
