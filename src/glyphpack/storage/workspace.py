"""Per-request working scopes and archive blobs.

Every synthesis request gets its own directory under the working area,
named by a fresh uuid4 and created with exclusive-create semantics, so two
in-flight requests can never share one. The archive for a scope is stored
next to it as ``<scope_id>.zip``.
"""

import shutil
import uuid
from pathlib import Path

from glyphpack.exceptions import CleanupError, StorageError

ARCHIVE_SUFFIX = ".zip"

# uuid4 collisions are not expected; the retry only covers stale directories
_ALLOCATE_ATTEMPTS = 3


class WorkingScope:
    """An exclusively owned directory holding one request's font files."""

    def __init__(self, scope_id: str, path: Path) -> None:
        self._scope_id = scope_id
        self._path = path

    @property
    def scope_id(self) -> str:
        return self._scope_id

    @property
    def path(self) -> Path:
        return self._path

    def write(self, filename: str, data: bytes) -> Path:
        """Write one file into the scope.

        Args:
            filename: Flat filename (no directory components)
            data: File content

        Returns:
            Path of the written file

        Raises:
            StorageError: If ``filename`` would escape the scope
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise StorageError(f"Refusing to write outside scope: {filename!r}")
        target = self._path / filename
        target.write_bytes(data)
        return target

    def files(self) -> list[Path]:
        """Regular files currently in the scope, sorted by name."""
        return sorted(p for p in self._path.iterdir() if p.is_file())

    def __repr__(self) -> str:
        return f"WorkingScope({self._scope_id!r})"


class WorkingArea:
    """Allocates and removes working scopes and their archive blobs.

    Example:
        area = WorkingArea(Path("temp/fonts"))
        scope = area.allocate()
        scope.write("demo.ttf", data)
        area.remove_scope(scope)
    """

    def __init__(self, root: Path) -> None:
        """Initialize the working area, creating its directory if needed.

        Args:
            root: Directory under which scopes and archives are created
        """
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        return self._root

    def allocate(self) -> WorkingScope:
        """Create a fresh, empty scope directory.

        Returns:
            The new WorkingScope

        Raises:
            StorageError: If no unique directory could be created
        """
        self._root.mkdir(parents=True, exist_ok=True)
        for _ in range(_ALLOCATE_ATTEMPTS):
            scope_id = str(uuid.uuid4())
            path = self._root / scope_id
            try:
                path.mkdir(exist_ok=False)
            except FileExistsError:
                continue
            except OSError as e:
                raise StorageError(f"Failed to create working scope: {e}") from e
            return WorkingScope(scope_id, path)

        raise StorageError("Failed to allocate a unique working scope")

    def archive_path(self, scope_id: str) -> Path:
        """Location of the archive blob keyed by ``scope_id``."""
        return self._root / f"{scope_id}{ARCHIVE_SUFFIX}"

    def remove_scope(self, scope: WorkingScope) -> None:
        """Recursively delete a scope directory; missing is fine.

        Raises:
            CleanupError: If the directory exists and cannot be removed
        """
        try:
            shutil.rmtree(scope.path)
        except FileNotFoundError:
            return
        except OSError as e:
            raise CleanupError(str(scope.path), str(e)) from e

    def remove_archive(self, scope_id: str) -> None:
        """Delete the archive blob for ``scope_id``; missing is fine.

        Raises:
            CleanupError: If the file exists and cannot be removed
        """
        path = self.archive_path(scope_id)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise CleanupError(str(path), str(e)) from e

    def active_scope_ids(self) -> list[str]:
        """Scope directories currently present, sorted."""
        if not self._root.exists():
            return []
        return sorted(p.name for p in self._root.iterdir() if p.is_dir())
