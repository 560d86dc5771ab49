"""Glyph stores: where uploaded SVG assets live between requests.

A store supports exactly three things the pipeline needs: write-once by
identifier, read by identifier, and a full clear. Two implementations are
provided, a flat directory for the server and a dictionary for tests and
the local CLI.
"""

import re
import threading
import uuid
from pathlib import Path
from typing import Protocol, runtime_checkable

from glyphpack.domain import CleanupReport, GlyphAsset
from glyphpack.exceptions import AssetExistsError, StorageError

ASSET_SUFFIX = ".svg"

# Identifiers end up in filesystem paths; anything else is treated as unknown
_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def new_asset_id() -> str:
    """Generate a fresh asset identifier."""
    return str(uuid.uuid4())


def is_valid_asset_id(asset_id: str) -> bool:
    """Check that an identifier is safe to use as a storage key."""
    return bool(_SAFE_ID.match(asset_id))


def storage_name_for(asset_id: str) -> str:
    """Name under which an asset is stored (``<id>.svg``)."""
    return f"{asset_id}{ASSET_SUFFIX}"


@runtime_checkable
class GlyphStore(Protocol):
    """Storage abstraction shared by intake, validation and cleanup."""

    def put(self, asset: GlyphAsset) -> None:
        """Persist an asset; raises AssetExistsError if the id is taken."""
        ...

    def get(self, asset_id: str) -> GlyphAsset | None:
        """Return the asset stored under ``asset_id``, or None."""
        ...

    def asset_ids(self) -> list[str]:
        """Identifiers currently held, sorted."""
        ...

    def clear(self) -> CleanupReport:
        """Delete every asset, best effort."""
        ...


class FileSystemGlyphStore:
    """Flat directory store: one ``<id>.svg`` file per asset.

    Original filenames are not persisted; assets read back from disk report
    their storage name as the original name.

    Example:
        store = FileSystemGlyphStore(Path("uploads"))
        store.put(asset)
        store.get(asset.asset_id)
    """

    def __init__(self, root: Path) -> None:
        """Initialize the store, creating its directory if needed.

        Args:
            root: Directory holding the asset files
        """
        self._root = root
        self._root.mkdir(parents=True, exist_ok=True)

    @property
    def root(self) -> Path:
        """Directory holding the asset files."""
        return self._root

    def _path_for(self, asset_id: str) -> Path:
        return self._root / storage_name_for(asset_id)

    def put(self, asset: GlyphAsset) -> None:
        """Write the asset with exclusive-create semantics.

        Raises:
            AssetExistsError: If the identifier is already stored
            StorageError: If the identifier is unsafe or the write fails
        """
        if not is_valid_asset_id(asset.asset_id):
            raise StorageError(f"Invalid asset id: {asset.asset_id!r}")

        path = self._path_for(asset.asset_id)
        try:
            with path.open("xb") as fh:
                fh.write(asset.content)
        except FileExistsError as e:
            raise AssetExistsError(asset.asset_id) from e
        except OSError as e:
            path.unlink(missing_ok=True)
            raise StorageError(f"Failed to store asset '{asset.asset_id}': {e}") from e

    def get(self, asset_id: str) -> GlyphAsset | None:
        if not is_valid_asset_id(asset_id):
            return None

        path = self._path_for(asset_id)
        try:
            content = path.read_bytes()
        except FileNotFoundError:
            return None

        return GlyphAsset(
            asset_id=asset_id,
            original_name=path.name,
            storage_name=path.name,
            content=content,
        )

    def asset_ids(self) -> list[str]:
        return sorted(
            entry.stem
            for entry in self._root.iterdir()
            if entry.is_file() and entry.suffix == ASSET_SUFFIX
        )

    def clear(self) -> CleanupReport:
        """Delete every file in the store directory.

        A file that cannot be removed is recorded and the sweep continues.
        A missing store directory counts as already empty; one that cannot
        be listed is recorded as a failure.
        """
        report = CleanupReport()
        try:
            entries = sorted(self._root.iterdir())
        except FileNotFoundError:
            return report
        except OSError as e:
            report.record_failure(self._root.name, str(e))
            return report

        for entry in entries:
            if not entry.is_file():
                continue
            try:
                entry.unlink()
            except FileNotFoundError:
                # Removed concurrently; the goal is reached either way
                continue
            except OSError as e:
                report.record_failure(entry.name, str(e))
            else:
                report.record_removed()

        return report


class InMemoryGlyphStore:
    """Dictionary-backed store for tests and one-shot CLI builds."""

    def __init__(self) -> None:
        self._assets: dict[str, GlyphAsset] = {}
        self._lock = threading.Lock()

    def put(self, asset: GlyphAsset) -> None:
        with self._lock:
            if asset.asset_id in self._assets:
                raise AssetExistsError(asset.asset_id)
            self._assets[asset.asset_id] = asset

    def get(self, asset_id: str) -> GlyphAsset | None:
        with self._lock:
            return self._assets.get(asset_id)

    def asset_ids(self) -> list[str]:
        with self._lock:
            return sorted(self._assets)

    def clear(self) -> CleanupReport:
        with self._lock:
            report = CleanupReport(removed=len(self._assets))
            self._assets.clear()
        return report
