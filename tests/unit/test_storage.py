"""Unit tests for glyph stores and working areas."""

from pathlib import Path
from unittest.mock import patch

import pytest

from glyphpack.domain import GlyphAsset
from glyphpack.exceptions import AssetExistsError, CleanupError, StorageError
from glyphpack.storage import (
    FileSystemGlyphStore,
    GlyphStore,
    InMemoryGlyphStore,
    WorkingArea,
    is_valid_asset_id,
    new_asset_id,
    storage_name_for,
)


def _asset(asset_id: str, content: bytes = b"<svg/>") -> GlyphAsset:
    return GlyphAsset(asset_id, "icon.svg", storage_name_for(asset_id), content)


class TestAssetIds:
    """Tests for identifier helpers."""

    def test_new_ids_are_unique(self):
        ids = {new_asset_id() for _ in range(200)}
        assert len(ids) == 200

    def test_new_ids_are_valid(self):
        assert is_valid_asset_id(new_asset_id())

    @pytest.mark.parametrize("bad", ["", "../etc/passwd", "a/b", "a.svg", "x" * 65])
    def test_unsafe_ids_rejected(self, bad):
        assert not is_valid_asset_id(bad)

    def test_storage_name(self):
        assert storage_name_for("abc") == "abc.svg"


class TestFileSystemGlyphStore:
    """Tests for FileSystemGlyphStore."""

    def test_satisfies_protocol(self, fs_store):
        assert isinstance(fs_store, GlyphStore)

    def test_creates_root(self, tmp_path: Path):
        root = tmp_path / "nested" / "uploads"
        FileSystemGlyphStore(root)
        assert root.is_dir()

    def test_put_and_get(self, fs_store):
        fs_store.put(_asset("abc", b"<svg>1</svg>"))

        asset = fs_store.get("abc")
        assert asset is not None
        assert asset.content == b"<svg>1</svg>"
        assert asset.storage_name == "abc.svg"
        assert (fs_store.root / "abc.svg").read_bytes() == b"<svg>1</svg>"

    def test_get_missing(self, fs_store):
        assert fs_store.get("missing") is None

    def test_get_unsafe_id_is_missing(self, fs_store, tmp_path: Path):
        (tmp_path / "secret.svg").write_bytes(b"x")
        assert fs_store.get("../secret") is None

    def test_put_is_write_once(self, fs_store):
        fs_store.put(_asset("abc", b"first"))
        with pytest.raises(AssetExistsError):
            fs_store.put(_asset("abc", b"second"))
        assert fs_store.get("abc").content == b"first"

    def test_put_unsafe_id(self, fs_store):
        with pytest.raises(StorageError, match="Invalid asset id"):
            fs_store.put(_asset("../evil"))

    def test_asset_ids(self, fs_store):
        fs_store.put(_asset("b"))
        fs_store.put(_asset("a"))
        assert fs_store.asset_ids() == ["a", "b"]

    def test_clear_removes_everything(self, fs_store):
        for i in range(5):
            fs_store.put(_asset(f"id{i}"))

        report = fs_store.clear()

        assert report.success
        assert report.removed == 5
        assert list(fs_store.root.iterdir()) == []

    def test_clear_empty_store(self, fs_store):
        report = fs_store.clear()
        assert report.success
        assert report.removed == 0

    def test_clear_twice_is_idempotent(self, fs_store):
        fs_store.put(_asset("abc"))
        fs_store.clear()
        report = fs_store.clear()
        assert report.success
        assert report.removed == 0

    def test_clear_continues_past_failures(self, fs_store):
        for asset_id in ("a", "b", "c"):
            fs_store.put(_asset(asset_id))

        original_unlink = Path.unlink

        def flaky_unlink(self, *args, **kwargs):
            if self.name == "b.svg":
                raise PermissionError("locked")
            return original_unlink(self, *args, **kwargs)

        with patch.object(Path, "unlink", flaky_unlink):
            report = fs_store.clear()

        assert not report.success
        assert report.removed == 2
        assert [name for name, _ in report.failed] == ["b.svg"]
        assert fs_store.asset_ids() == ["b"]

    def test_clear_missing_directory(self, fs_store):
        fs_store.root.rmdir()
        report = fs_store.clear()
        assert report.success
        assert report.removed == 0

    def test_clear_unlistable_directory(self, fs_store):
        """Test a directory that cannot be listed is reported, not raised."""
        fs_store.put(_asset("abc"))

        with patch.object(Path, "iterdir", side_effect=PermissionError("denied")):
            report = fs_store.clear()

        assert not report.success
        assert report.removed == 0
        assert report.failed == [("uploads", "denied")]


class TestInMemoryGlyphStore:
    """Tests for InMemoryGlyphStore."""

    def test_satisfies_protocol(self, memory_store):
        assert isinstance(memory_store, GlyphStore)

    def test_put_and_get(self, memory_store):
        memory_store.put(_asset("abc"))
        assert memory_store.get("abc").asset_id == "abc"
        assert memory_store.get("nope") is None

    def test_write_once(self, memory_store):
        memory_store.put(_asset("abc"))
        with pytest.raises(AssetExistsError):
            memory_store.put(_asset("abc"))

    def test_clear(self, memory_store):
        memory_store.put(_asset("a"))
        memory_store.put(_asset("b"))

        report = memory_store.clear()

        assert report.removed == 2
        assert memory_store.asset_ids() == []


class TestWorkingArea:
    """Tests for WorkingArea and WorkingScope."""

    def test_allocate_creates_empty_directory(self, work_area):
        scope = work_area.allocate()
        assert scope.path.is_dir()
        assert scope.path.parent == work_area.root
        assert scope.files() == []

    def test_allocated_scopes_are_unique(self, work_area):
        scopes = [work_area.allocate() for _ in range(20)]
        assert len({s.scope_id for s in scopes}) == 20
        assert len(work_area.active_scope_ids()) == 20

    def test_allocate_retries_on_collision(self, work_area):
        taken = work_area.allocate()
        with patch("glyphpack.storage.workspace.uuid.uuid4", side_effect=[taken.scope_id, "fresh"]):
            scope = work_area.allocate()
        assert scope.scope_id == "fresh"

    def test_allocate_gives_up(self, work_area):
        taken = work_area.allocate()
        with patch("glyphpack.storage.workspace.uuid.uuid4", return_value=taken.scope_id):
            with pytest.raises(StorageError, match="unique"):
                work_area.allocate()

    def test_write_and_list(self, work_area):
        scope = work_area.allocate()
        scope.write("b.ttf", b"2")
        scope.write("a.woff", b"1")
        assert [p.name for p in scope.files()] == ["a.woff", "b.ttf"]

    @pytest.mark.parametrize("name", ["../escape.ttf", "sub/dir.ttf", "..", ".", ""])
    def test_write_refuses_paths(self, work_area, name):
        scope = work_area.allocate()
        with pytest.raises(StorageError):
            scope.write(name, b"x")

    def test_archive_path_sits_next_to_scope(self, work_area):
        scope = work_area.allocate()
        assert work_area.archive_path(scope.scope_id) == work_area.root / f"{scope.scope_id}.zip"

    def test_remove_scope_recursive(self, work_area):
        scope = work_area.allocate()
        scope.write("a.ttf", b"1")
        work_area.remove_scope(scope)
        assert not scope.path.exists()

    def test_remove_missing_is_fine(self, work_area):
        scope = work_area.allocate()
        work_area.remove_scope(scope)
        work_area.remove_scope(scope)
        work_area.remove_archive(scope.scope_id)

    def test_remove_scope_failure(self, work_area):
        scope = work_area.allocate()
        with patch("glyphpack.storage.workspace.shutil.rmtree", side_effect=PermissionError("busy")):
            with pytest.raises(CleanupError, match="busy"):
                work_area.remove_scope(scope)
