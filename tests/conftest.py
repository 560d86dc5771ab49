"""Shared fixtures for glyphpack tests."""

import threading
from collections.abc import Sequence
from pathlib import Path

import pytest

from glyphpack.config import GlyphPackSettings, StorageConfig
from glyphpack.core import UploadCandidate
from glyphpack.domain import FontFormat
from glyphpack.storage import FileSystemGlyphStore, InMemoryGlyphStore, WorkingArea

# 24x24 square with a square hole
SQUARE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">'
    '<path d="M2 2h20v20H2z M6 6v12h12V6z"/>'
    "</svg>"
)

# Circle drawn with two arcs, plus an XML declaration
CIRCLE_SVG = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32">'
    '<path d="M16 4a12 12 0 1 1 0 24a12 12 0 1 1 0-24z"/>'
    "</svg>"
)


class FakeSynthesizer:
    """Test double returning one small blob per requested format.

    Each blob is ``<format>|<font name>|<chars>`` so tests can tell which
    request produced it.
    """

    def __init__(
        self,
        fail_with: Exception | None = None,
        barrier: threading.Barrier | None = None,
        on_enter=None,
    ) -> None:
        self.fail_with = fail_with
        self.barrier = barrier
        self.on_enter = on_enter
        self.calls: list[tuple[str, list[tuple[str, str]], list[FontFormat]]] = []
        self._lock = threading.Lock()

    def synthesize(
        self,
        font_name: str,
        glyphs: Sequence[tuple[str, str]],
        formats: Sequence[FontFormat],
    ) -> dict[FontFormat, bytes]:
        with self._lock:
            self.calls.append((font_name, list(glyphs), list(formats)))
        if self.barrier is not None:
            self.barrier.wait(timeout=10)
        if self.on_enter is not None:
            self.on_enter(font_name)
        if self.fail_with is not None:
            raise self.fail_with

        chars = "".join(char for char, _svg in glyphs)
        return {fmt: f"{fmt.value}|{font_name}|{chars}".encode() for fmt in formats}


@pytest.fixture
def square_svg() -> str:
    return SQUARE_SVG


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def memory_store() -> InMemoryGlyphStore:
    return InMemoryGlyphStore()


@pytest.fixture
def fs_store(tmp_path: Path) -> FileSystemGlyphStore:
    return FileSystemGlyphStore(tmp_path / "uploads")


@pytest.fixture
def work_area(tmp_path: Path) -> WorkingArea:
    return WorkingArea(tmp_path / "temp" / "fonts")


@pytest.fixture
def fake_synthesizer() -> FakeSynthesizer:
    return FakeSynthesizer()


@pytest.fixture
def settings(tmp_path: Path) -> GlyphPackSettings:
    return GlyphPackSettings(storage=StorageConfig(data_dir=tmp_path))


@pytest.fixture
def svg_candidate() -> UploadCandidate:
    return UploadCandidate("icon.svg", "image/svg+xml", SQUARE_SVG.encode())


@pytest.fixture
def make_synthesizer():
    """Factory for FakeSynthesizer instances with custom behaviour."""
    return FakeSynthesizer
