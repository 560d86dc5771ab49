"""Tests for domain models."""

from glyphpack.domain import (
    CleanupReport,
    FontFormat,
    GlyphAsset,
    ResolvedGlyph,
    SynthesisRequest,
)


class TestFontFormat:
    """Tests for FontFormat enum."""

    def test_all_delivered_formats(self):
        """The five delivered formats are defined."""
        assert {f.value for f in FontFormat} == {"ttf", "woff", "woff2", "eot", "svg"}

    def test_extension(self):
        assert FontFormat.WOFF2.extension == ".woff2"
        assert FontFormat.EOT.extension == ".eot"

    def test_from_string(self):
        assert FontFormat("ttf") is FontFormat.TTF


class TestGlyphAsset:
    """Tests for GlyphAsset."""

    def test_text_decodes_utf8(self):
        asset = GlyphAsset("abc", "icon.svg", "abc.svg", "<svg>é</svg>".encode())
        assert asset.text() == "<svg>é</svg>"

    def test_repr_hides_content(self):
        asset = GlyphAsset("abc", "icon.svg", "abc.svg", b"secret-bytes")
        assert "secret-bytes" not in repr(asset)


class TestMappingAndRequest:
    """Tests for ResolvedGlyph and SynthesisRequest."""

    def test_request_defaults_to_no_mappings(self):
        assert SynthesisRequest("demo").mappings == []

    def test_resolved_pair(self):
        asset = GlyphAsset("abc", "icon.svg", "abc.svg", b"<svg/>")
        assert ResolvedGlyph("A", asset).to_pair() == ("A", "<svg/>")


class TestCleanupReport:
    """Tests for CleanupReport."""

    def test_empty_report_is_success(self):
        report = CleanupReport()
        assert report.success
        assert report.removed == 0

    def test_failure_marks_unsuccessful(self):
        report = CleanupReport()
        report.record_removed()
        report.record_failure("a.svg", "permission denied")
        assert not report.success
        assert report.removed == 1
        assert report.failed == [("a.svg", "permission denied")]
