"""Unit tests for mapping validation."""

from unittest.mock import Mock

import pytest

from glyphpack.core import MappingValidator
from glyphpack.domain import GlyphAsset, GlyphMapping
from glyphpack.exceptions import (
    DuplicateCharacterError,
    GlyphNotFoundError,
    InvalidCharacterError,
    NoMappingsError,
)
from glyphpack.storage import storage_name_for


@pytest.fixture
def stocked_store(memory_store):
    """Store holding assets 'home' and 'search'."""
    for asset_id in ("home", "search"):
        memory_store.put(
            GlyphAsset(asset_id, f"{asset_id}.svg", storage_name_for(asset_id), b"<svg/>")
        )
    return memory_store


class TestMappingValidator:
    """Tests for MappingValidator."""

    def test_resolves_in_order(self, stocked_store):
        validator = MappingValidator(stocked_store)

        resolved = validator.validate(
            [GlyphMapping("search", "\ue002"), GlyphMapping("home", "\ue001")]
        )

        assert [(g.char, g.asset.asset_id) for g in resolved] == [
            ("\ue002", "search"),
            ("\ue001", "home"),
        ]

    def test_same_asset_for_two_characters(self, stocked_store):
        """Test one asset may back several characters."""
        resolved = MappingValidator(stocked_store).validate(
            [GlyphMapping("home", "A"), GlyphMapping("home", "B")]
        )
        assert len(resolved) == 2

    @pytest.mark.parametrize("mappings", [None, []])
    def test_no_mappings(self, stocked_store, mappings):
        with pytest.raises(NoMappingsError, match="No mappings provided"):
            MappingValidator(stocked_store).validate(mappings)

    def test_unknown_file_id(self, stocked_store):
        with pytest.raises(GlyphNotFoundError) as exc_info:
            MappingValidator(stocked_store).validate(
                [GlyphMapping("home", "A"), GlyphMapping("missing", "B")]
            )
        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "File not found: missing.svg"

    @pytest.mark.parametrize(
        "char", ["", "AB", "\x00", "\x01", "\x1f", "\ud800", "\udfff", "\ufffe", "\uffff"]
    )
    def test_invalid_character(self, stocked_store, char):
        with pytest.raises(InvalidCharacterError):
            MappingValidator(stocked_store).validate([GlyphMapping("home", char)])

    @pytest.mark.parametrize("char", ["\t", "\n", "\r", " ", "\ufffd", "\U0010ffff"])
    def test_edge_characters_are_valid(self, stocked_store, char):
        resolved = MappingValidator(stocked_store).validate([GlyphMapping("home", char)])
        assert resolved[0].char == char

    def test_control_character_is_rejected_before_lookup(self):
        store = Mock()

        with pytest.raises(InvalidCharacterError) as exc_info:
            MappingValidator(store).validate([GlyphMapping("home", "\x01")])

        assert exc_info.value.status_code == 400
        store.get.assert_not_called()

    def test_astral_character_is_valid(self, stocked_store):
        resolved = MappingValidator(stocked_store).validate(
            [GlyphMapping("home", "\U0001f600")]
        )
        assert resolved[0].char == "\U0001f600"

    def test_duplicate_character(self, stocked_store):
        with pytest.raises(DuplicateCharacterError, match="U\\+E001"):
            MappingValidator(stocked_store).validate(
                [GlyphMapping("home", "\ue001"), GlyphMapping("search", "\ue001")]
            )

    def test_stops_at_first_failure(self):
        """Test later mappings are not looked up after a miss."""
        store = Mock()
        store.get.return_value = None

        with pytest.raises(GlyphNotFoundError):
            MappingValidator(store).validate(
                [GlyphMapping("a", "A"), GlyphMapping("b", "B")]
            )

        store.get.assert_called_once_with("a")
