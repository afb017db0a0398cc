"""Unit tests for content keys"""

import pytest

from catalog_matcher.models.items import ExtractionItem
from catalog_matcher.utils.content_hash import content_hash, item_key


class TestContentHash:
    """Test suite for content hashing"""

    @pytest.mark.unit
    def test_stable_and_short(self):
        """Test key length and repeatability"""
        key = content_hash("email_text", "Кабель 100 шт", 100.0)

        assert len(key) == 16
        assert key == content_hash("email_text", "Кабель 100 шт", 100.0)
        assert len(content_hash("x", length=8)) == 8

    @pytest.mark.unit
    def test_integral_float_matches_int(self):
        """Test that 100.0 and 100 give the same key"""
        assert content_hash(100.0) == content_hash(100)
        assert content_hash(1.5) != content_hash(15)

    @pytest.mark.unit
    def test_none_and_containers(self):
        """Test canonical forms of None, dicts and models"""
        assert content_hash(None) != content_hash("")
        assert content_hash({"b": 1, "a": 2}) == content_hash({"a": 2, "b": 1})

        item = ExtractionItem(line_no=1, source="pdf", raw_line="Щиток")
        assert content_hash(item) == content_hash(item.model_dump(mode="json"))

    @pytest.mark.unit
    def test_item_key_ignores_line_number(self):
        """Test that the same line at another position is a duplicate"""
        first = ExtractionItem(line_no=1, source="xlsx", raw_line="Щиток 2 шт", qty=2)
        second = ExtractionItem(line_no=9, source="xlsx", raw_line="Щиток 2 шт", qty=2.0)
        other = ExtractionItem(line_no=9, source="pdf", raw_line="Щиток 2 шт", qty=2.0)

        assert item_key(first) == item_key(second)
        assert item_key(first) != item_key(other)

    @pytest.mark.unit
    def test_unknown_source_rejected(self):
        """Test that only known extraction sources are accepted"""
        with pytest.raises(ValueError):
            ExtractionItem(line_no=1, source="email", raw_line="Щиток 2 шт")
