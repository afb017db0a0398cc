"""Unit tests for the catalog index"""

import logging

import pytest

from catalog_matcher.matching.index import CatalogIndex, build_index
from catalog_matcher.matching.normalizer import normalize_code, normalize_header
from catalog_matcher.models.product import ProductRecord


@pytest.fixture
def sample_products():
    """Small catalog snapshot covering every code scheme"""
    return [
        ProductRecord(
            id=1,
            header="Кабель ВВГнг 3×2,5 мм²",
            articul="elc 100",
            sync_uid="sync-1",
            flat_codes={"manufacturer": "MNF-1", "etm": "ETM77"},
            analog_codes=["AN-1"],
        ),
        ProductRecord(id=2, header="Кабель ВВГнг 3x4", articul="ELC200"),
        ProductRecord(id=3, header="Автомат ABB S201 C16", articul="S201C16"),
    ]


class TestCatalogIndexBuild:
    """Test suite for index construction"""

    @pytest.mark.unit
    def test_size_and_membership(self, sample_products):
        """Test product map and load order"""
        index = build_index(sample_products)

        assert len(index) == 3
        assert 2 in index
        assert 99 not in index
        assert index.get(3).header == "Автомат ABB S201 C16"
        assert index.get(99) is None
        assert list(index.product_ids()) == [1, 2, 3]
        assert index.position(3) == 2

    @pytest.mark.unit
    def test_empty_catalog(self):
        """Test that an empty snapshot gives an empty index"""
        index = CatalogIndex.build([])

        assert len(index) == 0
        assert list(index.product_ids()) == []
        assert index.lookup_code("ELC100") == ()
        assert index.postings("КАБЕЛЬ") == frozenset()

    @pytest.mark.unit
    def test_code_lookup_covers_all_schemes(self, sample_products):
        """Test articul, sync uid, flat and analog codes"""
        index = build_index(sample_products)

        for raw in ["ELC100", "sync-1", "mnf-1", "ETM77", "an-1"]:
            hits = index.lookup_code(normalize_code(raw))
            assert [p.id for p in hits] == [1], raw

    @pytest.mark.unit
    def test_code_collision(self):
        """Test that products sharing a normalized code are all returned"""
        index = build_index(
            [
                ProductRecord(id=1, header="Автомат A", articul="ELC-200"),
                ProductRecord(id=2, header="Автомат B", articul="elc-200"),
            ]
        )

        assert [p.id for p in index.lookup_code("ELC-200")] == [1, 2]

    @pytest.mark.unit
    def test_same_code_in_two_schemes_is_indexed_once(self):
        """Test that one product is not its own collision"""
        index = build_index(
            [
                ProductRecord(
                    id=1,
                    header="Автомат A",
                    articul="ELC300",
                    flat_codes={"elcom": "elc300"},
                )
            ]
        )

        assert len(index.lookup_code("ELC300")) == 1

    @pytest.mark.unit
    def test_empty_codes_not_indexed(self):
        """Test that codes normalizing to nothing are skipped"""
        index = build_index(
            [ProductRecord(id=1, header="Автомат A", articul="!!!", analog_codes=["  "])]
        )

        assert index.lookup_code("") == ()

    @pytest.mark.unit
    def test_header_lookup(self, sample_products):
        """Test the exact normalized header map"""
        index = build_index(sample_products)

        assert index.normalized_header(1) == "КАБЕЛЬ ВВГНГ 3X2 5 MM2"

        hits = index.lookup_header(normalize_header("кабель ввгнг 3x2,5 кв.мм"))
        assert [p.id for p in hits] == [1]

        assert index.lookup_header(normalize_header("кабель ввгнг 3x2,5")) == ()

    @pytest.mark.unit
    def test_empty_header_not_indexed(self):
        """Test that a header normalizing to nothing is not indexed"""
        index = build_index([ProductRecord(id=1, header="!!!")])

        assert index.normalized_header(1) == ""
        assert index.lookup_header("") == ()
        assert index.header_tokens(1) == ()

    @pytest.mark.unit
    def test_postings(self, sample_products):
        """Test token posting lists"""
        index = build_index(sample_products)

        assert index.postings("КАБЕЛЬ") == frozenset({1, 2})
        assert index.postings("ABB") == frozenset({3})
        assert index.postings("НЕТ") == frozenset()

    @pytest.mark.unit
    def test_short_tokens_dropped(self):
        """Test that one-character tokens get no posting list"""
        index = build_index([ProductRecord(id=1, header="Лампа Е 27 W")])

        assert index.header_tokens(1) == ("ЛАМПА", "27")
        assert index.postings("Е") == frozenset()
        assert index.postings("W") == frozenset()

    @pytest.mark.unit
    def test_duplicate_id_keeps_first(self, caplog):
        """Test that a repeated product ID is skipped with a warning"""
        with caplog.at_level(logging.WARNING):
            index = build_index(
                [
                    ProductRecord(id=7, header="Первый", articul="AA100"),
                    ProductRecord(id=7, header="Второй", articul="BB200"),
                ]
            )

        assert len(index) == 1
        assert index.get(7).header == "Первый"
        assert index.lookup_code("BB200") == ()
        assert "Duplicate product id 7" in caplog.text
