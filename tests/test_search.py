"""
Tests for the fuzzy search index.
"""

import pytest

from src.core.search import SearchIndex


@pytest.fixture
def index(factbook):
    return SearchIndex(factbook.get_country_index())


class TestSearch:

    def test_empty_query(self, index):
        assert index.search("") == []
        assert index.search("   ") == []

    def test_exact_name_first(self, index):
        assert index.search("Japan")[0].slug == "japan"

    def test_exact_name_beats_longer_name(self, index):
        results = index.search("Niger")
        assert results[0].name == "Niger"
        assert "Nigeria" in [r.name for r in results]

    def test_typo_tolerance(self, index):
        assert "japan" in [r.slug for r in index.search("Jpan")]

    def test_case_and_accents_ignored(self, index):
        assert index.search("fRANCE")[0].slug == "france"
        assert index.search("Frânce")[0].slug == "france"

    def test_matches_capital(self, index):
        results = index.search("Tokyo")
        assert results[0].slug == "japan"
        assert results[0].match_field == "capital"

    def test_matches_region(self, index):
        slugs = [r.slug for r in index.search("south-america")]
        assert "brazil" in slugs

    def test_no_match(self, index):
        assert index.search("qwxzv") == []

    def test_result_limit(self, factbook):
        loose = SearchIndex(factbook.get_country_index(), threshold=1.0, limit=2)
        assert len(loose.search("a")) == 2

    def test_default_limit(self, factbook):
        loose = SearchIndex(factbook.get_country_index(), threshold=1.0)
        assert len(loose.search("a")) == 8

    def test_result_dict(self, index):
        data = index.search("Germany")[0].to_dict()
        assert data["slug"] == "germany"
        assert data["flagCode"] == "de"
        assert data["capital"] == "Berlin"
        assert data["matchField"] == "name"


class TestIndexMaintenance:

    def test_rebuild_only_on_new_records(self, factbook):
        records = factbook.get_country_index()
        index = SearchIndex(records)
        assert index.rebuild(records) is False
        assert index.rebuild(list(records[:3])) is True
        assert len(index) == 3

    def test_score_cutoff(self, factbook):
        records = factbook.get_country_index()
        assert SearchIndex(records, threshold=0.3).score_cutoff == pytest.approx(70.0)
        assert SearchIndex(records, threshold=0.0).score_cutoff == pytest.approx(100.0)

    def test_factbook_search_uses_settings(self, factbook):
        assert factbook.search("Brazil")[0].slug == "brazil"
        assert factbook.search("") == []
