"""
Tests for the read-only query layer.
"""

import pytest

from src.core import queries
from src.core.models import CountryRecord
from src.core.queries import Factbook
from src.core.regions import summarize_region, get_region_info
from tests.conftest import VALID_RECORD_COUNT


class TestCountryQueries:

    def test_all_countries(self, factbook):
        countries = factbook.get_all_countries()
        assert len(countries) == VALID_RECORD_COUNT
        assert len(factbook) == VALID_RECORD_COUNT

    def test_index_matches_full_list(self, factbook):
        countries = factbook.get_all_countries()
        index = factbook.get_country_index()
        assert [c.slug for c in index] == [c.slug for c in countries]
        assert [c.code for c in index] == [c.code for c in countries]

    def test_returned_lists_are_copies(self, factbook):
        factbook.get_all_countries().clear()
        assert len(factbook.get_all_countries()) == VALID_RECORD_COUNT

    def test_by_slug(self, factbook):
        japan = factbook.get_country_by_slug("japan")
        assert japan.code == "ja"
        assert japan.name == "Japan"

    def test_by_slug_is_case_sensitive(self, factbook):
        assert factbook.get_country_by_slug("Japan") is None
        assert factbook.get_country_by_slug("atlantis") is None

    def test_every_slug_round_trips(self, factbook):
        for country in factbook.get_all_countries():
            assert factbook.get_country_by_slug(country.slug) is country

    def test_by_code(self, factbook):
        assert factbook.get_country_by_code("gm").name == "Germany"
        assert factbook.get_country_by_code("qq") is None

    def test_index_omits_missing_capital(self, factbook):
        nigeria = next(c for c in factbook.get_country_index() if c.code == "ni")
        assert nigeria.capital is None
        assert nigeria.population == "236,747,130 (2024 est.)"


class TestRegionQueries:

    def test_regions_sorted_by_display_name(self, factbook):
        names = [r.display_name for r in factbook.get_all_regions()]
        assert names == [
            "Africa",
            "Central America & Caribbean",
            "East & Southeast Asia",
            "Europe",
            "Oceans",
            "South America",
        ]

    def test_regions_partition_the_countries(self, factbook):
        regions = factbook.get_all_regions()
        assert sum(r.country_count for r in regions) == VALID_RECORD_COUNT
        for region in regions:
            for country in region.countries:
                assert country.region == region.id

    def test_countries_by_region_in_load_order(self, factbook):
        europe = factbook.get_countries_by_region("europe")
        assert [c.name for c in europe] == ["European Union", "France", "Germany"]

    def test_unknown_region(self, factbook):
        assert factbook.get_countries_by_region("atlantis") == []
        assert factbook.get_region("atlantis") is None

    def test_unmapped_region_uses_raw_id(self):
        factbook = Factbook([
            CountryRecord(code="qq", slug="mars-base", flag_code="qq", name="Mars Base", region="mars"),
        ])
        region = factbook.get_all_regions()[0]
        assert region.id == "mars"
        assert region.display_name == "mars"


class TestGlobalFactbook:

    @pytest.fixture(autouse=True)
    def reset_global(self, factbook):
        queries.set_factbook(factbook)
        yield
        queries.set_factbook(None)

    def test_convenience_functions(self):
        assert queries.get_country_by_slug("france").code == "fr"
        assert queries.get_country_by_code("br").slug == "brazil"
        assert len(queries.get_all_countries()) == VALID_RECORD_COUNT
        assert len(queries.get_country_index()) == VALID_RECORD_COUNT
        assert len(queries.get_all_regions()) == 6
        assert [c.code for c in queries.get_countries_by_region("oceans")] == ["xo"]


class TestRegionStats:

    def test_summarize_region(self, factbook):
        stats = summarize_region(factbook.get_countries_by_region("europe"))
        assert stats.country_count == 3
        assert stats.total_population == 84119100
        assert stats.population_label == "84.1M"
        assert stats.area_label == "357,022 km²"

    def test_year_not_added_to_totals(self, factbook):
        stats = summarize_region(factbook.get_countries_by_region("east-n-southeast-asia"))
        assert stats.total_population == 123201945 + 1416043270
        assert stats.population_label == "1.5B"

    def test_empty_region(self):
        stats = summarize_region([])
        assert stats.population_label is None
        assert stats.area_label is None

    def test_region_info_fallback(self):
        assert get_region_info("europe").map_center.zoom == 4
        assert "mars" in get_region_info("mars").description
