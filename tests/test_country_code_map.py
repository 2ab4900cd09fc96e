"""
Tests for the FIPS -> ISO flag code map.
"""

import pytest

from src.utils.country_code_map import (
    FIPS_TO_ISO,
    CountryCodeMapper,
    get_mapper,
    lookup_flag_code
)


class TestLookupFlagCode:
    """lookup_flag_code behaviour."""

    @pytest.mark.parametrize("fips,iso", [
        ("ja", "jp"),
        ("gm", "de"),
        ("uk", "gb"),
        ("ch", "cn"),
        ("sz", "ch"),
        ("sf", "za"),
        ("us", "us"),
        ("ga", "gm"),
    ])
    def test_known_codes(self, fips, iso):
        assert lookup_flag_code(fips) == iso

    def test_case_insensitive(self):
        assert lookup_flag_code("UK") == "gb"
        assert lookup_flag_code("Gm") == "de"

    def test_every_table_entry(self):
        for fips, iso in FIPS_TO_ISO.items():
            assert lookup_flag_code(fips.upper()) == iso

    def test_mapped_to_empty_means_no_flag(self):
        assert lookup_flag_code("xo") == ""
        assert lookup_flag_code("oo") == ""

    def test_unknown_code_passes_through_lowercased(self):
        assert lookup_flag_code("QZ") == "qz"

    def test_unknown_code_is_not_trimmed(self):
        assert lookup_flag_code(" QZ ") == " qz "
        assert lookup_flag_code(" JA") == " ja"

    def test_empty_input(self):
        assert lookup_flag_code("") == ""
        assert lookup_flag_code(None) == ""


class TestCountryCodeMapper:
    """Reverse lookups and flag bookkeeping."""

    def test_many_to_one(self):
        mapper = get_mapper()
        assert mapper.get_fips_codes("ps") == ["gz", "we"]

    def test_is_known_and_has_flag(self):
        mapper = get_mapper()
        assert mapper.is_known("JA")
        assert mapper.has_flag("ja")
        assert mapper.is_known("xo")
        assert not mapper.has_flag("xo")
        assert not mapper.is_known("qz")

    def test_codes_without_flag(self):
        missing = get_mapper().codes_without_flag()
        assert "xo" in missing
        assert "zn" in missing
        assert "ja" not in missing

    def test_custom_table(self):
        mapper = CountryCodeMapper({"AB": "XY"})
        assert mapper.get_iso_code("ab") == "xy"
        assert mapper.get_iso_code("cd") == "cd"

    def test_iso_values_are_lowercase_pairs(self):
        for iso in FIPS_TO_ISO.values():
            assert iso == "" or (len(iso) == 2 and iso.islower())
