"""
Query Layer - Read-only access to the loaded factbook

The dataset is loaded once into an immutable tuple; every query is a pure
read over it. Lookup misses return None so that callers can render their
standard "not found" response.
"""

import logging
from pathlib import Path
from typing import Optional, List, Dict, Tuple, Iterable

from src.core.field_extractor import build_index_record
from src.core.models import CountryRecord, CountryIndexRecord, Region, SearchResult
from src.core.regions import get_region_display_name
from src.core.search import SearchIndex, DEFAULT_THRESHOLD, DEFAULT_LIMIT
from src.data.loader import load_all_countries
from src.utils.text_utils import collation_key

logger = logging.getLogger(__name__)


class Factbook:
    """
    In-memory view over every loaded country record.

    Derived views (index records, regions, search index) are computed on
    first use and reused afterwards.
    """

    def __init__(
        self,
        countries: Iterable[CountryRecord],
        search_threshold: float = DEFAULT_THRESHOLD,
        search_limit: int = DEFAULT_LIMIT
    ):
        self._countries: Tuple[CountryRecord, ...] = tuple(countries)
        self._by_slug: Dict[str, CountryRecord] = {}
        self._by_code: Dict[str, CountryRecord] = {}
        for country in self._countries:
            self._by_slug.setdefault(country.slug, country)
            self._by_code.setdefault(country.code, country)

        self._search_threshold = search_threshold
        self._search_limit = search_limit
        self._index: Optional[Tuple[CountryIndexRecord, ...]] = None
        self._regions: Optional[Tuple[Region, ...]] = None
        self._search_index: Optional[SearchIndex] = None

    @classmethod
    def load(cls, data_dir: Optional[Path] = None, **kwargs) -> "Factbook":
        """Load the dataset from disk."""
        return cls(load_all_countries(data_dir), **kwargs)

    def __len__(self) -> int:
        return len(self._countries)

    def get_all_countries(self) -> List[CountryRecord]:
        """Get all countries, sorted by name."""
        return list(self._countries)

    def get_country_index(self) -> List[CountryIndexRecord]:
        """Get lightweight summaries, in the same order as the full list."""
        return list(self._index_records())

    def get_country_by_slug(self, slug: str) -> Optional[CountryRecord]:
        """Get a single country by slug (case-sensitive)."""
        return self._by_slug.get(slug)

    def get_country_by_code(self, code: str) -> Optional[CountryRecord]:
        """Get a single country by its dataset code."""
        return self._by_code.get(code)

    def get_all_regions(self) -> List[Region]:
        """Get all regions with their countries, sorted by display name."""
        if self._regions is None:
            grouped: Dict[str, List[CountryIndexRecord]] = {}
            for record in self._index_records():
                grouped.setdefault(record.region, []).append(record)

            regions = [
                Region(id=region_id, display_name=get_region_display_name(region_id), countries=members)
                for region_id, members in grouped.items()
            ]
            regions.sort(key=lambda r: collation_key(r.display_name))
            self._regions = tuple(regions)
        return list(self._regions)

    def get_region(self, region_id: str) -> Optional[Region]:
        """Get one region by id."""
        for region in self.get_all_regions():
            if region.id == region_id:
                return region
        return None

    def get_countries_by_region(self, region_id: str) -> List[CountryIndexRecord]:
        """Get the countries of one region, in load order."""
        return [record for record in self._index_records() if record.region == region_id]

    def search(self, query: str) -> List[SearchResult]:
        """Fuzzy search over names, capitals and regions."""
        if self._search_index is None:
            self._search_index = SearchIndex(
                self._index_records(),
                threshold=self._search_threshold,
                limit=self._search_limit
            )
        return self._search_index.search(query)

    def _index_records(self) -> Tuple[CountryIndexRecord, ...]:
        if self._index is None:
            self._index = tuple(build_index_record(country) for country in self._countries)
        return self._index


# Global instance for convenience
_factbook: Optional[Factbook] = None


def set_factbook(factbook: Optional[Factbook]) -> None:
    """Replace (or clear) the global Factbook instance."""
    global _factbook
    _factbook = factbook


def get_factbook() -> Factbook:
    """Get or load the global Factbook instance."""
    global _factbook
    if _factbook is None:
        from config.settings import get_settings
        settings = get_settings()
        _factbook = Factbook.load(
            settings.data_dir,
            search_threshold=settings.search_threshold,
            search_limit=settings.search_limit
        )
    return _factbook


def get_all_countries() -> List[CountryRecord]:
    """Convenience function to get all countries."""
    return get_factbook().get_all_countries()


def get_country_index() -> List[CountryIndexRecord]:
    """Convenience function to get the country index."""
    return get_factbook().get_country_index()


def get_country_by_slug(slug: str) -> Optional[CountryRecord]:
    """Convenience function to look a country up by slug."""
    return get_factbook().get_country_by_slug(slug)


def get_country_by_code(code: str) -> Optional[CountryRecord]:
    """Convenience function to look a country up by code."""
    return get_factbook().get_country_by_code(code)


def get_all_regions() -> List[Region]:
    """Convenience function to get all regions."""
    return get_factbook().get_all_regions()


def get_countries_by_region(region_id: str) -> List[CountryIndexRecord]:
    """Convenience function to get the countries of a region."""
    return get_factbook().get_countries_by_region(region_id)
