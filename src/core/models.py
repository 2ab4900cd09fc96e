"""
Data classes shared by the loader, the query layer and the renderer.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional


@dataclass(frozen=True)
class Coordinates:
    """Signed decimal latitude/longitude."""
    lat: float
    lng: float


@dataclass
class CountryRecord:
    """Data class representing one normalized factbook record."""
    code: str
    slug: str
    flag_code: str
    name: str
    region: str
    categories: Dict[str, Any] = field(default_factory=dict)

    def category(self, name: str) -> Dict[str, Any]:
        """Get a category payload, or an empty dict when absent or malformed."""
        value = self.categories.get(name)
        return value if isinstance(value, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dataset-shaped dictionary served by the data API."""
        return {
            'slug': self.slug,
            'code': self.code,
            'flagCode': self.flag_code,
            'name': self.name,
            'region': self.region,
            **self.categories
        }


@dataclass
class CountryIndexRecord:
    """Lightweight projection of a country for listings and search."""
    slug: str
    code: str
    flag_code: str
    name: str
    region: str
    population: Optional[str] = None
    capital: Optional[str] = None
    area: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'slug': self.slug,
            'code': self.code,
            'flagCode': self.flag_code,
            'name': self.name,
            'region': self.region,
        }
        for key in ('population', 'capital', 'area'):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        return data


@dataclass
class Region:
    """A region partition with its member countries."""
    id: str
    display_name: str
    countries: List[CountryIndexRecord] = field(default_factory=list)

    @property
    def country_count(self) -> int:
        return len(self.countries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.id,
            'displayName': self.display_name,
            'countries': [country.to_dict() for country in self.countries]
        }


@dataclass
class SearchResult:
    """A ranked search hit."""
    record: CountryIndexRecord
    score: float
    match_field: str

    @property
    def slug(self) -> str:
        return self.record.slug

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def region(self) -> str:
        return self.record.region

    def to_dict(self) -> Dict[str, Any]:
        return {
            'slug': self.slug,
            'name': self.name,
            'region': self.region,
            'flagCode': self.record.flag_code,
            'capital': self.record.capital,
            'matchField': self.match_field,
            'score': round(self.score, 2)
        }
