"""
Region metadata: display names, page copy and aggregate statistics.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional

from src.core.models import CountryIndexRecord
from src.utils.text_utils import first_number

# Region mapping from folder names to display names
REGION_DISPLAY_NAMES: Dict[str, str] = {
    'africa': 'Africa',
    'antarctica': 'Antarctica',
    'australia-oceania': 'Australia & Oceania',
    'central-america-n-caribbean': 'Central America & Caribbean',
    'central-asia': 'Central Asia',
    'east-n-southeast-asia': 'East & Southeast Asia',
    'europe': 'Europe',
    'middle-east': 'Middle East',
    'north-america': 'North America',
    'south-america': 'South America',
    'south-asia': 'South Asia',
    'oceans': 'Oceans',
    'world': 'World',
}

# Regions left out of "browse by region" listings
UNLISTED_REGIONS = {'world', 'meta'}


@dataclass(frozen=True)
class MapCenter:
    lat: float
    lng: float
    zoom: int = 2


@dataclass
class RegionInfo:
    """Descriptive copy shown on a region page."""
    description: str
    facts: List[str] = field(default_factory=list)
    map_center: MapCenter = MapCenter(0, 0, 2)


REGION_INFO: Dict[str, RegionInfo] = {
    'africa': RegionInfo(
        'The second-largest and second-most populous continent, home to 54 countries and over 1.3 billion people.',
        ['Africa has over 2,000 languages spoken across the continent',
         'The Sahara Desert is larger than the entire United States',
         'Mount Kilimanjaro is the world\'s tallest free-standing mountain'],
        MapCenter(0, 20, 3)),
    'europe': RegionInfo(
        'A continent of rich history, diverse cultures, and economic powerhouses spanning 55 countries.',
        ['Home to the world\'s oldest republic, San Marino',
         'The EU is a single market of 27 member states',
         'Europe has over 400 UNESCO World Heritage Sites'],
        MapCenter(50, 10, 4)),
    'east-n-southeast-asia': RegionInfo(
        'A dynamic region of ancient civilizations and modern megacities, home to over 2.3 billion people.',
        ['Home to 5 of the world\'s 10 largest cities by population',
         'Produces over half of global manufacturing output',
         'Birthplace of rice cultivation'],
        MapCenter(20, 110, 3)),
    'north-america': RegionInfo(
        'From Arctic tundra to tropical beaches, three major countries spanning 9.5 million square miles.',
        ['Canada has the world\'s longest coastline',
         'Mexico City is the oldest capital in the Americas',
         'Contains 5 of the world\'s 25 largest lakes'],
        MapCenter(45, -100, 3)),
    'south-america': RegionInfo(
        'A continent of superlatives: the Amazon, the Andes, and incredible biodiversity across 12 countries.',
        ['The Andes is the world\'s longest continental mountain range',
         'Home to a third of all bird species on Earth'],
        MapCenter(-15, -60, 3)),
    'south-asia': RegionInfo(
        'The most densely populated region on Earth, home to 1.9 billion people across 9 countries.',
        ['Birthplace of Hinduism, Buddhism, Jainism, and Sikhism',
         'Home to 8 of the world\'s 10 highest mountain peaks'],
        MapCenter(22, 78, 4)),
    'middle-east': RegionInfo(
        'The cradle of civilization, where ancient history meets modern innovation across 19 nations.',
        ['Home to some of the world\'s oldest continuously inhabited cities',
         'The Dead Sea shore is the lowest land point on Earth'],
        MapCenter(29, 47, 4)),
    'central-asia': RegionInfo(
        'The historic Silk Road crossroads, featuring vast steppes and ancient cities across 6 nations.',
        ['Kazakhstan is the world\'s largest landlocked country',
         'Kyrgyzstan is about 90% mountainous'],
        MapCenter(45, 65, 4)),
    'australia-oceania': RegionInfo(
        'Thousands of islands scattered across the Pacific, from Australia to tiny atolls.',
        ['Oceania contains over 25,000 islands',
         'The Great Barrier Reef is the world\'s largest coral reef system'],
        MapCenter(-25, 140, 3)),
    'central-america-n-caribbean': RegionInfo(
        'A bridge between continents, featuring rainforests, ancient ruins, and turquoise waters.',
        ['The Caribbean has over 7,000 islands',
         'The Panama Canal connects the Atlantic and Pacific oceans'],
        MapCenter(15, -80, 4)),
    'antarctica': RegionInfo(
        'The coldest, driest, and windiest continent, dedicated to science and peace.',
        ['Holds about 90% of the world\'s ice',
         'Over 30 countries operate research stations'],
        MapCenter(-75, 0, 2)),
    'oceans': RegionInfo(
        'The world\'s major oceanic regions and international waters.',
        ['Oceans cover 71% of Earth\'s surface',
         'The Pacific Ocean is larger than all land combined'],
        MapCenter(0, -30, 2)),
    'world': RegionInfo(
        'Global statistics and international organizations.',
        ['193 UN member states',
         'Over 7,000 languages spoken worldwide'],
        MapCenter(30, 0, 2)),
}


def get_region_display_name(region_id: str) -> str:
    """Human label for a region id; unmapped ids display as themselves."""
    return REGION_DISPLAY_NAMES.get(region_id, region_id)


def get_region_info(region_id: str) -> RegionInfo:
    """Page copy for a region, with a generic fallback."""
    info = REGION_INFO.get(region_id)
    if info is None:
        info = RegionInfo(f"Explore the countries of {get_region_display_name(region_id)}")
    return info


@dataclass
class RegionStats:
    country_count: int
    total_population: int
    total_area: int

    @property
    def population_label(self) -> Optional[str]:
        if self.total_population <= 0:
            return None
        if self.total_population >= 1_000_000_000:
            return f"{self.total_population / 1_000_000_000:.1f}B"
        return f"{self.total_population / 1_000_000:.1f}M"

    @property
    def area_label(self) -> Optional[str]:
        if self.total_area <= 0:
            return None
        if self.total_area >= 1_000_000:
            return f"{self.total_area / 1_000_000:.1f}M km²"
        return f"{self.total_area:,} km²"


def summarize_region(countries: List[CountryIndexRecord]) -> RegionStats:
    """Sum the leading population and area figures of the member countries."""
    return RegionStats(
        country_count=len(countries),
        total_population=sum(first_number(c.population) or 0 for c in countries),
        total_area=sum(first_number(c.area) or 0 for c in countries),
    )
