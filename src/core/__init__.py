"""
Core module - Records, field extraction and search.

The query layer (``src.core.queries``) and the static exporter
(``src.core.site_builder``) depend on the data package and are imported
from their own modules.
"""

from .models import CountryRecord, CountryIndexRecord, Region, Coordinates, SearchResult
from .field_extractor import (
    extract_field_value,
    parse_coordinates,
    get_coordinates,
    build_index_record
)
from .search import SearchIndex

__all__ = [
    'CountryRecord',
    'CountryIndexRecord',
    'Region',
    'Coordinates',
    'SearchResult',
    'extract_field_value',
    'parse_coordinates',
    'get_coordinates',
    'build_index_record',
    'SearchIndex'
]
