"""
Utils module - Utility functions and helpers.
"""

from .country_code_map import (
    CountryCodeMapper,
    FIPS_TO_ISO,
    get_mapper,
    lookup_flag_code
)
from .text_utils import (
    strip_html,
    clean_text,
    slugify,
    format_field_name
)

__all__ = [
    'CountryCodeMapper',
    'FIPS_TO_ISO',
    'get_mapper',
    'lookup_flag_code',
    'strip_html',
    'clean_text',
    'slugify',
    'format_field_name'
]
