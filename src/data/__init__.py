"""
Data module - Dataset loading and download.
"""

from .loader import (
    set_data_dir,
    get_data_dir,
    get_region_dirs,
    parse_country_file,
    extract_country_name,
    load_all_countries
)
from .fetcher import download_dataset, DatasetDownloadError

__all__ = [
    'set_data_dir',
    'get_data_dir',
    'get_region_dirs',
    'parse_country_file',
    'extract_country_name',
    'load_all_countries',
    'download_dataset',
    'DatasetDownloadError'
]
