"""
Data Loader Module - Factbook JSON Normalizer

Reads the factbook.json tree (one directory per region, one JSON file per
country or territory, named by its FIPS code) and turns every file into a
CountryRecord with a display name, a URL slug and a flag code.
"""

import json
import logging
from pathlib import Path
from typing import Optional, List, Dict, Any

from src.core.models import CountryRecord
from src.utils.country_code_map import lookup_flag_code
from src.utils.text_utils import strip_tags, slugify, collation_key

logger = logging.getLogger(__name__)

# Partition holding dataset metadata, not countries
META_PARTITION = "meta"

# Default path (can be overridden via config)
_DATA_DIR: Optional[Path] = None


def set_data_dir(path: Path) -> None:
    """Set the dataset root directory."""
    global _DATA_DIR
    _DATA_DIR = Path(path)


def get_data_dir() -> Path:
    """Get the dataset root directory."""
    global _DATA_DIR
    if _DATA_DIR is None:
        from config.settings import get_settings
        _DATA_DIR = get_settings().data_dir
    return _DATA_DIR


def get_region_dirs(data_dir: Optional[Path] = None) -> List[str]:
    """Get the region partition names, excluding the meta partition."""
    root = Path(data_dir) if data_dir else get_data_dir()
    if not root.is_dir():
        raise FileNotFoundError(f"Factbook data directory not found: {root}")

    return sorted(
        entry.name for entry in root.iterdir()
        if entry.is_dir() and entry.name != META_PARTITION
    )


def _name_form(country_name: Dict[str, Any], form: str) -> Optional[str]:
    """Read one 'conventional ... form' entry, ignoring empty and 'none' values."""
    value = country_name.get(form)
    if isinstance(value, dict):
        value = value.get("text")
    if not isinstance(value, str):
        return None

    value = value.strip()
    if not value or value.lower() == "none":
        return None
    return value


def extract_country_name(data: Dict[str, Any], code: str) -> str:
    """
    Derive the display name of a record.

    Prefers the conventional short form, then the conventional long form,
    then the upper-cased code. Markup is stripped from the result.
    """
    government = data.get("Government")
    country_name = government.get("Country name") if isinstance(government, dict) else None

    name = None
    if isinstance(country_name, dict):
        name = (_name_form(country_name, "conventional short form")
                or _name_form(country_name, "conventional long form"))

    name = strip_tags(name or code.upper()).strip()
    return name or code.upper()


def parse_country_file(file_path: Path, region: str) -> Optional[CountryRecord]:
    """
    Parse a single country JSON file.

    Returns:
        CountryRecord, or None when the file cannot be read or parsed
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error(f"Error parsing {file_path}: {e}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Error parsing {file_path}: expected a JSON object, got {type(data).__name__}")
        return None

    code = Path(file_path).stem.lower()
    name = extract_country_name(data, code)

    return CountryRecord(
        code=code,
        slug=slugify(name) or code,
        flag_code=lookup_flag_code(code),
        name=name,
        region=region,
        categories=data
    )


def _disambiguate_slugs(countries: List[CountryRecord]) -> None:
    """Give every record a unique slug; later duplicates get the code appended."""
    seen: Dict[str, CountryRecord] = {}
    for country in countries:
        if country.slug in seen:
            original = seen[country.slug]
            new_slug = f"{country.slug}-{country.code}"
            logger.warning(
                f"Slug '{country.slug}' of {country.code} collides with {original.code}; "
                f"using '{new_slug}'"
            )
            country.slug = new_slug
        seen[country.slug] = country


def load_all_countries(data_dir: Optional[Path] = None) -> List[CountryRecord]:
    """
    Load every country of every region partition.

    Malformed files are skipped and logged; the rest of the load continues.

    Args:
        data_dir: Dataset root (defaults to the configured directory)

    Returns:
        Records sorted by name
    """
    root = Path(data_dir) if data_dir else get_data_dir()
    countries: List[CountryRecord] = []
    skipped = 0

    for region in get_region_dirs(root):
        for file_path in sorted((root / region).glob("*.json")):
            country = parse_country_file(file_path, region)
            if country:
                countries.append(country)
            else:
                skipped += 1

    countries.sort(key=lambda c: collation_key(c.name))
    _disambiguate_slugs(countries)

    logger.info(f"Loaded {len(countries)} countries from {root} ({skipped} skipped)")
    return countries
