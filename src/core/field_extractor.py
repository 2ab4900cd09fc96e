"""
Field Extractor Module - Flat display values from nested factbook records

Factbook categories are free-form trees: a field may be a bare string, an
object with ``text`` (and optional ``note``), a further nested object, or
missing. Key spellings also drift between records (``"total "`` with a
trailing space vs ``"total"``). All of that tolerance lives here; absent
fields come back as None and are skipped by the renderer.
"""

import re
import logging
from typing import Optional, List, Dict, Any, Tuple, Sequence

from src.core.models import CountryRecord, CountryIndexRecord, Coordinates
from src.utils.text_utils import clean_text, strip_html, format_field_name

logger = logging.getLogger(__name__)

Row = Tuple[str, str]

# "35 41 N, 139 45 E"
_COORDINATES_PATTERN = re.compile(
    r"(\d+)\s+(\d+)\s+([NS]),?\s+(\d+)\s+(\d+)\s+([EW])"
)


def extract_field_value(obj: Any, path: Sequence[str]) -> Optional[str]:
    """
    Walk ``path`` through nested dicts and return the raw leaf text.

    Returns:
        The string leaf, or the ``text`` of an object leaf; None otherwise
    """
    current = obj
    for key in path:
        if isinstance(current, dict) and key in current:
            current = current[key]
        else:
            return None

    if isinstance(current, str):
        return current
    if isinstance(current, dict) and isinstance(current.get("text"), str):
        return current["text"]
    return None


def first_field_value(obj: Any, *paths: Sequence[str]) -> Optional[str]:
    """Try each path in turn; return the first cleaned, non-empty value."""
    for path in paths:
        value = extract_field_value(obj, path)
        if value:
            cleaned = strip_html(value)
            if cleaned:
                return cleaned
    return None


def extract_population(country: CountryRecord) -> Optional[str]:
    return first_field_value(country.category("People and Society"), ["Population", "total"])


def extract_capital(country: CountryRecord) -> Optional[str]:
    return first_field_value(country.category("Government"), ["Capital", "name"])


def extract_area(country: CountryRecord) -> Optional[str]:
    return first_field_value(
        country.category("Geography"),
        ["Area", "total "],
        ["Area", "total"],
    )


def parse_coordinates(text: Optional[str]) -> Optional[Coordinates]:
    """
    Parse ``"<deg> <min> <N|S>, <deg> <min> <E|W>"`` into signed decimals.

    Any other shape yields None.
    """
    if not isinstance(text, str):
        return None

    match = _COORDINATES_PATTERN.fullmatch(text.strip())
    if not match:
        return None

    lat = int(match.group(1)) + int(match.group(2)) / 60
    lng = int(match.group(4)) + int(match.group(5)) / 60

    if match.group(3) == 'S':
        lat = -lat
    if match.group(6) == 'W':
        lng = -lng

    return Coordinates(lat=lat, lng=lng)


def get_coordinates(country: CountryRecord) -> Optional[Coordinates]:
    """Get the geographic coordinates of a record, if they parse."""
    raw = extract_field_value(country.category("Geography"), ["Geographic coordinates"])
    coordinates = parse_coordinates(strip_html(raw) if raw else None)
    if raw and coordinates is None:
        logger.debug(f"Unparseable coordinates for {country.code}: {raw!r}")
    return coordinates


def build_index_record(country: CountryRecord) -> CountryIndexRecord:
    """Project a full record onto its listing/search summary."""
    return CountryIndexRecord(
        slug=country.slug,
        code=country.code,
        flag_code=country.flag_code,
        name=country.name,
        region=country.region,
        population=extract_population(country),
        capital=extract_capital(country),
        area=extract_area(country),
    )


# ---------------------------------------------------------------------------
# Profile page sections
# ---------------------------------------------------------------------------
# (section title, category, [(label, [path, alternative path, ...]), ...])
PROFILE_SECTIONS: List[Tuple[str, str, List[Tuple[str, List[List[str]]]]]] = [
    ("Overview", "Introduction", [
        ("Background", [["Background"]]),
    ]),
    ("Geography", "Geography", [
        ("Location", [["Location"]]),
        ("Total Area", [["Area", "total "], ["Area", "total"]]),
        ("Climate", [["Climate"]]),
        ("Terrain", [["Terrain"]]),
        ("Natural Resources", [["Natural resources"]]),
        ("Coastline", [["Coastline"]]),
        ("Land Borders", [["Land boundaries", "total"]]),
    ]),
    ("People & Society", "People and Society", [
        ("Population", [["Population", "total"]]),
        ("Languages", [["Languages"]]),
        ("Religions", [["Religions"]]),
        ("Ethnic Groups", [["Ethnic groups"]]),
        ("Life Expectancy", [["Life expectancy at birth", "total population"]]),
        ("Literacy Rate", [["Literacy", "total population"]]),
        ("Urbanization", [["Urbanization", "urban population"]]),
    ]),
    ("Government", "Government", [
        ("Government Type", [["Government type"]]),
        ("Capital", [["Capital", "name"]]),
        ("Independence", [["Independence"]]),
        ("Constitution", [["Constitution", "history"]]),
        ("Legal System", [["Legal system"]]),
        ("Executive Branch", [["Executive branch", "chief of state"]]),
        ("Legislature", [["Legislative branch", "description"]]),
    ]),
    ("Economy", "Economy", [
        ("Economic Overview", [["Economic overview"]]),
        ("GDP (Official Rate)", [["GDP (official exchange rate)"]]),
        ("GDP Per Capita", [["GDP - per capita (PPP)", "Real GDP per capita"]]),
        ("Major Industries", [["Industries"]]),
        ("Main Exports", [["Exports", "commodities"], ["Exports - commodities"]]),
        ("Main Imports", [["Imports", "commodities"], ["Imports - commodities"]]),
        ("Unemployment", [["Unemployment rate"]]),
        ("Inflation Rate", [["Inflation rate (consumer prices)"]]),
    ]),
    ("Infrastructure & Communications", "Communications", [
        ("Internet Users", [["Internet users", "total"]]),
        ("Mobile Phone Subscriptions", [["Mobile cellular", "total subscriptions"]]),
    ]),
    ("Environment", "Environment", [
        ("Current Issues", [["Environment - current issues"]]),
        ("International Agreements", [["Environment - international agreements", "party to"]]),
    ]),
]

# Transportation rows render inside the infrastructure section
TRANSPORTATION_ROWS: List[Tuple[str, List[List[str]]]] = [
    ("Airports", [["Airports", "total"]]),
    ("Railways", [["Railways", "total"]]),
    ("Roadways", [["Roadways", "total"]]),
]


def _rows(category: Dict[str, Any], fields: List[Tuple[str, List[List[str]]]]) -> List[Row]:
    rows = []
    for label, paths in fields:
        value = first_field_value(category, *paths)
        if value:
            rows.append((label, value))
    return rows


def extract_profile_sections(country: CountryRecord) -> List[Tuple[str, List[Row]]]:
    """
    Build the titled sections of a country profile.

    Absent fields are left out entirely, and so are sections with no rows.
    """
    sections = []
    for title, category_name, fields in PROFILE_SECTIONS:
        rows = _rows(country.category(category_name), fields)
        if category_name == "Communications":
            rows.extend(_rows(country.category("Transportation"), TRANSPORTATION_ROWS))
        if rows:
            sections.append((title, rows))
    return sections


def extract_quick_stats(country: CountryRecord) -> List[Row]:
    """Headline figures for the stats bar: area, population, capital, GDP."""
    stats = []

    area = extract_area(country)
    if area:
        stats.append(("Area", area))

    population = extract_population(country)
    if population:
        stats.append(("Population", population.split(" ")[0]))

    capital = extract_capital(country)
    if capital:
        stats.append(("Capital", capital))

    gdp = first_field_value(country.category("Economy"), ["GDP (official exchange rate)"])
    if gdp:
        stats.append(("GDP", " ".join(gdp.split(" ")[:2])))

    return stats


def flatten_category(category: Dict[str, Any], prefix: str = "") -> List[Row]:
    """
    Flatten an arbitrary category tree into labelled rows.

    Nested labels are joined with " - ". Notes attached to a leaf are not shown.
    """
    rows = []
    for key, value in category.items():
        label = f"{prefix} - {format_field_name(key.strip())}" if prefix else format_field_name(key.strip())
        if isinstance(value, dict) and "text" not in value:
            rows.extend(flatten_category(value, label))
            continue
        text = clean_text(value)
        if text:
            rows.append((label, text))
    return rows


# Categories already covered by the profile sections
PROFILE_CATEGORIES = {category for _, category, _ in PROFILE_SECTIONS} | {"Transportation"}


def extract_additional_categories(country: CountryRecord) -> List[Tuple[str, List[Row]]]:
    """Generic rows for every category the profile sections do not cover."""
    extra = []
    for name, payload in country.categories.items():
        if name in PROFILE_CATEGORIES or not isinstance(payload, dict):
            continue
        rows = flatten_category(payload)
        if rows:
            extra.append((name, rows))
    return extra
