"""Text helpers for factbook display strings.

The dataset embeds HTML markup and entities in many text values
(``<strong>``, ``&nbsp;``). Everything shown on a page passes through
``strip_html`` first. Slugs and display labels are derived here too.
"""

import re
import unicodedata
from typing import Any, Optional, Tuple

# ---------------------------------------------------------------------------
# Pre-compiled patterns
# ---------------------------------------------------------------------------
_TAG_PATTERN = re.compile(r"<[^>]*>")
_ENTITY_PATTERN = re.compile(r"&[^;\s]+;")
_SLUG_INVALID = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")


def strip_tags(text: str) -> str:
    """Remove markup tags, leaving entities untouched."""
    return _TAG_PATTERN.sub("", text or "")


def strip_html(text: str) -> str:
    """Remove markup tags and collapse HTML entities to a single space."""
    if not text:
        return ""
    return _ENTITY_PATTERN.sub(" ", strip_tags(text)).strip()


def clean_text(value: Any) -> str:
    """Turn a dataset leaf (bare string or ``{"text": ...}``) into display text.

    Returns "" for anything else, including missing values.
    """
    if not value:
        return ""
    if isinstance(value, str):
        return strip_html(value)
    if isinstance(value, dict) and isinstance(value.get("text"), str):
        return strip_html(value["text"])
    return ""


def slugify(name: str) -> str:
    """Build a URL slug: lowercase letters, digits and single inner hyphens."""
    slug = _SLUG_INVALID.sub("", (name or "").lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def format_field_name(name: str) -> str:
    """Prettify a raw field key, e.g. ``naturalResources`` -> ``Natural Resources``."""
    spaced = _CAMEL_BOUNDARY.sub(r" \1", name or "").replace("_", " ")
    words = [word for word in spaced.split(" ") if word]
    return " ".join(word[0].upper() + word[1:].lower() for word in words)


def collation_key(text: str) -> Tuple[str, str]:
    """Sort key approximating locale-aware ordering.

    Accents and case are ignored for the primary comparison; the original
    string breaks ties so ordering stays deterministic.
    """
    folded = unicodedata.normalize("NFKD", text or "")
    folded = "".join(ch for ch in folded if not unicodedata.combining(ch))
    return folded.casefold(), text or ""


def normalize_for_search(text: Optional[str]) -> str:
    """Accent-fold and lowercase a value before fuzzy matching."""
    return collation_key(text or "")[0].strip()


def first_number(text: Optional[str]) -> Optional[int]:
    """Parse the leading number of a stat such as ``"1,234,567 (2024 est.)"``."""
    if not text:
        return None
    match = re.search(r"\d[\d,]*", text)
    if not match:
        return None
    return int(match.group().replace(",", ""))
