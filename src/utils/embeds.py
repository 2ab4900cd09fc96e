"""
URL builders for flag images and OpenStreetMap embeds.
"""

from typing import Optional

from src.core.models import Coordinates

FLAG_HOST = "https://flagcdn.com"
MAP_HOST = "https://www.openstreetmap.org"

# Bounding box margin around a country marker, in degrees
LAT_MARGIN = 4
LNG_MARGIN = 5

# Wider box for region maps
REGION_LAT_MARGIN = 30
REGION_LNG_MARGIN = 40


def flag_url(flag_code: str, width: int = 40, host: str = FLAG_HOST) -> Optional[str]:
    """Flag image URL, or None when the record has no flag."""
    if not flag_code:
        return None
    return f"{host}/w{width}/{flag_code}.png"


def _bbox(lat: float, lng: float, lat_margin: float, lng_margin: float) -> str:
    return f"{lng - lng_margin}%2C{lat - lat_margin}%2C{lng + lng_margin}%2C{lat + lat_margin}"


def map_embed_url(coordinates: Optional[Coordinates], host: str = MAP_HOST) -> Optional[str]:
    """Embeddable map centred on a country, with a marker."""
    if coordinates is None:
        return None
    bbox = _bbox(coordinates.lat, coordinates.lng, LAT_MARGIN, LNG_MARGIN)
    return (f"{host}/export/embed.html?bbox={bbox}&layer=mapnik"
            f"&marker={coordinates.lat}%2C{coordinates.lng}")


def map_link_url(coordinates: Optional[Coordinates], zoom: int = 6, host: str = MAP_HOST) -> Optional[str]:
    """Link to the full map page for a country."""
    if coordinates is None:
        return None
    lat, lng = coordinates.lat, coordinates.lng
    return f"{host}/?mlat={lat}&mlon={lng}#map={zoom}/{lat}/{lng}"


def region_map_embed_url(lat: float, lng: float, host: str = MAP_HOST) -> str:
    """Embeddable map covering a whole region."""
    bbox = _bbox(lat, lng, REGION_LAT_MARGIN, REGION_LNG_MARGIN)
    return f"{host}/export/embed.html?bbox={bbox}&layer=mapnik"
