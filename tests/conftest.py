"""
Shared fixtures: a small factbook.json tree written to a temp directory.

Layout:
    africa/                       ni (no capital), ng, bad (malformed), arr (top-level list)
    central-america-n-caribbean/  aa ("<b>Aruba</b>")
    east-n-southeast-asia/        ja, ch
    europe/                       gm, fr, ee (short form 'none')
    oceans/                       xo (no Government category)
    south-america/                br, zz (also named Aruba, unmapped code)
    meta/                         ff (must never be loaded)
"""

import json
from pathlib import Path

import pytest

from app import create_app
from config.settings import Settings
from src.core.queries import Factbook


def make_country(short=None, long=None, capital=None, coords=None,
                 population=None, area=None, area_key="total", extra=None):
    """Build a factbook-shaped record."""
    data = {}

    government = {}
    if short is not None or long is not None:
        country_name = {}
        if short is not None:
            country_name["conventional short form"] = {"text": short}
        if long is not None:
            country_name["conventional long form"] = {"text": long}
        government["Country name"] = country_name
    if capital:
        government["Capital"] = {"name": {"text": capital}}
    if government:
        data["Government"] = government

    geography = {}
    if coords:
        geography["Geographic coordinates"] = {"text": coords}
    if area:
        geography["Area"] = {area_key: {"text": area}}
    if geography:
        data["Geography"] = geography

    if population:
        data["People and Society"] = {"Population": {"total": {"text": population}}}

    data.update(extra or {})
    return data


FIXTURE_RECORDS = {
    "africa": {
        "ni": make_country(short="Nigeria", population="236,747,130 (2024 est.)",
                           coords="10 00 N, 8 00 E"),
        "ng": make_country(short="Niger", capital="Niamey", coords="16 00 N, 8 00 E"),
    },
    "central-america-n-caribbean": {
        "aa": make_country(short="<b>Aruba</b>", capital="Oranjestad"),
    },
    "east-n-southeast-asia": {
        "ja": make_country(
            short="Japan", capital="Tokyo", coords="35 41 N, 139 45 E",
            population="123,201,945 (2024 est.)",
            area="377,915 sq km", area_key="total ",
            extra={
                "Introduction": {"Background": {"text": "An island chain.&nbsp;<p>Long history.</p>"}},
                "Economy": {"GDP (official exchange rate)": {"text": "$4.213 trillion (2023 est.)"}},
                "Military and Security": {"Military branches": {"text": "Japan Self-Defense Forces"}},
            }
        ),
        "ch": make_country(short="China", capital="Beijing", coords="35 00 N, 105 00 E",
                           population="1,416,043,270 (2024 est.)", area="9,596,960 sq km"),
    },
    "europe": {
        "gm": make_country(short="Germany", capital="Berlin", coords="51 00 N, 9 00 E",
                           population="84,119,100 (2024 est.)", area="357,022 sq km"),
        "fr": make_country(short="France", capital="Paris", coords="46 00 N, 2 00 E"),
        "ee": make_country(short="none", long="European Union", capital="Brussels"),
    },
    "oceans": {
        "xo": {"Introduction": {"Background": {"text": "The third largest ocean."}}},
    },
    "south-america": {
        "br": make_country(short="Brazil", capital="Brasilia", coords="10 00 S, 55 00 W"),
        "zz": make_country(short="Aruba"),
    },
    "meta": {
        "ff": make_country(short="Should Not Load"),
    },
}


def write_factbook_tree(root: Path) -> Path:
    """Write the fixture records (plus two broken files) under ``root``."""
    for region, records in FIXTURE_RECORDS.items():
        region_dir = root / region
        region_dir.mkdir(parents=True, exist_ok=True)
        for code, data in records.items():
            (region_dir / f"{code}.json").write_text(json.dumps(data), encoding="utf-8")

    (root / "africa" / "bad.json").write_text("{not json", encoding="utf-8")
    (root / "africa" / "arr.json").write_text("[1, 2, 3]", encoding="utf-8")
    return root


VALID_RECORD_COUNT = 11


@pytest.fixture
def data_dir(tmp_path):
    """Path to a freshly written factbook tree."""
    return write_factbook_tree(tmp_path / "factbook.json-master")


@pytest.fixture
def factbook(data_dir):
    """Factbook loaded from the fixture tree."""
    return Factbook.load(data_dir)


@pytest.fixture
def settings(data_dir, tmp_path):
    return Settings(data_dir=data_dir, output_dir=tmp_path / "dist")


@pytest.fixture
def app(factbook, settings):
    app = create_app(factbook, settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
