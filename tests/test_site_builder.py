"""
Tests for the static export.
"""

import json
import re

from src.core.models import CountryRecord
from src.core.queries import Factbook
from src.core.site_builder import build_site, iter_page_routes, iter_data_routes
from tests.conftest import VALID_RECORD_COUNT

REGION_COUNT = 6
STATIC_PAGES = 6


class TestRoutes:

    def test_page_routes(self, factbook):
        routes = list(iter_page_routes(factbook))
        assert len(routes) == STATIC_PAGES + REGION_COUNT + VALID_RECORD_COUNT
        assert "/country/aruba-zz/" in routes
        assert "/region/oceans/" in routes

    def test_data_routes(self, factbook):
        routes = list(iter_data_routes(factbook))
        assert len(routes) == 3 + VALID_RECORD_COUNT
        assert "/api/countries/japan.json" in routes


class TestBuildSite:

    def test_full_build(self, app, factbook, tmp_path):
        output = tmp_path / "dist"
        report = build_site(app, factbook, output)

        assert report.success
        assert report.page_count == STATIC_PAGES + REGION_COUNT + VALID_RECORD_COUNT
        assert len(report.data_files) == 3 + VALID_RECORD_COUNT

        for relative in [
            "index.html",
            "countries/index.html",
            "about/index.html",
            "search/index.html",
            "static/search.js",
            "region/europe/index.html",
            "country/japan/index.html",
            "country/aruba-zz/index.html",
            "api/countries.json",
            "api/countries/japan.json",
            "api/regions.json",
            "search-index.json",
            "static/site.css",
            "404.html",
        ]:
            assert (output / relative).is_file(), relative

        index = json.loads((output / "api" / "countries.json").read_text(encoding="utf-8"))
        assert index["total"] == VALID_RECORD_COUNT
        assert "Tokyo" in (output / "country" / "japan" / "index.html").read_text(encoding="utf-8")
        assert "Not Found" in (output / "404.html").read_text(encoding="utf-8")

    def test_clean_removes_stale_files(self, app, factbook, tmp_path):
        output = tmp_path / "dist"
        output.mkdir()
        stale = output / "country" / "gone" / "index.html"
        stale.parent.mkdir(parents=True)
        stale.write_text("old", encoding="utf-8")

        build_site(app, factbook, output, clean=True)
        assert not stale.exists()
        assert (output / "index.html").is_file()

    def test_failed_page_is_recorded(self, app, factbook, tmp_path):
        ghost = CountryRecord(code="qq", slug="ghost", flag_code="qq", name="Ghost", region="europe")
        other = Factbook(factbook.get_all_countries() + [ghost])

        report = build_site(app, other, tmp_path / "dist")
        assert not report.success
        assert ("/country/ghost/", 404) in report.failures
        assert ("/api/countries/ghost.json", 404) in report.failures
        assert not (tmp_path / "dist" / "country" / "ghost").exists()


class TestExportedSearch:

    def exported_path(self, output, url):
        path = output / url.lstrip("/")
        return path / "index.html" if url.endswith("/") else path

    def test_home_search_is_wired_to_exported_files(self, app, factbook, tmp_path):
        output = tmp_path / "dist"
        build_site(app, factbook, output)
        html = (output / "index.html").read_text(encoding="utf-8")

        action = re.search(r'<form class="search" action="([^"]+)"', html).group(1)
        index_url = re.search(r'data-search-index="([^"]+)"', html).group(1)
        script = re.search(r'<script src="([^"]+)"', html).group(1)

        assert self.exported_path(output, action).is_file()
        assert self.exported_path(output, index_url).is_file()
        assert self.exported_path(output, script).is_file()
        assert script.endswith(".js")

    def test_widget_reads_the_exported_index(self, app, factbook, tmp_path):
        output = tmp_path / "dist"
        build_site(app, factbook, output)
        html = (output / "index.html").read_text(encoding="utf-8")

        assert 'data-threshold="0.3"' in html
        assert 'data-limit="8"' in html
        assert 'data-country-url="/country/__slug__/"' in html

        records = json.loads((output / "search-index.json").read_text(encoding="utf-8"))
        assert len(records) == VALID_RECORD_COUNT
        assert all({"name", "capital", "region", "slug"} <= set(r) for r in records)

    def test_exported_search_page_has_no_server_results(self, app, factbook, tmp_path):
        output = tmp_path / "dist"
        build_site(app, factbook, output)
        html = (output / "search" / "index.html").read_text(encoding="utf-8")
        assert 'data-rendered="false"' in html
        assert 'class="country-card"' not in html
