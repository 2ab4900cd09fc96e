"""
Flask site for the Open World Factbook.
Renders the homepage, country index, region and country pages, plus a
small JSON data API. Every page is parameter-free so it can be exported
as static files (see ``main.py build``).
"""

import logging
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Optional

from flask import Flask, jsonify, request, render_template, abort, g

from config.settings import get_settings, Settings
from src.core.field_extractor import (
    get_coordinates,
    extract_profile_sections,
    extract_quick_stats,
    extract_additional_categories
)
from src.core.queries import Factbook, get_factbook
from src.core.regions import get_region_display_name, get_region_info, summarize_region, UNLISTED_REGIONS
from src.utils.embeds import flag_url, map_embed_url, map_link_url, region_map_embed_url

logger = logging.getLogger(__name__)


def handle_api_errors(f):
    """Decorator to turn unexpected API errors into JSON 500 responses."""
    @wraps(f)
    def wrapper(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except Exception as e:
            logger.exception(f"API error on {request.path}")
            return jsonify({"error": str(e)}), 500
    return wrapper


def create_app(factbook: Optional[Factbook] = None, settings: Optional[Settings] = None) -> Flask:
    """
    Create the Flask application.

    Args:
        factbook: Loaded data (defaults to the global instance)
        settings: Settings (defaults to the global instance)
    """
    settings = settings or get_settings()
    if factbook is None:
        factbook = get_factbook()

    app = Flask(__name__)
    app.config["SITE_NAME"] = settings.site_name
    app.extensions["factbook"] = factbook
    built_at = datetime.now(timezone.utc).strftime("%Y-%m-%d")

    @app.context_processor
    def inject_helpers():
        return {
            "site_name": settings.site_name,
            "repository_url": settings.repository_url,
            "current_year": datetime.now().year,
            "flag_url": lambda code, width=40: flag_url(code, width, host=settings.flag_host),
            "region_label": get_region_display_name,
            "search_threshold": settings.search_threshold,
            "search_limit": settings.search_limit,
        }

    @app.before_request
    def before_request():
        """Store request start time for latency measurement."""
        g.request_start_time = time.perf_counter()

    @app.after_request
    def after_request(response):
        """Log request details after each response."""
        start = getattr(g, "request_start_time", None)
        duration_ms = (time.perf_counter() - start) * 1000.0 if start is not None else 0.0
        logger.info(
            "request_completed method=%s path=%s status=%s duration_ms=%.2f",
            request.method,
            request.path,
            response.status_code,
            duration_ms,
        )
        return response

    @app.errorhandler(404)
    def not_found(error):
        if request.path.startswith("/api/"):
            return jsonify({"error": "Not found", "path": request.path}), 404
        return render_template("not_found.html"), 404

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------

    @app.route("/")
    def index():
        """Homepage: search, stats, featured countries and regions."""
        countries = factbook.get_country_index()
        regions = factbook.get_all_regions()
        featured = [c for c in countries if c.code in settings.featured_codes]

        return render_template(
            "index.html",
            countries=countries,
            listed_countries=countries[:settings.home_listing_limit],
            regions=[r for r in regions if r.id not in UNLISTED_REGIONS],
            region_count=len(regions),
            featured=featured,
        )

    @app.route("/countries/")
    def countries():
        """All countries grouped by first letter."""
        index = factbook.get_country_index()
        grouped = {}
        for country in index:
            grouped.setdefault(country.name[:1].upper(), []).append(country)

        return render_template(
            "countries.html",
            countries=index,
            grouped=grouped,
            letters=sorted(grouped),
            regions=[r for r in factbook.get_all_regions() if r.id not in UNLISTED_REGIONS],
        )

    @app.route("/region/<region_id>/")
    def region(region_id):
        """One region: description, map, stats and member countries."""
        found = factbook.get_region(region_id)
        if found is None:
            abort(404)

        members = factbook.get_countries_by_region(region_id)
        info = get_region_info(region_id)

        return render_template(
            "region.html",
            region=found,
            countries=members,
            info=info,
            stats=summarize_region(members),
            map_url=region_map_embed_url(info.map_center.lat, info.map_center.lng, host=settings.map_host),
        )

    @app.route("/country/<slug>/")
    def country(slug):
        """Country profile page."""
        record = factbook.get_country_by_slug(slug)
        if record is None:
            abort(404)

        coordinates = get_coordinates(record)

        return render_template(
            "country.html",
            country=record,
            region_name=get_region_display_name(record.region),
            quick_stats=extract_quick_stats(record),
            sections=extract_profile_sections(record),
            additional=extract_additional_categories(record),
            map_url=map_embed_url(coordinates, host=settings.map_host),
            map_link=map_link_url(coordinates, host=settings.map_host),
        )

    @app.route("/search/")
    def search():
        """
        Search results page.

        Served with a query, results are rendered here; the exported copy
        has none and static/search.js fills them in from search-index.json.
        """
        query = request.args.get("q", "").strip()
        results = factbook.search(query)
        return render_template("search.html", query=query, results=results)

    @app.route("/about/")
    def about():
        return render_template(
            "about.html",
            country_count=len(factbook),
            region_count=len(factbook.get_all_regions()),
        )

    @app.route("/contribute/")
    def contribute():
        return render_template("contribute.html")

    @app.route("/api-docs/")
    def api_docs():
        return render_template("api_docs.html")

    # ------------------------------------------------------------------
    # Data API
    # ------------------------------------------------------------------

    @app.route("/api/countries.json")
    @handle_api_errors
    def api_countries():
        """Country index."""
        index = factbook.get_country_index()
        return jsonify({
            "total": len(index),
            "updated": built_at,
            "countries": [c.to_dict() for c in index],
        })

    @app.route("/api/countries/<slug>.json")
    @handle_api_errors
    def api_country(slug):
        """Full record of one country."""
        record = factbook.get_country_by_slug(slug)
        if record is None:
            return jsonify({"error": "Country not found", "slug": slug}), 404
        return jsonify(record.to_dict())

    @app.route("/api/regions.json")
    @handle_api_errors
    def api_regions():
        """Regions with their member countries."""
        return jsonify({"regions": [r.to_dict() for r in factbook.get_all_regions()]})

    @app.route("/api/search")
    @handle_api_errors
    def api_search():
        """Ranked fuzzy search results."""
        query = request.args.get("q", "")
        results = factbook.search(query)
        return jsonify({"query": query, "results": [r.to_dict() for r in results]})

    @app.route("/search-index.json")
    @handle_api_errors
    def search_index():
        """Index records for client-side search widgets."""
        return jsonify([
            {
                "name": c.name,
                "code": c.code,
                "flagCode": c.flag_code,
                "slug": c.slug,
                "region": c.region,
                "capital": c.capital,
            }
            for c in factbook.get_country_index()
        ])

    return app


if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )
    create_app().run(host="0.0.0.0", port=settings.port, debug=settings.debug)
