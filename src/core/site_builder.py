"""
Static Site Builder - pre-renders every page of the Flask site to disk.

Every route is parameter-free at runtime, so the whole site can be
written out once per dataset version and served by any static host.
"""

import shutil
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple, Iterator

from flask import Flask

from src.core.queries import Factbook

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Results of a static build."""
    output_dir: Path
    pages: List[str] = field(default_factory=list)
    data_files: List[str] = field(default_factory=list)
    failures: List[Tuple[str, int]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.failures) == 0

    @property
    def page_count(self) -> int:
        return len(self.pages)


def iter_page_routes(factbook: Factbook) -> Iterator[str]:
    """Every HTML route of the site."""
    yield "/"
    yield "/countries/"
    yield "/about/"
    yield "/contribute/"
    yield "/api-docs/"
    yield "/search/"
    for region in factbook.get_all_regions():
        yield f"/region/{region.id}/"
    for country in factbook.get_all_countries():
        yield f"/country/{country.slug}/"


def iter_data_routes(factbook: Factbook) -> Iterator[str]:
    """Every JSON route that maps one-to-one onto a file."""
    yield "/api/countries.json"
    yield "/api/regions.json"
    yield "/search-index.json"
    for country in factbook.get_all_countries():
        yield f"/api/countries/{country.slug}.json"


def _target_path(output_dir: Path, route: str) -> Path:
    relative = route.lstrip("/")
    if not relative or route.endswith("/"):
        return output_dir / relative / "index.html"
    return output_dir / relative


def build_site(app: Flask, factbook: Factbook, output_dir: Path, clean: bool = False) -> BuildReport:
    """
    Render every page and data file of the site into ``output_dir``.

    Args:
        app: Flask application created with the same factbook
        factbook: Loaded data, used to enumerate routes
        output_dir: Destination directory
        clean: Remove the destination first

    Returns:
        BuildReport; a page that does not render with status 200 is
        recorded as a failure and the build continues
    """
    output_dir = Path(output_dir)
    if clean and output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    report = BuildReport(output_dir=output_dir)
    client = app.test_client()

    routes = [(route, report.pages) for route in iter_page_routes(factbook)]
    routes += [(route, report.data_files) for route in iter_data_routes(factbook)]

    for route, bucket in routes:
        response = client.get(route)
        if response.status_code != 200:
            logger.error(f"Failed to render {route}: HTTP {response.status_code}")
            report.failures.append((route, response.status_code))
            continue

        target = _target_path(output_dir, route)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(response.get_data())
        bucket.append(route)

    static_dir = Path(app.static_folder) if app.static_folder else None
    if static_dir and static_dir.is_dir():
        shutil.copytree(static_dir, output_dir / "static", dirs_exist_ok=True)

    not_found = client.get("/__missing__/")
    (output_dir / "404.html").write_bytes(not_found.get_data())

    logger.info(
        f"Built {report.page_count} pages and {len(report.data_files)} data files "
        f"into {output_dir} ({len(report.failures)} failures)"
    )
    return report
