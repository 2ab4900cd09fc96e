#!/usr/bin/env python3
"""
Open World Factbook
Main Entry Point - Site Build Orchestrator

Commands:
1. fetch  - download the factbook.json dataset
2. build  - pre-render the whole site into static files
3. serve  - run the Flask site locally
4. stats  - print country counts per region
5. search - run a fuzzy search from the terminal
"""

import logging
import sys
from pathlib import Path
from datetime import datetime
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import get_settings
from src.core.queries import Factbook, set_factbook
from src.core.site_builder import build_site
from src.data.fetcher import download_dataset, DatasetDownloadError

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(settings.log_file),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger("Factbook")


def print_banner():
    """Print startup banner."""
    print("\n" + "=" * 70)
    print(f"🌍 {settings.site_name.upper()}")
    print("    Public-domain country profiles, pre-rendered")
    print("=" * 70 + "\n")


def load_factbook(data_dir: Optional[Path] = None) -> Optional[Factbook]:
    """Load the dataset, reporting a missing directory instead of raising."""
    data_dir = data_dir or settings.data_dir
    try:
        factbook = Factbook.load(
            data_dir,
            search_threshold=settings.search_threshold,
            search_limit=settings.search_limit
        )
    except FileNotFoundError as e:
        logger.error(f"❌ {e}")
        print("\nRun `python main.py fetch` or set FACTBOOK_DATA_DIR in your .env file")
        return None

    set_factbook(factbook)
    return factbook


def run_build(data_dir: Optional[Path], output_dir: Optional[Path], clean: bool) -> int:
    """Render the static site."""
    from app import create_app

    print_banner()
    start_time = datetime.now()

    factbook = load_factbook(data_dir)
    if factbook is None:
        return 1

    output_dir = output_dir or settings.output_dir
    logger.info(f"📁 Building site into {output_dir}...")
    report = build_site(create_app(factbook), factbook, output_dir, clean=clean)

    print("\n" + "=" * 70)
    print("📊 BUILD SUMMARY")
    print("=" * 70)
    print(f"   Pages written:     {report.page_count}")
    print(f"   Data files:        {len(report.data_files)}")
    print(f"   Failures:          {len(report.failures)}")
    for route, status in report.failures:
        print(f"     ⚠️  {route} (HTTP {status})")
    print("=" * 70)

    elapsed = datetime.now() - start_time
    logger.info(f"✅ Build complete. Total time: {elapsed.total_seconds():.1f}s")
    return 0 if report.success else 1


def run_serve(data_dir: Optional[Path], port: Optional[int]) -> int:
    """Run the Flask development server."""
    from app import create_app

    factbook = load_factbook(data_dir)
    if factbook is None:
        return 1

    app = create_app(factbook)
    app.run(host="0.0.0.0", port=port or settings.port, debug=settings.debug)
    return 0


def run_stats(data_dir: Optional[Path]) -> int:
    """Print country counts per region."""
    factbook = load_factbook(data_dir)
    if factbook is None:
        return 1

    regions = factbook.get_all_regions()
    without_flag = sum(1 for c in factbook.get_country_index() if not c.flag_code)

    print(f"\n📁 Regions ({len(regions)}):")
    for region in regions:
        print(f"   {region.display_name:<32} {region.country_count:>4}")
    print(f"\n🌐 Countries & territories: {len(factbook)}")
    print(f"🏳️  Without flag:            {without_flag}\n")
    return 0


def run_search(data_dir: Optional[Path], query: str) -> int:
    """Print ranked search results."""
    factbook = load_factbook(data_dir)
    if factbook is None:
        return 1

    results = factbook.search(query)
    if not results:
        print(f"No countries found for \"{query}\"")
        return 0

    for i, result in enumerate(results, 1):
        capital = f" · {result.record.capital}" if result.record.capital else ""
        print(f"{i}. {result.name} ({result.region}{capital}) "
              f"score={result.score:.0f} via {result.match_field}")
    return 0


def run_fetch(dest: Optional[Path]) -> int:
    """Download the dataset."""
    dest = dest or settings.data_dir.parent
    try:
        root = download_dataset(dest)
    except DatasetDownloadError as e:
        logger.error(f"❌ {e}")
        return 1

    print(f"\nDataset ready at {root}")
    if root != settings.data_dir:
        print(f"Set FACTBOOK_DATA_DIR={root} in your .env file to use it")
    return 0


def main(argv=None) -> int:
    import argparse

    parser = argparse.ArgumentParser(description=settings.site_name)
    parser.add_argument("--data-dir", type=Path, default=None,
                        help="Dataset directory (default: FACTBOOK_DATA_DIR)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    build = subparsers.add_parser("build", help="Pre-render the static site")
    build.add_argument("--output", "-o", type=Path, default=None)
    build.add_argument("--clean", action="store_true")

    serve = subparsers.add_parser("serve", help="Run the site locally")
    serve.add_argument("--port", "-p", type=int, default=None)

    subparsers.add_parser("stats", help="Country counts per region")

    search = subparsers.add_parser("search", help="Fuzzy search countries")
    search.add_argument("query")

    fetch = subparsers.add_parser("fetch", help="Download the dataset")
    fetch.add_argument("--dest", type=Path, default=None)

    args = parser.parse_args(argv)

    if args.command == "build":
        return run_build(args.data_dir, args.output, args.clean)
    if args.command == "serve":
        return run_serve(args.data_dir, args.port)
    if args.command == "stats":
        return run_stats(args.data_dir)
    if args.command == "search":
        return run_search(args.data_dir, args.query)
    return run_fetch(args.dest)


if __name__ == "__main__":
    sys.exit(main())
