"""
Centralized configuration settings for the application.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field
from typing import List, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
OUTPUT_DIR = PROJECT_ROOT / "dist"

DEFAULT_DATASET_URL = "https://github.com/factbook/factbook.json/archive/refs/heads/master.zip"


def _env_list(name: str, default: List[str]) -> List[str]:
    """Read a comma-separated list from the environment."""
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip().lower() for item in raw.split(',') if item.strip()]


def _env_bool(name: str, default: bool = False) -> bool:
    """Read a boolean value from environment variables."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    """Application settings container."""

    # Dataset location
    # Directory holding one sub-directory per region partition
    data_dir: Path = field(default_factory=lambda: Path(
        os.getenv("FACTBOOK_DATA_DIR", str(DATA_DIR / "factbook.json-master"))
    ))
    dataset_url: str = field(default_factory=lambda: os.getenv("FACTBOOK_DATASET_URL", DEFAULT_DATASET_URL))
    download_timeout: int = 60
    download_retries: int = 3

    # Static export
    output_dir: Path = field(default_factory=lambda: Path(
        os.getenv("FACTBOOK_OUTPUT_DIR", str(OUTPUT_DIR))
    ))

    # Site
    site_name: str = "Open World Factbook"
    site_url: str = field(default_factory=lambda: os.getenv("FACTBOOK_SITE_URL", ""))
    repository_url: str = "https://github.com/Jeff-Kazzee/open-world-factbook"
    flag_host: str = "https://flagcdn.com"
    map_host: str = "https://www.openstreetmap.org"
    featured_codes: List[str] = field(default_factory=lambda: _env_list(
        "FACTBOOK_FEATURED_CODES", ['us', 'ch', 'ja', 'gm', 'uk', 'fr', 'br', 'in']
    ))
    home_listing_limit: int = 50

    # Search
    # Fuse-style threshold: 0.0 requires an exact match, 1.0 matches anything
    search_threshold: float = field(default_factory=lambda: float(os.getenv("FACTBOOK_SEARCH_THRESHOLD", "0.3")))
    search_limit: int = 8

    # Server
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "5000")))
    debug: bool = field(default_factory=lambda: _env_bool("FACTBOOK_DEBUG", False))

    # Logging Configuration
    log_file: str = field(default_factory=lambda: os.getenv("FACTBOOK_LOG_FILE", "factbook.log"))
    log_level: str = field(default_factory=lambda: os.getenv("FACTBOOK_LOG_LEVEL", "INFO"))

    @property
    def has_dataset(self) -> bool:
        """Check if the dataset directory exists."""
        return self.data_dir.is_dir()

    @property
    def search_score_cutoff(self) -> float:
        """Threshold translated to a 0-100 similarity cutoff."""
        return (1.0 - self.search_threshold) * 100.0


# Singleton settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or create settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
