"""
Dataset Fetcher - downloads the factbook.json archive.

The dataset is maintained upstream; this only mirrors it locally so the
loader has a directory tree to read.
"""

import io
import time
import random
import logging
import zipfile
from pathlib import Path
from typing import Optional

import requests

logger = logging.getLogger(__name__)

USER_AGENT = 'open-world-factbook/1.0 (+https://github.com/Jeff-Kazzee/open-world-factbook)'


class DatasetDownloadError(Exception):
    """Raised when the dataset archive cannot be fetched or unpacked."""


def _fetch_archive(url: str, timeout: int, retries: int) -> bytes:
    """Download the archive, retrying with exponential backoff."""
    last_error: Optional[Exception] = None
    for i in range(retries):
        try:
            headers = {'User-Agent': USER_AGENT}
            response = requests.get(url, headers=headers, timeout=timeout)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            last_error = e
            logger.warning(f"Download attempt {i+1}/{retries} for {url} failed: {e}")
            if i + 1 < retries:
                time.sleep((2 ** i) + random.random())

    raise DatasetDownloadError(f"Could not download {url}: {last_error}")


def find_dataset_root(directory: Path) -> Path:
    """
    Locate the directory holding the region partitions.

    GitHub archives wrap everything in one top-level folder
    (``factbook.json-master``); a bare tree is accepted as well.
    """
    directory = Path(directory)
    if (directory / "meta").is_dir():
        return directory
    for child in sorted(directory.iterdir()):
        if child.is_dir() and (child / "meta").is_dir():
            return child
    return directory


def download_dataset(
    dest_dir: Path,
    url: Optional[str] = None,
    timeout: Optional[int] = None,
    retries: Optional[int] = None
) -> Path:
    """
    Download and unpack the factbook.json archive into ``dest_dir``.

    Returns:
        Path of the directory holding the region partitions
    """
    from config.settings import get_settings
    settings = get_settings()

    url = url or settings.dataset_url
    timeout = timeout or settings.download_timeout
    retries = retries or settings.download_retries

    dest_dir = Path(dest_dir)
    dest_dir.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading factbook dataset from {url}")
    payload = _fetch_archive(url, timeout, retries)

    try:
        with zipfile.ZipFile(io.BytesIO(payload)) as archive:
            archive.extractall(dest_dir)
            member_count = len(archive.namelist())
    except zipfile.BadZipFile as e:
        raise DatasetDownloadError(f"Downloaded file from {url} is not a zip archive") from e

    root = find_dataset_root(dest_dir)
    logger.info(f"Extracted {member_count} entries to {root}")
    return root
