# Module for file system operations (directories, pages, assets, JSON records)

import os
import json
import logging

from exceptions import ArchiveWriteError

logger = logging.getLogger(__name__)


def ensure_directory(path):
    """Creates a directory (and parents) if needed. Raises ArchiveWriteError."""
    if not path:
        return path
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise ArchiveWriteError(path, e) from e
    return path


def _write_bytes(full_path, content):
    ensure_directory(os.path.dirname(full_path))
    try:
        with open(full_path, 'wb') as f:
            f.write(content)
    except OSError as e:
        raise ArchiveWriteError(full_path, e) from e


# --- Asset Saving ---
def save_asset(asset_content, full_path):
    """
    Writes downloaded asset bytes, creating the asset directory as needed.
    Returns the path written. Raises ArchiveWriteError on failure.
    """
    _write_bytes(full_path, asset_content)
    logger.debug(f"Saved asset: {full_path} ({len(asset_content)} bytes)")
    return full_path


# --- Page Saving ---
def save_page_html(html_bytes, full_path):
    """
    Writes a page's final markup, creating parent directories as needed.
    Raises ArchiveWriteError on failure; page writes are never skipped silently.
    """
    _write_bytes(full_path, html_bytes)
    logger.debug(f"Saved page: {full_path}")
    return full_path


# --- JSON Records ---
def write_json(full_path, data):
    """Writes data as indented JSON. Raises ArchiveWriteError on failure."""
    ensure_directory(os.path.dirname(full_path))
    try:
        with open(full_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        raise ArchiveWriteError(full_path, e) from e
    return full_path


def read_json(full_path):
    """Loads a JSON file. Raises OSError or json.JSONDecodeError."""
    with open(full_path, 'r', encoding='utf-8') as f:
        return json.load(f)
