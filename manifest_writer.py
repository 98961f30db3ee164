# Module for writing and reading session manifests
import logging
import os
from datetime import datetime, timezone

import constants
from exceptions import ManifestError
from file_handler import write_json, read_json
from models import Manifest
from path_mapper import get_local_file_path

logger = logging.getLogger(__name__)

REQUIRED_MANIFEST_KEYS = ('startUrl', 'entrypoint', 'archivedAt', 'crawledPages')


def isoformat_utc(moment):
    """ISO-8601 with millisecond precision and a trailing 'Z'."""
    return moment.astimezone(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def build_manifest(start_url, archive_path, visited, archived_at=None):
    """Builds the manifest record for a finished session."""
    entry_point_path = get_local_file_path(start_url, start_url, archive_path)
    entrypoint = os.path.relpath(entry_point_path, start=archive_path).replace(os.sep, '/')
    archived_at = archived_at or datetime.now(timezone.utc)
    return Manifest(
        start_url=start_url,
        entrypoint=entrypoint,
        archived_at=isoformat_utc(archived_at),
        crawled_pages=sorted(set(visited)),
    )


def manifest_path_for(archive_path):
    return os.path.join(archive_path, constants.MANIFEST_FILENAME)


def write_manifest(manifest, archive_path):
    """Writes _manifest.json at the session root. Raises ArchiveWriteError."""
    full_path = write_json(manifest_path_for(archive_path), manifest.to_dict())
    logger.info(f"Wrote manifest with {len(manifest.crawled_pages)} pages: {full_path}")
    return full_path


def read_manifest(full_path):
    """
    Loads and validates a manifest file.
    Raises ManifestError when it is missing, unreadable or malformed.
    """
    try:
        data = read_json(full_path)
    except (OSError, ValueError) as e:
        raise ManifestError(f"Could not read manifest {full_path}: {e}") from e

    if not isinstance(data, dict):
        raise ManifestError(f"Manifest {full_path} is not a JSON object")
    missing_keys = [key for key in REQUIRED_MANIFEST_KEYS if key not in data]
    if missing_keys:
        raise ManifestError(f"Manifest {full_path} is missing keys: {', '.join(missing_keys)}")
    if not isinstance(data['crawledPages'], list):
        raise ManifestError(f"Manifest {full_path} has a non-list 'crawledPages'")
    return Manifest.from_dict(data)
