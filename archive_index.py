# Module for listing archived domains and sessions from their manifests
import logging
import os

from exceptions import ManifestError
from manifest_writer import read_manifest, manifest_path_for

logger = logging.getLogger(__name__)


def list_domains(archive_root):
    """Returns the sorted names of domain directories under the archive root."""
    if not os.path.isdir(archive_root):
        return []
    return sorted(
        entry for entry in os.listdir(archive_root)
        if os.path.isdir(os.path.join(archive_root, entry))
    )


def list_sessions(archive_root, domain):
    """
    Returns one record per session directory of a domain that holds a
    readable manifest, newest first:
        {id, startUrl, entrypoint, crawledPages}
    Session directories without a manifest are ignored; unreadable
    manifests are logged and skipped.
    """
    domain_dir = os.path.join(archive_root, domain)
    if not os.path.isdir(domain_dir):
        return []

    sessions = []
    for folder in os.listdir(domain_dir):
        manifest_path = manifest_path_for(os.path.join(domain_dir, folder))
        if not os.path.isfile(manifest_path):
            continue
        try:
            manifest = read_manifest(manifest_path)
        except ManifestError as e:
            logger.warning(f"Skipping session {domain}/{folder}: {e}")
            continue
        sessions.append({
            'id': folder,
            'startUrl': manifest.start_url,
            'entrypoint': manifest.entrypoint,
            'crawledPages': manifest.crawled_pages,
        })
    return sorted(sessions, key=lambda s: s['id'], reverse=True)
