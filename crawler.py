# Module orchestrating one crawl session: fetch phase, rewrite phase, manifest
import logging
import os
from datetime import datetime, timezone
from urllib.parse import urlsplit

import constants
from file_handler import ensure_directory
from frontier import CrawlFrontier
from link_rewriter import persist_snapshots
from manifest_writer import build_manifest, write_manifest, isoformat_utc
from models import CrawlSession, CrawlReport
from page_fetcher import fetch_page_and_assets
from snapshot_store import SnapshotStore
from url_utils import normalize_url

logger = logging.getLogger(__name__)


def session_timestamp(started_at):
    """Directory-safe UTC timestamp, e.g. 2024-05-01T10-11-12.345Z."""
    return isoformat_utc(started_at).replace(':', '-')


def create_session(start_url, page_budget, archive_root, started_at=None):
    """
    Normalizes the start URL and creates the session directory
    <archive_root>/<domain>/<timestamp>.
    Raises ValueError for a start URL that is not an absolute http(s) URL
    or a page budget below 1, before anything is created on disk.
    """
    if page_budget < 1:
        raise ValueError(f"Page budget must be at least 1, got {page_budget}")
    normalized_url = normalize_url(start_url)
    parsed = urlsplit(normalized_url)
    if parsed.scheme not in ('http', 'https') or not parsed.hostname:
        raise ValueError(f"Start URL must be an absolute http(s) URL: {start_url!r}")

    started_at = started_at or datetime.now(timezone.utc)
    archive_path = os.path.abspath(os.path.join(archive_root, parsed.hostname, session_timestamp(started_at)))
    ensure_directory(archive_path)
    return CrawlSession(
        start_url=normalized_url,
        domain=parsed.hostname,
        archive_path=archive_path,
        page_budget=page_budget,
        started_at=started_at,
    )


def crawl_pages(session, store, config):
    """
    Fetch phase: breadth-first, one page at a time, until the frontier drains
    or the page budget is reached. Fills the snapshot store.

    Returns:
        tuple: (visited frozenset, list of failed URLs)
    """
    frontier = CrawlFrontier(session.start_url, session.page_budget)
    failed = []

    while frontier.has_next():
        current_url = frontier.pop()
        if frontier.is_visited(current_url):
            continue

        result = fetch_page_and_assets(current_url, session.archive_path, session.start_url, config)
        if result is None:
            failed.append(current_url)
            continue

        frontier.mark_visited(current_url)
        store.add(current_url, result.document)
        added = frontier.enqueue_links(result.discovered_links)
        logger.debug(f"Queued {added} new links from {current_url} ({frontier.pending_count} pending)")

    return frontier.visited, failed


def run_crawl(start_url, page_budget, config):
    """
    Runs a complete session and returns a CrawlReport.

    Page and asset failures only shrink the archive. Filesystem failures
    raise ArchiveWriteError.
    """
    session = create_session(start_url, page_budget, config.get('archive_root', constants.DEFAULT_ARCHIVE_ROOT))
    logger.info(f"Starting crawl for: {session.start_url} (Max Pages: {session.page_budget})")
    logger.info(f"Archive directory: {session.archive_path}")

    with SnapshotStore() as store:
        logger.info("--- Starting Pass 1: Crawling and Fetching Pages ---")
        visited, failed = crawl_pages(session, store, config)

        logger.info("--- Starting Pass 2: Rewriting Links and Saving HTML ---")
        persist_snapshots(store, session, visited)

    manifest = build_manifest(session.start_url, session.archive_path, visited)
    manifest_path = write_manifest(manifest, session.archive_path)

    logger.info(f"Crawl complete. {len(visited)} pages archived in {session.archive_path} ({len(failed)} failed)")
    return CrawlReport(
        session=session,
        crawled_pages=list(manifest.crawled_pages),
        failed_pages=failed,
        manifest_path=manifest_path,
    )
