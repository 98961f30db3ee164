# Module for the second crawl phase: rewriting anchors and saving final HTML
import logging

import constants
from file_handler import save_page_html
from path_mapper import get_local_file_path, relative_link
from url_utils import resolve_url, is_same_domain

logger = logging.getLogger(__name__)


def _is_skipped_href(href):
    """Bare fragments, mailto: and tel: links are left exactly as written."""
    return href.strip().lower().startswith(constants.SKIPPED_LINK_PREFIXES)


def classify_link(href, page_url, domain, visited):
    """
    Resolves an href and decides where it should point.

    Returns:
        tuple: (absolute_url, is_archived). Raises ValueError for malformed hrefs.
    """
    absolute_url = resolve_url(href, page_url)
    return absolute_url, is_same_domain(absolute_url, domain) and absolute_url in visited


def rewrite_page_links(document, page_url, start_url, archive_path, domain, visited):
    """
    Rewrites every anchor of a page in place. Links to archived pages become
    relative paths to their saved files; every other link becomes the
    absolute live URL. Unparseable hrefs are left untouched.

    Returns:
        tuple: (archived_count, live_count)
    """
    local_page_path = get_local_file_path(page_url, start_url, archive_path)
    archived_count = 0
    live_count = 0

    for anchor in document.anchors():
        href = anchor.get('href')
        if not href or _is_skipped_href(href):
            continue
        try:
            absolute_url, is_archived = classify_link(href, page_url, domain, visited)
        except ValueError:
            logger.debug(f"Leaving unparseable href '{href}' on {page_url}")
            continue

        if is_archived:
            target_path = get_local_file_path(absolute_url, start_url, archive_path)
            anchor.set('href', relative_link(local_page_path, target_path) or constants.SELF_LINK_FALLBACK)
            archived_count += 1
        else:
            anchor.set('href', absolute_url)
            live_count += 1

    return archived_count, live_count


def persist_page(document, page_url, start_url, archive_path):
    """Serializes a page and writes it to its mapped path. Raises ArchiveWriteError."""
    local_page_path = get_local_file_path(page_url, start_url, archive_path)
    save_page_html(document.encode('utf-8'), local_page_path)
    return local_page_path


def persist_snapshots(store, session, visited):
    """
    Rewrites and saves every page held in the snapshot store.
    Write failures propagate to the caller.

    Returns:
        list[str]: local paths written, in store order.
    """
    written = []
    for page_url, document in store.items():
        archived_count, live_count = rewrite_page_links(
            document, page_url, session.start_url, session.archive_path, session.domain, visited
        )
        local_page_path = persist_page(document, page_url, session.start_url, session.archive_path)
        logger.info(f"Saved final HTML for {page_url} ({archived_count} archived links, {live_count} live links)")
        written.append(local_page_path)
    return written
