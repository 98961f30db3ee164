# Module for fetching a single page together with its assets
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import constants
from exceptions import ArchiveWriteError
from file_handler import save_asset
from html_processor import parse_document, discover_links, find_assets, rewrite_asset_reference
from http_clients.page_client import fetch_page, fetch_asset
from models import FetchResult
from path_mapper import get_local_file_path, get_asset_dir, relative_link
from url_utils import hostname_of

logger = logging.getLogger(__name__)


def _download_asset(asset, config):
    """
    Fetches and saves one asset. Runs on a worker thread and never touches
    the document. Returns True when the asset is on disk.
    """
    content = fetch_asset(asset.source_url, config=config)
    if content is None:
        return False
    try:
        save_asset(content, asset.local_path)
    except ArchiveWriteError as e:
        logger.error(f"Could not save asset {asset.source_url}: {e}")
        return False
    return True


def download_assets(assets, local_page_path, config):
    """
    Downloads all assets of one page concurrently and rewrites each element
    whose asset was saved. Element mutation happens on the calling thread.

    Returns:
        tuple: (saved_count, failed_count)
    """
    if not assets:
        return 0, 0

    saved_count = 0
    failed_count = 0
    max_workers = min(config.get('max_asset_workers', constants.DEFAULT_MAX_ASSET_WORKERS), len(assets))
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        future_map = {pool.submit(_download_asset, asset, config): asset for asset in assets}
        for fut in as_completed(future_map):
            asset = future_map[fut]
            try:
                saved = fut.result()
            except Exception as e:
                logger.error(f"Unexpected error downloading asset {asset.source_url}: {e}", exc_info=True)
                saved = False

            if saved:
                rewrite_asset_reference(asset, relative_link(local_page_path, asset.local_path))
                saved_count += 1
            else:
                logger.warning(f"Could not download asset: {asset.source_url}")
                failed_count += 1
    return saved_count, failed_count


def fetch_page_and_assets(url, archive_path, start_url, config):
    """
    Fetches a page, discovers its same-domain links and downloads its assets.
    Assets are saved to disk; the page itself is returned in memory.

    Returns:
        FetchResult | None: None when the page could not be fetched or parsed.
    """
    logger.info(f"Fetching page and assets for: {url}")
    try:
        markup = fetch_page(url, config=config)
        if markup is None:
            logger.warning(f"Failed to fetch page {url}")
            return None

        document = parse_document(markup)
        links = discover_links(document, url, hostname_of(start_url))

        local_page_path = get_local_file_path(url, start_url, archive_path)
        assets = find_assets(document, url, get_asset_dir(url, archive_path))
        logger.debug(f"Found {len(assets)} assets and {len(links)} same-domain links on {url}")

        saved_count, failed_count = download_assets(assets, local_page_path, config)
        logger.info(f"Fetched {url}: assets saved={saved_count}, failed={failed_count}")
        return FetchResult(
            document=document,
            discovered_links=links,
            assets_saved=saved_count,
            assets_failed=failed_count,
        )
    except Exception as e:
        logger.error(f"Failed to fetch page {url}: {e}", exc_info=True)
        return None
