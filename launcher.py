# Module for launching crawl sessions in the background
import logging
from concurrent.futures import ThreadPoolExecutor

import constants
from crawler import run_crawl

logger = logging.getLogger(__name__)

PENDING = "pending"
RUNNING = "running"
COMPLETED = "completed"
FAILED = "failed"
CANCELLED = "cancelled"

_default_executor = None


def _get_default_executor():
    global _default_executor
    if _default_executor is None:
        _default_executor = ThreadPoolExecutor(thread_name_prefix="crawl-session")
    return _default_executor


def normalize_page_budget(max_pages, default=constants.DEFAULT_MAX_PAGES):
    """Returns max_pages when it is a positive integer, else the default."""
    if isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages <= 0:
        return default
    return max_pages


class CrawlTask:
    """
    Handle on a background session. Cancelling only prevents a session that
    has not started yet; a running session always runs to completion.
    """

    def __init__(self, url, page_budget, future):
        self.url = url
        self.page_budget = page_budget
        self._future = future

    @property
    def status(self):
        if self._future.cancelled():
            return CANCELLED
        if self._future.running():
            return RUNNING
        if not self._future.done():
            return PENDING
        if self._future.exception() is not None:
            return FAILED
        return COMPLETED

    @property
    def error(self):
        if self._future.done() and not self._future.cancelled():
            return self._future.exception()
        return None

    def cancel(self):
        return self._future.cancel()

    def result(self, timeout=None):
        """Blocks until the session finishes and returns its CrawlReport."""
        return self._future.result(timeout=timeout)

    def __repr__(self):
        return f"CrawlTask(url={self.url!r}, status={self.status!r})"


def _run_logged(url, page_budget, config):
    try:
        return run_crawl(url, page_budget, config)
    except Exception as e:
        logger.error(f"Crawl session for {url} failed: {e}", exc_info=True)
        raise


def launch_crawl(url, max_pages=None, config=None, executor=None):
    """
    Starts a session without waiting for it.
    Only the presence of url is validated here; everything else is reported
    through the returned task and the session output.

    Raises:
        ValueError: if url is missing or empty.
    """
    if not url or not isinstance(url, str) or not url.strip():
        raise ValueError("URL is required")

    config = config or {}
    default_budget = config.get('default_max_pages', constants.DEFAULT_MAX_PAGES)
    page_budget = normalize_page_budget(max_pages, default_budget)
    executor = executor or _get_default_executor()

    logger.info(f"Archiving process for {url} has started (Max Pages: {page_budget})")
    future = executor.submit(_run_logged, url.strip(), page_budget, config)
    return CrawlTask(url.strip(), page_budget, future)
