# Module for fetching live pages and assets
import logging

import requests

import constants
from .decorators import handle_request_errors

logger = logging.getLogger(__name__)


def _request_options(config):
    """Headers and timeout shared by page and asset requests."""
    headers = {'User-Agent': config.get('user_agent', constants.DEFAULT_USER_AGENT)}
    timeout = config.get('request_timeout_seconds', constants.DEFAULT_TIMEOUT_SECONDS)
    return headers, timeout


# --- Page Fetching ---
@handle_request_errors(return_on_failure=None)
def fetch_page(url, config):
    """
    Fetches the raw markup of a live page.
    Returns the response body as bytes or None on failure (non-2xx,
    timeout, DNS or connection error).
    """
    headers, timeout = _request_options(config)
    logger.debug(f"Attempting to fetch page: {url}")

    response = requests.get(url, headers=headers, timeout=timeout)
    try:
        response.raise_for_status() # Non-2xx is handled by the decorator
        logger.debug(f"Fetched page {url} ({response.status_code}, {len(response.content)} bytes)")
        return response.content
    finally:
        response.close()


# --- Asset Fetching ---
@handle_request_errors(return_on_failure=None)
def fetch_asset(asset_url, config):
    """
    Fetches the raw bytes of a stylesheet, image or script.
    Returns bytes (possibly empty) or None on failure.
    """
    headers, timeout = _request_options(config)
    logger.debug(f"Attempting to fetch asset: {asset_url}")

    # Use stream=True for potentially large assets
    response = requests.get(asset_url, headers=headers, timeout=timeout, stream=True)
    try:
        response.raise_for_status()
        return response.content
    finally:
        response.close()
