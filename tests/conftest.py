import pytest
import sys
import os
import logging
from unittest.mock import MagicMock, patch

import requests

# Ensure the project root is in the Python path for imports in tests
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if project_root not in sys.path:
    sys.path.insert(0, project_root)


@pytest.fixture(autouse=True)
def configure_logging(caplog):
    """Ensure logging is configured to capture DEBUG level messages for all tests."""
    caplog.set_level(logging.DEBUG, logger="root")


@pytest.fixture
def mock_config(tmp_path):
    """A complete config dictionary writing archives under tmp_path."""
    return {
        'archive_root': str(tmp_path / "archives"),
        'user_agent': 'Test User Agent',
        'request_timeout_seconds': 5,
        'max_asset_workers': 4,
        'default_max_pages': 10,
        'log_file': str(tmp_path / "test.log"),
        'log_level': 'DEBUG',
    }


def make_response(status_code=200, content=b""):
    """Creates a MagicMock standing in for requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.content = content
    response.close = MagicMock()
    if status_code >= 400:
        error = requests.exceptions.HTTPError(f"{status_code} Error", response=response)
        response.raise_for_status = MagicMock(side_effect=error)
    else:
        response.raise_for_status = MagicMock()
    return response


class FakeSite:
    """
    Serves canned responses for requests.get. Unknown URLs raise
    ConnectionError; URLs registered with timeout=True raise Timeout.
    Every requested URL is recorded in `requests`.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, url, body=b"", status_code=200, timeout=False):
        if isinstance(body, str):
            body = body.encode('utf-8')
        self.routes[url] = (status_code, body, timeout)
        return self

    def get(self, url, headers=None, timeout=None, stream=False):
        self.requests.append(url)
        if url not in self.routes:
            raise requests.exceptions.ConnectionError(f"No route to {url}")
        status_code, body, is_timeout = self.routes[url]
        if is_timeout:
            raise requests.exceptions.Timeout(f"Timed out fetching {url}")
        return make_response(status_code, body)


@pytest.fixture
def fake_site():
    site = FakeSite()
    with patch('http_clients.page_client.requests.get', side_effect=site.get):
        yield site
