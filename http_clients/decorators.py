# Decorators for HTTP client functions
import logging
import functools

import requests

logger = logging.getLogger(__name__)


def _find_url_snippet(func, args, kwargs):
    """Returns a short description of the URL a wrapped call was made for."""
    url_to_log = kwargs.get('url') # Prioritize 'url' kwarg
    if not url_to_log:
        # Find first string arg starting with http
        for arg in args:
            if isinstance(arg, str) and arg.startswith('http'):
                url_to_log = arg
                break
    if url_to_log:
        return f"for {url_to_log[:120]}"
    return f"in {func.__name__}"


def handle_request_errors(return_on_failure=None):
    """
    Decorator converting `requests` failures into a logged failure value.
    Assumes the wrapped function:
    - Makes a single primary `requests` call (e.g., requests.get).
    - Returns the successful result or raises a
      `requests.exceptions.RequestException` on failure (including the
      HTTPError produced by `raise_for_status()` for non-2xx responses).

    Failures are never retried: a failed request is logged once and
    `return_on_failure` is returned in place of the result.

    Args:
        return_on_failure: Value returned when the request fails.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            log_url_snippet = _find_url_snippet(func, args, kwargs)
            try:
                return func(*args, **kwargs)

            except requests.exceptions.HTTPError as e:
                status_code = None
                if getattr(e, 'response', None) is not None:
                    status_code = e.response.status_code
                logger.warning(f"HTTP error {status_code or 'without status code'} {log_url_snippet}. Not retrying.")
                return return_on_failure

            except (requests.exceptions.Timeout, requests.exceptions.ConnectionError) as e:
                exc_type = type(e).__name__
                logger.error(f"{exc_type} occurred {log_url_snippet}: {e}. Not retrying.")
                return return_on_failure

            except requests.exceptions.RequestException as e:
                # Catch other request exceptions AFTER specific ones
                logger.error(f"Request failed {log_url_snippet}: {e}")
                return return_on_failure

        return wrapper
    return decorator
