# Module for mapping page URLs to deterministic local file paths
import os
import re
from urllib.parse import urlsplit

import constants


def _strip_slashes(path):
    """Removes a single leading and a single trailing slash."""
    if path.startswith('/'):
        path = path[1:]
    if path.endswith('/'):
        path = path[:-1]
    return path


def _replace_dot_names(name):
    """Names made only of dots (".", "..") would alias or escape a directory."""
    if name and not name.strip('.'):
        return constants.PATH_REPLACEMENT_CHAR * len(name)
    return name


def get_local_file_path(page_url, start_url, archive_path):
    """
    Calculates the absolute local file path for a page's HTML.

    The URL path is flattened into a single name (unsafe characters,
    including '/', become '_'). Root paths and URLs on another host map to
    index.html; extensionless names are treated as directories.
    """
    parsed = urlsplit(page_url)
    page_filename = _replace_dot_names(re.sub(constants.UNSAFE_PATH_CHARS, constants.PATH_REPLACEMENT_CHAR,
                                              _strip_slashes(parsed.path)))

    if not page_filename or parsed.hostname != urlsplit(start_url).hostname:
        page_filename = constants.INDEX_FILENAME
    elif not os.path.splitext(page_filename)[1]:
        page_filename = os.path.join(page_filename, constants.INDEX_FILENAME)
    return os.path.join(archive_path, page_filename)


def get_page_identifier(page_url):
    """Returns the sanitized name of a page's asset subdirectory."""
    path = _strip_slashes(urlsplit(page_url).path) or constants.INDEX_IDENTIFIER
    return _replace_dot_names(re.sub(constants.UNSAFE_IDENTIFIER_CHARS, constants.PATH_REPLACEMENT_CHAR, path))


def get_asset_dir(page_url, archive_path):
    return os.path.join(archive_path, constants.ASSETS_DIR_NAME, get_page_identifier(page_url))


def relative_link(from_file, to_file):
    """
    Relative path from the directory holding from_file to to_file, with
    POSIX separators so it can be used as an href/src value.
    """
    relative_path = os.path.relpath(to_file, start=os.path.dirname(from_file))
    return relative_path.replace(os.sep, '/')
