# Module for URL resolution and normalization
from urllib.parse import urljoin, urlsplit, urlunsplit, urldefrag


def _remove_dot_segments(path):
    """
    Resolves '.' and '..' segments of an absolute path. A path ending in a
    dot segment keeps a trailing slash: '/a/b/..' becomes '/a/'.
    """
    segments = path.split('/')[1:]
    resolved = []
    for index, segment in enumerate(segments):
        is_last = index == len(segments) - 1
        if segment == '..':
            if resolved:
                resolved.pop()
        elif segment != '.':
            resolved.append(segment)
            continue
        if is_last:
            resolved.append('')
    return '/' + '/'.join(resolved)


def normalize_url(url):
    """
    Canonical form used for every frontier, visited-set and link check:
    - fragment removed
    - scheme and host lower-cased
    - empty path on an http(s) URL becomes "/"
    - '.' and '..' path segments resolved
    Raises ValueError for URLs urllib cannot parse.
    """
    parts = urlsplit(url.strip())
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    path = parts.path
    if scheme in ('http', 'https') and netloc:
        path = _remove_dot_segments(path or '/')
    parts.port # Raises ValueError for a malformed port
    return urlunsplit((scheme, netloc, path, parts.query, ''))


def resolve_url(href, base_url):
    """
    Resolves an href found on base_url to an absolute, normalized URL with
    any fragment stripped. Raises ValueError when the href is malformed.
    """
    absolute, _fragment = urldefrag(urljoin(base_url, href.strip()))
    return normalize_url(absolute)


def hostname_of(url):
    """Returns the lower-cased hostname of url, or None when it has none."""
    return urlsplit(url).hostname


def is_same_domain(url, domain):
    return hostname_of(url) == domain
