# Module for HTML parsing, link discovery and asset identification

import logging
import os
import posixpath
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

import constants
from models import AssetReference
from url_utils import resolve_url, is_same_domain

# Set up a specific logger for this module
logger = logging.getLogger(__name__)


# --- Document Model ---
class Element:
    """Typed accessors over a single parsed tag."""

    def __init__(self, tag):
        self._tag = tag

    @property
    def name(self):
        return self._tag.name

    def get(self, attribute):
        """Returns the attribute as a string, or None when absent."""
        value = self._tag.get(attribute)
        if isinstance(value, list): # Multi-valued attributes such as rel/class
            return " ".join(value)
        return value

    def has(self, attribute):
        return self._tag.has_attr(attribute)

    def set(self, attribute, value):
        self._tag[attribute] = value

    def remove(self, attribute):
        if self._tag.has_attr(attribute):
            del self._tag[attribute]

    def __repr__(self):
        return f"Element({self._tag.name!r})"


class PageDocument:
    """A parsed page whose elements can be inspected and rewritten in place."""

    def __init__(self, soup):
        self._soup = soup

    @classmethod
    def parse(cls, markup):
        return cls(BeautifulSoup(markup, 'html.parser'))

    def anchors(self):
        """All <a> elements carrying an href, in document order."""
        return [Element(tag) for tag in self._soup.find_all('a', href=True)]

    def asset_elements(self):
        """Stylesheet links, images and scripts, in document order."""
        elements = []
        for tag in self._soup.find_all(['link', 'img', 'script']):
            element = Element(tag)
            if element.name == 'link' and not _is_stylesheet(element):
                continue
            elements.append(element)
        return elements

    def to_html(self):
        return str(self._soup)

    def encode(self, encoding='utf-8'):
        """Serialized markup; any <meta charset> is updated to match."""
        return self._soup.encode(encoding)


def _is_stylesheet(element):
    rel = element.get('rel') or ''
    return 'stylesheet' in rel.lower().split()


def parse_document(markup):
    """Parses page markup (str or bytes) into a PageDocument."""
    return PageDocument.parse(markup)


# --- Link Discovery ---
def discover_links(document, page_url, domain):
    """
    Returns the deduplicated same-domain links of a page, in discovery order.
    Each href is resolved against page_url with its fragment stripped.
    Malformed hrefs are skipped.
    """
    discovered = []
    seen = set()
    for anchor in document.anchors():
        href = anchor.get('href')
        if not href:
            continue
        try:
            absolute_link = resolve_url(href, page_url)
            if not is_same_domain(absolute_link, domain):
                continue
        except ValueError:
            continue # Ignore invalid links
        if absolute_link not in seen:
            seen.add(absolute_link)
            discovered.append(absolute_link)
    return discovered


# --- Asset Discovery ---
def first_srcset_candidate(srcset):
    """Returns the URL of the first candidate in a srcset attribute."""
    first = srcset.split(',')[0].strip()
    return first.split()[0] if first else ''


def _asset_source(element):
    """Returns (kind, attribute, raw url) for an asset element, or None."""
    if element.name == 'link':
        return 'css', 'href', element.get('href')
    if element.name == 'img':
        srcset = element.get('srcset')
        if srcset:
            return 'img', 'src', first_srcset_candidate(srcset)
        return 'img', 'src', element.get('src')
    if element.name == 'script':
        return 'js', 'src', element.get('src')
    return None


def asset_filename(kind, counter, asset_url):
    """
    Builds the per-page filename for an asset, e.g. style-1.css or image-3.png.
    The extension comes from the asset URL path, else the kind's default.
    """
    extension = constants.ASSET_DEFAULT_EXTENSIONS[kind]
    if kind not in constants.FIXED_EXTENSION_KINDS:
        url_extension = posixpath.splitext(urlsplit(asset_url).path)[1]
        if url_extension:
            extension = url_extension
    return f"{constants.ASSET_FILENAME_PREFIXES[kind]}-{counter}{extension}"


def find_assets(document, page_url, asset_dir):
    """
    Identifies the assets of a page and assigns each a local path under
    asset_dir. Counters are scoped to this call, so filenames are unique
    within the page only. data: URIs and unresolvable URLs are skipped.

    Returns:
        list[AssetReference]: in document order.
    """
    counters = {kind: 0 for kind in constants.ASSET_KINDS}
    assets = []
    for element in document.asset_elements():
        source = _asset_source(element)
        if source is None:
            continue
        kind, attribute, file_url = source
        if not file_url or file_url.strip().lower().startswith(constants.DATA_URI_PREFIX):
            continue
        try:
            absolute_url = resolve_url(file_url, page_url)
        except ValueError:
            logger.debug(f"Skipping unresolvable asset URL '{file_url}' on {page_url}")
            continue

        counters[kind] += 1
        filename = asset_filename(kind, counters[kind], absolute_url)
        assets.append(AssetReference(
            source_url=absolute_url,
            local_path=os.path.join(asset_dir, filename),
            kind=kind,
            element=element,
            attribute=attribute,
        ))
    return assets


def rewrite_asset_reference(asset, relative_path):
    """Points an asset's element at its downloaded copy."""
    asset.element.set(asset.attribute, relative_path)
    if asset.kind == 'img':
        asset.element.remove('srcset')
