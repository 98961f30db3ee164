import pytest
import os

import html_processor
from html_processor import PageDocument, Element

PAGE_URL = "https://example.com/docs/"
ASSET_DIR = os.path.join(os.sep, "arch", "assets", "docs")


# --- Tests for the document model ---

def test_element_accessors():
    document = PageDocument.parse('<link rel="stylesheet" href="a.css"><img src="x.png" srcset="y.png 2x">')
    link = document.asset_elements()[0]
    assert isinstance(link, Element)
    assert link.name == 'link'
    assert link.get('rel') == 'stylesheet' # Multi-valued attribute joined back to a string
    assert link.get('missing') is None

    img = document.asset_elements()[1]
    img.set('src', 'local.png')
    img.remove('srcset')
    img.remove('srcset') # Removing an absent attribute is a no-op
    assert not img.has('srcset')
    assert 'src="local.png"' in document.to_html()


def test_asset_elements_skip_non_stylesheet_links():
    document = PageDocument.parse(
        '<link rel="icon" href="/favicon.ico"><link rel="preload stylesheet" href="/a.css"><script></script>'
    )
    names = [(e.name, e.get('href')) for e in document.asset_elements()]
    assert names == [('link', '/a.css'), ('script', None)]


def test_encode_updates_meta_charset():
    document = html_processor.parse_document(
        '<html><head><meta charset="iso-8859-1"></head><body>café</body></html>'
    )
    encoded = document.encode('utf-8')
    assert b'charset="utf-8"' in encoded
    assert 'café'.encode('utf-8') in encoded


# --- Tests for discover_links ---

def test_discover_links_same_domain_deduplicated_in_order():
    html = """
    <a href="/about">About</a>
    <a href="/about#team">Team</a>
    <a href="https://other.com/x">Elsewhere</a>
    <a href="contact.html">Contact</a>
    <a href="mailto:someone@example.com">Mail</a>
    <a href="http://[::1">Broken</a>
    <a href="">Empty</a>
    <a name="anchor-without-href">No href</a>
    <a href="HTTPS://EXAMPLE.COM/about">Upper</a>
    """
    document = html_processor.parse_document(html)
    links = html_processor.discover_links(document, PAGE_URL, "example.com")
    assert links == ["https://example.com/about", "https://example.com/docs/contact.html"]


def test_discover_links_excludes_subdomains():
    document = html_processor.parse_document('<a href="https://blog.example.com/">Blog</a>')
    assert html_processor.discover_links(document, PAGE_URL, "example.com") == []


# --- Tests for asset naming ---

@pytest.mark.parametrize("srcset, expected", [
    ("/img/b-2x.webp 2x, /img/b-3x.webp 3x", "/img/b-2x.webp"),
    ("  /img/only.png  ", "/img/only.png"),
    ("", ""),
])
def test_first_srcset_candidate(srcset, expected):
    assert html_processor.first_srcset_candidate(srcset) == expected


@pytest.mark.parametrize("kind, counter, url, expected", [
    ("css", 1, "https://example.com/theme.php", "style-1.css"), # Stylesheets always use .css
    ("img", 2, "https://example.com/a/logo.PNG?v=3", "image-2.PNG"),
    ("img", 3, "https://example.com/img/noext", "image-3.jpg"),
    ("js", 1, "https://example.com/app.mjs", "script-1.mjs"),
    ("js", 4, "https://example.com/bundle/", "script-4.js"),
])
def test_asset_filename(kind, counter, url, expected):
    assert html_processor.asset_filename(kind, counter, url) == expected


# --- Tests for find_assets ---

ASSET_HTML = """
<html><head>
  <link rel="stylesheet" href="/css/main.css">
  <link rel="icon" href="/favicon.ico">
  <link rel="stylesheet" href="theme.php">
  <script src="/js/app.js"></script>
  <script>inline()</script>
</head><body>
  <img src="/img/a.png">
  <img src="/img/b.png" srcset="/img/b-2x.webp 2x, /img/b-3x.webp 3x">
  <img src="data:image/png;base64,AAAA">
  <img src="/img/noext">
  <img alt="no source">
</body></html>
"""


def test_find_assets():
    document = html_processor.parse_document(ASSET_HTML)
    assets = html_processor.find_assets(document, "https://example.com/", ASSET_DIR)

    assert [(a.kind, a.source_url, os.path.basename(a.local_path)) for a in assets] == [
        ("css", "https://example.com/css/main.css", "style-1.css"),
        ("css", "https://example.com/theme.php", "style-2.css"),
        ("js", "https://example.com/js/app.js", "script-1.js"),
        ("img", "https://example.com/img/a.png", "image-1.png"),
        ("img", "https://example.com/img/b-2x.webp", "image-2.webp"), # srcset wins over src
        ("img", "https://example.com/img/noext", "image-3.jpg"),
    ]
    assert all(os.path.dirname(a.local_path) == ASSET_DIR for a in assets)
    assert [a.attribute for a in assets] == ["href", "href", "src", "src", "src", "src"]


def test_find_assets_counters_are_per_call():
    html = '<img src="/a.png">'
    first = html_processor.find_assets(html_processor.parse_document(html), "https://example.com/", ASSET_DIR)
    second = html_processor.find_assets(html_processor.parse_document(html), "https://example.com/", ASSET_DIR)
    assert os.path.basename(first[0].local_path) == os.path.basename(second[0].local_path) == "image-1.png"


def test_find_assets_skips_data_uris_and_malformed_urls():
    html = '<img src="data:image/gif;base64,R0lG"><script src="http://[::1/x.js"></script>'
    document = html_processor.parse_document(html)
    assert html_processor.find_assets(document, "https://example.com/", ASSET_DIR) == []


# --- Tests for rewrite_asset_reference ---

def test_rewrite_asset_reference_image_drops_srcset():
    document = html_processor.parse_document('<img src="/b.png" srcset="/b-2x.png 2x">')
    asset = html_processor.find_assets(document, "https://example.com/", ASSET_DIR)[0]
    html_processor.rewrite_asset_reference(asset, "assets/index/image-1.png")

    html = document.to_html()
    assert 'src="assets/index/image-1.png"' in html
    assert 'srcset' not in html


def test_rewrite_asset_reference_stylesheet_keeps_other_attributes():
    document = html_processor.parse_document('<link rel="stylesheet" href="/a.css" media="print">')
    asset = html_processor.find_assets(document, "https://example.com/", ASSET_DIR)[0]
    html_processor.rewrite_asset_reference(asset, "assets/index/style-1.css")

    html = document.to_html()
    assert 'href="assets/index/style-1.css"' in html
    assert 'media="print"' in html
