# constants.py - Define constants used throughout the application

# --- File/Directory Names ---
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_ARCHIVE_ROOT = "archives"
DEFAULT_LOG_FILE = "archiver.log"
INDEX_FILENAME = "index.html" # Used for root paths, directory-like paths and off-domain URLs
INDEX_IDENTIFIER = "index" # Asset subdirectory name for the root page
ASSETS_DIR_NAME = "assets" # Per-session asset tree: assets/<page identifier>/
MANIFEST_FILENAME = "_manifest.json"
SELF_LINK_FALLBACK = "./index.html" # Used when a relative link computes to an empty path

# --- Path Sanitization ---
UNSAFE_PATH_CHARS = r'[<>:"/\\|?*]' # Replaced with '_' when mapping a URL path to a file name
UNSAFE_IDENTIFIER_CHARS = r'[\\/?%*:|"<>]' # Replaced with '_' in asset directory names
PATH_REPLACEMENT_CHAR = "_"

# --- Assets ---
ASSET_KINDS = ("css", "img", "js")
ASSET_FILENAME_PREFIXES = {"css": "style", "img": "image", "js": "script"}
ASSET_DEFAULT_EXTENSIONS = {"css": ".css", "img": ".jpg", "js": ".js"}
FIXED_EXTENSION_KINDS = ("css",) # Kinds that always use their default extension
SKIPPED_LINK_PREFIXES = ("#", "mailto:", "tel:") # Anchors the link rewriter never touches
DATA_URI_PREFIX = "data:"

# --- Crawl Defaults ---
DEFAULT_MAX_PAGES = 10
DEFAULT_MAX_ASSET_WORKERS = 8

# --- Request Defaults ---
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/128.0.0.0 Safari/537.36"
)
DEFAULT_TIMEOUT_SECONDS = 15 # Per HTTP call, pages and assets alike

# --- Logging ---
DEFAULT_LOG_LEVEL = "INFO"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
