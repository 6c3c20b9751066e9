"""
Configuration constants for the profile graph crawler.
"""

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------
DEFAULT_OUTPUT = "."
DEFAULT_DEPTH = 1              # generations to process (seed generation included)
DEFAULT_WORKERS = 10           # profiles fetched in parallel per generation

# ---------------------------------------------------------------------------
# Remote endpoints
# ---------------------------------------------------------------------------
BASE_URL = "https://www.instagram.com/"
MEDIA_PATH = "/media"          # appended to the profile URL for paging
CURSOR_PARAM = "max_id"

# Marker of the embedded data blob inside the profile page
SHARED_DATA_MARKER = "window._sharedData"
PROFILE_ENTRY_KEY = "UserProfile"

# Only items of this type are kept in the output collection
IMAGE_ITEM_TYPE = "image"

# ---------------------------------------------------------------------------
# Transport tuning
# ---------------------------------------------------------------------------
REQUEST_TIMEOUT = 30
MAX_RETRIES = 3                # 5xx retries inside the HTTP adapter

# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------
IMAGE_DOWNLOAD_WORKERS = 10    # parallel image downloads per profile
SAVE_WORKERS = 4               # profiles persisted in the background at once
PROFILE_FILENAME = "profile.json"
IMAGES_FILENAME = "images.json"
IMAGE_SUFFIX = ".jpg"

# Chunk size for streaming image downloads to disk (64 KiB)
STREAM_CHUNK = 65536

# ---------------------------------------------------------------------------
# User-Agent rotation pool
# ---------------------------------------------------------------------------
USER_AGENTS = [
    # Chrome (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Chrome (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36",
    # Firefox (Linux)
    "Mozilla/5.0 (X11; Linux x86_64; rv:133.0) Gecko/20100101 Firefox/133.0",
    # Safari (macOS)
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.6 Safari/605.1.15",
    # Edge (Windows)
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36 Edg/131.0.0.0",
]
