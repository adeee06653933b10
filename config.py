"""
Centralized configuration for all modules
"""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Application name (used in page titles and startup banner)
APP_NAME = os.environ.get('APP_NAME', 'Media Showcase')

# ==================== PATHS ====================

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Site content (owner bio, navigation, galleries, inspiration links, theme)
# Re-read on every page request so edits show up without a restart
CONTENT_FILE = os.environ.get('CONTENT_FILE', os.path.join(BASE_DIR, 'content.json'))

STATIC_DIR = os.path.join(BASE_DIR, 'static')

# ==================== CLOUDINARY ====================

CLOUDINARY_CLOUD_NAME = os.environ.get('CLOUDINARY_CLOUD_NAME', 'demo-cloud')
CLOUDINARY_API_KEY = os.environ.get('CLOUDINARY_API_KEY', '')
CLOUDINARY_API_SECRET = os.environ.get('CLOUDINARY_API_SECRET', '')

# Request timeout for Cloudinary admin API calls
REQUEST_TIMEOUT = int(os.environ.get('REQUEST_TIMEOUT', 10))  # seconds

# Images requested per gallery tag
DEFAULT_IMAGE_LIMIT = int(os.environ.get('DEFAULT_IMAGE_LIMIT', 400))

# ==================== IMAGE CACHE ====================

# How long a fetched tag stays fresh before the next request refetches it
CACHE_DURATION_SECONDS = int(os.environ.get('CACHE_DURATION_SECONDS', 300))  # 5 minutes

# How often the background sweeper drops expired tags
CACHE_SWEEP_INTERVAL_SECONDS = int(os.environ.get('CACHE_SWEEP_INTERVAL_SECONDS', 60))

# Bounds enforced by LRU eviction after every successful fetch
MAX_CACHE_ENTRIES = int(os.environ.get('MAX_CACHE_ENTRIES', 20))
MAX_CACHE_SIZE_MB = int(os.environ.get('MAX_CACHE_SIZE_MB', 50))

# Size accounting is an estimate, not a measurement: each image record counts as this many bytes
IMAGE_SIZE_ESTIMATE_BYTES = int(os.environ.get('IMAGE_SIZE_ESTIMATE_BYTES', 1024))

# Bearer token for /api/cache/* endpoints
# Leave empty to disable the cache admin endpoints entirely
CACHE_API_KEY = os.environ.get('CACHE_API_KEY', '')

# ==================== LOGGING ====================

# Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

# ==================== WEB SERVER ====================

HOST = os.environ.get('HOST', '0.0.0.0')
PORT = int(os.environ.get('PORT', 8737))

# ==================== VALIDATION ====================

def has_cloudinary_credentials() -> bool:
    """True when both halves of the Cloudinary API credential are set."""
    return bool(CLOUDINARY_API_KEY and CLOUDINARY_API_SECRET)


def validate_config():
    """Validate configuration and return a list of warnings"""
    warnings = []

    if not os.path.exists(CONTENT_FILE):
        warnings.append(f"Content file not found: {CONTENT_FILE} (default content will be served)")

    if not has_cloudinary_credentials():
        warnings.append("Cloudinary API credentials not set - galleries will show mock images")

    if not CACHE_API_KEY:
        warnings.append("CACHE_API_KEY is not set - cache admin endpoints are disabled")

    if MAX_CACHE_ENTRIES < 1:
        warnings.append(f"MAX_CACHE_ENTRIES must be at least 1 (got {MAX_CACHE_ENTRIES})")

    return warnings


def get_cache_config():
    """Get image cache settings as keyword arguments for ImageCache"""
    return {
        "cache_duration": CACHE_DURATION_SECONDS,
        "max_entries": MAX_CACHE_ENTRIES,
        "max_size_bytes": MAX_CACHE_SIZE_MB * 1024 * 1024,
        "image_size_estimate": IMAGE_SIZE_ESTIMATE_BYTES,
        "sweep_interval": CACHE_SWEEP_INTERVAL_SECONDS,
    }
