import os
from typing import Optional

from errors import ConfigError

# Basic app configuration. Environment variables override the defaults so the
# same build can point at a local or a deployed backend.
APP_NAME = "Book Recommender"
API_BASE = os.environ.get("BOOKREC_API_BASE", "http://localhost:8080").rstrip("/")
LOG_LEVEL = os.environ.get("BOOKREC_LOG_LEVEL", "INFO")

# Seconds; unset means requests wait indefinitely, as the browser client did.
REQUEST_TIMEOUT_RAW = os.environ.get("BOOKREC_REQUEST_TIMEOUT", "")

# Cookie names mirror the localStorage keys of the original web client.
TOKEN_COOKIE_NAME = "authToken"
EMAIL_COOKIE_NAME = "userEmail"
SESSION_COOKIE_TTL_DAYS = 30

# Delays (seconds) for the timed view changes.
SIGNUP_REDIRECT_DELAY = 1.5
ADD_BOOK_REDIRECT_DELAY = 1.0
FLASH_CLEAR_DELAY = 2.0
DETAILS_HINT_DELAY = 3.0

# Simple theme accents
DEFAULT_THEME = {
    "accent": "#6366f1",  # indigo
    "bg_gradient": "linear-gradient(135deg, #0b1224 0%, #111827 40%, #1e1b4b 100%)",
}


def request_timeout(raw: Optional[str] = None) -> Optional[float]:
    """Parse the request timeout; blank means no timeout."""
    raw = REQUEST_TIMEOUT_RAW if raw is None else raw
    if not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid request timeout: {raw!r}", config_key="BOOKREC_REQUEST_TIMEOUT") from exc
    if value <= 0:
        raise ConfigError(f"Request timeout must be positive: {raw!r}", config_key="BOOKREC_REQUEST_TIMEOUT")
    return value
