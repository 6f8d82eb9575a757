"""API configuration constants.

Single source of truth for settings used across the API layer.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# All routes except /health live under this prefix
API_PREFIX = "/api"

# Comma-separated list; "*" allows any origin
CORS_ORIGINS = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# Logging
LOG_FORMAT = os.getenv("LOG_FORMAT", "json").lower()
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Timeout for fetching illustrations when exporting
EXPORT_FETCH_TIMEOUT = 30.0
