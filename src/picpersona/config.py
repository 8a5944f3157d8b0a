"""Service-wide configuration, read from the environment (and a local .env)."""

import os
from pathlib import Path

from dotenv import load_dotenv

PROJECT_ROOT = Path(os.environ.get("PICPERSONA_PROJECT_ROOT", Path.cwd()))

load_dotenv(PROJECT_ROOT / ".env")


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


# Supabase (analytics storage)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_RESULTS_TABLE = os.environ.get("SUPABASE_RESULTS_TABLE", "analysis_results")

# Results are only stored when credentials exist, unless forced either way
PERSIST_RESULTS = _env_flag("PERSIST_RESULTS", bool(SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY))

# Upload limits
MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", 20 * 1024 * 1024))
MAX_IMAGE_PIXELS = int(os.environ.get("MAX_IMAGE_PIXELS", 40_000_000))
ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)
# Pillow decoders allowed to parse an upload, whatever its declared type
ALLOWED_IMAGE_FORMATS = ("JPEG", "PNG", "GIF", "WEBP")

# Analysis canvas; every heuristic threshold is tuned against this size
CANVAS_SIZE = 224

# HTTP
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
