import os
import logging

from dotenv import load_dotenv

from utils.env import get_env_str, get_env_bool, get_env_int

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.dirname(__file__))

# -----------------------------------------------------------------------------
# Dotenv loading (LOCAL ONLY)
# -----------------------------------------------------------------------------
# Tests must be deterministic and must NOT implicitly ingest a developer's
# repo-root .env. Local dev may use .env for convenience.
_APP_STAGE_EARLY = (os.getenv("APP_STAGE") or "").strip().lower()

if _APP_STAGE_EARLY not in {"test", "testing"}:
    load_dotenv(dotenv_path=os.path.join(BASE_DIR, ".env"), override=False)


# -----------------------------------------------------------------------------
# Environment / Stage
# -----------------------------------------------------------------------------
def _normalize_stage(raw: str) -> str:
    raw = (raw or "").strip().lower()
    if raw in {"prod", "production"}:
        return "production"
    if raw in {"stage", "staging"}:
        return "staging"
    if raw in {"test", "testing"}:
        return "test"
    return "dev"


APP_STAGE = _normalize_stage(os.getenv("APP_STAGE", "dev"))

IS_TEST = APP_STAGE == "test"
IS_STAGING = APP_STAGE == "staging"
IS_PRODUCTION = APP_STAGE == "production"

# -----------------------------------------------------------------------------
# Fonts
# -----------------------------------------------------------------------------
# Directory searched (recursively) for Inter TTFs. Helvetica is used when unset.
FONTS_DIR = get_env_str("FLYER_FONTS_DIR", default=os.path.join(BASE_DIR, "static", "fonts"))

# -----------------------------------------------------------------------------
# Branding / Footer
# -----------------------------------------------------------------------------
BRANDING_NAME = get_env_str("FLYER_BRANDING", default="CRE Flyer Maker")

# -----------------------------------------------------------------------------
# Tracking URLs (QR collaborator)
# -----------------------------------------------------------------------------
def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


TRACKING_BASE_URL = _strip_trailing_slash(
    get_env_str("TRACKING_BASE_URL", default="https://creflyer.app/track")
)

if IS_STAGING or IS_PRODUCTION:
    if not TRACKING_BASE_URL.lower().startswith("https://"):
        raise RuntimeError(
            f"CRITICAL: TRACKING_BASE_URL must be HTTPS in {APP_STAGE} stage. Got: {TRACKING_BASE_URL}"
        )
    if IS_PRODUCTION:
        lower = TRACKING_BASE_URL.lower()
        for forbidden in ("localhost", "127.0.0.1"):
            if forbidden in lower:
                raise RuntimeError(
                    f"CRITICAL: TRACKING_BASE_URL contains forbidden string '{forbidden}' in production."
                )

# -----------------------------------------------------------------------------
# Preview
# -----------------------------------------------------------------------------
PREVIEW_DPI = get_env_int("PREVIEW_DPI", 110)
if PREVIEW_DPI <= 0:
    logger.warning(f"[Config] WARNING: Invalid PREVIEW_DPI={PREVIEW_DPI}. Defaulting to 110.")
    PREVIEW_DPI = 110

# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------
LOG_LEVEL = (get_env_str("LOG_LEVEL", default="INFO") or "INFO").upper()
LOG_JSON = get_env_bool("LOG_JSON", default=IS_PRODUCTION)
