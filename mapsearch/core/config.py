"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Google activates a nextPageToken shortly after returning it.
MIN_PAGE_DELAY_SECONDS = 2.0


class ConfigError(RuntimeError):
    """Raised when mandatory configuration is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    default_radius_miles: int = 50
    page_delay_seconds: float = 2.0
    request_timeout: float = 10.0
    http_retries: int = 2
    max_pages: Optional[int] = None
    log_level: str = "INFO"


def _get_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables (and `.env`) with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("GOOGLE_API_KEY", "").strip()
    max_pages = _get_int("MAPSEARCH_MAX_PAGES", None)
    if max_pages is not None and max_pages <= 0:
        max_pages = None

    page_delay_seconds = _get_float("MAPSEARCH_PAGE_DELAY", MIN_PAGE_DELAY_SECONDS)
    if page_delay_seconds < MIN_PAGE_DELAY_SECONDS:
        logger.warning(
            "MAPSEARCH_PAGE_DELAY=%s is below the %.1fs page token warm-up; using %.1fs.",
            page_delay_seconds,
            MIN_PAGE_DELAY_SECONDS,
            MIN_PAGE_DELAY_SECONDS,
        )
        page_delay_seconds = MIN_PAGE_DELAY_SECONDS

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(log_level), int):
        raise ConfigError(f"LOG_LEVEL must be a logging level name, got {log_level!r}")

    if not google_api_key:
        logger.warning("GOOGLE_API_KEY is not configured; pass --api-key on the command line.")

    return Settings(
        google_api_key=google_api_key,
        default_radius_miles=_get_int("MAPSEARCH_RADIUS_MILES", 50),
        page_delay_seconds=page_delay_seconds,
        request_timeout=_get_float("MAPSEARCH_REQUEST_TIMEOUT", 10.0),
        http_retries=_get_int("MAPSEARCH_HTTP_RETRIES", 2),
        max_pages=max_pages,
        log_level=log_level,
    )
