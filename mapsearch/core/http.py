"""Shared HTTP session used for every Google API call of a run."""

import logging
from functools import lru_cache
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from mapsearch.core.config import get_settings

logger = logging.getLogger(__name__)

USER_AGENT = "mapsearch/1.0"


def build_session(retries: Optional[int] = None) -> requests.Session:
    """Create a pooled session that retries transient failures.

    Only connection errors and 5xx responses are retried. Once retries are
    exhausted the last response is returned as-is so callers see its status.
    """
    if retries is None:
        retries = get_settings().http_retries

    session = requests.Session()
    session.headers["User-Agent"] = USER_AGENT
    retry = Retry(
        total=max(retries, 0),
        backoff_factor=1,
        status_forcelist=(500, 502, 503, 504),
        allowed_methods=("POST", "GET"),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    logger.debug("HTTP session ready (retries=%d)", retries)
    return session


@lru_cache(maxsize=1)
def get_session() -> requests.Session:
    """Process-wide session for callers that do not bring their own."""
    return build_session()
