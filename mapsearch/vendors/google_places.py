"""Client utilities for the Google Places API (New)."""

import logging
import time
from typing import Any, Dict, List, Optional, Tuple

import requests

from mapsearch.core.config import MIN_PAGE_DELAY_SECONDS, get_settings
from mapsearch.core.http import get_session
from mapsearch.core.models import PlaceRecord, SearchAnchor, SearchMode, TextQuery, TypedQuery
from mapsearch.etl.transform import parse_places

logger = logging.getLogger(__name__)
_BASE_URL = "https://places.googleapis.com/v1"
SEARCH_TEXT_URL = f"{_BASE_URL}/places:searchText"
SEARCH_NEARBY_URL = f"{_BASE_URL}/places:searchNearby"

PAGE_SIZE = 20
PLACE_FIELDS = (
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.nationalPhoneNumber",
    "places.websiteUri",
)
TEXT_FIELD_MASK = ",".join(PLACE_FIELDS + ("nextPageToken",))
NEARBY_FIELD_MASK = ",".join(PLACE_FIELDS)


class GooglePlacesError(RuntimeError):
    """Raised when a Places page cannot be fetched or decoded."""


def build_headers(api_key: str, field_mask: str) -> Dict[str, str]:
    return {
        "x-goog-api-key": api_key,
        "x-goog-fieldmask": field_mask,
        "Content-Type": "application/json",
    }


def build_request(
    anchor: SearchAnchor, mode: SearchMode, page_token: Optional[str] = None
) -> Tuple[str, str, Dict[str, Any]]:
    """Render the endpoint, field mask and JSON body for one page request."""
    if isinstance(mode, TextQuery):
        body: Dict[str, Any] = {
            "textQuery": mode.keyword,
            "pageSize": PAGE_SIZE,
            "locationBias": anchor.circle(),
        }
        if page_token:
            body["pageToken"] = page_token
        return SEARCH_TEXT_URL, TEXT_FIELD_MASK, body

    if isinstance(mode, TypedQuery):
        body = {
            "includedTypes": list(mode.types),
            "maxResultCount": PAGE_SIZE,
            "locationRestriction": anchor.circle(),
        }
        return SEARCH_NEARBY_URL, NEARBY_FIELD_MASK, body

    raise TypeError(f"Unsupported search mode: {mode!r}")


def fetch_page(
    session: requests.Session,
    api_key: str,
    anchor: SearchAnchor,
    mode: SearchMode,
    page_token: Optional[str] = None,
) -> Dict[str, Any]:
    url, field_mask, body = build_request(anchor, mode, page_token)
    try:
        response = session.post(
            url,
            json=body,
            headers=build_headers(api_key, field_mask),
            timeout=get_settings().request_timeout,
        )
    except requests.RequestException as exc:
        raise GooglePlacesError(f"request to {url} failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        logger.error("Places request failed: status=%s, body=%s", response.status_code, response.text[:500])
        raise GooglePlacesError(f"HTTP {response.status_code}")

    try:
        payload = response.json()
    except ValueError as exc:
        raise GooglePlacesError("response body is not valid JSON") from exc
    if not isinstance(payload, dict):
        raise GooglePlacesError(f"response body is not a JSON object: {type(payload).__name__}")
    return payload


def search_places(
    api_key: str,
    anchor: SearchAnchor,
    mode: SearchMode,
    postal_code: str,
    session: Optional[requests.Session] = None,
    max_pages: Optional[int] = None,
) -> List[PlaceRecord]:
    """Collect every place the provider returns for one anchored query.

    Text searches follow `nextPageToken` until it comes back empty, waiting
    before each continuation because new tokens are not immediately valid.
    Typed searches are a single request. A failed page ends the walk and the
    records gathered so far are returned.
    """
    http = session or get_session()
    delay = max(MIN_PAGE_DELAY_SECONDS, get_settings().page_delay_seconds)
    results: List[PlaceRecord] = []
    page_token: Optional[str] = None
    fetch_count = 0

    while True:
        if page_token:
            time.sleep(delay)

        fetch_count += 1
        logger.info("Fetching page %d for %s", fetch_count, postal_code)
        try:
            payload = fetch_page(http, api_key, anchor, mode, page_token)
        except GooglePlacesError as exc:
            logger.error("Stopping search for %s after %d page(s): %s", postal_code, fetch_count - 1, exc)
            break

        page = parse_places(payload, postal_code)
        results.extend(page)
        logger.info("Fetched %d places on page %d", len(page), fetch_count)

        if not isinstance(mode, TextQuery):
            break
        page_token = payload.get("nextPageToken") or None
        if not page_token:
            break
        if max_pages is not None and fetch_count >= max_pages:
            logger.info("Reached max_pages=%d for %s", max_pages, postal_code)
            break

    return results
