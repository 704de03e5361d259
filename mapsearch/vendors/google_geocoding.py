"""Client for the Google Geocoding API, used to anchor each postal code."""

import logging
from typing import Any, Dict, Optional

import requests

from mapsearch.core.config import get_settings
from mapsearch.core.http import get_session
from mapsearch.core.models import Coordinate

logger = logging.getLogger(__name__)
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"


def geocode_postal_code(
    postal_code: str,
    api_key: str,
    session: Optional[requests.Session] = None,
) -> Optional[Coordinate]:
    """Resolve a postal code to a coordinate, or None when it should be skipped."""
    http = session or get_session()
    params = {"address": postal_code, "key": api_key}
    try:
        response = http.get(GEOCODE_URL, params=params, timeout=get_settings().request_timeout)
    except requests.RequestException as exc:
        logger.warning("Geocoding request for %s failed: %s", postal_code, exc)
        return None

    if not 200 <= response.status_code < 300:
        logger.warning("Geocoding %s returned HTTP %s; skipping", postal_code, response.status_code)
        return None

    try:
        payload: Dict[str, Any] = response.json()
    except ValueError:
        logger.warning("Geocoding %s returned a non-JSON body; skipping", postal_code)
        return None
    if not isinstance(payload, dict):
        logger.warning("Geocoding %s returned a non-object JSON body; skipping", postal_code)
        return None

    status = payload.get("status")
    if status != "OK":
        logger.warning(
            "Geocode error for %s: status=%s, error_message=%s",
            postal_code,
            status,
            payload.get("error_message"),
        )
        return None

    results = payload.get("results")
    first = results[0] if isinstance(results, list) and results else None
    geometry = first.get("geometry") if isinstance(first, dict) else None
    location = geometry.get("location") if isinstance(geometry, dict) else None
    if not isinstance(location, dict) or location.get("lat") is None or location.get("lng") is None:
        logger.warning("Geocoding %s returned no location; skipping", postal_code)
        return None

    coordinate = Coordinate(latitude=str(location["lat"]), longitude=str(location["lng"]))
    logger.debug("Geocoded %s to %s,%s", postal_code, coordinate.latitude, coordinate.longitude)
    return coordinate
