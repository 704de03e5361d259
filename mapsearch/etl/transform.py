"""Utilities for transforming Places API responses into exportable records."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from mapsearch.core.models import PlaceRecord

logger = logging.getLogger(__name__)

CSV_COLUMNS = ("Name", "FormattedAddress", "PhoneNumber", "Website", "SearchZip", "PlaceId")


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def to_place_record(place: Dict[str, Any], search_postal_code: str) -> Optional[PlaceRecord]:
    """Build a PlaceRecord from one element of a response's `places` list."""
    place_id = _strip_or_none(place.get("id"))
    if not place_id:
        logger.debug("Skipping place without id: %s", place)
        return None

    display_name = place.get("displayName")
    if not isinstance(display_name, dict):
        display_name = {}
    return PlaceRecord(
        place_id=place_id,
        name=str(display_name.get("text") or ""),
        formatted_address=str(place.get("formattedAddress") or ""),
        phone_number=_strip_or_none(place.get("nationalPhoneNumber")),
        website=_strip_or_none(place.get("websiteUri")),
        search_postal_code=search_postal_code,
    )


def parse_places(payload: Dict[str, Any], search_postal_code: str) -> List[PlaceRecord]:
    records: List[PlaceRecord] = []
    places = payload.get("places")
    if not isinstance(places, list):
        return records
    for place in places:
        if not isinstance(place, dict):
            continue
        record = to_place_record(place, search_postal_code)
        if record is not None:
            records.append(record)
    return records


def dedupe_places(records: Iterable[PlaceRecord]) -> List[PlaceRecord]:
    """Drop repeated place ids, keeping the first occurrence in order."""
    seen = set()
    unique: List[PlaceRecord] = []
    for record in records:
        if record.place_id in seen:
            continue
        seen.add(record.place_id)
        unique.append(record)
    return unique


def sort_places(records: Iterable[PlaceRecord]) -> List[PlaceRecord]:
    return sorted(records, key=lambda record: (record.search_postal_code, record.name))


def to_csv_row(record: PlaceRecord) -> List[str]:
    return [
        record.name,
        record.formatted_address,
        record.phone_number or "",
        record.website or "",
        record.search_postal_code,
        record.place_id,
    ]
