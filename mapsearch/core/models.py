"""Core data models shared by the postal-code search pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude as rendered from the geocoder response."""

    latitude: str
    longitude: str


@dataclass(frozen=True, slots=True)
class SearchAnchor:
    """Center and radius (meters, decimal string) constraining a places query."""

    center: Coordinate
    radius_meters: str

    def circle(self) -> dict:
        return {
            "circle": {
                "center": {
                    "latitude": self.center.latitude,
                    "longitude": self.center.longitude,
                },
                "radius": self.radius_meters,
            }
        }


@dataclass(frozen=True, slots=True)
class TextQuery:
    """Free-text search, served by the paginated searchText endpoint."""

    keyword: str


@dataclass(frozen=True, slots=True)
class TypedQuery:
    """Category search, served by the single-page searchNearby endpoint."""

    types: Tuple[str, ...]


SearchMode = Union[TextQuery, TypedQuery]


@dataclass(frozen=True, slots=True)
class PlaceRecord:
    """Normalized snapshot of a place returned by the Places API."""

    place_id: str
    name: str
    formatted_address: str
    search_postal_code: str
    phone_number: Optional[str] = None
    website: Optional[str] = None
