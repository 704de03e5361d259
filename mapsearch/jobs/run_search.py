"""CLI job that searches Google Places around postal codes and exports a CSV."""

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import requests

from mapsearch.core.config import ConfigError, get_settings
from mapsearch.core.http import build_session
from mapsearch.core.models import PlaceRecord, SearchAnchor, SearchMode, TextQuery, TypedQuery
from mapsearch.core.postal_codes import parse_postal_codes
from mapsearch.etl.csv_writer import write_places_csv
from mapsearch.etl.transform import dedupe_places, sort_places
from mapsearch.vendors.google_geocoding import geocode_postal_code
from mapsearch.vendors.google_places import search_places

logger = logging.getLogger(__name__)

METERS_PER_MILE = 1609.34


@dataclass(frozen=True)
class SearchConfig:
    api_key: str
    zips: str
    radius_miles: int
    mode: SearchMode
    output_path: str = "output.csv"
    max_pages: Optional[int] = None


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def format_meters(meters: float) -> str:
    # repr() is locale independent; rounding hides binary noise such as 80467.00000000001
    return repr(round(float(meters), 6))


def build_mode(search_term: Optional[str], types: Optional[str]) -> SearchMode:
    """Pick the search variant from the mutually exclusive CLI inputs."""
    keyword = (search_term or "").strip()
    type_tokens = tuple(token.strip() for token in (types or "").split(",") if token.strip())
    if keyword and type_tokens:
        raise ValueError("--search-term and --type are mutually exclusive")
    if type_tokens:
        return TypedQuery(types=type_tokens)
    if keyword:
        return TextQuery(keyword=keyword)
    raise ValueError("Either a search term or at least one place type is required")


def run_search(config: SearchConfig, session: Optional[requests.Session] = None) -> List[PlaceRecord]:
    """Geocode each postal code, search around it, and return deduped, ordered places."""
    if not config.api_key:
        raise ConfigError("A Google API key is required (--api-key or GOOGLE_API_KEY).")

    postal_codes = parse_postal_codes(config.zips)
    if not postal_codes:
        logger.warning("No valid postal codes found.")
        return []

    radius = format_meters(miles_to_meters(config.radius_miles))
    http = session or build_session()
    places: List[PlaceRecord] = []

    try:
        for postal_code in postal_codes:
            logger.info("Searching for results near %s...", postal_code)
            center = geocode_postal_code(postal_code, config.api_key, session=http)
            if center is None:
                logger.info("Trying the next postal code...")
                continue

            anchor = SearchAnchor(center=center, radius_meters=radius)
            found = search_places(
                config.api_key,
                anchor,
                config.mode,
                postal_code,
                session=http,
                max_pages=config.max_pages,
            )
            logger.info("Found %d places near %s", len(found), postal_code)
            places.extend(found)
    finally:
        if session is None:
            http.close()

    return sort_places(dedupe_places(places))


def run_search_job(config: SearchConfig, session: Optional[requests.Session] = None) -> List[PlaceRecord]:
    results = run_search(config, session=session)
    for result in results:
        logger.info(
            "Name: %s, Address: %s, Phone: %s, Website: %s, Zip: %s",
            result.name,
            result.formatted_address,
            result.phone_number,
            result.website,
            result.search_postal_code,
        )

    write_places_csv(results, config.output_path)
    logger.info("Total results: %d", len(results))
    logger.info("Data written to %s", Path(config.output_path))
    return results


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="mapsearch",
        description="Find Google Maps places near one or more postal codes and export them to CSV",
        add_help=False,
    )
    parser.add_argument("-h", "-?", "--help", action="help", help="Show this help message and exit")
    parser.add_argument(
        "-k",
        "--api-key",
        dest="api_key",
        default=settings.google_api_key or None,
        required=not settings.google_api_key,
        help="Google Maps API key (defaults to GOOGLE_API_KEY)",
    )
    parser.add_argument("-z", "--zips", dest="zips", required=True, help="Comma-separated postal codes to search")
    parser.add_argument(
        "-r",
        "--radius",
        dest="radius",
        type=int,
        default=settings.default_radius_miles,
        help="Search radius in miles",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-s", "--search-term", dest="search_term", help="Free-text search term, e.g. 'cabinet shop'")
    mode.add_argument("-t", "--type", dest="types", help="Comma-separated place types, e.g. 'hardware_store'")
    parser.add_argument("-o", "--output", dest="output", default="output.csv", help="Output CSV file")
    parser.add_argument(
        "--max-pages",
        dest="max_pages",
        type=int,
        default=settings.max_pages,
        help="Maximum number of result pages per postal code (text search only)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    try:
        settings = get_settings()
        logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
        parser = build_parser()
        args = parser.parse_args(argv)

        try:
            mode = build_mode(args.search_term, args.types)
        except ValueError as exc:
            parser.error(str(exc))

        config = SearchConfig(
            api_key=(args.api_key or "").strip(),
            zips=args.zips,
            radius_miles=args.radius,
            mode=mode,
            output_path=args.output,
            max_pages=args.max_pages if args.max_pages and args.max_pages > 0 else None,
        )
        run_search_job(config)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except Exception as exc:  # noqa: BLE001
        logger.error("Search failed: %s", exc, exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
