"""Syntactic validation of U.S. ZIP codes."""

import logging
import re
from typing import List

logger = logging.getLogger(__name__)

POSTAL_CODE_REGEX = re.compile(r"^\d{5}(-\d{4})?$")


def is_valid_postal_code(postal_code: str) -> bool:
    return POSTAL_CODE_REGEX.fullmatch(postal_code) is not None


def parse_postal_codes(raw: str) -> List[str]:
    """Split a comma-separated list, keeping the valid codes in input order."""
    postal_codes: List[str] = []
    for segment in (raw or "").split(","):
        candidate = segment.strip()
        if not candidate:
            continue
        if not is_valid_postal_code(candidate):
            logger.warning("Ignoring invalid postal code %r", candidate)
            continue
        postal_codes.append(candidate)
    return postal_codes
