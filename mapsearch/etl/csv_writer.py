"""CSV export of collated place records."""

import csv
import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, Union

from mapsearch.core.models import PlaceRecord
from mapsearch.etl.transform import CSV_COLUMNS, to_csv_row

logger = logging.getLogger(__name__)


def write_places_csv(records: Iterable[PlaceRecord], output_path: Union[str, Path]) -> int:
    """Write records to `output_path` and return the number of data rows.

    The file is staged next to its destination and swapped in with
    os.replace, so an interrupted run leaves any earlier file untouched.
    """
    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
    count = 0
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh)
            writer.writerow(CSV_COLUMNS)
            for record in records:
                writer.writerow(to_csv_row(record))
                count += 1
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise

    logger.info("Wrote %d rows to %s", count, target)
    return count
