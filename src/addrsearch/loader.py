from __future__ import annotations
import csv
import logging
import os
from typing import List, Mapping, Optional

from .config import CSV_COLUMNS, REQUIRED_COLUMNS, VERBOSE, get_profile
from .models import AddressRecord

log = logging.getLogger(__name__)

PROGRESS_EVERY_ROWS = 100_000


def record_from_row(row: Mapping[str, Optional[str]]) -> AddressRecord:
    """Build a record from a header-keyed CSV row; missing or empty cells become ''."""
    values = {field: (row.get(header) or "").strip() for header, field in CSV_COLUMNS.items()}
    return AddressRecord(**values)


def _check_header(header: Optional[List[str]], path: str) -> None:
    if not header:
        raise ValueError(f"{path}: CSV has no header row")
    missing = [c for c in REQUIRED_COLUMNS if c not in header]
    if missing:
        raise ValueError(f"{path}: CSV header is missing columns {missing}")


def load_csv(path: str, encoding: Optional[str] = None) -> List[AddressRecord]:
    """
    Read an address table (header row + one record per line) into records,
    in file order; a record's position becomes its id in the index.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    encoding = encoding or get_profile()["encoding"]

    records: List[AddressRecord] = []
    with open(path, "r", encoding=encoding, newline="") as f:
        reader = csv.DictReader(f)
        # a UTF-8 BOM sticks to the first header name
        reader.fieldnames = [h.lstrip("\ufeff").strip() for h in reader.fieldnames or []]
        _check_header(reader.fieldnames, path)
        for row in reader:
            records.append(record_from_row(row))
            if VERBOSE and len(records) % PROGRESS_EVERY_ROWS == 0:
                log.info("loaded rows=%d", len(records))

    log.info("Loaded %d records from %s", len(records), path)
    return records
