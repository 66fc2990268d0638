from __future__ import annotations
import os
from typing import List, Sequence

from ..config import GRAM
from ..models import AddressRecord
from .agx import AGXWriter, read_agx
from .index import InvertedIndex
from .records_db import RecordsDB


# ---- gram index (AGX) ----
def save_index(index: InvertedIndex, path: str) -> None:
    AGXWriter(n=GRAM).save(path, index.iter_items())


def load_index(path: str) -> InvertedIndex:
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    return read_agx(path, expect_n=GRAM)


# ---- record sequence (SQLite) ----
def save_records(records: Sequence[AddressRecord], path: str) -> int:
    db = RecordsDB.build_from_records(records, path)
    try:
        return db.count()
    finally:
        db.close()


def load_records(path: str) -> List[AddressRecord]:
    db = RecordsDB(path)
    try:
        return db.load_all()
    finally:
        db.close()
