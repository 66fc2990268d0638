# addrsearch/DB/records_db.py
from __future__ import annotations
import os
import sqlite3
from dataclasses import fields
from typing import Iterable, Iterator, List

from ..models import AddressRecord

_COLUMNS = tuple(f.name for f in fields(AddressRecord))

_SCHEMA = f"""
CREATE TABLE IF NOT EXISTS records (
  id INTEGER PRIMARY KEY,
  {", ".join(f"{c} TEXT NOT NULL" for c in _COLUMNS)}
);
"""

_INSERT = (
    f"INSERT INTO records(id, {', '.join(_COLUMNS)}) "
    f"VALUES ({', '.join('?' * (len(_COLUMNS) + 1))})"
)


class RecordsDB:
    """SQLite-backed record sequence; id is the record's position in the corpus."""
    def __init__(self, db_path: str):
        self.db_path = os.path.abspath(db_path)
        if not os.path.exists(self.db_path):
            raise FileNotFoundError(self.db_path)
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        try:
            row = self.conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name='records'"
            ).fetchone()
        except sqlite3.DatabaseError as e:
            self.conn.close()
            raise ValueError(f"{self.db_path} is not a valid record store: {e}") from e
        if row is None:
            self.conn.close()
            raise ValueError(f"{self.db_path} is missing the 'records' table. Rebuild the index.")

    @classmethod
    def build_from_records(cls, records: Iterable[AddressRecord], db_path: str) -> "RecordsDB":
        db_path = os.path.abspath(db_path)
        os.makedirs(os.path.dirname(db_path) or ".", exist_ok=True)

        tmp = f"{db_path}.tmp"
        if os.path.exists(tmp):
            os.remove(tmp)
        conn = sqlite3.connect(tmp)
        try:
            conn.executescript(_SCHEMA)
            conn.executemany(_INSERT, ((i, *r.to_row()) for i, r in enumerate(records)))
            conn.commit()
        finally:
            conn.close()
        os.replace(tmp, db_path)
        return cls(db_path)

    def count(self) -> int:
        (n,) = self.conn.execute("SELECT COUNT(*) FROM records").fetchone()
        return int(n)

    def iter_records(self) -> Iterator[AddressRecord]:
        cur = self.conn.execute(f"SELECT id, {', '.join(_COLUMNS)} FROM records ORDER BY id")
        expected = 0
        for rid, *row in cur:
            # ids double as index postings, so gaps would misalign every lookup
            if rid != expected:
                raise ValueError(f"{self.db_path}: non-contiguous record id {rid} (expected {expected})")
            expected += 1
            yield AddressRecord.from_row(row)

    def load_all(self) -> List[AddressRecord]:
        return list(self.iter_records())

    def close(self) -> None:
        self.conn.close()
