# addrsearch/engine.py
from __future__ import annotations

import logging
import os
import time
from typing import List, Optional

from .DB.index import InvertedIndex, build_inverted_index
from .DB.storage import load_index, load_records, save_index, save_records
from .loader import load_csv
from .models import AddressRecord
from .search import search as search_records

log = logging.getLogger(__name__)


def _ms(t0: float) -> float:
    return round((time.perf_counter() - t0) * 1000, 2)


class Engine:
    """
    Thin orchestration layer that glues together:
      - CSV ingestion (loader.load_csv),
      - the gram index (DB.index.build_inverted_index),
      - persistence (AGX index file + SQLite record store),
      - the search/ranking pipeline (search.search).

    Public API (used by CLI/Flask):
      * build(csv_path, ...): ingest -> index -> (optional) persist
      * load(...):            load a persisted index + records
      * search(query):        ranked records
      * shutdown():           drop loaded state
    """

    # ------------- lifecycle -------------

    def __init__(self) -> None:
        self.index: Optional[InvertedIndex] = None
        self.records: Optional[List[AddressRecord]] = None

    # /* ~~~ Build an index from a CSV table and optionally persist it ~~~ */
    def build(
        self,
        csv_path: str,
        *,
        index_path: Optional[str] = None,      # AGX output
        records_path: Optional[str] = None,    # SQLite output
        encoding: Optional[str] = None,
        verbose: bool = False,
    ) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        if bool(index_path) != bool(records_path):
            raise ValueError("build(): index_path and records_path must be given together")

        log.info("Starting index build from %s", csv_path)
        t0 = time.perf_counter()
        records = load_csv(csv_path, encoding=encoding)
        index = build_inverted_index(records)

        if index_path and records_path:
            save_index(index, index_path)
            save_records(records, records_path)
            log.info("Saved index to %s and %d records to %s", index_path, len(records), records_path)

        self.index = index
        self.records = records
        log.info("Engine build() complete in %.2f ms: records=%d grams=%d",
                 _ms(t0), len(records), len(index))

    # /* ~~~ Load an already-built index and record sequence ~~~ */
    def load(self, *, index_path: str, records_path: str, verbose: bool = False) -> None:
        if verbose:
            logging.basicConfig(level=logging.INFO)

        missing = [p for p in (index_path, records_path) if not p or not os.path.exists(p)]
        if missing:
            raise FileNotFoundError(
                f"Inverted index or address data not found: {missing}. Build the index first."
            )

        t0 = time.perf_counter()
        index = load_index(index_path)
        records = load_records(records_path)

        # every posting must resolve to a loaded record
        top = max((max(ids) for ids in index.values() if ids), default=-1)
        if top >= len(records):
            raise ValueError(
                f"Index references record {top} but only {len(records)} records were loaded"
            )

        self.index = index
        self.records = records
        log.info("Engine load() complete in %.2f ms: records=%d grams=%d",
                 _ms(t0), len(records), len(index))

    # ------------- query -------------

    def search(self, query: str, *, limit: Optional[int] = None) -> List[AddressRecord]:
        if self.index is None or self.records is None:
            raise RuntimeError("Engine not initialized. Call build() or load() first.")
        t0 = time.perf_counter()
        rows = search_records(query, self.index, self.records)
        log.info("Search finished in %.2f ms", _ms(t0))
        return rows[:limit] if limit is not None else rows

    def stats(self) -> dict:
        return {
            "records": len(self.records) if self.records is not None else 0,
            "grams": len(self.index) if self.index is not None else 0,
        }

    # ------------- teardown -------------

    def shutdown(self) -> None:
        self.index = None
        self.records = None
        log.info("Engine shutdown complete")
