from __future__ import annotations
import logging
from typing import List, Mapping, Sequence, Set

from .DB.index import generate_grams
from .models import AddressRecord

log = logging.getLogger(__name__)


def query_grams(query: str) -> Set[str]:
    """Distinct grams of the normalized query."""
    return set(generate_grams(query))


def candidate_ids(query: str, index: Mapping[str, Set[int]]) -> Set[int]:
    """
    Record ids containing every query gram that exists somewhere in the index.
    Query grams missing from the index are dropped instead of forcing an empty
    result; a query with no gram in the index yields no candidates.
    """
    present = [g for g in query_grams(query) if g in index]
    if not present:
        return set()

    # smallest posting first keeps the running intersection short
    postings = sorted((index[g] for g in present), key=len)
    ids = set(postings[0])
    for p in postings[1:]:
        ids.intersection_update(p)
        if not ids:
            break
    return ids


def occurrence_count(text: str, query: str) -> int:
    """Non-overlapping literal occurrences of the raw query in text."""
    if not query:
        return 0
    return text.count(query)


def search(query: str,
           index: Mapping[str, Set[int]],
           records: Sequence[AddressRecord]) -> List[AddressRecord]:
    """
    Gram intersection for recall, then a stable sort by raw occurrence count.
    Records that matched through folded grams but never contain the raw query
    stay in the result with score 0.
    """
    log.info("search query=%r", query)
    ids = candidate_ids(query, index)
    if not ids:
        log.info("0 results")
        return []

    # ascending id == corpus order, the base order for ties
    hits = [records[i] for i in sorted(ids)]
    hits.sort(key=lambda r: occurrence_count(r.assembled_text, query), reverse=True)
    log.info("%d results", len(hits))
    return hits
