from __future__ import annotations
import logging
from collections import defaultdict
from collections.abc import Mapping
from typing import Dict, FrozenSet, Iterable, Iterator, List, Set, Tuple

from ..config import GRAM, VERBOSE
from ..models import AddressRecord
from ..normalize import normalize

log = logging.getLogger(__name__)


def generate_grams(text: str | None) -> List[str]:
    """
    Overlapping GRAM-wide slices of normalize(text), in position order.
    A normalized string of length L yields max(0, L - 1) grams for GRAM == 2.
    """
    s = normalize(text)
    if len(s) < GRAM:
        return []
    return [s[i:i + GRAM] for i in range(len(s) - GRAM + 1)]


class InvertedIndex(Mapping):
    """
    Read-only gram -> frozenset(record ids) mapping.
    Sets in memory; sorted id lists only at the persistence boundary
    (to_serializable / from_serializable).
    """
    __slots__ = ("_postings",)

    def __init__(self, postings: Mapping[str, Iterable[int]] | None = None) -> None:
        self._postings: Dict[str, FrozenSet[int]] = {
            gram: frozenset(int(i) for i in ids) for gram, ids in (postings or {}).items()
        }

    # ---- Mapping protocol ----
    def __getitem__(self, gram: str) -> FrozenSet[int]:
        return self._postings[gram]

    def __iter__(self) -> Iterator[str]:
        return iter(self._postings)

    def __len__(self) -> int:
        return len(self._postings)

    def __repr__(self) -> str:
        return f"InvertedIndex(grams={len(self._postings)})"

    # ---- Persistence boundary ----
    def iter_items(self) -> Iterator[Tuple[str, List[int]]]:
        """(gram, sorted ids) pairs in sorted gram order; feeds AGXWriter."""
        for gram in sorted(self._postings):
            yield gram, sorted(self._postings[gram])

    def to_serializable(self) -> Dict[str, List[int]]:
        return dict(self.iter_items())

    @classmethod
    def from_serializable(cls, data: Mapping[str, Iterable[int]]) -> "InvertedIndex":
        return cls(data)


def record_grams(record: AddressRecord) -> Set[str]:
    """Distinct grams of one record; each field is sliced on its own."""
    grams: Set[str] = set()
    for value in record.searchable_values():
        grams.update(generate_grams(value))
    return grams


def build_inverted_index(records: Iterable[AddressRecord]) -> InvertedIndex:
    """
    Map every gram to the positional ids of the records containing it.
    Grams never span two fields; a record is registered once per gram.
    """
    buckets: Dict[str, Set[int]] = defaultdict(set)
    n = 0
    for rid, record in enumerate(records):
        for g in record_grams(record):
            buckets[g].add(rid)
        n = rid + 1
        if VERBOSE and n % 50_000 == 0:
            log.info("indexed records=%d grams=%d", n, len(buckets))

    log.info("Index holds %d unique %d-grams over %d records", len(buckets), GRAM, n)
    return InvertedIndex(buckets)
