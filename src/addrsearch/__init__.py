"""
Address Search Engine Module

This module builds a 2-gram inverted index over Japanese address records and
answers substring-style queries against it. Queries tolerate script variation
(kanji / hiragana / katakana), full-width / half-width forms and letter case.

The module is designed with a clean separation of concerns:
- Text normalization (NFKC, lower case, katakana -> hiragana)
- Index construction (per-field 2-grams -> record ids)
- Search (gram intersection for recall, literal occurrence count for ranking)
- Collaborators: CSV loader, AGX/SQLite persistence, Engine, CLI

Main Functions:
    build_inverted_index(records): Build the gram index for a record sequence
    search(query, index, records): Return matching records, best first

Example Usage:
    from addrsearch import load_csv, build_inverted_index, search

    records = load_csv("addresses.csv", encoding="utf-8")
    index = build_inverted_index(records)

    for record in search("渋谷", index, records):
        print(record.formatted_output)
"""

# src/addrsearch/__init__.py
from .DB.index import InvertedIndex, build_inverted_index, generate_grams  # re-export
from .engine import Engine
from .loader import load_csv
from .models import AddressRecord
from .normalize import normalize
from .search import search

__version__ = "1.0.0"
__all__ = [
    "AddressRecord",
    "Engine",
    "InvertedIndex",
    "build_inverted_index",
    "generate_grams",
    "load_csv",
    "normalize",
    "search",
]
