from __future__ import annotations
from dataclasses import dataclass, fields
from functools import cached_property
from typing import Sequence

from .config import RESULT_SEPARATOR

# Canonical order of the searchable free-text fields. Indexing and
# assembled_text both walk this tuple, so it must never be reordered.
SEARCHABLE_FIELDS: tuple[str, ...] = (
    "prefecture",
    "city",
    "town_area",
    "kyoto_street",
    "block_number",
    "business_name",
    "business_address",
)


@dataclass(frozen=True)
class AddressRecord:
    postal_code: str
    prefecture: str = ""        # top-level region (都道府県)
    city: str = ""              # sub-region (市区町村)
    town_area: str = ""         # locality (町域)
    kyoto_street: str = ""      # named way (京都通り名)
    block_number: str = ""      # block designator (字丁目)
    business_name: str = ""     # organization name (事業所名)
    business_address: str = ""  # organization sub-address (事業所住所)

    def searchable_values(self) -> list[str]:
        """Non-empty searchable fields in canonical order."""
        return [v for v in (getattr(self, name) for name in SEARCHABLE_FIELDS) if v]

    @cached_property
    def assembled_text(self) -> str:
        return RESULT_SEPARATOR.join(self.searchable_values())

    @property
    def formatted_output(self) -> str:
        return f"{self.postal_code} {self.assembled_text}"

    # ---- persistence boundary ----
    def to_row(self) -> list[str]:
        return [getattr(self, f.name) for f in fields(self)]

    @classmethod
    def from_row(cls, row: Sequence[str | None]) -> "AddressRecord":
        names = [f.name for f in fields(cls)]
        if len(row) > len(names):
            raise ValueError(f"record row has {len(row)} values, expected at most {len(names)}")
        return cls(**{name: (value or "") for name, value in zip(names, row)})

    def to_dict(self) -> dict[str, str]:
        out = {f.name: getattr(self, f.name) for f in fields(self)}
        out["assembled_text"] = self.assembled_text
        return out
