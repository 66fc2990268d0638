from __future__ import annotations
import json
import os
from pathlib import Path

# project root: the directory holding src/
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_ROOT = PROJECT_ROOT / "data"

# search/index config
GRAM: int = 2              # n-gram width for the inverted index
RESULT_SEPARATOR = " "     # joins searchable fields into assembled_text

# Japan Post CSV tables ship in Shift_JIS (cp932 covers the vendor extensions)
DEFAULT_ENCODING = "cp932"

# CSV header -> AddressRecord field, in record order
CSV_COLUMNS: dict[str, str] = {
    "郵便番号": "postal_code",
    "都道府県": "prefecture",
    "市区町村": "city",
    "町域": "town_area",
    "京都通り名": "kyoto_street",
    "字丁目": "block_number",
    "事業所名": "business_name",
    "事業所住所": "business_address",
}
REQUIRED_COLUMNS = ("郵便番号", "都道府県", "市区町村")

# Progress logging (set ADDRSEARCH_VERBOSE=1 to enable)
VERBOSE = os.environ.get("ADDRSEARCH_VERBOSE") == "1"

# Profiles, keyed by environment name. ADDRSEARCH_ENV picks one; a JSON file
# named by ADDRSEARCH_CONFIG may override or add profiles.
PROFILES: dict[str, dict[str, str]] = {
    "default": {
        "csv_path": str(DATA_ROOT / "addresses.csv"),
        "index_path": str(DATA_ROOT / "index.agx"),
        "addresses_path": str(DATA_ROOT / "addresses.sqlite"),
        "encoding": DEFAULT_ENCODING,
    },
    "test": {
        "csv_path": str(DATA_ROOT / "test_addresses.csv"),
        "index_path": str(DATA_ROOT / "test_index.agx"),
        "addresses_path": str(DATA_ROOT / "test_addresses.sqlite"),
        "encoding": "utf-8",
    },
}


def _load_overrides(path: str) -> dict[str, dict[str, str]]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of profiles")
    return data


def get_profile(name: str | None = None) -> dict[str, str]:
    """
    Return the settings for profile `name` (or $ADDRSEARCH_ENV, or "default").
    Values from $ADDRSEARCH_CONFIG are layered over the built-in profile.
    """
    name = name or os.environ.get("ADDRSEARCH_ENV") or "default"
    profiles = {k: dict(v) for k, v in PROFILES.items()}

    override_path = os.environ.get("ADDRSEARCH_CONFIG")
    if override_path:
        for pname, values in _load_overrides(override_path).items():
            profiles.setdefault(pname, dict(PROFILES["default"])).update(values)

    if name not in profiles:
        raise ValueError(f"Unknown config profile: {name!r} (known: {sorted(profiles)})")
    return profiles[name]
