# src/e2e/test_models.py

import dataclasses

import pytest

from addrsearch.models import AddressRecord


def test_assembled_text_skips_empty_fields_in_canonical_order():
    r = AddressRecord("1600023", prefecture="東京都", city="新宿区", kyoto_street="京都通り",
                      business_name="京都タワー商事")
    assert r.assembled_text == "東京都 新宿区 京都通り 京都タワー商事"
    assert r.formatted_output == "1600023 東京都 新宿区 京都通り 京都タワー商事"


def test_assembled_text_is_memoized():
    r = AddressRecord("1", prefecture="東京都")
    assert r.assembled_text is r.assembled_text
    assert "assembled_text" in r.__dict__


def test_record_is_immutable():
    r = AddressRecord("1", prefecture="東京都")
    with pytest.raises(dataclasses.FrozenInstanceError):
        r.prefecture = "大阪府"  # type: ignore[misc]


def test_row_round_trip_and_dict():
    r = AddressRecord("6008216", "京都府", "京都市下京区", "東塩小路町")
    assert AddressRecord.from_row(r.to_row()) == r
    assert len(r.to_row()) == 8
    d = r.to_dict()
    assert d["postal_code"] == "6008216"
    assert d["assembled_text"] == "京都府 京都市下京区 東塩小路町"


def test_from_row_rejects_extra_values():
    with pytest.raises(ValueError):
        AddressRecord.from_row(["1"] * 9)
