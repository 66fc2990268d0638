from pathlib import Path
import pytest
from addrsearch.engine import Engine

@pytest.mark.e2e
def test_build_in_memory_and_search(corpus_csv: Path):
    eng = Engine()
    try:
        eng.build(str(corpus_csv), encoding="utf-8")
        rows = eng.search("渋谷")
        assert isinstance(rows, list) and rows
        assert all("渋谷" in r.assembled_text for r in rows)
        assert eng.stats()["records"] == 10
        assert eng.stats()["grams"] == len(eng.index)
    finally:
        eng.shutdown()

@pytest.mark.e2e
def test_search_limit_applies_after_ranking(corpus_csv: Path):
    eng = Engine()
    try:
        eng.build(str(corpus_csv), encoding="utf-8")
        full = eng.search("京都")
        top2 = eng.search("京都", limit=2)
        assert top2 == full[:2]
        assert top2[0].prefecture == "京都府"
    finally:
        eng.shutdown()

def test_search_before_build_raises():
    with pytest.raises(RuntimeError):
        Engine().search("渋谷")

def test_build_requires_both_output_paths(corpus_csv: Path, tmp_path: Path):
    with pytest.raises(ValueError):
        Engine().build(str(corpus_csv), index_path=str(tmp_path / "i.agx"), encoding="utf-8")

def test_load_rejects_index_pointing_past_records(corpus_csv: Path, tmp_path: Path):
    agx, db = tmp_path / "i.agx", tmp_path / "r.sqlite"
    Engine().build(str(corpus_csv), index_path=str(agx), records_path=str(db), encoding="utf-8")

    from addrsearch.DB.storage import save_records
    from addrsearch.models import AddressRecord
    save_records([AddressRecord("1000000", prefecture="東京都")], str(db))

    with pytest.raises(ValueError):
        Engine().load(index_path=str(agx), records_path=str(db))
