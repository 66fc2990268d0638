from pathlib import Path
import json
import pytest
from addrsearch.__main__ import NO_RESULTS, main

def _paths(tmp: Path, csv: Path) -> list[str]:
    return [
        "--csv_path", str(csv),
        "--index_path", str(tmp / "out" / "index.agx"),
        "--addresses_path", str(tmp / "out" / "addresses.sqlite"),
        "--encoding", "utf-8",
    ]

@pytest.mark.e2e
def test_cli_build_then_search(tmp_path: Path, corpus_csv: Path, capsys):
    args = _paths(tmp_path, corpus_csv)
    assert main(["--build", *args]) == 0
    capsys.readouterr()

    assert main(["--search", "東京都渋谷都税事務所", *args]) == 0
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ["1500041 東京都 渋谷区 神南 東京都渋谷都税事務所 神南１丁目"]

@pytest.mark.e2e
def test_cli_no_results_message(tmp_path: Path, corpus_csv: Path, capsys):
    args = _paths(tmp_path, corpus_csv)
    main(["--build", *args]); capsys.readouterr()
    assert main(["--search", "名古屋", *args]) == 0
    assert capsys.readouterr().out.strip() == NO_RESULTS

@pytest.mark.e2e
def test_cli_json_output(tmp_path: Path, corpus_csv: Path, capsys):
    args = _paths(tmp_path, corpus_csv)
    main(["--build", *args]); capsys.readouterr()
    assert main(["--search", "トウキョウト", "--json", *args]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert {r["postal_code"] for r in rows} == {"1000001", "1000002"}

@pytest.mark.e2e
def test_cli_search_without_index_fails(tmp_path: Path, corpus_csv: Path, capsys):
    assert main(["--search", "渋谷", *_paths(tmp_path, corpus_csv)]) == 1
    assert NO_RESULTS not in capsys.readouterr().out

def test_cli_requires_a_mode():
    with pytest.raises(SystemExit):
        main([])
