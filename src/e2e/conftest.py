from pathlib import Path
import pytest
from addrsearch.DB.index import build_inverted_index
from addrsearch.loader import load_csv

HEADER = "郵便番号,都道府県,市区町村,町域,京都通り名,字丁目,事業所名,事業所住所\n"

# Row position == record id. The street-named row (2) sits before the
# 京都府 row (3) on purpose: ranking has to move 京都府 ahead of it.
ROWS = [
    "1500002,東京都,渋谷区,渋谷,,,,",
    "1500041,東京都,渋谷区,神南,,,東京都渋谷都税事務所,神南１丁目",
    "1600023,東京都,新宿区,西新宿,京都通り,,,",
    "6008216,京都府,京都市下京区,京都駅前,,,,",
    "1000005,東京都,千代田区,丸の内,京都通り,,京都タワー商事,",
    "1000001,トウキョウト,チヨダク,,,,,",
    "1000002,とうきょうと,ちよだく,,,,,",
    "5300001,大阪府,大阪市北区,ｳﾒﾀﾞ,,,,",
    "1006090,東京都,千代田区,大手町,,,ＡＢＣ商事,",
    "8920000,鹿児島県,鹿児島市,,,,,",
]


def seed_csv(tmp: Path, rows=ROWS, encoding="utf-8") -> Path:
    path = tmp / "addresses.csv"
    path.write_text(HEADER + "\n".join(rows) + "\n", encoding=encoding)
    return path


@pytest.fixture
def corpus_csv(tmp_path: Path) -> Path:
    return seed_csv(tmp_path)


@pytest.fixture
def records(corpus_csv: Path):
    return load_csv(str(corpus_csv), encoding="utf-8")


@pytest.fixture
def index(records):
    return build_inverted_index(records)
