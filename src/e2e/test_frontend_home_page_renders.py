from pathlib import Path
import pytest
from addrsearch.engine import Engine
from addrsearch_web.web import app as flask_app

@pytest.mark.e2e
def test_frontend_home_page_renders(corpus_csv: Path):
    eng = Engine(); eng.build(str(corpus_csv), encoding="utf-8")

    import addrsearch_web.web as webmod
    webmod._engine = eng

    client = flask_app.test_client()
    try:
        r = client.get("/")
        assert r.status_code == 200
        html = r.data.decode("utf-8", errors="ignore")
        assert "<form" in html
        assert "/api/search" in html
    finally:
        webmod._engine = None
        eng.shutdown()
