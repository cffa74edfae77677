import json
from pathlib import Path
import pytest
from corpus_analysis import Engine
from frontend.web import app as flask_app

def _seed(tmp: Path) -> list[str]:
    root = tmp / "corpus"; root.mkdir()
    p = root / "c.json"
    # ก=1 บ=2 -> codes [1,2,1,2,1]
    p.write_text(json.dumps([[[[["ก", "บ", "ก"], 4], [["บ", "ก"], 2]]]], ensure_ascii=False),
                 encoding="utf-8")
    return [str(p)]

@pytest.fixture
def client(tmp_path: Path, monkeypatch):
    eng = Engine(); eng.build(_seed(tmp_path), workers=1)
    import frontend.web as webmod
    monkeypatch.setattr(webmod, "_engine", eng)
    yield flask_app.test_client()
    eng.shutdown()

@pytest.mark.e2e
def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json() == {"ok": True, "built": True}

@pytest.mark.e2e
def test_report_for_any_gram(client):
    data = client.get("/api/report?g=2").get_json()
    assert data["gram"] == 2
    assert data["total_chars"] == 5
    assert data["unique_chars"] == 2
    # offsets 0..2: [1,2] [2,1] [1,2]
    assert data["unique_grams"] == 2

    data = client.get("/api/report?g=2&include_last=1").get_json()
    assert data["unique_grams"] == 2

@pytest.mark.e2e
def test_report_rejects_long_gram(client):
    r = client.get("/api/report?g=5")
    assert r.status_code == 400
    assert "exceeds" in r.get_json()["error"]

@pytest.mark.e2e
def test_alphabet_ordered_by_code(client):
    assert client.get("/api/alphabet").get_json() == [
        {"char": "ก", "code": 1}, {"char": "บ", "code": 2},
    ]

@pytest.mark.e2e
def test_ngrams_listing(client):
    rows = client.get("/api/ngrams?g=2&limit=1").get_json()
    assert rows == [{"gram": "กบ", "count": 2}]
    rows = client.get("/api/ngrams?g=2").get_json()
    assert [r["gram"] for r in rows] == ["กบ", "บก"]

@pytest.mark.e2e
def test_home_page_renders(client):
    r = client.get("/?g=2")
    assert r.status_code == 200
    html = r.data.decode("utf-8")
    assert "Unique 2-grams" in html
    assert "กบ" in html

def test_not_built_returns_503(monkeypatch):
    import frontend.web as webmod
    monkeypatch.setattr(webmod, "_engine", None)
    c = flask_app.test_client()
    assert c.get("/api/report").status_code == 503
    assert c.get("/api/health").get_json() == {"ok": True, "built": False}
    assert c.get("/").status_code == 200

def test_web_main_uses_default_input_buffer(tmp_path: Path, monkeypatch):
    import frontend.web as webmod
    from corpus_analysis.config import DEFAULT_INPUT_BUFFER
    from corpus_analysis.loader import parse_size

    seen = {}
    real_build = Engine.build

    def build(self, sources, **kw):
        seen.update(kw)
        return real_build(self, sources, **kw)

    monkeypatch.setattr(Engine, "build", build)
    monkeypatch.setattr(webmod.app, "run", lambda **kw: None)
    monkeypatch.setattr(webmod, "_engine", None)
    assert webmod.main(["-s", *_seed(tmp_path), "--workers", "1"]) == 0
    assert seen["buf_size"] == parse_size(DEFAULT_INPUT_BUFFER)
