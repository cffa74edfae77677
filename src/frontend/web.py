from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, render_template_string
from corpus_analysis import Engine
from corpus_analysis.config import DEFAULT_INPUT_BUFFER, GRAM
from corpus_analysis.errors import AnalysisError, GramLengthError
from corpus_analysis.loader import load_char_list, parse_size, resolve_sources

app = Flask(__name__)
_engine: Engine | None = None

NGRAM_LIMIT = 50


def _ready() -> Engine | None:
    return _engine if _engine is not None and _engine.built else None


def _not_built():
    return jsonify({"error": "engine not built"}), 503


def _include_last() -> bool | None:
    raw = request.args.get("include_last")
    if raw is None:
        return None
    return raw.strip().lower() in ("1", "true", "yes", "on")


# ---------- API ----------
@app.get("/api/health")
def api_health():
    return jsonify({"ok": True, "built": _ready() is not None})


@app.get("/api/report")
def api_report():
    eng = _ready()
    if eng is None:
        return _not_built()
    g = request.args.get("g", GRAM, type=int)
    try:
        report = eng.analyze(g, include_last=_include_last())
    except GramLengthError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify(report.as_row())


@app.get("/api/alphabet")
def api_alphabet():
    eng = _ready()
    if eng is None:
        return _not_built()
    rows = sorted(eng.alphabet.items(), key=lambda kv: kv[1])
    return jsonify([{"char": ch, "code": code} for ch, code in rows])


@app.get("/api/ngrams")
def api_ngrams():
    eng = _ready()
    if eng is None:
        return _not_built()
    g = request.args.get("g", GRAM, type=int)
    k = request.args.get("limit", NGRAM_LIMIT, type=int)
    try:
        rows = eng.distinct_windows(g, limit=k, include_last=_include_last())
    except GramLengthError as e:
        return jsonify({"error": str(e)}), 400
    return jsonify([{"gram": text, "count": n} for text, n in rows])


# ---------- UI ----------
_HOME = """<!doctype html>
<html lang="th">
<head>
<meta charset="utf-8" />
<title>Corpus analysis</title>
<style>
body{margin:24px auto;max-width:760px;font:15px/1.45 system-ui,sans-serif;background:#0b0f14;color:#cfd8e3}
table{border-collapse:collapse;width:100%}
td,th{border-bottom:1px solid #1c2530;padding:6px 10px;text-align:left}
.mono{font-family:ui-monospace,Menlo,Consolas,monospace}
</style>
</head>
<body>
<h1>Corpus analysis</h1>
{% if report %}
<table>
  <tr><th>Source files</th><td class="mono">{{ report.files }}</td></tr>
  <tr><th>Characters</th><td class="mono">{{ report.total_chars }}</td></tr>
  <tr><th>Unique characters</th><td class="mono">{{ report.unique_chars }}</td></tr>
  <tr><th>Unique {{ report.gram }}-grams</th><td class="mono">{{ report.unique_grams }}</td></tr>
</table>
<h2>Sorted distinct {{ report.gram }}-grams (first {{ grams|length }})</h2>
<table>
  <tr><th>#</th><th>Gram</th><th>Count</th></tr>
  {% for text, n in grams %}
  <tr><td>{{ loop.index }}</td><td class="mono">{{ text }}</td><td class="mono">{{ n }}</td></tr>
  {% endfor %}
</table>
{% elif error %}
<p>{{ error }}</p>
{% else %}
<p>No corpus loaded.</p>
{% endif %}
</body>
</html>
"""


@app.get("/")
def home():
    eng = _ready()
    report, grams, error = None, [], None
    if eng is not None:
        g = request.args.get("g", GRAM, type=int)
        try:
            report = eng.analyze(g)
            grams = eng.distinct_windows(g, limit=NGRAM_LIMIT)
        except GramLengthError as e:
            error = str(e)
    return render_template_string(_HOME, report=report, grams=grams, error=error)


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    ap.add_argument("-s", "--src", nargs="+", required=True)
    ap.add_argument("-ib", "--input-buffer", default=DEFAULT_INPUT_BUFFER)
    ap.add_argument("-cl", "--char-list-file", default=None)
    ap.add_argument("--workers", type=int, default=None)
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    try:
        _engine.build(
            resolve_sources(args.src),
            char_include_list=load_char_list(args.char_list_file) if args.char_list_file else (),
            buf_size=parse_size(args.input_buffer),
            workers=args.workers,
            verbose=args.verbose,
        )
    except (AnalysisError, ValueError) as e:
        ap.error(str(e))

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
