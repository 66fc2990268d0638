from __future__ import annotations
import argparse
from flask import Flask, request, jsonify, Response
from addrsearch.config import get_profile
from addrsearch.engine import Engine

app = Flask(__name__)
app.json.ensure_ascii = False
_engine: Engine | None = None

MAX_LIMIT = 500

# ---------- API ----------
@app.get("/api/search")
def api_search():
    if _engine is None:
        return jsonify({"error": "index not loaded"}), 503
    q = request.args.get("q", "", type=str)
    limit = request.args.get("limit", None, type=int)
    if not q:
        return jsonify([])
    if limit is not None:
        limit = max(1, min(MAX_LIMIT, limit))
    rows = _engine.search(q, limit=limit)
    return jsonify([r.to_dict() for r in rows])

@app.get("/health")
def health():
    if _engine is None:
        return jsonify({"ok": False, "records": 0, "grams": 0}), 503
    return jsonify({"ok": True, **_engine.stats()})

# ---------- UI ----------
@app.get("/")
def home():
    # Single page: CSS variables + minimal JS, no external deps.
    html = r"""
<!doctype html>
<html lang="ja">
<head>
<meta charset="utf-8" />
<meta name="viewport" content="width=device-width,initial-scale=1" />
<title>住所検索 • Address search</title>
<style>
:root{
  --bg:#0b0f14;
  --panel:#0f141b;
  --ink:#cfd8e3;
  --muted:#8a94a6;
  --accent:#6ee7ff;
  --border:#1c2530;
  --mark-bg:rgba(110,231,255,.2);
}
*{box-sizing:border-box}
body{
  margin:0; background:var(--bg); color:var(--ink);
  font:16px/1.45 system-ui,-apple-system,"Hiragino Sans","Noto Sans JP",sans-serif;
}
.container{ max-width:980px; margin:24px auto; padding:0 16px }
.card{ background:var(--panel); border:1px solid var(--border); border-radius:16px; padding:18px }
h1{ font-size:20px; margin:0 0 8px 0 }
form{ display:flex; gap:12px }
form input{
  flex:1; padding:12px 14px; border-radius:12px; border:1px solid var(--border);
  background:#0b1117; color:var(--ink); outline:none; font-size:16px;
}
form input:focus{ border-color:var(--accent) }
.meta{ color:var(--muted); font-size:13px; margin-top:8px }
.row{
  display:grid; grid-template-columns:3rem 7rem 1fr; gap:10px;
  padding:10px 14px; border-top:1px solid var(--border);
}
.small{ color:var(--muted); font-variant-numeric:tabular-nums }
.mark{ background:var(--mark-bg) }
.empty{ padding:24px; text-align:center; color:var(--muted) }
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>住所検索</h1>
      <form id="f">
        <input id="q" type="text" placeholder="例: 渋谷 / とうきょうと" autocomplete="off" autofocus />
      </form>
      <div id="stats" class="meta">Ready.</div>
      <div id="out" class="empty">検索語を入力してください。</div>
    </div>
  </div>
<script>
const $ = (sel) => document.querySelector(sel);
const q = $("#q"), out = $("#out"), stats = $("#stats");
let t;
function esc(s){ return String(s).replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }
function highlight(text, query){
  const parts = esc(text).split(esc(query));
  return parts.join(`<span class="mark">${esc(query)}</span>`);
}
async function search(){
  const query = q.value.trim();
  if(!query){ out.className = "empty"; out.innerHTML = "検索語を入力してください。"; return; }
  const t0 = performance.now();
  const resp = await fetch(`/api/search?q=${encodeURIComponent(query)}&limit=100`);
  const data = resp.ok ? await resp.json() : [];
  stats.textContent = `${data.length} 件 • ~${Math.round(performance.now() - t0)} ms`;
  if(data.length === 0){ out.className = "empty"; out.innerHTML = "結果が見つかりませんでした。"; return; }
  out.className = "";
  out.innerHTML = data.map((r, i) => `
    <div class="row">
      <div class="small">${i + 1}</div>
      <div class="small">${esc(r.postal_code)}</div>
      <div>${highlight(r.assembled_text, query)}</div>
    </div>`).join("");
}
q.addEventListener("input", () => { clearTimeout(t); t = setTimeout(search, 150); });
$("#f").addEventListener("submit", (ev) => { ev.preventDefault(); search(); });
</script>
</body>
</html>
"""
    return Response(html, mimetype="text/html")

def main(argv=None) -> int:
    profile = get_profile()
    ap = argparse.ArgumentParser(description="Run Flask UI on top of Engine")
    mode = ap.add_mutually_exclusive_group(required=True)
    mode.add_argument("--build", action="store_true")
    mode.add_argument("--load", action="store_true")
    ap.add_argument("--csv_path", default=profile["csv_path"])
    ap.add_argument("--index_path", default=profile["index_path"])
    ap.add_argument("--addresses_path", default=profile["addresses_path"])
    ap.add_argument("--encoding", default=profile["encoding"])
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=8000)
    ap.add_argument("--verbose", action="store_true")
    args = ap.parse_args(argv)

    global _engine
    _engine = Engine()
    if args.build:
        _engine.build(
            args.csv_path, index_path=args.index_path, records_path=args.addresses_path,
            encoding=args.encoding, verbose=args.verbose,
        )
    else:
        _engine.load(index_path=args.index_path, records_path=args.addresses_path,
                     verbose=args.verbose)

    try:
        app.run(host=args.host, port=args.port, debug=args.verbose)
    finally:
        _engine.shutdown()
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
