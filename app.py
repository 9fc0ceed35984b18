import os
import time
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request, render_template_string

from symtab.indexing import EmptySymbolTableError
from symtab.query_engine import QueryEngine
from symtab.render import render_text, to_dict
from symtab.storage import WordTable

app = Flask(__name__)

DEFAULT_WORDS_PATH = os.environ.get(
    "SYMTAB_WORDS_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "radio_alphabet.txt"),
)
HOST = os.environ.get("SYMTAB_HOST", "127.0.0.1")
PORT = int(os.environ.get("SYMTAB_PORT", "5000"))
CHECK_INVARIANTS = os.environ.get("SYMTAB_CHECK_INVARIANTS", "0") == "1"

words = WordTable(check_invariants=CHECK_INVARIANTS)
engine = QueryEngine(words)

STATE: Dict[str, Any] = {"words_path": None, "loaded": False}


def ok(data=None, **extra):
    payload = {"ok": True}
    if data is not None:
        payload["data"] = data
    payload.update(extra)
    return jsonify(payload)

def err(message: str, status: int = 400, **extra):
    payload = {"ok": False, "error": message}
    payload.update(extra)
    return jsonify(payload), status

def warm_start(path: Optional[str] = None):
    """Load the words file at startup."""
    words_path = (path or DEFAULT_WORDS_PATH or "").strip()
    STATE["words_path"] = words_path
    STATE["loaded"] = False

    if not words_path:
        print("[warm_start] No words path provided.")
        return
    if not os.path.exists(words_path):
        print(f"[warm_start] Words file not found: {words_path}")
        return

    print(f"[warm_start] Ingesting words: {words_path}")
    t0 = time.time()
    loaded = words.ingest_file(words_path)
    t1 = time.time()
    STATE["loaded"] = loaded
    if not loaded:
        print(f"[warm_start] Load failed after {len(words):,} words: {words_path}")
        return
    print(f"[warm_start] Table loaded: {len(words):,} words, height {words.table.height()} in {t1 - t0:.2f}s")

def parse_limit(default: int = 50) -> int:
    limit = request.args.get("limit", str(default))
    try:
        return max(1, min(200, int(limit)))
    except ValueError:
        return default


@app.get("/api/status")
def api_status():
    return ok({
        "words_path": STATE["words_path"],
        "loaded": STATE["loaded"],
        "size": len(words.table),
        "height": words.table.height(),
    })


@app.get("/api/st/get/<key>")
def api_get(key: str):
    if not words.table.contains(key):
        return err("key not found", 404)
    return ok({"key": key, "value": words.table.get(key)})

@app.post("/api/st/put")
def api_put():
    data = request.get_json(silent=True) or {}
    key = data.get("key")
    if not key or not isinstance(key, str):
        return err("JSON body with a non-empty string 'key' is required")
    existed = words.table.contains(key)
    words.table.put(key, data.get("value"))
    return ok({"key": key, "created": not existed, "size": len(words.table)})

@app.post("/api/st/delete/<key>")
def api_delete(key: str):
    if not words.remove(key):
        return err("key not found", 404)
    return ok({"deleted": True, "key": key, "size": len(words.table)})

@app.post("/api/st/delete_min")
def api_delete_min():
    try:
        key = words.table.min()
        words.table.delete_min()
    except EmptySymbolTableError as e:
        return err(str(e), 409)
    return ok({"deleted": True, "key": key})

@app.post("/api/st/delete_max")
def api_delete_max():
    try:
        key = words.table.max()
        words.table.delete_max()
    except EmptySymbolTableError as e:
        return err(str(e), 409)
    return ok({"deleted": True, "key": key})


@app.get("/api/st/min")
def api_min():
    try:
        return ok({"key": words.table.min()})
    except EmptySymbolTableError as e:
        return err(str(e), 409)

@app.get("/api/st/max")
def api_max():
    try:
        return ok({"key": words.table.max()})
    except EmptySymbolTableError as e:
        return err(str(e), 409)

@app.get("/api/st/rank/<key>")
def api_rank(key: str):
    return ok({"key": key, "rank": words.table.rank(key)})

@app.get("/api/st/select/<k>")
def api_select(k: str):
    try:
        k_int = int(k)
    except ValueError:
        return err("k must be an integer")
    try:
        return ok({"k": k_int, "key": engine.kth(k_int)})
    except IndexError:
        return err(f"k must be in [0, {len(words.table)})", 404)

@app.get("/api/st/keys")
def api_keys():
    lo = request.args.get("lo")
    hi = request.args.get("hi")
    if lo is not None or hi is not None:
        if lo is None or hi is None:
            return err("lo and hi must be given together: /api/st/keys?lo=...&hi=...")
        keys = engine.between(lo, hi)
        return ok({"count": len(keys), "keys": keys})

    order = request.args.get("order", "inorder")
    if order == "inorder":
        keys = words.table.keys_in_order()
    elif order == "levelorder":
        keys = words.table.keys_level_order()
    else:
        return err("order must be 'inorder' or 'levelorder'")
    return ok({"count": len(keys), "keys": keys})

@app.get("/api/st/size")
def api_size():
    lo = request.args.get("lo")
    hi = request.args.get("hi")
    if lo is None and hi is None:
        return ok({"size": len(words.table)})
    if lo is None or hi is None:
        return err("lo and hi must be given together: /api/st/size?lo=...&hi=...")
    return ok({"lo": lo, "hi": hi, "size": engine.count_between(lo, hi)})

@app.get("/api/st/prefix/<prefix>")
def api_prefix(prefix: str):
    limit = parse_limit()
    matches = engine.with_prefix(prefix)
    return ok({"count": len(matches), "count_returned": min(limit, len(matches)), "keys": matches[:limit]})

@app.get("/api/st/tree")
def api_tree():
    depth = request.args.get("depth", "10")
    try:
        depth = max(0, min(20, int(depth)))
    except ValueError:
        depth = 10
    return ok({
        "tree": to_dict(words.table, max_depth=depth),
        "text": render_text(words.table, max_depth=depth),
    })


HTML = r"""
<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>AVL symbol table</title>
<style>
  body { font-family: sans-serif; margin: 1.5em; }
  svg text { font-size: 11px; fill: #b00; text-anchor: middle; }
  svg line { stroke: #000; stroke-width: 1.5; }
  .bar input { width: 10em; }
  .msg { margin: .5em 0; color: #555; }
</style>
</head>
<body>
<h2>AVL symbol table</h2>
<div class="bar">
  <input id="key" placeholder="key">
  <input id="value" placeholder="value">
  <button onclick="putKey()">put</button>
  <button onclick="deleteKey()">delete</button>
  <button onclick="post('/api/st/delete_min')">delete min</button>
  <button onclick="post('/api/st/delete_max')">delete max</button>
</div>
<div class="msg" id="msg"></div>
<svg id="tree" width="1400" height="700"></svg>
<script>
  const NS = "http://www.w3.org/2000/svg";
  function el(name, attrs, text){
    const e = document.createElementNS(NS, name);
    for (const k in attrs) e.setAttribute(k, attrs[k]);
    if (text !== undefined) e.textContent = text;
    return e;
  }
  function draw(svg, node, x, y, range){
    if (!node) return;
    for (const [child, dx] of [[node.left, -range], [node.right, range]]) {
      if (!child) continue;
      svg.appendChild(el("line", {x1: x, y1: y + 4, x2: x + dx, y2: y + 50}));
      draw(svg, child, x + dx, y + 60, range / 2);
    }
    svg.appendChild(el("text", {x: x, y: y}, node.key + "/" + node.height + "/" + node.size));
  }
  async function refresh(){
    const r = await (await fetch("/api/st/tree")).json();
    const svg = document.getElementById("tree");
    svg.innerHTML = "";
    draw(svg, r.data.tree, 700, 20, 210);
  }
  async function post(url, body){
    const opts = {method: "POST"};
    if (body) { opts.headers = {"Content-Type": "application/json"}; opts.body = JSON.stringify(body); }
    const r = await (await fetch(url, opts)).json();
    document.getElementById("msg").textContent = r.ok ? JSON.stringify(r.data) : r.error;
    refresh();
  }
  function putKey(){
    post("/api/st/put", {key: document.getElementById("key").value, value: document.getElementById("value").value});
  }
  function deleteKey(){
    post("/api/st/delete/" + encodeURIComponent(document.getElementById("key").value));
  }
  refresh();
</script>
</body>
</html>
"""

@app.get("/")
def home():
    return render_template_string(HTML)

if __name__ == "__main__":
    warm_start()
    app.run(host=HOST, port=PORT, debug=True, use_reloader=False)
