from __future__ import annotations
from flask import Flask, Response, jsonify, request, current_app
import json as stdjson

try:
    import orjson as _oj
    def dumps(obj): return _oj.dumps(obj).decode()
except Exception:
    _oj = None
    def dumps(obj): return stdjson.dumps(obj)

from ..config import CFG
from ..collectors.loop import refresh_once
from ..table.filters import FilterMode
from ..table.table_build import snapshot_to_table
from .ui import render_html

def create_app(cfg: CFG, snap) -> Flask:
    app = Flask(__name__)

    @app.get("/")
    def index():
        return Response(render_html(cfg.interval, cfg.filter_mode), mimetype="text/html")

    @app.get("/api/connections")
    def api_connections():
        raw = request.args.get("filter", cfg.filter_mode.value)
        try:
            mode = FilterMode(raw)
        except ValueError:
            return jsonify({"ok": False, "error": f"unknown filter '{raw}'"}), 400
        with snap.lock:
            table = snapshot_to_table(snap, cfg, mode)
        return Response(dumps(table), mimetype="application/json")

    @app.post("/api/refresh")
    def api_refresh():
        ok = refresh_once(cfg, snap)
        with snap.lock:
            err, total = snap.error, len(snap.records)
        if not ok:
            current_app.logger.warning("manual refresh failed: %s", err)
        return jsonify({"ok": ok, "error": err, "total": total})

    return app
