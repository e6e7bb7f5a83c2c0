from __future__ import annotations
import json

from ..table.filters import FilterMode

HTML = """
<!doctype html>
<html>
<head>
  <meta charset="utf-8"/>
  <title>netwatch</title>
  <style>
    body { background:#14181d; color:#e8eaed; font-family: ui-monospace,SFMono-Regular,Menlo,monospace; }
    table { border-collapse: collapse; width: 100%; }
    th { text-align:left; color:#9aa0a6; border-bottom:1px solid #2a2f36; padding:4px 8px; }
    td { padding:2px 8px; white-space:nowrap; overflow:hidden; text-overflow:ellipsis; max-width:40ch; }
    tr.alt { background:#191e24; }
    tr.sel { background:#3c78d8; color:#fff; }
    tr.sel td { color:#fff !important; }
    #err { color:#e84a5f; }
    #help, #empty { color:#7f7f7f; margin-top:1em; }
  </style>
</head>
<body>
  <h2>TCP connections (Live)</h2>
  <div id="err"></div>
  <table>
    <thead><tr><th>Process</th><th>Local Address</th><th>Remote Address</th><th>State</th></tr></thead>
    <tbody id="rows"></tbody>
  </table>
  <div id="empty"></div>
  <div id="help"></div>

  <script>
  const INTERVAL_MS = __INTERVAL_MS__;
  const MODES = ["all", "local", "public"];
  let mode = __FILTER__;
  let cursor = 0;
  let rows = [];
  let last = null;

  function esc(s){ return String(s ?? "").replace(/[&<>"]/g, c => ({"&":"&amp;","<":"&lt;",">":"&gt;",'"':"&quot;"}[c])); }

  function render(){
    const err = document.getElementById('err');
    const body = document.getElementById('rows');
    const empty = document.getElementById('empty');
    const help = document.getElementById('help');
    err.textContent = last && last.error ? ("Error: " + last.error + " (press 'r' to retry)") : "";
    if (cursor >= rows.length) cursor = rows.length - 1;
    if (cursor < 0) cursor = 0;
    body.innerHTML = rows.map((r, i) => {
      const cls = i === cursor ? "sel" : (i % 2 ? "alt" : "");
      return `<tr class="${cls}" title="${esc(r.user)} ${esc(r.cmd)}">` +
        `<td>${esc(r.process)}</td><td>${esc(r.local)}</td><td>${esc(r.remote)}</td>` +
        `<td style="color:${r.color}">${esc(r.state)}</td></tr>`;
    }).join("");
    const label = last ? last.filter_label : mode;
    empty.textContent = rows.length ? "" :
      "No connections found" + (mode === "all" ? "" : ` (filtering: ${label})`) + "...";
    help.textContent = `Showing: ${rows.length}/${last ? last.total : 0} (${label}) • ↑↓/j/k navigate • 'l' filter • 'r' refresh • Auto-refresh: ${INTERVAL_MS/1000}s`;
  }

  async function load(){
    try{
      const r = await fetch('/api/connections?filter=' + encodeURIComponent(mode), {cache:'no-store'});
      last = await r.json();
      rows = last.rows || [];
    }catch(e){ console.error(e); }
    render();
  }

  async function refreshNow(){
    try{ await fetch('/api/refresh', {method:'POST'}); }catch(e){ console.error(e); }
    load();
  }

  document.addEventListener('keydown', (ev) => {
    switch(ev.key){
      case 'l': mode = MODES[(MODES.indexOf(mode) + 1) % MODES.length]; cursor = 0; load(); break;
      case 'r': refreshNow(); break;
      case 'ArrowUp': case 'k': if (cursor > 0) cursor--; render(); break;
      case 'ArrowDown': case 'j': if (cursor < rows.length - 1) cursor++; render(); break;
    }
  });

  setInterval(load, INTERVAL_MS);
  load();
  </script>
</body>
</html>
"""

def render_html(interval: float, mode: FilterMode = FilterMode.ALL) -> str:
    html = HTML.replace("__INTERVAL_MS__", str(int(interval * 1000)))
    return html.replace("__FILTER__", json.dumps(mode.value))
