from __future__ import annotations
import argparse, logging, threading
from .config import init_cfg_from_args
from .table import Snapshot
from .web import create_app
from .collectors.loop import collector_loop, refresh_once

def parse_args(argv=None):
    ap = argparse.ArgumentParser(description='Live TCP socket table with owning processes (Linux /proc)')
    ap.add_argument('--host', type=str, default='127.0.0.1')
    ap.add_argument('--port', type=int, default=8765)
    ap.add_argument('--interval', type=float, default=5.0, help='refresh period in seconds (min 0.5)')
    ap.add_argument('--proc-root', type=str, default='/proc', help='process pseudo-filesystem root')
    ap.add_argument('--no-ipv6', action='store_true', help='read net/tcp only, not net/tcp6')
    ap.add_argument('--filter', choices=['all', 'local', 'public'], default='all', help='initial filter on the remote address')
    ap.add_argument('--no-listen', action='store_true', help='hide LISTEN sockets')
    ap.add_argument('--log-file', type=str, default=None)
    ap.add_argument('--log-level', type=str, default='WARNING')
    return ap.parse_args(argv)

def setup_logging(level: str, log_file=None):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        filename=log_file,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

def main(argv=None):
    args = parse_args(argv)
    cfg = init_cfg_from_args(args)
    setup_logging(cfg.log_level, cfg.log_file)

    snap = Snapshot()
    if not refresh_once(cfg, snap):
        print(f"[warn] {snap.error}")

    t = threading.Thread(target=collector_loop, args=(cfg, snap, cfg.interval), daemon=True)
    t.start()

    app = create_app(cfg, snap)
    print(f"[*] Serving on http://{cfg.host}:{cfg.port}")
    app.run(host=cfg.host, port=cfg.port, debug=False, use_reloader=False)

if __name__ == '__main__':
    main()
