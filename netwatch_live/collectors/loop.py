from __future__ import annotations
import logging
import time
try:
    import psutil  # type: ignore
except Exception:
    psutil = None

from ..config import CFG
from ..errors import SourceUnavailable
from ..models import AttributionStatus
from ..table.snapshot import Snapshot
from .aggregate import fetch_all_connections

log = logging.getLogger(__name__)

def enrich_proc_info(pid: int) -> dict:
    user = "?"; cmd = ""
    if psutil:
        try:
            p = psutil.Process(pid)
            user = p.username()
            try:
                cmdline = p.cmdline()
                if cmdline: cmd = " ".join(cmdline)
            except psutil.Error: cmd = ""
            if not cmd:
                try: cmd = p.exe()
                except psutil.Error: cmd = ""
        except psutil.Error:
            pass
    return {"user": user, "cmd": cmd}

def refresh_once(cfg: CFG, snap: Snapshot) -> bool:
    """Run one decode/resolve cycle and publish it. False if a source was unavailable."""
    with snap.refresh_lock:
        try:
            records = fetch_all_connections(cfg.proc_root, cfg.sources)
        except SourceUnavailable as err:
            log.warning("refresh failed: %s", err)
            with snap.lock:
                snap.error = str(err)
                snap.updated = time.time()
            return False

        pids = {r.owner_pid for r in records
                if r.attribution is AttributionStatus.RESOLVED and r.owner_pid is not None}
        details = {pid: enrich_proc_info(pid) for pid in sorted(pids)}

        with snap.lock:
            snap.records = records
            snap.details = details
            snap.error = None
            snap.updated = time.time()
            snap.cycles += 1
        return True

def collector_loop(cfg: CFG, snap: Snapshot, interval: float):
    # first cycle is run by the caller before the loop starts
    while True:
        time.sleep(interval)
        refresh_once(cfg, snap)
