from __future__ import annotations
from typing import Dict, Optional

from ..config import ATTRIBUTION_LABEL, CFG, DEFAULT_STATE_COLOR, STATE_STYLE
from ..models import AttributionStatus, ConnectionRecord
from ..utils.net import format_address, format_endpoint
from .filters import FILTER_LABEL, FilterMode, filter_records

def process_label(r: ConnectionRecord) -> str:
    if r.attribution is AttributionStatus.RESOLVED:
        return f"{r.owner_name}({r.owner_pid})"
    return ATTRIBUTION_LABEL[r.attribution.value]

def record_to_row(r: ConnectionRecord, details: Optional[Dict[int, dict]] = None) -> dict:
    extra = (details or {}).get(r.owner_pid, {}) if r.owner_pid is not None else {}
    state = r.state_name
    return {
        "family": r.family.value,
        "process": process_label(r),
        "pid": r.owner_pid,
        "name": r.owner_name,
        "status": r.attribution.value,
        "local": format_endpoint(r.local_address, r.local_port),
        "remote": format_endpoint(r.remote_address, r.remote_port),
        "local_ip": format_address(r.local_address),
        "local_port": r.local_port,
        "remote_ip": format_address(r.remote_address),
        "remote_port": r.remote_port,
        "state": state,
        "color": STATE_STYLE.get(state, {}).get("color", DEFAULT_STATE_COLOR),
        "inode": r.inode,
        "user": extra.get("user", "?"),
        "cmd": extra.get("cmd", ""),
    }

def snapshot_to_table(snap, cfg: CFG, mode: FilterMode) -> dict:
    """Caller holds snap.lock."""
    shown = filter_records(snap.records, mode, cfg.hide_listen)
    return {
        "rows": [record_to_row(r, snap.details) for r in shown],
        "total": len(snap.records),
        "shown": len(shown),
        "filter": mode.value,
        "filter_label": FILTER_LABEL[mode],
        "error": snap.error,
        "updated": snap.updated,
    }
