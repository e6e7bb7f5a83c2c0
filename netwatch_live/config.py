from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .models import Family
from .collectors.aggregate import DEFAULT_SOURCES
from .collectors.procfs import PROC_ROOT
from .table.filters import FilterMode

MIN_INTERVAL = 0.5

@dataclass
class CFG:
    host: str = "127.0.0.1"
    port: int = 8765
    interval: float = 5.0
    proc_root: str = PROC_ROOT
    sources: Tuple[Tuple[Family, str], ...] = field(default_factory=lambda: DEFAULT_SOURCES)
    filter_mode: FilterMode = FilterMode.ALL
    hide_listen: bool = False
    log_file: Optional[str] = None
    log_level: str = "WARNING"

# row colouring, keyed by state name
STATE_STYLE = {
    "ESTABLISHED": {"color": "#29a36a"},
    "LISTEN":      {"color": "#3489eb"},
    "CLOSE":       {"color": "#b68900"},
    "CLOSE_WAIT":  {"color": "#b68900"},
    "CLOSING":     {"color": "#b68900"},
    "TIME_WAIT":   {"color": "#b68900"},
}
DEFAULT_STATE_COLOR = "#e8eaed"

ATTRIBUTION_LABEL = {
    "NoOwner": "No Owner",
    "PermissionDenied": "Permission Denied",
    "Unknown": "Unknown",
}

def init_cfg_from_args(args) -> CFG:
    cfg = CFG()
    cfg.host = getattr(args, "host", cfg.host) or cfg.host
    cfg.port = int(getattr(args, "port", cfg.port))
    cfg.interval = max(MIN_INTERVAL, float(getattr(args, "interval", cfg.interval)))
    cfg.proc_root = getattr(args, "proc_root", None) or PROC_ROOT
    if getattr(args, "no_ipv6", False):
        cfg.sources = tuple(s for s in DEFAULT_SOURCES if s[0] is Family.IPV4)
    if getattr(args, "filter", None):
        try:
            cfg.filter_mode = FilterMode(args.filter)
        except ValueError:
            print(f"[warn] unknown --filter '{args.filter}', using 'all'")
    cfg.hide_listen = bool(getattr(args, "no_listen", False))
    cfg.log_file = getattr(args, "log_file", None)
    cfg.log_level = (getattr(args, "log_level", None) or cfg.log_level).upper()
    return cfg
