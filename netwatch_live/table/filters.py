from __future__ import annotations
from enum import Enum
from typing import Iterable, List

from ..models import ConnectionRecord, TcpState
from ..utils.net import is_local_address

class FilterMode(str, Enum):
    ALL = "all"
    LOCAL = "local"
    PUBLIC = "public"

_CYCLE = [FilterMode.ALL, FilterMode.LOCAL, FilterMode.PUBLIC]

FILTER_LABEL = {
    FilterMode.ALL: "all",
    FilterMode.LOCAL: "local only",
    FilterMode.PUBLIC: "public only",
}

def next_mode(mode: FilterMode) -> FilterMode:
    """all -> local -> public -> all"""
    return _CYCLE[(_CYCLE.index(mode) + 1) % len(_CYCLE)]

def filter_records(records: Iterable[ConnectionRecord], mode: FilterMode,
                   hide_listen: bool = False) -> List[ConnectionRecord]:
    # local/public is decided on the remote end only
    out = []
    for r in records:
        if hide_listen and r.state is TcpState.LISTEN:
            continue
        if mode is FilterMode.LOCAL and not is_local_address(r.remote_address):
            continue
        if mode is FilterMode.PUBLIC and is_local_address(r.remote_address):
            continue
        out.append(r)
    return out
