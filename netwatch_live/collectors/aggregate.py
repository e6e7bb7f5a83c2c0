from __future__ import annotations
import dataclasses
import os
from typing import Dict, List, Sequence, Tuple

from ..models import AttributionStatus, ConnectionRecord, Family, ProcessHandle
from .linux import decode
from .procfs import PROC_ROOT, resolve

# IPv4 before IPv6 in the merged output
DEFAULT_SOURCES: Tuple[Tuple[Family, str], ...] = (
    (Family.IPV4, "net/tcp"),
    (Family.IPV6, "net/tcp6"),
)

def attribute(record: ConnectionRecord, owners: Dict[int, ProcessHandle], permission_denied: bool) -> ConnectionRecord:
    if record.inode == 0:
        return dataclasses.replace(record, attribution=AttributionStatus.NO_OWNER)
    owner = owners.get(record.inode)
    if owner is not None:
        return dataclasses.replace(
            record, owner_pid=owner.pid, owner_name=owner.name,
            attribution=AttributionStatus.RESOLVED,
        )
    if permission_denied:
        return dataclasses.replace(record, attribution=AttributionStatus.PERMISSION_DENIED)
    # owner most likely exited between the table read and the scan
    return dataclasses.replace(record, attribution=AttributionStatus.UNKNOWN)

def fetch_all_connections(proc_root: str = PROC_ROOT,
                          sources: Sequence[Tuple[Family, str]] = DEFAULT_SOURCES) -> List[ConnectionRecord]:
    """Decode every configured socket table and attribute each socket to its process.

    Raises SourceUnavailable if any configured table cannot be opened.
    """
    records: List[ConnectionRecord] = []
    for family, rel in sources:
        records.extend(decode(os.path.join(proc_root, rel), family))

    owners, permission_denied = resolve({r.inode for r in records}, proc_root)
    return [attribute(r, owners, permission_denied) for r in records]
