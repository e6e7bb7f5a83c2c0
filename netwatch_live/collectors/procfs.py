from __future__ import annotations
import logging
import os
import re
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..errors import SourceUnavailable
from ..models import ProcessHandle

log = logging.getLogger(__name__)

PROC_ROOT = "/proc"
SOCKET_LINK_RE = re.compile(r"^socket:\[(?P<inode>\d+)\]$")

def _numeric_sorted(names: Iterable[str]) -> List[int]:
    # "self", "sys", "net", ... are not processes
    return sorted(int(n) for n in names if n.isascii() and n.isdigit())

def iter_pids(proc_root: str = PROC_ROOT) -> List[int]:
    try:
        names = os.listdir(proc_root)
    except OSError as err:
        raise SourceUnavailable(proc_root, err.strerror or str(err)) from err
    return _numeric_sorted(names)

def _list_fds(fd_dir: str) -> List[str]:
    return [str(fd) for fd in _numeric_sorted(os.listdir(fd_dir))]

def _read_comm(pid_dir: str) -> str:
    with open(os.path.join(pid_dir, "comm"), "r", encoding="utf-8", errors="replace") as f:
        return f.read().strip()

def socket_inode(link: str) -> Optional[int]:
    m = SOCKET_LINK_RE.match(link)
    return int(m.group("inode")) if m else None

def resolve(inodes: Iterable[int], proc_root: str = PROC_ROOT) -> Tuple[Dict[int, ProcessHandle], bool]:
    """Map socket inodes to the process holding them.

    Walks <proc_root>/<pid>/fd in ascending pid order; the first process
    found holding an inode owns it. Returns the inode -> ProcessHandle map
    and whether any descriptor table was denied to us.
    """
    pending: Set[int] = set(inodes)
    pending.discard(0)  # never behind a descriptor
    owners: Dict[int, ProcessHandle] = {}
    permission_denied = False
    if not pending:
        return owners, permission_denied

    for pid in iter_pids(proc_root):
        if not pending:
            break
        pid_dir = os.path.join(proc_root, str(pid))
        fd_dir = os.path.join(pid_dir, "fd")
        try:
            fds = _list_fds(fd_dir)
        except PermissionError:
            log.debug("fd table of pid %d not readable", pid)
            permission_denied = True
            continue
        except OSError:
            # process exited or is a kernel thread without fds
            continue
        try:
            name = _read_comm(pid_dir) or "?"
        except OSError:
            continue

        handle = ProcessHandle(pid=pid, name=name)
        for fd in fds:
            if not pending:
                break
            try:
                link = os.readlink(os.path.join(fd_dir, fd))
            except OSError:
                continue
            inode = socket_inode(link)
            if inode is None or inode not in pending:
                continue
            handle.inodes.add(inode)
            owners[inode] = handle
            pending.discard(inode)

    if pending:
        log.debug("%d inode(s) left unresolved (permission_denied=%s)", len(pending), permission_denied)
    return owners, permission_denied
