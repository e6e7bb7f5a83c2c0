from __future__ import annotations
import os
from pathlib import Path

import pytest

TCP_HEADER = "  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode"
TCP6_HEADER = ("  sl  local_address                         remote_address                        "
               "st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode")

def tcp_line(n: int, local: str, remote: str, state: str, inode: int) -> str:
    return (f"{n:4d}: {local} {remote} {state} 00000000:00000000 00:00000000 00000000  1000        0 "
            f"{inode} 1 0000000000000000 100 0 0 10 0")

class FakeProc:
    """A throwaway /proc: net/tcp{,6} tables plus <pid>/comm and <pid>/fd symlinks."""

    def __init__(self, root: Path):
        self.root = root
        (root / "net").mkdir()
        (root / "self").mkdir()
        (root / "sys").mkdir()

    def table(self, name: str, lines, header: str = TCP_HEADER):
        (self.root / "net" / name).write_text("\n".join([header, *lines]) + "\n")

    def process(self, pid: int, comm=None, fds=None):
        pdir = self.root / str(pid)
        (pdir / "fd").mkdir(parents=True)
        if comm is not None:
            (pdir / "comm").write_text(comm + "\n")
        for fd, target in (fds or {}).items():
            os.symlink(target, pdir / "fd" / str(fd))
        return pdir

    def __str__(self):
        return str(self.root)

@pytest.fixture
def fake_proc(tmp_path):
    root = tmp_path / "proc"
    root.mkdir()
    return FakeProc(root)
