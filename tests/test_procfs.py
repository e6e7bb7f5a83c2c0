import os

import pytest

from netwatch_live.collectors import procfs
from netwatch_live.collectors.procfs import iter_pids, resolve, socket_inode
from netwatch_live.errors import SourceUnavailable

def test_socket_inode():
    assert socket_inode("socket:[12345]") == 12345
    assert socket_inode("pipe:[12345]") is None
    assert socket_inode("/dev/null") is None
    assert socket_inode("socket:[]") is None
    assert socket_inode("anon_inode:[eventpoll]") is None

def test_iter_pids_numeric_only_and_sorted(fake_proc):
    for pid in (10, 9, 100):
        fake_proc.process(pid, "x")
    (fake_proc.root / "1a").mkdir()
    assert iter_pids(str(fake_proc)) == [9, 10, 100]

def test_iter_pids_missing_root(tmp_path):
    with pytest.raises(SourceUnavailable):
        iter_pids(str(tmp_path / "missing"))

def test_resolve_basic(fake_proc):
    fake_proc.process(1, "init", {0: "/dev/null", 1: "pipe:[77]"})
    fake_proc.process(42, "curl", {0: "/dev/null", 3: "socket:[12345]", 4: "socket:[999]"})
    fake_proc.process(50, "  sshd  ", {5: "socket:[555]"})
    owners, denied = resolve({12345, 555}, str(fake_proc))
    assert denied is False
    assert owners[12345].pid == 42
    assert owners[12345].name == "curl"
    assert owners[555].name == "sshd"
    assert 999 not in owners

def test_resolve_collects_all_inodes_of_one_process(fake_proc):
    fake_proc.process(7, "nginx", {3: "socket:[1]", 4: "socket:[2]"})
    owners, _ = resolve({1, 2}, str(fake_proc))
    assert owners[1] is owners[2]
    assert owners[1].inodes == {1, 2}

def test_first_process_in_pid_order_wins(fake_proc):
    fake_proc.process(10, "second", {3: "socket:[77]"})
    fake_proc.process(9, "first", {3: "socket:[77]"})
    owners, _ = resolve({77}, str(fake_proc))
    assert (owners[77].pid, owners[77].name) == (9, "first")

def test_outer_scan_stops_once_everything_resolved(fake_proc, monkeypatch):
    for pid in range(1, 6):
        fake_proc.process(pid, f"p{pid}", {3: f"socket:[{pid * 100}]"})
    listed = []
    real = procfs._list_fds

    def spy(fd_dir):
        listed.append(int(os.path.basename(os.path.dirname(fd_dir))))
        return real(fd_dir)

    monkeypatch.setattr(procfs, "_list_fds", spy)
    owners, _ = resolve({300}, str(fake_proc))
    assert owners[300].pid == 3
    assert listed == [1, 2, 3]

def test_inner_scan_stops_once_everything_resolved(fake_proc, monkeypatch):
    fds = {fd: "/dev/null" for fd in range(10)}
    fds[2] = "socket:[42]"
    fake_proc.process(5, "busy", fds)
    read = []
    real = os.readlink

    def spy(path, *args, **kwargs):
        read.append(os.path.basename(path))
        return real(path, *args, **kwargs)

    monkeypatch.setattr(procfs.os, "readlink", spy)
    owners, _ = resolve({42}, str(fake_proc))
    assert owners[42].pid == 5
    assert read == ["0", "1", "2"]

def test_permission_denied_is_flagged(fake_proc, monkeypatch):
    fake_proc.process(1, "mine", {3: "socket:[10]"})
    fake_proc.process(2, "theirs", {3: "socket:[20]"})
    real = procfs._list_fds

    def deny(fd_dir):
        if os.path.basename(os.path.dirname(fd_dir)) == "2":
            raise PermissionError(13, "Permission denied", fd_dir)
        return real(fd_dir)

    monkeypatch.setattr(procfs, "_list_fds", deny)
    owners, denied = resolve({10, 20}, str(fake_proc))
    assert denied is True
    assert set(owners) == {10}

def test_vanished_process_is_not_permission_denied(fake_proc, monkeypatch):
    fake_proc.process(1, "gone", {3: "socket:[10]"})

    def vanish(fd_dir):
        raise FileNotFoundError(2, "No such file or directory", fd_dir)

    monkeypatch.setattr(procfs, "_list_fds", vanish)
    owners, denied = resolve({10}, str(fake_proc))
    assert owners == {}
    assert denied is False

def test_process_without_comm_is_skipped(fake_proc):
    fake_proc.process(3, None, {3: "socket:[10]"})
    fake_proc.process(4, "later", {3: "socket:[10]"})
    owners, _ = resolve({10}, str(fake_proc))
    assert owners[10].pid == 4

def test_empty_comm_gets_placeholder_name(fake_proc):
    fake_proc.process(3, "", {3: "socket:[10]"})
    owners, _ = resolve({10}, str(fake_proc))
    assert owners[10].name == "?"

def test_inode_zero_never_scanned(fake_proc, monkeypatch):
    fake_proc.process(1, "x", {3: "socket:[0]"})
    monkeypatch.setattr(procfs, "_list_fds", lambda fd_dir: pytest.fail("scanned"))
    assert resolve({0}, str(fake_proc)) == ({}, False)
    assert resolve(set(), str(fake_proc)) == ({}, False)

def test_inode_zero_does_not_block_early_exit(fake_proc, monkeypatch):
    fake_proc.process(1, "a", {3: "socket:[10]"})
    fake_proc.process(2, "b", {3: "socket:[20]"})
    listed = []
    real = procfs._list_fds
    monkeypatch.setattr(procfs, "_list_fds", lambda d: listed.append(d) or real(d))
    resolve({0, 10}, str(fake_proc))
    assert len(listed) == 1
