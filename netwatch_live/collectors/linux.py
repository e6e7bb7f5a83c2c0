from __future__ import annotations
import logging
import os
from typing import Iterable, List, Union

from ..errors import MalformedLine, SourceUnavailable
from ..models import ConnectionRecord, Family, TcpState
from ..utils.net import split_endpoint

log = logging.getLogger(__name__)

#  sl  local_address rem_address   st tx_queue rx_queue tr tm->when retrnsmt   uid  timeout inode
#   0: 0100007F:1F90 00000000:0000 0A 00000000:00000000 00:00000000 00000000  1000        0 12345
MIN_FIELDS = 10
LOCAL_IDX, REMOTE_IDX, STATE_IDX, INODE_IDX = 1, 2, 3, 9

TCP_STATES = {
    "01": TcpState.ESTABLISHED,
    "02": TcpState.SYN_SENT,
    "03": TcpState.SYN_RECV,
    "04": TcpState.FIN_WAIT1,
    "05": TcpState.FIN_WAIT2,
    "06": TcpState.TIME_WAIT,
    "07": TcpState.CLOSE,
    "08": TcpState.CLOSE_WAIT,
    "09": TcpState.LAST_ACK,
    "0A": TcpState.LISTEN,
    "0B": TcpState.CLOSING,
}

def lookup_state(code: str) -> TcpState:
    return TCP_STATES.get(code.upper(), TcpState.UNKNOWN)

def tcp_state(code: str) -> str:
    """'01' -> 'ESTABLISHED'; unknown codes come back unchanged."""
    state = lookup_state(code)
    return code if state is TcpState.UNKNOWN else state.value

def parse_line(line: str, family: Family) -> ConnectionRecord:
    fields = line.split()
    if len(fields) < MIN_FIELDS:
        raise MalformedLine(f"expected {MIN_FIELDS} fields, got {len(fields)}")
    try:
        inode = int(fields[INODE_IDX])
    except ValueError as err:
        raise MalformedLine(f"bad inode {fields[INODE_IDX]!r}") from err
    if inode < 0:
        raise MalformedLine(f"bad inode {fields[INODE_IDX]!r}")

    laddr, lport = split_endpoint(fields[LOCAL_IDX])
    raddr, rport = split_endpoint(fields[REMOTE_IDX])
    code = fields[STATE_IDX]
    return ConnectionRecord(
        family=family,
        local_address=laddr, local_port=lport,
        remote_address=raddr, remote_port=rport,
        state=lookup_state(code), state_code=code,
        inode=inode,
    )

def parse_lines(lines: Iterable[str], family: Family) -> List[ConnectionRecord]:
    """Decode table lines; the first line is the header and is dropped unread."""
    records: List[ConnectionRecord] = []
    it = iter(lines)
    next(it, None)
    for line in it:
        try:
            records.append(parse_line(line, family))
        except MalformedLine as err:
            log.debug("skipping %s line: %s", family.value, err)
    return records

def decode(source: Union[str, os.PathLike], family: Family) -> List[ConnectionRecord]:
    try:
        f = open(source, "r", encoding="ascii", errors="replace")
    except OSError as err:
        raise SourceUnavailable(os.fspath(source), err.strerror or str(err)) from err
    with f:
        return parse_lines(f, family)
