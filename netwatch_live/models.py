from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from typing import Optional, Set, Union

IPAddress = Union[IPv4Address, IPv6Address]

class Family(str, Enum):
    IPV4 = "IPv4"
    IPV6 = "IPv6"

class TcpState(str, Enum):
    ESTABLISHED = "ESTABLISHED"
    SYN_SENT = "SYN_SENT"
    SYN_RECV = "SYN_RECV"
    FIN_WAIT1 = "FIN_WAIT1"
    FIN_WAIT2 = "FIN_WAIT2"
    TIME_WAIT = "TIME_WAIT"
    CLOSE = "CLOSE"
    CLOSE_WAIT = "CLOSE_WAIT"
    LAST_ACK = "LAST_ACK"
    LISTEN = "LISTEN"
    CLOSING = "CLOSING"
    UNKNOWN = "UNKNOWN"

class AttributionStatus(str, Enum):
    RESOLVED = "Resolved"
    NO_OWNER = "NoOwner"
    PERMISSION_DENIED = "PermissionDenied"
    UNKNOWN = "Unknown"

@dataclass(frozen=True)
class ConnectionRecord:
    family: Family
    local_address: Optional[IPAddress]
    local_port: Optional[int]
    remote_address: Optional[IPAddress]
    remote_port: Optional[int]
    state: TcpState
    state_code: str  # raw 2-digit hex from the table
    inode: int
    owner_pid: Optional[int] = None
    owner_name: Optional[str] = None
    attribution: AttributionStatus = AttributionStatus.UNKNOWN

    @property
    def state_name(self) -> str:
        """State name, or the raw hex code for states the table lookup does not know."""
        if self.state is TcpState.UNKNOWN:
            return self.state_code
        return self.state.value

@dataclass
class ProcessHandle:
    pid: int
    name: str
    inodes: Set[int] = field(default_factory=set)
