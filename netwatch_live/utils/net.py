from __future__ import annotations
import ipaddress
from typing import Optional, Tuple

from ..models import IPAddress

MAPPED_PREFIX = "::ffff:"

_LOCAL_V4 = tuple(ipaddress.ip_network(n) for n in (
    "0.0.0.0/32", "127.0.0.0/8", "10.0.0.0/8", "172.16.0.0/12",
    "192.168.0.0/16", "169.254.0.0/16", "224.0.0.0/4",
))
_LOCAL_V6 = tuple(ipaddress.ip_network(n) for n in (
    "::/128", "::1/128", "fc00::/7", "fe80::/10", "ff00::/8",
))

def decode_ipv4(raw: bytes) -> ipaddress.IPv4Address:
    # kernel writes the 32-bit word in host order
    return ipaddress.IPv4Address(raw[::-1])

def decode_ipv6(raw: bytes) -> ipaddress.IPv6Address:
    return ipaddress.IPv6Address(raw[::-1])

def decode_address(hexaddr: str) -> Optional[IPAddress]:
    """Decode the packed hex address of a socket table column.

    8 hex digits are an IPv4 address, 32 an IPv6 address; anything else
    (or non-hex input) yields None.
    """
    try:
        raw = bytes.fromhex(hexaddr)
    except ValueError:
        return None
    if len(raw) == 4:
        return decode_ipv4(raw)
    if len(raw) == 16:
        return decode_ipv6(raw)
    return None

def decode_port(hexport: str) -> Optional[int]:
    try:
        port = int(hexport, 16)
    except ValueError:
        return None
    if 0 <= port <= 0xFFFF:
        return port
    return None

def split_endpoint(token: str) -> Tuple[Optional[IPAddress], Optional[int]]:
    """'0100007F:1F90' -> (IPv4Address('127.0.0.1'), 8080)"""
    if ":" not in token:
        return decode_address(token), None
    hexaddr, _, hexport = token.rpartition(":")
    return decode_address(hexaddr), decode_port(hexport)

def format_address(addr: Optional[IPAddress]) -> str:
    if addr is None:
        return ""
    if isinstance(addr, ipaddress.IPv6Address) and addr.ipv4_mapped is not None:
        return f"{MAPPED_PREFIX}{addr.ipv4_mapped}"
    return str(addr)

def format_endpoint(addr: Optional[IPAddress], port: Optional[int]) -> str:
    host = format_address(addr)
    if isinstance(addr, ipaddress.IPv6Address):
        host = f"[{host}]"
    return f"{host}:{'' if port is None else port}"

def is_local_address(addr: Optional[IPAddress]) -> bool:
    """Loopback, private, link-local, multicast or unspecified."""
    if addr is None:
        return True
    if isinstance(addr, ipaddress.IPv6Address):
        if addr.ipv4_mapped is not None:
            return is_local_address(addr.ipv4_mapped)
        return any(addr in n for n in _LOCAL_V6)
    return any(addr in n for n in _LOCAL_V4)
