from .aggregate import DEFAULT_SOURCES, attribute, fetch_all_connections
from .linux import decode, tcp_state
from .procfs import resolve

__all__ = ["DEFAULT_SOURCES", "attribute", "fetch_all_connections", "decode", "tcp_state", "resolve"]
