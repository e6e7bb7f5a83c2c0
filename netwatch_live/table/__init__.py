from .snapshot import Snapshot
from .filters import FilterMode, filter_records, next_mode

__all__ = ["Snapshot", "FilterMode", "filter_records", "next_mode"]
