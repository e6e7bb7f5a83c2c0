from __future__ import annotations
import threading
from typing import Dict, List, Optional

from ..models import ConnectionRecord

class Snapshot:
    def __init__(self):
        self.lock = threading.Lock()
        # held for a whole refresh cycle; at most one in flight
        self.refresh_lock = threading.Lock()
        self.records: List[ConnectionRecord] = []
        self.details: Dict[int, dict] = {}  # pid -> {"user", "cmd"}
        self.error: Optional[str] = None
        self.updated: Optional[float] = None
        self.cycles: int = 0
