from __future__ import annotations

class SourceUnavailable(OSError):
    """A socket table (or the process root) could not be opened."""

    def __init__(self, source: str, reason: str = ""):
        self.source = str(source)
        self.reason = reason
        msg = f"source unavailable: {self.source}"
        if reason:
            msg = f"{msg} ({reason})"
        super().__init__(msg)


class MalformedLine(ValueError):
    pass
