# src/cache/models.py — v1
"""Cache domain models: CacheStats."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field


@dataclass
class CacheStats:
    """Thread-safe counters; write-back updates arrive from writer threads."""

    hits: int = 0
    misses: int = 0
    lookup_errors: int = 0
    writes: int = 0
    write_failures: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def incr(self, name: str, amount: int = 1) -> None:
        with self._lock:
            setattr(self, name, getattr(self, name) + amount)

    def snapshot(self) -> dict[str, int]:
        """Consistent copy of all counters."""
        with self._lock:
            return {
                "hits": self.hits,
                "misses": self.misses,
                "lookup_errors": self.lookup_errors,
                "writes": self.writes,
                "write_failures": self.write_failures,
            }
