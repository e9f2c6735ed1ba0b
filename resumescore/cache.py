"""
Memoization cache for analyses keyed by a hash of the input text.

The cache is an explicit object handed to whoever needs it, never a module
global, so tests and concurrent callers each control their own state.
"""

import hashlib
import threading
from typing import Any, Callable, Dict, Optional

from .logger import StructuredLogger, get_logger


def hash_text(text: str) -> str:
    return hashlib.sha256((text or "").encode("utf-8")).hexdigest()


def cache_key(prefix: str, text: str) -> str:
    return f"{prefix}_{hash_text(text)}"


class AnalysisCache:
    """
    Thread-safe in-memory cache.

    Reads and writes take a lock; get_or_compute holds it across the
    compute call so concurrent callers of the same key compute once.
    """

    def __init__(self, logger: Optional[StructuredLogger] = None):
        self._data: Dict[str, Any] = {}
        self._lock = threading.Lock()
        self.logger = logger or get_logger()

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def get_or_compute(self, key: str, compute: Callable[[], Any]) -> Any:
        with self._lock:
            if key in self._data:
                self.logger.record_cache_hit()
                return self._data[key]
            self.logger.record_cache_miss()
            value = compute()
            self._data[key] = value
            return value

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
