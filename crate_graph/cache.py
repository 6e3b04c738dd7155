"""
Process-lifetime response cache shared by the registry client
"""

import threading
from typing import Any, Dict, Hashable, Optional, Tuple


class ResponseCache:
    """Unbounded key -> value store guarded by a lock.

    Entries are never evicted; a cache lives as long as the client that owns it.
    """

    def __init__(self, name: str = "cache"):
        self.name = name
        self._data: Dict[Hashable, Any] = {}
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def lookup(self, key: Hashable) -> Tuple[bool, Optional[Any]]:
        """Return (found, value) for key"""
        with self._lock:
            if key in self._data:
                self.hits += 1
                return True, self._data[key]
            self.misses += 1
            return False, None

    def store(self, key: Hashable, value: Any) -> None:
        with self._lock:
            self._data[key] = value

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
            self.hits = 0
            self.misses = 0
