"""
In-memory result store.

Keeps the most recent detection results in a bounded deque. Suitable for
a single process; durable persistence lives outside this package.
"""

import threading
from collections import deque
from typing import List

from provenance.core.exceptions import PersistenceError
from provenance.core.types import ConsensusResult


class InMemoryResultStore:
    """Bounded, thread-safe store of recent ConsensusResults"""

    def __init__(self, max_size: int = 100):
        if max_size <= 0:
            raise PersistenceError("init", f"max_size must be positive, got {max_size}")
        self._results = deque(maxlen=max_size)
        self._lock = threading.Lock()

    def save(self, result: ConsensusResult) -> None:
        if not isinstance(result, ConsensusResult):
            raise PersistenceError("save", f"expected ConsensusResult, got {type(result).__name__}")
        with self._lock:
            self._results.append(result)

    def recent(self, limit: int = 10) -> List[ConsensusResult]:
        """Most recent results, newest first"""
        if limit <= 0:
            return []
        with self._lock:
            return list(reversed(self._results))[:limit]

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)
