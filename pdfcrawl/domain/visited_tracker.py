import threading
from typing import FrozenSet


class VisitedTracker:
    """
    Tracks which URLs have been claimed for processing during a crawl.

    `try_claim` is the only way in: the membership check and the insert
    happen under one lock, so when several workers discover the same URL at
    once exactly one of them gets True and owns the obligation to process it.
    Membership is permanent for the run; there is no eviction.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._visited: set[str] = set()

    def try_claim(self, url: str) -> bool:
        """Insert `url` if absent. Returns True iff this call inserted it."""
        with self._lock:
            if url in self._visited:
                return False
            self._visited.add(url)
            return True

    def is_visited(self, url: str) -> bool:
        """Check if a URL has been claimed. Advisory only; use `try_claim` to own it."""
        with self._lock:
            return url in self._visited

    def snapshot(self) -> FrozenSet[str]:
        with self._lock:
            return frozenset(self._visited)

    def __len__(self) -> int:
        with self._lock:
            return len(self._visited)
