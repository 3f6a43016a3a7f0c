import threading
from enum import Enum
from typing import Dict, List


class WorkState(str, Enum):
    QUEUED = "queued"
    RUNNING = "running"


class PendingWork:
    """Table of URLs accepted by the scheduler that have not finished yet.

    An entry exists from submission until the unit of work for that URL
    returns (success or failure).
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._work: Dict[str, WorkState] = {}

    def add(self, url: str) -> None:
        with self._lock:
            if url in self._work:
                raise ValueError(f"{url} is already pending")
            self._work[url] = WorkState.QUEUED

    def mark_running(self, url: str) -> None:
        with self._lock:
            self._work[url] = WorkState.RUNNING

    def remove(self, url: str) -> None:
        with self._lock:
            self._work.pop(url, None)

    def clear(self) -> List[str]:
        """Drop every entry and return the URLs that were still pending."""
        with self._lock:
            urls = list(self._work)
            self._work.clear()
            return urls

    def is_empty(self) -> bool:
        with self._lock:
            return not self._work

    def snapshot(self) -> Dict[str, WorkState]:
        with self._lock:
            return dict(self._work)

    def __len__(self) -> int:
        with self._lock:
            return len(self._work)
