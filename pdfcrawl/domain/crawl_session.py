import threading
from typing import Optional

from pdfcrawl.domain.config import CrawlConfig
from pdfcrawl.domain.crawl_result import CrawlResult
from pdfcrawl.domain.pending_work import PendingWork
from pdfcrawl.domain.visited_tracker import VisitedTracker


class CrawlSession:
    """
    Shared state for a single crawl run.

    Every concurrently executing unit of work reads and mutates the same
    session, so each piece of mutable state sits behind its own lock:
    the visited set, the pending-work table and the progress counters.
    Nothing here is exposed as a raw container.
    """

    def __init__(
        self,
        config: CrawlConfig,
        root_url: Optional[str] = None,
        visited_tracker: Optional[VisitedTracker] = None,
        pending: Optional[PendingWork] = None,
        stop_event: Optional[threading.Event] = None,
    ):
        self.config = config
        self.root_url = root_url or config.root_url
        self.visited_tracker = visited_tracker if visited_tracker is not None else VisitedTracker()
        self.pending = pending if pending is not None else PendingWork()
        self.stop_event = stop_event if stop_event is not None else threading.Event()

        self._counter_lock = threading.Lock()
        self.pages_rendered: int = 0
        self.navigation_failures: int = 0
        self.captures: int = 0
        self.capture_failures: int = 0
        self.captures_skipped: int = 0

    def claim(self, url: str) -> bool:
        """Delegate to visited tracker."""
        return self.visited_tracker.try_claim(url)

    def is_visited(self, url: str) -> bool:
        """Delegate to visited tracker."""
        return self.visited_tracker.is_visited(url)

    @property
    def visited_count(self) -> int:
        return len(self.visited_tracker)

    @property
    def pending_count(self) -> int:
        return len(self.pending)

    def is_stopped(self) -> bool:
        """Check if crawling has stopped."""
        return self.stop_event.is_set()

    def mark_stopped(self) -> None:
        """Mark that crawling should stop."""
        self.stop_event.set()

    def increment(self, counter: str, count: int = 1) -> None:
        if counter not in ("pages_rendered", "navigation_failures", "captures", "capture_failures", "captures_skipped"):
            raise ValueError(f"Unknown counter: {counter}")
        with self._counter_lock:
            setattr(self, counter, getattr(self, counter) + int(count))

    def result(self) -> CrawlResult:
        with self._counter_lock:
            return CrawlResult(
                pages_rendered=self.pages_rendered,
                navigation_failures=self.navigation_failures,
                captures=self.captures,
                capture_failures=self.capture_failures,
                captures_skipped=self.captures_skipped,
                stopped=self.is_stopped(),
            )
