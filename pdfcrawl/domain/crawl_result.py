"""Crawl result data model."""
from typing import NamedTuple


class CrawlResult(NamedTuple):
    """Result of a crawl run.

    Lets callers log metrics and distinguish a completed run from one that
    was stopped early. Per-page failures are counted here, they never abort
    the run.
    """
    pages_rendered: int
    """Number of pages that loaded successfully"""

    navigation_failures: int
    """Number of pages the renderer could not load"""

    captures: int
    """Number of artifacts written"""

    capture_failures: int
    """Number of artifacts that could not be written"""

    captures_skipped: int
    """Number of artifacts skipped because they already existed"""

    stopped: bool
    """True if the crawl was stopped early via stop_event"""

    @property
    def pages_visited(self) -> int:
        return self.pages_rendered + self.navigation_failures
