"""Domain objects for pdfcrawl - explicit re-exports to satisfy linters."""
from .config import CaptureOptions as CaptureOptions
from .config import CrawlConfig as CrawlConfig
from .crawl_result import CrawlResult as CrawlResult
from .crawl_session import CrawlSession as CrawlSession
from .pending_work import PendingWork as PendingWork
from .render_result import RenderResult as RenderResult
from .visited_tracker import VisitedTracker as VisitedTracker

__all__ = [
    "CaptureOptions",
    "CrawlConfig",
    "CrawlResult",
    "CrawlSession",
    "PendingWork",
    "RenderResult",
    "VisitedTracker",
]
