import logging
import threading
import time
from typing import Callable, List, Optional

from pdfcrawl.domain.config import CrawlConfig
from pdfcrawl.domain.crawl_result import CrawlResult
from pdfcrawl.domain.crawl_session import CrawlSession
from pdfcrawl.domain.render_result import RenderResult
from pdfcrawl.exceptions import CrawlAbortedError, RendererError
from pdfcrawl.services.artifact_namer import artifact_path
from pdfcrawl.services.bounded_scheduler import BoundedScheduler
from pdfcrawl.services.link_filter import canonicalize_all, validate_root_url
from pdfcrawl.services.renderer import Renderer

logger = logging.getLogger(__name__)


class CrawlExecutor:
    """Executes a crawl given configured collaborators.

    This class owns the crawl control-flow: claiming URLs, handing them to
    the scheduler, calling the renderer, filtering discovered links and
    fanning out new work. Dependencies are passed in by the container.
    """

    def __init__(
        self,
        *,
        renderer: Renderer,
        scheduler_factory: Callable[[int], BoundedScheduler] = BoundedScheduler,
    ):
        self.renderer = renderer
        self.scheduler_factory = scheduler_factory

    def crawl(self, config: CrawlConfig, stop_event: Optional[threading.Event] = None) -> CrawlResult:
        """Crawl everything reachable from `config.root_url` and block until done.

        Per-page failures are counted in the result. A failure of the crawl
        machinery itself surfaces as CrawlAbortedError.
        """
        if config is None:
            raise ValueError("config is required for crawl")
        root_url = validate_root_url(config.root_url)
        session = CrawlSession(config, root_url=root_url, stop_event=stop_event)

        logger.info(
            "Starting crawl of %s (concurrency=%s, dry_run=%s, exclude=%s)",
            root_url, config.concurrency, config.dry_run, list(config.exclude),
        )
        start = time.monotonic()
        with self.scheduler_factory(config.concurrency) as scheduler:
            self.process(root_url, session, scheduler)
            self.drain(session, scheduler)

        if not session.pending.is_empty():
            logger.warning("Crawl finished with %d pending entries: %s", session.pending_count, list(session.pending.snapshot()))

        result = session.result()
        logger.info(
            "Finished %s: %d pages visited, %d captured, %d skipped, %d navigation failures, %d capture failures in %.2fs",
            root_url, result.pages_visited, result.captures, result.captures_skipped,
            result.navigation_failures, result.capture_failures, time.monotonic() - start,
        )
        return result

    def drain(self, session: CrawlSession, scheduler: BoundedScheduler) -> None:
        """Block until the scheduler is quiescent.

        Ctrl-C stops fan-out and waits for in-flight pages. If the crawl
        aborts, units the scheduler skipped never ran, so their pending
        entries are dropped here before CrawlAbortedError propagates.
        """
        try:
            try:
                scheduler.wait()
            except KeyboardInterrupt:
                logger.warning("Interrupted; letting in-flight pages finish")
                session.mark_stopped()
                scheduler.wait()
        except CrawlAbortedError:
            skipped = session.pending.clear()
            if skipped:
                logger.warning("Crawl aborted; %d queued pages were not visited", len(skipped))
            raise

    def process(self, url: str, session: CrawlSession, scheduler: BoundedScheduler) -> bool:
        """Claim `url` and schedule a unit of work for it.

        Returns False without doing anything if another caller already owns
        the URL. The claim always happens before the work is scheduled.
        """
        if not session.claim(url):
            logger.debug("Skipping (visited) %s", url)
            return False
        if session.is_stopped():
            logger.debug("Crawl stopped; not scheduling %s", url)
            return False
        session.pending.add(url)
        if scheduler.submit(self._visit, url, session, scheduler) is None:
            session.pending.remove(url)
            return False
        return True

    def _visit(self, url: str, session: CrawlSession, scheduler: BoundedScheduler) -> None:
        try:
            if session.is_stopped():
                logger.info("Crawl cancelled before visiting %s", url)
                return
            session.pending.mark_running(url)
            logger.info("URL: %s (visited: %d, remaining: %d)", url, session.visited_count, session.pending_count)

            links = self._render(url, session)
            for link in links:
                if session.is_stopped():
                    logger.info("Crawl cancelled during fan-out from %s", url)
                    break
                self.process(link, session, scheduler)
        finally:
            session.pending.remove(url)

    def _render(self, url: str, session: CrawlSession) -> List[str]:
        """Render `url`, capture it unless dry-run, and return its candidate links."""
        config = session.config
        logger.debug("Navigating to %s", url)
        with self.renderer.render(url) as result:
            if not result.ok:
                logger.warning("Navigation failed for %s; continuing without its links", url)
                session.increment("navigation_failures")
                return []
            session.increment("pages_rendered")

            links = canonicalize_all(result.links, session.root_url, result.url or url, config.exclude)
            if not config.dry_run:
                self._capture(url, result, session)
        return links

    def _capture(self, url: str, result: RenderResult, session: CrawlSession) -> None:
        config = session.config
        path = artifact_path(config.output_dir, result.title, url)
        if config.skip_existing and path.exists():
            logger.debug("Skipping existing PDF: %s", path)
            session.increment("captures_skipped")
            return

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            ok = self.renderer.capture(result.page, str(path), config.capture)
        except RendererError:
            raise
        except Exception as e:
            logger.error("Error saving PDF %s for %s: %s", path, url, e, exc_info=True)
            ok = False

        if ok:
            session.increment("captures")
            logger.info("PDF: %s", path)
        else:
            session.increment("capture_failures")
