import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from pdfcrawl.exceptions import CrawlAbortedError

logger = logging.getLogger(__name__)


class BoundedScheduler:
    """Run units of work with at most `max_workers` executing at once.

    The total amount of work is not known upfront: units are allowed to call
    `submit` while they run, and the rest wait in FIFO order inside the
    executor. `wait()` returns only at quiescence, i.e. when every submitted
    unit (including ones submitted by other units) has finished. Counting
    starts in `submit`, before the executor sees the work, so the count can
    never drop to zero while a running unit is about to add more.

    An exception escaping a unit is treated as an infrastructure failure:
    it is recorded, queued units are skipped, new submissions are refused,
    and `wait()` raises CrawlAbortedError.
    """

    def __init__(self, max_workers: int, *, thread_name_prefix: str = "pdfcrawl"):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = int(max_workers)
        self._executor = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix=thread_name_prefix)
        self._cond = threading.Condition()
        self._outstanding = 0
        self._running = 0
        self._error: Optional[Exception] = None
        self._closed = False

    def __enter__(self) -> "BoundedScheduler":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown(wait=exc_type is None)

    @property
    def outstanding(self) -> int:
        """Units submitted and not yet finished (queued + running)."""
        with self._cond:
            return self._outstanding

    @property
    def running(self) -> int:
        with self._cond:
            return self._running

    @property
    def failed(self) -> bool:
        with self._cond:
            return self._error is not None

    def submit(self, fn: Callable, *args, **kwargs) -> Optional[Future]:
        """Queue `fn(*args, **kwargs)`. Safe to call from inside a running unit.

        Returns None when the scheduler no longer accepts work.
        """
        with self._cond:
            if self._closed or self._error is not None:
                logger.debug("Scheduler not accepting work; dropping %s", getattr(fn, "__name__", fn))
                return None
            self._outstanding += 1
        try:
            return self._executor.submit(self._run, fn, args, kwargs)
        except RuntimeError:
            # executor already shut down
            self._finish_one()
            raise

    def _run(self, fn: Callable, args, kwargs) -> None:
        with self._cond:
            skip = self._error is not None
            if not skip:
                self._running += 1
        if skip:
            self._finish_one()
            return
        try:
            fn(*args, **kwargs)
        except Exception as e:
            logger.exception("Unit of work failed; aborting crawl")
            with self._cond:
                if self._error is None:
                    self._error = e
        finally:
            with self._cond:
                self._running -= 1
            self._finish_one()

    def _finish_one(self) -> None:
        with self._cond:
            self._outstanding -= 1
            if self._outstanding == 0:
                self._cond.notify_all()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until no work is queued or running.

        Returns False if `timeout` expired first. Raises CrawlAbortedError
        if any unit failed.
        """
        with self._cond:
            done = self._cond.wait_for(lambda: self._outstanding == 0, timeout=timeout)
            error = self._error
        if error is not None:
            raise CrawlAbortedError(error) from error
        return done

    def shutdown(self, wait: bool = True) -> None:
        with self._cond:
            self._closed = True
        self._executor.shutdown(wait=wait)
