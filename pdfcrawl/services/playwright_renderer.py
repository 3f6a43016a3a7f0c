from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from pdfcrawl.domain.config import CaptureOptions
from pdfcrawl.domain.render_result import RenderResult
from pdfcrawl.exceptions import RendererError
from pdfcrawl.services.href_extractor import HrefExtractor

logger = logging.getLogger(__name__)

# Tried in order; the first one present on the page is clicked.
COOKIE_SELECTORS = (
    'button[id*="accept" i]',
    'button[class*="accept" i]',
    'a[id*="accept" i]',
    'a[class*="accept" i]',
    '[aria-label*="accept" i]',
    '[data-testid*="accept" i]',
    'button:has-text("Accept")',
    'button:has-text("Accept all")',
    'button:has-text("I accept")',
    'button:has-text("Allow all")',
    'button:has-text("Allow cookies")',
    'button:has-text("Akzeptieren")',
    'button:has-text("Alle akzeptieren")',
    'button:has-text("Accepter")',
    'button:has-text("J\'accepte")',
)

HEADER_TEMPLATE = """
<span style="font-size: 10px" class="date"></span>
<span style="font-size: 10px"> | </span>
<span style="font-size: 10px" class="title"></span>
"""

FOOTER_TEMPLATE = """
<span style="font-size: 10px" class="url"></span>
<span style="font-size: 10px"> | </span>
<span style="font-size: 10px" class="pageNumber"></span>
<span style="font-size: 10px">/</span>
<span style="font-size: 10px" class="totalPages"></span>
"""


@dataclass(frozen=True)
class PlaywrightRendererOptions:
    timeout_ms: int = 30_000
    wait_until: str = "networkidle"  # domcontentloaded | load | networkidle
    cookie_click_wait_ms: int = 500


def dismiss_cookie_dialog(page, wait_ms: int = 500) -> bool:
    """Best-effort click on a consent button. Returns True if one was clicked."""
    for selector in COOKIE_SELECTORS:
        try:
            button = page.query_selector(selector)
            if button:
                button.click()
                # let banner animations finish
                page.wait_for_timeout(wait_ms)
                return True
        except Exception:
            continue
    return False


class PlaywrightRenderer:
    """Renderer backed by headless Chromium through Playwright's sync API.

    Notes:
    - Each render launches its own Playwright driver and browser. The sync
      API is bound to the thread that started it, so this keeps concurrent
      renders on different worker threads fully isolated (cookies, storage,
      consent state).
    - Playwright is imported lazily so the rest of the package imports
      without it.
    """

    def __init__(
        self,
        *,
        user_agent: str,
        options: Optional[PlaywrightRendererOptions] = None,
        href_extractor: Optional[HrefExtractor] = None,
    ):
        self._user_agent = user_agent
        self._options = options or PlaywrightRendererOptions()
        self._href_extractor = href_extractor or HrefExtractor()

    @property
    def options(self) -> PlaywrightRendererOptions:
        return self._options

    def _import_playwright(self, url: str):
        try:
            from playwright.sync_api import Error, sync_playwright  # type: ignore
        except Exception as e:
            raise RendererError(
                url,
                RuntimeError(
                    "Playwright is not installed. "
                    "Install 'playwright' and run 'python -m playwright install chromium'."
                ),
            ) from e
        return sync_playwright, Error

    @contextmanager
    def render(self, url: str) -> Iterator[RenderResult]:
        sync_playwright, PlaywrightError = self._import_playwright(url)

        with sync_playwright() as p:
            try:
                browser = p.chromium.launch(headless=True)
            except PlaywrightError as e:
                raise RendererError(url, e) from e
            try:
                context = browser.new_context(user_agent=self._user_agent)
                page = context.new_page()
                # Some sites load content quickly but keep fetching CSS and
                # assets, so wait for network idle by default.
                try:
                    page.goto(url, wait_until=self._options.wait_until, timeout=self._options.timeout_ms)
                except PlaywrightError as e:
                    logger.warning("Error navigating to %s: %s", url, e)
                    yield RenderResult(ok=False, links=[], url=url)
                    return

                logger.debug("Page loaded, checking for cookie dialog on %s", url)
                if dismiss_cookie_dialog(page, self._options.cookie_click_wait_ms):
                    logger.debug("Handled cookie dialog for %s", url)
                else:
                    logger.debug("No cookie dialog found or couldn't handle it for %s", url)

                try:
                    html = page.content()
                    title = page.title()
                except PlaywrightError as e:
                    logger.warning("Error reading %s after load: %s", url, e)
                    yield RenderResult(ok=False, links=[], url=url)
                    return

                links = self._href_extractor.extract_hrefs(html)
                logger.debug("Found %d total links on %s", len(links), url)
                yield RenderResult(ok=True, links=links, title=title, page=page, url=page.url or url)
            finally:
                try:
                    browser.close()
                except Exception:
                    pass

    def capture(self, page, output_path: str, options: CaptureOptions) -> bool:
        try:
            from playwright.sync_api import Error as PlaywrightError  # type: ignore
        except Exception as e:
            raise RendererError(str(output_path), e) from e

        try:
            page.emulate_media(media=options.media, color_scheme=options.color_scheme)
            page.pdf(
                path=str(output_path),
                display_header_footer=options.with_header,
                header_template=HEADER_TEMPLATE,
                footer_template=FOOTER_TEMPLATE,
            )
        except PlaywrightError as e:
            logger.error("Error saving PDF %s: %s", output_path, e)
            return False
        return True
