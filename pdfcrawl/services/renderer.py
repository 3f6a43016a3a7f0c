from __future__ import annotations

from typing import ContextManager, Protocol

from pdfcrawl.domain.config import CaptureOptions
from pdfcrawl.domain.render_result import RenderResult


class Renderer(Protocol):
    """Open a page, report its links, and capture it.

    This is intentionally small so implementations can be swapped
    (e.g. Playwright-backed vs an in-memory fake in tests).

    `render(url)` yields a RenderResult and releases the page when the
    context exits. A page that cannot be loaded yields `ok=False` with no
    links instead of raising; raising is reserved for the renderer itself
    being unusable (RendererError).
    """

    def render(self, url: str) -> ContextManager[RenderResult]: ...

    def capture(self, page, output_path: str, options: CaptureOptions) -> bool: ...
