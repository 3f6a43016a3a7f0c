from typing import Any, List, NamedTuple, Optional


class RenderResult(NamedTuple):
    """Outcome of rendering one URL.

    `url` is where the page ended up (after redirects); links found on the
    page resolve relative to it. `page` is the renderer's handle, only valid
    while the render context is open.
    """
    ok: bool
    links: List[str]
    title: str = ""
    page: Optional[Any] = None
    url: str = ""
