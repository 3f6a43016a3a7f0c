"""Custom exceptions for pdfcrawl."""


class ConfigNotFoundError(Exception):
    """Raised when a requested YAML config file cannot be found."""

    def __init__(self, config_path: str, reason: str = "not found"):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}' {reason}")


class InvalidRootUrlError(ValueError):
    """Raised when the crawl root is not an absolute http(s) URL."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Invalid root URL {url!r}: {reason}")


class RendererError(Exception):
    """Raised when the renderer itself is unusable (not a single page failing).

    This is an infrastructure failure and aborts the crawl.
    """

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(f"Renderer failed for {url}: {original}")


class CrawlAbortedError(Exception):
    """Raised by the scheduler when a unit of work failed unexpectedly."""

    def __init__(self, original: BaseException):
        self.original = original
        super().__init__(f"Crawl aborted: {original}")
