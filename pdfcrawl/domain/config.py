from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

MEDIA_TYPES = ("screen", "print")
COLOR_SCHEMES = ("light", "dark", "no-preference")


@dataclass(frozen=True)
class CaptureOptions:
    """How a rendered page is turned into a PDF artifact."""

    media: str = "print"
    color_scheme: str = "light"
    with_header: bool = False

    def __post_init__(self):
        if self.media not in MEDIA_TYPES:
            raise ValueError(f"media must be one of {MEDIA_TYPES}, got {self.media!r}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(f"color_scheme must be one of {COLOR_SCHEMES}, got {self.color_scheme!r}")


@dataclass(frozen=True)
class CrawlConfig:
    """Settings for a single crawl run. Immutable for the lifetime of the run."""

    root_url: str
    exclude: tuple[str, ...] = ()
    dry_run: bool = False
    skip_existing: bool = False
    concurrency: int = 5
    verbose: bool = False
    output_dir: str = "./output"
    capture: CaptureOptions = field(default_factory=CaptureOptions)
    config_path: Optional[str] = None

    def __post_init__(self):
        if self.concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        # accept any iterable of substrings but store a tuple
        object.__setattr__(self, "exclude", tuple(s for s in self.exclude if s))

    def __repr__(self):
        return f"<CrawlConfig root={self.root_url} concurrency={self.concurrency} dry_run={self.dry_run}>"
