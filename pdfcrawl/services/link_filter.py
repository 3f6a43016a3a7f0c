"""Turn raw hrefs found on a page into canonical, same-origin crawl candidates.

Everything in here is pure: no I/O, no shared state, and nothing raises for
a bad href. A reference that cannot be parsed is just another rejection.
"""
import logging
import posixpath
import re
from enum import Enum
from typing import Iterable, List, NamedTuple, Optional, Tuple
from urllib.parse import urljoin, urlsplit, urlunsplit

from pdfcrawl.exceptions import InvalidRootUrlError

logger = logging.getLogger(__name__)

# Non-document resources plus formats that are already rendered documents.
IGNORE_EXTENSIONS = frozenset({
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico",
    ".css", ".js",
    ".xml", ".json", ".txt", ".md",
    ".pdf", ".zip", ".gz", ".tar",
})

_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*:")
_DEFAULT_PORTS = {"http": 80, "https": 443}


class RejectReason(str, Enum):
    INVALID_FORMAT = "invalid url format"
    SELF_REFERENCE = "empty url or self reference"
    IGNORED_EXTENSION = "non-html extension"
    CROSS_ORIGIN = "external url"
    EXCLUDED = "matches exclude substring"
    MALFORMED = "malformed url"


class LinkDecision(NamedTuple):
    """Either an accepted canonical `url` or the `reason` it was rejected."""
    url: Optional[str]
    reason: Optional[RejectReason] = None

    @property
    def accepted(self) -> bool:
        return self.url is not None


def origin_of(url: str) -> Tuple[str, str, Optional[int]]:
    """Return (scheme, host, port) with the scheme's default port filled in.

    Raises ValueError for an unparseable netloc or port.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    port = parts.port
    if port is None:
        port = _DEFAULT_PORTS.get(scheme)
    return scheme, parts.hostname or "", port


def _normalize(url: str) -> str:
    """Lower-case scheme and host, drop a default port and the fragment.

    An empty path becomes "/". Raises ValueError for an invalid port.
    """
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if parts.port is not None and parts.port == _DEFAULT_PORTS.get(scheme):
        netloc = netloc.rsplit(":", 1)[0]
    path = parts.path or ("/" if netloc else "")
    return urlunsplit((scheme, netloc, path, parts.query, ""))


def validate_root_url(url: str) -> str:
    """Return the normalized crawl root or raise InvalidRootUrlError."""
    if url is None or not url.strip():
        raise InvalidRootUrlError(str(url), "empty")
    try:
        parts = urlsplit(url.strip())
        parts.port
    except ValueError as e:
        raise InvalidRootUrlError(url, str(e)) from e
    if parts.scheme.lower() not in _DEFAULT_PORTS:
        raise InvalidRootUrlError(url, "scheme must be http or https")
    if not parts.hostname:
        raise InvalidRootUrlError(url, "missing host")
    return _normalize(url.strip())


def _resolve(ref: str, origin: str, page_url: str) -> Optional[str]:
    if _SCHEME_RE.match(ref):
        return ref
    if ref.startswith("/"):
        return urljoin(origin, ref)
    if ref and not ref.lower().startswith("mailto:"):
        # relative to the directory of the current page, not the page itself
        page_path = urlsplit(page_url).path
        parent = page_path[: page_path.rfind("/") + 1] or "/"
        return urljoin(origin + parent, ref)
    return None


def canonicalize(href: Optional[str], root_url: str, page_url: str, exclude: Iterable[str] = ()) -> LinkDecision:
    """Resolve `href` found on `page_url` into a canonical URL under `root_url`.

    Canonicalizing an already canonical URL returns it unchanged.
    """
    if href is None:
        return LinkDecision(None, RejectReason.INVALID_FORMAT)
    ref = href.strip().split("#", 1)[0].strip()
    try:
        root = urlsplit(_normalize(root_url))
        origin = f"{root.scheme}://{root.netloc}"

        url = _resolve(ref, origin, page_url)
        if url is None:
            return LinkDecision(None, RejectReason.INVALID_FORMAT)

        url = _normalize(url)
        if url in ("", origin, origin + "/", _normalize(root_url)):
            return LinkDecision(None, RejectReason.SELF_REFERENCE)

        extension = posixpath.splitext(urlsplit(url).path)[1].lower()
        if extension in IGNORE_EXTENSIONS:
            return LinkDecision(None, RejectReason.IGNORED_EXTENSION)

        if origin_of(url) != origin_of(root_url):
            return LinkDecision(None, RejectReason.CROSS_ORIGIN)
    except ValueError:
        return LinkDecision(None, RejectReason.MALFORMED)

    if any(substr in url for substr in exclude):
        return LinkDecision(None, RejectReason.EXCLUDED)
    return LinkDecision(url)


def canonicalize_all(hrefs: Iterable[str], root_url: str, page_url: str, exclude: Iterable[str] = ()) -> List[str]:
    """Canonicalize every href from one page, dropping rejects and duplicates.

    First-seen order is kept.
    """
    exclude = tuple(exclude)
    seen = set()
    urls: List[str] = []
    for href in hrefs:
        decision = canonicalize(href, root_url, page_url, exclude)
        if not decision.accepted:
            logger.debug("Skipping (%s) %r on %s", decision.reason.value, href, page_url)
            continue
        if decision.url in seen:
            continue
        seen.add(decision.url)
        urls.append(decision.url)
    logger.debug("Found %d valid internal URLs on %s", len(urls), page_url)
    return urls
