"""Deterministic artifact file names derived from page title and URL."""
import re
from pathlib import Path

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9_]")
_REPEAT_RE = re.compile(r"_{2,}")


def _safe(text: str) -> str:
    return _REPEAT_RE.sub("_", _UNSAFE_RE.sub("_", text or ""))


def _url_suffix(url: str) -> str:
    # everything after "scheme://host/"
    parts = url.split("/", 3)
    return parts[3] if len(parts) == 4 else ""


def artifact_filename(title: str, url: str) -> str:
    return f"{_safe(title)}_{_safe(_url_suffix(url))}.pdf"


def artifact_path(output_dir, title: str, url: str) -> Path:
    return Path(output_dir) / artifact_filename(title, url)
