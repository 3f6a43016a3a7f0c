import os
from typing import Any, Optional

import yaml

from pdfcrawl.domain.config import CaptureOptions, CrawlConfig
from pdfcrawl.exceptions import ConfigNotFoundError

_CAPTURE_KEYS = ("media", "color_scheme", "with_header")


def load_config_file(path: str) -> dict:
    """Read a YAML crawl config and return it as a dict (empty file -> {})."""
    if not os.path.isfile(path):
        raise ConfigNotFoundError(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Top level of {path} must be a mapping, got {type(data).__name__}")
    return data


def _as_tuple(value: Any) -> tuple:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, (list, tuple)):
        raise ValueError("exclude must be a string or a list")
    return tuple(str(v) for v in value)


class CrawlConfigParser:
    """Build a CrawlConfig from a YAML dict plus command-line overrides.

    Responsibility: merging and validation only. It does NOT read files.
    Scalar overrides win over file values when they are not None;
    exclusion substrings from both sources are combined.
    """

    def __init__(self, *, default_concurrency: int = 5, default_output_dir: str = "./output", default_media: str = "print", default_color_scheme: str = "light"):
        self.default_concurrency = int(default_concurrency)
        self.default_output_dir = default_output_dir
        self.default_media = default_media
        self.default_color_scheme = default_color_scheme

    def parse(self, data: Optional[dict] = None, *, config_path: Optional[str] = None, **overrides) -> CrawlConfig:
        data = dict(data or {})

        def pick(key: str, default):
            value = overrides.get(key)
            if value is not None:
                return value
            value = data.get(key)
            return default if value is None else value

        capture_data = data.get("capture") or {}
        if not isinstance(capture_data, dict):
            raise ValueError("capture must be a mapping")
        capture_values = {}
        for key in _CAPTURE_KEYS:
            value = overrides.get(key)
            if value is None:
                value = capture_data.get(key)
            if value is not None:
                capture_values[key] = value
        capture_values.setdefault("media", self.default_media)
        capture_values.setdefault("color_scheme", self.default_color_scheme)

        root_url = pick("root_url", None)
        if not root_url:
            raise ValueError("root_url is required")

        exclude = _as_tuple(data.get("exclude")) + _as_tuple(overrides.get("exclude"))

        return CrawlConfig(
            root_url=str(root_url),
            exclude=tuple(dict.fromkeys(exclude)),
            dry_run=bool(pick("dry_run", False)),
            skip_existing=bool(pick("skip_existing", False)),
            concurrency=int(pick("concurrency", self.default_concurrency)),
            verbose=bool(pick("verbose", False)),
            output_dir=str(pick("output_dir", self.default_output_dir)),
            capture=CaptureOptions(
                media=str(capture_values["media"]),
                color_scheme=str(capture_values["color_scheme"]),
                with_header=bool(capture_values.get("with_header", False)),
            ),
            config_path=os.path.basename(config_path) if config_path else None,
        )
