import pytest

from pdfcrawl.exceptions import ConfigNotFoundError
from pdfcrawl.services.crawl_config_parser import CrawlConfigParser, load_config_file


def test_parse_file_values():
    data = {
        "root_url": "https://site.example/docs/",
        "concurrency": 4,
        "exclude": ["/blog/", "?print"],
        "skip_existing": True,
        "output_dir": "pdfs",
        "capture": {"media": "screen", "color_scheme": "dark", "with_header": True},
    }
    cfg = CrawlConfigParser().parse(data, config_path="/etc/pdfcrawl/docs.yml")

    assert cfg.root_url == "https://site.example/docs/"
    assert cfg.concurrency == 4
    assert cfg.exclude == ("/blog/", "?print")
    assert cfg.skip_existing
    assert not cfg.dry_run
    assert cfg.output_dir == "pdfs"
    assert cfg.capture.media == "screen"
    assert cfg.capture.color_scheme == "dark"
    assert cfg.capture.with_header
    assert cfg.config_path == "docs.yml"


def test_overrides_win_over_file_and_none_is_ignored():
    data = {"root_url": "https://a.example/", "concurrency": 4, "capture": {"media": "screen"}}
    cfg = CrawlConfigParser().parse(data, root_url="https://b.example/", concurrency=None, media="print")

    assert cfg.root_url == "https://b.example/"
    assert cfg.concurrency == 4
    assert cfg.capture.media == "print"


def test_exclusions_are_combined():
    cfg = CrawlConfigParser().parse({"root_url": "https://a.example/", "exclude": "/blog/"}, exclude=("/tag/", "/blog/"))
    assert cfg.exclude == ("/blog/", "/tag/")


@pytest.mark.parametrize("value", [5, {"a": 1}, True])
def test_exclude_of_wrong_type_rejected(value):
    with pytest.raises(ValueError, match="exclude must be a string or a list"):
        CrawlConfigParser().parse({"root_url": "https://a.example/", "exclude": value})


def test_defaults_come_from_parser():
    parser = CrawlConfigParser(default_concurrency=7, default_output_dir="out", default_media="screen", default_color_scheme="dark")
    cfg = parser.parse(root_url="https://a.example/")

    assert cfg.concurrency == 7
    assert cfg.output_dir == "out"
    assert cfg.capture.media == "screen"
    assert cfg.capture.color_scheme == "dark"


def test_root_url_required():
    with pytest.raises(ValueError, match="root_url"):
        CrawlConfigParser().parse({})


def test_bad_capture_values_rejected():
    with pytest.raises(ValueError):
        CrawlConfigParser().parse({"root_url": "https://a.example/", "capture": {"media": "tv"}})


def test_load_config_file(tmp_path):
    path = tmp_path / "site.yml"
    path.write_text("root_url: https://site.example/\nconcurrency: 2\nexclude:\n  - /blog/\n", encoding="utf-8")

    assert load_config_file(str(path)) == {"root_url": "https://site.example/", "concurrency": 2, "exclude": ["/blog/"]}


def test_load_empty_config_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config_file(str(path)) == {}


def test_load_missing_config_file(tmp_path):
    with pytest.raises(ConfigNotFoundError):
        load_config_file(str(tmp_path / "missing.yml"))


@pytest.mark.parametrize("text", ["root_url: [unclosed", "- just\n- a list\n"])
def test_load_invalid_config_file(tmp_path, text):
    path = tmp_path / "bad.yml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config_file(str(path))
