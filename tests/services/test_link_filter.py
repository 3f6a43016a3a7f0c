import pytest

from pdfcrawl.exceptions import InvalidRootUrlError
from pdfcrawl.services.link_filter import (
    RejectReason,
    canonicalize,
    canonicalize_all,
    origin_of,
    validate_root_url,
)

ROOT = "https://site.example/"
DOCS_ROOT = "https://site.example/docs/"


def test_relative_href_resolves_against_page_directory():
    decision = canonicalize("b", DOCS_ROOT, "https://site.example/docs/a/")
    assert decision.accepted
    assert decision.url == "https://site.example/docs/a/b"


def test_relative_href_ignores_page_file_name():
    decision = canonicalize("c.html", DOCS_ROOT, "https://site.example/docs/a/index.html")
    assert decision.url == "https://site.example/docs/a/c.html"


def test_parent_relative_href():
    decision = canonicalize("../b", DOCS_ROOT, "https://site.example/docs/a/")
    assert decision.url == "https://site.example/docs/b"


def test_root_relative_href_strips_fragment():
    decision = canonicalize("/x#section2", ROOT, ROOT)
    assert decision.url == "https://site.example/x"


def test_root_relative_href_resolves_against_origin_not_root_path():
    decision = canonicalize("/other/page", DOCS_ROOT, "https://site.example/docs/a/")
    assert decision.url == "https://site.example/other/page"


def test_absolute_same_origin_href_is_kept():
    decision = canonicalize("  https://site.example/docs/guide?lang=en  ", DOCS_ROOT, DOCS_ROOT)
    assert decision.url == "https://site.example/docs/guide?lang=en"


def test_scheme_and_host_are_lowercased():
    decision = canonicalize("HTTPS://Site.Example/Docs/Guide", ROOT, ROOT)
    assert decision.url == "https://site.example/Docs/Guide"


@pytest.mark.parametrize("exclude", [(), ("other",), ("nothing-matches",)])
def test_cross_origin_rejected_regardless_of_exclusions(exclude):
    decision = canonicalize("https://other.example/y", ROOT, ROOT, exclude)
    assert not decision.accepted
    assert decision.reason is RejectReason.CROSS_ORIGIN


@pytest.mark.parametrize("href", [
    "http://site.example/x",          # scheme differs
    "https://site.example:8443/x",    # port differs
    "https://sub.site.example/x",     # subdomain is another origin
    "//cdn.example/lib",              # protocol-relative
])
def test_other_origins_rejected(href):
    assert canonicalize(href, ROOT, ROOT).reason is RejectReason.CROSS_ORIGIN


def test_explicit_default_port_is_same_origin():
    decision = canonicalize("https://site.example:443/x", ROOT, ROOT)
    assert decision.accepted
    assert decision.url == "https://site.example/x"
    assert decision.url == canonicalize("/x", ROOT, ROOT).url


def test_non_default_port_is_kept():
    root = "http://site.example:8080/"
    assert canonicalize("/x", root, root).url == "http://site.example:8080/x"
    assert canonicalize("http://SITE.example:8080/x", root, root).url == "http://site.example:8080/x"


def test_empty_path_becomes_slash():
    decision = canonicalize("https://site.example?q=1", ROOT, ROOT)
    assert decision.url == "https://site.example/?q=1"
    assert decision.url == canonicalize("/?q=1", ROOT, ROOT).url


def test_root_with_default_port_matches_plain_origin():
    root = "https://site.example:443/docs/"
    assert canonicalize("https://site.example/docs/", root, root).reason is RejectReason.SELF_REFERENCE
    assert canonicalize("a", root, root).url == "https://site.example/docs/a"


@pytest.mark.parametrize("href", ["logo.png", "/img/Photo.PNG", "/img/a.png?v=2", "style.css", "app.js", "/manual.pdf", "dump.zip"])
def test_ignored_extensions_rejected(href):
    assert canonicalize(href, ROOT, ROOT).reason is RejectReason.IGNORED_EXTENSION


def test_html_extension_is_kept():
    assert canonicalize("/guide.html", ROOT, ROOT).accepted


@pytest.mark.parametrize("href", ["", "   ", "#top", "mailto:someone@example.com", None])
def test_invalid_formats_rejected(href):
    decision = canonicalize(href, ROOT, ROOT)
    assert not decision.accepted


def test_fragment_only_reason():
    assert canonicalize("#top", ROOT, ROOT).reason is RejectReason.INVALID_FORMAT


@pytest.mark.parametrize("href", ["/", "https://site.example", "https://site.example/", "/docs/"])
def test_self_references_rejected(href):
    assert canonicalize(href, DOCS_ROOT, DOCS_ROOT).reason is RejectReason.SELF_REFERENCE


def test_index_equivalent_of_root_is_not_treated_as_self_reference():
    assert canonicalize("/docs/index.html", DOCS_ROOT, DOCS_ROOT).url == "https://site.example/docs/index.html"


def test_exclusion_substrings():
    decision = canonicalize("/blog/post-1", ROOT, ROOT, exclude=("/blog/",))
    assert decision.reason is RejectReason.EXCLUDED
    assert canonicalize("/docs/post-1", ROOT, ROOT, exclude=("/blog/",)).accepted


def test_malformed_href_is_rejected_not_raised():
    decision = canonicalize("http://[::1", ROOT, ROOT)
    assert decision.reason is RejectReason.MALFORMED


def test_javascript_href_rejected():
    assert not canonicalize("javascript:void(0)", ROOT, ROOT).accepted


@pytest.mark.parametrize("href,page", [
    ("b", "https://site.example/docs/a/"),
    ("/x#section2", ROOT),
    ("HTTPS://SITE.EXAMPLE/Path?q=1", ROOT),
    ("../b", "https://site.example/docs/a/"),
])
def test_canonicalization_is_idempotent(href, page):
    first = canonicalize(href, ROOT, page).url
    assert first is not None
    assert canonicalize(first, ROOT, "https://site.example/somewhere/else").url == first


def test_canonicalize_all_dedupes_and_keeps_order():
    hrefs = ["/b", "/a", "/b#frag", "https://other.example/", "/a", "logo.png", "/c"]
    assert canonicalize_all(hrefs, ROOT, ROOT) == [
        "https://site.example/b",
        "https://site.example/a",
        "https://site.example/c",
    ]


def test_canonicalize_all_drops_bad_links_but_keeps_the_rest():
    hrefs = ["http://[::1", "/ok"]
    assert canonicalize_all(hrefs, ROOT, ROOT) == ["https://site.example/ok"]


def test_origin_of_fills_default_ports():
    assert origin_of("https://Site.Example/x") == ("https", "site.example", 443)
    assert origin_of("http://site.example:8080/") == ("http", "site.example", 8080)


def test_validate_root_url_normalizes():
    assert validate_root_url(" HTTPS://Site.Example ") == "https://site.example/"
    assert validate_root_url("https://site.example/docs/#intro") == "https://site.example/docs/"
    assert validate_root_url("https://site.example:443") == "https://site.example/"


@pytest.mark.parametrize("url", ["", "site.example", "ftp://site.example/", "https://", "http://[::1"])
def test_validate_root_url_rejects(url):
    with pytest.raises(InvalidRootUrlError):
        validate_root_url(url)
