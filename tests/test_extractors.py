# File: tests/test_extractors.py
import pytest

from webmail_harvester.crawler.email_extractor import extract_emails
from webmail_harvester.crawler.link_extractor import canonicalize, extract_links

BASE = "https://example.com/team/"


@pytest.mark.parametrize(
    "html,expected",
    [
        ("", set()),
        ("<p>no addresses here</p>", set()),
        ("<p>info@example.com</p>", {"info@example.com"}),
        (
            "<p>a.b+c@mail.example.co.uk, a.b+c@mail.example.co.uk</p>",
            {"a.b+c@mail.example.co.uk"},
        ),
        ("Sales@Example.com sales@example.com", {"Sales@Example.com", "sales@example.com"}),
        ('<script>var e = "x_y%z@host-name.org";</script>', {"x_y%z@host-name.org"}),
        ("user@localhost and user@host.c", set()),
    ],
)
def test_extract_emails(html, expected):
    assert extract_emails(html) == expected


def test_extract_emails_from_mailto_href():
    html = '<a href="mailto:x@y.com">Contact x@y.com</a>'
    assert extract_emails(html) == {"x@y.com"}


def test_extract_links_resolves_relative_urls():
    html = '<a href="/contact">Contact Us</a><a href="about">About</a><a href="../info?x=1">Info</a>'
    links = extract_links(html, BASE)
    assert [link.url for link in links] == [
        "https://example.com/contact",
        "https://example.com/team/about",
        "https://example.com/info?x=1",
    ]
    assert links[0].anchor_text == "contact us"


@pytest.mark.parametrize(
    "href",
    ["mailto:x@y.com", "javascript:void(0)", "tel:+100200300", "  mailto:z@y.com  "],
)
def test_extract_links_skips_non_navigable(href):
    html = f'<a href="{href}" class="contact" title="contact">Contact</a>'
    assert extract_links(html, BASE) == []


def test_extract_links_skips_malformed_and_empty_href():
    html = '<a href="http://[::1">Broken</a><a href="">Empty</a><a>No href</a><a href="/ok">OK</a>'
    links = extract_links(html, BASE)
    assert [link.url for link in links] == ["https://example.com/ok"]


def test_extract_links_keeps_foreign_hosts():
    html = '<a href="https://other.org/contact">Elsewhere</a>'
    assert [link.url for link in extract_links(html, BASE)] == ["https://other.org/contact"]


def test_canonicalize_adds_root_path():
    assert canonicalize("https://example.com") == "https://example.com/"
    assert canonicalize("https://example.com?q=1") == "https://example.com/?q=1"
    assert canonicalize("https://example.com/a") == "https://example.com/a"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("HTTP://Example.COM", "http://example.com/"),
        ("http://example.com:80/Contact", "http://example.com/Contact"),
        ("https://EXAMPLE.com:443/a?B=1#Top", "https://example.com/a?B=1#Top"),
        ("http://example.com:443/", "http://example.com:443/"),
        ("http://127.0.0.1:8080/a", "http://127.0.0.1:8080/a"),
        ("https://user@Example.com/", "https://user@example.com/"),
        ("http://[::1]:80/a", "http://[::1]/a"),
        ("/relative/path", "/relative/path"),
    ],
)
def test_canonicalize_scheme_host_and_port(url, expected):
    assert canonicalize(url) == expected


def test_extract_links_equivalent_spellings_share_one_url():
    html = '<a href="/a">A</a><a href="HTTPS://Example.COM:443/a">Same A</a>'
    urls = {link.url for link in extract_links(html, "https://example.com/")}
    assert urls == {"https://example.com/a"}
