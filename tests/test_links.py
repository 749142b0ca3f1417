"""Tests for link extraction and normalization."""

from __future__ import annotations

import pytest

from page_audit.checks.links import extract_links, normalize_link
from page_audit.document import parse
from page_audit.models import LinkState


_BASE = "https://Example.com/blog/post"


class TestNormalizeLink:
    @pytest.mark.parametrize(
        "href, expected",
        [
            ("/about", "https://example.com/about"),
            ("../contact", "https://example.com/contact"),
            ("next", "https://example.com/blog/next"),
            ("https://Other.ORG/Path?q=1#frag", "https://other.org/Path?q=1"),
            ("//cdn.example.net/x", "https://cdn.example.net/x"),
            ("https://example.com", "https://example.com/"),
            ("  /padded  ", "https://example.com/padded"),
        ],
    )
    def test_resolves_against_base(self, href: str, expected: str) -> None:
        assert normalize_link(href, _BASE) == expected

    @pytest.mark.parametrize(
        "href",
        [
            "mailto:hi@example.com",
            "tel:+15551234567",
            "javascript:void(0)",
            "http://[::1",
            "http://example.com:notaport/",
        ],
    )
    def test_drops_unusable_references(self, href: str) -> None:
        assert normalize_link(href, _BASE) is None

    @pytest.mark.parametrize(
        "href",
        ["HTTPS://Example.COM/a#frag", "/b?x=1", "https://example.com", "page"],
    )
    def test_idempotent(self, href: str) -> None:
        once = normalize_link(href, _BASE)
        assert once is not None
        assert normalize_link(once, _BASE) == once
        assert normalize_link(once, "https://unrelated.test/") == once


class TestExtractLinks:
    def test_dedupes_preserving_first_seen_order(self) -> None:
        doc = parse(
            '<a href="/b">B</a>'
            '<a href="a">A</a>'
            '<a href="https://example.com/a#section">A again</a>'
            '<a href="/a">A third time</a>'
            '<a href="mailto:x@example.com">mail</a>'
        )
        records = extract_links(doc, "https://example.com/")
        assert [r.url for r in records] == ["https://example.com/b", "https://example.com/a"]

    def test_records_start_unchecked(self) -> None:
        records = extract_links(parse('<a href="/x">x</a>'), "https://example.com/")
        assert records[0].state == LinkState.UNCHECKED
        assert records[0].status_code is None
        assert records[0].error is None

    def test_relative_links_use_final_url(self) -> None:
        records = extract_links(parse('<a href="docs">d</a>'), "https://www.example.com/en/")
        assert records[0].url == "https://www.example.com/en/docs"

    def test_no_links(self) -> None:
        assert extract_links(parse("<p>nothing</p>"), "https://example.com/") == []
