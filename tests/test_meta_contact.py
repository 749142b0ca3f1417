"""Tests for metadata and contact extraction."""

from __future__ import annotations

from page_audit.checks.contact import MAX_CONTACTS, extract_contacts
from page_audit.checks.meta import extract_meta
from page_audit.document import parse


class TestExtractMeta:
    def test_title_description_headings(self) -> None:
        doc = parse(
            "<html><head><title> Acme  </title>"
            '<meta name="description" content=" Pipes and more. "></head>'
            "<body><h1>Main <em>topic</em></h1><h2>One</h2><h2>Two</h2></body></html>"
        )
        meta = extract_meta(doc)
        assert meta.title == "Acme"
        assert meta.meta_description == "Pipes and more."
        assert meta.h1 == ["Main topic"]
        assert meta.h2 == ["One", "Two"]

    def test_missing_everything(self) -> None:
        meta = extract_meta(parse("<p>hi</p>"))
        assert meta.title == ""
        assert meta.meta_description == ""
        assert meta.h1 == [] and meta.h2 == []
        assert meta.images_total == 0

    def test_images_missing_alt(self) -> None:
        doc = parse(
            '<img src="a.png" alt="A cat">'
            '<img src="b.png">'
            '<img src="c.png" alt="  ">'
            "<img>"
        )
        meta = extract_meta(doc)
        assert meta.images_total == 4
        assert meta.images_missing_alt == ["b.png", "c.png", "(no src)"]


class TestExtractContacts:
    def test_emails_from_text_and_mailto(self) -> None:
        doc = parse(
            '<a href="mailto:Sales@Acme.test?subject=Hi">Sales</a>'
            "<p>Write to sales@acme.test or support@acme.test.</p>"
        )
        assert extract_contacts(doc).emails == ["Sales@Acme.test", "support@acme.test"]

    def test_phones_from_text_and_tel(self) -> None:
        doc = parse(
            '<a href="tel:+44%2020%207946%200000">Call</a>'
            "<p>US office: (555) 123-4567. Founded 1999.</p>"
        )
        phones = extract_contacts(doc).phones
        assert phones[0] == "+44 20 7946 0000"
        assert "(555) 123-4567" in phones
        assert not any(p == "1999" for p in phones)

    def test_nothing_found(self) -> None:
        contacts = extract_contacts(parse("<p>No way to reach us.</p>"))
        assert contacts.emails == []
        assert contacts.phones == []

    def test_capped(self) -> None:
        text = " ".join(f"user{i}@example.com" for i in range(MAX_CONTACTS + 5))
        assert len(extract_contacts(parse(f"<p>{text}</p>")).emails) == MAX_CONTACTS
