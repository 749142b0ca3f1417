"""Detect structural design signals on a page."""

import re

from ..document import MatchKind, ParsedDocument
from ..models import StructuralSignals


HEADER_MARKUP_WINDOW = 4000
FOOTER_TEXT_WINDOW = 1000

_NAV_TAG = re.compile(r"<nav\b", re.IGNORECASE)
_COPYRIGHT = re.compile(r"©|&copy;|copyright", re.IGNORECASE)

BANNER_TOKENS = ("hero", "banner", "slider")
CTA_TOKENS = ("call", "quote", "contact")
LOGO_ATTRIBUTES = (MatchKind.ALT, MatchKind.ID, MatchKind.CLASS, MatchKind.ARIA_LABEL)


def has_header(doc: ParsedDocument) -> bool:
    return (
        doc.has_tag("header")
        or doc.has_class_or_id("header")
        or bool(_NAV_TAG.search(doc.markup_prefix(HEADER_MARKUP_WINDOW)))
    )


def has_footer(doc: ParsedDocument) -> bool:
    return (
        doc.has_tag("footer")
        or doc.has_class_or_id("footer")
        or bool(_COPYRIGHT.search(doc.trailing_text(FOOTER_TEXT_WINDOW)))
    )


def has_banner(doc: ParsedDocument) -> bool:
    return (
        any(doc.has_class_or_id(token) for token in BANNER_TOKENS)
        or doc.first_section_has_image()
    )


def has_logo(doc: ParsedDocument) -> bool:
    return any(
        doc.has_any_matching(kind, "logo", tags=("img", "svg"))
        for kind in LOGO_ATTRIBUTES
    )


def has_nav_menu(doc: ParsedDocument) -> bool:
    return (
        doc.has_tag("nav")
        or doc.has_class_or_id("nav")
        or doc.has_list_with_items(3)
    )


def has_cta(doc: ParsedDocument) -> bool:
    return (
        doc.any_text_contains(("a", "button"), CTA_TOKENS)
        or doc.has_class_or_id("cta")
    )


def detect_structure(doc: ParsedDocument) -> StructuralSignals:
    """Infer design signals from the parsed page.

    Every signal is an OR of independent heuristics, so one miss never
    hides another hit. They lean towards false positives: a false negative
    turns into a misleading "not detected" issue.
    """
    return StructuralSignals(
        header=has_header(doc),
        footer=has_footer(doc),
        banner=has_banner(doc),
        logo=has_logo(doc),
        nav_menu=has_nav_menu(doc),
        cta_found=has_cta(doc),
    )
