"""Parsed HTML document with a small query interface for the checks."""

import re
from enum import Enum
from typing import Iterable

from bs4 import BeautifulSoup, Tag


# Elements whose contents are never visible text
INVISIBLE_TAGS = ["script", "style", "noscript", "template"]

_WHITESPACE = re.compile(r"\s+")


class MatchKind(Enum):
    """Attribute inspected by a substring query."""
    CLASS = "class"
    ID = "id"
    ALT = "alt"
    ARIA_LABEL = "aria-label"


class ParsedDocument:
    """Queryable view of one fetched page.

    Parsing is lenient: lxml repairs malformed markup into a best-effort
    tree instead of raising.
    """

    def __init__(self, raw: str):
        self.raw = raw or ""
        self.soup = BeautifulSoup(self.raw, "lxml")
        for tag in self.soup.find_all(INVISIBLE_TAGS):
            tag.decompose()
        root = self.soup.body or self.soup
        self.text = _WHITESPACE.sub(" ", root.get_text(" ")).strip()

    # Raw slices

    def trailing_text(self, length: int) -> str:
        """Last *length* characters of visible text."""
        return self.text[-length:] if length > 0 else ""

    def markup_prefix(self, length: int) -> str:
        """First *length* characters of raw markup."""
        return self.raw[:length]

    # Element queries

    def has_tag(self, *names: str) -> bool:
        return self.soup.find(list(names)) is not None

    def has_any_matching(
        self,
        kind: MatchKind,
        token: str,
        tags: Iterable[str] | None = None,
    ) -> bool:
        """True if any element (optionally limited to *tags*) has a *kind*
        attribute containing *token*, case-insensitively."""
        token = token.lower()
        name_filter = list(tags) if tags else True
        for element in self.soup.find_all(name_filter):
            value = element.get(kind.value)
            if value is None:
                continue
            if isinstance(value, list):  # class is multi-valued
                value = " ".join(value)
            if token in value.lower():
                return True
        return False

    def has_class_or_id(self, token: str) -> bool:
        return (
            self.has_any_matching(MatchKind.CLASS, token)
            or self.has_any_matching(MatchKind.ID, token)
        )

    def any_text_contains(self, tags: Iterable[str], tokens: Iterable[str]) -> bool:
        """True if the visible text of any of *tags* contains one of *tokens*."""
        tokens = [t.lower() for t in tokens]
        for element in self.soup.find_all(list(tags)):
            text = element.get_text(" ", strip=True).lower()
            if any(t in text for t in tokens):
                return True
        return False

    def has_list_with_items(self, minimum: int) -> bool:
        for lst in self.soup.find_all(["ul", "ol"]):
            if len(lst.find_all("li", recursive=False)) >= minimum:
                return True
        return False

    def first_section_has_image(self) -> bool:
        section = self.soup.find("section")
        return isinstance(section, Tag) and section.find(["img", "picture"]) is not None

    def anchors(self) -> list[str]:
        """href values of every anchor, in document order."""
        return [a["href"] for a in self.soup.find_all("a", href=True)]


def parse(raw: str) -> ParsedDocument:
    """Parse raw markup into a ParsedDocument."""
    return ParsedDocument(raw)
