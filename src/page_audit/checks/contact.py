"""Best-effort extraction of email addresses and phone numbers.

These are plain regular expressions, not parsers. Expect both kinds of
error:

- phones: long digit groups such as dates, version strings or order numbers
  can match, and formats with unusual separators or extensions are missed
- emails: obfuscated addresses ("name [at] example.com") are missed, and
  asset names like "logo@2x.png" match
"""

import re
from urllib.parse import unquote

from ..document import ParsedDocument
from ..models import ContactInfo


MAX_CONTACTS = 20

EMAIL_PATTERN = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}")
PHONE_PATTERN = re.compile(r"\+?\(?\d{1,4}\)?(?:[\s.-]?\(?\d{2,4}\)?){2,4}")

MIN_PHONE_DIGITS = 7


def _dedupe(values: list[str], limit: int = MAX_CONTACTS) -> list[str]:
    seen: set[str] = set()
    out: list[str] = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            out.append(value)
        if len(out) >= limit:
            break
    return out


def extract_emails(doc: ParsedDocument) -> list[str]:
    found = []
    for href in doc.anchors():
        if href.lower().startswith("mailto:"):
            address = unquote(href[7:].split("?", 1)[0]).strip()
            if EMAIL_PATTERN.fullmatch(address):
                found.append(address)
    found.extend(EMAIL_PATTERN.findall(doc.text))
    return _dedupe(found)


def extract_phones(doc: ParsedDocument) -> list[str]:
    found = []
    for href in doc.anchors():
        if href.lower().startswith("tel:"):
            found.append(unquote(href[4:]).strip())
    for match in PHONE_PATTERN.findall(doc.text):
        match = match.strip()
        if sum(c.isdigit() for c in match) >= MIN_PHONE_DIGITS:
            found.append(match)
    return _dedupe([p for p in found if p])


def extract_contacts(doc: ParsedDocument) -> ContactInfo:
    return ContactInfo(emails=extract_emails(doc), phones=extract_phones(doc))
