"""Extract and normalize outbound links."""

from urllib.parse import urljoin, urlparse

from ..document import ParsedDocument
from ..models import LinkRecord


def normalize_link(href: str, base_url: str) -> str | None:
    """Resolve *href* against *base_url* into a canonical absolute URL.

    - relative references are resolved with urljoin
    - scheme and host are lowercased, the fragment is dropped
    - an empty path becomes "/"

    Returns None for non-http(s) or malformed references. Normalizing an
    already normalized URL returns it unchanged.
    """
    try:
        parsed = urlparse(urljoin(base_url, href.strip()))
        parsed.port  # raises ValueError for a bad port
    except ValueError:
        return None

    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        return None

    return parsed._replace(
        scheme=parsed.scheme.lower(),
        netloc=parsed.netloc.lower(),
        path=parsed.path or "/",
        fragment="",
    ).geturl()


def extract_links(doc: ParsedDocument, base_url: str) -> list[LinkRecord]:
    """Collect unique links in first-seen document order, all unchecked."""
    seen: set[str] = set()
    records: list[LinkRecord] = []

    for href in doc.anchors():
        url = normalize_link(href, base_url)
        if url is None or url in seen:
            continue
        seen.add(url)
        records.append(LinkRecord(url=url))

    return records
