"""Per-page checks run against a parsed document."""

from .structure import detect_structure
from .content import analyze_content
from .links import extract_links, normalize_link
from .meta import extract_meta
from .contact import extract_contacts

__all__ = [
    "detect_structure",
    "analyze_content",
    "extract_links",
    "normalize_link",
    "extract_meta",
    "extract_contacts",
]
