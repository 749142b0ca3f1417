"""Data models for page audit results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Severity(Enum):
    """Severity level for audit findings."""
    INFO = "info"
    WARNING = "warning"


class FailureReason(Enum):
    """Why a fetch did not produce a page."""
    NONE = "none"
    TIMEOUT = "timeout"
    NETWORK = "network"


class LinkState(Enum):
    """Lifecycle of a single link check."""
    UNCHECKED = "unchecked"
    CHECKING = "checking"
    HEALTHY = "healthy"
    BROKEN = "broken"
    ERRORED = "errored"

    @property
    def is_terminal(self) -> bool:
        return self in (LinkState.HEALTHY, LinkState.BROKEN, LinkState.ERRORED)


@dataclass(frozen=True)
class FetchResult:
    """Outcome of retrieving one URL."""
    url: str
    final_url: str
    body: str = ""
    ok: bool = False
    reason: FailureReason = FailureReason.NONE
    error: Optional[str] = None
    status_code: Optional[int] = None
    elapsed_ms: int = 0


@dataclass(frozen=True)
class StructuralSignals:
    """Heuristic design signals detected on a page."""
    header: bool
    footer: bool
    banner: bool
    logo: bool
    nav_menu: bool
    cta_found: bool


@dataclass(frozen=True)
class ContentMetrics:
    """Readability metrics for the visible text of a page."""
    words: int
    sentences: int
    syllables: int  # first 1000 words only
    flesch_reading_ease: Optional[float]


@dataclass
class LinkRecord:
    """A single outbound link and its health."""
    url: str
    state: LinkState = LinkState.UNCHECKED
    status_code: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.state == LinkState.HEALTHY

    @property
    def is_broken(self) -> bool:
        return self.state in (LinkState.BROKEN, LinkState.ERRORED)

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "status": self.status_code,
            "ok": self.ok,
            "error": self.error,
        }


@dataclass
class PageMeta:
    """Title, description, headings and image alt coverage."""
    title: str = ""
    meta_description: str = ""
    h1: list[str] = field(default_factory=list)
    h2: list[str] = field(default_factory=list)
    images_total: int = 0
    images_missing_alt: list[str] = field(default_factory=list)


@dataclass
class ContactInfo:
    """Contact details found on the page (best-effort)."""
    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Finding:
    """A single audit finding.

    WARNING findings are reported as issues. Every finding with a fix_hint
    contributes a suggestion.
    """
    check: str
    message: str
    severity: Severity
    fix_hint: Optional[str] = None


@dataclass(frozen=True)
class AuditReport:
    """Complete audit result for a URL."""
    fetch: FetchResult
    signals: StructuralSignals
    metrics: ContentMetrics
    meta: PageMeta
    contact: ContactInfo
    links: list[LinkRecord]
    findings: list[Finding]
    summary: str
    pagespeed: Optional[dict[str, Any]] = None
    broken_sample_size: int = 20
    missing_alt_sample_size: int = 30

    @property
    def issues(self) -> list[str]:
        return [f.message for f in self.findings if f.severity == Severity.WARNING]

    @property
    def suggestions(self) -> list[str]:
        return [f.fix_hint for f in self.findings if f.fix_hint]

    @property
    def links_total_found(self) -> int:
        return len(self.links)

    @property
    def links_checked(self) -> int:
        return sum(1 for link in self.links if link.state.is_terminal)

    @property
    def broken_links(self) -> list[LinkRecord]:
        return [link for link in self.links if link.is_broken]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON response shape."""
        return {
            "url": self.fetch.url,
            "finalUrl": self.fetch.final_url,
            "status": "success",
            "httpStatus": self.fetch.status_code,
            "fetchTimeMs": self.fetch.elapsed_ms,
            "meta": {
                "title": self.meta.title,
                "metaDescription": self.meta.meta_description,
            },
            "headings": {
                "h1": list(self.meta.h1),
                "h2": list(self.meta.h2),
            },
            "design": {
                "header": self.signals.header,
                "footer": self.signals.footer,
                "banner": self.signals.banner,
                "logo": self.signals.logo,
                "navMenu": self.signals.nav_menu,
                "ctaFound": self.signals.cta_found,
            },
            "contact": {
                "emails": list(self.contact.emails),
                "phones": list(self.contact.phones),
            },
            "images": {
                "total": self.meta.images_total,
                "missingAlt": self.meta.images_missing_alt[:self.missing_alt_sample_size],
            },
            "links": {
                "totalFound": self.links_total_found,
                "checked": self.links_checked,
                "brokenSample": [
                    link.to_dict()
                    for link in self.broken_links[:self.broken_sample_size]
                ],
            },
            "content": {
                "words": self.metrics.words,
                "sentences": self.metrics.sentences,
                "syllables": self.metrics.syllables,
                "fleschReadingEase": self.metrics.flesch_reading_ease,
            },
            "pageSpeed": self.pagespeed,
            "issues": self.issues,
            "suggestions": self.suggestions,
            "summary": self.summary,
        }
