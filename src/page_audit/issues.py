"""Map detected signals and metrics to issues and suggestions."""

from dataclasses import dataclass
from typing import Callable, Optional

from .models import (
    ContentMetrics,
    Finding,
    LinkRecord,
    PageMeta,
    Severity,
    StructuralSignals,
)


DEFAULT_MIN_WORDS = 150


@dataclass(frozen=True)
class RuleInput:
    """Everything the rules look at."""
    signals: StructuralSignals
    metrics: ContentMetrics
    meta: PageMeta
    links: list[LinkRecord]
    min_words: int = DEFAULT_MIN_WORDS


def _missing_signal(attr: str, check: str, message: str, fix_hint: str) -> Callable[[RuleInput], Optional[Finding]]:
    def rule(data: RuleInput) -> Optional[Finding]:
        if getattr(data.signals, attr):
            return None
        return Finding(check=check, message=message, severity=Severity.WARNING, fix_hint=fix_hint)
    return rule


def _missing_title(data: RuleInput) -> Optional[Finding]:
    if data.meta.title:
        return None
    return Finding(
        check="meta",
        message="Missing page title",
        severity=Severity.WARNING,
        fix_hint="Add a descriptive <title> tag of 50-60 characters.",
    )


def _missing_description(data: RuleInput) -> Optional[Finding]:
    if data.meta.meta_description:
        return None
    return Finding(
        check="meta",
        message="Missing meta description",
        severity=Severity.WARNING,
        fix_hint="Add a 150-160 character meta description summarizing the page.",
    )


def _images_missing_alt(data: RuleInput) -> Optional[Finding]:
    count = len(data.meta.images_missing_alt)
    if count == 0:
        return None
    return Finding(
        check="images",
        message=f"{count} image{'s' if count > 1 else ''} missing alt text",
        severity=Severity.WARNING,
        fix_hint="Add descriptive alt text to every meaningful image.",
    )


def _broken_links(data: RuleInput) -> Optional[Finding]:
    count = sum(1 for link in data.links if link.is_broken)
    if count == 0:
        return None
    return Finding(
        check="links",
        message=f"{count} broken or unreachable link{'s' if count > 1 else ''}",
        severity=Severity.WARNING,
        fix_hint="Fix or remove broken links.",
    )


def _thin_content(data: RuleInput) -> Optional[Finding]:
    if data.metrics.words >= data.min_words:
        return None
    return Finding(
        check="content",
        message=f"Thin content ({data.metrics.words} words)",
        severity=Severity.INFO,
        fix_hint=f"Add more useful content; aim for at least {data.min_words} words.",
    )


# Evaluated in this order; the order is part of the output.
RULES: tuple[Callable[[RuleInput], Optional[Finding]], ...] = (
    _missing_signal(
        "header", "design", "Header not detected",
        "Add a clear site header with your brand and main navigation.",
    ),
    _missing_signal(
        "footer", "design", "Footer not detected",
        "Add a footer with contact details, key links and copyright.",
    ),
    _missing_signal(
        "banner", "design", "Hero/banner section not detected",
        "Add a hero section that states what you offer above the fold.",
    ),
    _missing_signal(
        "logo", "design", "Logo not detected",
        "Show your logo in the header and give it alt text containing \"logo\".",
    ),
    _missing_signal(
        "nav_menu", "design", "Navigation menu not detected",
        "Add a navigation menu linking to your main pages.",
    ),
    _missing_signal(
        "cta_found", "design", "No clear call-to-action found",
        "Add a visible call-to-action such as \"Contact us\" or \"Get a quote\".",
    ),
    _missing_title,
    _missing_description,
    _images_missing_alt,
    _broken_links,
    _thin_content,
)


def aggregate_findings(
    signals: StructuralSignals,
    metrics: ContentMetrics,
    meta: PageMeta,
    links: list[LinkRecord],
    min_words: int = DEFAULT_MIN_WORDS,
) -> list[Finding]:
    """Run every rule in table order and collect the findings."""
    data = RuleInput(signals=signals, metrics=metrics, meta=meta, links=links, min_words=min_words)
    findings = []
    for rule in RULES:
        finding = rule(data)
        if finding is not None:
            findings.append(finding)
    return findings
