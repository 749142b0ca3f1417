"""Assemble the final audit report."""

from copy import deepcopy
from dataclasses import replace
from typing import Any, Optional

from .models import (
    AuditReport,
    ContactInfo,
    ContentMetrics,
    FetchResult,
    Finding,
    LinkRecord,
    PageMeta,
    StructuralSignals,
)


def _yes_no(value: Any) -> str:
    return "yes" if value else "no"


def build_summary(meta: PageMeta, metrics: ContentMetrics) -> str:
    """One-line, pipe-delimited overview of the page."""
    readability = (
        f"{metrics.flesch_reading_ease:.1f}"
        if metrics.flesch_reading_ease is not None
        else "N/A"
    )
    return " | ".join([
        f"Title: {_yes_no(meta.title)}",
        f"Meta description: {_yes_no(meta.meta_description)}",
        f"H1: {len(meta.h1)}",
        f"H2: {len(meta.h2)}",
        f"Words: {metrics.words}",
        f"Readability: {readability}",
    ])


def build_report(
    fetch: FetchResult,
    signals: StructuralSignals,
    metrics: ContentMetrics,
    meta: PageMeta,
    contact: ContactInfo,
    links: list[LinkRecord],
    findings: list[Finding],
    pagespeed: Optional[dict[str, Any]] = None,
    broken_sample_size: int = 20,
    missing_alt_sample_size: int = 30,
) -> AuditReport:
    """Build the report from copies, so later changes to the pipeline's
    records, metadata or contacts never show through."""
    return AuditReport(
        fetch=fetch,
        signals=signals,
        metrics=metrics,
        meta=deepcopy(meta),
        contact=deepcopy(contact),
        links=[replace(link) for link in links],
        findings=list(findings),
        summary=build_summary(meta, metrics),
        pagespeed=deepcopy(pagespeed),
        broken_sample_size=broken_sample_size,
        missing_alt_sample_size=missing_alt_sample_size,
    )
