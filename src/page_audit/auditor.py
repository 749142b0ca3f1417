"""Main auditor that runs the whole pipeline."""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import httpx

from .checks import (
    analyze_content,
    detect_structure,
    extract_contacts,
    extract_links,
    extract_meta,
)
from .config import AuditConfig
from .document import parse
from .errors import AuditError, FetchError
from .fetcher import fetch, make_client, validate_url
from .issues import aggregate_findings
from .link_checker import check_links
from .models import AuditReport
from .pagespeed import fetch_pagespeed
from .report import build_report


logger = logging.getLogger(__name__)


def audit_url(
    url: str,
    config: AuditConfig | None = None,
    client: httpx.Client | None = None,
) -> AuditReport:
    """Run a complete audit on a URL.

    Args:
        url: Absolute http(s) URL to audit
        config: Timeouts, link ceiling and optional PageSpeed key
        client: Optional shared HTTP client

    Returns:
        AuditReport with every check result

    Raises:
        InputError: if *url* is not a valid absolute URL (before any request)
        FetchError: if the page itself cannot be fetched
    """
    config = config or AuditConfig()
    url = validate_url(url)

    owns_client = client is None
    if owns_client:
        client = make_client()

    try:
        logger.info("Auditing %s", url)
        result = fetch(url, timeout=config.page_timeout, client=client)
        if not result.ok:
            raise FetchError(f"Failed to fetch {url}", details=result.error)

        doc = parse(result.body)
        signals = detect_structure(doc)
        metrics = analyze_content(doc.text)
        meta = extract_meta(doc)
        contact = extract_contacts(doc)
        links = extract_links(doc, result.final_url)
        logger.info("Found %d unique links on %s", len(links), result.final_url)

        # PageSpeed does not depend on link results, so run it alongside
        with ThreadPoolExecutor(max_workers=1, thread_name_prefix="pagespeed") as executor:
            pagespeed_future = None
            if config.pagespeed_enabled:
                pagespeed_future = executor.submit(
                    fetch_pagespeed,
                    result.final_url,
                    config.pagespeed_api_key,
                    client,
                    config.pagespeed_timeout,
                    config.pagespeed_strategy,
                )
            check_links(
                links,
                client,
                timeout=config.link_timeout,
                ceiling=config.max_links_checked,
            )
            pagespeed = pagespeed_future.result() if pagespeed_future else None

        findings = aggregate_findings(
            signals, metrics, meta, links, min_words=config.min_word_count
        )
        return build_report(
            fetch=result,
            signals=signals,
            metrics=metrics,
            meta=meta,
            contact=contact,
            links=links,
            findings=findings,
            pagespeed=pagespeed,
            broken_sample_size=config.broken_sample_size,
            missing_alt_sample_size=config.missing_alt_sample_size,
        )
    finally:
        if owns_client:
            client.close()


def run_audit(url: str, config: AuditConfig | None = None) -> tuple[int, dict[str, Any]]:
    """Audit *url* and return an HTTP-style status code with the JSON body.

    Input errors map to 400, every other failure to 500.
    """
    try:
        report = audit_url(url, config)
    except AuditError as e:
        logger.warning("Audit of %r failed: %s (%s)", url, e.message, e.details)
        return e.status_code, e.to_dict()
    except Exception as e:
        logger.exception("Unexpected error auditing %r", url)
        return 500, {"status": "error", "message": "Audit failed", "details": str(e)}
    return 200, report.to_dict()
