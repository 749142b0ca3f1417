"""Optional Google PageSpeed Insights enrichment."""

import logging
from typing import Any

import httpx

from .errors import EnrichmentError


logger = logging.getLogger(__name__)

PAGESPEED_ENDPOINT = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"

# Lighthouse audits surfaced in the report
METRIC_AUDITS = {
    "first-contentful-paint": "firstContentfulPaint",
    "largest-contentful-paint": "largestContentfulPaint",
    "total-blocking-time": "totalBlockingTime",
    "cumulative-layout-shift": "cumulativeLayoutShift",
    "speed-index": "speedIndex",
}


def _query(url: str, api_key: str, client: httpx.Client, timeout: float,
           strategy: str) -> dict[str, Any]:
    try:
        resp = client.get(
            PAGESPEED_ENDPOINT,
            params={"url": url, "key": api_key, "strategy": strategy, "category": "performance"},
            timeout=timeout,
        )
        resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException:
        raise EnrichmentError("PageSpeed request timed out", details=f"Timeout after {timeout}s")
    except httpx.HTTPStatusError as e:
        raise EnrichmentError("PageSpeed request failed", details=f"HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        raise EnrichmentError("PageSpeed request failed", details=str(e))
    except ValueError as e:
        raise EnrichmentError("PageSpeed returned invalid JSON", details=str(e))

    try:
        lighthouse = data["lighthouseResult"]
        score = lighthouse["categories"]["performance"]["score"]
    except (KeyError, TypeError):
        raise EnrichmentError("PageSpeed response missing performance score")

    # bool is an int subclass but never a valid score
    if score is not None and (isinstance(score, bool) or not isinstance(score, (int, float))):
        raise EnrichmentError("PageSpeed returned an invalid performance score", details=repr(score))

    audits = lighthouse.get("audits") or {}
    if not isinstance(audits, dict):
        raise EnrichmentError("PageSpeed returned malformed audits")
    metrics = {
        name: audits[audit_id].get("displayValue")
        for audit_id, name in METRIC_AUDITS.items()
        if isinstance(audits.get(audit_id), dict)
    }

    return {
        "strategy": strategy,
        "performanceScore": round(score * 100) if score is not None else None,
        "metrics": metrics,
    }


def fetch_pagespeed(
    url: str,
    api_key: str | None,
    client: httpx.Client,
    timeout: float = 30.0,
    strategy: str = "mobile",
) -> dict[str, Any] | None:
    """Fetch a performance score for *url*.

    Returns:
        None when no API key is configured, ``{"error": ..., "details": ...}``
        when the service fails, otherwise the score and lab metrics.
    """
    if not api_key:
        return None

    try:
        return _query(url, api_key, client, timeout, strategy)
    except EnrichmentError as e:
        logger.warning("PageSpeed enrichment failed for %s: %s", url, e.message)
        return {"error": e.message, "details": e.details}
