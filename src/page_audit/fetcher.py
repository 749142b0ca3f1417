"""Timeout-bounded page retrieval."""

import logging
import time
from urllib.parse import urlparse

import httpx

from .errors import InputError
from .models import FailureReason, FetchResult


logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; PageAudit/1.0)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}


def normalize_url(url: str) -> str:
    """Ensure URL has a scheme."""
    url = url.strip()
    if url and not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def validate_url(url: str | None) -> str:
    """Return *url* stripped, or raise InputError if it is not an absolute http(s) URL."""
    if url is None or not url.strip():
        raise InputError("URL missing")
    url = url.strip()
    try:
        parsed = urlparse(url)
        parsed.port  # raises ValueError for a bad port
    except ValueError as e:
        raise InputError("Invalid URL", details=str(e))
    if parsed.scheme not in ("http", "https"):
        raise InputError("Invalid URL", details=f"Unsupported scheme in {url!r}")
    if not parsed.hostname or any(c.isspace() for c in url):
        raise InputError("Invalid URL", details=f"No valid host in {url!r}")
    return url


def make_client() -> httpx.Client:
    """Client shared by every request of one audit."""
    return httpx.Client(headers=DEFAULT_HEADERS, follow_redirects=True)


def fetch(url: str, timeout: float = 10.0, client: httpx.Client | None = None) -> FetchResult:
    """Fetch *url*, following redirects.

    Never raises for transport problems: a timeout or network failure is
    returned as a failed FetchResult. Non-2xx responses still count as
    fetched; the status is recorded on the result.

    Args:
        url: Absolute URL to fetch
        timeout: Request timeout in seconds
        client: Optional shared client (one is created otherwise)
    """
    owns_client = client is None
    if owns_client:
        client = make_client()
    start_time = time.time()
    # httpx timeouts apply per network step; this bounds the whole download
    deadline = time.monotonic() + timeout

    try:
        with client.stream("GET", url, timeout=timeout) as response:
            chunks = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    raise httpx.ReadTimeout(
                        f"Body not received within {timeout}s", request=response.request
                    )
            body = b"".join(chunks).decode(response.encoding or "utf-8", errors="replace")
        elapsed_ms = int((time.time() - start_time) * 1000)
        if not response.is_success:
            logger.warning("%s answered HTTP %d", url, response.status_code)
        return FetchResult(
            url=url,
            final_url=str(response.url),
            body=body,
            ok=True,
            status_code=response.status_code,
            elapsed_ms=elapsed_ms,
        )
    except httpx.TimeoutException:
        logger.info("Timeout fetching %s after %ss", url, timeout)
        return FetchResult(
            url=url,
            final_url=url,
            reason=FailureReason.TIMEOUT,
            error=f"Timeout after {timeout}s",
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.info("Request to %s failed: %s", url, e)
        return FetchResult(
            url=url,
            final_url=url,
            reason=FailureReason.NETWORK,
            error=f"Request failed: {e}",
            elapsed_ms=int((time.time() - start_time) * 1000),
        )
    finally:
        if owns_client:
            client.close()
