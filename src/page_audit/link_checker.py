"""Concurrent link health checks."""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

import httpx

from .errors import LinkCheckError
from .models import LinkRecord, LinkState


logger = logging.getLogger(__name__)

DEFAULT_LINK_TIMEOUT = 5.0
DEFAULT_MAX_LINKS = 20


def _is_ok(status_code: int) -> bool:
    return 200 <= status_code < 400


def _request(client: httpx.Client, method: str, url: str, timeout: float) -> int:
    """Send one request and return its status code.

    The response is streamed and closed without reading the body, so a
    slow body cannot hold the check past the status line.

    Raises:
        LinkCheckError: on timeout or any transport failure
    """
    try:
        with client.stream(method, url, timeout=timeout) as response:
            return response.status_code
    except httpx.TimeoutException:
        raise LinkCheckError(f"Timeout after {timeout}s")
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise LinkCheckError(f"Request failed: {e}")


def _finish(record: LinkRecord, state: LinkState, status_code: int | None = None,
            error: str | None = None) -> LinkRecord:
    record.state = state
    record.status_code = status_code
    record.error = error
    return record


def check_link(record: LinkRecord, client: httpx.Client,
               timeout: float = DEFAULT_LINK_TIMEOUT) -> LinkRecord:
    """Check one link: HEAD first, then a single GET fallback.

    The GET retry happens when HEAD fails at the transport level or answers
    with a non-success status (many servers reject HEAD). The record always
    ends in a terminal state.
    """
    record.state = LinkState.CHECKING
    head_status = None

    try:
        head_status = _request(client, "HEAD", record.url, timeout)
        if _is_ok(head_status):
            return _finish(record, LinkState.HEALTHY, head_status)
        logger.debug("HEAD %s -> %d, retrying with GET", record.url, head_status)
    except LinkCheckError as e:
        logger.debug("HEAD %s failed (%s), retrying with GET", record.url, e.message)

    try:
        get_status = _request(client, "GET", record.url, timeout)
    except LinkCheckError as e:
        if head_status is not None:
            return _finish(record, LinkState.BROKEN, head_status, e.message)
        return _finish(record, LinkState.ERRORED, None, e.message)

    if _is_ok(get_status):
        return _finish(record, LinkState.HEALTHY, get_status)
    return _finish(record, LinkState.BROKEN, get_status)


def check_links(
    records: list[LinkRecord],
    client: httpx.Client,
    timeout: float = DEFAULT_LINK_TIMEOUT,
    ceiling: int = DEFAULT_MAX_LINKS,
) -> list[LinkRecord]:
    """Check the first *ceiling* records concurrently.

    Records past the ceiling stay unchecked. The pool is sized to the batch,
    so every selected check starts at once; leaving the executor waits for
    all of them. A failing worker only affects its own record.

    Returns:
        The records that were checked, in extraction order.
    """
    batch = records[:max(ceiling, 0)]
    if not batch:
        return []

    logger.info("Checking %d of %d links", len(batch), len(records))

    with ThreadPoolExecutor(max_workers=len(batch), thread_name_prefix="link-check") as executor:
        futures = {executor.submit(check_link, r, client, timeout): r for r in batch}
        for future in as_completed(futures):
            record = futures[future]
            try:
                future.result()
            except Exception as e:
                logger.exception("Link check crashed for %s", record.url)
                _finish(record, LinkState.ERRORED, None, f"Error: {e}")

    broken = sum(1 for r in batch if r.is_broken)
    logger.info("Link checks done: %d broken or unreachable", broken)
    return batch
