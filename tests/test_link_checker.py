"""Tests for the concurrent link health checker.

``respx`` patches ``httpx`` at the transport layer, including requests made
from worker threads.
"""

from __future__ import annotations

import threading
import time
from typing import Iterator

import httpx
import pytest
import respx

from page_audit import link_checker
from page_audit.link_checker import check_link, check_links
from page_audit.models import LinkRecord, LinkState


_URL = "https://example.com/page"


def _trickle(chunks: int, delay: float) -> Iterator[bytes]:
    """A body that arrives one byte at a time."""
    for _ in range(chunks):
        time.sleep(delay)
        yield b"x"


# ---------------------------------------------------------------------------
# check_link
# ---------------------------------------------------------------------------

class TestCheckLink:
    def test_head_success(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(200))
            record = check_link(LinkRecord(url=_URL), client)

        assert record.state == LinkState.HEALTHY
        assert record.status_code == 200
        assert record.ok is True
        assert record.error is None

    def test_head_rejected_falls_back_to_get(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(405))
            get_route = respx.get(_URL).mock(return_value=httpx.Response(200))
            record = check_link(LinkRecord(url=_URL), client)

        assert get_route.call_count == 1
        assert record.state == LinkState.HEALTHY
        assert record.status_code == 200

    def test_head_network_error_falls_back_to_get(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(side_effect=httpx.ConnectError)
            respx.get(_URL).mock(return_value=httpx.Response(204))
            record = check_link(LinkRecord(url=_URL), client)

        assert record.state == LinkState.HEALTHY
        assert record.status_code == 204

    def test_not_found_is_broken(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(404))
            respx.get(_URL).mock(return_value=httpx.Response(404))
            record = check_link(LinkRecord(url=_URL), client)

        assert record.state == LinkState.BROKEN
        assert record.status_code == 404
        assert record.ok is False

    def test_both_attempts_time_out(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(side_effect=httpx.ReadTimeout)
            respx.get(_URL).mock(side_effect=httpx.ReadTimeout)
            record = check_link(LinkRecord(url=_URL), client, timeout=5.0)

        assert record.state == LinkState.ERRORED
        assert record.status_code is None
        assert record.error == "Timeout after 5.0s"

    def test_get_failure_after_head_status_keeps_status(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(500))
            respx.get(_URL).mock(side_effect=httpx.ConnectError)
            record = check_link(LinkRecord(url=_URL), client)

        assert record.state == LinkState.BROKEN
        assert record.status_code == 500
        assert record.error.startswith("Request failed")

    def test_redirect_is_followed(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(
                return_value=httpx.Response(301, headers={"Location": "https://example.com/new"})
            )
            respx.head("https://example.com/new").mock(return_value=httpx.Response(200))
            record = check_link(LinkRecord(url=_URL), client)

        assert record.state == LinkState.HEALTHY

    def test_slow_body_does_not_delay_the_check(self, client: httpx.Client) -> None:
        with respx.mock:
            respx.head(_URL).mock(return_value=httpx.Response(405))
            respx.get(_URL).mock(return_value=httpx.Response(200, content=_trickle(20, 0.4)))
            start = time.monotonic()
            record = check_link(LinkRecord(url=_URL), client, timeout=1.0)
            elapsed = time.monotonic() - start

        assert record.state == LinkState.HEALTHY
        assert record.status_code == 200
        assert elapsed < 1.0


# ---------------------------------------------------------------------------
# check_links
# ---------------------------------------------------------------------------

def _records(n: int) -> list[LinkRecord]:
    return [LinkRecord(url=f"https://example.com/p{i}") for i in range(n)]


class TestCheckLinks:
    def test_ceiling_bounds_checked_links(self, client: httpx.Client) -> None:
        records = _records(25)
        with respx.mock:
            route = respx.head(url__regex=r"https://example\.com/p\d+").mock(
                return_value=httpx.Response(200)
            )
            checked = check_links(records, client, ceiling=20)

        assert route.call_count == 20
        assert checked == records[:20]
        assert all(r.state == LinkState.HEALTHY for r in records[:20])
        assert all(r.state == LinkState.UNCHECKED for r in records[20:])

    def test_every_checked_link_is_terminal(self, client: httpx.Client) -> None:
        records = _records(6)
        with respx.mock:
            respx.head("https://example.com/p0").mock(return_value=httpx.Response(200))
            respx.head("https://example.com/p1").mock(return_value=httpx.Response(404))
            respx.get("https://example.com/p1").mock(return_value=httpx.Response(404))
            respx.head(url__regex=r"https://example\.com/p[2-5]").mock(side_effect=httpx.ConnectError)
            respx.get(url__regex=r"https://example\.com/p[2-5]").mock(side_effect=httpx.ConnectTimeout)
            check_links(records, client, timeout=1.0)

        assert all(r.state.is_terminal for r in records)
        assert [r.state for r in records[:2]] == [LinkState.HEALTHY, LinkState.BROKEN]
        assert all(r.state == LinkState.ERRORED for r in records[2:])
        assert all(r.error == "Timeout after 1.0s" for r in records[2:])

    def test_worker_crash_is_isolated(self, client: httpx.Client,
                                      monkeypatch: pytest.MonkeyPatch) -> None:
        records = _records(3)
        original = link_checker.check_link

        def flaky(record: LinkRecord, *args, **kwargs) -> LinkRecord:
            if record.url.endswith("p1"):
                raise RuntimeError("boom")
            return original(record, *args, **kwargs)

        monkeypatch.setattr(link_checker, "check_link", flaky)
        with respx.mock:
            respx.head(url__regex=r"https://example\.com/p[02]").mock(return_value=httpx.Response(200))
            check_links(records, client)

        assert records[0].state == LinkState.HEALTHY
        assert records[1].state == LinkState.ERRORED
        assert records[1].error == "Error: boom"
        assert records[2].state == LinkState.HEALTHY

    def test_zero_ceiling_checks_nothing(self, client: httpx.Client) -> None:
        records = _records(2)
        assert check_links(records, client, ceiling=0) == []
        assert all(r.state == LinkState.UNCHECKED for r in records)

    def test_no_records(self, client: httpx.Client) -> None:
        assert check_links([], client) == []

    def test_checks_run_concurrently_up_to_the_ceiling(self, client: httpx.Client) -> None:
        lock = threading.Lock()
        in_flight = 0
        peak = 0

        def slow_ok(request: httpx.Request) -> httpx.Response:
            nonlocal in_flight, peak
            with lock:
                in_flight += 1
                peak = max(peak, in_flight)
            time.sleep(0.05)
            with lock:
                in_flight -= 1
            return httpx.Response(200)

        records = _records(10)
        with respx.mock:
            respx.head(url__regex=r"https://example\.com/p\d+").mock(side_effect=slow_ok)
            checked = check_links(records, client, ceiling=4)

        assert len(checked) == 4
        assert 1 < peak <= 4
