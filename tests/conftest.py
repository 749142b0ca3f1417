"""Shared fixtures."""

from __future__ import annotations

from typing import Iterator

import httpx
import pytest

from page_audit.fetcher import make_client


@pytest.fixture
def client() -> Iterator[httpx.Client]:
    """A real httpx client; tests patch its transport with ``respx``."""
    with make_client() as c:
        yield c


@pytest.fixture(autouse=True)
def _no_pagespeed_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's PAGESPEED_API_KEY from leaking into tests."""
    monkeypatch.delenv("PAGESPEED_API_KEY", raising=False)
