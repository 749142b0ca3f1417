"""Audit configuration.

The pipeline never reads the environment itself: callers build an
:class:`AuditConfig` (usually via :meth:`AuditConfig.from_env`) and pass it
to :func:`page_audit.auditor.audit_url`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class AuditConfig:
    # Page fetch failure is fatal, so it gets a longer budget than link checks.
    page_timeout: float = 10.0
    link_timeout: float = 5.0
    max_links_checked: int = 20

    pagespeed_api_key: Optional[str] = None
    pagespeed_timeout: float = 30.0
    pagespeed_strategy: str = "mobile"

    min_word_count: int = 150
    broken_sample_size: int = 20
    missing_alt_sample_size: int = 30

    @property
    def pagespeed_enabled(self) -> bool:
        return bool(self.pagespeed_api_key)

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "AuditConfig":
        """Build a config from ``PAGESPEED_API_KEY`` and ``PAGE_AUDIT_*`` variables.

        A ``.env`` file is loaded first (without overriding variables that
        are already set).
        """
        load_dotenv(env_file, override=False)
        defaults = cls()
        return cls(
            page_timeout=float(os.getenv("PAGE_AUDIT_PAGE_TIMEOUT", defaults.page_timeout)),
            link_timeout=float(os.getenv("PAGE_AUDIT_LINK_TIMEOUT", defaults.link_timeout)),
            max_links_checked=int(os.getenv("PAGE_AUDIT_MAX_LINKS", defaults.max_links_checked)),
            pagespeed_api_key=os.getenv("PAGESPEED_API_KEY") or None,
            pagespeed_timeout=float(
                os.getenv("PAGE_AUDIT_PAGESPEED_TIMEOUT", defaults.pagespeed_timeout)
            ),
            pagespeed_strategy=os.getenv("PAGE_AUDIT_PAGESPEED_STRATEGY", defaults.pagespeed_strategy),
            min_word_count=int(os.getenv("PAGE_AUDIT_MIN_WORDS", defaults.min_word_count)),
        )
