"""Composition root: builds a ready-to-use payout dashboard from settings."""

from __future__ import annotations

from typing import Optional

import httpx

from .application.dashboard import PayoutDashboard
from .env import Settings, get_settings
from .infrastructure.admin_client import AdminPayoutClient
from .infrastructure.query_cache import QueryCache
from .logging_config import configure_logging


def create_dashboard(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PayoutDashboard:
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    client = AdminPayoutClient(
        settings.api_base_url,
        timeout=settings.http_timeout,
        token=settings.api_token,
        transport=transport,
    )
    return PayoutDashboard(
        client,
        cache=QueryCache(stale_after=settings.cache_stale_after or None),
        page_size=settings.page_size,
    )
