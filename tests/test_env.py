"""Tests for settings loading and dashboard bootstrap."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from payoutdesk.bootstrap import create_dashboard
from payoutdesk.env import Settings, get_settings


def test_base_url_required(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PAYOUTDESK_API_BASE_URL", raising=False)
    with pytest.raises(ValueError, match="PAYOUTDESK_API_BASE_URL"):
        get_settings()


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PAYOUTDESK_API_BASE_URL", "https://admin.example.com/api")
    monkeypatch.setenv("PAYOUTDESK_API_TOKEN", "secret")
    monkeypatch.setenv("PAYOUTDESK_PAGE_SIZE", "50")
    monkeypatch.setenv("PAYOUTDESK_LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.api_token == "secret"
    assert settings.page_size == 50
    assert settings.http_timeout == 30.0
    assert settings.cache_stale_after == 120.0
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("url", ["ftp://admin.example.com", "https://", "admin.example.com"])
def test_invalid_base_url(url: str) -> None:
    with pytest.raises(ValidationError):
        Settings(api_base_url=url)


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        Settings(api_base_url="https://admin.example.com", log_level="LOUD")


@pytest.mark.asyncio
async def test_create_dashboard_uses_settings() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"result": {"totalPayout": 1, "awaitingPayout": 2, "thisMonth": 3}},
        )

    dashboard = create_dashboard(
        Settings(api_base_url="https://admin.example.com/api", api_token="t", page_size=5),
        transport=httpx.MockTransport(handler),
    )

    stats = await dashboard.stats.fetch()
    await dashboard.aclose()

    assert dashboard.selection.page_size == 5
    assert stats.awaiting_payout == 2
    assert seen[0].url == "https://admin.example.com/api/admin/payout/stats"
    assert seen[0].headers["Authorization"] == "Bearer t"
