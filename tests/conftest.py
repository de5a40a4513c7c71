"""Shared pytest fixtures for payout tests."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from payoutdesk.domain.entities import MerchantAggregate, Payout
from payoutdesk.infrastructure.query_cache import QueryCache
from tests.fixtures import InMemoryAdminPayoutClient
from tests.fixtures.payloads import merchant_payload, payout_payload


@pytest.fixture
def make_merchant() -> Callable[..., MerchantAggregate]:
    def _make(**overrides: Any) -> MerchantAggregate:
        return MerchantAggregate.model_validate(merchant_payload(**overrides))

    return _make


@pytest.fixture
def make_payout() -> Callable[..., Payout]:
    def _make(**overrides: Any) -> Payout:
        return Payout.model_validate(payout_payload(**overrides))

    return _make


@pytest.fixture
def merchant(make_merchant: Callable[..., MerchantAggregate]) -> MerchantAggregate:
    """Merchant with 1000 USDT payable and only a TRC-20 wallet."""
    return make_merchant()


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache(stale_after=None)


@pytest.fixture
def admin_client(
    merchant: MerchantAggregate, make_payout: Callable[..., Payout]
) -> InMemoryAdminPayoutClient:
    return InMemoryAdminPayoutClient(
        merchants=[merchant],
        payouts=[
            make_payout(id="payout-pending", status="PENDING"),
            make_payout(
                id="payout-completed",
                status="COMPLETED",
                paidAt="2024-02-03T09:00:00Z",
                txid="0xabc",
            ),
        ],
    )
