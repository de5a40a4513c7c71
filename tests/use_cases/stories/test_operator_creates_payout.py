"""Story: operator creates a payout for a merchant from the merchants tab."""

from __future__ import annotations

import pytest

from payoutdesk.application.dashboard import PayoutDashboard
from payoutdesk.application.dtos import PayoutDraft
from payoutdesk.application.presentation import merchant_network_options
from payoutdesk.domain.errors import ApiError
from tests.fixtures import InMemoryAdminPayoutClient


@pytest.mark.asyncio
async def test_create_payout_refreshes_merchants_and_stats(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    """
    Story: the operator loads the merchants tab, picks the only configured
    network, submits a payout, and the next load refetches merchants and stats.
    """
    dashboard = PayoutDashboard(admin_client)

    screen = await dashboard.load()
    assert screen.error is None
    assert screen.table is not None
    merchant = screen.table.items[0]

    options = merchant_network_options(merchant)
    assert [o.value for o in options] == ["trc20"]

    notice = await dashboard.submit_payout(
        merchant,
        PayoutDraft(shop_id=merchant.id, amount="400", network=options[0].value),
    )
    assert notice.level == "success"
    assert notice.message == "Payout created successfully!"

    created = admin_client.calls_to("create_payout")[0]
    assert created.wallet == options[0].address

    await dashboard.load()
    assert len(admin_client.calls_to("list_payout_merchants")) == 2
    assert len(admin_client.calls_to("get_payout_stats")) == 2


@pytest.mark.asyncio
async def test_invalid_draft_shows_reason_and_sends_nothing(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    dashboard = PayoutDashboard(admin_client)
    merchant = admin_client.merchants[0]

    notice = await dashboard.submit_payout(
        merchant, PayoutDraft(shop_id=merchant.id, amount="400", network="polygon")
    )

    assert notice.level == "error"
    assert notice.message == "Selected network not found"
    assert admin_client.calls_to("create_payout") == []


@pytest.mark.asyncio
async def test_server_rejection_shown_verbatim(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    dashboard = PayoutDashboard(admin_client)
    merchant = admin_client.merchants[0]
    admin_client.fail_next(ApiError("Merchant balance changed", 409, "CONFLICT"))

    notice = await dashboard.submit_payout(
        merchant, PayoutDraft(shop_id=merchant.id, amount="400", network="trc20")
    )

    assert notice.level == "error"
    assert notice.message == "Merchant balance changed"
    assert admin_client.payouts.keys() == {"payout-pending", "payout-completed"}
