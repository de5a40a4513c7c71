"""Story: operator deletes a pending payout and the history no longer shows it."""

from __future__ import annotations

import pytest

from payoutdesk.application.dashboard import PayoutDashboard
from payoutdesk.domain.errors import CommandError
from tests.fixtures import InMemoryAdminPayoutClient


@pytest.mark.asyncio
async def test_deleted_payout_disappears_from_history(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    """
    Story: the operator opens the payouts tab, deletes the pending payout
    after confirming, and the refetched history excludes it.
    """
    dashboard = PayoutDashboard(admin_client)
    dashboard.switch_tab("payouts")

    before = await dashboard.load_table()
    assert before is not None
    assert {p.id for p in before.items} == {"payout-pending", "payout-completed"}

    pending = next(p for p in before.items if p.id == "payout-pending")
    notice = await dashboard.delete_payout(pending, confirmed=True)
    assert notice.level == "success"
    assert notice.message == "Payout deleted successfully"

    after = await dashboard.load_table()
    assert after is not None
    assert [p.id for p in after.items] == ["payout-completed"]
    assert len(admin_client.calls_to("list_payouts")) == 2


@pytest.mark.asyncio
async def test_server_refuses_to_delete_completed_payout(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    """
    Story: a stale view offers delete on a payout the server already settled;
    the server refuses and the history keeps the record.
    """
    dashboard = PayoutDashboard(admin_client)

    with pytest.raises(CommandError) as exc_info:
        await dashboard.commands.delete_by_id("payout-completed")
    assert str(exc_info.value) == "Only pending payouts can be deleted"
    assert "payout-completed" in admin_client.payouts


@pytest.mark.asyncio
async def test_unconfirmed_delete_never_reaches_server(
    admin_client: InMemoryAdminPayoutClient,
) -> None:
    dashboard = PayoutDashboard(admin_client)
    pending = admin_client.payouts["payout-pending"]

    notice = await dashboard.delete_payout(pending, confirmed=False)

    assert notice.level == "error"
    assert admin_client.calls_to("delete_payout") == []
