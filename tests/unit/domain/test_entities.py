"""Validation tests for payout domain entities."""

import pytest
from pydantic import ValidationError

from payoutdesk.domain.entities import MerchantAggregate, Payout
from tests.fixtures.payloads import merchant_payload, payout_payload


class TestMerchantAggregate:
    def test_parses_wire_payload(self) -> None:
        merchant = MerchantAggregate.model_validate(merchant_payload())
        assert merchant.total_amount_after_commission_usdt == 1000.0
        assert merchant.wallets.usdt_trc_wallet.startswith("T111")
        assert [g.gateway for g in merchant.gateway_breakdown] == ["Plisio", "Rapyd"]

    def test_breakdown_total(self) -> None:
        merchant = MerchantAggregate.model_validate(merchant_payload())
        assert merchant.breakdown_after_commission_total() == pytest.approx(1000.0)

    def test_is_frozen(self) -> None:
        merchant = MerchantAggregate.model_validate(merchant_payload())
        with pytest.raises(ValidationError):
            merchant.total_amount_after_commission_usdt = 5000.0

    def test_wallet_lookup_by_wire_name(self) -> None:
        merchant = MerchantAggregate.model_validate(merchant_payload())
        assert merchant.wallets.get("usdtPolygonWallet") == ""
        with pytest.raises(KeyError):
            merchant.wallets.get("btcWallet")


class TestPayout:
    def test_wallet_preferred_over_legacy_field(self) -> None:
        payout = Payout.model_validate(
            payout_payload(wallet="T-new", walletAddress="T-old")
        )
        assert payout.resolved_wallet() == "T-new"

    def test_legacy_wallet_address_fallback(self) -> None:
        payout = Payout.model_validate(
            payout_payload(wallet=None, walletAddress="T-old")
        )
        assert payout.resolved_wallet() == "T-old"

    def test_half_period_rejected(self) -> None:
        with pytest.raises(ValidationError, match="both present or both absent"):
            Payout.model_validate(payout_payload(periodFrom="2024-01-01T00:00:00Z"))

    def test_inverted_period_rejected(self) -> None:
        with pytest.raises(ValidationError, match="before periodTo"):
            Payout.model_validate(
                payout_payload(
                    periodFrom="2024-02-01T00:00:00Z", periodTo="2024-01-01T00:00:00Z"
                )
            )

    def test_amount_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            Payout.model_validate(payout_payload(amount=0))

    def test_unknown_status_is_kept(self) -> None:
        payout = Payout.model_validate(payout_payload(status="PROCESSING"))
        assert payout.status == "PROCESSING"
        assert not payout.is_pending

    def test_serializes_timestamps(self) -> None:
        payout = Payout.model_validate(
            payout_payload(
                periodFrom="2024-01-01T00:00:00Z", periodTo="2024-01-31T00:00:00Z"
            )
        )
        dumped = payout.model_dump(by_alias=True)
        assert dumped["createdAt"] == "2024-02-01T12:30:00+00:00"
        assert dumped["periodTo"] == "2024-01-31T00:00:00+00:00"
        assert dumped["paidAt"] is None
