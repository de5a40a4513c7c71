"""Payout domain entities: MerchantAggregate, Payout and PayoutStats."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .shared.serializers import PayoutTimestampsMixin


class PayoutStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    REJECTED = "REJECTED"


class Network(str, Enum):
    """Disbursement rails a payout can be sent over."""

    POLYGON = "polygon"
    TRC20 = "trc20"
    ERC20 = "erc20"


class MerchantWallets(BaseModel):
    """Wallet addresses registered by a merchant, keyed by storage field name.

    Empty or whitespace-only values mean the wallet is not configured.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    usdt_polygon_wallet: Optional[str] = Field(None, alias="usdtPolygonWallet")
    usdt_trc_wallet: Optional[str] = Field(None, alias="usdtTrcWallet")
    usdt_erc_wallet: Optional[str] = Field(None, alias="usdtErcWallet")
    usdc_polygon_wallet: Optional[str] = Field(None, alias="usdcPolygonWallet")

    def get(self, wallet_field: str) -> Optional[str]:
        """Return the address stored under a wire field name (e.g. ``usdtTrcWallet``)."""
        for name, info in type(self).model_fields.items():
            if info.alias == wallet_field:
                return getattr(self, name)
        raise KeyError(wallet_field)


class GatewayBreakdown(BaseModel):
    """Per-gateway share of a merchant's outstanding earnings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    gateway: str
    count: int = Field(..., ge=0)
    amount_usdt: float = Field(..., alias="amountUSDT")
    amount_after_commission_usdt: float = Field(
        ..., alias="amountAfterCommissionUSDT"
    )
    commission: float = Field(..., description="Commission percent")


class MerchantAggregate(BaseModel):
    """A merchant's outstanding earnings snapshot as of query time."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    full_name: str = Field(..., alias="fullName")
    username: str
    telegram_id: str = Field("", alias="telegramId")
    merchant_url: str = Field("", alias="merchantUrl")
    wallets: MerchantWallets = Field(default_factory=MerchantWallets)
    total_amount_usdt: float = Field(..., alias="totalAmountUSDT")
    total_amount_after_commission_usdt: float = Field(
        ...,
        alias="totalAmountAfterCommissionUSDT",
        description="Net payable amount; ceiling for any payout",
    )
    payments_count: int = Field(0, alias="paymentsCount", ge=0)
    oldest_payment_date: Optional[datetime] = Field(None, alias="oldestPaymentDate")
    gateway_breakdown: List[GatewayBreakdown] = Field(
        default_factory=list, alias="gatewayBreakdown"
    )

    def breakdown_after_commission_total(self) -> float:
        """Sum of the per-gateway net amounts. Expected, not guaranteed, to match the total."""
        return sum(g.amount_after_commission_usdt for g in self.gateway_breakdown)


class Payout(PayoutTimestampsMixin, BaseModel):
    """One disbursement record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    shop_id: str = Field(..., alias="shopId")
    shop_name: str = Field("", alias="shopName")
    shop_username: str = Field("", alias="shopUsername")
    amount: float = Field(..., gt=0)
    network: str
    wallet: Optional[str] = None
    wallet_address: Optional[str] = Field(
        None, alias="walletAddress", description="Legacy wallet field"
    )
    # Kept as the raw string so unknown values surface at presentation time.
    status: str
    notes: Optional[str] = None
    txid: Optional[str] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")
    paid_at: Optional[datetime] = Field(None, alias="paidAt")
    period_from: Optional[datetime] = Field(None, alias="periodFrom")
    period_to: Optional[datetime] = Field(None, alias="periodTo")

    @model_validator(mode="after")
    def check_period(self) -> "Payout":
        if (self.period_from is None) != (self.period_to is None):
            raise ValueError("periodFrom and periodTo must be both present or both absent")
        if self.period_from is not None and self.period_to is not None:
            if self.period_from >= self.period_to:
                raise ValueError("periodFrom must be before periodTo")
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == PayoutStatus.PENDING.value

    def resolved_wallet(self) -> Optional[str]:
        """Wallet address used for this payout, preferring ``wallet`` over the legacy field."""
        return self.wallet or self.wallet_address


class PayoutStats(BaseModel):
    """Platform-wide payout totals shown above the payout tables."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_payout: float = Field(..., alias="totalPayout")
    awaiting_payout: float = Field(..., alias="awaitingPayout")
    this_month: float = Field(..., alias="thisMonth")
    available_balance: float = Field(0.0, alias="availableBalance")
    total_payments: int = Field(0, alias="totalPayments")
