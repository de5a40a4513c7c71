"""Data Transfer Objects for the payout application layer."""

from __future__ import annotations

from datetime import datetime
from math import ceil
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..domain.entities import MerchantAggregate, Payout


class MerchantFilter(BaseModel):
    """Query for the merchant aggregate list.

    Frozen so that equal filters hash equally and can be used as cache keys.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)
    search: Optional[str] = None
    min_amount: Optional[float] = Field(None, alias="minAmount")

    def to_query_params(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PayoutFilter(BaseModel):
    """Query for the payout history list. Period dates are ``yyyy-MM-dd`` strings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1)
    search: Optional[str] = None
    network: Optional[str] = None
    status: Optional[Literal["PENDING", "COMPLETED", "REJECTED"]] = None
    period_from: Optional[str] = Field(
        None, alias="periodFrom", pattern=r"^\d{4}-\d{2}-\d{2}$"
    )
    period_to: Optional[str] = Field(
        None, alias="periodTo", pattern=r"^\d{4}-\d{2}-\d{2}$"
    )

    def to_query_params(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PayoutDraft(BaseModel):
    """Unvalidated payout form state. Never sent to the server as-is."""

    shop_id: str
    amount: str = ""
    network: str = ""
    wallet: str = ""
    notes: Optional[str] = None
    txid: Optional[str] = None
    period_from: Optional[datetime] = None
    period_to: Optional[datetime] = None


class CreatePayoutRequest(BaseModel):
    """Normalized, validated payout creation request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    shop_id: str = Field(..., alias="shopId")
    amount: float = Field(..., gt=0)
    network: str
    wallet: str = Field(..., min_length=1)
    notes: Optional[str] = None
    txid: Optional[str] = None
    period_from: Optional[str] = Field(None, alias="periodFrom")
    period_to: Optional[str] = Field(None, alias="periodTo")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int
    limit: int
    total: int
    total_pages: Optional[int] = Field(None, alias="totalPages")


class MerchantSummary(BaseModel):
    """Totals across every merchant matching the query, not just the current page."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    total_merchants: int = Field(0, alias="totalMerchants")
    total_amount_usdt: float = Field(0.0, alias="totalAmountUSDT")
    total_amount_after_commission_usdt: float = Field(
        0.0, alias="totalAmountAfterCommissionUSDT"
    )


class _Page(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        if self.page_size <= 0:
            return 0
        return ceil(self.total_count / self.page_size)

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


class MerchantPage(_Page):
    """One page of merchant aggregates."""

    items: List[MerchantAggregate]
    summary: Optional[MerchantSummary] = None

    @classmethod
    def from_response(
        cls, data: Dict[str, Any], filters: "MerchantFilter"
    ) -> "MerchantPage":
        pagination = _pagination(data, filters.page, filters.limit)
        summary = data.get("summary")
        return cls(
            items=[MerchantAggregate.model_validate(m) for m in data.get("merchants", [])],
            total_count=pagination.total,
            page=pagination.page,
            page_size=pagination.limit,
            summary=MerchantSummary.model_validate(summary) if summary else None,
        )


class PayoutPage(_Page):
    """One page of payout records."""

    items: List[Payout]

    @classmethod
    def from_response(cls, data: Dict[str, Any], filters: "PayoutFilter") -> "PayoutPage":
        pagination = _pagination(data, filters.page, filters.limit)
        return cls(
            items=[Payout.model_validate(p) for p in data.get("payouts", [])],
            total_count=pagination.total,
            page=pagination.page,
            page_size=pagination.limit,
        )


def _pagination(data: Dict[str, Any], page: int, limit: int) -> Pagination:
    raw = data.get("pagination")
    if raw:
        return Pagination.model_validate(raw)
    # Older endpoints report only a flat totalCount.
    return Pagination(page=page, limit=limit, total=int(data.get("totalCount", 0)))
