"""Pure validation functions for payout creation.

A payout draft is checked by an ordered chain of independent checks. The first
failing check decides the rejection reason, so an operator always sees the
most fundamental problem with the form first. These functions have no I/O and
can be tested in isolation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional, Sequence, Union

from ...domain.entities import MerchantAggregate
from ...domain.errors import PayoutValidationError, RejectionReason
from ...domain.networks import resolve_network_wallet
from ..dtos import CreatePayoutRequest, PayoutDraft


@dataclass(frozen=True)
class Accepted:
    request: CreatePayoutRequest


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    message: str


ValidationResult = Union[Accepted, Rejected]

Check = Callable[[MerchantAggregate, PayoutDraft, datetime], Optional[Rejected]]


def parse_amount(raw: str) -> Optional[float]:
    """Parse an amount as typed into the form; None if blank or not a finite number."""
    text = (raw or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def check_required_fields(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    if not draft.network or parse_amount(draft.amount) is None:
        return Rejected(
            RejectionReason.MISSING_REQUIRED_FIELD,
            "Please select network and enter amount",
        )
    return None


def check_amount(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    amount = parse_amount(draft.amount)
    assert amount is not None
    if amount <= 0 or amount > merchant.total_amount_after_commission_usdt:
        return Rejected(RejectionReason.INVALID_AMOUNT, "Invalid payout amount")
    return None


def check_period_complete(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    if (draft.period_from is None) != (draft.period_to is None):
        return Rejected(
            RejectionReason.INCOMPLETE_PERIOD,
            "Both period dates must be selected or both left empty",
        )
    return None


def check_period_order(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    if draft.period_from is None or draft.period_to is None:
        return None
    if _as_utc(draft.period_from) >= _as_utc(draft.period_to):
        return Rejected(
            RejectionReason.INVALID_PERIOD_ORDER,
            "Period start date must be before end date",
        )
    return None


def check_period_end_not_future(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    if draft.period_to is not None and _as_utc(draft.period_to) > _as_utc(now):
        return Rejected(
            RejectionReason.FUTURE_PERIOD_END,
            "Period end date cannot be in the future",
        )
    return None


def check_network_wallet(
    merchant: MerchantAggregate, draft: PayoutDraft, now: datetime
) -> Optional[Rejected]:
    if resolve_network_wallet(merchant.wallets, draft.network) is None:
        return Rejected(
            RejectionReason.NETWORK_WALLET_NOT_CONFIGURED,
            "Selected network not found",
        )
    return None


PAYOUT_CHECKS: Sequence[Check] = (
    check_required_fields,
    check_amount,
    check_period_complete,
    check_period_order,
    check_period_end_not_future,
    check_network_wallet,
)


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def normalize_draft(
    merchant: MerchantAggregate, draft: PayoutDraft
) -> CreatePayoutRequest:
    """Build the request for a draft that already passed every check."""
    option = resolve_network_wallet(merchant.wallets, draft.network)
    amount = parse_amount(draft.amount)
    assert option is not None and amount is not None

    period_from: Optional[str] = None
    period_to: Optional[str] = None
    if draft.period_from is not None and draft.period_to is not None:
        period_from = _as_utc(draft.period_from).isoformat()
        period_to = _as_utc(draft.period_to).isoformat()

    return CreatePayoutRequest(
        shop_id=merchant.id,
        amount=amount,
        network=draft.network,
        wallet=option.address,
        notes=_optional_text(draft.notes),
        txid=_optional_text(draft.txid),
        period_from=period_from,
        period_to=period_to,
    )


def validate_payout_draft(
    merchant: MerchantAggregate,
    draft: PayoutDraft,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """Validate a payout draft against the merchant it pays out.

    Args:
        merchant: The merchant aggregate the payout is drawn from
        draft: The form state
        now: Reference time for the period end check (defaults to current UTC)

    Returns:
        ``Accepted`` with the normalized request, or ``Rejected`` with the
        reason of the first failing check.
    """
    now = now or datetime.now(timezone.utc)
    for check in PAYOUT_CHECKS:
        rejection = check(merchant, draft, now)
        if rejection is not None:
            return rejection
    return Accepted(normalize_draft(merchant, draft))


def validate_or_raise(
    merchant: MerchantAggregate,
    draft: PayoutDraft,
    now: Optional[datetime] = None,
) -> CreatePayoutRequest:
    """Validate a draft, raising on rejection.

    Raises:
        PayoutValidationError: If any check fails.
    """
    result = validate_payout_draft(merchant, draft, now)
    if isinstance(result, Rejected):
        raise PayoutValidationError(result.reason, result.message)
    return result.request
