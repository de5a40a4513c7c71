"""Turn payout screen selection state into query filters."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional, Tuple, Union

from .dtos import MerchantFilter, PayoutFilter

ALL = "all"
DEFAULT_PAGE_SIZE = 20

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class PayoutSelection:
    """Widget values of the payout screen, exactly as the operator set them."""

    search: str = ""
    status: str = ALL
    network: str = ALL
    min_amount: str = ""
    start_date: Optional[DateLike] = None
    end_date: Optional[DateLike] = None
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


def _text(value: str) -> Optional[str]:
    value = (value or "").strip()
    return value or None


def _choice(value: str) -> Optional[str]:
    value = _text(value) or ALL
    return None if value.lower() == ALL else value


def _status(value: str) -> Optional[str]:
    choice = _choice(value)
    return choice.upper() if choice else None


def _number(value: str) -> Optional[float]:
    text = _text(value)
    if text is None:
        return None
    try:
        return float(text)
    except ValueError:
        return None


def format_query_date(value: Optional[DateLike]) -> Optional[str]:
    """Serialize a calendar date as ``yyyy-MM-dd``; the server filters by day."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime("%Y-%m-%d")


def build_merchant_filter(selection: PayoutSelection) -> MerchantFilter:
    return MerchantFilter(
        page=selection.page,
        limit=selection.page_size,
        search=_text(selection.search),
        min_amount=_number(selection.min_amount),
    )


def build_payout_filter(selection: PayoutSelection) -> PayoutFilter:
    return PayoutFilter(
        page=selection.page,
        limit=selection.page_size,
        search=_text(selection.search),
        network=_choice(selection.network),
        status=_status(selection.status),
        period_from=format_query_date(selection.start_date),
        period_to=format_query_date(selection.end_date),
    )


class FilterBuilder:
    """Memoizing filter builder.

    Returns the very same filter object while the inputs it depends on are
    unchanged, so consumers comparing by identity do not refetch.
    """

    def __init__(self) -> None:
        self._merchant: Optional[Tuple[Tuple[Any, ...], MerchantFilter]] = None
        self._payout: Optional[Tuple[Tuple[Any, ...], PayoutFilter]] = None

    def merchant_filter(self, selection: PayoutSelection) -> MerchantFilter:
        deps = (
            selection.page,
            selection.page_size,
            selection.search,
            selection.min_amount,
        )
        if self._merchant is None or self._merchant[0] != deps:
            self._merchant = (deps, build_merchant_filter(selection))
        return self._merchant[1]

    def payout_filter(self, selection: PayoutSelection) -> PayoutFilter:
        deps = (
            selection.page,
            selection.page_size,
            selection.search,
            selection.network,
            selection.status,
            selection.start_date,
            selection.end_date,
        )
        if self._payout is None or self._payout[0] != deps:
            self._payout = (deps, build_payout_filter(selection))
        return self._payout[1]
