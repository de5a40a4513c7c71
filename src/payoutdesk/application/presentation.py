"""Display helpers for the payout screens: labels, options and formatting."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..domain.entities import MerchantAggregate, Network, Payout, PayoutStatus
from ..domain.networks import NetworkOption, available_networks
from ..domain.status import StatusBadge, is_deletable, status_badge
from .filters import ALL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectOption:
    value: str
    label: str


STATUS_OPTIONS: List[SelectOption] = [
    SelectOption(ALL, "All Status"),
    SelectOption(PayoutStatus.PENDING.value, "Pending"),
    SelectOption(PayoutStatus.COMPLETED.value, "Completed"),
    SelectOption(PayoutStatus.REJECTED.value, "Rejected"),
]

NETWORK_OPTIONS: List[SelectOption] = [
    SelectOption(ALL, "All Networks"),
    SelectOption(Network.POLYGON.value, "Polygon"),
    SelectOption(Network.TRC20.value, "TRC-20"),
    SelectOption(Network.ERC20.value, "ERC-20"),
]

NETWORK_LABELS: Dict[str, str] = {o.value: o.label for o in NETWORK_OPTIONS[1:]}

CRYPTO_CURRENCIES = {"USDT", "TON", "BTC", "ETH", "LTC", "BCH", "DOGE", "USDC"}

# en-US currency symbols for the fiat currencies the console formats natively.
FIAT_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CAD": "CA$",
    "AUD": "A$",
    "CHF": "CHF ",
    "CNY": "CN¥",
}

GATEWAY_PUBLIC_IDS: Dict[str, str] = {
    "test gateway": "0000",
    "plisio": "0001",
    "rapyd": "0010",
    "cointopay": "0100",
    "noda": "1000",
    "klyme eu": "1001",
    "klyme gb": "1010",
    "klyme de": "1100",
}


def merchant_network_options(merchant: MerchantAggregate) -> List[NetworkOption]:
    """Networks offered in the create-payout form for this merchant."""
    return available_networks(merchant.wallets)


def network_label(network: str) -> str:
    return NETWORK_LABELS.get(network, network)


def payout_badge(payout: Payout) -> StatusBadge:
    """Status badge for a payout.

    Raises:
        UnknownPayoutStatusError: For a status outside the payout lifecycle.
    """
    return status_badge(payout.status)


def can_offer_delete(payout: Payout) -> bool:
    return is_deletable(payout.status)


def display_wallet(payout: Payout) -> str:
    return payout.resolved_wallet() or ""


def short_wallet(payout: Payout, length: int = 8) -> str:
    wallet = display_wallet(payout)
    if not wallet:
        return ""
    return f"{wallet[:length]}..."


def format_date(value: Optional[datetime]) -> str:
    """``dd.MM.yy``"""
    return value.strftime("%d.%m.%y") if value else ""


def format_datetime(value: Optional[datetime]) -> str:
    """``dd.MM.yy HH:mm``"""
    return value.strftime("%d.%m.%y %H:%M") if value else ""


def format_period(payout: Payout) -> str:
    if payout.period_from is None or payout.period_to is None:
        return ""
    return f"{format_date(payout.period_from)} - {format_date(payout.period_to)}"


def _grouped(amount: float, min_decimals: int, max_decimals: int) -> str:
    text = f"{amount:,.{max_decimals}f}"
    whole, _, fraction = text.partition(".")
    fraction = fraction.rstrip("0").ljust(min_decimals, "0")
    return f"{whole}.{fraction}" if fraction else whole


def format_currency(amount: float, currency: str) -> str:
    """Format an amount for display; crypto keeps up to 8 decimals."""
    code = currency.upper()
    if code in CRYPTO_CURRENCIES:
        return f"{_grouped(amount, 2, 8)} {code}"
    symbol = FIAT_SYMBOLS.get(code)
    if symbol is not None:
        value = _grouped(amount, 2, 2)
        if value.startswith("-"):
            return f"-{symbol}{value[1:]}"
        return f"{symbol}{value}"
    return f"{amount:.2f} {code}"


def format_currency_compact(amount: float, currency: str) -> str:
    code = currency.upper()
    if code in CRYPTO_CURRENCIES:
        return f"{_grouped(amount, 2, 4)} {code}"
    return format_currency(amount, currency)


def gateway_public_id(name: str) -> str:
    """Public id of a gateway (e.g. ``Plisio`` -> ``0001``); unknown names pass through."""
    key = " ".join(name.replace("_", " ").split()).lower()
    return GATEWAY_PUBLIC_IDS.get(key, name)


def copy_to_clipboard(writer: Callable[[str], None], text: str) -> bool:
    """Best-effort copy of a wallet address or txid. Returns whether it succeeded."""
    if not text:
        return False
    try:
        writer(text)
    except Exception:
        logger.warning("Clipboard write failed", exc_info=True)
        return False
    return True
