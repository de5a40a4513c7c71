"""Mapping between merchant wallet storage fields and disbursement networks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .entities import MerchantWallets, Network


@dataclass(frozen=True)
class WalletNetwork:
    wallet_field: str
    label: str
    network: Network
    icon: str


# Order matters: the first configured wallet for a network is the one paid to.
WALLET_NETWORKS: tuple[WalletNetwork, ...] = (
    WalletNetwork("usdtPolygonWallet", "USDT (Polygon)", Network.POLYGON, "🔷"),
    WalletNetwork("usdtTrcWallet", "USDT (TRC-20)", Network.TRC20, "🔴"),
    WalletNetwork("usdtErcWallet", "USDT (ERC-20)", Network.ERC20, "⚫"),
    WalletNetwork("usdcPolygonWallet", "USDC (Polygon)", Network.POLYGON, "🔵"),
)


@dataclass(frozen=True)
class NetworkOption:
    """A selectable network backed by a configured merchant wallet."""

    label: str
    value: str
    icon: str
    address: str
    wallet_field: str


def is_configured(address: Optional[str]) -> bool:
    return bool(address and address.strip())


def available_networks(wallets: MerchantWallets) -> List[NetworkOption]:
    """List the networks a merchant can be paid on, skipping blank wallets."""
    options: List[NetworkOption] = []
    for entry in WALLET_NETWORKS:
        address = wallets.get(entry.wallet_field)
        if not is_configured(address):
            continue
        assert address is not None
        options.append(
            NetworkOption(
                label=entry.label,
                value=entry.network.value,
                icon=entry.icon,
                address=address,
                wallet_field=entry.wallet_field,
            )
        )
    return options


def resolve_network_wallet(
    wallets: MerchantWallets, network: str
) -> Optional[NetworkOption]:
    """Return the wallet registered for ``network``, or None if none is configured."""
    for option in available_networks(wallets):
        if option.value == network:
            return option
    return None
