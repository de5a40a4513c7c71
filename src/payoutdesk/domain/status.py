"""Payout lifecycle and its fixed presentation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet

from .entities import PayoutStatus
from .errors import UnknownPayoutStatusError


@dataclass(frozen=True)
class StatusBadge:
    label: str
    tone: str
    icon: str


TRANSITIONS: Dict[PayoutStatus, FrozenSet[PayoutStatus]] = {
    PayoutStatus.PENDING: frozenset({PayoutStatus.COMPLETED, PayoutStatus.REJECTED}),
    PayoutStatus.COMPLETED: frozenset(),
    PayoutStatus.REJECTED: frozenset(),
}

STATUS_BADGES: Dict[PayoutStatus, StatusBadge] = {
    PayoutStatus.PENDING: StatusBadge("Pending", "blue", "clock"),
    PayoutStatus.COMPLETED: StatusBadge("Completed", "green", "check-circle"),
    PayoutStatus.REJECTED: StatusBadge("Rejected", "red", "alert-circle"),
}


def parse_status(value: str) -> PayoutStatus:
    """Parse a raw status string.

    Raises:
        UnknownPayoutStatusError: If the value is not part of the lifecycle.
    """
    try:
        return PayoutStatus(value)
    except ValueError:
        raise UnknownPayoutStatusError(value) from None


def can_transition(src: str, dst: str) -> bool:
    return parse_status(dst) in TRANSITIONS[parse_status(src)]


def is_terminal(status: str) -> bool:
    return not TRANSITIONS[parse_status(status)]


def is_deletable(status: str) -> bool:
    """Only pending payouts may be deleted."""
    return parse_status(status) is PayoutStatus.PENDING


def status_badge(status: str) -> StatusBadge:
    return STATUS_BADGES[parse_status(status)]
