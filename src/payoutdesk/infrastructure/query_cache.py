"""In-process cache for read results, keyed by hierarchical query keys."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

QueryKey = Tuple[Hashable, ...]


class PayoutKeys:
    """Query keys for the payout screens.

    Every key starts with ``PAYOUTS`` so a single prefix invalidation marks
    all payout reads stale.
    """

    PAYOUTS: QueryKey = ("admin", "payouts")
    STATS: QueryKey = ("admin", "payouts", "stats")
    MERCHANTS: QueryKey = ("admin", "payouts", "merchants")
    HISTORY: QueryKey = ("admin", "payouts", "list")

    @classmethod
    def merchants_list(cls, filters: Hashable) -> QueryKey:
        return cls.MERCHANTS + ("list", filters)

    @classmethod
    def history_list(cls, filters: Hashable) -> QueryKey:
        return cls.HISTORY + (filters,)

    @classmethod
    def detail(cls, payout_id: str) -> QueryKey:
        return cls.PAYOUTS + ("detail", payout_id)


@dataclass
class _Entry:
    value: Any
    stored_at: float


class QueryCache:
    """Stores read results until they are invalidated or grow older than ``stale_after``.

    Entries are replaced or dropped, never mutated in place. ``generation``
    advances on every invalidation so a read that started earlier can tell
    its result is already outdated.
    """

    def __init__(
        self,
        stale_after: Optional[float] = 120.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: Dict[QueryKey, _Entry] = {}
        self._stale_after = stale_after
        self._clock = clock
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, key: QueryKey) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if (
            self._stale_after is not None
            and self._clock() - entry.stored_at > self._stale_after
        ):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: QueryKey, value: Any) -> None:
        self._entries[key] = _Entry(value=value, stored_at=self._clock())

    def invalidate(self, prefix: QueryKey) -> int:
        """Drop every entry whose key starts with ``prefix``. Returns how many were dropped."""
        self._generation += 1
        stale = [key for key in self._entries if key[: len(prefix)] == prefix]
        for key in stale:
            del self._entries[key]
        return len(stale)

    def clear(self) -> None:
        self._generation += 1
        self._entries.clear()

    def __contains__(self, key: QueryKey) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
