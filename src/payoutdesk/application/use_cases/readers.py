"""Read-side use cases: merchant aggregates, payout history and payout stats.

Readers are pure pass-through pagination boundaries: ordering and filtering
belong to the payout service, and pages are returned exactly as received.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Generic, TypeVar

from prometheus_client import Counter
from pydantic import ValidationError

from ...domain.entities import Payout, PayoutStats
from ...domain.errors import ApiError, QueryError, StaleResponseError
from ...domain.shared.admin_client_protocol import AdminPayoutClientProtocol
from ...infrastructure.query_cache import PayoutKeys, QueryCache, QueryKey
from ..dtos import MerchantFilter, MerchantPage, PayoutFilter, PayoutPage

logger = logging.getLogger(__name__)

payout_queries_total = Counter(
    "payout_queries_total",
    "Payout reads served, by resource and source",
    ["resource", "source"],
)

T = TypeVar("T")


class _LatestRequestReader(Generic[T]):
    """Caches results per query key and keeps only the newest request's response.

    Every call bumps a sequence number, including calls answered from the cache,
    so a slow response for an older query can never overwrite what the caller
    asked for last. A response is only cached if no invalidation happened
    while it was in flight.
    """

    resource = "query"

    def __init__(self, client: AdminPayoutClientProtocol, cache: QueryCache) -> None:
        self.client = client
        self.cache = cache
        self._sequence = 0

    async def _read(self, key: QueryKey, load: Callable[[], Awaitable[T]]) -> T:
        self._sequence += 1
        sequence = self._sequence

        cached = self.cache.get(key)
        if cached is not None:
            payout_queries_total.labels(resource=self.resource, source="cache").inc()
            return cached

        generation = self.cache.generation
        try:
            result = await load()
        except ApiError as e:
            self._raise_if_superseded(sequence, key)
            logger.warning("Failed to load %s: %s", self.resource, e.message)
            raise QueryError.from_api_error(e) from e
        except ValidationError as e:
            self._raise_if_superseded(sequence, key)
            logger.exception("Malformed %s response", self.resource)
            raise QueryError(f"Malformed {self.resource} response") from e

        self._raise_if_superseded(sequence, key)
        payout_queries_total.labels(resource=self.resource, source="network").inc()
        if self.cache.generation == generation:
            self.cache.set(key, result)
        else:
            logger.debug(
                "Not caching %s response for %r; invalidated in flight",
                self.resource,
                key,
            )
        return result

    def _raise_if_superseded(self, sequence: int, key: QueryKey) -> None:
        if sequence != self._sequence:
            logger.warning(
                "Discarding %s response for superseded request %r", self.resource, key
            )
            raise StaleResponseError(
                f"{self.resource} request {sequence} superseded by {self._sequence}"
            )


class MerchantAggregateReader(_LatestRequestReader[MerchantPage]):
    """Reads pages of merchants awaiting payout."""

    resource = "merchants"

    async def fetch(self, filters: MerchantFilter) -> MerchantPage:
        return await self._read(
            PayoutKeys.merchants_list(filters),
            lambda: self.client.list_payout_merchants(filters),
        )


class PayoutHistoryReader(_LatestRequestReader[PayoutPage]):
    """Reads pages of historical payouts."""

    resource = "payouts"

    async def fetch(self, filters: PayoutFilter) -> PayoutPage:
        return await self._read(
            PayoutKeys.history_list(filters),
            lambda: self.client.list_payouts(filters),
        )


class PayoutDetailReader(_LatestRequestReader[Payout]):
    """Reads a single payout for the details view."""

    resource = "payout"

    async def fetch(self, payout_id: str) -> Payout:
        return await self._read(
            PayoutKeys.detail(payout_id),
            lambda: self.client.get_payout(payout_id),
        )


class PayoutStatsReader(_LatestRequestReader[PayoutStats]):
    """Reads platform-wide payout totals."""

    resource = "stats"

    async def fetch(self) -> PayoutStats:
        return await self._read(PayoutKeys.STATS, self.client.get_payout_stats)
