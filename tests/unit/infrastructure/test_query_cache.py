"""Unit tests for the query cache and payout query keys."""

from payoutdesk.application.dtos import MerchantFilter, PayoutFilter
from payoutdesk.infrastructure.query_cache import PayoutKeys, QueryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def test_every_payout_key_shares_the_payouts_prefix() -> None:
    keys = [
        PayoutKeys.STATS,
        PayoutKeys.merchants_list(MerchantFilter()),
        PayoutKeys.history_list(PayoutFilter()),
        PayoutKeys.detail("payout-1"),
    ]
    for key in keys:
        assert key[: len(PayoutKeys.PAYOUTS)] == PayoutKeys.PAYOUTS


def test_equal_filters_produce_equal_keys() -> None:
    assert PayoutKeys.merchants_list(
        MerchantFilter(search="jane")
    ) == PayoutKeys.merchants_list(MerchantFilter(search="jane"))
    assert PayoutKeys.merchants_list(MerchantFilter(page=1)) != PayoutKeys.merchants_list(
        MerchantFilter(page=2)
    )


def test_prefix_invalidation_drops_only_matching_entries() -> None:
    cache = QueryCache(stale_after=None)
    cache.set(PayoutKeys.STATS, "stats")
    cache.set(PayoutKeys.merchants_list(MerchantFilter()), "merchants")
    cache.set(("admin", "settings"), "other")

    assert cache.invalidate(PayoutKeys.PAYOUTS) == 2
    assert PayoutKeys.STATS not in cache
    assert cache.get(("admin", "settings")) == "other"
    assert len(cache) == 1


def test_invalidating_history_keeps_merchants() -> None:
    cache = QueryCache(stale_after=None)
    cache.set(PayoutKeys.history_list(PayoutFilter()), "history")
    cache.set(PayoutKeys.merchants_list(MerchantFilter()), "merchants")

    cache.invalidate(PayoutKeys.HISTORY)
    assert cache.get(PayoutKeys.history_list(PayoutFilter())) is None
    assert cache.get(PayoutKeys.merchants_list(MerchantFilter())) == "merchants"


def test_entries_expire_after_stale_after() -> None:
    clock = FakeClock()
    cache = QueryCache(stale_after=120.0, clock=clock)
    cache.set(PayoutKeys.STATS, "stats")

    clock.now = 120.0
    assert cache.get(PayoutKeys.STATS) == "stats"
    clock.now = 120.5
    assert cache.get(PayoutKeys.STATS) is None
    assert len(cache) == 0


def test_set_replaces_entry_and_resets_age() -> None:
    clock = FakeClock()
    cache = QueryCache(stale_after=10.0, clock=clock)
    cache.set(PayoutKeys.STATS, "old")
    clock.now = 8.0
    cache.set(PayoutKeys.STATS, "new")
    clock.now = 15.0
    assert cache.get(PayoutKeys.STATS) == "new"


def test_clear() -> None:
    cache = QueryCache()
    cache.set(PayoutKeys.STATS, "stats")
    cache.clear()
    assert len(cache) == 0


def test_generation_advances_on_invalidate_and_clear() -> None:
    cache = QueryCache()
    start = cache.generation

    cache.invalidate(PayoutKeys.PAYOUTS)
    assert cache.generation == start + 1

    cache.clear()
    assert cache.generation == start + 2

    cache.set(PayoutKeys.STATS, "stats")
    cache.get(PayoutKeys.STATS)
    assert cache.generation == start + 2
