"""
Unit tests for RateResolver.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from promoter_booking.services.rate_service import DEFAULT_FALLBACK_RATE, RateResolver

AS_OF = datetime(2025, 3, 10, 14, 30)


class TestResolve:
    """Tests for single lookups."""

    def test_open_ended_entry_applies(self, rate_store):
        resolver = RateResolver(rate_store)
        resolution = resolver.resolve(1, 3, AS_OF)

        assert resolution.rate == Decimal('35.00')
        assert resolution.degraded is False
        assert resolution.entry_id is not None

    def test_missing_entry_uses_fallback(self, rate_store):
        """No entry for (99, 7) resolves to the default 40.00, flagged degraded."""
        resolution = RateResolver(rate_store).resolve(99, 7, AS_OF)

        assert resolution.rate == Decimal('40.00')
        assert resolution.rate == DEFAULT_FALLBACK_RATE
        assert resolution.degraded is True
        assert resolution.entry_id is None

    def test_latest_start_wins_on_overlap(self, rate_store):
        rate_store.add(2, 1, '30.00', valid_from=datetime(2024, 1, 1))
        newer = rate_store.add(2, 1, '45.00', valid_from=datetime(2025, 1, 1))

        resolution = RateResolver(rate_store).resolve(2, 1, AS_OF)
        assert resolution.rate == Decimal('45.00')
        assert resolution.entry_id == newer.entry_id

    def test_window_is_half_open(self, rate_store):
        """valid_from is inclusive, valid_until exclusive."""
        boundary = datetime(2025, 3, 1)
        rate_store.add(3, 1, '30.00', valid_from=datetime(2024, 1, 1), valid_until=boundary)
        rate_store.add(3, 1, '50.00', valid_from=boundary)
        resolver = RateResolver(rate_store)

        assert resolver.resolve(3, 1, boundary).rate == Decimal('50.00')
        assert resolver.resolve(3, 1, boundary - timedelta(seconds=1)).rate == Decimal('30.00')

    def test_expired_and_future_entries_ignored(self, rate_store):
        rate_store.add(4, 1, '30.00', valid_from=datetime(2023, 1, 1), valid_until=datetime(2024, 1, 1))
        rate_store.add(4, 1, '99.00', valid_from=datetime(2030, 1, 1))

        resolution = RateResolver(rate_store).resolve(4, 1, AS_OF)
        assert resolution.degraded is True

    def test_store_failure_degrades_instead_of_raising(self, rate_store):
        rate_store.failing.add((1, 3))
        resolution = RateResolver(rate_store).resolve(1, 3, AS_OF)

        assert resolution.degraded is True
        assert resolution.rate == Decimal('40.00')

    def test_configured_fallback_is_quantized(self, rate_store):
        resolver = RateResolver(rate_store, fallback_rate='42.5')
        assert resolver.resolve(99, 7, AS_OF).rate == Decimal('42.50')

    def test_resolution_is_idempotent(self, rate_store):
        resolver = RateResolver(rate_store)
        assert resolver.resolve(1, 4, AS_OF) == resolver.resolve(1, 4, AS_OF)
        assert resolver.resolve(99, 7, AS_OF) == resolver.resolve(99, 7, AS_OF)

    def test_aware_instant_compares_with_naive_entries(self, rate_store):
        aware = AS_OF.replace(tzinfo=timezone.utc)
        assert RateResolver(rate_store).resolve(1, 1, aware).degraded is False


class TestResolveMany:
    """Tests for batched lookups."""

    def test_each_pair_looked_up_once(self, rate_store):
        resolver = RateResolver(rate_store)
        keys = [(1, 3), (1, 3), (1, 4), (1, 3)]

        resolved = resolver.resolve_many(keys, AS_OF)

        assert list(resolved) == [(1, 3), (1, 4)]
        assert sorted(rate_store.calls) == [(1, 3), (1, 4)]

    def test_concurrent_lookups_match_sequential(self, rate_store):
        keys = [(1, period_id) for period_id in range(1, 7)] + [(99, 7)]

        sequential = RateResolver(rate_store).resolve_many(keys, AS_OF, max_workers=1)
        concurrent = RateResolver(rate_store).resolve_many(keys, AS_OF, max_workers=4)

        assert list(concurrent) == keys
        assert concurrent == sequential

    def test_empty_keys(self, rate_store):
        assert RateResolver(rate_store).resolve_many([], AS_OF) == {}
        assert rate_store.calls == []
