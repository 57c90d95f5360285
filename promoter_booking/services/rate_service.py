"""
Rate resolution service.

Resolves the hourly rate of a (promoter, period) pair at a given instant.
The fallback rate policy lives here and nowhere else: when no rate entry
covers the instant, or the lookup itself fails, the default rate is
returned flagged as degraded instead of failing the caller.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, Tuple

from prometheus_client import Counter

from promoter_booking.domain import RateResolution, quantize_money
from promoter_booking.stores.interfaces import RateStore

logger = logging.getLogger(__name__)

# Documented default hourly rate (R$) used when no rate entry applies
DEFAULT_FALLBACK_RATE = Decimal('40.00')

RateKey = Tuple[int, int]

rate_fallback_total = Counter(
    'rate_fallback_total',
    'Rate lookups answered with the fallback hourly rate',
    ['reason']
)


class RateResolver:
    """Resolve hourly rates against a RateStore."""

    def __init__(self, store: RateStore, fallback_rate: Decimal = DEFAULT_FALLBACK_RATE) -> None:
        self._store = store
        self.fallback_rate = quantize_money(Decimal(str(fallback_rate)))

    def resolve(self, promoter_id: int, period_id: int, as_of: datetime) -> RateResolution:
        """
        Return the rate in force at ``as_of``.

        Among entries with valid_from <= as_of < valid_until (or open-ended),
        the one with the latest valid_from wins.
        """
        try:
            candidates = self._store.list_active_rates(promoter_id, period_id, as_of)
        except Exception as e:
            logger.warning(
                f"[RATES] Lookup failed for promoter={promoter_id} period={period_id}: {e}",
                exc_info=True
            )
            return self._fallback(promoter_id, period_id, as_of, 'lookup_error')

        candidates = [c for c in candidates if c.covers(as_of)]
        if not candidates:
            return self._fallback(promoter_id, period_id, as_of, 'no_entry')

        if len(candidates) > 1:
            logger.warning(
                f"[RATES] {len(candidates)} overlapping entries for promoter={promoter_id} "
                f"period={period_id} at {as_of.isoformat()}; using the latest start"
            )

        best = max(candidates, key=lambda c: (c.valid_from, c.entry_id))
        return RateResolution(
            promoter_id=promoter_id,
            period_id=period_id,
            rate=best.hourly_rate,
            entry_id=best.entry_id,
            degraded=False
        )

    def resolve_many(self, keys: Iterable[RateKey], as_of: datetime,
                     max_workers: int = 1) -> Dict[RateKey, RateResolution]:
        """
        Resolve each distinct (promoter_id, period_id) once.

        With ``max_workers`` > 1 the lookups run concurrently; the returned
        mapping follows first-seen key order either way.
        """
        unique_keys = list(dict.fromkeys((int(p), int(q)) for p, q in keys))
        if not unique_keys:
            return {}

        def lookup(key: RateKey) -> RateResolution:
            return self.resolve(key[0], key[1], as_of)

        if max_workers > 1 and len(unique_keys) > 1:
            with ThreadPoolExecutor(max_workers=min(max_workers, len(unique_keys))) as executor:
                results = list(executor.map(lookup, unique_keys))
        else:
            results = [lookup(key) for key in unique_keys]

        return dict(zip(unique_keys, results))

    def _fallback(self, promoter_id: int, period_id: int, as_of: datetime, reason: str) -> RateResolution:
        logger.warning(
            f"[RATES] RATE_RESOLUTION_DEGRADED promoter={promoter_id} period={period_id} "
            f"as_of={as_of.isoformat()} reason={reason}; using fallback {self.fallback_rate}"
        )
        rate_fallback_total.labels(reason=reason).inc()
        return RateResolution(
            promoter_id=promoter_id,
            period_id=period_id,
            rate=self.fallback_rate,
            entry_id=None,
            degraded=True
        )
