"""
Pricing engine.

Prices validated selections with rates re-resolved at confirmation time.
All money arithmetic is Decimal; the total is the unrounded sum of line
totals, rounded once (half-up, 2 places).
"""
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Sequence

from promoter_booking.domain import OrderItem, PricedLine, PricingResult, ValidatedSelection, quantize_money
from promoter_booking.services.rate_service import RateResolver


class PricingEngine:
    """Compute per-day and total cost of bookings."""

    def __init__(self, resolver: RateResolver, max_workers: int = 1) -> None:
        self._resolver = resolver
        self._max_workers = max(1, int(max_workers or 1))

    def price(self, promoter_id: int, validated: Sequence[ValidatedSelection], as_of: datetime) -> PricingResult:
        """Price one promoter's validated selections as of ``as_of``."""
        return self.price_many([OrderItem(promoter_id=promoter_id, selections=validated)], as_of)[0]

    def price_many(self, items: Iterable[OrderItem], as_of: datetime) -> List[PricingResult]:
        """
        Price several promoters at once.

        Every distinct (promoter, period) pair is resolved a single time
        for the whole call; lookups may run concurrently and are joined
        back in canonical weekday order per promoter.
        """
        items = list(items)
        keys = [(item.promoter_id, s.period_id) for item in items for s in item.selections]
        rates = self._resolver.resolve_many(keys, as_of, max_workers=self._max_workers)

        results = []
        for item in items:
            lines = []
            for selection in sorted(item.selections, key=lambda s: s.day.index):
                resolution = rates[(int(item.promoter_id), int(selection.period_id))]
                lines.append(PricedLine(
                    promoter_id=item.promoter_id,
                    day=selection.day,
                    period_id=selection.period_id,
                    hours=selection.hours,
                    hourly_rate=resolution.rate,
                    line_total=Decimal(selection.hours) * resolution.rate,
                    degraded=resolution.degraded
                ))

            results.append(PricingResult(
                promoter_id=item.promoter_id,
                as_of=as_of,
                lines=lines,
                total_hours=sum(line.hours for line in lines),
                total_value=quantize_money(sum((line.line_total for line in lines), Decimal('0')))
            ))

        return results
