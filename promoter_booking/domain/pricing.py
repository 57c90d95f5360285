"""Rate and pricing value objects."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

from promoter_booking.domain.weekdays import Weekday

CENT = Decimal('0.01')


def quantize_money(value: Decimal) -> Decimal:
    """Round a monetary amount to cents, half-up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class RateCandidate:
    """A rate entry whose validity window contains the lookup instant."""
    entry_id: int
    hourly_rate: Decimal
    valid_from: datetime
    valid_until: Optional[datetime] = None

    def covers(self, as_of: datetime) -> bool:
        as_of = _naive(as_of)
        if _naive(self.valid_from) > as_of:
            return False
        return self.valid_until is None or _naive(self.valid_until) > as_of


@dataclass(frozen=True)
class RateResolution:
    """Outcome of a rate lookup; ``degraded`` marks the fallback rate."""
    promoter_id: int
    period_id: int
    rate: Decimal
    entry_id: Optional[int] = None
    degraded: bool = False


@dataclass(frozen=True)
class PricedLine:
    promoter_id: int
    day: Weekday
    period_id: int
    hours: int
    hourly_rate: Decimal
    line_total: Decimal
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'promoter_id': self.promoter_id,
            'day': self.day.value,
            'day_label': self.day.label,
            'period_id': self.period_id,
            'hours': self.hours,
            'hourly_rate': f'{self.hourly_rate:.2f}',
            'line_total': f'{quantize_money(self.line_total):.2f}',
            'degraded': self.degraded,
        }


@dataclass(frozen=True)
class PricingResult:
    """
    Priced booking for one promoter.

    ``lines`` follow canonical weekday order. ``total_value`` is the
    unrounded sum of line totals rounded once to cents.
    """
    promoter_id: int
    as_of: datetime
    lines: List[PricedLine] = field(default_factory=list)
    total_hours: int = 0
    total_value: Decimal = Decimal('0.00')

    @property
    def degraded(self) -> bool:
        return any(line.degraded for line in self.lines)

    @property
    def degraded_pairs(self) -> List[Tuple[int, int]]:
        pairs = []
        for line in self.lines:
            pair = (line.promoter_id, line.period_id)
            if line.degraded and pair not in pairs:
                pairs.append(pair)
        return pairs

    def summary(self, period_labels: Optional[Dict[int, str]] = None) -> str:
        """One-line description, e.g. 'Segunda-feira: 8h (Integral (8h-17h))'."""
        labels = period_labels or {}
        parts = []
        for line in self.lines:
            period = labels.get(line.period_id, f'#{line.period_id}')
            parts.append(f'{line.day.label}: {line.hours}h ({period})')
        return ', '.join(parts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'promoter_id': self.promoter_id,
            'as_of': self.as_of.isoformat(),
            'lines': [line.to_dict() for line in self.lines],
            'total_hours': self.total_hours,
            'total_value': f'{self.total_value:.2f}',
            'degraded': self.degraded,
        }


def _naive(value: datetime) -> datetime:
    """Aware datetimes become naive local time so both kinds compare."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)
