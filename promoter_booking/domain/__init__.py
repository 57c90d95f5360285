"""Domain value objects shared by services, stores and blueprints."""
from promoter_booking.domain.weekdays import DayClass, Weekday
from promoter_booking.domain.selection import (
    PeriodInfo, WeeklyAvailability, DaySelection, WeekSelection, ValidatedSelection, OrderItem
)
from promoter_booking.domain.pricing import (
    CENT, quantize_money, RateCandidate, RateResolution, PricedLine, PricingResult
)

__all__ = [
    'DayClass', 'Weekday',
    'PeriodInfo', 'WeeklyAvailability', 'DaySelection', 'WeekSelection', 'ValidatedSelection', 'OrderItem',
    'CENT', 'quantize_money', 'RateCandidate', 'RateResolution', 'PricedLine', 'PricingResult',
]
