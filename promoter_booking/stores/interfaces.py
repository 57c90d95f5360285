"""Store interfaces (repository pattern).

Services depend on these interfaces only, so tests can pass in-memory
doubles instead of a live database.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from promoter_booking.domain import DayClass, PeriodInfo, RateCandidate, WeeklyAvailability


class RateStore(ABC):
    """Read access to time-bounded hourly rates."""

    @abstractmethod
    def list_active_rates(self, promoter_id: int, period_id: int, as_of: datetime) -> List[RateCandidate]:
        """Return entries with valid_from <= as_of and (valid_until is null or valid_until > as_of)."""
        ...


class PeriodStore(ABC):
    """Read access to the period catalogue."""

    @abstractmethod
    def get_periods(self, period_ids: Iterable[int]) -> Dict[int, PeriodInfo]:
        """Return the known periods among ``period_ids`` keyed by id."""
        ...

    @abstractmethod
    def list_by_day_class(self, day_class: DayClass) -> List[PeriodInfo]:
        """Return the periods of a day class ordered by id."""
        ...


class PromoterStore(ABC):
    """Read access to promoters and their availability."""

    @abstractmethod
    def get_availability(self, promoter_id: int) -> Optional[WeeklyAvailability]:
        """Return the availability of an active promoter, or None if unknown/inactive."""
        ...

    @abstractmethod
    def find_by_region(self, uf: str, city: str, brand: Optional[str] = None,
                       store: Optional[str] = None) -> List[dict]:
        """Return active promoters of a city, optionally narrowed by brand and store name."""
        ...
