"""SQLAlchemy-backed stores."""
from datetime import datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session, selectinload

from promoter_booking.domain import DayClass, PeriodInfo, RateCandidate, WeeklyAvailability
from promoter_booking.models import Availability, Brand, Period, Promoter, RateEntry, Store
from promoter_booking.stores.interfaces import PeriodStore, PromoterStore, RateStore

# Filter value meaning "no filter" in the search form
ALL_FILTER = 'Todas'


class SqlRateStore(RateStore):
    """
    Rate lookups on ``rate_entry``.

    Opens one short-lived session per lookup so lookups can run on
    worker threads concurrently.
    """

    def __init__(self, session_factory) -> None:
        self._session_factory = session_factory

    def list_active_rates(self, promoter_id: int, period_id: int, as_of: datetime) -> List[RateCandidate]:
        with self._session_factory() as session:
            entries = session.query(RateEntry).filter(
                RateEntry.promoter_id == promoter_id,
                RateEntry.period_id == period_id,
                RateEntry.valid_from <= as_of,
                or_(RateEntry.valid_until.is_(None), RateEntry.valid_until > as_of)
            ).order_by(RateEntry.valid_from.desc(), RateEntry.id.desc()).all()

            return [
                RateCandidate(
                    entry_id=entry.id,
                    hourly_rate=Decimal(str(entry.hourly_rate)),
                    valid_from=entry.valid_from,
                    valid_until=entry.valid_until
                )
                for entry in entries
            ]


class SqlPeriodStore(PeriodStore):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_periods(self, period_ids: Iterable[int]) -> Dict[int, PeriodInfo]:
        ids = {int(pid) for pid in period_ids if pid is not None}
        if not ids:
            return {}
        periods = self._session.query(Period).filter(Period.id.in_(ids)).all()
        return {p.id: p.to_info() for p in periods}

    def list_by_day_class(self, day_class: DayClass) -> List[PeriodInfo]:
        periods = self._session.query(Period).filter(
            Period.day_class == DayClass(day_class).value
        ).order_by(Period.id).all()
        return [p.to_info() for p in periods]


class SqlPromoterStore(PromoterStore):
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_availability(self, promoter_id: int) -> Optional[WeeklyAvailability]:
        availability = self._session.query(Availability).join(Promoter).filter(
            Availability.promoter_id == promoter_id,
            Promoter.active.is_(True)
        ).first()
        return availability.to_weekly() if availability else None

    def find_by_region(self, uf: str, city: str, brand: Optional[str] = None,
                       store: Optional[str] = None) -> List[dict]:
        query = self._session.query(Promoter).options(
            selectinload(Promoter.availability),
            selectinload(Promoter.stores).selectinload(Store.brand)
        ).filter(
            Promoter.active.is_(True),
            func.upper(Promoter.uf) == (uf or '').strip().upper(),
            func.lower(Promoter.city) == (city or '').strip().lower()
        )

        # Brand and store filters stay optional
        if brand and brand != ALL_FILTER:
            query = query.filter(Promoter.stores.any(Store.brand.has(Brand.name == brand)))
        if store and store != ALL_FILTER:
            query = query.filter(Promoter.stores.any(Store.name == store))

        promoters = query.order_by(Promoter.name, Promoter.id).all()
        return [_promoter_to_dict(p) for p in promoters]


def _promoter_to_dict(promoter: Promoter) -> dict:
    availability = promoter.availability.to_weekly() if promoter.availability else WeeklyAvailability()
    return {
        'id': promoter.id,
        'name': promoter.name,
        'family': promoter.family,
        'job_role': promoter.job_role,
        'city': promoter.city,
        'uf': promoter.uf,
        'active': promoter.active,
        'stores': [
            {'id': s.id, 'name': s.name, 'brand': s.brand.name if s.brand else None}
            for s in promoter.stores
        ],
        'availability': availability.to_dict(),
    }
