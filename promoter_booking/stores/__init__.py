"""Stores: repository interfaces and their SQLAlchemy implementations."""
from promoter_booking.stores.interfaces import RateStore, PeriodStore, PromoterStore
from promoter_booking.stores.sql_store import SqlRateStore, SqlPeriodStore, SqlPromoterStore

__all__ = [
    'RateStore', 'PeriodStore', 'PromoterStore',
    'SqlRateStore', 'SqlPeriodStore', 'SqlPromoterStore',
]
