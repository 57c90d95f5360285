import threading
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from config import TestingConfig
from promoter_booking import create_app, database
from promoter_booking.domain import DayClass, PeriodInfo, RateCandidate, WeeklyAvailability
from promoter_booking.models import (
    Availability, Brand, Client, Promoter, RateEntry, Store
)
from promoter_booking.services.seed_service import seed_periods
from promoter_booking.stores.interfaces import PeriodStore, PromoterStore, RateStore

RATES_VALID_FROM = datetime(2024, 1, 1)


# ---------------------------------------------------------------------------
# In-memory stores
# ---------------------------------------------------------------------------

class FakeRateStore(RateStore):
    """Rate entries kept in a dict; records every lookup."""

    def __init__(self):
        self.entries = {}
        self.calls = []
        self.failing = set()
        self._next_id = 1
        self._lock = threading.Lock()

    def add(self, promoter_id, period_id, rate, valid_from=RATES_VALID_FROM, valid_until=None):
        candidate = RateCandidate(
            entry_id=self._next_id,
            hourly_rate=Decimal(str(rate)),
            valid_from=valid_from,
            valid_until=valid_until
        )
        self._next_id += 1
        self.entries.setdefault((promoter_id, period_id), []).append(candidate)
        return candidate

    def list_active_rates(self, promoter_id, period_id, as_of):
        with self._lock:
            self.calls.append((promoter_id, period_id))
        if (promoter_id, period_id) in self.failing:
            raise RuntimeError('connection reset by peer')
        # Window filtering is left to the resolver
        return list(self.entries.get((promoter_id, period_id), []))


class FakePeriodStore(PeriodStore):
    def __init__(self, periods):
        self.periods = {p.id: p for p in periods}
        self.calls = 0

    def get_periods(self, period_ids):
        self.calls += 1
        return {pid: self.periods[pid] for pid in period_ids if pid in self.periods}

    def list_by_day_class(self, day_class):
        return [p for p in self.periods.values() if p.day_class == DayClass(day_class)]


class FakePromoterStore(PromoterStore):
    def __init__(self, availability=None):
        self.availability = dict(availability or {})

    def get_availability(self, promoter_id):
        return self.availability.get(promoter_id)

    def find_by_region(self, uf, city, brand=None, store=None):
        return []


# Period ids follow the seeded catalogue order
WEEKDAY_MORNING, WEEKDAY_AFTERNOON, WEEKDAY_FULL = 1, 2, 3
SATURDAY_MORNING, SATURDAY_AFTERNOON, SUNDAY_MORNING = 4, 5, 6

CATALOGUE = [
    PeriodInfo(WEEKDAY_MORNING, 'Manhã (8h-12h)', DayClass.WEEKDAY),
    PeriodInfo(WEEKDAY_AFTERNOON, 'Tarde (13h-17h)', DayClass.WEEKDAY),
    PeriodInfo(WEEKDAY_FULL, 'Integral (8h-17h)', DayClass.WEEKDAY),
    PeriodInfo(SATURDAY_MORNING, 'Manhã (8h-12h)', DayClass.SATURDAY),
    PeriodInfo(SATURDAY_AFTERNOON, 'Tarde (13h-16h)', DayClass.SATURDAY),
    PeriodInfo(SUNDAY_MORNING, 'Manhã (9h-13h)', DayClass.SUNDAY),
]

STANDARD_AVAILABILITY = WeeklyAvailability(
    segunda=8, terca=8, quarta=8, quinta=8, sexta=8, sabado=4, domingo=0
)


@pytest.fixture
def periods_store():
    return FakePeriodStore(CATALOGUE)


@pytest.fixture
def rate_store():
    """Default rates for promoter 1: weekday 40/40/35, Saturday 48, Sunday 60."""
    store = FakeRateStore()
    for period_id, rate in [
        (WEEKDAY_MORNING, '40.00'), (WEEKDAY_AFTERNOON, '40.00'), (WEEKDAY_FULL, '35.00'),
        (SATURDAY_MORNING, '48.00'), (SATURDAY_AFTERNOON, '48.00'), (SUNDAY_MORNING, '60.00'),
    ]:
        store.add(1, period_id, rate)
    return store


@pytest.fixture
def promoters_store():
    return FakePromoterStore({1: STANDARD_AVAILABILITY})


# ---------------------------------------------------------------------------
# Application and database
# ---------------------------------------------------------------------------

@pytest.fixture
def app(tmp_path):
    """Application bound to a fresh SQLite file per test."""

    class _Config(TestingConfig):
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'promotores.db'}"

    app = create_app(_Config)
    database.create_all()
    yield app
    database.db_session.remove()
    database.engine.dispose()


@pytest.fixture
def http(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture
def session(app):
    """Database session for testing."""
    session = database.get_session()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def catalogue(session):
    """
    Seeded data set, exposed as plain ids.

    - six catalogue periods
    - an active and an inactive client
    - promoter "Ana" (São Paulo/SP, Supermercado A) with default rates
    - promoter "Bruno" (Campinas/SP, Loja C) with no rate entries
    - inactive promoter "Carla" (São Paulo/SP)
    """
    seeded = seed_periods(session)
    periods = [period for period, _ in seeded]
    default_rates = [rate for _, rate in seeded]

    brand_a = Brand(name='Supermercado A')
    brand_c = Brand(name='Loja C')
    store_centro = Store(brand=brand_a, name='Unidade Centro', city='São Paulo', uf='SP')
    store_campinas = Store(brand=brand_c, name='Unidade Campinas', city='Campinas', uf='SP')

    availability = dict(segunda=8, terca=8, quarta=8, quinta=8, sexta=8, sabado=4, domingo=0)

    ana = Promoter(
        name='Ana Souza', family='Geral', job_role='Promotor', city='São Paulo', uf='SP',
        active=True, availability=Availability(**availability), stores=[store_centro]
    )
    ana.rate_entries = [
        RateEntry(period=period, hourly_rate=rate, valid_from=RATES_VALID_FROM)
        for period, rate in zip(periods, default_rates)
    ]
    bruno = Promoter(
        name='Bruno Lima', family='Geral', job_role='Promotor', city='Campinas', uf='SP',
        active=True, availability=Availability(**availability), stores=[store_campinas]
    )
    carla = Promoter(
        name='Carla Dias', family='Geral', job_role='Promotor', city='São Paulo', uf='SP',
        active=False, availability=Availability(**availability), stores=[store_centro]
    )

    client = Client(name='Cliente Teste', email='teste@exemplo.com', phone='11999999999', active=True)
    inactive_client = Client(name='Cliente Inativo', email='inativo@exemplo.com', active=False)

    session.add_all([ana, bruno, carla, client, inactive_client])
    session.commit()

    return SimpleNamespace(
        weekday_morning=periods[0].id,
        weekday_afternoon=periods[1].id,
        weekday_full=periods[2].id,
        saturday_morning=periods[3].id,
        saturday_afternoon=periods[4].id,
        sunday_morning=periods[5].id,
        ana=ana.id,
        bruno=bruno.id,
        carla=carla.id,
        client=client.id,
        inactive_client=inactive_client.id,
    )


@pytest.fixture
def logged_in(http, catalogue):
    """Test client with the active client stored in the Flask session."""
    with http.session_transaction() as flask_session:
        flask_session['client_id'] = catalogue.client
    return http
