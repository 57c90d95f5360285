"""
Demo data seeding.

Populates an empty database with the period catalogue, a test client and
one promoter per sample city, each with availability and rate entries.
"""
import logging
from datetime import datetime, time
from decimal import Decimal
from typing import Dict, List, Tuple

from sqlalchemy.orm import Session

from promoter_booking.domain import DayClass
from promoter_booking.models import Availability, Brand, Client, Period, Promoter, RateEntry, Store

logger = logging.getLogger(__name__)

# (label, start, end, day class, default hourly rate)
PERIOD_CATALOGUE: List[Tuple[str, time, time, DayClass, Decimal]] = [
    ('Manhã (8h-12h)', time(8), time(12), DayClass.WEEKDAY, Decimal('40.00')),
    ('Tarde (13h-17h)', time(13), time(17), DayClass.WEEKDAY, Decimal('40.00')),
    ('Integral (8h-17h)', time(8), time(17), DayClass.WEEKDAY, Decimal('35.00')),
    ('Manhã (8h-12h)', time(8), time(12), DayClass.SATURDAY, Decimal('48.00')),
    ('Tarde (13h-16h)', time(13), time(16), DayClass.SATURDAY, Decimal('48.00')),
    ('Manhã (9h-13h)', time(9), time(13), DayClass.SUNDAY, Decimal('60.00')),
]

SAMPLE_REGIONS: Dict[str, List[str]] = {
    'SP': ['São Paulo', 'Campinas', 'Santos'],
    'RJ': ['Rio de Janeiro', 'Niterói', 'Petrópolis'],
    'MG': ['Belo Horizonte', 'Uberlândia', 'Juiz de Fora'],
    'RS': ['Porto Alegre', 'Gramado', 'Caxias do Sul'],
    'PR': ['Curitiba', 'Londrina', 'Foz do Iguaçu'],
}

SAMPLE_BRANDS = ['Supermercado A', 'Supermercado B', 'Loja C', 'Mercado D']

DEFAULT_AVAILABILITY = {
    'segunda': 8, 'terca': 8, 'quarta': 8, 'quinta': 8, 'sexta': 8, 'sabado': 4, 'domingo': 0,
}

DEMO_CLIENT_EMAIL = 'teste@exemplo.com'


def seed_periods(session: Session) -> List[Tuple[Period, Decimal]]:
    """Create the period catalogue if missing; returns (period, default rate) pairs."""
    seeded = []
    for label, start, end, day_class, rate in PERIOD_CATALOGUE:
        period = session.query(Period).filter_by(label=label, day_class=day_class.value).first()
        if not period:
            period = Period(label=label, start_time=start, end_time=end, day_class=day_class.value)
            session.add(period)
        seeded.append((period, rate))
    session.flush()
    return seeded


def seed_demo_data(session: Session, valid_from: datetime = None) -> Dict[str, int]:
    """
    Populate an empty database.

    Skipped (returns ``{'skipped': <promoter count>}``) when promoters
    already exist. Otherwise commits everything in one transaction.
    """
    existing = session.query(Promoter).count()
    if existing > 0:
        logger.info(f"[SEED] Database already has {existing} promoters; skipping")
        return {'skipped': existing}

    valid_from = valid_from or datetime(2024, 1, 1)

    try:
        periods = seed_periods(session)

        if not session.query(Client).filter_by(email=DEMO_CLIENT_EMAIL).first():
            session.add(Client(name='Cliente Teste', email=DEMO_CLIENT_EMAIL, phone='11999999999'))

        brands = []
        for name in SAMPLE_BRANDS:
            brand = session.query(Brand).filter_by(name=name).first() or Brand(name=name)
            session.add(brand)
            brands.append(brand)

        promoters = 0
        for uf, cities in SAMPLE_REGIONS.items():
            for city in cities:
                brand = brands[promoters % len(brands)]
                store = Store(brand=brand, name=f'Unidade {city}', city=city, uf=uf)
                promoter = Promoter(
                    name=f'Promotor {city}',
                    family='Geral',
                    job_role='Promotor',
                    city=city,
                    uf=uf,
                    active=True,
                    availability=Availability(**DEFAULT_AVAILABILITY),
                    stores=[store]
                )
                promoter.rate_entries = [
                    RateEntry(period=period, hourly_rate=rate, valid_from=valid_from)
                    for period, rate in periods
                ]
                session.add(promoter)
                promoters += 1

        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info(f"[SEED] Seeded {len(periods)} periods and {promoters} promoters")
    return {'periods': len(periods), 'promoters': promoters}
