"""
Unit tests for the pricing engine and the booking facade.
"""

from datetime import datetime
from decimal import Decimal

import pytest

from promoter_booking.domain import (
    DaySelection, OrderItem, ValidatedSelection, Weekday, WeekSelection
)
from promoter_booking.exceptions import BusinessLogicError, NoSelectionError, NotFoundError
from promoter_booking.services.booking_service import BookingService
from promoter_booking.services.pricing_service import PricingEngine
from promoter_booking.services.rate_service import RateResolver

AS_OF = datetime(2025, 3, 10, 9, 0)
WEEKDAY_MORNING, WEEKDAY_AFTERNOON, WEEKDAY_FULL = 1, 2, 3
SATURDAY_MORNING = 4


@pytest.fixture
def engine(rate_store):
    return PricingEngine(RateResolver(rate_store))


@pytest.fixture
def booking(promoters_store, periods_store, rate_store):
    return BookingService(promoters_store, periods_store, PricingEngine(RateResolver(rate_store)))


class TestPricingEngine:
    """Tests for PricingEngine.price."""

    def test_reference_week(self, engine):
        """Monday 8h Integral @35 + Saturday 4h Morning @48 = 12h, 472.00."""
        validated = [
            ValidatedSelection(Weekday.SABADO, 4, SATURDAY_MORNING),
            ValidatedSelection(Weekday.SEGUNDA, 8, WEEKDAY_FULL),
        ]
        result = engine.price(1, validated, AS_OF)

        assert [line.day for line in result.lines] == [Weekday.SEGUNDA, Weekday.SABADO]
        assert result.lines[0].line_total == Decimal('280.00')
        assert result.lines[1].line_total == Decimal('192.00')
        assert result.total_hours == 12
        assert result.total_value == Decimal('472.00')
        assert result.degraded is False

    def test_unknown_rate_priced_with_fallback(self, engine):
        result = engine.price(99, [ValidatedSelection(Weekday.TERCA, 5, 7)], AS_OF)

        assert result.total_value == Decimal('200.00')
        assert result.lines[0].hourly_rate == Decimal('40.00')
        assert result.degraded is True
        assert result.degraded_pairs == [(99, 7)]

    def test_total_rounded_once_half_up(self, rate_store):
        rate_store.add(5, WEEKDAY_MORNING, '33.335')
        engine = PricingEngine(RateResolver(rate_store))

        result = engine.price(5, [
            ValidatedSelection(Weekday.SEGUNDA, 1, WEEKDAY_MORNING),
            ValidatedSelection(Weekday.TERCA, 1, WEEKDAY_MORNING),
        ], AS_OF)

        # 33.335 + 33.335 = 66.67 exactly; rounding each line first would give 66.68
        assert result.total_value == Decimal('66.67')

    def test_same_pair_resolved_once(self, engine, rate_store):
        validated = [ValidatedSelection(day, 8, WEEKDAY_FULL) for day in list(Weekday)[:5]]
        result = engine.price(1, validated, AS_OF)

        assert result.total_value == Decimal('1400.00')
        assert rate_store.calls == [(1, WEEKDAY_FULL)]

    def test_price_many_shares_lookups(self, rate_store):
        rate_store.add(2, WEEKDAY_MORNING, '50.00')
        engine = PricingEngine(RateResolver(rate_store), max_workers=4)

        results = engine.price_many([
            OrderItem(1, [ValidatedSelection(Weekday.SEGUNDA, 4, WEEKDAY_MORNING)]),
            OrderItem(2, [ValidatedSelection(Weekday.SEGUNDA, 4, WEEKDAY_MORNING),
                          ValidatedSelection(Weekday.QUINTA, 2, WEEKDAY_MORNING)]),
        ], AS_OF)

        assert [r.promoter_id for r in results] == [1, 2]
        assert results[0].total_value == Decimal('160.00')
        assert results[1].total_value == Decimal('300.00')
        assert sorted(rate_store.calls) == [(1, WEEKDAY_MORNING), (2, WEEKDAY_MORNING)]

    def test_concurrent_pricing_keeps_canonical_order(self, rate_store):
        validated = [
            ValidatedSelection(Weekday.SABADO, 4, SATURDAY_MORNING),
            ValidatedSelection(Weekday.QUARTA, 4, WEEKDAY_AFTERNOON),
            ValidatedSelection(Weekday.SEGUNDA, 8, WEEKDAY_FULL),
            ValidatedSelection(Weekday.TERCA, 4, WEEKDAY_MORNING),
        ]
        sequential = PricingEngine(RateResolver(rate_store)).price(1, validated, AS_OF)
        concurrent = PricingEngine(RateResolver(rate_store), max_workers=4).price(1, validated, AS_OF)

        assert [line.day for line in concurrent.lines] == [
            Weekday.SEGUNDA, Weekday.TERCA, Weekday.QUARTA, Weekday.SABADO
        ]
        assert concurrent.lines == sequential.lines
        assert concurrent.total_value == sequential.total_value

    def test_serialised_money_has_two_decimals(self, engine):
        result = engine.price(1, [ValidatedSelection(Weekday.SEGUNDA, 8, WEEKDAY_FULL)], AS_OF)
        data = result.to_dict()

        assert data['total_value'] == '280.00'
        assert data['lines'][0]['hourly_rate'] == '35.00'
        assert data['lines'][0]['day_label'] == 'Segunda-feira'


class TestBookingService:
    """Tests for the booking facade over in-memory stores."""

    def test_compute_pricing(self, booking):
        selections = WeekSelection(
            segunda=DaySelection(chosen=True, hours=8, period_id=WEEKDAY_FULL),
            sabado=DaySelection(chosen=True, hours=4, period_id=SATURDAY_MORNING),
        )
        result = booking.compute_pricing(1, selections, as_of=AS_OF)
        assert result.total_value == Decimal('472.00')

        summary = booking.pricing_summary(result)
        assert summary['summary'] == 'Segunda-feira: 8h (Integral (8h-17h)), Sábado: 4h (Manhã (8h-12h))'
        assert summary['lines'][1]['period_label'] == 'Manhã (8h-12h)'
        assert summary['degraded_pairs'] == []

    def test_nothing_chosen_makes_no_rate_lookup(self, booking, rate_store):
        with pytest.raises(NoSelectionError):
            booking.compute_pricing(1, WeekSelection(), as_of=AS_OF)
        assert rate_store.calls == []

    def test_unknown_promoter(self, booking):
        selections = WeekSelection(segunda=DaySelection(chosen=True, hours=8, period_id=WEEKDAY_FULL))
        with pytest.raises(NotFoundError):
            booking.validate_selections(42, selections)

    def test_prepare_items_validates_every_block(self, booking):
        items = booking.prepare_items([
            {'promoter_id': '1', 'selections': {'segunda': {'chosen': True, 'hours': 8, 'period_id': 3}}},
        ])
        assert items[0].promoter_id == 1
        assert items[0].selections[0].day is Weekday.SEGUNDA

    def test_prepare_items_rejects_duplicate_promoter(self, booking):
        block = {'promoter_id': 1, 'selections': {'segunda': {'chosen': True, 'hours': 8, 'period_id': 3}}}
        with pytest.raises(BusinessLogicError) as exc:
            booking.prepare_items([block, block])
        assert 'mais de uma vez' in str(exc.value)

    def test_prepare_items_rejects_unknown_weekday(self, booking, rate_store):
        with pytest.raises(BusinessLogicError) as exc:
            booking.prepare_items([{'promoter_id': 1, 'selections': {'monday': {'chosen': True}}}])
        assert 'monday' in str(exc.value)
        assert rate_store.calls == []
