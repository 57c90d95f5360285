"""
Booking facade used by the HTTP layer.

Wires the stores, the selection validator, the pricing engine and the
order registrar together. Every collaborator is passed in explicitly.
"""
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from promoter_booking.domain import (
    DayClass, OrderItem, PeriodInfo, PricingResult, ValidatedSelection, WeekSelection
)
from promoter_booking.exceptions import BusinessLogicError, NotFoundError
from promoter_booking.services.order_service import OrderRegistrar
from promoter_booking.services.pricing_service import PricingEngine
from promoter_booking.services.selection_service import validate_selections
from promoter_booking.stores.interfaces import PeriodStore, PromoterStore


def parse_booking_block(raw: Any) -> Tuple[int, WeekSelection]:
    """Parse one ``{"promoter_id": ..., "selections": {...}}`` block of a request body."""
    if not isinstance(raw, Mapping):
        raise BusinessLogicError('Cada item deve ser um objeto JSON')

    try:
        promoter_id = int(raw['promoter_id'])
    except (KeyError, TypeError, ValueError):
        raise BusinessLogicError('promoter_id inválido')

    try:
        selections = WeekSelection.from_dict(raw.get('selections'))
    except (ValueError, AttributeError) as e:
        raise BusinessLogicError(str(e))

    return promoter_id, selections


class BookingService:
    """Validation, pricing and checkout for client bookings."""

    def __init__(self, promoters: PromoterStore, periods: PeriodStore, pricing: PricingEngine,
                 registrar: Optional[OrderRegistrar] = None) -> None:
        self._promoters = promoters
        self._periods = periods
        self._pricing = pricing
        self._registrar = registrar

    def find_promoters_by_region(self, uf: str, city: str, brand: Optional[str] = None,
                                 store: Optional[str] = None) -> List[dict]:
        return self._promoters.find_by_region(uf, city, brand=brand, store=store)

    def find_periods_by_day_class(self, day_class: DayClass) -> List[PeriodInfo]:
        return self._periods.list_by_day_class(day_class)

    def validate_selections(self, promoter_id: int, selections: WeekSelection) -> List[ValidatedSelection]:
        """Validate against the promoter's declared availability."""
        availability = self._promoters.get_availability(promoter_id)
        if availability is None:
            raise NotFoundError(f'Promotor {promoter_id} não encontrado ou inativo',
                                payload={'promoter_id': promoter_id})
        return validate_selections(availability, selections, self._periods)

    def compute_pricing(self, promoter_id: int, selections: WeekSelection,
                        as_of: Optional[datetime] = None) -> PricingResult:
        validated = self.validate_selections(promoter_id, selections)
        return self._pricing.price(promoter_id, validated, as_of or datetime.now())

    def pricing_summary(self, result: PricingResult) -> Dict[str, Any]:
        """Pricing payload with period labels and the cart description line."""
        periods = self._periods.get_periods(line.period_id for line in result.lines)
        labels = {pid: info.label for pid, info in periods.items()}

        data = result.to_dict()
        for line in data['lines']:
            line['period_label'] = labels.get(line['period_id'])
        data['summary'] = result.summary(labels)
        data['degraded_pairs'] = [
            {'promoter_id': promoter_id, 'period_id': period_id}
            for promoter_id, period_id in result.degraded_pairs
        ]
        return data

    def prepare_items(self, raw_items: Sequence[Mapping[str, Any]]) -> List[OrderItem]:
        """
        Validate every promoter block of a checkout payload.

        Each block is ``{"promoter_id": 1, "selections": {...week...}}``.
        """
        if not raw_items:
            raise BusinessLogicError('O carrinho está vazio')

        items = []
        seen = set()
        for raw in raw_items:
            promoter_id, selections = parse_booking_block(raw)
            if promoter_id in seen:
                raise BusinessLogicError(f'Promotor {promoter_id} aparece mais de uma vez no pedido')
            seen.add(promoter_id)

            items.append(OrderItem(
                promoter_id=promoter_id,
                selections=self.validate_selections(promoter_id, selections)
            ))
        return items

    def checkout(self, client_id: int, payment_method: str, raw_items: Sequence[Mapping[str, Any]]) -> int:
        """Validate the cart then register the order; returns the order id."""
        if self._registrar is None:
            raise RuntimeError('BookingService built without an OrderRegistrar')
        items = self.prepare_items(raw_items)
        return self._registrar.register_order(client_id, payment_method, items)


def build_booking_service(session, session_factory, config: Mapping[str, Any]) -> BookingService:
    """Assemble a BookingService over SQL stores using app config values."""
    from promoter_booking.stores import SqlPeriodStore, SqlPromoterStore, SqlRateStore
    from promoter_booking.services.rate_service import DEFAULT_FALLBACK_RATE, RateResolver

    resolver = RateResolver(
        SqlRateStore(session_factory),
        fallback_rate=config.get('FALLBACK_HOURLY_RATE') or DEFAULT_FALLBACK_RATE
    )
    pricing = PricingEngine(resolver, max_workers=config.get('RATE_LOOKUP_WORKERS', 1))
    return BookingService(
        promoters=SqlPromoterStore(session),
        periods=SqlPeriodStore(session),
        pricing=pricing,
        registrar=OrderRegistrar(session, pricing)
    )
