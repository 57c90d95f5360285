"""
Order registration and order history.

Handles checkout: client re-validation, pricing at confirmation time and
the transactional write of the order header plus its lines.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Sequence

from prometheus_client import Counter
from sqlalchemy.orm import Session, selectinload

from promoter_booking.domain import OrderItem, Weekday, quantize_money
from promoter_booking.exceptions import (
    BookingError, ClientNotFoundError, InvalidPaymentMethodError, InvalidStatusTransitionError,
    NoSelectionError, OrderNotFoundError, RegistrationFailedError
)
from promoter_booking.models import Client, Order, OrderLine, OrderStatus, normalize_payment_method
from promoter_booking.services.pricing_service import PricingEngine
from promoter_booking.utils.formatters import datetime_br, money_br

logger = logging.getLogger(__name__)

orders_registered_total = Counter(
    'orders_registered_total',
    'Orders persisted by the registrar'
)

order_registration_failures_total = Counter(
    'order_registration_failures_total',
    'Order registrations rolled back',
    ['reason']
)


class OrderRegistrar:
    """Persist orders atomically (header + every line, or nothing)."""

    def __init__(self, session: Session, pricing: PricingEngine,
                 clock: Callable[[], datetime] = datetime.now) -> None:
        self._session = session
        self._pricing = pricing
        self._clock = clock

    def register_order(self, client_id: int, payment_method: str, items: Sequence[OrderItem]) -> int:
        """
        Register a pending order for ``client_id``.

        Rates are resolved at call time. Rate lookups happen before the
        write so the transaction only spans the inserts.

        Returns:
            The new order id.

        Raises:
            ClientNotFoundError: unknown or inactive client (nothing written)
            InvalidPaymentMethodError: payment method not offered
            NoSelectionError: no line to book
            RegistrationFailedError: storage failure, fully rolled back
        """
        session = self._session

        client = session.query(Client).filter(Client.id == client_id, Client.active.is_(True)).first()
        if not client:
            order_registration_failures_total.labels(reason='client_not_found').inc()
            raise ClientNotFoundError(client_id)

        try:
            method = normalize_payment_method(payment_method)
        except ValueError:
            raise InvalidPaymentMethodError(payment_method)

        items = [item for item in items if item.selections]
        if not items:
            raise NoSelectionError('O pedido não possui nenhum dia selecionado')

        as_of = self._clock()
        priced = self._pricing.price_many(items, as_of)

        try:
            # 1. Order header
            order = Order(
                client_id=client.id,
                payment_method=method,
                status=OrderStatus.PENDING.value,
                created_at=as_of
            )
            session.add(order)
            session.flush()

            # 2. Lines, in checkout order
            position = 0
            for result in priced:
                for line in result.lines:
                    position += 1
                    session.add(OrderLine(
                        order_id=order.id,
                        position=position,
                        promoter_id=line.promoter_id,
                        weekday=line.day.value,
                        period_id=line.period_id,
                        hours=line.hours,
                        hourly_rate=line.hourly_rate,
                        line_total=line.line_total
                    ))

            session.flush()
            session.commit()

        except BookingError:
            session.rollback()
            raise
        except Exception as e:
            session.rollback()
            order_registration_failures_total.labels(reason='storage').inc()
            logger.error(f"[ORDERS] Registration failed for client={client_id}: {e}", exc_info=True)
            raise RegistrationFailedError() from e
        except BaseException:
            # Caller aborted before commit
            session.rollback()
            raise

        total = quantize_money(sum((r.total_value for r in priced), Decimal('0')))
        degraded = [pair for r in priced for pair in r.degraded_pairs]
        if degraded:
            logger.warning(f"[ORDERS] Order #{order.id} priced with fallback rate for {degraded}")
        logger.info(f"[ORDERS] Order #{order.id} registered: client={client.id} lines={position} total={total}")
        orders_registered_total.inc()
        return order.id


def get_order_history(session: Session, client_id: int) -> List[Dict[str, Any]]:
    """Orders of a client, newest first, each with its lines and total."""
    orders = session.query(Order).options(
        selectinload(Order.lines).selectinload(OrderLine.promoter),
        selectinload(Order.lines).selectinload(OrderLine.period)
    ).filter(
        Order.client_id == client_id
    ).order_by(Order.created_at.desc(), Order.id.desc()).all()

    return [_order_to_dict(order) for order in orders]


def get_order(session: Session, order_id: int, client_id: Optional[int] = None) -> Dict[str, Any]:
    """Single order projection; scoped to ``client_id`` when given."""
    query = session.query(Order).filter(Order.id == order_id)
    if client_id is not None:
        query = query.filter(Order.client_id == client_id)
    order = query.first()
    if not order:
        raise OrderNotFoundError(order_id)
    return _order_to_dict(order)


def transition_order_status(session: Session, order_id: int, new_status) -> Order:
    """
    Move an order along the status machine.

    pending -> confirmed -> in_progress -> completed, and any non-terminal
    status -> cancelled.
    """
    try:
        target = OrderStatus(new_status)
    except ValueError:
        raise InvalidStatusTransitionError(None, new_status)

    order = session.query(Order).filter(Order.id == order_id).with_for_update().first()
    if not order:
        raise OrderNotFoundError(order_id)

    current = order.status_enum
    if not current.can_transition_to(target):
        session.rollback()
        raise InvalidStatusTransitionError(current, target)

    order.status = target.value
    session.commit()
    logger.info(f"[ORDERS] Order #{order.id} status {current.value} -> {target.value}")
    return order


def _order_to_dict(order: Order) -> Dict[str, Any]:
    items = []
    total = Decimal('0')
    for line in order.lines:
        line_total = Decimal(str(line.line_total))
        total += line_total
        day = Weekday.parse(line.weekday)
        items.append({
            'promoter_id': line.promoter_id,
            'promoter_name': line.promoter.name if line.promoter else None,
            'day': day.value,
            'day_label': day.label,
            'period_id': line.period_id,
            'period_label': line.period.label if line.period else None,
            'hours': line.hours,
            'rate': f'{Decimal(str(line.hourly_rate)):.2f}',
            'line_total': f'{line_total:.2f}',
        })

    status = order.status_enum
    return {
        'order_id': order.id,
        'created_at': order.created_at.isoformat() if order.created_at else None,
        'created_at_display': datetime_br(order.created_at),
        'status': status.value,
        'status_label': status.label,
        'payment_method': order.payment_method,
        'total': f'{quantize_money(total):.2f}',
        'total_display': money_br(total),
        'items': items,
    }
