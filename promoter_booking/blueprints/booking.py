"""Booking blueprint: selection validation, pricing and catalogue lookups."""
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, request

from promoter_booking.database import get_session, get_session_factory
from promoter_booking.domain import DayClass, Weekday, WeekSelection
from promoter_booking.exceptions import BusinessLogicError
from promoter_booking.services.booking_service import (
    BookingService, build_booking_service, parse_booking_block
)
from promoter_booking.utils.formatters import money_br

booking_bp = Blueprint('booking', __name__, url_prefix='/api')


def _booking_service() -> BookingService:
    return build_booking_service(get_session(), get_session_factory(), current_app.config)


def _read_booking_payload() -> Tuple[int, WeekSelection]:
    """Parse ``{"promoter_id": ..., "selections": {...}}`` from the JSON body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BusinessLogicError('Corpo da requisição deve ser um objeto JSON')
    return parse_booking_block(data)


@booking_bp.route('/selections/validate', methods=['POST'])
def validate():
    """Validate a weekly selection without pricing it."""
    promoter_id, selections = _read_booking_payload()
    validated = _booking_service().validate_selections(promoter_id, selections)
    return jsonify({
        'status': 'ok',
        'promoter_id': promoter_id,
        'selections': [v.to_dict() for v in validated]
    })


@booking_bp.route('/pricing', methods=['POST'])
def pricing():
    """Validate and price a weekly selection with the rates in force now."""
    promoter_id, selections = _read_booking_payload()
    service = _booking_service()
    result = service.compute_pricing(promoter_id, selections)

    data: Dict[str, Any] = service.pricing_summary(result)
    data['status'] = 'ok'
    data['total_display'] = money_br(result.total_value)
    if result.degraded:
        current_app.logger.warning(
            f"[PRICING] promoter={promoter_id} priced with fallback rate for {result.degraded_pairs}"
        )
    return jsonify(data)


@booking_bp.route('/periods', methods=['GET'])
def periods():
    """Periods selectable on ``?day=<weekday>`` (or ``?day_class=``)."""
    day = request.args.get('day')
    day_class = request.args.get('day_class')
    try:
        if day:
            day_class = Weekday.parse(day).day_class
        elif day_class:
            day_class = DayClass(day_class)
        else:
            raise BusinessLogicError('Informe o parâmetro day')
    except ValueError as e:
        raise BusinessLogicError(str(e))

    catalogue = _booking_service().find_periods_by_day_class(day_class)
    return jsonify({
        'day_class': day_class.value,
        'periods': [{'id': p.id, 'label': p.label} for p in catalogue]
    })


@booking_bp.route('/promoters', methods=['GET'])
def promoters():
    """Active promoters of a region, optionally filtered by brand and store."""
    uf = (request.args.get('uf') or '').strip()
    city = (request.args.get('city') or '').strip()
    if not uf or not city:
        raise BusinessLogicError('Informe UF e cidade')

    found = _booking_service().find_promoters_by_region(
        uf, city,
        brand=request.args.get('brand') or None,
        store=request.args.get('store') or None
    )
    return jsonify({'count': len(found), 'promoters': found})
