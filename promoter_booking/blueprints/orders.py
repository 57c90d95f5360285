"""Orders blueprint: checkout and order history for the logged-in client."""
from flask import Blueprint, current_app, g, jsonify, request

from promoter_booking.database import get_session, get_session_factory
from promoter_booking.exceptions import BusinessLogicError
from promoter_booking.middleware import require_client
from promoter_booking.models import OrderStatus
from promoter_booking.services.booking_service import build_booking_service
from promoter_booking.services.order_service import get_order, get_order_history, transition_order_status

orders_bp = Blueprint('orders', __name__, url_prefix='/api/orders')


@orders_bp.route('', methods=['POST'])
@require_client
def create_order():
    """
    Register the cart as a pending order.

    Body: ``{"payment_method": "PIX", "items": [{"promoter_id": 1, "selections": {...}}]}``
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise BusinessLogicError('Corpo da requisição deve ser um objeto JSON')

    items = data.get('items')
    if not isinstance(items, list):
        raise BusinessLogicError('items deve ser uma lista')

    db_session = get_session()
    service = build_booking_service(db_session, get_session_factory(), current_app.config)
    order_id = service.checkout(g.client_id, data.get('payment_method'), items)

    current_app.logger.info(f"[ORDERS] client={g.client_id} checked out order #{order_id}")
    return jsonify({
        'status': 'ok',
        'order': get_order(db_session, order_id, client_id=g.client_id)
    }), 201


@orders_bp.route('', methods=['GET'])
@require_client
def history():
    """Orders of the logged-in client, newest first."""
    orders = get_order_history(get_session(), g.client_id)
    return jsonify({'count': len(orders), 'orders': orders})


@orders_bp.route('/<int:order_id>', methods=['GET'])
@require_client
def detail(order_id):
    return jsonify(get_order(get_session(), order_id, client_id=g.client_id))


@orders_bp.route('/<int:order_id>/cancel', methods=['POST'])
@require_client
def cancel(order_id):
    """Client-side cancellation; allowed while the order is not terminal."""
    db_session = get_session()
    # Ownership check before touching the status
    get_order(db_session, order_id, client_id=g.client_id)
    transition_order_status(db_session, order_id, OrderStatus.CANCELLED)
    return jsonify({'status': 'ok', 'order': get_order(db_session, order_id, client_id=g.client_id)})
