"""Models package - exports all SQLAlchemy models."""
# Catalogue
from promoter_booking.models.brand import Brand
from promoter_booking.models.store import Store, promoter_store
from promoter_booking.models.promoter import Promoter
from promoter_booking.models.availability import Availability
from promoter_booking.models.period import Period
from promoter_booking.models.rate_entry import RateEntry

# Orders
from promoter_booking.models.client import Client
from promoter_booking.models.order import Order, OrderStatus, PaymentMethod, normalize_payment_method
from promoter_booking.models.order_line import OrderLine

__all__ = [
    # Catalogue
    'Brand', 'Store', 'promoter_store', 'Promoter', 'Availability', 'Period', 'RateEntry',
    # Orders
    'Client', 'Order', 'OrderStatus', 'PaymentMethod', 'normalize_payment_method', 'OrderLine',
]
