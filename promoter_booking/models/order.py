"""Order model."""
from sqlalchemy import Column, BigInteger, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from promoter_booking.database import Base, IdType
import enum


class OrderStatus(str, enum.Enum):
    """Order status taxonomy; Registrar only ever creates PENDING."""
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    IN_PROGRESS = 'in_progress'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return not _STATUS_TRANSITIONS[self]

    def can_transition_to(self, target: 'OrderStatus') -> bool:
        return OrderStatus(target) in _STATUS_TRANSITIONS[self]


_STATUS_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.CONFIRMED, OrderStatus.CANCELLED},
    OrderStatus.CONFIRMED: {OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED},
    OrderStatus.IN_PROGRESS: {OrderStatus.COMPLETED, OrderStatus.CANCELLED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

_STATUS_LABELS = {
    OrderStatus.PENDING: 'Pendente',
    OrderStatus.CONFIRMED: 'Confirmado',
    OrderStatus.IN_PROGRESS: 'Em andamento',
    OrderStatus.COMPLETED: 'Concluído',
    OrderStatus.CANCELLED: 'Cancelado',
}


class PaymentMethod(str, enum.Enum):
    """Payment methods offered at checkout."""
    PIX = 'PIX'
    BOLETO = 'BOLETO'
    CARTAO_CREDITO = 'CARTAO_CREDITO'


_PAYMENT_ALIASES = {
    'PIX': PaymentMethod.PIX,
    'BOLETO': PaymentMethod.BOLETO,
    'CARTAO_CREDITO': PaymentMethod.CARTAO_CREDITO,
    'CARTÃO DE CRÉDITO': PaymentMethod.CARTAO_CREDITO,
    'CARTAO DE CREDITO': PaymentMethod.CARTAO_CREDITO,
    'CREDIT_CARD': PaymentMethod.CARTAO_CREDITO,
}


def normalize_payment_method(value) -> str:
    """
    Normalize payment method value to string for DB storage.

    Args:
        value: PaymentMethod enum or string ('PIX', 'Boleto', 'Cartão de Crédito', ...)

    Returns:
        str: 'PIX', 'BOLETO' or 'CARTAO_CREDITO'

    Raises:
        ValueError: If value is missing or unknown
    """
    if isinstance(value, PaymentMethod):
        return value.value

    if isinstance(value, str):
        normalized = ' '.join(value.upper().split())
        method = _PAYMENT_ALIASES.get(normalized) or _PAYMENT_ALIASES.get(normalized.replace(' ', '_'))
        if method:
            return method.value

    raise ValueError(f"Invalid payment method: {value}")


class Order(Base):
    """Order (pedido) header; line items are immutable once created."""

    __tablename__ = 'booking_order'
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'confirmed', 'in_progress', 'completed', 'cancelled')",
            name='ck_booking_order_status'
        ),
    )

    id = Column(IdType, primary_key=True, autoincrement=True)
    client_id = Column(BigInteger, ForeignKey('client.id'), nullable=False, index=True)
    payment_method = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value,
                    server_default=OrderStatus.PENDING.value)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    client = relationship('Client', back_populates='orders')
    lines = relationship('OrderLine', back_populates='order', cascade='all, delete-orphan',
                         order_by='OrderLine.position')

    @property
    def status_enum(self) -> OrderStatus:
        return OrderStatus(self.status)

    def __repr__(self):
        return f"<Order(id={self.id}, client_id={self.client_id}, status='{self.status}')>"
